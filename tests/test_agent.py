import pytest

from mesa_discrete import Agent, GridSpace, Model


class ExampleAgent(Agent):
    def __init__(self, model: Model, wealth: int = 1, kind: str = "a"):
        super().__init__(model)
        self.wealth = wealth
        self.kind = kind

    def step(self) -> None:
        self.wealth += 1


@pytest.fixture
def fix_model() -> Model:
    model = Model(seed=0)
    model.space = GridSpace(model, dimensions=[3, 3])
    return model


class Test_Agent:
    def test__init__(self, fix_model: Model):
        agent0 = ExampleAgent(fix_model)
        agent1 = ExampleAgent(fix_model, wealth=5, kind="b")
        assert agent0.model is fix_model
        assert agent0.pos is None
        assert agent0.unique_id != agent1.unique_id
        assert agent1.wealth == 5
        assert agent1.kind == "b"
        # Creating an agent does not register it
        assert fix_model.nagents == 0

    def test__init__with_pos(self, fix_model: Model):
        agent = Agent(fix_model, pos=(1, 2))
        assert agent.pos == (1, 2)
        fix_model.add_agent(agent)
        assert agent.unique_id in fix_model.space.ids_in_position((1, 2))

    def test_unique_ids_are_increasing(self, fix_model: Model):
        ids = [Agent(fix_model).unique_id for _ in range(5)]
        assert ids == sorted(ids)
        assert len(set(ids)) == 5

    def test_step(self, fix_model: Model):
        agent = fix_model.add_agent(ExampleAgent(fix_model, wealth=3))
        fix_model.step()
        assert agent.wealth == 4

    def test___repr__(self, fix_model: Model):
        agent = fix_model.add_agent_at((0, 1), Agent)
        assert repr(agent) == f"Agent(unique_id={agent.unique_id}, pos=(0, 1))"
