import polars as pl
import pytest
from polars.testing import assert_frame_equal

from mesa_discrete import GraphSpace, Model
from tests.space.utils import assert_index_consistent, assert_uniform
from tests.test_agent import ExampleAgent


class Test_GraphSpace:
    def test___init__(self, graph: GraphSpace):
        assert graph.npositions == 5
        assert list(graph.positions()) == [0, 1, 2, 3, 4]
        assert graph._pos_col_names == ["node_id"]

    def test___init___invalid(self, model: Model):
        with pytest.raises(ValueError):
            GraphSpace(model, n_nodes=0)

    def test_random_position(self, graph: GraphSpace):
        draws = [graph.random_position() for _ in range(2500)]
        assert all(type(node) is int for node in draws)
        assert_uniform(draws, [0, 1, 2, 3, 4])

    def test_positions_population(self, graph: GraphSpace):
        model = graph.model
        model.add_agent_at(3, ExampleAgent)
        model.add_agent_at(3, ExampleAgent)
        model.add_agent_at(1, ExampleAgent)
        model.add_agent_at(4, ExampleAgent)
        assert graph.positions(by="population") == [3, 1, 4, 0, 2]

    def test_random_nearby_empty(self, graph: GraphSpace):
        model = graph.model
        model.add_agent_at(1, ExampleAgent)
        # Neighbors of node 2 on a ring 0-1-2-3-4-0
        neighbors = [1, 3]
        for _ in range(10):
            assert graph.random_nearby_empty(neighbors) == 3
        model.add_agent_at(3, ExampleAgent)
        assert graph.random_nearby_empty(neighbors) is None

    def test_agents(self, graph: GraphSpace):
        model = graph.model
        model.add_agent_at(2, ExampleAgent)
        model.add_agent_at(0, ExampleAgent)
        assert_frame_equal(
            graph.agents,
            pl.DataFrame(
                {"agent_id": [2, 1], "node_id": [0, 2]},
                schema={"agent_id": pl.UInt64, "node_id": pl.Int64},
            ),
        )
        model.remove_all_agents()
        assert graph.agents.is_empty()
        assert graph.agents.columns == ["agent_id", "node_id"]
        assert graph.occupancy["n_agents"].to_list() == [0, 0, 0, 0, 0]

    def test_fill_and_move(self, graph: GraphSpace):
        graph.fill_space(ExampleAgent)
        model = graph.model
        model.remove_agent(model[3])
        assert list(graph.empty_positions()) == [2]
        draws = [graph.random_empty() for _ in range(20)]
        assert set(draws) == {2}
        agent = graph.move_agent_single(model[1])
        assert agent.pos == 2
        assert list(graph.empty_positions()) == [0]
        assert_index_consistent(graph)
