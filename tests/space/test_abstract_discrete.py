from collections.abc import Iterator

import pytest

from mesa_discrete import InvalidPositionError, Model
from mesa_discrete.abstract.space import AbstractDiscreteSpace
from mesa_discrete.occupancy import IdSet
from tests.space.utils import assert_index_consistent, assert_uniform
from tests.test_agent import ExampleAgent


class RingSpace(AbstractDiscreteSpace):
    """A space relying only on the two required operations."""

    _pos_col_names = ["node_id"]

    def __init__(self, model: Model, n_nodes: int, empty_cutoff: float = 0.998) -> None:
        super().__init__(model, empty_cutoff=empty_cutoff)
        self._ids = [IdSet() for _ in range(n_nodes)]

    def _iter_positions(self) -> Iterator[int]:
        return iter(range(len(self._ids)))

    def ids_in_position(self, pos: int) -> IdSet:
        if not 0 <= pos < len(self._ids):
            raise InvalidPositionError(pos)
        return self._ids[pos]


def _fail(*args, **kwargs):
    raise AssertionError("this sampling path should not be used")


@pytest.fixture
def ring() -> RingSpace:
    model = Model(seed=8)
    space = RingSpace(model, n_nodes=6)
    model.space = space
    return space


class Test_AbstractDiscreteSpace:
    def test_npositions(self, ring: RingSpace):
        assert ring.npositions == 6
        # Materialized once
        assert ring._universe() is ring._universe()

    def test_positions(self, ring: RingSpace):
        assert list(ring.positions()) == [0, 1, 2, 3, 4, 5]
        shuffled = ring.positions(by="random")
        assert sorted(shuffled) == [0, 1, 2, 3, 4, 5]

        model = ring.model
        model.add_agent_at(4, ExampleAgent)
        model.add_agent_at(4, ExampleAgent)
        model.add_agent_at(1, ExampleAgent)
        assert ring.positions(by="population") == [4, 1, 0, 2, 3, 5]

    def test_random_position(self, ring: RingSpace):
        draws = [ring.random_position() for _ in range(3000)]
        assert_uniform(draws, [0, 1, 2, 3, 4, 5])

    def test_invalid_position(self, ring: RingSpace):
        with pytest.raises(InvalidPositionError):
            ring.ids_in_position(6)

    def test_random_empty_rejection(self, ring: RingSpace, monkeypatch: pytest.MonkeyPatch):
        model = ring.model
        model.add_agent_at(0, ExampleAgent)
        model.add_agent_at(3, ExampleAgent)
        monkeypatch.setattr(ring, "empty_positions", _fail)
        draws = [ring.random_empty() for _ in range(2000)]
        assert_uniform(draws, [1, 2, 4, 5])

    def test_random_empty_scan(self, ring: RingSpace, monkeypatch: pytest.MonkeyPatch):
        model = ring.model
        model.add_agent_at(0, ExampleAgent)
        model.add_agent_at(3, ExampleAgent)
        monkeypatch.setattr(ring, "random_position", _fail)
        draws = [ring.random_empty(cutoff=0.0) for _ in range(2000)]
        assert_uniform(draws, [1, 2, 4, 5])

    def test_random_empty_full(self, ring: RingSpace):
        ring.fill_space(ExampleAgent)
        assert ring.random_empty() is None
        assert ring.random_empty(cutoff=2.0) is None

    def test_move_agent_single(self, ring: RingSpace):
        model = ring.model
        for node in range(5):
            model.add_agent_at(node, ExampleAgent)
        agent = model[1]
        assert ring.move_agent_single(agent) is agent
        assert agent.pos == 5
        assert ring.is_empty(0)
        assert_index_consistent(ring)

    def test_remove_all_from_space(self, ring: RingSpace):
        ring.fill_space(ExampleAgent)
        ring.remove_all_from_space()
        assert list(ring.positions()) == [0, 1, 2, 3, 4, 5]
        assert list(ring.empty_positions()) == [0, 1, 2, 3, 4, 5]
        assert repr(ring) == "RingSpace(npositions=6, nagents=0)"

    def test_frames(self, ring: RingSpace):
        ring.model.add_agent_at(2, ExampleAgent)
        assert ring.agents.rows() == [(1, 2)]
        assert ring.occupancy["n_agents"].to_list() == [0, 0, 1, 0, 0, 0]
        assert repr(ring) == "RingSpace(npositions=6, nagents=1)"
