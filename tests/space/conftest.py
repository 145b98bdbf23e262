from __future__ import annotations

import pytest

from mesa_discrete import GraphSpace, GridSpace, Model
from tests.test_agent import ExampleAgent


@pytest.fixture
def model() -> Model:
    return Model(seed=42)


@pytest.fixture
def grid(model: Model) -> GridSpace:
    space = GridSpace(model, dimensions=[3, 3])
    model.space = space
    return space


@pytest.fixture
def graph(model: Model) -> GraphSpace:
    space = GraphSpace(model, n_nodes=5)
    model.space = space
    return space


@pytest.fixture
def populated_grid(grid: GridSpace) -> GridSpace:
    # 3 agents at (1, 1), 2 at (0, 2), 2 at (2, 2), 1 at (0, 0)
    model = grid.model
    for pos, kind in [
        ((1, 1), "a"),
        ((1, 1), "b"),
        ((1, 1), "a"),
        ((0, 2), "a"),
        ((0, 2), "b"),
        ((2, 2), "b"),
        ((2, 2), "b"),
        ((0, 0), "a"),
    ]:
        model.add_agent_at(pos, ExampleAgent, kind=kind)
    return grid


@pytest.fixture
def full_grid(grid: GridSpace) -> GridSpace:
    grid.fill_space(ExampleAgent)
    return grid
