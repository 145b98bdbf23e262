from collections import Counter
from collections.abc import Iterable

import numpy as np

from mesa_discrete.abstract.space import AbstractDiscreteSpace

# Chi-square critical values at p = 0.001, by degrees of freedom
CHI2_CRITICAL = {1: 10.83, 2: 13.82, 3: 16.27, 4: 18.47, 5: 20.52, 8: 26.12, 9: 27.88}


def chi_square_statistic(draws: Iterable, support: list) -> float:
    """Chi-square goodness-of-fit statistic of ``draws`` against a uniform law on ``support``."""
    counts = Counter(draws)
    assert set(counts) <= set(support)
    observed = np.array([counts[item] for item in support], dtype=float)
    expected = observed.sum() / len(support)
    return float(((observed - expected) ** 2 / expected).sum())


def assert_uniform(draws: list, support: list) -> None:
    statistic = chi_square_statistic(draws, support)
    assert statistic < CHI2_CRITICAL[len(support) - 1], statistic


def assert_index_consistent(space: AbstractDiscreteSpace) -> None:
    """Check that every model agent with a position is indexed there, and only there."""
    expected: dict = {pos: set() for pos in space.positions()}
    for agent in space.model.agents:
        if agent.pos is not None:
            expected[agent.pos].add(agent.unique_id)
    for pos, ids in expected.items():
        assert set(space.ids_in_position(pos)) == ids, pos
        assert len(space.ids_in_position(pos)) == len(ids), pos
