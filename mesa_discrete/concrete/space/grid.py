"""
Grid space implementation for mesa-discrete.

This module provides GridSpace, an n-dimensional rectangular grid whose
positions are tuples of integer coordinates. Positions are enumerated in
row-major order: ``(0, 0), (0, 1), ..., (0, h - 1), (1, 0), ...``.

Neighborhoods (Moore, von Neumann, periodic boundaries) are not computed by
the grid. Callers build the neighbor positions themselves and pass them to the
``empty_nearby_positions`` and ``random_nearby_empty`` methods.

Usage:
    from mesa_discrete import Agent, GridSpace, Model

    class MyModel(Model):
        def __init__(self, width, height):
            super().__init__()
            self.space = GridSpace(self, [width, height])
            for _ in range(width * height // 2):
                self.space.add_agent_single(Agent)

        def step(self):
            for agent in self.agents:
                self.space.move_agent_single(agent)
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from itertools import product

from mesa_discrete.abstract.space.discrete import DEFAULT_EMPTY_CUTOFF
from mesa_discrete.concrete.space.discrete import DiscreteSpace
from mesa_discrete.types_ import GridCoordinate, ModelLike


class GridSpace(DiscreteSpace):
    """Discrete space over the cells of a rectangular grid.

    Parameters
    ----------
    model : mesa_discrete.concrete.model.Model
        The model to which the space belongs
    dimensions : Sequence[int]
        The size of the grid along each dimension (eg. [width, height])
    empty_cutoff : float, optional
        See AbstractDiscreteSpace, by default 0.998

    Raises
    ------
    ValueError
        If ``dimensions`` is empty or has a non-positive size.
    """

    _dimensions: list[int]

    def __init__(
        self,
        model: ModelLike,
        dimensions: Sequence[int],
        empty_cutoff: float = DEFAULT_EMPTY_CUTOFF,
    ) -> None:
        if not dimensions or any(size <= 0 for size in dimensions):
            raise ValueError(f"Invalid grid dimensions: {list(dimensions)}")
        self._dimensions = [int(size) for size in dimensions]
        self._pos_col_names = [f"dim_{k}" for k in range(len(self._dimensions))]
        super().__init__(
            model,
            positions=product(*(range(size) for size in self._dimensions)),
            empty_cutoff=empty_cutoff,
        )

    def random_position(self) -> GridCoordinate:
        return tuple(int(coord) for coord in self.random.integers(self._dimensions))

    @property
    def npositions(self) -> int:
        return math.prod(self._dimensions)

    @property
    def dimensions(self) -> list[int]:
        """The size of the grid along each dimension.

        Returns
        -------
        list[int]
        """
        return list(self._dimensions)
