"""
Discrete space backed by an OccupancyIndex.

This module provides DiscreteSpace, the concrete base of GridSpace and
GraphSpace. It stores the occupancy of every position in an OccupancyIndex
built once from the position universe handed over by the subclass, and
implements the storage side of AbstractDiscreteSpace on top of it. The
sampling and placement algorithms are inherited unchanged.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from mesa_discrete.abstract.agent import AbstractAgent
from mesa_discrete.abstract.space import AbstractDiscreteSpace
from mesa_discrete.abstract.space.discrete import DEFAULT_EMPTY_CUTOFF
from mesa_discrete.occupancy import IdSet, OccupancyIndex
from mesa_discrete.types_ import ModelLike, Position


class DiscreteSpace(AbstractDiscreteSpace):
    """AbstractDiscreteSpace storing its occupancy in an OccupancyIndex.

    Parameters
    ----------
    model : mesa_discrete.concrete.model.Model
        The model to which the space belongs
    positions : Iterable[Position]
        The position universe, in the order the space enumerates it
    empty_cutoff : float, optional
        See AbstractDiscreteSpace, by default 0.998
    """

    _occupancy: OccupancyIndex

    def __init__(
        self,
        model: ModelLike,
        positions: Iterable[Position],
        empty_cutoff: float = DEFAULT_EMPTY_CUTOFF,
    ) -> None:
        super().__init__(model, empty_cutoff=empty_cutoff)
        self._occupancy = OccupancyIndex(positions)
        if len(self._occupancy) == 0:
            raise ValueError("A discrete space needs at least one position")

    def _iter_positions(self) -> Iterator[Position]:
        return iter(self._occupancy)

    def ids_in_position(self, pos: Position) -> IdSet:
        return self._occupancy[pos]

    def add_agent_to_space(self, agent: AbstractAgent) -> None:
        self._occupancy.add(agent.unique_id, agent.pos)

    def remove_agent_from_space(self, agent: AbstractAgent) -> None:
        self._occupancy.remove(agent.unique_id, agent.pos)

    def remove_all_from_space(self) -> None:
        self._occupancy.clear()

    def _counts(self) -> list[int]:
        return self._occupancy.counts()

    def _nplaced(self) -> int:
        return self._occupancy.total()

    @property
    def npositions(self) -> int:
        return len(self._occupancy)

    def __contains__(self, pos: object) -> bool:
        return pos in self._occupancy
