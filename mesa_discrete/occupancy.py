"""
Occupancy index for discrete spaces.

The occupancy index keeps, for every position of a discrete space, the
collection of ids of the agents resident there.

Classes:
    IdSet(MutableSet):
        An ordered set of agent ids with O(1) membership, insertion, removal
        and indexed access. Indexed access is what makes a uniform draw among
        the ids of a position O(1).

    OccupancyIndex(Mapping):
        A mapping from each position of a fixed universe to its IdSet. The
        universe is set at construction and never changes; clearing the index
        empties every IdSet but keeps the positions.

Ordering:
    Ids are kept in insertion order until a removal happens. Removing an id
    moves the last id into the vacated slot, so the order after removals is
    deterministic but not insertion order.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, MutableSet

from mesa_discrete.exceptions import InvalidPositionError
from mesa_discrete.types_ import AgentId, Position


class IdSet(MutableSet):
    """Ordered set of agent ids supporting O(1) indexed access."""

    __slots__ = ("_ids", "_slots")

    def __init__(self, ids: Iterable[AgentId] = ()) -> None:
        self._ids: list[AgentId] = []
        self._slots: dict[AgentId, int] = {}
        for unique_id in ids:
            self.add(unique_id)

    def __contains__(self, unique_id: object) -> bool:
        return unique_id in self._slots

    def __iter__(self) -> Iterator[AgentId]:
        return iter(self._ids)

    def __len__(self) -> int:
        return len(self._ids)

    def __getitem__(self, index: int) -> AgentId:
        return self._ids[index]

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._ids!r})"

    def add(self, unique_id: AgentId) -> None:
        """Add an id. Adding an id already present does nothing.

        Parameters
        ----------
        unique_id : AgentId
            The id to add.
        """
        if unique_id in self._slots:
            return
        self._slots[unique_id] = len(self._ids)
        self._ids.append(unique_id)

    def discard(self, unique_id: AgentId) -> None:
        """Remove an id if present.

        Parameters
        ----------
        unique_id : AgentId
            The id to remove.
        """
        slot = self._slots.pop(unique_id, None)
        if slot is None:
            return
        last = self._ids.pop()
        if slot < len(self._ids):
            self._ids[slot] = last
            self._slots[last] = slot

    def clear(self) -> None:
        self._ids.clear()
        self._slots.clear()


class OccupancyIndex(Mapping):
    """Mapping from every position of a discrete space to the ids resident there.

    Parameters
    ----------
    positions : Iterable[Position]
        The position universe. Duplicates are ignored.
    """

    __slots__ = ("_index",)

    def __init__(self, positions: Iterable[Position]) -> None:
        self._index: dict[Position, IdSet] = {pos: IdSet() for pos in positions}

    def __getitem__(self, pos: Position) -> IdSet:
        try:
            return self._index[pos]
        except (KeyError, TypeError):
            raise InvalidPositionError(pos) from None

    def __contains__(self, pos: object) -> bool:
        try:
            return pos in self._index
        except TypeError:
            return False

    def __iter__(self) -> Iterator[Position]:
        return iter(self._index)

    def __len__(self) -> int:
        return len(self._index)

    def add(self, unique_id: AgentId, pos: Position) -> None:
        """Record ``unique_id`` as resident at ``pos``.

        Raises
        ------
        InvalidPositionError
            If ``pos`` is not part of the universe.
        """
        self[pos].add(unique_id)

    def remove(self, unique_id: AgentId, pos: Position) -> None:
        """Forget ``unique_id`` at ``pos``. Removing an absent id does nothing.

        Raises
        ------
        InvalidPositionError
            If ``pos`` is not part of the universe.
        """
        self[pos].discard(unique_id)

    def clear(self) -> None:
        """Empty every position, keeping the universe intact."""
        for ids in self._index.values():
            ids.clear()

    def counts(self) -> list[int]:
        """Return the number of ids at each position, in universe order."""
        return [len(ids) for ids in self._index.values()]

    def total(self) -> int:
        """Return the number of ids across all positions."""
        return sum(len(ids) for ids in self._index.values())
