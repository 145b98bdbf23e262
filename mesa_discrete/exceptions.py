"""Exceptions raised by mesa_discrete for caller misuse.

Exhaustion conditions (no empty position, no match for a filter) are never
reported through exceptions; the sampling operations return ``None`` instead.
"""

from __future__ import annotations


class UnknownSortKeyError(ValueError):
    """Raised when positions are requested with an unsupported ``by`` argument."""

    def __init__(self, by: object) -> None:
        super().__init__(
            f"Unknown sort key {by!r} for positions. Use 'random' or 'population'."
        )
        self.by = by


class InvalidPositionError(ValueError):
    """Raised when a position does not belong to the space's position universe."""

    def __init__(self, pos: object) -> None:
        super().__init__(f"Position {pos!r} is not part of the space.")
        self.pos = pos
