"""Abstract space interfaces."""

from .discrete import AbstractDiscreteSpace
from .space import Space

__all__ = [
    "AbstractDiscreteSpace",
    "Space",
]
