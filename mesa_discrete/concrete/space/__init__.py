"""Concrete space implementations."""

from .discrete import DiscreteSpace
from .graph import GraphSpace
from .grid import GridSpace

__all__ = ["DiscreteSpace", "GraphSpace", "GridSpace"]
