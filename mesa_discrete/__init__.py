"""
mesa-discrete: occupancy index and random selection for discrete agent-based spaces.

mesa-discrete keeps track of which agents occupy which position of a discrete
space (grid cells, graph nodes) and answers the randomized queries that
agent-based models ask about it, with correct statistical properties whatever
the density of the space.

Key Features:
- O(1) occupancy queries, insertions and removals per position
- Uniformly random empty positions, switching between rejection sampling and a
  single-pass reservoir scan depending on the density of the space
- Uniformly random agents at a position, optionally filtered by a predicate,
  with a streaming or a materializing strategy chosen per call
- Placement operations (single-occupancy add and move, swap, fill) that keep
  the occupancy index consistent with the agents' positions
- Polars DataFrame views of the agents' positions and of the occupancy

Main Components:
- Agent: Base class for agents
- Model: Base model class, owning the random generator, the agents and the space
- GridSpace: Rectangular grid with tuple coordinates
- GraphSpace: Graph nodes with integer ids

Usage:
    from mesa_discrete import Agent, GridSpace, Model

    class MyModel(Model):
        def __init__(self, width, height, seed=None):
            super().__init__(seed)
            self.space = GridSpace(self, [width, height])
            self.space.fill_space(Agent)

Set MESA_DISCRETE_RUNTIME_TYPECHECKING=1 to check every call against its type
hints at runtime (requires beartype).

License: MIT
"""

from __future__ import annotations

import os

# Enable runtime type checking if requested via environment variable
if os.getenv("MESA_DISCRETE_RUNTIME_TYPECHECKING", "").lower() in ("1", "true", "yes"):
    try:
        from beartype.claw import beartype_this_package

        beartype_this_package()
    except ImportError:
        import warnings

        warnings.warn(
            "MESA_DISCRETE_RUNTIME_TYPECHECKING is enabled but beartype is not installed.",
            ImportWarning,
            stacklevel=2,
        )

from mesa_discrete.concrete.agent import Agent
from mesa_discrete.concrete.model import Model
from mesa_discrete.concrete.space import GraphSpace, GridSpace
from mesa_discrete.exceptions import InvalidPositionError, UnknownSortKeyError

__all__ = [
    "Agent",
    "GraphSpace",
    "GridSpace",
    "InvalidPositionError",
    "Model",
    "UnknownSortKeyError",
]

__version__ = "0.1.0.dev0"
