"""Type aliases for the mesa_discrete package."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from typing_extensions import TypeAliasType

###----- Space -----###
GridCoordinate = tuple[int, ...]
GraphNode = int

# A position is any member of a discrete space's position universe
Position = GraphNode | GridCoordinate

###----- Agents -----###
AgentId = int

# Predicates receive either an id or whatever the transform returns for it
AgentFilter = Callable[[Any], bool]
IdTransform = Callable[[AgentId], Any]
PositionFilter = Callable[[Position], bool]

# Lazy alias through typing_extensions.TypeAliasType so that runtime
# validators (beartype) resolve the target on first use instead of importing
# the model module eagerly, which would create an import cycle between the
# model, its agents and its space.
ModelLike = TypeAliasType(
    "ModelLike",
    "mesa_discrete.concrete.model.Model",
)

# Agent classes or any callable building an agent from (model, *args, **kwargs)
AgentFactory = Callable[..., Any]

__all__ = [
    "AgentFactory",
    "AgentFilter",
    "AgentId",
    "GraphNode",
    "GridCoordinate",
    "IdTransform",
    "ModelLike",
    "Position",
    "PositionFilter",
]
