"""
Abstract base class for agents living in a discrete space.

The discrete spaces treat an agent as an opaque record: they only read its
``unique_id`` and read or write its ``pos``. Everything else about the agent
(its properties, its behaviour) belongs to the user's subclass.

Classes:
    AbstractAgent(ABC):
        Defines the ``unique_id``, ``model`` and ``pos`` interface the spaces
        rely on.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from mesa_discrete.types_ import AgentId, ModelLike, Position


class AbstractAgent(ABC):
    """The AbstractAgent class defines the interface between agents and discrete spaces.

    Attributes
    ----------
    pos : Position | None
        The position of the agent, or None if the agent is not placed in the space.
    """

    pos: Position | None

    @abstractmethod
    def __init__(self, model: ModelLike) -> None: ...

    @property
    @abstractmethod
    def unique_id(self) -> AgentId:
        """The id of the agent, unique within its model.

        Returns
        -------
        AgentId
        """
        ...

    @property
    @abstractmethod
    def model(self) -> ModelLike:
        """The model the agent belongs to.

        Returns
        -------
        mesa_discrete.concrete.model.Model
        """
        ...

    def step(self) -> None:
        """Run a single step of the agent. Overload as needed."""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(unique_id={self.unique_id}, pos={self.pos!r})"
