"""Abstract space interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from numpy.random import Generator

from mesa_discrete.abstract.agent import AbstractAgent
from mesa_discrete.types_ import ModelLike


class Space(ABC):
    """The Space class is an abstract class that defines the interface for all space classes in mesa_discrete."""

    _model: ModelLike

    def __init__(self, model: ModelLike) -> None:
        """Create a new Space.

        Parameters
        ----------
        model : mesa_discrete.concrete.model.Model
        """
        self._model = model

    @abstractmethod
    def add_agent_to_space(self, agent: AbstractAgent) -> None:
        """Record ``agent`` at its current ``pos`` in the space.

        Parameters
        ----------
        agent : AbstractAgent
            The agent to add. Its ``pos`` must already be set.
        """
        ...

    @abstractmethod
    def remove_agent_from_space(self, agent: AbstractAgent) -> None:
        """Forget ``agent`` at its current ``pos``. Does not remove it from the model.

        Parameters
        ----------
        agent : AbstractAgent
            The agent to remove.
        """
        ...

    @abstractmethod
    def remove_all_from_space(self) -> None:
        """Remove every agent from the space, without removing them from the model."""
        ...

    @abstractmethod
    def __repr__(self) -> str: ...

    @property
    def model(self) -> ModelLike:
        """The model to which the space belongs.

        Returns
        -------
        mesa_discrete.concrete.model.Model
        """
        return self._model

    @property
    def random(self) -> Generator:
        """The model's random number generator.

        Returns
        -------
        Generator
        """
        return self.model.random
