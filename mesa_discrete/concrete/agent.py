"""
Concrete agent class for mesa-discrete.

Usage:
    Subclass Agent and add the properties your model needs:

    from mesa_discrete import Agent

    class Sheep(Agent):
        def __init__(self, model, energy):
            super().__init__(model)
            self.energy = energy

    Agents are registered with the model (and placed in its space, if their
    ``pos`` is set) through ``model.add_agent`` or one of the space placement
    operations.
"""

from __future__ import annotations

from mesa_discrete.abstract.agent import AbstractAgent
from mesa_discrete.types_ import AgentId, ModelLike, Position


class Agent(AbstractAgent):
    """Base class for agents in the mesa-discrete library.

    Parameters
    ----------
    model : mesa_discrete.concrete.model.Model
        The model the agent belongs to. A fresh unique id is drawn from it.
    pos : Position | None, optional
        The starting position of the agent, by default None (unplaced)
    """

    _model: ModelLike
    _unique_id: AgentId

    def __init__(self, model: ModelLike, pos: Position | None = None) -> None:
        self._model = model
        self._unique_id = model.next_id()
        self.pos = pos

    @property
    def unique_id(self) -> AgentId:
        return self._unique_id

    @property
    def model(self) -> ModelLike:
        return self._model
