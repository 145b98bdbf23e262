"""
Concrete implementation of the model class for mesa-discrete.

This module provides the Model class, which owns the three pieces of
simulation-wide state the discrete spaces consume:

- the random number generator (``model.random``), seeded and shared by every
  sampling operation of the model;
- the agent registry, mapping each unique id to its agent (``model[id]``);
- the space (``model.space``), holding the occupancy index.

Classes:
    Model:
        The base class for models in the mesa-discrete library. Subclass it
        to build a specific model.

Usage:
    from mesa_discrete import Agent, GridSpace, Model

    class MyModel(Model):
        def __init__(self, width, height, seed=None):
            super().__init__(seed)
            self.space = GridSpace(self, [width, height])
            self.space.fill_space(Agent)

        def step(self):
            for agent in self.agents:
                self.space.move_agent_single(agent)
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import numpy as np

from mesa_discrete.abstract.agent import AbstractAgent
from mesa_discrete.abstract.space import AbstractDiscreteSpace
from mesa_discrete.types_ import AgentFactory, AgentId, Position


class Model:
    """Base class for models in the mesa-discrete library.

    This class serves as a foundational structure for creating agent-based models.
    It includes the basic attributes and methods necessary for initializing and
    running a simulation model.

    Parameters
    ----------
    seed : int | Sequence[int] | None, optional
        The seed for the model's generator, by default None (fresh entropy)
    """

    random: np.random.Generator
    running: bool
    _seed: int | Sequence[int]
    _agents: dict[AgentId, AbstractAgent]  # Where the agents are stored, by id
    _space: AbstractDiscreteSpace | None

    def __init__(self, seed: int | Sequence[int] | None = None) -> None:
        self.random = None
        self.reset_randomizer(seed)
        self.running = True
        self.current_id = 0
        self._agents = {}
        self._space = None
        self._steps = 0

        self._user_step = self.step
        self.step = self._wrapped_step

    def _wrapped_step(self) -> None:
        """Automatically increments step counter and calls user-defined step()."""
        self._steps += 1
        self._user_step()

    def reset_randomizer(self, seed: int | Sequence[int] | None) -> None:
        """Reset the model random number generator.

        Parameters
        ----------
        seed : int | Sequence[int] | None
            A new seed for the RNG; if None, reset using fresh entropy
        """
        if seed is None:
            seed = np.random.SeedSequence().entropy
        assert seed is not None
        self._seed = seed
        self.random = np.random.default_rng(seed=self._seed)

    def next_id(self) -> AgentId:
        """Return the next unused agent id.

        Returns
        -------
        AgentId
        """
        self.current_id += 1
        return self.current_id

    def add_agent(self, agent: AbstractAgent) -> AbstractAgent:
        """Register an agent with the model.

        If the agent has a position, it is also added to the space.

        Parameters
        ----------
        agent : AbstractAgent
            The agent to register.

        Returns
        -------
        AbstractAgent
            The registered agent.

        Raises
        ------
        ValueError
            If an agent with the same id is already registered, or if the agent
            belongs to another model.
        """
        if agent.unique_id in self._agents:
            raise ValueError(f"Agent {agent.unique_id} is already in the model")
        if agent.model is not self:
            raise ValueError(f"Agent {agent.unique_id} belongs to another model")
        if agent.pos is not None:
            # The space validates the position before the agent becomes visible
            self.space.add_agent_to_space(agent)
        self._agents[agent.unique_id] = agent
        return agent

    def add_agent_at(
        self,
        pos: Position,
        agent_type: AgentFactory,
        *args: Any,
        **kwargs: Any,
    ) -> AbstractAgent:
        """Create an agent at ``pos`` and register it.

        Parameters
        ----------
        pos : Position
            The position of the new agent.
        agent_type : AgentFactory
            The agent class (or factory). It is called as
            ``agent_type(model, *args, **kwargs)``.
        *args : Any
            Positional properties of the agent.
        **kwargs : Any
            Keyword properties of the agent.

        Returns
        -------
        AbstractAgent
            The new agent.
        """
        agent = agent_type(self, *args, **kwargs)
        agent.pos = pos
        return self.add_agent(agent)

    def remove_agent(self, agent: AbstractAgent) -> None:
        """Remove an agent from the model and, if placed, from the space.

        Parameters
        ----------
        agent : AbstractAgent
            The agent to remove.

        Raises
        ------
        ValueError
            If the agent is not part of the model.
        """
        if agent.unique_id not in self._agents:
            raise ValueError(f"Agent {agent.unique_id} is not in the model")
        if agent.pos is not None and self._space is not None:
            self._space.remove_agent_from_space(agent)
        del self._agents[agent.unique_id]

    def remove_all_agents(self) -> None:
        """Remove every agent from the model and empty the space."""
        if self._space is not None:
            self._space.remove_all_from_space()
        self._agents.clear()

    def run_model(self) -> None:
        """Run the model until the end condition is reached.

        Overload as needed.
        """
        while self.running:
            self.step()

    def step(self) -> None:
        """Run a single step.

        The default method calls the step() method of all agents. Overload as needed.
        """
        for agent in list(self._agents.values()):
            agent.step()

    def __getitem__(self, unique_id: AgentId) -> AbstractAgent:
        return self._agents[unique_id]

    def __contains__(self, unique_id: object) -> bool:
        return unique_id in self._agents

    @property
    def agents(self) -> list[AbstractAgent]:
        """The agents of the model, in insertion order.

        The list is a snapshot: adding or removing agents while iterating over it is safe.

        Returns
        -------
        list[AbstractAgent]
        """
        return list(self._agents.values())

    @property
    def nagents(self) -> int:
        """The number of agents in the model.

        Returns
        -------
        int
        """
        return len(self._agents)

    @property
    def steps(self) -> int:
        """Get the current step count.

        Returns
        -------
        int
            The current step count of the model.
        """
        return self._steps

    @property
    def space(self) -> AbstractDiscreteSpace:
        """Get the space object associated with the model.

        Returns
        -------
        AbstractDiscreteSpace
            The space object associated with the model.

        Raises
        ------
        ValueError
            If the space has not been set for the model.
        """
        if self._space is None:
            raise ValueError(
                "You haven't set the space for the model. Use model.space = your_space"
            )
        return self._space

    @space.setter
    def space(self, space: AbstractDiscreteSpace) -> None:
        if __debug__:  # Only execute in non-optimized mode
            if space.model is not self:
                raise ValueError("The space must be created for this model")
        self._space = space
