"""
Abstract discrete space interface.

Discrete spaces are spaces with a finite, enumerable set of positions (grid
cells, graph nodes), each holding zero or more agents. This module implements,
once and for all discrete spaces, the position enumeration, the randomized
selection of empty positions and resident agents, and the placement operations.

A concrete discrete space only has to provide:

- ``_iter_positions()``: an iterator over the whole position universe, in a
  stable order;
- ``ids_in_position(pos)``: the live IdSet of the agent ids at ``pos``.

``npositions`` and ``random_position`` have generic implementations based on a
cached copy of the universe; concrete spaces override them with O(1) versions.

Classes:
    AbstractDiscreteSpace(Space):
        The base class of GridSpace and GraphSpace.
"""

from __future__ import annotations

import warnings
from abc import abstractmethod
from collections.abc import Callable, Iterable, Iterator, Sequence
from typing import Any

import polars as pl

from mesa_discrete.abstract.agent import AbstractAgent
from mesa_discrete.abstract.space.space import Space
from mesa_discrete.exceptions import InvalidPositionError, UnknownSortKeyError
from mesa_discrete.occupancy import IdSet
from mesa_discrete.sampling import reservoir_sample, select_sampler
from mesa_discrete.types_ import (
    AgentFactory,
    AgentFilter,
    AgentId,
    IdTransform,
    ModelLike,
    Position,
    PositionFilter,
)

DEFAULT_EMPTY_CUTOFF = 0.998


class AbstractDiscreteSpace(Space):
    """The AbstractDiscreteSpace class is an abstract class that defines the interface for all discrete space classes (Grids and Graphs) in mesa_discrete.

    Parameters
    ----------
    model : mesa_discrete.concrete.model.Model
        The model to which the space belongs
    empty_cutoff : float, optional
        The density (agents per position) at which ``random_empty`` switches
        from rejection sampling to a linear scan, by default 0.998
    """

    empty_cutoff: float
    _pos_col_names: list[str]  # The columns of a position in the DataFrame views (eg. ['dim_0', 'dim_1'] in grids)

    def __init__(
        self,
        model: ModelLike,
        empty_cutoff: float = DEFAULT_EMPTY_CUTOFF,
    ) -> None:
        super().__init__(model)
        self.empty_cutoff = empty_cutoff

    @abstractmethod
    def _iter_positions(self) -> Iterator[Position]:
        """Iterate over every position of the space, always in the same order.

        Returns
        -------
        Iterator[Position]
        """
        ...

    @abstractmethod
    def ids_in_position(self, pos: Position) -> IdSet:
        """Return the ids of the agents at ``pos``.

        The returned collection is the live occupancy of the position, not a copy.

        Parameters
        ----------
        pos : Position
            The position to query.

        Returns
        -------
        IdSet

        Raises
        ------
        InvalidPositionError
            If ``pos`` is not part of the space.
        """
        ...

    def _position_row(self, pos: Position) -> tuple[int, ...]:
        """Return the values of ``pos`` for the ``_pos_col_names`` columns."""
        return pos if isinstance(pos, tuple) else (pos,)

    def _counts(self) -> list[int]:
        """Return the number of agents at each position, in enumeration order."""
        return [len(self.ids_in_position(pos)) for pos in self._iter_positions()]

    def _nplaced(self) -> int:
        """Return the number of agents placed in the space."""
        return sum(self._counts())

    def _universe(self) -> tuple[Position, ...]:
        """Return the position universe, materialized on first use."""
        try:
            return self._position_universe
        except AttributeError:
            self._position_universe = tuple(self._iter_positions())
            return self._position_universe

    # ----- Position enumeration -----

    def positions(self, by: str | None = None) -> Iterator[Position] | list[Position]:
        """Return the positions of the space.

        Parameters
        ----------
        by : str | None, optional
            How to order the positions, by default None. It can be:

            - None: a lazy iterator over all positions in the space's stable order;
            - "random": a list of all positions shuffled with the model's generator;
            - "population": a list of all positions sorted by the number of agents
              they hold, most populated first. Ties keep the stable order.

        Returns
        -------
        Iterator[Position] | list[Position]

        Raises
        ------
        UnknownSortKeyError
            If ``by`` is not one of the values above.
        """
        if by is None:
            return self._iter_positions()
        if by not in ("random", "population"):
            raise UnknownSortKeyError(by)
        universe = list(self._iter_positions())
        if by == "random":
            return [universe[i] for i in self.random.permutation(len(universe))]
        populations = pl.DataFrame(
            {"order": list(range(len(universe))), "n_agents": self._counts()}
        )
        order = populations.sort("n_agents", descending=True, maintain_order=True)
        return [universe[i] for i in order["order"].to_list()]

    @property
    def npositions(self) -> int:
        """The number of positions of the space.

        Returns
        -------
        int
        """
        return len(self._universe())

    def random_position(self) -> Position:
        """Return a position drawn uniformly at random from the whole space.

        Returns
        -------
        Position
        """
        universe = self._universe()
        return universe[int(self.random.integers(len(universe)))]

    # ----- Occupancy queries -----

    def is_empty(self, pos: Position) -> bool:
        """Return True if there are no agents at ``pos``.

        Parameters
        ----------
        pos : Position

        Returns
        -------
        bool
        """
        return len(self.ids_in_position(pos)) == 0

    def empty_positions(self) -> Iterator[Position]:
        """Lazily iterate over the positions without agents.

        Returns
        -------
        Iterator[Position]
        """
        return (pos for pos in self._iter_positions() if self.is_empty(pos))

    def has_empty_positions(self) -> bool:
        """Return True if any position of the space has no agents.

        Returns
        -------
        bool
        """
        return any(True for _ in self.empty_positions())

    def agents_in_position(self, target: Position | AbstractAgent) -> Iterator[AbstractAgent]:
        """Lazily iterate over the agents at a position.

        Parameters
        ----------
        target : Position | AbstractAgent
            The position, or an agent whose position is used.

        Returns
        -------
        Iterator[AbstractAgent]
        """
        pos = target.pos if isinstance(target, AbstractAgent) else target
        model = self.model
        return (model[unique_id] for unique_id in self.ids_in_position(pos))

    def empty_nearby_positions(self, neighbors: Iterable[Position]) -> Iterator[Position]:
        """Lazily filter a neighborhood down to its empty positions.

        The neighborhood itself (radius, metric, boundaries) is computed by the caller.

        Parameters
        ----------
        neighbors : Iterable[Position]
            The positions around the position of interest.

        Returns
        -------
        Iterator[Position]
        """
        return (pos for pos in neighbors if self.is_empty(pos))

    # ----- Random selection -----

    def random_empty(self, cutoff: float | None = None) -> Position | None:
        """Return a random position without agents.

        Below the density ``cutoff`` positions are drawn from the whole space
        until an empty one comes up; the expected number of draws is
        ``1 / (1 - density)``. At or above it, a single pass over the empty
        positions with reservoir sampling is used instead, so the cost stays
        bounded however full the space is. Both paths draw uniformly among the
        empty positions.

        Parameters
        ----------
        cutoff : float | None, optional
            The density at which to switch algorithms, by default None (the
            space's ``empty_cutoff``).

        Returns
        -------
        Position | None
            A random empty position, or None if every position is occupied.
        """
        if cutoff is None:
            cutoff = self.empty_cutoff
        npositions = self.npositions
        # Assumes the worst case of one agent per position
        density = min(max(self.model.nagents / npositions, 0.0), 1.0)
        # A full space always takes the scan, whatever the cutoff
        if density < min(cutoff, 1.0):
            while True:
                pos = self.random_position()
                if self.is_empty(pos):
                    return pos
        return reservoir_sample(self.random, self.empty_positions())

    def random_nearby_empty(
        self,
        neighbors: Iterable[Position],
        f: PositionFilter | None = None,
        alloc: bool = False,
    ) -> Position | None:
        """Return a random empty position among ``neighbors``.

        Parameters
        ----------
        neighbors : Iterable[Position]
            The positions to choose from, computed by the caller.
        f : PositionFilter | None, optional
            Restrict the choice to empty positions for which ``f(pos)`` is True,
            by default None
        alloc : bool, optional
            Whether to copy the neighbors before sampling, by default False.
            See ``random_id_in_position``.

        Returns
        -------
        Position | None
            The position, or None if no neighbor qualifies.
        """
        if f is None:
            return reservoir_sample(self.random, self.empty_nearby_positions(neighbors))
        return select_sampler(alloc).sample(
            self.random, neighbors, lambda pos: self.is_empty(pos) and f(pos)
        )

    def random_id_in_position(
        self,
        pos: Position,
        f: AgentFilter | None = None,
        alloc: bool = False,
        transform: IdTransform | None = None,
    ) -> AgentId | None:
        """Return the id of a random agent at ``pos``.

        Parameters
        ----------
        pos : Position
            The position to draw from.
        f : AgentFilter | None, optional
            Restrict the choice to the ids for which ``f`` returns True, by default None
        alloc : bool, optional
            Only used with ``f``. If False, stream the ids through ``f`` and
            reservoir-sample the matches: no copy, but ``f`` runs on every id.
            If True, copy the ids and draw until one passes ``f``: ``f`` only
            runs on drawn ids, which is faster when ``f`` is expensive. By default False
        transform : IdTransform | None, optional
            Only used with ``f``. ``f`` receives ``transform(id)`` instead of the
            id, by default None

        Returns
        -------
        AgentId | None
            The id, or None if the position is empty or no id satisfies ``f``.
        """
        ids = self.ids_in_position(pos)
        if f is None:
            if not ids:
                return None
            return ids[int(self.random.integers(len(ids)))]
        return select_sampler(alloc).sample(self.random, ids, f, transform)

    def random_agent_in_position(
        self,
        pos: Position,
        f: AgentFilter | None = None,
        alloc: bool = False,
    ) -> AbstractAgent | None:
        """Return a random agent at ``pos``.

        Parameters
        ----------
        pos : Position
            The position to draw from.
        f : AgentFilter | None, optional
            Restrict the choice to the agents for which ``f(agent)`` is True, by default None
        alloc : bool, optional
            See ``random_id_in_position``, by default False

        Returns
        -------
        AbstractAgent | None
            The agent, or None if the position is empty or no agent satisfies ``f``.
        """
        model = self.model
        transform = None if f is None else model.__getitem__
        unique_id = self.random_id_in_position(pos, f, alloc, transform)
        if unique_id is None:
            return None
        return model[unique_id]

    # ----- Occupancy hooks -----

    def add_agent_to_space(self, agent: AbstractAgent) -> None:
        self.ids_in_position(agent.pos).add(agent.unique_id)

    def remove_agent_from_space(self, agent: AbstractAgent) -> None:
        self.ids_in_position(agent.pos).discard(agent.unique_id)

    def remove_all_from_space(self) -> None:
        for pos in self._iter_positions():
            self.ids_in_position(pos).clear()

    # ----- Placement -----

    def add_agent_single(
        self,
        agent: AbstractAgent | AgentFactory,
        *args: Any,
        **kwargs: Any,
    ) -> AbstractAgent | None:
        """Add an agent to a random empty position, keeping at most one agent there.

        Parameters
        ----------
        agent : AbstractAgent | AgentFactory
            Either an agent not yet in the model, whose ``pos`` is overwritten,
            or an agent class (or factory) to create the agent with
            ``agent(model, *args, **kwargs)``.
        *args : Any
            Positional properties, when creating the agent.
        **kwargs : Any
            Keyword properties, when creating the agent.

        Returns
        -------
        AbstractAgent | None
            The added agent, or None if there are no empty positions (nothing is added).

        Raises
        ------
        ValueError
            If ``agent`` is already part of the model.
        """
        model = self.model
        if isinstance(agent, AbstractAgent) and agent.unique_id in model:
            raise ValueError(f"Agent {agent.unique_id} is already in the model")
        pos = self.random_empty()
        if pos is None:
            return None
        if isinstance(agent, AbstractAgent):
            agent.pos = pos
            return model.add_agent(agent)
        return model.add_agent_at(pos, agent, *args, **kwargs)

    def fill_space(
        self,
        agent_type: AgentFactory,
        *args: Any,
        by_position: Callable[[Position], Sequence[Any]] | None = None,
        **kwargs: Any,
    ) -> ModelLike:
        """Add one new agent to each position of the space.

        Calling it on a space that already holds agents adds a second agent to
        those positions; a RuntimeWarning is issued in that case.

        Parameters
        ----------
        agent_type : AgentFactory
            The agent class (or factory), called as ``agent_type(model, *args, **kwargs)``.
        *args : Any
            Positional properties shared by every agent.
        by_position : Callable[[Position], Sequence[Any]] | None, optional
            If given, the positional properties of the agent at ``pos`` are
            ``by_position(pos)`` instead of ``args``, by default None
        **kwargs : Any
            Keyword properties shared by every agent.

        Returns
        -------
        mesa_discrete.concrete.model.Model
            The model of the space.
        """
        model = self.model
        if not all(self.is_empty(pos) for pos in self._iter_positions()):
            warnings.warn(
                "Filling a space which already holds agents: some positions will hold more than one agent.",
                RuntimeWarning,
                stacklevel=2,
            )
        for pos in self._iter_positions():
            pos_args = args if by_position is None else tuple(by_position(pos))
            model.add_agent_at(pos, agent_type, *pos_args, **kwargs)
        return model

    def _placed_ids(self, agent: AbstractAgent) -> IdSet:
        """Return the live ids at the position of a placed ``agent``.

        Raises
        ------
        InvalidPositionError
            If the agent is not placed or its position is not part of the space.
        """
        if agent.pos is None:
            raise InvalidPositionError(None)
        return self.ids_in_position(agent.pos)

    def move_agent(self, agent: AbstractAgent, pos: Position) -> AbstractAgent:
        """Move ``agent`` to ``pos``.

        An agent of the model which is not placed yet (``pos`` is None) is placed at ``pos``.

        Parameters
        ----------
        agent : AbstractAgent
            The agent to move.
        pos : Position
            The destination.

        Returns
        -------
        AbstractAgent
            The moved agent.

        Raises
        ------
        InvalidPositionError
            If ``pos`` is not part of the space. The agent is left untouched.
        """
        # Validate the destination before touching the index
        self.ids_in_position(pos)
        if agent.pos is not None:
            self.remove_agent_from_space(agent)
        agent.pos = pos
        self.add_agent_to_space(agent)
        return agent

    def move_agent_single(
        self, agent: AbstractAgent, cutoff: float | None = None
    ) -> AbstractAgent | None:
        """Move ``agent`` to a random empty position.

        If there are no empty positions the agent does not move. An agent
        without a position is placed, as with ``move_agent``.

        Parameters
        ----------
        agent : AbstractAgent
            The agent to move.
        cutoff : float | None, optional
            Passed to ``random_empty``, by default None

        Returns
        -------
        AbstractAgent | None
            The moved agent, or None if it could not move.
        """
        pos = self.random_empty(cutoff)
        if pos is None:
            return None
        return self.move_agent(agent, pos)

    def swap_agents(self, agent0: AbstractAgent, agent1: AbstractAgent) -> None:
        """Swap the positions of two agents.

        Swapping an agent with itself, or two agents at the same position, leaves the space unchanged.

        Parameters
        ----------
        agent0 : AbstractAgent
        agent1 : AbstractAgent

        Raises
        ------
        InvalidPositionError
            If either agent is not placed in the space. Neither agent is touched.
        """
        # Both positions are validated before either agent leaves the index
        self._placed_ids(agent0)
        self._placed_ids(agent1)
        self.remove_agent_from_space(agent0)
        self.remove_agent_from_space(agent1)
        agent0.pos, agent1.pos = agent1.pos, agent0.pos
        self.add_agent_to_space(agent0)
        self.add_agent_to_space(agent1)

    # ----- DataFrame views -----

    @property
    def agents(self) -> pl.DataFrame:
        """Get the ids of the agents placed in the space, along with their positions.

        Rows follow the position order, then the order of the ids within a position.

        Returns
        -------
        pl.DataFrame
        """
        schema = {"agent_id": pl.UInt64} | {col: pl.Int64 for col in self._pos_col_names}
        rows = [
            (unique_id, *self._position_row(pos))
            for pos in self._iter_positions()
            for unique_id in self.ids_in_position(pos)
        ]
        if not rows:
            return pl.DataFrame(schema=schema)
        return pl.DataFrame(rows, schema=schema, orient="row")

    @property
    def occupancy(self) -> pl.DataFrame:
        """Get every position of the space with the number of agents it holds.

        Returns
        -------
        pl.DataFrame
        """
        universe = list(self._iter_positions())
        frame = pl.DataFrame(
            [self._position_row(pos) for pos in universe],
            schema={col: pl.Int64 for col in self._pos_col_names},
            orient="row",
        )
        return frame.with_columns(pl.Series("n_agents", self._counts(), dtype=pl.UInt32))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(npositions={self.npositions}, nagents={self._nplaced()})"

    def __str__(self) -> str:
        return f"{self.__class__.__name__}\n{str(self.occupancy)}"
