"""
Graph space implementation for mesa-discrete.

This module provides GraphSpace, whose positions are the nodes ``0..n - 1`` of
a graph. Edges are not stored: the only thing the occupancy index and the
samplers need from a graph is its node set. Neighbor nodes are computed by the
caller and passed to ``empty_nearby_positions`` and ``random_nearby_empty``.
"""

from __future__ import annotations

from mesa_discrete.abstract.space.discrete import DEFAULT_EMPTY_CUTOFF
from mesa_discrete.concrete.space.discrete import DiscreteSpace
from mesa_discrete.types_ import GraphNode, ModelLike


class GraphSpace(DiscreteSpace):
    """Discrete space over the nodes of a graph.

    Parameters
    ----------
    model : mesa_discrete.concrete.model.Model
        The model to which the space belongs
    n_nodes : int
        The number of nodes; positions are ``0..n_nodes - 1``
    empty_cutoff : float, optional
        See AbstractDiscreteSpace, by default 0.998
    """

    _pos_col_names = ["node_id"]

    def __init__(
        self,
        model: ModelLike,
        n_nodes: int,
        empty_cutoff: float = DEFAULT_EMPTY_CUTOFF,
    ) -> None:
        super().__init__(model, positions=range(n_nodes), empty_cutoff=empty_cutoff)
        self._n_nodes = n_nodes

    def random_position(self) -> GraphNode:
        return int(self.random.integers(self._n_nodes))

    @property
    def npositions(self) -> int:
        return self._n_nodes
