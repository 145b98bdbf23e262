"""
Randomized selection primitives shared by the discrete spaces.

This module implements the "pick one item uniformly at random among those
satisfying a predicate" primitive that the discrete spaces use both for
positions and for agent ids resident at a position.

Functions:
    reservoir_sample(rng, iterable):
        Draw one element uniformly at random from a stream in a single pass
        with O(1) extra memory.

    select_sampler(alloc):
        Return the ConditionalSampler strategy matching the ``alloc`` flag.

Classes:
    ConditionalSampler(ABC):
        Interface of the filtered-pick strategies.

    StreamingSampler(ConditionalSampler):
        Reservoir sampling over the lazily filtered candidates. The predicate
        is evaluated on every candidate, nothing is materialized.

    MaterializingSampler(ConditionalSampler):
        Copies the candidates first, then draws random candidates and discards
        the ones failing the predicate until one passes. The predicate is only
        evaluated on drawn candidates, which pays off when it is expensive.

All the functions take the random number generator explicitly; they never
create one. Every "nothing to pick" outcome is reported as ``None``.
"""

from __future__ import annotations

import math
import sys
from abc import ABC, abstractmethod
from collections.abc import Iterable
from itertools import islice
from typing import Any

from numpy.random import Generator

from mesa_discrete.types_ import AgentFilter, IdTransform

_MISSING = object()


def reservoir_sample(rng: Generator, iterable: Iterable[Any]) -> Any | None:
    """Return an element of ``iterable`` drawn uniformly at random.

    The stream is consumed once. Instead of drawing a random number for every
    element (replacing the current pick with probability 1/k for the k-th
    element), the index of the next replacement is drawn directly: with ``k``
    elements seen, the next accepted index ``j`` satisfies ``P(j > m) = k / m``,
    so ``j = ceil(k / u)`` with ``u`` uniform in (0, 1]. Skipped elements are
    consumed without touching the generator.

    Parameters
    ----------
    rng : Generator
        The generator to draw from.
    iterable : Iterable[Any]
        The stream to sample. It may be lazy and of unknown length.

    Returns
    -------
    Any | None
        The sampled element, or None if the stream is empty.
    """
    iterator = iter(iterable)
    pick = next(iterator, _MISSING)
    if pick is _MISSING:
        return None
    seen = 1
    while True:
        u = 1.0 - rng.random()
        next_index = min(max(math.ceil(seen / u), seen + 1), sys.maxsize)
        skip = next_index - seen - 1
        candidate = next(islice(iterator, skip, skip + 1), _MISSING)
        if candidate is _MISSING:
            return pick
        pick = candidate
        seen = next_index


class ConditionalSampler(ABC):
    """Strategy drawing one candidate uniformly among those passing a predicate."""

    @abstractmethod
    def sample(
        self,
        rng: Generator,
        candidates: Iterable[Any],
        predicate: AgentFilter,
        transform: IdTransform | None = None,
    ) -> Any | None:
        """Return a random candidate ``c`` such that ``predicate(transform(c))`` holds.

        Parameters
        ----------
        rng : Generator
            The generator to draw from.
        candidates : Iterable[Any]
            The candidates to choose from.
        predicate : AgentFilter
            The condition a candidate must satisfy.
        transform : IdTransform | None, optional
            Applied to a candidate before the predicate sees it, by default None
            (the predicate receives the candidate itself).

        Returns
        -------
        Any | None
            The sampled candidate (not transformed), or None if no candidate passes.
        """
        ...


class StreamingSampler(ConditionalSampler):
    """Single pass reservoir sampling over the lazily filtered candidates."""

    def sample(
        self,
        rng: Generator,
        candidates: Iterable[Any],
        predicate: AgentFilter,
        transform: IdTransform | None = None,
    ) -> Any | None:
        if transform is None:
            matching = (c for c in candidates if predicate(c))
        else:
            matching = (c for c in candidates if predicate(transform(c)))
        return reservoir_sample(rng, matching)


class MaterializingSampler(ConditionalSampler):
    """Copy the candidates, then draw until one passes the predicate."""

    def sample(
        self,
        rng: Generator,
        candidates: Iterable[Any],
        predicate: AgentFilter,
        transform: IdTransform | None = None,
    ) -> Any | None:
        population = list(candidates)
        n = len(population)
        while n:
            index = int(rng.integers(n))
            candidate = population[index]
            value = candidate if transform is None else transform(candidate)
            if predicate(value):
                return candidate
            # Move the rejected candidate out of the live prefix
            n -= 1
            population[index], population[n] = population[n], population[index]
        return None


_STREAMING = StreamingSampler()
_MATERIALIZING = MaterializingSampler()


def select_sampler(alloc: bool) -> ConditionalSampler:
    """Return the sampling strategy for the ``alloc`` flag.

    Parameters
    ----------
    alloc : bool
        If True, materialize the candidates first (MaterializingSampler).
        Otherwise stream them (StreamingSampler).

    Returns
    -------
    ConditionalSampler
    """
    return _MATERIALIZING if alloc else _STREAMING
