import numpy as np
import pytest

from mesa_discrete.sampling import (
    ConditionalSampler,
    MaterializingSampler,
    StreamingSampler,
    reservoir_sample,
    select_sampler,
)
from tests.space.utils import assert_uniform


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(7)


def _is_odd(value: int) -> bool:
    return value % 2 == 1


class Test_reservoir_sample:
    def test_empty(self, rng: np.random.Generator):
        assert reservoir_sample(rng, []) is None
        assert reservoir_sample(rng, iter(())) is None

    def test_single(self, rng: np.random.Generator):
        assert reservoir_sample(rng, ["only"]) == "only"

    def test_uniform(self, rng: np.random.Generator):
        draws = [reservoir_sample(rng, range(10)) for _ in range(5000)]
        assert_uniform(draws, list(range(10)))

    def test_lazy_stream(self, rng: np.random.Generator):
        consumed = []

        def stream():
            for i in range(5):
                consumed.append(i)
                yield i

        draws = [reservoir_sample(rng, stream()) for _ in range(2500)]
        assert_uniform(draws, [0, 1, 2, 3, 4])
        # A single pass per draw
        assert len(consumed) == 5 * 2500

    def test_long_stream(self, rng: np.random.Generator):
        # Skips make long streams cheap on the generator
        assert reservoir_sample(rng, range(10**6)) in range(10**6)

    def test_reproducible(self):
        first = [reservoir_sample(np.random.default_rng(3), range(100)) for _ in range(5)]
        second = [reservoir_sample(np.random.default_rng(3), range(100)) for _ in range(5)]
        assert first == second


class Test_ConditionalSampler:
    def test_select_sampler(self):
        assert isinstance(select_sampler(False), StreamingSampler)
        assert isinstance(select_sampler(True), MaterializingSampler)
        assert isinstance(select_sampler(True), ConditionalSampler)
        assert select_sampler(True) is select_sampler(True)

    def test_abstract(self):
        with pytest.raises(TypeError):
            ConditionalSampler()

    @pytest.mark.parametrize("alloc", [False, True])
    def test_no_candidates(self, rng: np.random.Generator, alloc: bool):
        sampler = select_sampler(alloc)
        assert sampler.sample(rng, [], _is_odd) is None
        assert sampler.sample(rng, [0, 2, 4], _is_odd) is None

    @pytest.mark.parametrize("alloc", [False, True])
    def test_uniform_on_matches(self, rng: np.random.Generator, alloc: bool):
        sampler = select_sampler(alloc)
        draws = [sampler.sample(rng, range(10), _is_odd) for _ in range(5000)]
        assert set(draws) == {1, 3, 5, 7, 9}
        assert_uniform(draws, [1, 3, 5, 7, 9])

    @pytest.mark.parametrize("alloc", [False, True])
    def test_transform(self, rng: np.random.Generator, alloc: bool):
        names = {1: "ann", 2: "bob", 3: "amy", 4: "cid"}
        sampler = select_sampler(alloc)
        draws = [
            sampler.sample(rng, names, lambda name: name.startswith("a"), names.__getitem__)
            for _ in range(2000)
        ]
        # The untransformed candidate is returned
        assert set(draws) == {1, 3}
        assert_uniform(draws, [1, 3])

    def test_materializing_does_not_mutate(self, rng: np.random.Generator):
        candidates = [0, 1, 2, 3, 4, 5]
        for _ in range(20):
            MaterializingSampler().sample(rng, candidates, lambda value: value == 5)
        assert candidates == [0, 1, 2, 3, 4, 5]

    def test_materializing_evaluates_drawn_only(self, rng: np.random.Generator):
        calls = []

        def always(value):
            calls.append(value)
            return True

        MaterializingSampler().sample(rng, range(1000), always)
        assert len(calls) == 1

    def test_streaming_evaluates_all(self, rng: np.random.Generator):
        calls = []

        def always(value):
            calls.append(value)
            return True

        StreamingSampler().sample(rng, range(100), always)
        assert calls == list(range(100))
