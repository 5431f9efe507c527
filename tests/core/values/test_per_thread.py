import threading

import pytest

from model_math.core.config.settings import update_config
from model_math.core.values.per_thread import PerThread


@pytest.fixture
def context():
    return PerThread(seed=1234)


class TestPerThread:
    def test_defaults_from_config(self):
        update_config(rng_type="pcg64", temporary_buffer_size=4096)
        pt = PerThread(seed=1)
        assert pt.rng_type() == "pcg64"
        assert pt.temporary_buffer_size_in_bytes() == 4096
        assert len(pt.temporary_buffer()) == 4096

    def test_unknown_generator(self):
        with pytest.raises(ValueError):
            PerThread(rng_type="xoshiro256")

    def test_seed_is_reproducible(self):
        a = PerThread(seed=99)
        b = PerThread(seed=99)
        assert [a.random64() for _ in range(5)] == [b.random64() for _ in range(5)]

    def test_configured_seed(self):
        update_config(rng_seed=5)
        assert PerThread().random32() == PerThread().random32()

    @pytest.mark.parametrize("rng_type", ["mt19937", "pcg64", "philox", "sfc64"])
    def test_generators(self, rng_type):
        pt = PerThread(rng_type=rng_type, seed=3)
        assert pt.rng_type() == rng_type
        assert 0.0 <= pt.random_inclusive() <= 1.0

    def test_raw_integer_ranges(self, context):
        for _ in range(200):
            assert -2 ** 63 <= context.random64() < 2 ** 63
            assert 0 <= context.random32() < 2 ** 32
            assert 0 <= context.trng() < 2 ** 32

    def test_uniform_intervals(self, context):
        for _ in range(200):
            assert 0.0 < context.random_exclusive() < 1.0
            assert 0.0 <= context.random_inclusive_exclusive() < 1.0
            assert 0.0 < context.random_exclusive_inclusive() <= 1.0

    def test_weibull_delay(self, context):
        assert all(context.random_weibull(1.0, 2.0, 5.0) >= 5.0 for _ in range(100))

    def test_geometric_counts_trials(self, context):
        assert all(context.random_geometric(0.5) >= 1 for _ in range(100))

    def test_set_rng_type_reseeds(self, context):
        context.set_rng_type("philox")
        assert context.rng_type() == "philox"

    def test_one_context_per_thread(self):
        results = {}

        def work(thread_id):
            pt = PerThread(seed=thread_id, thread_id=thread_id)
            results[pt.thread_id()] = pt.random64()

        threads = [threading.Thread(target=work, args=(i,)) for i in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sorted(results) == [0, 1, 2, 3]
        assert results[2] == PerThread(seed=2).random64()
