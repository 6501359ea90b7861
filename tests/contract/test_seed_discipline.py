"""Contract tests for seed discipline.

These tests verify that:
1. Same seed bundle produces same random sequence
2. Different bundles produce different sequences
3. A strategy seeded from a bundle replays the same samples
"""

from __future__ import annotations

import numpy as np

from benchlab import Experiment, ExperimentConfig, RandomSearch, SeedBundle
from benchlab.suites import CallableProblem, ProblemSuite, RecordingObserver


def sample_suite(observer: RecordingObserver) -> ProblemSuite:
    problems = [
        CallableProblem(
            lambda x: float(np.sum(x**2)),
            lower_bounds=[-5.0] * dimension,
            upper_bounds=[5.0] * dimension,
            function_id=1,
            instance=instance,
        )
        for dimension in (2, 3)
        for instance in (1, 2)
    ]
    return ProblemSuite(problems, observer=observer)


class TestSeedDiscipline:
    """Verify RNG reproducibility contract."""

    def test_same_bundle_same_sequence(self):
        """Same bundle should produce identical sequences."""
        bundle = SeedBundle(root_seed=12345, replicate_index=0)
        rng1 = bundle.numpy("random_search")
        rng2 = bundle.numpy("random_search")
        np.testing.assert_array_equal(rng1.random(100), rng2.random(100))

    def test_different_bundles_different_sequences(self):
        """Different bundles should produce different sequences."""
        rng1 = SeedBundle(root_seed=42).numpy("random_search")
        rng2 = SeedBundle(root_seed=43).numpy("random_search")
        assert not np.array_equal(rng1.random(100), rng2.random(100))

    def test_derived_seeds_deterministic(self):
        """Derived seeds should be deterministic."""
        bundle = SeedBundle(root_seed=42)
        assert len({bundle.derive("test") for _ in range(10)}) == 1

    def test_cross_platform_stability(self):
        """Derived seeds are 64-bit ints that differ per name."""
        bundle = SeedBundle(root_seed=42, replicate_index=0)
        seed_default = bundle.derive("default")
        seed_search = bundle.derive("random_search")
        assert isinstance(seed_default, int)
        assert 0 <= seed_default < 2**64
        assert seed_default != seed_search

    def test_experiment_replays(self, capsys):
        """Two experiments with the same seed evaluate the same points."""
        config = ExperimentConfig(
            suite_name="memory",
            first_function=1,
            last_function=1,
            instances_per_function=2,
            dimensions=(2, 3),
            budget_multiplier=5,
        )
        runs = []
        for _ in range(2):
            observer = RecordingObserver()
            strategy = RandomSearch.from_seeds(SeedBundle(config.random_seed))
            Experiment(config, strategy).run(sample_suite(observer))
            runs.append(observer.points())

        assert len(runs[0]) == 2 * 10 + 2 * 15
        for a, b in zip(*runs):
            np.testing.assert_array_equal(a, b)
