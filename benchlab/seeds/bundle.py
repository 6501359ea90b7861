"""
SeedBundle: named random streams derived from one experiment seed.

Strategies never seed themselves. They ask a bundle for a stream by name, so
two experiments with the same ``random_seed`` draw identical samples while
distinct strategies (or repeated runs) never share a stream.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, replace

import numpy as np


def _digest(*parts: object) -> int:
    """SHA-256 of the ``:``-joined parts, truncated to 64 bits."""
    text = ":".join(str(p) for p in parts)
    return int.from_bytes(hashlib.sha256(text.encode("utf-8")).digest()[:8], "big")


@dataclass(frozen=True)
class SeedBundle:
    """
    Root of the random streams of an experiment.

    Attributes:
        root_seed: The experiment seed (``ExperimentConfig.random_seed``).
        replicate_index: Repetition of the whole experiment; None and 0
            derive the same streams.

    Example:
        seeds = SeedBundle(root_seed=0xDEADBEEF)
        rng = seeds.numpy("random_search")
    """

    root_seed: int
    replicate_index: int | None = None

    def replicate(self, index: int) -> SeedBundle:
        """The bundle of another repetition of the same experiment."""
        return replace(self, replicate_index=index)

    def derive(self, name: str) -> int:
        """Return the 64-bit seed of stream *name*."""
        return _digest(self.root_seed, name, self.replicate_index or 0)

    def numpy_seed(self, name: str = "default") -> int:
        """Seed of stream *name* reduced to 32 bits."""
        return self.derive(name) % 2**32

    def numpy(self, name: str = "default") -> np.random.Generator:
        return np.random.default_rng(self.numpy_seed(name))
