"""
RandomSearch: uniform sampling within the problem bounds.

Works for single- and multi-objective problems, with or without constraints.
No adaptation and no state carried between rounds.
"""

from __future__ import annotations

import numpy as np

from benchlab.gateway import EvaluationGateway
from benchlab.seeds import SeedBundle
from benchlab.strategies.base import SearchOutcome, SearchStatus, check_budget


class RandomSearch:
    """
    Budget-limited uniform random sampling.

    Each round draws ``x[j] = lower[j] + u * (upper[j] - lower[j])`` with
    ``u`` uniform in ``[0, 1)``, evaluates the objectives and, when the
    problem has constraints, the constraints at the same point.

    The generator is shared across calls, so results depend on the seed and on
    the order in which problems are processed.

    Example:
        strategy = RandomSearch.from_seeds(SeedBundle(root_seed=0xDEADBEEF))
        strategy.search(gateway, budget=100)
    """

    name = "random_search"

    def __init__(self, rng: np.random.Generator) -> None:
        self._rng = rng

    @classmethod
    def from_seeds(cls, seeds: SeedBundle) -> RandomSearch:
        """Create a random search drawing from the bundle's "random_search" stream."""
        return cls(seeds.numpy(cls.name))

    def search(self, gateway: EvaluationGateway, budget: int) -> SearchOutcome:
        """Perform exactly ``budget`` sampling rounds."""
        budget = check_budget(budget)
        lower = gateway.lower_bounds
        span = gateway.upper_bounds - lower
        has_constraints = gateway.number_of_constraints > 0
        start = gateway.evaluations

        for _ in range(budget):
            x = lower + self._rng.random(gateway.dimension) * span
            gateway.evaluate_objective(x)
            if has_constraints:
                gateway.evaluate_constraints(x)

        return SearchOutcome(
            status=SearchStatus.BUDGET_EXHAUSTED,
            evaluations=gateway.evaluations - start,
        )
