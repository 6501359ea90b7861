"""
GridSearch: evaluates the nodes of a regular grid over the problem bounds.

For unconstrained single- and multi-objective problems. The number of nodes
per axis is derived from the budget, and nodes are enumerated like an
odometer: the index of dimension 0 moves fastest, and an index that passes
``max_nodes`` resets to 0 and carries into the next dimension.
"""

from __future__ import annotations

import math
from typing import Iterator

import numpy as np

from benchlab.gateway import EvaluationGateway
from benchlab.strategies.base import SearchOutcome, SearchStatus, check_budget


def max_grid_nodes(budget: int, dimension: int) -> int:
    """
    Return the highest node index per axis for a budget.

    ``floor(budget ** (1 / dimension)) - 1``, clamped to at least 1. With a
    budget too small for two nodes per axis the clamp keeps a 2-node grid, of
    which only the first ``budget`` nodes get evaluated.
    """
    if dimension < 1:
        raise ValueError(f"Dimension must be positive, got {dimension}")
    nodes = math.floor(float(budget) ** (1.0 / dimension)) - 1 if budget > 0 else 0
    return max(1, nodes)


def iter_grid_nodes(dimension: int, max_nodes: int) -> Iterator[tuple[int, ...]]:
    """
    Yield grid node indices in odometer order.

    Every index lies in ``[0, max_nodes]``; ``(max_nodes + 1) ** dimension``
    nodes are yielded in total.

    Example:
        list(iter_grid_nodes(2, 1))  # [(0, 0), (1, 0), (0, 1), (1, 1)]
    """
    nodes = [0] * dimension
    while True:
        yield tuple(nodes)

        # Increment dimension 0 and propagate the carry
        j = 0
        while j < dimension:
            if nodes[j] < max_nodes:
                nodes[j] += 1
                break
            nodes[j] = 0
            j += 1

        if j == dimension:
            return


class GridSearch:
    """
    Budget-limited grid enumeration.

    Stops when every node has been evaluated or ``budget`` evaluations have
    been made, whichever comes first. Node coordinates and order depend only
    on the dimension, the bounds and the budget.

    Example:
        # 2-D, bounds [-5, 5]^2, budget 25: a 5 x 5 grid with step 2.5
        GridSearch().search(gateway, budget=25)
    """

    name = "grid_search"

    def points(
        self, lower_bounds: np.ndarray, upper_bounds: np.ndarray, budget: int
    ) -> Iterator[np.ndarray]:
        """Yield the points a search with this budget would evaluate, in order."""
        lower = np.asarray(lower_bounds, dtype=float)
        upper = np.asarray(upper_bounds, dtype=float)
        dimension = len(lower)
        max_nodes = max_grid_nodes(budget, dimension)
        step = (upper - lower) / max_nodes

        for count, nodes in enumerate(iter_grid_nodes(dimension, max_nodes)):
            if count >= budget:
                return
            yield lower + step * np.asarray(nodes, dtype=float)

    def search(self, gateway: EvaluationGateway, budget: int) -> SearchOutcome:
        budget = check_budget(budget)
        if gateway.number_of_constraints != 0:
            raise ValueError(
                f"Grid search handles unconstrained problems only, "
                f"got {gateway.number_of_constraints} constraint(s)"
            )

        evaluations = 0
        for x in self.points(gateway.lower_bounds, gateway.upper_bounds, budget):
            gateway.evaluate_objective(x)
            evaluations += 1

        status = SearchStatus.BUDGET_EXHAUSTED if evaluations >= budget else SearchStatus.COMPLETED
        return SearchOutcome(status=status, evaluations=evaluations)
