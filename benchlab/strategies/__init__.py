"""
Budgeted search strategies.

Provides:

- SearchStrategy: protocol every strategy implements
- RandomSearch: uniform sampling within the bounds
- GridSearch: regular grid enumeration (unconstrained problems)
- DirectedSearch: external solver behind budget-checked evaluators
"""

from benchlab.strategies.base import (
    SearchOutcome,
    SearchStatus,
    SearchStrategy,
    check_budget,
)
from benchlab.strategies.directed import DirectedSearch
from benchlab.strategies.grid import GridSearch, iter_grid_nodes, max_grid_nodes
from benchlab.strategies.random import RandomSearch

__all__ = [
    "SearchOutcome",
    "SearchStatus",
    "SearchStrategy",
    "check_budget",
    "DirectedSearch",
    "GridSearch",
    "RandomSearch",
    "iter_grid_nodes",
    "max_grid_nodes",
]
