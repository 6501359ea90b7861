"""
Base types for search strategies.

A strategy consumes a budget of evaluations through an EvaluationGateway and
performs no I/O beyond evaluation calls.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from benchlab.gateway import EvaluationGateway


class SearchStatus(str, Enum):
    """How a strategy call ended."""

    COMPLETED = "completed"
    BUDGET_EXHAUSTED = "budget_exhausted"
    SOLVER_FAILED = "solver_failed"


@dataclass(frozen=True)
class SearchOutcome:
    """
    Result of one strategy call.

    Attributes:
        status: How the call ended.
        evaluations: Objective plus constraint evaluations made by the call.
        message: Free-form detail (termination criterion, error text).
    """

    status: SearchStatus
    evaluations: int
    message: str = ""


@runtime_checkable
class SearchStrategy(Protocol):
    """
    Protocol for budgeted search strategies.

    ``search`` is called with the gateway of the active problem and the
    evaluation budget remaining for it.
    """

    name: str

    def search(self, gateway: EvaluationGateway, budget: int) -> SearchOutcome:
        """Run the strategy until the budget or its own criterion stops it."""
        ...


def check_budget(budget: int) -> int:
    """Validate a strategy budget and return it as an int."""
    budget = int(budget)
    if budget < 0:
        raise ValueError(f"Budget must be non-negative, got {budget}")
    return budget
