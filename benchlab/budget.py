"""
Evaluation budgets.

Provides:

- remaining_budget: budget left for a problem given its multiplier
- Evaluation / BudgetExceeded: tagged outcome of a budget-checked evaluation
- EvaluationBudget: evaluations allowed for one strategy call
- BudgetedObjective / BudgetedConstraints: budget-checked evaluators handed
  to an external solver

A budget-checked evaluator never raises when the budget runs out. It returns
a ``BudgetExceeded`` outcome and performs no evaluation, leaving it to the
caller (usually a solver adapter) to stop.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

import numpy as np

from benchlab.gateway import EvaluationGateway


def remaining_budget(dimension: int, budget_multiplier: int, evaluations_done: int) -> int:
    """
    Return ``dimension * budget_multiplier - evaluations_done``.

    The result may be zero or negative once the problem's budget is spent.
    """
    return int(dimension) * int(budget_multiplier) - int(evaluations_done)


@dataclass(frozen=True)
class Evaluation:
    """A performed evaluation and its value."""

    value: np.ndarray | float


@dataclass(frozen=True)
class BudgetExceeded:
    """Returned instead of evaluating once the budget has been reached."""

    spent: int
    limit: int


EvaluationOutcome = Union[Evaluation, BudgetExceeded]


class EvaluationBudget:
    """
    Evaluations allowed for one strategy call.

    Counts objective and constraint evaluations made on the gateway since
    ``baseline`` (the gateway total when the strategy call started).

    Attributes:
        limit: Maximum evaluations for this call.
        exhausted: True once an evaluation has been refused.
    """

    def __init__(self, gateway: EvaluationGateway, limit: int, baseline: int | None = None) -> None:
        if limit < 0:
            raise ValueError(f"Budget must be non-negative, got {limit}")
        self._gateway = gateway
        self.limit = int(limit)
        self._baseline = gateway.evaluations if baseline is None else int(baseline)
        self.exhausted = False

    @property
    def spent(self) -> int:
        """Evaluations made since the baseline."""
        return self._gateway.evaluations - self._baseline

    def check(self) -> BudgetExceeded | None:
        """Return a BudgetExceeded outcome if no evaluation may be started."""
        spent = self.spent
        if spent >= self.limit:
            self.exhausted = True
            return BudgetExceeded(spent=spent, limit=self.limit)
        return None


class BudgetedObjective:
    """Single-objective evaluator guarded by an EvaluationBudget."""

    def __init__(self, gateway: EvaluationGateway, budget: EvaluationBudget) -> None:
        self._gateway = gateway
        self.budget = budget

    def evaluate(self, point: np.ndarray) -> EvaluationOutcome:
        refused = self.budget.check()
        if refused is not None:
            return refused
        values = self._gateway.evaluate_objective(np.asarray(point, dtype=float))
        return Evaluation(value=float(values[0]))

    __call__ = evaluate


class BudgetedConstraints:
    """Constraint evaluator guarded by an EvaluationBudget."""

    def __init__(self, gateway: EvaluationGateway, budget: EvaluationBudget) -> None:
        self._gateway = gateway
        self.budget = budget

    def evaluate(self, point: np.ndarray) -> EvaluationOutcome:
        refused = self.budget.check()
        if refused is not None:
            return refused
        values = self._gateway.evaluate_constraints(np.asarray(point, dtype=float))
        return Evaluation(value=values)

    __call__ = evaluate
