"""
SciPy-backed solver for constrained single-objective problems.

Drives ``scipy.optimize.minimize`` through budget-checked evaluators. COCO
constraints are feasible when ``g(x) <= 0``; SciPy inequality constraints are
feasible when ``fun(x) >= 0``, so constraint values are negated.
"""

from __future__ import annotations

import logging
from typing import Any

import numpy as np
from scipy.optimize import Bounds, minimize

from benchlab.budget import BudgetExceeded
from benchlab.solvers.base import PointEvaluator, SolverInfo, TerminationCriterion

logger = logging.getLogger(__name__)

METHODS = ("COBYLA", "SLSQP", "trust-constr")


class _BudgetReached(Exception):
    """Unwinds scipy's loop once an evaluator refuses to evaluate."""


class ScipySolver:
    """
    Constrained minimization with a selectable SciPy method.

    Args:
        objective: Budget-checked objective evaluator.
        constraints: Budget-checked constraint evaluator.
        lower_bounds: Lower bounds of the search box.
        upper_bounds: Upper bounds of the search box.
        x0: Starting point (clipped into the box).
        method: One of ``"COBYLA"`` (default, derivative-free), ``"SLSQP"``,
            ``"trust-constr"``.
        options: Extra options passed to ``minimize``.

    Use ``functools.partial(ScipySolver, method="SLSQP")`` to hand a
    non-default variant to ``DirectedSearch``.
    """

    def __init__(
        self,
        objective: PointEvaluator,
        constraints: PointEvaluator,
        lower_bounds: np.ndarray,
        upper_bounds: np.ndarray,
        x0: np.ndarray,
        method: str = "COBYLA",
        options: dict[str, Any] | None = None,
    ) -> None:
        if method not in METHODS:
            raise ValueError(f"Unknown method: {method}. Use one of {', '.join(METHODS)}")
        self._objective = objective
        self._constraints = constraints
        self._lower = np.asarray(lower_bounds, dtype=float)
        self._upper = np.asarray(upper_bounds, dtype=float)
        self._x0 = np.clip(np.asarray(x0, dtype=float), self._lower, self._upper)
        self.method = method
        self.options = dict(options or {})

        self._best_x: np.ndarray | None = None
        self._best_f: float | None = None
        self._last_x: np.ndarray | None = None
        self._last_f: float | None = None

    def _fun(self, x: np.ndarray) -> float:
        outcome = self._objective.evaluate(x)
        if isinstance(outcome, BudgetExceeded):
            raise _BudgetReached()
        self._last_x = np.array(x, dtype=float)
        self._last_f = float(outcome.value)
        return self._last_f

    def _cons(self, x: np.ndarray) -> np.ndarray:
        outcome = self._constraints.evaluate(x)
        if isinstance(outcome, BudgetExceeded):
            raise _BudgetReached()
        values = np.atleast_1d(np.asarray(outcome.value, dtype=float))
        # Track the best feasible point among those whose objective is known
        if (
            self._last_x is not None
            and self._last_f is not None
            and np.array_equal(self._last_x, x)
            and np.all(values <= 0)
            and (self._best_f is None or self._last_f < self._best_f)
        ):
            self._best_x = self._last_x
            self._best_f = self._last_f
        return -values

    def run(self) -> SolverInfo:
        try:
            result = minimize(
                self._fun,
                self._x0,
                method=self.method,
                bounds=Bounds(self._lower, self._upper),
                constraints=[{"type": "ineq", "fun": self._cons}],
                options=self.options or None,
            )
        except _BudgetReached:
            logger.debug("Solver stopped by evaluation budget")
            return SolverInfo(
                termination_criterion=TerminationCriterion.BUDGET_EXHAUSTED,
                best_x=self._best_x,
                best_f=self._best_f,
            )

        if result.success:
            criterion = TerminationCriterion.CONVERGED
        elif self._best_x is None:
            criterion = TerminationCriterion.INFEASIBLE
        else:
            criterion = TerminationCriterion.MAX_ITERATIONS

        return SolverInfo(
            termination_criterion=criterion,
            best_x=self._best_x,
            best_f=self._best_f,
            iterations=int(getattr(result, "nit", 0) or 0),
            message=str(result.message),
        )
