"""
Solver protocol for the directed search strategy.

A solver is built from capability-typed evaluators (anything with
``evaluate(point) -> Evaluation | BudgetExceeded``), the bounds and a
starting point, and run once. It must stop as soon as an evaluator answers
``BudgetExceeded`` and report ``TerminationCriterion.BUDGET_EXHAUSTED``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol

import numpy as np

from benchlab.budget import EvaluationOutcome


class TerminationCriterion(str, Enum):
    """Why a solver run ended."""

    CONVERGED = "converged"
    MAX_ITERATIONS = "max_iterations"
    BUDGET_EXHAUSTED = "budget_exhausted"
    INFEASIBLE = "infeasible"
    FAILED = "failed"

    def __str__(self) -> str:
        return self.value


class PointEvaluator(Protocol):
    """Anything that evaluates a point under a budget."""

    def evaluate(self, point: np.ndarray) -> EvaluationOutcome: ...


@dataclass(frozen=True)
class SolverInfo:
    """
    Summary of a solver run.

    Attributes:
        termination_criterion: Why the run ended.
        best_x: Best feasible point seen, if any.
        best_f: Objective value at best_x.
        iterations: Solver iterations reported by the backend.
        message: Backend message.
    """

    termination_criterion: TerminationCriterion
    best_x: np.ndarray | None = None
    best_f: float | None = None
    iterations: int = 0
    message: str = ""


class Solver(Protocol):
    """A configured solver, ready to run once."""

    def run(self) -> SolverInfo: ...


class SolverFactory(Protocol):
    """Builds a solver for one directed search call."""

    def __call__(
        self,
        objective: PointEvaluator,
        constraints: PointEvaluator,
        lower_bounds: np.ndarray,
        upper_bounds: np.ndarray,
        x0: np.ndarray,
    ) -> Solver: ...
