"""
EvaluationGateway: the only path from a strategy to the active problem.

A gateway is created by the experiment loop for the problem it is currently
processing and handed to exactly one strategy at a time. It holds no state of
its own; every read and every evaluation goes straight to the problem, whose
counters and observer do the bookkeeping.
"""

from __future__ import annotations

import numpy as np

from benchlab.problem import EvaluationCounts, Problem


class EvaluationGateway:
    """
    Forwards candidate points to the active problem.

    Budget enforcement is the caller's job; the gateway never refuses an
    evaluation.

    Example:
        gateway = EvaluationGateway(problem)
        y = gateway.evaluate_objective(np.zeros(gateway.dimension))
        gateway.evaluations  # objective + constraint evaluations so far
    """

    def __init__(self, problem: Problem) -> None:
        self._problem = problem

    @property
    def problem(self) -> Problem:
        """The active problem."""
        return self._problem

    @property
    def dimension(self) -> int:
        return int(self._problem.dimension)

    @property
    def number_of_objectives(self) -> int:
        return int(self._problem.number_of_objectives)

    @property
    def number_of_constraints(self) -> int:
        return int(self._problem.number_of_constraints)

    @property
    def lower_bounds(self) -> np.ndarray:
        return np.asarray(self._problem.lower_bounds, dtype=float)

    @property
    def upper_bounds(self) -> np.ndarray:
        return np.asarray(self._problem.upper_bounds, dtype=float)

    @property
    def initial_solution(self) -> np.ndarray:
        return np.array(self._problem.initial_solution, dtype=float)

    @property
    def evaluations(self) -> int:
        """Objective plus constraint evaluations performed on the problem."""
        return self.counts().total

    def counts(self) -> EvaluationCounts:
        """Snapshot of the problem's evaluation counters."""
        return EvaluationCounts.of(self._problem)

    def evaluate_objective(self, x: np.ndarray) -> np.ndarray:
        """Evaluate the objective(s) at x; returns a vector of length number_of_objectives."""
        return np.atleast_1d(np.asarray(self._problem(x), dtype=float))

    def evaluate_constraints(self, x: np.ndarray) -> np.ndarray:
        """Evaluate the constraints at x; returns a vector of length number_of_constraints."""
        return np.atleast_1d(np.asarray(self._problem.constraint(x), dtype=float))

    def __repr__(self) -> str:
        return f"EvaluationGateway(problem={getattr(self._problem, 'id', '?')!r})"
