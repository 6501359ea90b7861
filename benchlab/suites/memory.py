"""
In-process problems and suites.

CallableProblem turns plain Python callables into problems with evaluation
counters and an optional observer, and ProblemSuite serves a list of them in
order. Useful for trying strategies without a benchmark library and for
testing the experiment loop.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Sequence

import numpy as np

from benchlab.problem import Observer, ProblemIndex, ProblemIndexTable


class CallableProblem:
    """
    A problem backed by Python callables.

    Args:
        objective: ``f(x)`` returning a scalar or a vector of objectives.
        lower_bounds: Lower bounds of the region of interest.
        upper_bounds: Upper bounds of the region of interest.
        constraints: Optional ``g(x)`` returning constraint values
            (feasible when all are <= 0).
        number_of_objectives: Length of the objective vector.
        number_of_constraints: Length of the constraint vector.
        target: Objective value at or below which ``final_target_hit`` turns
            True (single-objective only).
        initial_solution: Starting point (defaults to the box center).
        function_id: Function id within the suite.
        instance: Instance number within the suite.
        name: Suite name used to build the problem id.

    Example:
        sphere = CallableProblem(lambda x: float(np.sum(x**2)), [-5, -5], [5, 5])
        sphere(np.zeros(2))  # 0.0, sphere.evaluations == 1
    """

    def __init__(
        self,
        objective: Callable[[np.ndarray], Any],
        lower_bounds: Sequence[float],
        upper_bounds: Sequence[float],
        constraints: Callable[[np.ndarray], Any] | None = None,
        number_of_objectives: int = 1,
        number_of_constraints: int = 0,
        target: float | None = None,
        initial_solution: Sequence[float] | None = None,
        function_id: int = 1,
        instance: int = 1,
        name: str = "memory",
    ) -> None:
        self.lower_bounds = np.asarray(lower_bounds, dtype=float)
        self.upper_bounds = np.asarray(upper_bounds, dtype=float)
        if self.lower_bounds.shape != self.upper_bounds.shape or self.lower_bounds.ndim != 1:
            raise ValueError("Bounds must be vectors of equal length")
        if number_of_constraints > 0 and constraints is None:
            raise ValueError("number_of_constraints > 0 requires a constraints callable")

        self.dimension = len(self.lower_bounds)
        self.number_of_objectives = number_of_objectives
        self.number_of_constraints = number_of_constraints if constraints is not None else 0
        self.function_id = function_id
        self.instance = instance
        self.id = f"{name}_f{function_id:03d}_i{instance:02d}_d{self.dimension:02d}"

        if initial_solution is None:
            initial_solution = (self.lower_bounds + self.upper_bounds) / 2
        self.initial_solution = np.asarray(initial_solution, dtype=float)

        self._objective = objective
        self._constraints = constraints
        self._target = target
        self._observer: Observer | None = None

        self.evaluations = 0
        self.evaluations_constraints = 0
        self.final_target_hit = False

    def observe_with(self, observer: Observer | None) -> CallableProblem:
        """Attach an observer notified of every evaluation."""
        self._observer = observer
        return self

    def __call__(self, x: np.ndarray) -> Any:
        x = np.asarray(x, dtype=float)
        value = self._objective(x)
        self.evaluations += 1

        values = np.atleast_1d(np.asarray(value, dtype=float))
        if self._target is not None and values[0] <= self._target:
            self.final_target_hit = True
        if self._observer is not None:
            self._observer(self, x, values, "objective")
        return value

    def constraint(self, x: np.ndarray) -> np.ndarray:
        if self._constraints is None:
            raise ValueError(f"Problem {self.id} has no constraints")
        x = np.asarray(x, dtype=float)
        values = np.atleast_1d(np.asarray(self._constraints(x), dtype=float))
        self.evaluations_constraints += 1
        if self._observer is not None:
            self._observer(self, x, values, "constraint")
        return values

    def __repr__(self) -> str:
        return f"CallableProblem({self.id})"


class ProblemSuite:
    """
    Serves a fixed list of problems in order.

    Problems should be grouped by ascending dimension, then function id, then
    instance, as benchmark suites order them.

    Args:
        problems: The problems, in suite order.
        observer: Optional observer attached to each problem as it is served.
    """

    def __init__(
        self,
        problems: Sequence[CallableProblem],
        observer: Observer | None = None,
    ) -> None:
        self._problems = list(problems)
        self._observer = observer
        self._position = 0
        self._index = ProblemIndexTable(
            (p.function_id, p.dimension, p.instance) for p in self._problems
        )

    @property
    def number_of_problems(self) -> int:
        return len(self._problems)

    def __len__(self) -> int:
        return len(self._problems)

    def next_problem(self) -> CallableProblem | None:
        """Return the next problem, or None once all have been served."""
        if self._position >= len(self._problems):
            return None
        problem = self._problems[self._position]
        self._position += 1
        if self._observer is not None:
            problem.observe_with(self._observer)
        return problem

    def decode_problem_index(self, index: int) -> ProblemIndex:
        return self._index.decode(index)

    def __iter__(self) -> Iterator[CallableProblem]:
        while (problem := self.next_problem()) is not None:
            yield problem


@dataclass
class RecordedEvaluation:
    """One evaluation seen by a RecordingObserver."""

    problem_id: str
    kind: str
    x: np.ndarray
    values: np.ndarray


@dataclass
class RecordingObserver:
    """Observer that keeps every evaluation in memory."""

    records: list[RecordedEvaluation] = field(default_factory=list)

    def __call__(self, problem: Any, x: np.ndarray, values: np.ndarray, kind: str) -> None:
        self.records.append(
            RecordedEvaluation(
                problem_id=problem.id,
                kind=kind,
                x=np.array(x, dtype=float),
                values=np.array(values, dtype=float),
            )
        )

    def points(self, kind: str = "objective") -> list[np.ndarray]:
        """Points evaluated for the given kind, in order."""
        return [r.x for r in self.records if r.kind == kind]
