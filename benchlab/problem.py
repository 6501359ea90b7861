"""
Problem and suite protocols.

The harness never defines benchmark problems itself. It consumes them from a
suite provider through the protocols below. Attribute names follow the
``cocoex.Problem`` API, so COCO problems satisfy :class:`Problem` as-is.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, NamedTuple, Protocol, runtime_checkable

import numpy as np


@runtime_checkable
class Problem(Protocol):
    """
    One parametrized benchmark instance (function id x dimension x instance).

    Owned by the suite provider. Calling the problem evaluates the objective(s)
    and calling ``constraint`` evaluates the constraints; both increment the
    problem's own counters and trigger any attached observer.
    """

    id: str
    dimension: int
    number_of_objectives: int
    number_of_constraints: int
    lower_bounds: np.ndarray
    upper_bounds: np.ndarray
    initial_solution: np.ndarray
    evaluations: int
    evaluations_constraints: int
    final_target_hit: bool

    def __call__(self, x: np.ndarray) -> Any:
        """Evaluate the objective(s) at x."""
        ...

    def constraint(self, x: np.ndarray) -> Any:
        """Evaluate the constraints at x."""
        ...


@runtime_checkable
class Suite(Protocol):
    """
    A stream of problems, grouped by ascending dimension.

    ``next_problem`` returns ``None`` once the stream is exhausted.
    """

    @property
    def number_of_problems(self) -> int: ...

    def next_problem(self) -> Problem | None: ...

    def decode_problem_index(self, index: int) -> ProblemIndex: ...


class Observer(Protocol):
    """Callable notified of every evaluation an in-memory problem performs."""

    def __call__(self, problem: Any, x: np.ndarray, values: np.ndarray, kind: str) -> None: ...


class ProblemIndex(NamedTuple):
    """Position of a problem in a suite, as zero-based indices."""

    function_idx: int
    dimension_idx: int
    instance_idx: int


class ProblemIndexTable:
    """
    Decodes linear problem indices for a suite.

    Built from the (function_id, dimension, instance) triple of every problem
    in suite order. Index positions are ranks among the sorted distinct values.

    Example:
        table = ProblemIndexTable([(1, 2, 1), (1, 2, 2), (2, 2, 1), (2, 2, 2)])
        table.decode(3)  # ProblemIndex(function_idx=1, dimension_idx=0, instance_idx=1)
    """

    def __init__(self, triples: Iterable[tuple[int, int, int]]) -> None:
        self._triples = [tuple(int(v) for v in t) for t in triples]
        self._functions = sorted({t[0] for t in self._triples})
        self._dimensions = sorted({t[1] for t in self._triples})
        self._instances = sorted({t[2] for t in self._triples})

    def __len__(self) -> int:
        return len(self._triples)

    @property
    def dimensions(self) -> list[int]:
        """Distinct dimensions in ascending order."""
        return list(self._dimensions)

    def decode(self, index: int) -> ProblemIndex:
        """
        Decode a linear problem index.

        Raises:
            IndexError: If index is out of range.
        """
        if index < 0 or index >= len(self._triples):
            raise IndexError(f"Problem index {index} out of range [0, {len(self._triples)})")
        function_id, dimension, instance = self._triples[index]
        return ProblemIndex(
            function_idx=self._functions.index(function_id),
            dimension_idx=self._dimensions.index(dimension),
            instance_idx=self._instances.index(instance),
        )


@dataclass(frozen=True)
class EvaluationCounts:
    """Snapshot of a problem's evaluation counters."""

    objective: int
    constraints: int

    @property
    def total(self) -> int:
        return self.objective + self.constraints

    @classmethod
    def of(cls, problem: Problem) -> EvaluationCounts:
        """Read both counters of a problem."""
        return cls(
            objective=int(problem.evaluations),
            constraints=int(problem.evaluations_constraints),
        )
