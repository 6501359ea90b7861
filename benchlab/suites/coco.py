"""
COCO benchmark suites via the ``cocoex`` bindings.

Requires the 'coco-experiment' package: pip install benchlab[coco]

``cocoex.Problem`` already has the attributes of the Problem protocol, so
problems are passed through untouched. The observer is attached when a
problem is served, and every evaluation is logged by it.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any

from benchlab.problem import ProblemIndex, ProblemIndexTable

if TYPE_CHECKING:
    from benchlab.config import ExperimentConfig

logger = logging.getLogger(__name__)

_PROBLEM_ID = re.compile(r"_f(\d+)_i(\d+)_d(\d+)")


def _import_cocoex() -> Any:
    try:
        import cocoex
    except ImportError as e:
        raise ImportError(
            "COCO suites require the 'coco-experiment' package. "
            "Install it with: pip install benchlab[coco]"
        ) from e
    return cocoex


class CocoSuite:
    """
    A COCO suite with its observer.

    Args:
        suite_name: COCO suite name ("bbob", "bbob-biobj", "bbob-constrained", ...).
        suite_instance: Instance selection, e.g. "instances: 1-15".
        suite_options: Suite options, e.g. "dimensions: 2,3,5".
        observer_name: Observer name; None runs without logging.
        observer_options: Observer options string.
        log_level: COCO log level ("error", "warning", "info", "debug").

    Example:
        suite = CocoSuite.from_config(ExperimentConfig(suite_name="bbob"))
        while (problem := suite.next_problem()) is not None:
            problem(problem.initial_solution)
    """

    def __init__(
        self,
        suite_name: str,
        suite_instance: str = "",
        suite_options: str = "",
        observer_name: str | None = None,
        observer_options: str = "",
        log_level: str | None = None,
    ) -> None:
        cocoex = _import_cocoex()
        if log_level:
            cocoex.log_level(log_level)

        self._suite = cocoex.Suite(suite_name, suite_instance, suite_options)
        self._observer = (
            cocoex.Observer(observer_name, observer_options) if observer_name else None
        )
        self._index: ProblemIndexTable | None = None
        logger.info(
            "COCO suite %s: %d problems (instance=%r, options=%r)",
            suite_name,
            len(self._suite),
            suite_instance,
            suite_options,
        )

    @classmethod
    def from_config(cls, config: ExperimentConfig) -> CocoSuite:
        """Build the suite and observer an experiment config describes."""
        return cls(
            suite_name=config.suite_name,
            suite_instance=config.suite_instance,
            suite_options=config.suite_options,
            observer_name=config.observer_name,
            observer_options=config.observer_options,
            log_level=config.log_level,
        )

    @property
    def number_of_problems(self) -> int:
        return len(self._suite)

    @property
    def observer(self) -> Any:
        """The underlying ``cocoex.Observer`` (None when unobserved)."""
        return self._observer

    def next_problem(self) -> Any:
        """Return the next observed problem, or None at the end of the suite."""
        return self._suite.next_problem(self._observer)

    def decode_problem_index(self, index: int) -> ProblemIndex:
        if self._index is None:
            self._index = ProblemIndexTable(self._parse_ids())
        return self._index.decode(index)

    def _parse_ids(self) -> list[tuple[int, int, int]]:
        triples = []
        for problem_id in self._suite.ids():
            match = _PROBLEM_ID.search(problem_id)
            if match is None:
                raise ValueError(f"Unrecognized COCO problem id: {problem_id}")
            function_id, instance, dimension = (int(g) for g in match.groups())
            triples.append((function_id, dimension, instance))
        return triples
