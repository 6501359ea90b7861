"""
Timing of an experiment run, per problem dimension.

The experiment loop feeds every processed problem to a TimingRecorder. While
problems keep the same dimension their objective evaluations accumulate; when
the dimension changes (or the run ends) the recorder closes the segment and
keeps a line with the average wall-clock time per evaluation:

    d=5 done in 1.23e-06 seconds/evaluation

``finalize`` prints those lines followed by the total elapsed time.
"""

from __future__ import annotations

import logging
import time
from typing import Callable

from benchlab.problem import Problem, Suite

logger = logging.getLogger(__name__)


def format_elapsed(seconds: float) -> str:
    """Format a duration as ``<h>h<mm>m<ss>s``."""
    total = int(seconds)
    hours = total // 3600
    minutes = (total % 3600) // 60
    secs = total - hours * 3600 - minutes * 60
    return f"{hours}h{minutes:02d}m{secs:02d}s"


class TimingRecorder:
    """
    Tracks cumulative evaluations and elapsed time per dimension.

    Idle until the first problem arrives, then tracking one dimension at a
    time. Timing is observational only.

    Attributes:
        number_of_dimensions: Dimensions the suite is expected to contain
            (0 when unknown).
        previous_dimension: Dimension of the current segment (0 when idle).
        cumulative_evaluations: Objective evaluations in the current segment.
        output: Summary lines of the closed segments.

    Example:
        timing = TimingRecorder.from_suite(suite)
        while (problem := suite.next_problem()) is not None:
            ...
            timing.time_problem(problem)
        timing.finalize()
    """

    def __init__(
        self,
        number_of_dimensions: int = 0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._clock = clock
        self.number_of_dimensions = number_of_dimensions
        self.previous_dimension = 0
        self.cumulative_evaluations = 0
        self.output: list[str] = []
        self.start_time = clock()
        self.overall_start_time = self.start_time
        self._segments = 0

    @classmethod
    def from_suite(
        cls, suite: Suite, clock: Callable[[], float] = time.monotonic
    ) -> TimingRecorder:
        """Create a recorder sized for the dimensions of a suite."""
        number_of_dimensions = 0
        if suite.number_of_problems > 0:
            last = suite.decode_problem_index(suite.number_of_problems - 1)
            number_of_dimensions = last.dimension_idx + 1
        return cls(number_of_dimensions=number_of_dimensions, clock=clock)

    def time_problem(self, problem: Problem | None) -> None:
        """
        Account for a processed problem, or flush the open segment on ``None``.

        A summary line is kept only for segments with at least one evaluation.
        """
        if problem is not None and problem.dimension == self.previous_dimension:
            self.cumulative_evaluations += int(problem.evaluations)
            return

        if self.cumulative_evaluations > 0:
            elapsed = self._clock() - self.start_time
            per_evaluation = elapsed / self.cumulative_evaluations
            self.output.append(
                f"d={self.previous_dimension} done in {per_evaluation:.2e} seconds/evaluation"
            )

        if problem is not None:
            self._segments += 1
            if self.number_of_dimensions and self._segments > self.number_of_dimensions:
                logger.warning(
                    "Dimension %d started segment %d of %d expected; "
                    "suite is not grouped by dimension",
                    problem.dimension,
                    self._segments,
                    self.number_of_dimensions,
                )
            self.previous_dimension = int(problem.dimension)
            self.cumulative_evaluations = int(problem.evaluations)
            self.start_time = self._clock()
        else:
            self.previous_dimension = 0
            self.cumulative_evaluations = 0

    def finalize(self) -> list[str]:
        """
        Close the open segment and print the timing report.

        Returns:
            The printed lines (per-dimension lines, then the total).
        """
        self.time_problem(None)
        elapsed = self._clock() - self.overall_start_time

        lines = list(self.output)
        lines.append(f"Total elapsed time: {format_elapsed(elapsed)}")

        print()
        for line in lines:
            print(line)
        return lines
