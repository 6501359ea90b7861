"""
Experiment: drives a search strategy over every problem of a suite.

For each problem the loop:

1. skips it when its function lies outside the selected function range;
2. runs the strategy with the remaining budget, at least once and up to
   ``1 + independent_restarts`` times, stopping early when the final target
   was hit (unconstrained problems) or no budget is left;
3. checks the evaluation counters after every strategy call;
4. feeds the problem to the timing recorder.

Finally the timing report is printed.

Example:
    config = ExperimentConfig(suite_name="bbob", budget_multiplier=100)
    strategy = RandomSearch.from_seeds(SeedBundle(config.random_seed))
    summary = Experiment(config, strategy).run(CocoSuite.from_config(config))
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Union

from benchlab.budget import remaining_budget
from benchlab.config import ExperimentConfig
from benchlab.events import EventCallback, EventEmitter
from benchlab.gateway import EvaluationGateway
from benchlab.problem import EvaluationCounts, Problem, Suite
from benchlab.progress import Progress, ProgressTracker, create_progress_tracker
from benchlab.strategies.base import SearchStatus, SearchStrategy
from benchlab.timing import TimingRecorder

logger = logging.getLogger(__name__)

StrategySelector = Callable[[Problem], SearchStrategy]


class EvaluationCountRegression(RuntimeError):
    """Raised when a problem's evaluation counters decrease. Aborts the run."""

    pass


def check_monotonic(before: EvaluationCounts, after: EvaluationCounts) -> None:
    """
    Verify that the total evaluation count (objective plus constraints) did
    not decrease. The two counters are not checked separately.

    Raises:
        EvaluationCountRegression: If the total went down.
    """
    if after.total < before.total:
        raise EvaluationCountRegression(
            "Something unexpected happened - function evaluations were decreased! "
            f"({before.total} -> {after.total})"
        )


def select_by_problem_shape(
    unconstrained: SearchStrategy, constrained: SearchStrategy
) -> StrategySelector:
    """
    Route constrained single-objective problems to *constrained*.

    Every other problem gets *unconstrained*.
    """

    def select(problem: Problem) -> SearchStrategy:
        if problem.number_of_objectives == 1 and problem.number_of_constraints > 0:
            return constrained
        return unconstrained

    return select


class FunctionRangeFilter:
    """
    Selects the problems of a function range.

    Counts problems seen at the current dimension (across functions and
    instances, starting at 1 and reset whenever the dimension changes) and
    accepts a problem when that count falls inside
    ``((first - 1) * instances, last * instances]``.
    """

    def __init__(self, first_function: int, last_function: int, instances_per_function: int) -> None:
        self.first_function = first_function
        self.last_function = last_function
        self.instances_per_function = instances_per_function
        self._counter = 1
        self._dimension: int | None = None

    def accept(self, problem: Problem) -> bool:
        """Return whether to run *problem*; call once per problem, in suite order."""
        if problem.dimension != self._dimension:
            self._counter = 1
            self._dimension = problem.dimension

        low = (self.first_function - 1) * self.instances_per_function
        high = self.last_function * self.instances_per_function + 1
        accepted = low < self._counter < high
        self._counter += 1
        return accepted


@dataclass
class ExperimentSummary:
    """
    What an experiment run did.

    Attributes:
        problems_run: Problems the strategy was applied to.
        problems_skipped: Problems outside the function range.
        strategy_calls: Strategy invocations over all problems.
        malfunctions: Problems whose strategy call made no evaluations.
        evaluations: Objective plus constraint evaluations on run problems.
        timing: Lines of the timing report.
    """

    problems_run: int = 0
    problems_skipped: int = 0
    strategy_calls: int = 0
    malfunctions: int = 0
    evaluations: int = 0
    timing: list[str] = field(default_factory=list)


class Experiment:
    """
    The experiment loop.

    Args:
        config: Experiment settings (function range, budget, restarts).
        strategy: A search strategy, or a callable choosing one per problem.
        on_event: Optional callback receiving structured events.
        progress: Show progress: True for defaults, or a Progress config.
        clock: Time source for the timing report.
    """

    def __init__(
        self,
        config: ExperimentConfig,
        strategy: Union[SearchStrategy, StrategySelector],
        on_event: EventCallback | None = None,
        progress: bool | Progress = False,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config
        self._strategy = strategy
        self._on_event = on_event
        self._progress = progress
        self._clock = clock

    def _strategy_for(self, problem: Problem) -> SearchStrategy:
        if isinstance(self._strategy, SearchStrategy):
            return self._strategy
        return self._strategy(problem)

    def _create_tracker(self, total: int) -> ProgressTracker | None:
        if self._progress is False or self._progress is None:
            return None
        settings = self._progress if isinstance(self._progress, Progress) else Progress()
        return create_progress_tracker(
            total=total,
            title=settings.title or self.config.algorithm_name,
            style=settings.style,
            update_interval=settings.update_interval,
        )

    def run(self, suite: Suite) -> ExperimentSummary:
        """
        Process every problem of *suite* and print the timing report.

        Raises:
            EvaluationCountRegression: If a problem's evaluation counters
                decrease; the run is aborted without a timing report.
        """
        summary = ExperimentSummary()
        total = suite.number_of_problems
        tracker = self._create_tracker(total)
        emitter = EventEmitter(self._on_event)
        if tracker is not None:
            emitter.add(tracker)
        range_filter = FunctionRangeFilter(
            self.config.first_function,
            self.config.last_function,
            self.config.instances_per_function,
        )
        timing = TimingRecorder.from_suite(suite, clock=self._clock)

        logger.info(
            "Running %s on %d problems (functions %d-%d)",
            self.config.algorithm_name,
            total,
            self.config.first_function,
            self.config.last_function,
        )

        if tracker is not None:
            tracker.__enter__()
        try:
            emitter.progress(0, total, "started")
            seen = 0
            while (problem := suite.next_problem()) is not None:
                seen += 1
                if not range_filter.accept(problem):
                    logger.debug("Skipping %s (outside function range)", problem.id)
                    emitter.problem_skipped(problem.id)
                    summary.problems_skipped += 1
                    continue

                emitter.problem_started(problem.id, dimension=problem.dimension)
                calls = self._run_problem(problem, emitter, summary)
                counts = EvaluationCounts.of(problem)
                summary.problems_run += 1
                summary.evaluations += counts.total
                emitter.problem_finished(
                    problem.id,
                    dimension=problem.dimension,
                    evaluations=counts.total,
                    strategy_calls=calls,
                    final_target_hit=bool(problem.final_target_hit),
                )

                timing.time_problem(problem)
                emitter.progress(seen, total)
        finally:
            if tracker is not None:
                tracker.__exit__(None, None, None)

        print("\n***** End of suite *****")
        summary.timing = timing.finalize()
        return summary

    def _run_problem(self, problem: Problem, emitter: EventEmitter, summary: ExperimentSummary) -> int:
        """Apply the strategy to one problem, with restarts. Returns the number of calls."""
        gateway = EvaluationGateway(problem)
        problem_budget = problem.dimension * self.config.budget_multiplier
        calls = 0

        for run in range(1, 2 + self.config.independent_restarts):
            before = gateway.counts()
            remaining = remaining_budget(
                problem.dimension, self.config.budget_multiplier, before.total
            )

            if (problem.final_target_hit and problem.number_of_constraints == 0) or remaining <= 0:
                break

            strategy = self._strategy_for(problem)
            outcome = strategy.search(gateway, remaining)
            calls += 1
            summary.strategy_calls += 1
            logger.debug(
                "%s run %d on %s: %s (%d evaluations)",
                strategy.name,
                run,
                problem.id,
                outcome.status.value,
                outcome.evaluations,
            )
            if outcome.status == SearchStatus.SOLVER_FAILED:
                emitter.log(
                    f"{strategy.name} solver failed: {outcome.message}",
                    level="warning",
                    problem_id=problem.id,
                )

            after = gateway.counts()
            check_monotonic(before, after)
            if after.total == before.total:
                print(
                    f"WARNING: Budget has not been exhausted "
                    f"({before.total}/{problem_budget} evaluations done)!"
                )
                emitter.strategy_malfunction(
                    problem.id,
                    strategy.name,
                    evaluations_done=before.total,
                    budget=problem_budget,
                )
                summary.malfunctions += 1
                break

        return calls
