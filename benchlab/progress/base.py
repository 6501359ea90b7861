"""
Base classes for progress tracking.

Provides the ProgressTracker protocol and SimpleProgressTracker implementation.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Literal, Protocol, runtime_checkable

if TYPE_CHECKING:
    from benchlab.events import Event


@dataclass
class Progress:
    """
    Configuration for progress display during an experiment.

    Pass this to ``Experiment(progress=...)`` for customized progress
    tracking without wiring up a tracker manually.

    Attributes:
        title: Title for the progress display (defaults to the algorithm name).
        style: Progress style: "auto" (rich on a terminal), "rich", or "simple".
        update_interval: Simple style only: print every N finished problems.
    """

    title: str | None = None
    style: Literal["auto", "rich", "simple"] = "auto"
    update_interval: int = 1


@runtime_checkable
class ProgressTracker(Protocol):
    """
    Protocol for progress trackers.

    Progress trackers receive events from the experiment loop and display
    progress to the operator. Trackers are context managers.
    """

    total: int
    finished: int
    skipped: int
    malfunctions: int

    def __call__(self, event: Event) -> None:
        """Handle an event from the experiment loop."""
        ...

    def __enter__(self) -> ProgressTracker:
        """Enter the context (start display)."""
        ...

    def __exit__(self, *args: Any) -> None:
        """Exit the context (cleanup display)."""
        ...


def format_eta(elapsed: float, done: int, remaining: int) -> str:
    """Estimate the remaining time from the average so far."""
    if done <= 0:
        return "?"
    eta = (elapsed / done) * remaining
    if eta < 60:
        return f"{eta:.0f}s"
    elif eta < 3600:
        return f"{eta/60:.1f}m"
    return f"{eta/3600:.1f}h"


class SimpleProgressTracker:
    """
    Plain-text progress: one line per finished problem (or every N problems).

    Lines look like::

        [rayes] 17/720 (2%) d=2 bbob-constrained_f002_i02_d02 evals=200 target hit ETA: 4.1m

    Example:
        with SimpleProgressTracker(total=suite.number_of_problems) as tracker:
            Experiment(config, strategy, on_event=tracker).run(suite)
    """

    def __init__(
        self,
        total: int = 0,
        title: str = "Experiment",
        update_interval: int = 1,
    ) -> None:
        """
        Args:
            total: Number of problems in the suite.
            title: Prefix of every line.
            update_interval: Print every N finished problems.
        """
        self.total = total
        self.title = title
        self.update_interval = max(1, update_interval)

        self.finished = 0
        self.skipped = 0
        self.malfunctions = 0
        self.targets_hit = 0
        self.start_time = time.time()
        self._since_print = 0

    def __call__(self, event: Event) -> None:
        """Handle experiment events."""
        from benchlab.events import EventKind

        if event.kind == EventKind.PROBLEM_FINISHED:
            self.finished += 1
            if event.payload.get("final_target_hit"):
                self.targets_hit += 1
            self._since_print += 1
            if self._since_print >= self.update_interval:
                self._since_print = 0
                print(self._line(event))

        elif event.kind == EventKind.PROBLEM_SKIPPED:
            self.skipped += 1

        elif event.kind == EventKind.STRATEGY_MALFUNCTION:
            self.malfunctions += 1

        elif event.kind == EventKind.PROGRESS:
            self.total = event.payload.get("total", self.total)

    def _line(self, event: Event) -> str:
        done = self.finished + self.skipped
        pct = (done / self.total * 100) if self.total > 0 else 0
        eta = format_eta(time.time() - self.start_time, self.finished, self.total - done)

        parts = [f"  [{self.title}] {done}/{self.total} ({pct:.0f}%)"]
        if "dimension" in event.payload:
            parts.append(f"d={event.payload['dimension']}")
        parts.append(f"{event.problem_id} evals={event.payload.get('evaluations', 0)}")
        if event.payload.get("final_target_hit"):
            parts.append("target hit")
        parts.append(f"ETA: {eta}")
        return " ".join(parts)

    def __enter__(self) -> SimpleProgressTracker:
        print(f"\n{self.title}")
        print("-" * 60)
        return self

    def __exit__(self, *args: Any) -> None:
        elapsed = time.time() - self.start_time
        print("-" * 60)
        print(
            f"{self.finished} run, {self.skipped} skipped, "
            f"{self.malfunctions} malfunctions, {self.targets_hit} targets hit "
            f"in {elapsed:.1f}s"
        )
