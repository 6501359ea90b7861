"""
Live suite progress on the terminal, built on rich.
"""

from __future__ import annotations

import time
from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from rich.console import Console, Group
from rich.live import Live
from rich.panel import Panel
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
    TimeRemainingColumn,
)
from rich.table import Table

if TYPE_CHECKING:
    from benchlab.events import Event


@dataclass
class DimensionStats:
    """Totals of the finished problems of one dimension."""

    problems: int = 0
    evaluations: int = 0
    targets_hit: int = 0


class RichProgressTracker:
    """
    Live display of a suite run.

    Shows a bar over all problems of the suite (skipped ones included), the
    problem being worked on, a per-dimension table of finished problems with
    their evaluations and final-target hits, and the latest strategy
    malfunctions.

    Example:
        with RichProgressTracker(total=suite.number_of_problems) as tracker:
            Experiment(config, strategy, on_event=tracker).run(suite)
    """

    def __init__(
        self,
        total: int = 0,
        title: str = "Experiment",
        show_warnings: int = 3,
        console: Console | None = None,
    ) -> None:
        """
        Args:
            total: Number of problems in the suite.
            title: Panel title.
            show_warnings: How many malfunction warnings stay on screen.
            console: Rich console to draw on (a new one if None).
        """
        self.total = total
        self.title = title
        self.console = console or Console()

        self.finished = 0
        self.skipped = 0
        self.malfunctions = 0
        self.current: str | None = None
        self.dimensions: dict[int, DimensionStats] = {}
        self.warnings: deque[str] = deque(maxlen=show_warnings)
        self.start_time = time.time()

        self.progress = Progress(
            SpinnerColumn(),
            TextColumn("[bold blue]{task.description}"),
            BarColumn(bar_width=40),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            TextColumn("•"),
            TimeRemainingColumn(),
            console=self.console,
            expand=False,
        )
        self.task_id = None
        self.live: Live | None = None

    def _dimension_table(self) -> Table:
        table = Table(box=None, padding=(0, 2), header_style="dim")
        table.add_column("d", justify="right", style="bold")
        table.add_column("problems", justify="right", style="green")
        table.add_column("evaluations", justify="right")
        table.add_column("targets hit", justify="right", style="cyan")
        for dimension in sorted(self.dimensions):
            stats = self.dimensions[dimension]
            table.add_row(
                str(dimension),
                str(stats.problems),
                f"{stats.evaluations:,}",
                str(stats.targets_hit),
            )
        return table

    def _make_display(self) -> Group:
        summary = (
            f"[green]{self.finished}[/green] run  "
            f"[yellow]{self.skipped}[/yellow] skipped  "
            f"[red]{self.malfunctions}[/red] malfunctions"
        )
        body: list[Any] = [summary]
        if self.dimensions:
            body.append(self._dimension_table())

        components: list[Any] = [
            self.progress,
            Panel(Group(*body), title=f"[bold]{self.title}[/bold]", border_style="blue"),
        ]
        if self.warnings:
            components.append(
                Panel("\n".join(self.warnings), title="[red]Warnings[/red]", border_style="red")
            )
        return Group(*components)

    def _refresh(self) -> None:
        if self.task_id is not None:
            self.progress.update(
                self.task_id,
                completed=self.finished + self.skipped,
                description=self.current or "Running problems",
            )
        if self.live is not None:
            self.live.update(self._make_display())

    def __call__(self, event: Event) -> None:
        """Handle experiment events."""
        from benchlab.events import EventKind

        if event.kind == EventKind.PROBLEM_STARTED:
            self.current = event.problem_id

        elif event.kind == EventKind.PROBLEM_FINISHED:
            self.finished += 1
            dimension = int(event.payload.get("dimension", 0))
            stats = self.dimensions.setdefault(dimension, DimensionStats())
            stats.problems += 1
            stats.evaluations += int(event.payload.get("evaluations", 0))
            if event.payload.get("final_target_hit"):
                stats.targets_hit += 1

        elif event.kind == EventKind.PROBLEM_SKIPPED:
            self.skipped += 1

        elif event.kind == EventKind.STRATEGY_MALFUNCTION:
            self.malfunctions += 1
            strategy = event.payload.get("strategy", "?")
            self.warnings.append(f"{event.problem_id}: {strategy} made no evaluations")

        elif event.kind == EventKind.PROGRESS:
            self.total = event.payload.get("total", self.total)
            if self.task_id is not None:
                self.progress.update(self.task_id, total=self.total or None)

        self._refresh()

    def __enter__(self) -> RichProgressTracker:
        """Start the live display."""
        self.task_id = self.progress.add_task("Running problems", total=self.total or None)
        self.live = Live(
            self._make_display(),
            console=self.console,
            refresh_per_second=10,
            transient=False,
        )
        self.live.__enter__()
        return self

    def __exit__(self, *args: Any) -> None:
        """Stop the live display and print the final tally."""
        if self.live is not None:
            self.live.__exit__(*args)
            self.live = None

        elapsed = time.time() - self.start_time
        self.console.print()
        self.console.print(
            Panel(
                Group(
                    f"[green]✓ Suite complete[/green] in [bold]{elapsed:.1f}s[/bold]",
                    self._dimension_table(),
                ),
                title=self.title,
                border_style="green",
            )
        )
