"""Tests for progress trackers."""

from __future__ import annotations

import io

import pytest
from rich.console import Console

from benchlab.events import Event
from benchlab.progress import (
    ProgressTracker,
    RichProgressTracker,
    SimpleProgressTracker,
    create_progress_tracker,
)
from benchlab.progress.base import format_eta
from benchlab.progress.rich import DimensionStats


def feed(tracker):
    tracker(Event.progress(0, 4))
    tracker(Event.problem_skipped("p1"))
    tracker(Event.problem_started("p2"))
    tracker(Event.strategy_malfunction("p2", "grid_search"))
    tracker(Event.problem_finished("p2", dimension=2, evaluations=0))
    tracker(Event.problem_finished("p3", dimension=2, evaluations=40))


class TestFormatEta:
    def test_unknown(self):
        assert format_eta(10.0, 0, 5) == "?"

    def test_seconds(self):
        assert format_eta(10.0, 5, 5) == "10s"

    def test_minutes(self):
        assert format_eta(60.0, 1, 3) == "3.0m"

    def test_hours(self):
        assert format_eta(3600.0, 1, 2) == "2.0h"


class TestSimpleProgressTracker:
    """Tests for SimpleProgressTracker."""

    def test_counts_events(self, capsys):
        tracker = SimpleProgressTracker(title="demo")
        with tracker:
            feed(tracker)

        assert tracker.total == 4
        assert tracker.finished == 2
        assert tracker.skipped == 1
        assert tracker.malfunctions == 1

        out = capsys.readouterr().out
        assert "demo" in out
        assert "3/4" in out
        assert "p3 evals=40" in out
        assert "2 run, 1 skipped, 1 malfunctions, 0 targets hit" in out
        assert "d=2 p3 evals=40" in out

    def test_update_interval(self, capsys):
        tracker = SimpleProgressTracker(total=10, update_interval=2)
        for i in range(3):
            tracker(Event.problem_finished(f"p{i}", evaluations=1))
        lines = [line for line in capsys.readouterr().out.splitlines() if "evals=" in line]
        assert len(lines) == 1

    def test_target_hits(self, capsys):
        tracker = SimpleProgressTracker(total=2)
        tracker(Event.problem_finished("p1", dimension=3, evaluations=9, final_target_hit=True))
        assert tracker.targets_hit == 1
        assert "d=3 p1 evals=9 target hit" in capsys.readouterr().out

    def test_is_a_tracker(self):
        assert isinstance(SimpleProgressTracker(), ProgressTracker)


class TestRichProgressTracker:
    """Tests for RichProgressTracker."""

    def make_tracker(self, **kwargs):
        buffer = io.StringIO()
        console = Console(file=buffer, force_terminal=False, width=120)
        return RichProgressTracker(title="demo", console=console, **kwargs), buffer

    def test_counts_events(self):
        tracker, buffer = self.make_tracker()
        with tracker:
            feed(tracker)

        assert tracker.total == 4
        assert tracker.finished == 2
        assert tracker.skipped == 1
        assert tracker.malfunctions == 1
        assert tracker.current == "p2"
        assert "Suite complete" in buffer.getvalue()

    def test_per_dimension_totals(self):
        tracker, _ = self.make_tracker()
        tracker(Event.problem_finished("a", dimension=2, evaluations=20, final_target_hit=True))
        tracker(Event.problem_finished("b", dimension=2, evaluations=20, final_target_hit=False))
        tracker(Event.problem_finished("c", dimension=5, evaluations=50))

        assert sorted(tracker.dimensions) == [2, 5]
        assert tracker.dimensions[2] == DimensionStats(problems=2, evaluations=40, targets_hit=1)
        assert tracker.dimensions[5] == DimensionStats(problems=1, evaluations=50, targets_hit=0)

    def test_warnings_bounded(self):
        tracker, _ = self.make_tracker(show_warnings=2)
        for i in range(5):
            tracker(Event.strategy_malfunction(f"p{i}", "grid_search"))
        assert tracker.malfunctions == 5
        assert list(tracker.warnings) == [
            "p3: grid_search made no evaluations",
            "p4: grid_search made no evaluations",
        ]

class TestCreateProgressTracker:
    def test_simple(self):
        tracker = create_progress_tracker(total=3, style="simple", update_interval=5)
        assert isinstance(tracker, SimpleProgressTracker)
        assert tracker.update_interval == 5

    def test_auto_keeps_update_interval(self, capsys):
        """The interval survives "auto" resolving to the simple tracker."""
        tracker = create_progress_tracker(style="auto", update_interval=4)
        assert isinstance(tracker, SimpleProgressTracker)
        assert tracker.update_interval == 4

    def test_rich(self):
        tracker = create_progress_tracker(total=3, style="rich")
        assert isinstance(tracker, RichProgressTracker)

    def test_auto_without_terminal(self, capsys):
        # stdout is captured, so not a terminal
        assert isinstance(create_progress_tracker(style="auto"), SimpleProgressTracker)

    def test_unknown_style(self):
        with pytest.raises(ValueError, match="Unknown progress style"):
            create_progress_tracker(style="fancy")  # type: ignore[arg-type]
