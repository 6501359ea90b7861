"""
Factory function for creating progress trackers.
"""

from __future__ import annotations

import sys
from typing import Any, Literal

from benchlab.progress.base import ProgressTracker, SimpleProgressTracker
from benchlab.progress.rich import RichProgressTracker


def create_progress_tracker(
    total: int = 0,
    title: str = "Experiment",
    style: Literal["auto", "rich", "simple"] = "auto",
    update_interval: int = 1,
    **kwargs: Any,
) -> ProgressTracker:
    """
    Create a progress tracker.

    Args:
        total: Total number of problems expected.
        title: Title for the progress display.
        style: Progress style to use:
            - "auto": rich when stdout is a terminal, otherwise simple
            - "rich": live rich display
            - "simple": plain text lines
        update_interval: Print every N finished problems; used by the
            simple tracker only, including when "auto" resolves to it.
        **kwargs: Additional arguments passed to the tracker.

    Returns:
        A ProgressTracker instance.

    Example:
        tracker = create_progress_tracker(total=suite.number_of_problems, style="simple")
    """
    if style not in ("auto", "rich", "simple"):
        raise ValueError(f"Unknown progress style: {style}. Use auto/rich/simple")

    if style == "auto":
        style = "rich" if sys.stdout.isatty() else "simple"

    if style == "rich":
        return RichProgressTracker(total=total, title=title, **kwargs)
    return SimpleProgressTracker(
        total=total, title=title, update_interval=update_interval, **kwargs
    )
