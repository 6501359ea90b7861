"""
Progress tracking for benchmark experiments.

Trackers consume the events of the experiment loop and show how far the
suite has got. The timing report printed at the end of a run is separate and
always produced.

Example:
    # Option 1: let the experiment create a tracker
    Experiment(config, strategy, progress=True).run(suite)

    # Option 2: customize it
    Experiment(config, strategy, progress=Progress(title="Grid", style="simple")).run(suite)

    # Option 3: manual tracker control
    with create_progress_tracker(total=suite.number_of_problems) as tracker:
        Experiment(config, strategy, on_event=tracker).run(suite)
"""

from benchlab.progress.base import (
    Progress,
    ProgressTracker,
    SimpleProgressTracker,
)
from benchlab.progress.factory import create_progress_tracker
from benchlab.progress.rich import RichProgressTracker

__all__ = [
    "Progress",
    "ProgressTracker",
    "SimpleProgressTracker",
    "RichProgressTracker",
    "create_progress_tracker",
]
