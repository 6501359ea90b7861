"""
Suite providers.

Provides:

- CallableProblem / ProblemSuite: in-process problems built from callables
- RecordingObserver: in-memory observer for CallableProblem
- CocoSuite: COCO suites through the cocoex bindings (optional dependency)
"""

from benchlab.suites.coco import CocoSuite
from benchlab.suites.memory import (
    CallableProblem,
    ProblemSuite,
    RecordedEvaluation,
    RecordingObserver,
)

__all__ = [
    "CallableProblem",
    "ProblemSuite",
    "RecordedEvaluation",
    "RecordingObserver",
    "CocoSuite",
]
