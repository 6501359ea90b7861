"""
Structured events emitted by the experiment loop.

Delivery guarantees:
- Events are delivered inline; a slow callback slows the suite down
- Delivery is best-effort: a raising callback is logged and the run goes on
- Per problem: problem_started, then any strategy_malfunction, then problem_finished
- Events emitted before an EvaluationCountRegression abort are kept; nothing is buffered
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable

logger = logging.getLogger(__name__)


class EventKind(str, Enum):
    """Types of events emitted by the experiment loop."""

    PROBLEM_STARTED = "problem_started"
    PROBLEM_FINISHED = "problem_finished"
    PROBLEM_SKIPPED = "problem_skipped"  # Outside the selected function range
    STRATEGY_MALFUNCTION = "strategy_malfunction"  # A strategy call made no evaluations
    PROGRESS = "progress"
    LOG = "log"


@dataclass(frozen=True)
class Event:
    """
    An event emitted during an experiment.

    Attributes:
        kind: The type of event.
        problem_id: Id of the problem concerned (None for suite-wide events).
        timestamp: When the event was created.
        payload: Kind-specific data, e.g. ``dimension`` and ``evaluations``
            for problem events.
    """

    kind: EventKind
    problem_id: str | None
    timestamp: datetime
    payload: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def create(cls, kind: EventKind, problem_id: str | None = None, **payload: Any) -> Event:
        """Create an event of any kind, stamped with the current time."""
        return cls(kind=kind, problem_id=problem_id, timestamp=datetime.now(), payload=payload)

    @classmethod
    def problem_started(cls, problem_id: str, **extra: Any) -> Event:
        return cls.create(EventKind.PROBLEM_STARTED, problem_id, **extra)

    @classmethod
    def problem_finished(cls, problem_id: str, **extra: Any) -> Event:
        return cls.create(EventKind.PROBLEM_FINISHED, problem_id, **extra)

    @classmethod
    def problem_skipped(cls, problem_id: str, reason: str = "outside function range") -> Event:
        return cls.create(EventKind.PROBLEM_SKIPPED, problem_id, reason=reason)

    @classmethod
    def strategy_malfunction(cls, problem_id: str, strategy: str, **extra: Any) -> Event:
        return cls.create(EventKind.STRATEGY_MALFUNCTION, problem_id, strategy=strategy, **extra)

    @classmethod
    def progress(cls, current: int, total: int, message: str = "") -> Event:
        """Suite-wide progress: *current* of *total* problems handled."""
        return cls.create(EventKind.PROGRESS, None, current=current, total=total, message=message)

    @classmethod
    def log(cls, problem_id: str | None, message: str, level: str = "info") -> Event:
        return cls.create(EventKind.LOG, problem_id, message=message, level=level)


# Type alias for event callbacks
EventCallback = Callable[[Event], None]


def emit_event(callback: EventCallback | None, event: Event) -> None:
    """
    Deliver *event* to *callback*.

    A failing callback is logged at warning level and otherwise ignored.
    """
    if callback is None:
        return

    try:
        callback(event)
    except Exception as e:
        logger.warning(f"Event callback failed for {event.kind}: {e}")


class EventEmitter:
    """
    Fans events out to any number of callbacks.

    The experiment loop creates one per run, with the user callback and the
    progress tracker (either may be None).
    """

    def __init__(self, *callbacks: EventCallback | None) -> None:
        self._callbacks = [cb for cb in callbacks if cb is not None]

    def add(self, callback: EventCallback) -> None:
        self._callbacks.append(callback)

    def emit(self, event: Event) -> None:
        for callback in self._callbacks:
            emit_event(callback, event)

    def problem_started(self, problem_id: str, **extra: Any) -> None:
        self.emit(Event.problem_started(problem_id, **extra))

    def problem_finished(self, problem_id: str, **extra: Any) -> None:
        self.emit(Event.problem_finished(problem_id, **extra))

    def problem_skipped(self, problem_id: str, reason: str = "outside function range") -> None:
        self.emit(Event.problem_skipped(problem_id, reason))

    def strategy_malfunction(self, problem_id: str, strategy: str, **extra: Any) -> None:
        self.emit(Event.strategy_malfunction(problem_id, strategy, **extra))

    def progress(self, current: int, total: int, message: str = "") -> None:
        self.emit(Event.progress(current, total, message))

    def log(self, message: str, level: str = "info", problem_id: str | None = None) -> None:
        self.emit(Event.log(problem_id, message, level))
