"""Reporter interface and the process-wide active reporter.

A catalog build talks to the reporter in three ways:

* one task over the bundle's packs, opened with ``task()`` and advanced once
  per pack through the yielded ``TaskHandle``;
* status lines (``Bundle summary: ...``, ``Catalog summary: ...``);
* ``violation()`` for every rule failure, so structured backends keep the
  error code and context instead of a rendered string.
"""

from __future__ import annotations

import sys
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, Any, Dict, Iterator, Optional

if TYPE_CHECKING:
    from ..errors import StickerPackError

__all__ = [
    "TaskStatus",
    "TaskRecord",
    "TaskHandle",
    "Reporter",
    "set_reporter",
    "get_reporter",
    "set_verbosity",
    "get_verbosity",
    "task",
]


class TaskStatus(Enum):
    RUNNING = auto()
    SUCCESS = auto()
    FAILED = auto()


# Final counts shown on a task's completion line, in this order.
_STAT_KEYS = ("packs", "stickers", "violations")


@dataclass(slots=True)
class TaskRecord:
    task_id: str
    name: str
    total: Optional[int] = None
    completed: int = 0
    status: TaskStatus = TaskStatus.RUNNING
    start_time: float = field(default_factory=time.time)
    end_time: float | None = None
    meta: Dict[str, Any] = field(default_factory=dict)

    def close(self, status: TaskStatus, final_meta: Dict[str, Any]) -> None:
        self.status = status
        self.end_time = time.time()
        self.meta.update(final_meta)

    @property
    def duration(self) -> float:
        return (self.end_time or time.time()) - self.start_time

    @property
    def progress_text(self) -> str:
        return f" {self.completed}/{self.total}" if self.total is not None else ""

    def stats_suffix(self) -> str:
        stats = [f"{k}={self.meta[k]}" for k in _STAT_KEYS if k in self.meta]
        return f" [{' '.join(stats)}]" if stats else ""


_VERBOSITY: int = 0  # set by CLI (-v repeats)


def set_verbosity(level: int) -> None:
    global _VERBOSITY
    _VERBOSITY = max(0, level)


def get_verbosity() -> int:
    return _VERBOSITY


class Reporter:
    def start_task(
        self, task_id: str, name: str, total: int | None = None, **meta: Any
    ) -> None:  # noqa: D401
        raise NotImplementedError

    def advance(
        self, task_id: str, step: int = 1, **meta: Any
    ) -> None:  # noqa: D401
        raise NotImplementedError

    def end_task(
        self,
        task_id: str,
        status: TaskStatus = TaskStatus.SUCCESS,
        **final_meta: Any,
    ) -> None:  # noqa: D401
        raise NotImplementedError

    def status(self, message: str, **fields: Any) -> None:
        raise NotImplementedError

    def verbose(self, message: str, *, level: int = 1, **fields: Any) -> None:
        pass

    def error(self, message: str, **fields: Any) -> None:
        raise NotImplementedError

    def warning(self, message: str, **fields: Any) -> None:
        self.status(message, **fields)

    def violation(
        self, error: "StickerPackError", *, skipped: bool = False
    ) -> None:
        """Report a rule failure.

        ``skipped`` marks a pack left out under collect-all; otherwise the
        failure ended the build.
        """
        if skipped:
            self.warning(f"Skipping pack: {error}")
        else:
            self.error(str(error))

    def section(self, title: str) -> None:  # noqa: D401
        raise NotImplementedError

    def flush(self) -> None:  # noqa: D401
        pass


_ACTIVE_REPORTER: Reporter | None = None


def set_reporter(rep: Reporter) -> None:
    global _ACTIVE_REPORTER
    _ACTIVE_REPORTER = rep


def get_reporter() -> Reporter:
    global _ACTIVE_REPORTER
    if _ACTIVE_REPORTER is None:
        from .plain import PlainReporter  # local import to avoid cycle

        _ACTIVE_REPORTER = PlainReporter(stream=sys.stderr)
    return _ACTIVE_REPORTER


class TaskHandle:
    """A running task as seen by the code doing the work."""

    def __init__(self, rep: Reporter, task_id: str):
        self.rep = rep
        self.task_id = task_id
        self.final: Dict[str, Any] = {}

    def advance(self, item: str | None = None, **meta: Any) -> None:
        if item is not None:
            meta["current_item"] = item
        self.rep.advance(self.task_id, **meta)

    def finish(self, **final_meta: Any) -> None:
        # Sent with end_task whether the task succeeds or fails.
        self.final.update(final_meta)


@contextmanager
def task(
    task_id: str, name: str, total: int | None = None, **meta: Any
) -> Iterator[TaskHandle]:
    rep = get_reporter()
    handle = TaskHandle(rep, task_id)
    rep.start_task(task_id, name, total, **meta)
    try:
        yield handle
    except Exception:
        rep.end_task(task_id, TaskStatus.FAILED, **handle.final)
        raise
    rep.end_task(task_id, TaskStatus.SUCCESS, **handle.final)
