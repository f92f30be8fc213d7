from __future__ import annotations

from typing import Any, Dict, List

from .base import Reporter, TaskRecord, TaskStatus
from ..errors import StickerPackError


class SilentReporter(Reporter):
    """Writes nothing, but remembers how tasks ended and what was violated.

    Library callers and tests can inspect ``finished`` and ``violations``
    after a build without parsing any output.
    """

    def __init__(self):
        self.finished: Dict[str, TaskRecord] = {}
        self.violations: List[StickerPackError] = []
        self._running: Dict[str, TaskRecord] = {}

    def start_task(
        self, task_id: str, name: str, total: int | None = None, **meta: Any
    ) -> None:
        self._running[task_id] = TaskRecord(task_id, name, total, meta=meta)

    def advance(self, task_id: str, step: int = 1, **meta: Any) -> None:
        rec = self._running.get(task_id)
        if rec:
            rec.completed += step

    def end_task(
        self,
        task_id: str,
        status: TaskStatus = TaskStatus.SUCCESS,
        **final_meta: Any,
    ) -> None:
        rec = self._running.pop(task_id, None)
        if rec:
            rec.close(status, final_meta)
            self.finished[task_id] = rec

    def violation(
        self, error: StickerPackError, *, skipped: bool = False
    ) -> None:
        self.violations.append(error)

    def status(self, message: str, **fields: Any) -> None:
        pass

    def error(self, message: str, **fields: Any) -> None:
        pass

    def section(self, title: str) -> None:
        pass
