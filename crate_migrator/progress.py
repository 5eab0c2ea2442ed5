"""Phase timing for a migration run (prepare -> scan -> emit)."""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Iterator

logger = logging.getLogger(__name__)

PhaseStatus = str  # "running" | "completed" | "failed" | "skipped"


@dataclass
class PhaseProgress:
    phase: str
    status: PhaseStatus = "running"
    start_time: float | None = None
    end_time: float | None = None
    detail: str = ""
    error: str | None = None

    @property
    def duration(self) -> float | None:
        if self.start_time is not None and self.end_time is not None:
            return round(self.end_time - self.start_time, 2)
        return None


class ProgressTracker:
    """Record the status and duration of each phase of a run.

    Listeners registered in ``callbacks`` are notified on every transition;
    a failing listener never interrupts the run.
    """

    def __init__(self) -> None:
        self.phases: dict[str, PhaseProgress] = {}
        self.callbacks: list[Callable[[PhaseProgress], None]] = []

    @contextmanager
    def track(self, phase: str) -> Iterator[PhaseProgress]:
        """Time *phase*; the body may set ``detail`` on the yielded record."""
        p = PhaseProgress(phase=phase, start_time=time.monotonic())
        self.phases[phase] = p
        self._notify(p)
        try:
            yield p
        except BaseException as e:
            p.status = "failed"
            p.error = str(e) or type(e).__name__
            p.end_time = time.monotonic()
            self._notify(p)
            raise
        p.status = "completed"
        p.end_time = time.monotonic()
        self._notify(p)

    def skip(self, phase: str, reason: str) -> None:
        p = PhaseProgress(phase=phase, status="skipped", detail=reason)
        self.phases[phase] = p
        self._notify(p)

    def get_summary(self) -> dict[str, Any]:
        return {
            "phases": [
                {
                    "phase": p.phase,
                    "status": p.status,
                    "duration": p.duration,
                    "detail": p.detail,
                    "error": p.error,
                }
                for p in self.phases.values()
            ],
            "total_duration": round(sum(p.duration or 0 for p in self.phases.values()), 2),
        }

    def _notify(self, p: PhaseProgress) -> None:
        for cb in self.callbacks:
            try:
                cb(p)
            except Exception:
                logger.debug("Progress callback error for phase %s", p.phase, exc_info=True)
