"""
Timing utilities for detection stages.

Used by the detector to time each pipeline stage when DUPLICATION_DEBUG=1
is set. Timings are only logged, never included in the result.
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Iterator, List


@dataclass
class TimingMetrics:
    """Collected durations for one named stage.

    Attributes:
        stage_name: Name of the stage
        total_ms: Cumulative time in milliseconds
        count: Number of recorded runs
        min_ms: Shortest recorded run
        max_ms: Longest recorded run
    """

    stage_name: str
    total_ms: float = 0.0
    count: int = 0
    min_ms: float = field(default=float('inf'))
    max_ms: float = 0.0

    def record(self, duration_ms: float) -> None:
        self.total_ms += duration_ms
        self.count += 1
        self.min_ms = min(self.min_ms, duration_ms)
        self.max_ms = max(self.max_ms, duration_ms)

    @property
    def avg_ms(self) -> float:
        if self.count == 0:
            return 0.0
        return self.total_ms / self.count

    def to_dict(self) -> dict:
        return {
            'stage_name': self.stage_name,
            'total_ms': round(self.total_ms, 2),
            'count': self.count,
            'avg_ms': round(self.avg_ms, 2),
            'min_ms': round(self.min_ms, 2) if self.count > 0 else 0.0,
            'max_ms': round(self.max_ms, 2),
        }


class Timer:
    """Context manager measuring one block of code.

    Usage:
        metrics = TimingMetrics('clustering')
        with Timer(metrics):
            ...

        with Timer() as t:
            ...
        logger.debug("took %.2fms", t.elapsed_ms)
    """

    def __init__(self, metrics: TimingMetrics | None = None) -> None:
        self._metrics = metrics
        self._start_time: float = 0.0
        self._elapsed_ms: float = 0.0

    @property
    def elapsed_ms(self) -> float:
        return self._elapsed_ms

    def __enter__(self) -> Timer:
        self._start_time = time.perf_counter()
        return self

    def __exit__(self, *args) -> None:
        self._elapsed_ms = (time.perf_counter() - self._start_time) * 1000
        if self._metrics is not None:
            self._metrics.record(self._elapsed_ms)


class StageTimings:
    """Ordered set of TimingMetrics, one per pipeline stage.

    When disabled, stage() is a no-op so the detector can wrap every stage
    unconditionally.
    """

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled
        self._stages: Dict[str, TimingMetrics] = {}

    @contextmanager
    def stage(self, name: str) -> Iterator[None]:
        if not self.enabled:
            yield
            return

        metrics = self._stages.setdefault(name, TimingMetrics(name))
        with Timer(metrics):
            yield

    def stages(self) -> List[TimingMetrics]:
        """Stage metrics in first-run order"""
        return list(self._stages.values())

    @property
    def total_ms(self) -> float:
        return sum(m.total_ms for m in self._stages.values())

    def log_summary(self, logger: logging.Logger) -> None:
        """Log run count, total, average, min and max per stage, then the overall total."""
        if not self.enabled:
            return
        for metrics in self._stages.values():
            stats = metrics.to_dict()
            logger.debug(
                "Stage %s: %.2fms total, %d runs, avg %.2fms, min %.2fms, max %.2fms",
                stats['stage_name'], stats['total_ms'], stats['count'],
                stats['avg_ms'], stats['min_ms'], stats['max_ms'],
            )
        logger.debug("Detection finished in %.2fms", self.total_ms)
