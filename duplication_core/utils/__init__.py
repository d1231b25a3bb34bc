"""
Utility modules for the duplication_core package.

Provides timing utilities for per-stage debug metrics.
"""

from .timing import TimingMetrics, Timer, StageTimings

__all__ = ['TimingMetrics', 'Timer', 'StageTimings']
