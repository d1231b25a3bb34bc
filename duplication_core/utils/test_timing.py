"""
Tests for stage timing utilities.

Run with: python -m pytest duplication_core/utils/test_timing.py -v
"""

import logging

import pytest

from duplication_core.utils.timing import StageTimings, Timer, TimingMetrics


class TestTimingMetrics:
    """Tests for TimingMetrics."""

    def test_record(self):
        """Test recording updates totals and extremes."""
        metrics = TimingMetrics('extract')
        metrics.record(4.0)
        metrics.record(2.0)
        assert metrics.count == 2
        assert metrics.total_ms == 6.0
        assert metrics.min_ms == 2.0
        assert metrics.max_ms == 4.0
        assert metrics.avg_ms == 3.0

    def test_empty(self):
        """Test an unused metric reports zeros."""
        metrics = TimingMetrics('find')
        assert metrics.avg_ms == 0.0
        assert metrics.to_dict() == {
            'stage_name': 'find',
            'total_ms': 0.0,
            'count': 0,
            'avg_ms': 0.0,
            'min_ms': 0.0,
            'max_ms': 0.0,
        }


class TestTimer:
    """Tests for the Timer context manager."""

    def test_elapsed(self):
        """Test elapsed time is measured and recorded."""
        metrics = TimingMetrics('cluster')
        with Timer(metrics) as timer:
            sum(range(1000))
        assert timer.elapsed_ms >= 0.0
        assert metrics.count == 1
        assert metrics.total_ms == timer.elapsed_ms

    def test_without_metrics(self):
        """Test a standalone timer still measures."""
        with Timer() as timer:
            pass
        assert timer.elapsed_ms >= 0.0

    def test_records_on_exception(self):
        """Test the duration is recorded when the block raises."""
        metrics = TimingMetrics('impact')
        with pytest.raises(RuntimeError):
            with Timer(metrics):
                raise RuntimeError('boom')
        assert metrics.count == 1


class TestStageTimings:
    """Tests for per-stage timing."""

    def test_stage_order(self):
        """Test stages are kept in first-run order."""
        timings = StageTimings()
        for name in ('extract', 'find', 'extract'):
            with timings.stage(name):
                pass
        assert [m.stage_name for m in timings.stages()] == ['extract', 'find']
        assert timings.stages()[0].count == 2
        assert timings.total_ms == pytest.approx(sum(m.total_ms for m in timings.stages()))

    def test_disabled(self):
        """Test a disabled collector records nothing but still runs the block."""
        timings = StageTimings(enabled=False)
        ran = []
        with timings.stage('extract'):
            ran.append(True)
        assert ran == [True]
        assert timings.stages() == []
        assert timings.total_ms == 0

    def test_log_summary(self, caplog):
        """Test each stage's statistics and the total are logged at debug level."""
        logger = logging.getLogger('duplication_core.test')
        timings = StageTimings()
        for _ in range(2):
            with timings.stage('summary'):
                pass
        with caplog.at_level(logging.DEBUG, logger='duplication_core.test'):
            timings.log_summary(logger)
        assert 'Stage summary' in caplog.text
        assert '2 runs' in caplog.text
        assert 'avg' in caplog.text and 'min' in caplog.text and 'max' in caplog.text
        assert 'Detection finished' in caplog.text

    def test_log_summary_disabled(self, caplog):
        """Test nothing is logged when disabled."""
        logger = logging.getLogger('duplication_core.test')
        with caplog.at_level(logging.DEBUG, logger='duplication_core.test'):
            StageTimings(enabled=False).log_summary(logger)
        assert caplog.text == ''
