"""Unit tests for ViolationReporter."""

from unittest.mock import MagicMock

from ghost_linter.domain.entities import ViolationRecord
from ghost_linter.domain.syntax import Position
from ghost_linter.use_cases.violation_reporter import ViolationReporter

POSITION = Position("pkg/main.go", 12, 4)


def test_score_at_threshold_is_not_reported() -> None:
    sink = MagicMock()
    reporter = ViolationReporter(5, sink)

    assert reporter.report(5, POSITION, "main") is None
    assert reporter.has_violations is False
    assert reporter.records == ()
    sink.emit.assert_not_called()


def test_score_above_threshold_is_reported() -> None:
    sink = MagicMock()
    reporter = ViolationReporter(5, sink)

    record = reporter.report(6, POSITION, "main")

    assert record == ViolationRecord("pkg/main.go", 12, 6, "main")
    assert reporter.has_violations is True
    assert reporter.records == (record,)
    sink.emit.assert_called_once_with(record)


def test_zero_threshold_reports_any_cost() -> None:
    reporter = ViolationReporter(0)
    assert reporter.report(0, POSITION) is None
    assert reporter.report(1, POSITION) is not None


def test_flag_is_sticky_and_records_are_not_deduplicated() -> None:
    reporter = ViolationReporter(1)
    reporter.report(3, POSITION)
    reporter.report(0, POSITION)
    reporter.report(3, POSITION)

    assert reporter.has_violations is True
    assert len(reporter.records) == 2


def test_fault_emits_sentinel_without_recording() -> None:
    sink = MagicMock()
    reporter = ViolationReporter(5, sink)

    record = reporter.report_fault(POSITION, "main")

    assert record.complexity == -1
    assert record.is_fault
    assert reporter.has_violations is True
    assert reporter.records == ()
    sink.emit_fault.assert_called_once_with(record)
    sink.emit.assert_not_called()


def test_record_format() -> None:
    record = ViolationRecord("pkg/main.go", 12, 7, "Run")
    assert record.format() == "pkg/main.go:12: complexity is 7 (in Run)"
    assert not record.is_fault
