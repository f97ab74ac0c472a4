"""Use Case: Violation Reporter - compare scores with the threshold and record violations."""

from typing import Optional

from ghost_linter.domain.constants import FAULT_SENTINEL_COMPLEXITY
from ghost_linter.domain.entities import ViolationRecord
from ghost_linter.domain.protocols import ViolationSinkProtocol
from ghost_linter.domain.syntax import Position


class ViolationReporter:
    """
    Turns scores into violation records.

    Records are append-only and never deduplicated. ``has_violations`` is
    sticky for the life of the reporter; only starting a new run resets it.
    """

    def __init__(self, threshold: int, sink: Optional[ViolationSinkProtocol] = None) -> None:
        self.threshold = threshold
        self.sink = sink
        self._records: list[ViolationRecord] = []
        self._has_violations = False

    @property
    def has_violations(self) -> bool:
        return self._has_violations

    @property
    def records(self) -> tuple[ViolationRecord, ...]:
        return tuple(self._records)

    def report(self, complexity: int, position: Position, function_name: str = "") -> Optional[ViolationRecord]:
        """Record a violation if ``complexity`` exceeds the threshold; return it, else None."""
        if complexity <= self.threshold:
            return None

        record = ViolationRecord(
            path=position.path,
            line=position.line,
            complexity=complexity,
            function_name=function_name,
        )
        self._records.append(record)
        self._has_violations = True
        if self.sink is not None:
            self.sink.emit(record)
        return record

    def report_fault(self, position: Position, function_name: str = "") -> ViolationRecord:
        """Emit the sentinel record for a statement whose scoring faulted."""
        record = ViolationRecord(
            path=position.path,
            line=position.line,
            complexity=FAULT_SENTINEL_COMPLEXITY,
            function_name=function_name,
        )
        self._has_violations = True
        if self.sink is not None:
            self.sink.emit_fault(record)
        return record
