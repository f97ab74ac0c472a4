"""Terminal reporter implementation - plain text, one line per violation."""

import sys
from typing import Optional, TextIO

from ghost_linter.domain.entities import ViolationRecord
from ghost_linter.domain.protocols import ViolationSinkProtocol


class TerminalViolationReporter(ViolationSinkProtocol):
    """
    Writes violations to stdout and fault sentinels to stderr.

    Streams default to the process streams at the time of writing, so
    redirection set up after construction (e.g. by a test runner) applies.
    """

    def __init__(self, out: Optional[TextIO] = None, err: Optional[TextIO] = None) -> None:
        self._out = out
        self._err = err

    def emit(self, record: ViolationRecord) -> None:
        print(record.format(), file=self._out or sys.stdout)

    def emit_fault(self, record: ViolationRecord) -> None:
        print(record.format(), file=self._err or sys.stderr)


class CollectingViolationReporter(ViolationSinkProtocol):
    """Keeps emitted records in memory; used for programmatic runs."""

    def __init__(self) -> None:
        self.records: list[ViolationRecord] = []
        self.faults: list[ViolationRecord] = []

    def emit(self, record: ViolationRecord) -> None:
        self.records.append(record)

    def emit_fault(self, record: ViolationRecord) -> None:
        self.faults.append(record)
