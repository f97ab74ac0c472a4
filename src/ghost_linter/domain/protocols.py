from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ghost_linter.domain.entities import ViolationRecord
    from ghost_linter.domain.syntax import SourceFile


class SourceParserProtocol(Protocol):
    """Protocol for turning Go source into the domain syntax tree."""

    def parse(self, path: str, source: bytes) -> "SourceFile":
        """Parse source bytes. Raises MalformedSourceError on syntax errors."""
        ...


class FileSystemProtocol(Protocol):
    """Protocol for filesystem operations needed by the driver."""

    def select_go_files(self, paths: list[str], ignore_tests: bool = False) -> list[str]:
        """Return Go source files to check, in the order given (directories expanded)."""
        ...

    def read_bytes(self, path: str) -> bytes:
        """Read a file's raw contents."""
        ...


class ViolationSinkProtocol(Protocol):
    """Protocol for emitting violation records as they are produced."""

    def emit(self, record: "ViolationRecord") -> None:
        """Emit a threshold violation."""
        ...

    def emit_fault(self, record: "ViolationRecord") -> None:
        """Emit a fault sentinel record on the diagnostic channel."""
        ...


class TelemetryPort(Protocol):
    """Protocol for progress and diagnostic messages."""

    def step(self, message: str) -> None: ...
    def error(self, message: str) -> None: ...
