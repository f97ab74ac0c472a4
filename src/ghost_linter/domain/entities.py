from dataclasses import dataclass

from ghost_linter.domain.constants import FAULT_SENTINEL_COMPLEXITY


@dataclass(frozen=True)
class ViolationRecord:
    """A statement whose complexity exceeded the threshold (or a fault sentinel)."""

    path: str
    line: int
    complexity: int
    function_name: str = ""

    @property
    def is_fault(self) -> bool:
        return self.complexity == FAULT_SENTINEL_COMPLEXITY

    def format(self) -> str:
        """Render as ``<path>:<line>: complexity is <n> (in <function>)``."""
        return (
            f"{self.path}:{self.line}: complexity is {self.complexity} "
            f"(in {self.function_name})"
        )


@dataclass(frozen=True)
class FileReport:
    """Violations found in one file, in visitation order."""

    path: str
    violations: tuple[ViolationRecord, ...] = ()
    functions_checked: int = 0


@dataclass(frozen=True)
class RunResult:
    """Outcome of checking a list of paths."""

    files: tuple[FileReport, ...] = ()
    has_violations: bool = False

    @property
    def violations(self) -> list[ViolationRecord]:
        return [v for report in self.files for v in report.violations]
