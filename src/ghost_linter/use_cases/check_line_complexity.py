"""Use Case: Check Line Complexity - score every top-level statement of every function."""

from dataclasses import dataclass
from typing import Optional

from ghost_linter.domain.config import LinterConfig
from ghost_linter.domain.entities import FileReport, RunResult
from ghost_linter.domain.errors import UnsupportedSyntaxKindError
from ghost_linter.domain.protocols import (
    FileSystemProtocol,
    SourceParserProtocol,
    TelemetryPort,
    ViolationSinkProtocol,
)
from ghost_linter.domain.rules import IgnoreDirectiveResolver, StatementComplexity
from ghost_linter.domain.syntax import FuncDecl, SourceFile, Stmt
from ghost_linter.use_cases.violation_reporter import ViolationReporter


@dataclass
class TraversalContext:
    """Mutable state owned by the traversal of a single file."""

    path: str
    statements: StatementComplexity
    function_name: str = ""

    @classmethod
    def for_file(cls, source_file: SourceFile) -> "TraversalContext":
        resolver = IgnoreDirectiveResolver(source_file.comments)
        return cls(path=source_file.path, statements=StatementComplexity(resolver))


class CheckLineComplexityUseCase:
    """Orchestrate file selection, parsing and per-statement scoring."""

    def __init__(
        self,
        parser: SourceParserProtocol,
        filesystem: FileSystemProtocol,
        telemetry: TelemetryPort,
        sink: Optional[ViolationSinkProtocol] = None,
    ) -> None:
        self.parser = parser
        self.filesystem = filesystem
        self.telemetry = telemetry
        self.sink = sink

    def execute(self, paths: list[str], config: LinterConfig) -> RunResult:
        """
        Check ``paths`` in the order given.

        Args:
            paths: Files or directories. Non-Go files are skipped silently.
            config: Threshold and file selection settings.

        Returns:
            RunResult with one FileReport per checked file, in input order.

        Raises:
            UnsupportedSyntaxKindError: after the fault's sentinel record was emitted.
            MalformedSourceError: a file could not be parsed.
        """
        reporter = ViolationReporter(config.max_line_complexity, self.sink)
        files = self.filesystem.select_go_files(paths, ignore_tests=config.ignore_tests)
        self.telemetry.step(
            f"Checking {len(files)} file(s) with max line complexity {config.max_line_complexity}"
        )

        reports = [self.check_file(path, reporter) for path in files]
        return RunResult(files=tuple(reports), has_violations=reporter.has_violations)

    def check_file(self, path: str, reporter: ViolationReporter) -> FileReport:
        """Parse and check one file."""
        self.telemetry.step(f"Checking {path}")
        source_file = self.parser.parse(path, self.filesystem.read_bytes(path))
        return self.check_source(source_file, reporter)

    def check_source(self, source_file: SourceFile, reporter: ViolationReporter) -> FileReport:
        """Check an already parsed file with a fresh traversal context."""
        context = TraversalContext.for_file(source_file)
        first_record = len(reporter.records)
        functions_checked = 0

        for decl in source_file.declarations:
            if self._check_function(decl, context, reporter):
                functions_checked += 1

        return FileReport(
            path=source_file.path,
            violations=reporter.records[first_record:],
            functions_checked=functions_checked,
        )

    def _check_function(self, decl: FuncDecl, context: TraversalContext, reporter: ViolationReporter) -> bool:
        context.function_name = decl.name

        # Body is None for functions implemented outside Go.
        if decl.body is None:
            return False

        for stmt in decl.body:
            self._check_statement(stmt, context, reporter)
        return True

    def _check_statement(self, stmt: Stmt, context: TraversalContext, reporter: ViolationReporter) -> None:
        try:
            complexity = context.statements.evaluate(stmt)
        except UnsupportedSyntaxKindError as error:
            position = error.position if error.position is not None else stmt.position
            reporter.report_fault(position, context.function_name)
            raise

        reporter.report(complexity, stmt.position, context.function_name)
