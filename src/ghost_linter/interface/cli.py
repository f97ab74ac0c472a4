"""CLI entry point for ghost-linter - Thin Controller using Typer."""

from dataclasses import dataclass
from typing import List, Optional

import typer

from ghost_linter.domain.config import ConfigurationLoader, LinterConfig
from ghost_linter.domain.constants import EXIT_FAULT, EXIT_OK, EXIT_VIOLATIONS
from ghost_linter.domain.entities import RunResult
from ghost_linter.domain.errors import GhostLinterError, UnsupportedSyntaxKindError
from ghost_linter.domain.protocols import (
    FileSystemProtocol,
    SourceParserProtocol,
    TelemetryPort,
    ViolationSinkProtocol,
)
from ghost_linter.interface.telemetry import LoggingTelemetry
from ghost_linter.use_cases.check_line_complexity import CheckLineComplexityUseCase


@dataclass(frozen=True)
class CLIDependencies:
    """Explicit dependencies for the CLI. All dependencies injected at composition root."""

    config_loader: ConfigurationLoader
    telemetry: TelemetryPort
    filesystem: FileSystemProtocol
    parser: SourceParserProtocol
    sink: ViolationSinkProtocol


class CLIAppFactory:
    """Creates the Typer app."""

    @staticmethod
    def exit_code(result: RunResult, config: LinterConfig) -> int:
        """0 when clean or never_fail is set, 1 when violations were recorded."""
        if result.has_violations and not config.never_fail:
            return EXIT_VIOLATIONS
        return EXIT_OK

    @staticmethod
    def describe_error(error: GhostLinterError) -> str:
        if isinstance(error, UnsupportedSyntaxKindError) and error.position is not None:
            return f"{error.position.path}:{error.position.line}: {error}"
        return str(error)

    @staticmethod
    def create_app(deps: CLIDependencies) -> typer.Typer:
        """Create the Typer app with explicitly injected dependencies."""
        app = typer.Typer(
            name="ghost-linter",
            help="Report Go statements whose line complexity exceeds a threshold.",
            add_completion=False,
        )

        @app.command()
        def check(
            paths: Optional[List[str]] = typer.Argument(
                None, help="Go files or directories to check. Other files are skipped."
            ),
            max_line_complexity: Optional[int] = typer.Option(
                None,
                "-max-line-complexity",
                "--max-line-complexity",
                help="The maximum allowed line complexity. [default: 5]",
            ),
            ignore_tests: bool = typer.Option(
                False, "-ignore-tests", "--ignore-tests", help="Ignore test files."
            ),
            never_fail: bool = typer.Option(
                False, "-never-fail", "--never-fail", help="Always exit with 0."
            ),
            verbose: bool = typer.Option(
                False, "-v", "--verbose", help="Log progress to stderr."
            ),
        ) -> None:
            """Check line complexity of every top-level statement in each function."""
            LoggingTelemetry.configure(verbose)
            config = deps.config_loader.build(
                max_line_complexity=max_line_complexity,
                ignore_tests=True if ignore_tests else None,
                never_fail=True if never_fail else None,
            )
            use_case = CheckLineComplexityUseCase(
                parser=deps.parser,
                filesystem=deps.filesystem,
                telemetry=deps.telemetry,
                sink=deps.sink,
            )

            try:
                result = use_case.execute(list(paths or []), config)
            except GhostLinterError as exc:
                deps.telemetry.error(CLIAppFactory.describe_error(exc))
                raise typer.Exit(code=EXIT_FAULT) from exc
            except OSError as exc:
                deps.telemetry.error(f"{exc.filename}: {exc.strerror}")
                raise typer.Exit(code=EXIT_FAULT) from exc

            raise typer.Exit(code=CLIAppFactory.exit_code(result, config))

        return app


def create_app(deps: CLIDependencies) -> typer.Typer:
    """Create the Typer app (delegates to CLIAppFactory)."""
    return CLIAppFactory.create_app(deps)
