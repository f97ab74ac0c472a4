"""Run the CLI against real Go files with the production gateways."""

import logging
from pathlib import Path

import pytest
from typer.testing import CliRunner

from ghost_linter.domain.config import ConfigurationLoader
from ghost_linter.infrastructure.gateways.filesystem_gateway import FileSystemGateway
from ghost_linter.infrastructure.reporters import TerminalViolationReporter
from ghost_linter.interface.cli import CLIDependencies, create_app
from ghost_linter.interface.telemetry import HANDLER_NAME, LoggingTelemetry

runner = CliRunner()

COMPLEX = """package main

func main() {
\tx = a() + b() + c()
}
"""

IGNORED = """package main

func main() {
\t// ghost:ignore
\tx = a() + b() + c()
\ty = a() + b() + c()
}
"""

NESTED = """package main

func main() {
\tif ok {
\t\tx = a(b(c(d(e(f())))))
\t}
}
"""

UNSUPPORTED = """package main

func main() {
\tok := true
\tx := new(func())
}
"""


@pytest.fixture(autouse=True)
def _detach_log_handler():
    yield
    logger = logging.getLogger("ghost_linter")
    for handler in list(logger.handlers):
        if handler.get_name() == HANDLER_NAME:
            logger.removeHandler(handler)


@pytest.fixture
def app(go_parser):
    deps = CLIDependencies(
        config_loader=ConfigurationLoader(),
        telemetry=LoggingTelemetry(),
        filesystem=FileSystemGateway(),
        parser=go_parser,
        sink=TerminalViolationReporter(),
    )
    return create_app(deps)


def _write(path: Path, source: str) -> str:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(source)
    return str(path)


def test_sum_of_calls_is_reported_above_threshold(app, tmp_path: Path) -> None:
    path = _write(tmp_path / "main.go", COMPLEX)

    result = runner.invoke(app, ["-max-line-complexity", "4", path])

    assert result.exit_code == 1
    assert result.stdout == f"{path}:4: complexity is 5 (in main)\n"


def test_default_threshold_allows_five(app, tmp_path: Path) -> None:
    path = _write(tmp_path / "main.go", COMPLEX)

    result = runner.invoke(app, [path])

    assert result.exit_code == 0
    assert result.stdout == ""


def test_never_fail_still_prints(app, tmp_path: Path) -> None:
    path = _write(tmp_path / "main.go", COMPLEX)

    result = runner.invoke(app, ["-never-fail", "-max-line-complexity", "4", path])

    assert result.exit_code == 0
    assert "complexity is 5 (in main)" in result.stdout


def test_ignore_directive_covers_only_next_statement(app, tmp_path: Path) -> None:
    path = _write(tmp_path / "main.go", IGNORED)

    result = runner.invoke(app, ["--max-line-complexity", "4", path])

    assert result.exit_code == 1
    assert result.stdout == f"{path}:6: complexity is 5 (in main)\n"


def test_nested_statements_are_not_reported(app, tmp_path: Path) -> None:
    path = _write(tmp_path / "main.go", NESTED)

    result = runner.invoke(app, ["-max-line-complexity", "0", path])

    assert result.exit_code == 0
    assert result.stdout == ""


def test_non_go_and_test_files(app, tmp_path: Path) -> None:
    _write(tmp_path / "notes.txt", "not go")
    test_file = _write(tmp_path / "main_test.go", COMPLEX)

    result = runner.invoke(app, ["-ignore-tests", "-max-line-complexity", "4", str(tmp_path)])
    assert result.exit_code == 0

    result = runner.invoke(app, ["-max-line-complexity", "4", str(tmp_path / "notes.txt"), test_file])
    assert result.exit_code == 1
    assert result.stdout.startswith(f"{test_file}:4:")


def test_files_are_reported_in_argument_order(app, tmp_path: Path) -> None:
    second = _write(tmp_path / "b.go", COMPLEX)
    first = _write(tmp_path / "a.go", COMPLEX)

    result = runner.invoke(app, ["-max-line-complexity", "4", second, first])

    assert [line.split(":")[0] for line in result.stdout.splitlines()] == [second, first]


def test_unsupported_syntax_emits_sentinel_and_aborts(app, tmp_path: Path) -> None:
    path = _write(tmp_path / "main.go", UNSUPPORTED)

    result = runner.invoke(app, [path])

    assert result.exit_code == 2
    assert f"{path}:5: complexity is -1 (in main)" in result.output
    assert "unsupported syntax kind: function_type" in result.output


def test_malformed_source_aborts(app, tmp_path: Path) -> None:
    path = _write(tmp_path / "main.go", "package main\n\nfunc main() {\n")

    result = runner.invoke(app, [path])

    assert result.exit_code == 2
    assert "syntax error" in result.output
