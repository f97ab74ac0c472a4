"""Package entry point - composition root. Wire dependencies and run the CLI app."""

from ghost_linter.infrastructure.di.container import GhostContainer
from ghost_linter.interface.cli import CLIDependencies, create_app


def main() -> None:
    """Entry point: wire dependencies at composition root, create app, run."""
    container = GhostContainer()

    deps = CLIDependencies(
        config_loader=container.get_config_loader(),
        telemetry=container.get_telemetry_port(),
        filesystem=container.get_filesystem_gateway(),
        parser=container.get_source_parser(),
        sink=container.get_violation_sink(),
    )

    app = create_app(deps)
    app()


if __name__ == "__main__":
    main()
