from typing import TYPE_CHECKING, Any, cast

from ghost_linter.domain.config import ConfigurationLoader
from ghost_linter.infrastructure.config_file_loader import ConfigFileLoader
from ghost_linter.infrastructure.gateways.filesystem_gateway import FileSystemGateway
from ghost_linter.infrastructure.reporters import TerminalViolationReporter
from ghost_linter.interface.telemetry import LoggingTelemetry

if TYPE_CHECKING:
    from ghost_linter.domain.protocols import (
        FileSystemProtocol,
        SourceParserProtocol,
        TelemetryPort,
        ViolationSinkProtocol,
    )


class GhostContainer:
    """Dependency Injection Container for the line-complexity linter."""

    def __init__(self) -> None:
        self._singletons: dict[str, Any] = {}
        self._register_defaults()

    def _register_defaults(self) -> None:
        """Register default implementations for protocols."""
        config_loader = ConfigurationLoader(ConfigFileLoader.load_config_from_fs())
        self.register_singleton("ConfigurationLoader", config_loader)
        self.register_singleton("TelemetryPort", LoggingTelemetry())
        self.register_singleton("FileSystemGateway", FileSystemGateway())
        self.register_singleton("ViolationSink", TerminalViolationReporter())

    def register_singleton(self, key: str, instance: Any) -> None:
        """Register a singleton instance."""
        self._singletons[key] = instance

    def get(self, key: str) -> Any:
        """Retrieve a dependency by key. Prefer explicit get_* methods for type safety."""
        if key in self._singletons:
            return self._singletons[key]
        raise ValueError(f"Dependency '{key}' not registered.")

    def get_config_loader(self) -> ConfigurationLoader:
        """Return the configuration loader (created at composition root)."""
        return cast(ConfigurationLoader, self.get("ConfigurationLoader"))

    def get_telemetry_port(self) -> "TelemetryPort":
        """Return the telemetry port."""
        return cast("TelemetryPort", self.get("TelemetryPort"))

    def get_filesystem_gateway(self) -> "FileSystemProtocol":
        """Return the filesystem gateway."""
        return cast("FileSystemProtocol", self.get("FileSystemGateway"))

    def get_source_parser(self) -> "SourceParserProtocol":
        """Return the Go parser, loading the tree-sitter grammar on first use."""
        if "SourceParser" not in self._singletons:
            from ghost_linter.infrastructure.gateways.tree_sitter_gateway import TreeSitterGoGateway

            self.register_singleton("SourceParser", TreeSitterGoGateway())
        return cast("SourceParserProtocol", self.get("SourceParser"))

    def get_violation_sink(self) -> "ViolationSinkProtocol":
        """Return the violation output sink."""
        return cast("ViolationSinkProtocol", self.get("ViolationSink"))
