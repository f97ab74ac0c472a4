"""Load [tool.ghost] from pyproject.toml. Infrastructure I/O only."""

import logging
import sys
from pathlib import Path
from typing import Optional

from ghost_linter.domain.constants import CONFIG_SECTION

if sys.version_info >= (3, 11):
    import tomllib as toml_lib
else:
    import tomli as toml_lib

logger = logging.getLogger(__name__)


class ConfigFileLoader:
    """Loads config from the nearest pyproject.toml."""

    @staticmethod
    def find_config_file(start: Optional[Path] = None) -> Optional[Path]:
        """Return the first pyproject.toml found walking up from ``start`` (default: cwd)."""
        current_path = (start or Path.cwd()).resolve()
        for directory in (current_path, *current_path.parents):
            config_file = directory / "pyproject.toml"
            if config_file.is_file():
                return config_file
        return None

    @staticmethod
    def load_config_from_fs(start: Optional[Path] = None) -> dict[str, object]:
        """Return the [tool.ghost] section, or an empty dict when absent or unreadable."""
        config_file = ConfigFileLoader.find_config_file(start)
        if config_file is None:
            return {}
        try:
            with config_file.open("rb") as f:
                data = toml_lib.load(f)
        except (OSError, toml_lib.TOMLDecodeError) as exc:
            logger.warning("Could not read %s: %s", config_file, exc)
            return {}

        tool_section = data.get("tool", {}) or {}
        section = tool_section.get(CONFIG_SECTION, {}) or {}
        if not isinstance(section, dict):
            logger.warning("Ignoring [tool.%s] in %s: not a table", CONFIG_SECTION, config_file)
            return {}
        logger.debug("Loaded [tool.%s] from %s", CONFIG_SECTION, config_file)
        return dict(section)
