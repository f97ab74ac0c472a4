"""Configuration for the line-complexity linter."""

import logging
from dataclasses import dataclass, replace
from typing import Optional

from ghost_linter.domain.constants import DEFAULT_MAX_LINE_COMPLEXITY

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LinterConfig:
    """Effective settings for one run."""

    max_line_complexity: int = DEFAULT_MAX_LINE_COMPLEXITY
    ignore_tests: bool = False
    never_fail: bool = False


class ConfigurationLoader:
    """
    Builds a LinterConfig from the ``[tool.ghost]`` section of pyproject.toml.

    The section is read by the infrastructure loader and handed in as a dict;
    this class only validates values. Unknown keys and values of the wrong
    type are ignored with a warning.
    """

    _INT_KEYS: tuple[str, ...] = ("max_line_complexity",)
    _BOOL_KEYS: tuple[str, ...] = ("ignore_tests", "never_fail")

    def __init__(self, config_dict: Optional[dict[str, object]] = None) -> None:
        self._config: dict[str, object] = dict(config_dict or {})
        self.validate_config(self._config)

    def validate_config(self, config: dict[str, object]) -> None:
        """Warn about keys that will be ignored."""
        for key, value in config.items():
            if key in self._INT_KEYS:
                # bool is a subclass of int; `max_line_complexity = true` is a mistake
                if not isinstance(value, int) or isinstance(value, bool):
                    logger.warning(
                        "Configuration Warning: '%s' must be an integer, got %r. Using default.",
                        key,
                        value,
                    )
            elif key in self._BOOL_KEYS:
                if not isinstance(value, bool):
                    logger.warning(
                        "Configuration Warning: '%s' must be a boolean, got %r. Using default.",
                        key,
                        value,
                    )
            else:
                logger.warning("Configuration Warning: unknown key '%s' in [tool.ghost].", key)

    @property
    def max_line_complexity(self) -> int:
        value = self._config.get("max_line_complexity")
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        return DEFAULT_MAX_LINE_COMPLEXITY

    @property
    def ignore_tests(self) -> bool:
        value = self._config.get("ignore_tests")
        return value if isinstance(value, bool) else False

    @property
    def never_fail(self) -> bool:
        value = self._config.get("never_fail")
        return value if isinstance(value, bool) else False

    def build(
        self,
        max_line_complexity: Optional[int] = None,
        ignore_tests: Optional[bool] = None,
        never_fail: Optional[bool] = None,
    ) -> LinterConfig:
        """Return the effective config; explicit (CLI) values win over the file."""
        config = LinterConfig(
            max_line_complexity=self.max_line_complexity,
            ignore_tests=self.ignore_tests,
            never_fail=self.never_fail,
        )
        overrides: dict[str, object] = {}
        if max_line_complexity is not None:
            overrides["max_line_complexity"] = max_line_complexity
        if ignore_tests is not None:
            overrides["ignore_tests"] = ignore_tests
        if never_fail is not None:
            overrides["never_fail"] = never_fail
        return replace(config, **overrides)
