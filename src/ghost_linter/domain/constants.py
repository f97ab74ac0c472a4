"""Constants shared by the line-complexity rules, the driver and the CLI."""

IGNORE_MARKER: str = "ghost:ignore"

GO_SOURCE_SUFFIX: str = ".go"
GO_TEST_SUFFIX: str = "_test.go"

DEFAULT_MAX_LINE_COMPLEXITY: int = 5

# Complexity printed for a statement whose scoring faulted. Never compared
# against the threshold.
FAULT_SENTINEL_COMPLEXITY: int = -1

# Exit statuses
EXIT_OK: int = 0
EXIT_VIOLATIONS: int = 1
EXIT_FAULT: int = 2

CONFIG_SECTION: str = "ghost"
