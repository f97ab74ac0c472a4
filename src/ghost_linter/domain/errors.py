"""Fatal errors raised while checking line complexity. Violations are not errors."""

from typing import Optional

from ghost_linter.domain.syntax import Position


class GhostLinterError(Exception):
    """Base class for faults that abort a run."""


class UnsupportedSyntaxKindError(GhostLinterError):
    """A statement or expression kind with no complexity rule was reached."""

    def __init__(self, kind: str, position: Optional[Position] = None) -> None:
        super().__init__(f"unsupported syntax kind: {kind}")
        self.kind = kind
        self.position = position
        """Position of the innermost statement that was being scored."""

    def attach_position(self, position: Position) -> None:
        """Record the offending statement's position unless a nested one already did."""
        if self.position is None:
            self.position = position


class MalformedSourceError(GhostLinterError):
    """The parser could not build a syntax tree for a file."""

    def __init__(self, path: str, line: int, detail: str = "syntax error") -> None:
        super().__init__(f"{path}:{line}: {detail}")
        self.path = path
        self.line = line
        self.detail = detail
