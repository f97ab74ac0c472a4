"""Ignore directive resolution: ``// ghost:ignore`` above a statement forces its score to 0."""

from collections.abc import Sequence

from ghost_linter.domain.constants import IGNORE_MARKER
from ghost_linter.domain.syntax import CommentGroup, Position


class IgnoreDirectiveResolver:
    """
    Monotonic cursor over one file's comment groups.

    Each lookup consumes every remaining group positioned before the
    statement, so a group is attributed to the first statement (in
    visitation order) that follows it and never to a later one. Statements
    must therefore be visited in source order.
    """

    def __init__(self, comments: Sequence[CommentGroup] = (), marker: str = IGNORE_MARKER) -> None:
        self._comments = tuple(comments)
        self._marker = marker
        self._cursor = 0

    @property
    def cursor(self) -> int:
        """Index of the next unconsumed comment group."""
        return self._cursor

    def consume(self, position: Position) -> str:
        """Return the text of unconsumed groups preceding ``position`` and advance past them."""
        text = ""
        while self._cursor < len(self._comments):
            group = self._comments[self._cursor]
            if not group.position.precedes(position):
                break
            text += group.text() + "\n"
            self._cursor += 1
        return text

    def is_ignored(self, position: Position) -> bool:
        """Consume comments up to ``position`` and report whether they carry the marker."""
        return self._marker in self.consume(position)
