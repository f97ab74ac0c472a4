from ghost_linter.domain.rules.ignore_directive import IgnoreDirectiveResolver
from ghost_linter.domain.syntax import Comment, CommentGroup, Position


def at(line: int, column: int = 0) -> Position:
    return Position("t.go", line, column)


def group(line: int, *texts: str) -> CommentGroup:
    return CommentGroup(tuple(Comment(text, at(line + i)) for i, text in enumerate(texts)))


def test_no_comments_never_ignores() -> None:
    resolver = IgnoreDirectiveResolver()
    assert resolver.is_ignored(at(10)) is False
    assert resolver.cursor == 0


def test_marker_in_preceding_group_ignores() -> None:
    resolver = IgnoreDirectiveResolver([group(1, "// ghost:ignore")])
    assert resolver.is_ignored(at(2)) is True
    assert resolver.cursor == 1


def test_marker_anywhere_in_text_matches() -> None:
    resolver = IgnoreDirectiveResolver([group(1, "// Legacy code,", "// ghost:ignore until rewritten")])
    assert resolver.is_ignored(at(3)) is True


def test_block_comment_marker() -> None:
    resolver = IgnoreDirectiveResolver([group(1, "/* ghost:ignore */")])
    assert resolver.is_ignored(at(2)) is True


def test_unrelated_comment_is_consumed_without_ignoring() -> None:
    resolver = IgnoreDirectiveResolver([group(1, "// just a note")])
    assert resolver.is_ignored(at(2)) is False
    assert resolver.cursor == 1


def test_group_after_statement_is_left_for_later() -> None:
    resolver = IgnoreDirectiveResolver([group(5, "// ghost:ignore")])
    assert resolver.is_ignored(at(2)) is False
    assert resolver.cursor == 0
    assert resolver.is_ignored(at(6)) is True


def test_consumed_group_is_never_seen_again() -> None:
    resolver = IgnoreDirectiveResolver([group(1, "// ghost:ignore")])
    assert resolver.is_ignored(at(2)) is True
    assert resolver.is_ignored(at(3)) is False


def test_all_preceding_groups_are_concatenated() -> None:
    resolver = IgnoreDirectiveResolver([group(1, "// one"), group(3, "// two"), group(9, "// three")])
    assert resolver.consume(at(5)) == "one\n\ntwo\n\n"
    assert resolver.cursor == 2


def test_same_line_comment_before_column_precedes() -> None:
    resolver = IgnoreDirectiveResolver([CommentGroup((Comment("/* ghost:ignore */", at(4, 1)),))])
    assert resolver.is_ignored(at(4, 20)) is True


def test_custom_marker() -> None:
    resolver = IgnoreDirectiveResolver([group(1, "// nolint")], marker="nolint")
    assert resolver.is_ignored(at(2)) is True
