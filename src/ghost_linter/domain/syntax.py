"""Syntax tree model for Go source consumed by the line-complexity rules.

Nodes are plain frozen dataclasses. The parser gateway builds them; the
domain rules only read them. Kinds the gateway cannot map to one of the
classes below become UnsupportedStmt / UnsupportedExpr so the evaluators
can surface them as UnsupportedSyntaxKindError.
"""

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class Position:
    """Source location of a node. Only path and line are ever reported."""

    path: str
    line: int
    column: int = 0

    def precedes(self, other: "Position") -> bool:
        return (self.line, self.column) < (other.line, other.column)


@dataclass(frozen=True)
class Comment:
    """A single raw comment, markers included (``// ...`` or ``/* ... */``)."""

    text: str
    position: Position


@dataclass(frozen=True)
class CommentGroup:
    """Adjacent comments with no tokens and at most one line break between them."""

    comments: tuple[Comment, ...]

    @property
    def position(self) -> Position:
        return self.comments[0].position

    def text(self) -> str:
        """
        Return the group's text without comment markers.

        Leading and trailing blank lines are dropped, runs of blank lines
        collapse into one, and a non-empty result ends with a newline.
        """
        lines: list[str] = []
        for comment in self.comments:
            raw = comment.text
            if raw.startswith("//"):
                raw = raw[2:]
                if raw.startswith(" "):
                    raw = raw[1:]
            elif raw.startswith("/*"):
                raw = raw[2:-2]
            lines.extend(line.rstrip() for line in raw.split("\n"))

        while lines and not lines[0]:
            lines.pop(0)
        while lines and not lines[-1]:
            lines.pop()

        collapsed: list[str] = []
        for line in lines:
            if not line and collapsed and not collapsed[-1]:
                continue
            collapsed.append(line)

        if not collapsed:
            return ""
        return "\n".join(collapsed) + "\n"


# ---------------------------------------------------------------------------
# Expressions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BasicLit:
    value: str
    position: Position


@dataclass(frozen=True)
class Ident:
    name: str
    position: Position


@dataclass(frozen=True)
class ArrayType:
    position: Position


@dataclass(frozen=True)
class MapType:
    position: Position


@dataclass(frozen=True)
class ChanType:
    position: Position


@dataclass(frozen=True)
class StructType:
    position: Position


@dataclass(frozen=True)
class InterfaceType:
    position: Position


@dataclass(frozen=True)
class SelectorExpr:
    """Member access ``x.sel``; ``x`` may itself be a selector chain."""

    x: "Expr"
    sel: str
    position: Position


@dataclass(frozen=True)
class UnaryExpr:
    op: str
    x: "Expr"
    position: Position


@dataclass(frozen=True)
class TypeAssertExpr:
    x: "Expr"
    type: Optional["Expr"]
    position: Position


@dataclass(frozen=True)
class StarExpr:
    """Pointer dereference or pointer type ``*x``."""

    x: "Expr"
    position: Position


@dataclass(frozen=True)
class CallExpr:
    fun: "Expr"
    args: tuple["Expr", ...]
    position: Position


@dataclass(frozen=True)
class BinaryExpr:
    x: "Expr"
    op: str
    y: "Expr"
    position: Position


@dataclass(frozen=True)
class CompositeLit:
    type: Optional["Expr"]
    elts: tuple["Expr", ...]
    position: Position


@dataclass(frozen=True)
class IndexExpr:
    x: "Expr"
    index: "Expr"
    position: Position


@dataclass(frozen=True)
class KeyValueExpr:
    key: "Expr"
    value: "Expr"
    position: Position


@dataclass(frozen=True)
class ParenExpr:
    x: "Expr"
    position: Position


@dataclass(frozen=True)
class FuncLit:
    body: tuple["Stmt", ...]
    position: Position


@dataclass(frozen=True)
class SliceExpr:
    x: "Expr"
    low: Optional["Expr"]
    high: Optional["Expr"]
    max: Optional["Expr"]
    position: Position


@dataclass(frozen=True)
class UnsupportedExpr:
    """Source expression with no complexity rule, e.g. a bare function type."""

    kind: str
    position: Position


Expr = Union[
    BasicLit,
    Ident,
    ArrayType,
    MapType,
    ChanType,
    StructType,
    InterfaceType,
    SelectorExpr,
    UnaryExpr,
    TypeAssertExpr,
    StarExpr,
    CallExpr,
    BinaryExpr,
    CompositeLit,
    IndexExpr,
    KeyValueExpr,
    ParenExpr,
    FuncLit,
    SliceExpr,
    UnsupportedExpr,
]


# ---------------------------------------------------------------------------
# Statements
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EmptyStmt:
    position: Position


@dataclass(frozen=True)
class LabeledStmt:
    label: str
    stmt: Optional["Stmt"]
    position: Position


@dataclass(frozen=True)
class SelectStmt:
    position: Position


@dataclass(frozen=True)
class IncDecStmt:
    x: Expr
    tok: str
    position: Position


@dataclass(frozen=True)
class BranchStmt:
    """``break``, ``continue``, ``goto`` or ``fallthrough``."""

    tok: str
    label: Optional[str]
    position: Position


@dataclass(frozen=True)
class AssignStmt:
    lhs: tuple[Expr, ...]
    tok: str
    rhs: tuple[Expr, ...]
    position: Position


@dataclass(frozen=True)
class ExprStmt:
    x: Expr
    position: Position


@dataclass(frozen=True)
class ReturnStmt:
    results: tuple[Expr, ...]
    position: Position


@dataclass(frozen=True)
class BlockStmt:
    stmts: tuple["Stmt", ...]
    position: Position


@dataclass(frozen=True)
class IfStmt:
    init: Optional["Stmt"]
    cond: Expr
    body: tuple["Stmt", ...]
    else_: Optional["Stmt"]
    position: Position


@dataclass(frozen=True)
class ForStmt:
    init: Optional["Stmt"]
    cond: Optional[Expr]
    post: Optional["Stmt"]
    body: tuple["Stmt", ...]
    position: Position


@dataclass(frozen=True)
class RangeStmt:
    key: Optional[Expr]
    value: Optional[Expr]
    x: Expr
    body: tuple["Stmt", ...]
    position: Position


@dataclass(frozen=True)
class CaseClause:
    """One ``case``/``default`` arm; ``values`` is empty for ``default``."""

    values: tuple[Expr, ...]
    body: tuple["Stmt", ...]
    position: Position


@dataclass(frozen=True)
class SwitchStmt:
    init: Optional["Stmt"]
    tag: Optional[Expr]
    body: tuple[CaseClause, ...]
    position: Position


@dataclass(frozen=True)
class TypeSwitchStmt:
    init: Optional["Stmt"]
    assign: Expr
    body: tuple[CaseClause, ...]
    position: Position


@dataclass(frozen=True)
class DeferStmt:
    call: CallExpr
    position: Position


@dataclass(frozen=True)
class GoStmt:
    call: CallExpr
    position: Position


@dataclass(frozen=True)
class SendStmt:
    chan: Expr
    value: Expr
    position: Position


@dataclass(frozen=True)
class TypeSpec:
    name: str
    position: Position


@dataclass(frozen=True)
class ValueSpec:
    names: tuple[str, ...]
    values: tuple[Expr, ...]
    position: Position


@dataclass(frozen=True)
class DeclStmt:
    """``var``, ``const`` or ``type`` declaration inside a function body."""

    specs: tuple[Union[TypeSpec, ValueSpec], ...]
    position: Position


@dataclass(frozen=True)
class UnsupportedStmt:
    kind: str
    position: Position


Stmt = Union[
    EmptyStmt,
    LabeledStmt,
    SelectStmt,
    IncDecStmt,
    BranchStmt,
    AssignStmt,
    ExprStmt,
    ReturnStmt,
    BlockStmt,
    IfStmt,
    ForStmt,
    RangeStmt,
    CaseClause,
    SwitchStmt,
    TypeSwitchStmt,
    DeferStmt,
    GoStmt,
    SendStmt,
    DeclStmt,
    UnsupportedStmt,
]


# ---------------------------------------------------------------------------
# Declarations and files
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FuncDecl:
    """Function or method declaration. ``body`` is None for external functions."""

    name: str
    body: Optional[tuple[Stmt, ...]]
    position: Position


@dataclass(frozen=True)
class SourceFile:
    path: str
    declarations: tuple[FuncDecl, ...] = ()
    comments: tuple[CommentGroup, ...] = ()
