"""Line complexity of a single expression."""

from collections.abc import Iterable
from typing import Any, Callable, Optional

from ghost_linter.domain.errors import UnsupportedSyntaxKindError
from ghost_linter.domain.syntax import (
    ArrayType,
    BasicLit,
    BinaryExpr,
    CallExpr,
    ChanType,
    CompositeLit,
    Expr,
    FuncLit,
    Ident,
    IndexExpr,
    InterfaceType,
    KeyValueExpr,
    MapType,
    ParenExpr,
    SelectorExpr,
    SliceExpr,
    StarExpr,
    Stmt,
    StructType,
    TypeAssertExpr,
    UnaryExpr,
)

LOGICAL_AND: str = "&&"
NIL: str = "nil"


def syntax_kind(node: object) -> str:
    """Name of a node's kind as used in UnsupportedSyntaxKindError."""
    kind = getattr(node, "kind", None)
    if isinstance(kind, str):
        return kind
    return type(node).__name__


class ExpressionComplexity:
    """
    Scores expressions.

    Values that are already observable in a debugger (literals, names,
    selector chains, type references) are free. Anything that produces a
    new intermediate value costs at least 1.

    ``visit_statement`` is called for every statement in a function
    literal's body so the caller's ignore cursor keeps moving in source
    order; its return value is discarded.
    """

    def __init__(self, visit_statement: Optional[Callable[[Stmt], int]] = None) -> None:
        self._visit_statement = visit_statement
        self._handlers: dict[type, Callable[[Any], int]] = {
            BasicLit: self._zero,
            Ident: self._zero,
            ArrayType: self._zero,
            MapType: self._zero,
            ChanType: self._zero,
            StructType: self._zero,
            InterfaceType: self._zero,
            SelectorExpr: self._selector,
            UnaryExpr: self._one,
            TypeAssertExpr: self._one,
            StarExpr: self._star,
            CallExpr: self._call,
            BinaryExpr: self._binary,
            CompositeLit: self._composite_literal,
            IndexExpr: self._index,
            KeyValueExpr: self._key_value,
            ParenExpr: self._paren,
            FuncLit: self._func_literal,
            SliceExpr: self._slice,
        }

    def score(self, expr: Optional[Expr]) -> int:
        """Return the complexity of ``expr``; an absent expression scores 0."""
        if expr is None:
            return 0
        handler = self._handlers.get(type(expr))
        if handler is None:
            raise UnsupportedSyntaxKindError(syntax_kind(expr))
        return handler(expr)

    def total(self, exprs: Iterable[Optional[Expr]]) -> int:
        """Sum of the complexities of ``exprs``."""
        return sum(self.score(expr) for expr in exprs)

    def list_complexity(self, exprs: Iterable[Expr]) -> int:
        """
        List Complexity Formula: ``1 + sum(max(c - 1, 0))``.

        A list of simple members costs 1 regardless of its length; members
        that are complex on their own still add to it. An empty list is 1.
        """
        total = 1
        for expr in exprs:
            total += max(self.score(expr) - 1, 0)
        return total

    def _zero(self, expr: Expr) -> int:
        return 0

    def _one(self, expr: Expr) -> int:
        return 1

    def _selector(self, expr: SelectorExpr) -> int:
        # Free at any chain depth.
        return 0

    def _star(self, expr: StarExpr) -> int:
        return self.score(expr.x)

    def _call(self, expr: CallExpr) -> int:
        return 1 + self.total(expr.args)

    def _binary(self, expr: BinaryExpr) -> int:
        left = self.score(expr.x)
        right = self.score(expr.y)

        # Nil guard `x != nil && x.Foo()`: only the guarded side counts.
        if expr.op == LOGICAL_AND and _is_nil_comparison(expr.x):
            return right

        # Call bonus goes to at most one side, left first.
        if isinstance(expr.x, CallExpr):
            left += 1
        elif isinstance(expr.y, CallExpr):
            right += 1

        return max(left + right, 1)

    def _composite_literal(self, expr: CompositeLit) -> int:
        return self.list_complexity(expr.elts)

    def _index(self, expr: IndexExpr) -> int:
        return 1 + self.score(expr.index)

    def _key_value(self, expr: KeyValueExpr) -> int:
        return self.score(expr.value)

    def _paren(self, expr: ParenExpr) -> int:
        return self.score(expr.x)

    def _func_literal(self, expr: FuncLit) -> int:
        if self._visit_statement is not None:
            for stmt in expr.body:
                self._visit_statement(stmt)
        return 1

    def _slice(self, expr: SliceExpr) -> int:
        return 1 + self.total((expr.low, expr.high, expr.max))


def _is_nil_comparison(expr: Expr) -> bool:
    return (
        isinstance(expr, BinaryExpr)
        and isinstance(expr.y, Ident)
        and expr.y.name == NIL
    )

