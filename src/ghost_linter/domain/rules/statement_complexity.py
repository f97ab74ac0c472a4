"""Line complexity of a single statement."""

from collections.abc import Iterable
from typing import Any, Callable, Optional

from ghost_linter.domain.errors import UnsupportedSyntaxKindError
from ghost_linter.domain.rules.expression_complexity import ExpressionComplexity, syntax_kind
from ghost_linter.domain.rules.ignore_directive import IgnoreDirectiveResolver
from ghost_linter.domain.syntax import (
    AssignStmt,
    BlockStmt,
    BranchStmt,
    CaseClause,
    DeclStmt,
    DeferStmt,
    EmptyStmt,
    ExprStmt,
    ForStmt,
    GoStmt,
    IfStmt,
    IncDecStmt,
    LabeledStmt,
    RangeStmt,
    ReturnStmt,
    SelectStmt,
    SendStmt,
    Stmt,
    SwitchStmt,
    TypeSpec,
    TypeSwitchStmt,
    ValueSpec,
)


class StatementComplexity:
    """
    Scores one statement of a function body.

    The ignore directive resolver is consulted before anything else; an
    ignored statement scores 0 and none of its nested bodies are visited.

    Nested bodies (if, for, switch, case, function literals) are visited
    only to keep the resolver's cursor in step with source order. Their
    scores are discarded: only the statement handed to ``evaluate`` by the
    driver is ever compared with the threshold.
    """

    def __init__(self, resolver: Optional[IgnoreDirectiveResolver] = None) -> None:
        self._resolver = resolver if resolver is not None else IgnoreDirectiveResolver()
        self.expressions = ExpressionComplexity(visit_statement=self.evaluate)
        self._handlers: dict[type, Callable[[Any], int]] = {
            EmptyStmt: self._zero,
            LabeledStmt: self._zero,
            SelectStmt: self._zero,
            IncDecStmt: self._one,
            BranchStmt: self._one,
            AssignStmt: self._assign,
            ExprStmt: self._expr,
            ReturnStmt: self._return,
            BlockStmt: self._block,
            IfStmt: self._if,
            ForStmt: self._for,
            SwitchStmt: self._switch,
            TypeSwitchStmt: self._type_switch,
            DeferStmt: self._defer,
            GoStmt: self._go,
            RangeStmt: self._range,
            DeclStmt: self._decl,
            CaseClause: self._case_clause,
            SendStmt: self._send,
        }

    def evaluate(self, stmt: Optional[Stmt]) -> int:
        """
        Return the complexity of ``stmt``.

        An absent statement (e.g. a ``for`` loop without init) scores 0 and
        consumes no comments.

        Raises:
            UnsupportedSyntaxKindError: a statement or expression kind has
                no rule. The innermost statement being scored records its
                position on the error before it propagates.
        """
        if stmt is None:
            return 0

        if self._resolver.is_ignored(stmt.position):
            return 0

        try:
            handler = self._handlers.get(type(stmt))
            if handler is None:
                raise UnsupportedSyntaxKindError(syntax_kind(stmt))
            return handler(stmt)
        except UnsupportedSyntaxKindError as error:
            error.attach_position(stmt.position)
            raise

    def _visit(self, stmts: Iterable[Stmt]) -> None:
        for stmt in stmts:
            self.evaluate(stmt)

    def _zero(self, stmt: Stmt) -> int:
        return 0

    def _one(self, stmt: Stmt) -> int:
        return 1

    def _assign(self, stmt: AssignStmt) -> int:
        return self.expressions.total(stmt.rhs)

    def _expr(self, stmt: ExprStmt) -> int:
        return self.expressions.score(stmt.x)

    def _return(self, stmt: ReturnStmt) -> int:
        if not stmt.results:
            return 0
        return self.expressions.list_complexity(stmt.results)

    def _block(self, stmt: BlockStmt) -> int:
        self._visit(stmt.stmts)
        return 0

    def _if(self, stmt: IfStmt) -> int:
        self._visit(stmt.body)
        return self.expressions.score(stmt.cond)

    def _for(self, stmt: ForStmt) -> int:
        self._visit(stmt.body)

        # Max of the clauses, not their sum; the condition gets no flat bonus.
        init = self.evaluate(stmt.init)
        cond = self.expressions.score(stmt.cond)
        post = self.evaluate(stmt.post)
        return max(init, cond, post)

    def _switch(self, stmt: SwitchStmt) -> int:
        if stmt.tag is None:
            return 0
        self._visit(stmt.body)
        return 1 + self.expressions.score(stmt.tag)

    def _type_switch(self, stmt: TypeSwitchStmt) -> int:
        self._visit(stmt.body)
        return 1

    def _defer(self, stmt: DeferStmt) -> int:
        return self.expressions.score(stmt.call.fun)

    def _go(self, stmt: GoStmt) -> int:
        return self.expressions.score(stmt.call.fun)

    def _range(self, stmt: RangeStmt) -> int:
        return self.expressions.score(stmt.x)

    def _send(self, stmt: SendStmt) -> int:
        return self.expressions.score(stmt.value)

    def _decl(self, stmt: DeclStmt) -> int:
        total = 0
        for spec in stmt.specs:
            if isinstance(spec, TypeSpec):
                continue
            if isinstance(spec, ValueSpec):
                total += self.expressions.total(spec.values)
            else:
                raise UnsupportedSyntaxKindError(syntax_kind(spec))
        return total

    def _case_clause(self, stmt: CaseClause) -> int:
        self._visit(stmt.body)
        return self.expressions.list_complexity(stmt.values)
