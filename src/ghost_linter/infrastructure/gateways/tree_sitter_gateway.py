"""
Tree-sitter Gateway - parse Go source into the domain syntax tree.

Implements SourceParserProtocol. tree-sitter's Go grammar is converted
node by node into ghost_linter.domain.syntax dataclasses. Grammar nodes
with no domain counterpart become UnsupportedStmt / UnsupportedExpr
carrying the tree-sitter node type, so the rules can report them.
"""

import logging
from collections.abc import Iterable, Iterator
from typing import Callable, Optional

from tree_sitter import Node, Parser
from tree_sitter_language_pack import get_language

from ghost_linter.domain.errors import MalformedSourceError
from ghost_linter.domain.protocols import SourceParserProtocol
from ghost_linter.domain.syntax import (
    ArrayType,
    AssignStmt,
    BasicLit,
    BinaryExpr,
    BlockStmt,
    BranchStmt,
    CallExpr,
    CaseClause,
    ChanType,
    Comment,
    CommentGroup,
    CompositeLit,
    DeclStmt,
    DeferStmt,
    EmptyStmt,
    Expr,
    ExprStmt,
    ForStmt,
    FuncDecl,
    FuncLit,
    GoStmt,
    Ident,
    IfStmt,
    IncDecStmt,
    IndexExpr,
    InterfaceType,
    KeyValueExpr,
    LabeledStmt,
    MapType,
    ParenExpr,
    Position,
    RangeStmt,
    ReturnStmt,
    SelectorExpr,
    SelectStmt,
    SendStmt,
    SliceExpr,
    SourceFile,
    StarExpr,
    Stmt,
    StructType,
    SwitchStmt,
    TypeAssertExpr,
    TypeSpec,
    TypeSwitchStmt,
    UnaryExpr,
    UnsupportedExpr,
    UnsupportedStmt,
    ValueSpec,
)

logger = logging.getLogger(__name__)

GO_LANGUAGE: str = "go"

_LITERAL_TYPES = frozenset(
    {
        "int_literal",
        "float_literal",
        "imaginary_literal",
        "rune_literal",
        "interpreted_string_literal",
        "raw_string_literal",
    }
)
_IDENTIFIER_TYPES = frozenset(
    {
        "identifier",
        "field_identifier",
        "package_identifier",
        "type_identifier",
        "label_name",
        "blank_identifier",
        "nil",
        "true",
        "false",
        "iota",
    }
)
_ARRAY_TYPES = frozenset({"slice_type", "array_type", "implicit_length_array_type"})
_FUNCTION_DECLARATIONS = frozenset({"function_declaration", "method_declaration"})
_VALUE_SPECS = frozenset({"var_spec", "const_spec"})
_TYPE_SPECS = frozenset({"type_spec", "type_alias"})
_CASE_TYPES = frozenset({"expression_case", "type_case", "default_case"})
_BRANCH_TYPES = frozenset(
    {"break_statement", "continue_statement", "goto_statement", "fallthrough_statement"}
)


def _named(node: Optional[Node]) -> list[Node]:
    """Named children without comments."""
    if node is None:
        return []
    return [child for child in node.named_children if child.type != "comment"]


class TreeSitterGoGateway(SourceParserProtocol):
    """Parses Go files with tree-sitter (grammar from tree-sitter-language-pack)."""

    def __init__(self) -> None:
        self._parser = Parser(get_language(GO_LANGUAGE))
        logger.debug("Loaded %s parser", GO_LANGUAGE)

    def parse(self, path: str, source: bytes) -> SourceFile:
        """
        Parse Go source into a SourceFile.

        Raises:
            MalformedSourceError: the source has syntax errors.
        """
        tree = self._parser.parse(source)
        root = tree.root_node
        if root.has_error:
            error_node = self._first_error(root)
            line = error_node.start_point[0] + 1 if error_node is not None else 1
            raise MalformedSourceError(path, line)
        return GoSyntaxBuilder(path, source).source_file(root)

    @staticmethod
    def _first_error(root: Node) -> Optional[Node]:
        stack = [root]
        while stack:
            node = stack.pop()
            if node.type == "ERROR" or node.is_missing:
                return node
            stack.extend(reversed(node.children))
        return None


class GoSyntaxBuilder:
    """Converts one tree-sitter Go tree into domain nodes."""

    def __init__(self, path: str, source: bytes) -> None:
        self.path = path
        self.source = source
        self._statements: dict[str, Callable[[Node], Stmt]] = {
            "expression_statement": self._expression_statement,
            "send_statement": self._send_statement,
            "inc_statement": self._inc_dec_statement,
            "dec_statement": self._inc_dec_statement,
            "assignment_statement": self._assignment_statement,
            "short_var_declaration": self._assignment_statement,
            "var_declaration": self._declaration,
            "const_declaration": self._declaration,
            "type_declaration": self._declaration,
            "labeled_statement": self._labeled_statement,
            "empty_statement": self._empty_statement,
            "return_statement": self._return_statement,
            "go_statement": self._go_statement,
            "defer_statement": self._defer_statement,
            "if_statement": self._if_statement,
            "block": self._block_statement,
            "for_statement": self._for_statement,
            "expression_switch_statement": self._switch_statement,
            "type_switch_statement": self._type_switch_statement,
            "select_statement": self._select_statement,
            "expression_case": self._case_clause,
            "type_case": self._case_clause,
            "default_case": self._case_clause,
        }
        for branch in _BRANCH_TYPES:
            self._statements[branch] = self._branch_statement
        self._expressions: dict[str, Callable[[Node], Expr]] = {
            "selector_expression": self._selector_expression,
            "qualified_type": self._qualified_type,
            "unary_expression": self._unary_expression,
            "binary_expression": self._binary_expression,
            "call_expression": self._call_expression,
            "type_conversion_expression": self._type_conversion_expression,
            "type_assertion_expression": self._type_assertion_expression,
            "index_expression": self._index_expression,
            "slice_expression": self._slice_expression,
            "parenthesized_expression": self._parenthesized,
            "parenthesized_type": self._parenthesized,
            "composite_literal": self._composite_literal,
            "literal_value": self._literal_value,
            "literal_element": self._unwrap,
            "element": self._unwrap,
            "variadic_argument": self._unwrap,
            "type_elem": self._type_elem,
            "keyed_element": self._keyed_element,
            "func_literal": self._func_literal,
            "pointer_type": self._pointer_type,
            "generic_type": self._instantiation,
            "type_instantiation_expression": self._instantiation,
            "map_type": lambda node: MapType(self.position(node)),
            "channel_type": lambda node: ChanType(self.position(node)),
            "struct_type": lambda node: StructType(self.position(node)),
            "interface_type": lambda node: InterfaceType(self.position(node)),
        }

    # -- helpers ------------------------------------------------------------

    def position(self, node: Node) -> Position:
        row, column = node.start_point
        return Position(self.path, row + 1, column)

    def text(self, node: Node) -> str:
        return self.source[node.start_byte:node.end_byte].decode("utf-8", errors="replace")

    def _field(self, node: Node, name: str) -> Optional[Node]:
        return node.child_by_field_name(name)

    # -- file level ---------------------------------------------------------

    def source_file(self, root: Node) -> SourceFile:
        declarations = tuple(
            self.function_declaration(child)
            for child in _named(root)
            if child.type in _FUNCTION_DECLARATIONS
        )
        return SourceFile(
            path=self.path,
            declarations=declarations,
            comments=self.comment_groups(root),
        )

    def function_declaration(self, node: Node) -> FuncDecl:
        name_node = self._field(node, "name")
        body_node = self._field(node, "body")
        return FuncDecl(
            name=self.text(name_node) if name_node is not None else "",
            body=self.block(body_node) if body_node is not None else None,
            position=self.position(node),
        )

    def comment_groups(self, root: Node) -> tuple[CommentGroup, ...]:
        """
        Group comments the way the Go parser does.

        Consecutive comments separated only by whitespace and at most one
        line break form a group. A comment that trails code on its line only
        groups with further comments on that same line.
        """
        nodes = sorted(self._comment_nodes(root), key=lambda n: n.start_byte)
        groups: list[CommentGroup] = []
        current: list[Comment] = []
        previous: Optional[Node] = None

        for node in nodes:
            if previous is not None and not self._continues_group(previous, node):
                groups.append(CommentGroup(tuple(current)))
                current = []
            current.append(Comment(text=self.text(node), position=self.position(node)))
            previous = node

        if current:
            groups.append(CommentGroup(tuple(current)))
        return tuple(groups)

    def _comment_nodes(self, root: Node) -> Iterator[Node]:
        stack = [root]
        while stack:
            node = stack.pop()
            if node.type == "comment":
                yield node
                continue
            stack.extend(node.children)

    def _continues_group(self, previous: Node, node: Node) -> bool:
        gap = self.source[previous.end_byte:node.start_byte]
        if gap.strip():
            return False
        max_breaks = 0 if self._trails_code(previous) else 1
        return gap.count(b"\n") <= max_breaks

    def _trails_code(self, node: Node) -> bool:
        line_start = self.source.rfind(b"\n", 0, node.start_byte) + 1
        return bool(self.source[line_start:node.start_byte].strip())

    # -- statements ---------------------------------------------------------

    def block(self, node: Node) -> tuple[Stmt, ...]:
        return self.statements(node.named_children)

    def statements(self, nodes: Iterable[Node]) -> tuple[Stmt, ...]:
        return tuple(self.statement(node) for node in self._statement_nodes(nodes))

    def _statement_nodes(self, nodes: Iterable[Node]) -> Iterator[Node]:
        for node in nodes:
            if node.type == "comment":
                continue
            if node.type == "statement_list":
                yield from self._statement_nodes(node.named_children)
            else:
                yield node

    def statement(self, node: Node) -> Stmt:
        builder = self._statements.get(node.type)
        if builder is None:
            return UnsupportedStmt(kind=node.type, position=self.position(node))
        return builder(node)

    def optional_statement(self, node: Optional[Node]) -> Optional[Stmt]:
        return self.statement(node) if node is not None else None

    def _expression_statement(self, node: Node) -> Stmt:
        return ExprStmt(x=self.expression(_named(node)[0]), position=self.position(node))

    def _send_statement(self, node: Node) -> Stmt:
        return SendStmt(
            chan=self._child_expression(node, "channel"),
            value=self._child_expression(node, "value"),
            position=self.position(node),
        )

    def _inc_dec_statement(self, node: Node) -> Stmt:
        return IncDecStmt(
            x=self.expression(_named(node)[0]),
            tok="++" if node.type == "inc_statement" else "--",
            position=self.position(node),
        )

    def _assignment_statement(self, node: Node) -> Stmt:
        operator = self._field(node, "operator")
        if operator is not None:
            tok = self.text(operator)
        else:
            tok = ":=" if node.type == "short_var_declaration" else "="
        return AssignStmt(
            lhs=self.expression_list(self._field(node, "left")),
            tok=tok,
            rhs=self.expression_list(self._field(node, "right")),
            position=self.position(node),
        )

    def _declaration(self, node: Node) -> Stmt:
        return DeclStmt(specs=tuple(self._specs(node)), position=self.position(node))

    def _specs(self, node: Node) -> Iterator[ValueSpec | TypeSpec]:
        for child in _named(node):
            if child.type in _VALUE_SPECS:
                yield ValueSpec(
                    names=tuple(self.text(name) for name in child.children_by_field_name("name")),
                    values=self.expression_list(self._field(child, "value")),
                    position=self.position(child),
                )
            elif child.type in _TYPE_SPECS:
                name = self._field(child, "name")
                yield TypeSpec(
                    name=self.text(name) if name is not None else "",
                    position=self.position(child),
                )
            elif child.type.endswith("_spec_list"):
                yield from self._specs(child)

    def _labeled_statement(self, node: Node) -> Stmt:
        label = self._field(node, "label")
        inner = [child for child in _named(node) if label is None or child.start_byte != label.start_byte]
        return LabeledStmt(
            label=self.text(label) if label is not None else "",
            stmt=self.statement(inner[0]) if inner else None,
            position=self.position(node),
        )

    def _empty_statement(self, node: Node) -> Stmt:
        return EmptyStmt(position=self.position(node))

    def _branch_statement(self, node: Node) -> Stmt:
        label = _named(node)
        return BranchStmt(
            tok=node.type.removesuffix("_statement"),
            label=self.text(label[0]) if label else None,
            position=self.position(node),
        )

    def _return_statement(self, node: Node) -> Stmt:
        results = _named(node)
        return ReturnStmt(
            results=self.expression_list(results[0]) if results else (),
            position=self.position(node),
        )

    def _call_operand(self, node: Node) -> CallExpr:
        operand = _named(node)
        call = self.expression(operand[0]) if operand else None
        if not isinstance(call, CallExpr):
            raise MalformedSourceError(
                self.path,
                self.position(node).line,
                f"expression in {node.type.removesuffix('_statement')} must be function call",
            )
        return call

    def _go_statement(self, node: Node) -> Stmt:
        return GoStmt(call=self._call_operand(node), position=self.position(node))

    def _defer_statement(self, node: Node) -> Stmt:
        return DeferStmt(call=self._call_operand(node), position=self.position(node))

    def _if_statement(self, node: Node) -> Stmt:
        consequence = self._field(node, "consequence")
        return IfStmt(
            init=self.optional_statement(self._field(node, "initializer")),
            cond=self._child_expression(node, "condition"),
            body=self.block(consequence) if consequence is not None else (),
            else_=self.optional_statement(self._field(node, "alternative")),
            position=self.position(node),
        )

    def _block_statement(self, node: Node) -> Stmt:
        return BlockStmt(stmts=self.block(node), position=self.position(node))

    def _for_statement(self, node: Node) -> Stmt:
        body_node = self._field(node, "body")
        body = self.block(body_node) if body_node is not None else ()
        clauses = [
            child for child in _named(node)
            if body_node is None or child.start_byte != body_node.start_byte
        ]
        clause = clauses[0] if clauses else None

        if clause is None:
            return ForStmt(init=None, cond=None, post=None, body=body, position=self.position(node))

        if clause.type == "range_clause":
            left = self.expression_list(self._field(clause, "left"))
            return RangeStmt(
                key=left[0] if len(left) > 0 else None,
                value=left[1] if len(left) > 1 else None,
                x=self._child_expression(clause, "right"),
                body=body,
                position=self.position(node),
            )

        if clause.type == "for_clause":
            condition = self._field(clause, "condition")
            return ForStmt(
                init=self.optional_statement(self._field(clause, "initializer")),
                cond=self.expression(condition) if condition is not None else None,
                post=self.optional_statement(self._field(clause, "update")),
                body=body,
                position=self.position(node),
            )

        return ForStmt(init=None, cond=self.expression(clause), post=None, body=body, position=self.position(node))

    def _cases(self, node: Node) -> tuple[CaseClause, ...]:
        return tuple(self._case_clause(child) for child in _named(node) if child.type in _CASE_TYPES)

    def _switch_statement(self, node: Node) -> Stmt:
        value = self._field(node, "value")
        return SwitchStmt(
            init=self.optional_statement(self._field(node, "initializer")),
            tag=self.expression(value) if value is not None else None,
            body=self._cases(node),
            position=self.position(node),
        )

    def _type_switch_statement(self, node: Node) -> Stmt:
        return TypeSwitchStmt(
            init=self.optional_statement(self._field(node, "initializer")),
            assign=self._child_expression(node, "value"),
            body=self._cases(node),
            position=self.position(node),
        )

    def _select_statement(self, node: Node) -> Stmt:
        return SelectStmt(position=self.position(node))

    def _case_clause(self, node: Node) -> CaseClause:
        if node.type == "expression_case":
            values = self.expression_list(self._field(node, "value"))
        elif node.type == "type_case":
            values = tuple(self.expression(child) for child in node.children_by_field_name("type"))
        else:
            values = ()

        # Statements are whatever follows the clause's colon.
        body_nodes: list[Node] = []
        seen_colon = False
        for child in node.children:
            if seen_colon and child.is_named:
                body_nodes.append(child)
            elif child.type == ":":
                seen_colon = True

        return CaseClause(values=values, body=self.statements(body_nodes), position=self.position(node))

    # -- expressions --------------------------------------------------------

    def expression_list(self, node: Optional[Node]) -> tuple[Expr, ...]:
        if node is None:
            return ()
        if node.type == "expression_list":
            return tuple(self.expression(child) for child in _named(node))
        return (self.expression(node),)

    def expression(self, node: Node) -> Expr:
        position = self.position(node)
        if node.type in _LITERAL_TYPES:
            return BasicLit(value=self.text(node), position=position)
        if node.type in _IDENTIFIER_TYPES:
            return Ident(name=self.text(node), position=position)
        if node.type in _ARRAY_TYPES:
            return ArrayType(position=position)
        builder = self._expressions.get(node.type)
        if builder is None:
            return UnsupportedExpr(kind=node.type, position=position)
        return builder(node)

    def _child_expression(self, node: Node, name: str) -> Expr:
        child = self._field(node, name)
        if child is None:
            raise MalformedSourceError(self.path, self.position(node).line, f"missing {name}")
        return self.expression(child)

    def optional_expression(self, node: Optional[Node]) -> Optional[Expr]:
        return self.expression(node) if node is not None else None

    def _unwrap(self, node: Node) -> Expr:
        return self.expression(_named(node)[0])

    def _selector_expression(self, node: Node) -> Expr:
        field = self._field(node, "field")
        return SelectorExpr(
            x=self._child_expression(node, "operand"),
            sel=self.text(field) if field is not None else "",
            position=self.position(node),
        )

    def _qualified_type(self, node: Node) -> Expr:
        name = self._field(node, "name")
        return SelectorExpr(
            x=self._child_expression(node, "package"),
            sel=self.text(name) if name is not None else "",
            position=self.position(node),
        )

    def _unary_expression(self, node: Node) -> Expr:
        operator = self._field(node, "operator")
        op = self.text(operator) if operator is not None else ""
        operand = self._child_expression(node, "operand")
        if op == "*":
            return StarExpr(x=operand, position=self.position(node))
        return UnaryExpr(op=op, x=operand, position=self.position(node))

    def _binary_expression(self, node: Node) -> Expr:
        operator = self._field(node, "operator")
        return BinaryExpr(
            x=self._child_expression(node, "left"),
            op=self.text(operator) if operator is not None else "",
            y=self._child_expression(node, "right"),
            position=self.position(node),
        )

    def _call_expression(self, node: Node) -> Expr:
        return CallExpr(
            fun=self._child_expression(node, "function"),
            args=tuple(self.expression(arg) for arg in _named(self._field(node, "arguments"))),
            position=self.position(node),
        )

    def _type_conversion_expression(self, node: Node) -> Expr:
        return CallExpr(
            fun=self._child_expression(node, "type"),
            args=(self._child_expression(node, "operand"),),
            position=self.position(node),
        )

    def _type_assertion_expression(self, node: Node) -> Expr:
        return TypeAssertExpr(
            x=self._child_expression(node, "operand"),
            type=self.optional_expression(self._field(node, "type")),
            position=self.position(node),
        )

    def _index_expression(self, node: Node) -> Expr:
        return IndexExpr(
            x=self._child_expression(node, "operand"),
            index=self._child_expression(node, "index"),
            position=self.position(node),
        )

    def _slice_expression(self, node: Node) -> Expr:
        return SliceExpr(
            x=self._child_expression(node, "operand"),
            low=self.optional_expression(self._field(node, "start")),
            high=self.optional_expression(self._field(node, "end")),
            max=self.optional_expression(self._field(node, "capacity")),
            position=self.position(node),
        )

    def _parenthesized(self, node: Node) -> Expr:
        return ParenExpr(x=self.expression(_named(node)[0]), position=self.position(node))

    def _composite_literal(self, node: Node) -> Expr:
        body = self._field(node, "body")
        return CompositeLit(
            type=self.optional_expression(self._field(node, "type")),
            elts=tuple(self.expression(child) for child in _named(body)),
            position=self.position(node),
        )

    def _literal_value(self, node: Node) -> Expr:
        # Element of an outer literal with its type elided: `[][]int{{1, 2}}`.
        return CompositeLit(
            type=None,
            elts=tuple(self.expression(child) for child in _named(node)),
            position=self.position(node),
        )

    def _keyed_element(self, node: Node) -> Expr:
        key = self._field(node, "key")
        value = self._field(node, "value")
        if key is None or value is None:
            parts = _named(node)
            key, value = parts[0], parts[-1]
        return KeyValueExpr(
            key=self.expression(key),
            value=self.expression(value),
            position=self.position(node),
        )

    def _func_literal(self, node: Node) -> Expr:
        body = self._field(node, "body")
        return FuncLit(
            body=self.block(body) if body is not None else (),
            position=self.position(node),
        )

    def _pointer_type(self, node: Node) -> Expr:
        return StarExpr(x=self.expression(_named(node)[0]), position=self.position(node))

    def _type_elem(self, node: Node) -> Expr:
        parts = _named(node)
        if len(parts) == 1:
            return self.expression(parts[0])
        return UnsupportedExpr(kind="type_union", position=self.position(node))

    def _instantiation(self, node: Node) -> Expr:
        """``T[A]`` indexes a generic; with several type arguments there is no rule."""
        base = self._field(node, "type")
        arguments_node = self._field(node, "type_arguments")
        if arguments_node is not None:
            arguments = _named(arguments_node)
        else:
            arguments = [
                child for child in _named(node)
                if base is None or child.start_byte != base.start_byte
            ]
        if base is None or len(arguments) != 1:
            return UnsupportedExpr(kind=node.type, position=self.position(node))
        return IndexExpr(
            x=self.expression(base),
            index=self.expression(arguments[0]),
            position=self.position(node),
        )
