"""Line complexity rules: expression and statement scoring plus the ignore directive."""

from ghost_linter.domain.rules.expression_complexity import ExpressionComplexity
from ghost_linter.domain.rules.ignore_directive import IgnoreDirectiveResolver
from ghost_linter.domain.rules.statement_complexity import StatementComplexity

__all__ = ["ExpressionComplexity", "IgnoreDirectiveResolver", "StatementComplexity"]
