"""
Error types for boolean expression tokenizing, building and loading.

All errors derive from ``ValueError`` so that callers which treat a bad
expression as a bad value keep working unchanged.
"""

from __future__ import annotations

from typing import Optional


class BoolExprError(ValueError):
    """Base exception for all boolexpr errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class TokenizeError(BoolExprError):
    """
    Raised when the input text cannot be split into tokens.

    Examples:
    - Unexpected character between tokens
    - Single & or | instead of && or ||
    - Unterminated quote or trailing backslash
    """

    def __init__(
        self,
        message: str,
        position: Optional[int] = None,
        text: Optional[str] = None,
    ):
        super().__init__(message)
        self.position = position
        self.text = text


class GrammarError(BoolExprError):
    """
    Raised when a sequence of items does not form a valid expression.

    Examples:
    - Unbalanced brackets
    - Operator without a left or right operand
    - Misplaced negation
    - Unknown operand name or operand without a value
    """

    pass


class OperandError(BoolExprError):
    """Raised by operands whose configuration cannot be prepared."""

    pass


class ConfigError(BoolExprError):
    """Raised when an expression library cannot be loaded or compiled."""

    pass
