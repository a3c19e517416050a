"""
boolexpr: an embeddable boolean expression engine.

Expressions combine client supplied operands with && (and), || (or),
! (negation) and grouping via (). They are evaluated strictly left to
right against a single value.
"""

from .capabilities import (
    Capability,
    HasDirSize,
    HasFileMode,
    HasFileType,
    HasModTime,
    HasName,
    HasPath,
    HasSize,
    HasXAttr,
    provides,
)
from .errors import (
    BoolExprError,
    ConfigError,
    GrammarError,
    OperandError,
    TokenizeError,
)
from .expression import Expression, new
from .items import (
    AND,
    LEFT_BRACKET,
    NOT,
    OR,
    RIGHT_BRACKET,
    Item,
    ItemType,
    operand_item,
    sub_expression,
)
from .library import ExpressionDefinition, ExpressionLibrary
from .operand import CommonOperand, Operand, OperandFactory
from .parser import Parser
from .tokenizer import Token, TokenKind, Tokenizer, format_tokens, quote_value, tokenize

__version__ = "1.0.0"
__all__ = [
    # Capabilities
    "Capability",
    "HasName",
    "HasPath",
    "HasFileType",
    "HasFileMode",
    "HasModTime",
    "HasSize",
    "HasDirSize",
    "HasXAttr",
    "provides",
    # Errors
    "BoolExprError",
    "TokenizeError",
    "GrammarError",
    "OperandError",
    "ConfigError",
    # Operands
    "Operand",
    "OperandFactory",
    "CommonOperand",
    # Items
    "Item",
    "ItemType",
    "AND",
    "OR",
    "NOT",
    "LEFT_BRACKET",
    "RIGHT_BRACKET",
    "operand_item",
    "sub_expression",
    # Expressions
    "Expression",
    "new",
    # Text front end
    "Token",
    "TokenKind",
    "Tokenizer",
    "tokenize",
    "format_tokens",
    "quote_value",
    "Parser",
    # Libraries
    "ExpressionDefinition",
    "ExpressionLibrary",
]
