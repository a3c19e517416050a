"""
Expression items.

Items are operators, brackets, operands and (once built) sub-expressions.
They are exposed so that clients can create their own front ends and
build expressions with ``new(*items)`` without going through the text
parser.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Iterable, Optional, Tuple

from .errors import GrammarError

if TYPE_CHECKING:
    from .expression import Expression
    from .operand import Operand


class ItemType(Enum):
    """Item kinds, valued by their rendering in messages."""

    OR = "||"
    AND = "&&"
    NOT = "!"
    LEFT_BRACKET = "("
    RIGHT_BRACKET = ")"
    SUB_EXPRESSION = "(...)"
    OPERAND = "operand"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Item:
    """A single operator, bracket, operand or sub-expression."""

    kind: ItemType
    operand: Optional["Operand"] = None
    sub: Tuple["Item", ...] = ()

    def is_operator(self) -> bool:
        """True for the binary operators && and ||."""
        return self.kind in (ItemType.AND, ItemType.OR)

    def is_operand(self) -> bool:
        """True for items that occupy an operand position."""
        return self.kind in (ItemType.OPERAND, ItemType.SUB_EXPRESSION)

    def __str__(self) -> str:
        if self.kind is ItemType.OPERAND:
            return str(self.operand)
        if self.kind is ItemType.SUB_EXPRESSION:
            return "(" + format_items(self.sub) + ")"
        return str(self.kind)


def format_items(items: Iterable[Item]) -> str:
    """
    Render items the way they are written: separated by a space, with
    negation attached to whatever it negates.
    """
    out = []
    for it in items:
        out.append(str(it))
        if it.kind is not ItemType.NOT:
            out.append(" ")
    return "".join(out).strip()


OR = Item(ItemType.OR)
AND = Item(ItemType.AND)
NOT = Item(ItemType.NOT)
LEFT_BRACKET = Item(ItemType.LEFT_BRACKET)
RIGHT_BRACKET = Item(ItemType.RIGHT_BRACKET)


def operand_item(operand: "Operand") -> Item:
    """Wrap an operand as an item."""
    return Item(ItemType.OPERAND, operand=operand)


def sub_expression(expression: "Expression") -> Item:
    """
    Wrap an already built, non-empty expression so that it can be used as
    a bracketed operand of another expression.
    """
    if not expression.items:
        raise GrammarError("empty sub-expression")
    return Item(ItemType.SUB_EXPRESSION, sub=expression.items)
