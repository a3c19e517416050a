"""
Boolean expressions.

An expression combines operands with && (and), || (or), ! (negation)
and grouping via ( and ). Operands are predicates supplied by clients of
this package; each one carries its own value, so "re=foo || re=bar"
evaluates to true for values matching either regular expression.

Expressions are built once, either from items via ``new`` or from text via
``Parser.parse``, and are immutable afterwards.
"""

from __future__ import annotations

import logging
from typing import Any, List, Sequence, Tuple

from .capabilities import Capability
from .errors import GrammarError
from .evaluator import Evaluator
from .items import Item, ItemType, format_items
from .operand import Operand

logger = logging.getLogger(__name__)


class _GrammarBuilder:
    """
    Builds the nested item tree from a flat item sequence.

    Sub-expressions are built by recursing over the same cursor, the
    recursive call returns after consuming the matching right bracket.
    """

    def __init__(self, items: Sequence[Item]):
        self._items = items
        self._pos = 0

    def build(self) -> List[Item]:
        expr: List[Item] = []
        while self._pos < len(self._items):
            cur = self._items[self._pos]
            self._pos += 1

            if cur.kind is ItemType.OPERAND:
                expr.append(self._prepare(cur.operand))
            elif cur.kind is ItemType.SUB_EXPRESSION:
                expr.append(cur)
            elif cur.is_operator():
                self._check_binary(expr, cur)
                expr.append(cur)
            elif cur.kind is ItemType.NOT:
                self._check_negation(expr)
                expr.append(cur)
            elif cur.kind is ItemType.LEFT_BRACKET:
                self._check_bracket(expr, cur)
                sub = self.build()
                expr.append(Item(ItemType.SUB_EXPRESSION, sub=tuple(sub)))
            elif cur.kind is ItemType.RIGHT_BRACKET:
                self._check_binary(expr, cur)
                return expr
        return expr

    @staticmethod
    def _prepare(operand: Operand) -> Item:
        # errors from prepare are the operand's own and propagate unchanged
        prepared = operand.prepare()
        return Item(ItemType.OPERAND, operand=prepared)

    @staticmethod
    def _check_binary(expr: List[Item], cur: Item) -> None:
        if not expr:
            raise GrammarError(f"missing left operand for {cur.kind}")
        if not expr[-1].is_operand():
            raise GrammarError(f"missing operand preceding {cur.kind}")

    @staticmethod
    def _check_negation(expr: List[Item]) -> None:
        if expr and not expr[-1].is_operator():
            raise GrammarError(f"misplaced negation after {expr[-1].kind}")

    @staticmethod
    def _check_bracket(expr: List[Item], cur: Item) -> None:
        if expr and not (expr[-1].is_operator() or expr[-1].kind is ItemType.NOT):
            raise GrammarError(f"missing operator preceding {cur.kind}")


def _balanced(items: Sequence[Item]) -> bool:
    depth = 0
    for it in items:
        if it.kind is ItemType.LEFT_BRACKET:
            depth += 1
        elif it.kind is ItemType.RIGHT_BRACKET:
            if depth == 0:
                return False
            depth -= 1
    return depth == 0


def _incomplete(items: Sequence[Item]) -> bool:
    """
    Report whether items fail to alternate operand and operator positions,
    allowing a single ! before each operand position, and ending on an
    operand position.
    """
    want_operand = True
    for it in items:
        if it.kind is ItemType.NOT:
            if not want_operand:
                return True
        elif it.is_operand():
            if not want_operand:
                return True
            if it.kind is ItemType.SUB_EXPRESSION and _incomplete(it.sub):
                return True
            want_operand = False
        elif it.is_operator():
            if want_operand:
                return True
            want_operand = True
        else:
            return True
    return want_operand


class Expression:
    """
    A validated, immutable boolean expression.

    Expressions are created by ``new`` or ``Parser.parse``; calling the
    class directly gives the empty expression, which matches nothing.
    """

    __slots__ = ("_items",)

    def __init__(self) -> None:
        self._items: Tuple[Item, ...] = ()

    @classmethod
    def _from_tree(cls, tree: Sequence[Item]) -> "Expression":
        expr = cls()
        expr._items = tuple(tree)
        return expr

    @property
    def items(self) -> Tuple[Item, ...]:
        return self._items

    def eval(self, value: Any) -> bool:
        """
        Evaluate the expression against value.

        Operands that cannot interpret value evaluate to False, so eval
        never raises for well behaved operands. An empty expression is
        always False.
        """
        if not self._items:
            return False
        return Evaluator().run(self._items, value)

    def needs(self, capability: Capability) -> bool:
        """Return True if any operand in the expression needs capability."""
        return _needs(capability, self._items)

    def __str__(self) -> str:
        return format_items(self._items)

    def __repr__(self) -> str:
        return f"Expression({str(self)!r})"


def _needs(capability: Capability, items: Sequence[Item]) -> bool:
    for it in items:
        if it.kind is ItemType.OPERAND and it.operand.needs(capability):
            return True
        if it.kind is ItemType.SUB_EXPRESSION and _needs(capability, it.sub):
            return True
    return False


def new(*items: Item) -> Expression:
    """
    Build an expression from items.

    Returns:
        The expression; with no items, the empty expression.

    Raises:
        GrammarError: If the items do not form a valid expression.
        Exception: Whatever an operand's ``prepare`` raises.
    """
    if not items:
        return Expression()

    # brackets must balance before any grammar analysis
    if not _balanced(items):
        raise GrammarError("unbalanced brackets")

    tree = _GrammarBuilder(items).build()
    if _incomplete(tree):
        rendered = " ".join(str(it) for it in items)
        raise GrammarError(f"incomplete expression: [{rendered}]")

    expr = Expression._from_tree(tree)
    logger.debug("built expression: %s", expr)
    return expr
