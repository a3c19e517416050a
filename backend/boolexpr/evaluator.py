"""
Expression Evaluator.

Evaluates built expressions against a single value, strictly left to
right: ``a && b || c`` is ``(a && b) || c`` and ``a || b && c`` is
``(a || b) && c``. There is no operator precedence. A true result for
``||`` ends evaluation of the current level immediately.
"""

from __future__ import annotations

from typing import Any, List, Sequence

from .items import Item, ItemType


class Evaluator:
    """
    Evaluates one level of an expression, recursing into sub-expressions
    with a fresh Evaluator.

    An Evaluator holds per-call scratch state and must not be shared
    between concurrent calls; ``Expression.eval`` creates one per call.
    """

    def __init__(self) -> None:
        self._values: List[bool] = []
        self._operators: List[ItemType] = []

    def run(self, items: Sequence[Item], value: Any) -> bool:
        """
        Evaluate items against value.

        Args:
            items: A non-empty, validated item sequence.
            value: The value passed to each operand.

        Returns:
            The boolean result.
        """
        for cur in items:
            if cur.kind is ItemType.OPERAND:
                self._values.append(cur.operand.eval(value))
            elif cur.kind is ItemType.SUB_EXPRESSION:
                self._values.append(Evaluator().run(cur.sub, value))
            elif cur.kind in (ItemType.AND, ItemType.OR, ItemType.NOT):
                self._operators.append(cur.kind)
            if self._reduce():
                return True

        if len(self._values) != 1:
            raise RuntimeError(f"invalid expression: {self._values}")
        return self._values[0]

    def _reduce(self) -> bool:
        """
        Combine pending values where possible.

        Returns:
            True if an || evaluated to true and the level is done.
        """
        values, operators = self._values, self._operators

        if len(values) == 1 and operators == [ItemType.NOT]:
            # negation of the first operand
            values[0] = not values[0]
            operators.clear()

        if len(values) == 2 and operators:
            if len(operators) >= 2 and operators[-1] is ItemType.NOT:
                # negation of the right hand operand
                values[1] = not values[1]
                operators.pop()

            op = operators[0]
            if op is ItemType.AND:
                result = values[0] and values[1]
            else:
                result = values[0] or values[1]
            values[:] = [result]
            operators.clear()

            if op is ItemType.OR and result:
                return True

        return False
