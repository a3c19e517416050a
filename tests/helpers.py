"""
Operands and values shared by the boolexpr tests.
"""

import re
from typing import Any, List

from backend.boolexpr import (
    AND,
    LEFT_BRACKET,
    NOT,
    OR,
    RIGHT_BRACKET,
    Capability,
    CommonOperand,
    Item,
    OperandError,
    operand_item,
    provides,
)


class RegexOperand(CommonOperand):
    """Matches string values against a regular expression."""

    def __init__(self, name: str = "re", value: str = ""):
        super().__init__(
            name, value,
            requires=[Capability.TEXT],
            description="regular expression",
        )
        self._re = None

    def prepare(self) -> "RegexOperand":
        try:
            compiled = re.compile(self.value)
        except re.error as e:
            raise OperandError(f"error parsing regexp: {e}: `{self.value}`") from e
        prepared = self.copy()
        prepared._re = compiled
        return prepared

    def eval(self, value: Any) -> bool:
        if not self.supports(value):
            return False
        return self._re.search(value) is not None


class PlainRegexOperand(RegexOperand):
    """A regular expression operand that lets re.error escape prepare."""

    def prepare(self) -> "PlainRegexOperand":
        prepared = self.copy()
        prepared._re = re.compile(self.value)
        return prepared


class NameOperand(CommonOperand):
    """Matches the name() of values exactly."""

    def __init__(self, name: str = "nm", value: str = ""):
        super().__init__(
            name, value,
            requires=[Capability.NAME],
            description="exact name",
        )

    def eval(self, value: Any) -> bool:
        if not provides(value, Capability.NAME):
            return False
        return value.name() == self.value


class RecordingOperand(CommonOperand):
    """Returns a fixed result and records every value it is evaluated with."""

    def __init__(self, name: str, result: bool, calls: List[Any]):
        super().__init__(name, str(result).lower())
        self.result = result
        self.calls = calls

    def eval(self, value: Any) -> bool:
        self.calls.append(value)
        return self.result


class Named:
    """A value providing the NAME capability."""

    def __init__(self, name: str):
        self._name = name

    def name(self) -> str:
        return self._name


def split_items(text: str) -> List[Item]:
    """
    Turn "foo && !(bar || baz)" into items, each word becoming a
    regular expression operand.
    """
    for op in ("(", ")", "||", "&&", "!"):
        text = text.replace(op, f" {op} ")
    operators = {
        "||": OR,
        "&&": AND,
        "!": NOT,
        "(": LEFT_BRACKET,
        ")": RIGHT_BRACKET,
    }
    items = []
    for word in text.split():
        if word in operators:
            items.append(operators[word])
        else:
            items.append(operand_item(RegexOperand(value=word)))
    return items
