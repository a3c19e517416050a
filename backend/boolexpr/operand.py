"""
Operand contract.

Operands are the predicates of an expression, e.g. "the value matches the
regular expression foo". Each operand carries its own configuration value,
assigned when it is created, and is evaluated against the single value
supplied to ``Expression.eval``.
"""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from typing import Any, Callable, FrozenSet, Iterable

from .capabilities import Capability, provides
from .tokenizer import quote_value


class Operand(ABC):
    """
    Interface implemented by all operands.

    ``prepare`` is called exactly once, while an expression is being built,
    and returns the operand that is stored in the expression. It should raise
    (preferably ``OperandError``) if the operand's configuration is invalid.
    ``eval`` must return False, never raise, for values it cannot interpret,
    and must be safe to call concurrently.
    """

    @abstractmethod
    def prepare(self) -> "Operand":
        """Validate/compile the operand's configuration."""

    @abstractmethod
    def eval(self, value: Any) -> bool:
        """Evaluate the operand against value."""

    @abstractmethod
    def needs(self, capability: Capability) -> bool:
        """Return True if the operand requires capability of its values."""

    @abstractmethod
    def __str__(self) -> str:
        """Canonical ``name=value`` form, parseable by ``Parser.parse``."""

    def document(self) -> str:
        """One line description of the operand."""
        return str(self)


OperandFactory = Callable[[str, str], Operand]


class CommonOperand(Operand):
    """
    Convenience base for operands that are configured by a name, a textual
    value and a static set of required capabilities.

    Subclasses implement ``eval`` and, when the value needs compiling,
    ``prepare`` (usually via ``self.copy()``).
    """

    def __init__(
        self,
        name: str,
        value: str,
        requires: Iterable[Capability] = (),
        description: str = "",
    ):
        self.name = name
        self.value = value
        self.requires: FrozenSet[Capability] = frozenset(requires)
        self.description = description

    def prepare(self) -> Operand:
        return self

    def needs(self, capability: Capability) -> bool:
        return capability in self.requires

    def supports(self, value: Any) -> bool:
        """Return True if value provides every required capability."""
        return all(provides(value, c) for c in self.requires)

    def copy(self) -> "CommonOperand":
        return copy.copy(self)

    def document(self) -> str:
        return f"{self.name}: {self.description}"

    def __str__(self) -> str:
        return f"{self.name}={quote_value(self.value)}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r}, {self.value!r})"
