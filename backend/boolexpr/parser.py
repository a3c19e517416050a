"""
Expression Parser.

Parses textual expressions such as::

    re=foo || (name='*.go' && !type=d)

into ``Expression`` instances. The operands available to an expression are
those registered with the parser before ``parse`` is called; each is
represented as ``<operand>=<value>`` where the value is interpreted by the
operand. Values may be single-quoted or contain backslash-escaped
characters.
"""

from __future__ import annotations

import logging
import threading
from typing import Dict, List, Optional, Sequence, Tuple

from .errors import GrammarError
from .expression import Expression, new
from .items import AND, LEFT_BRACKET, NOT, OR, RIGHT_BRACKET, Item, operand_item
from .operand import Operand, OperandFactory
from .tokenizer import Token, TokenKind, Tokenizer

logger = logging.getLogger(__name__)


_OPERATORS: Dict[str, Item] = {
    "||": OR,
    "&&": AND,
    "!": NOT,
    "(": LEFT_BRACKET,
    ")": RIGHT_BRACKET,
}


class Parser:
    """
    Operand registry and parser for textual expressions.

    Operands should be registered at startup; ``parse`` may then be called
    concurrently.
    """

    def __init__(self) -> None:
        self._factories: Dict[str, OperandFactory] = {}
        self._lock = threading.Lock()

    def register_operand(self, name: str, factory: OperandFactory) -> None:
        """
        Register an operand.

        Args:
            name: The name used for the operand in expressions.
            factory: Called with the name and raw value to create it.
        """
        with self._lock:
            self._factories[name] = factory
        logger.debug("registered operand %r", name)

    def remove_operand(self, name: str) -> None:
        """Remove a registered operand, if present."""
        with self._lock:
            self._factories.pop(name, None)

    def list_operands(self) -> List[Operand]:
        """
        Return one instance of every registered operand, created with an
        empty value and sorted by name, for use in documentation.
        """
        with self._lock:
            factories = sorted(self._factories.items())
        return [factory(name, "") for name, factory in factories]

    def parse(self, text: str) -> Expression:
        """
        Parse text into an expression.

        Args:
            text: The expression text, an empty string yields the empty
                expression.

        Returns:
            The built Expression.

        Raises:
            TokenizeError: If text is lexically invalid.
            GrammarError: If an operand is unknown or the expression is
                malformed.
        """
        tokens = Tokenizer().run(text)
        items = self._merge_operands_and_values(tokens)
        expr = new(*items)
        logger.debug("parsed %r into %d items", text, len(expr.items))
        return expr

    def validate(self, text: str) -> Tuple[bool, Optional[str]]:
        """
        Validate an expression without keeping the result.

        Returns:
            Tuple of (is_valid, error_message).
        """
        try:
            self.parse(text)
            return True, None
        except Exception as e:
            return False, str(e)

    def _merge_operands_and_values(self, tokens: Sequence[Token]) -> List[Item]:
        with self._lock:
            factories = dict(self._factories)

        merged: List[Item] = []
        i = 0
        while i < len(tokens):
            tok = tokens[i]
            i += 1
            if tok.kind is TokenKind.OPERATOR:
                merged.append(_OPERATORS[tok.text])
                continue
            if tok.kind is not TokenKind.OPERAND_NAME:
                continue
            factory = factories.get(tok.text)
            if factory is None:
                raise GrammarError(f"unsupported operand: {tok.text}")
            if i >= len(tokens) or tokens[i].kind is not TokenKind.OPERAND_VALUE:
                raise GrammarError(f"missing operand value: {tok.text}")
            merged.append(operand_item(factory(tok.text, tokens[i].text)))
            i += 1
        return merged
