"""
Tokenizer for textual boolean expressions.

Splits input such as ``name='foo bar' || (type=d && !newer=2012-01-01)``
into operator, operand name and operand value tokens. Operand values may be
bare, in which case any character can be escaped with a backslash, or
single-quoted, in which case they are taken verbatim up to the closing
quote.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Dict, Iterable, List

from .errors import TokenizeError


class TokenKind(str, Enum):
    """Token types produced by the tokenizer."""

    OPERATOR = "operator"
    OPERAND_NAME = "operand_name"
    OPERAND_VALUE = "operand_value"


@dataclass(frozen=True)
class Token:
    """A single token."""

    text: str
    kind: TokenKind


def format_tokens(tokens: Iterable[Token]) -> str:
    """Render tokens as ``name='value' && name='value'``."""
    out = []
    for tok in tokens:
        if tok.kind is TokenKind.OPERATOR:
            out.append(tok.text + " ")
        elif tok.kind is TokenKind.OPERAND_NAME:
            out.append(tok.text + "=")
        else:
            out.append(f"'{tok.text}' ")
    return "".join(out).strip()


# Characters that end a bare value or change how it is read.
_VALUE_SPECIALS = frozenset("()&|'\\")


def _is_value_special(ch: str) -> bool:
    return ch.isspace() or ch in _VALUE_SPECIALS


def quote_value(value: str) -> str:
    """
    Render an operand value so that the tokenizer reads it back unchanged.

    Values without special characters are returned as-is, values without a
    single quote are quoted, anything else is backslash escaped.
    """
    if not any(_is_value_special(ch) for ch in value):
        return value
    if "'" not in value:
        return f"'{value}'"
    return "".join("\\" + ch if _is_value_special(ch) else ch for ch in value)


class _State(Enum):
    START = auto()
    PENDING_AND = auto()
    PENDING_OR = auto()
    OPERAND_NAME = auto()
    OPERAND_VALUE = auto()
    QUOTED_VALUE = auto()
    ESCAPED_VALUE = auto()
    ESCAPED_RUNE = auto()


class Tokenizer:
    """
    State machine tokenizer.

    A Tokenizer may be reused, each call to ``run`` starts afresh.
    """

    def __init__(self) -> None:
        self._seen: List[str] = []
        self._tokens: List[Token] = []
        self._text = ""
        self._pos = 0
        self._handlers: Dict[_State, Callable[[str], _State]] = {
            _State.START: self._start,
            _State.PENDING_AND: self._pending_and,
            _State.PENDING_OR: self._pending_or,
            _State.OPERAND_NAME: self._operand_name,
            _State.OPERAND_VALUE: self._operand_value,
            _State.QUOTED_VALUE: self._quoted_value,
            _State.ESCAPED_VALUE: self._escaped_value,
            _State.ESCAPED_RUNE: self._escaped_rune,
        }

    def run(self, text: str) -> List[Token]:
        """
        Tokenize text.

        Raises:
            TokenizeError: If text is not lexically valid.
        """
        self._seen = []
        self._tokens = []
        self._text = text

        state = _State.START
        for pos, ch in enumerate(text):
            self._pos = pos
            state = self._handlers[state](ch)

        self._pos = len(text)
        if state is _State.OPERAND_NAME:
            self._append_operand_name()
        elif state in (_State.OPERAND_VALUE, _State.ESCAPED_VALUE):
            self._append_operand_value()
        elif state is _State.PENDING_AND:
            raise self._error("incomplete operator: &")
        elif state is _State.PENDING_OR:
            raise self._error("incomplete operator: |")
        elif state is _State.QUOTED_VALUE:
            raise self._error(f"missing close quote: {''.join(self._seen)}")
        elif state is _State.ESCAPED_RUNE:
            raise self._error("missing escaped rune")
        return list(self._tokens)

    def _error(self, message: str) -> TokenizeError:
        return TokenizeError(message, position=self._pos, text=self._text)

    def _append_operator(self, text: str) -> None:
        self._tokens.append(Token(text, TokenKind.OPERATOR))

    def _append_operand_name(self) -> None:
        self._tokens.append(Token("".join(self._seen), TokenKind.OPERAND_NAME))
        self._seen = []

    def _append_operand_value(self) -> None:
        self._tokens.append(Token("".join(self._seen), TokenKind.OPERAND_VALUE))
        self._seen = []

    def _start(self, ch: str) -> _State:
        if ch.isspace():
            return _State.START
        if ch in "()!":
            self._append_operator(ch)
            return _State.START
        if ch == "&":
            return _State.PENDING_AND
        if ch == "|":
            return _State.PENDING_OR
        if ch.isalpha():
            self._seen.append(ch)
            return _State.OPERAND_NAME
        raise self._error(f"unexpected character: {ch}")

    def _pending_and(self, ch: str) -> _State:
        if ch == "&":
            self._append_operator("&&")
            return _State.START
        raise self._error("& is not a valid operator, should be &&")

    def _pending_or(self, ch: str) -> _State:
        if ch == "|":
            self._append_operator("||")
            return _State.START
        raise self._error("| is not a valid operator, should be ||")

    def _operand_name(self, ch: str) -> _State:
        if ch == "=":
            self._append_operand_name()
            return _State.OPERAND_VALUE
        if ch.isalnum() or ch in "-_":
            self._seen.append(ch)
            return _State.OPERAND_NAME
        name = "".join(self._seen)
        raise self._error(f"\"{name}\": expected =, got '{ch}'")

    def _value_char(self, ch: str) -> _State:
        """Handle a character of a bare value, terminating it if need be."""
        if ch.isspace():
            self._append_operand_value()
            return _State.START
        if ch in "()":
            self._append_operand_value()
            self._append_operator(ch)
            return _State.START
        if ch == "&":
            self._append_operand_value()
            return _State.PENDING_AND
        if ch == "|":
            self._append_operand_value()
            return _State.PENDING_OR
        self._seen.append(ch)
        return _State.ESCAPED_VALUE

    def _operand_value(self, ch: str) -> _State:
        if ch == "'":
            return _State.QUOTED_VALUE
        if ch == "\\":
            return _State.ESCAPED_RUNE
        return self._value_char(ch)

    def _quoted_value(self, ch: str) -> _State:
        if ch == "'":
            self._append_operand_value()
            return _State.START
        self._seen.append(ch)
        return _State.QUOTED_VALUE

    def _escaped_value(self, ch: str) -> _State:
        if ch == "\\":
            return _State.ESCAPED_RUNE
        return self._value_char(ch)

    def _escaped_rune(self, ch: str) -> _State:
        # always returns to ESCAPED_VALUE
        self._seen.append(ch)
        return _State.ESCAPED_VALUE


def tokenize(text: str) -> List[Token]:
    """Tokenize text with a fresh Tokenizer."""
    return Tokenizer().run(text)
