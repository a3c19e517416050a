"""
Shared fixtures for boolexpr tests.
"""

import pytest

from backend.boolexpr import Parser

from helpers import RegexOperand, split_items


@pytest.fixture
def items():
    """Fixture returning the split_items helper."""
    return split_items


@pytest.fixture
def parser():
    """Parser with the re operand registered."""
    p = Parser()
    p.register_operand("re", lambda n, v: RegexOperand(n, v))
    return p
