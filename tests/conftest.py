"""Pytest configuration for the minicpp test suite."""

import sys
from pathlib import Path

import pytest

# Allow running the suite from a checkout without installing
sys.path.insert(0, str(Path(__file__).parent.parent))

from minicpp.compiler import Compiler  # noqa: E402
from minicpp.lexer import tokenize  # noqa: E402
from minicpp.parser import Parser  # noqa: E402


@pytest.fixture
def compiler():
    return Compiler()


@pytest.fixture
def run(compiler):
    """Compile and execute a source string, returning its output."""

    def _run(source, inputText=""):
        return compiler.run(source, inputText)

    return _run


@pytest.fixture
def expr():
    """Parse a lone expression and return its rendered source form."""

    def _expr(text):
        parser = Parser(tokenize(text))
        node = parser.parseExpression()
        assert parser.currentToken() is None, "trailing tokens after " + text
        return node.render()

    return _expr
