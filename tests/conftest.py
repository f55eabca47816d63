"""
Shared fixtures for texlayout tests.
"""

import sys
from pathlib import Path

import pytest

# Add package root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from texlayout.atoms import Atom, CharAtom, EmptyAtom, RowAtom
from texlayout.core import FormulaParser
from texlayout.env import Environment, TableFontMetrics
from texlayout.models import TexStyle
from texlayout.utils.errors import ParseError


@pytest.fixture(scope="session")
def metrics():
    """Bundled metrics table, loaded once."""
    return TableFontMetrics()


@pytest.fixture
def env(metrics):
    """Text style at 10pt."""
    return Environment(metrics, style=TexStyle.TEXT)


@pytest.fixture
def display_env(metrics):
    return Environment(metrics, style=TexStyle.DISPLAY)


@pytest.fixture
def script_env(metrics):
    return Environment(metrics, style=TexStyle.SCRIPT)


class CharParser(FormulaParser):
    """
    Minimal parser for tests: one char atom per character.

    Text containing ``!`` is rejected. Counts calls in ``calls``.
    """

    name = "chars"

    def __init__(self):
        self.calls = 0

    def parse(self, text: str, partial: bool = False, ignore_whitespace: bool = False) -> Atom:
        self.calls += 1
        if "!" in text:
            raise ParseError(f"Unexpected '!' in {text!r}", latex=text)
        chars = [ch for ch in text if not (ignore_whitespace and ch.isspace())]
        if not chars:
            return EmptyAtom()
        if len(chars) == 1:
            return CharAtom(chars[0])
        return RowAtom(CharAtom(ch) for ch in chars)


@pytest.fixture
def char_parser():
    return CharParser()
