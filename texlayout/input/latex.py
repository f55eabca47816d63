"""
LaTeX to atom tree parser.

Parses LaTeX with SymPy and converts the expression tree into atoms. The
SymPy LaTeX frontend needs ``antlr4-python3-runtime`` at parse time (the
``latex`` extra).
"""

import logging
from typing import Optional

import sympy as sp
from sympy.parsing.latex import parse_latex
from sympy.parsing.latex.errors import LaTeXParsingError

from ..atoms import Atom, EmptyAtom
from ..core.parser import FormulaParser
from ..utils.errors import ParseError
from .sympy_atoms import AtomBuilder

logger = logging.getLogger(__name__)


class SympyLatexParser(FormulaParser):
    """
    Parse LaTeX strings into atom trees.

    Usage:
        parser = SympyLatexParser()
        atom = parser.parse(r"E = mc^2")
        box = atom.create_box(env)
    """

    name = "sympy-latex"

    # Explicit spacing commands, dropped when whitespace is not significant
    SPACING_COMMANDS = [r"\ ", r"\,", r"\;", r"\:", r"\!", "~"]

    def __init__(self, builder: Optional[AtomBuilder] = None):
        self.builder = builder or AtomBuilder()

    def parse(self, text: str, partial: bool = False, ignore_whitespace: bool = False) -> Atom:
        """
        Parse LaTeX into an atom tree.

        Args:
            text: LaTeX string (e.g., r"E = mc^2")
            partial: Retry with balanced braces before giving up
            ignore_whitespace: Drop explicit spacing commands

        Returns:
            Root atom; `EmptyAtom` for blank input.

        Raises:
            ParseError: If parsing fails with details about the error.
            InvalidParameterError: If the formula uses a construct that
                has no layout counterpart.
        """
        cleaned = self._preprocess(text, ignore_whitespace)
        if not cleaned:
            return EmptyAtom()

        try:
            expr = self._parse_latex(cleaned)
        except ParseError:
            if not partial:
                raise
            balanced = self._balance_braces(cleaned)
            if balanced == cleaned:
                raise
            logger.debug(f"Retrying partial parse with balanced braces: {balanced!r}")
            expr = self._parse_latex(balanced)

        return self.builder.build(expr)

    def _parse_latex(self, latex: str) -> sp.Basic:
        try:
            return parse_latex(latex, strict=True)
        except LaTeXParsingError as e:
            raise ParseError(
                f"Failed to parse LaTeX: {e}",
                latex=latex,
                suggestion=self._suggest_fix(latex, str(e)),
            )
        except Exception as e:
            raise ParseError(f"Unexpected parsing error: {e}", latex=latex)

    def _preprocess(self, latex: str, ignore_whitespace: bool = False) -> str:
        """
        Clean and normalize LaTeX for parsing.
        """
        result = latex.strip()

        # Remove display math delimiters if present
        for delim in [r"\[", r"\]", r"$$", r"$", r"\(", r"\)"]:
            result = result.replace(delim, "")

        if ignore_whitespace:
            for command in self.SPACING_COMMANDS:
                result = result.replace(command, " ")

        # Normalize whitespace
        result = " ".join(result.split())

        return result

    @staticmethod
    def _balance_braces(latex: str) -> str:
        """Append the closing braces an unfinished formula is missing."""
        missing = latex.count("{") - latex.count("}")
        if missing > 0:
            return latex + "}" * missing
        return latex

    def _suggest_fix(self, latex: str, error_msg: str) -> Optional[str]:
        """
        Suggest a fix based on the error message.
        """
        # Check for unbalanced braces
        open_count = latex.count("{")
        close_count = latex.count("}")
        if open_count != close_count:
            diff = open_count - close_count
            if diff > 0:
                return f"Missing {diff} closing brace(s) '}}'"
            else:
                return f"Missing {-diff} opening brace(s) '{{'"

        if "Expected" in error_msg:
            return "Check for missing operators or malformed commands"

        return None


def latex_to_atom(latex: str) -> Atom:
    """
    Convenience function: parse LaTeX directly to an atom tree.

    Raises ParseError on failure.
    """
    return SympyLatexParser().parse(latex)
