"""Core layer: formulas, the parser interface and the layout context."""

from .context import (
    DEFAULT_FONT_INFOS,
    FontInfos,
    LayoutContext,
    UnicodeBlock,
    get_default_context,
)
from .formula import ArrayFormula, Formula, ParseResult, layout, parse_formula
from .parser import FormulaParser

__all__ = [
    "ArrayFormula",
    "DEFAULT_FONT_INFOS",
    "FontInfos",
    "Formula",
    "FormulaParser",
    "LayoutContext",
    "ParseResult",
    "UnicodeBlock",
    "get_default_context",
    "layout",
    "parse_formula",
]
