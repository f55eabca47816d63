"""
texlayout - TeX math-mode layout engine.

Turns formula atom trees into positioned box trees using TeX's math
layout rules and OpenType MATH-style font parameters.

Usage:
    from texlayout import Environment, Formula, layout
    from texlayout.input import SympyLatexParser

    formula = Formula.from_text(r"x^2 + 1", SympyLatexParser())
    box = layout(formula, Environment())
    print(box.describe())
"""

from .core import ArrayFormula, Formula, LayoutContext, get_default_context, layout
from .env import Environment
from .models import AtomType, TexStyle
from .utils.errors import TexLayoutError

__version__ = "0.1.0"

__all__ = [
    "ArrayFormula",
    "AtomType",
    "Environment",
    "Formula",
    "LayoutContext",
    "TexLayoutError",
    "TexStyle",
    "get_default_context",
    "layout",
]
