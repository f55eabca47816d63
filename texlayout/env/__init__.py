"""Environment layer: styles, units and font metrics."""

from .environment import Environment
from .metrics import (
    UNDEFINED_MATH_VALUE,
    FontMetrics,
    GlyphMetrics,
    MathConstants,
    TableFontMetrics,
    is_undefined,
)
from .units import fsize, parse_dimen, parse_options

__all__ = [
    "Environment",
    "UNDEFINED_MATH_VALUE",
    "FontMetrics",
    "GlyphMetrics",
    "MathConstants",
    "TableFontMetrics",
    "is_undefined",
    "fsize",
    "parse_dimen",
    "parse_options",
]
