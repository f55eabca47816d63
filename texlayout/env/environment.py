"""
Layout environment.

An `Environment` is the read-only context threaded through every layout
call: current style, text size, font metrics and output resolution.
Style transitions return new environments; the caller's is never changed.
"""

from dataclasses import dataclass, field, replace

from ..boxes import CharBox
from ..models import Dimen, TexStyle, UnitType
from ..utils.constants import DEFAULT_TEXT_SIZE
from .metrics import FontMetrics, GlyphMetrics, MathConstants, TableFontMetrics
from .units import fsize


@dataclass(frozen=True)
class Environment:
    """
    Style, size and font context for layout.

    All length accessors return points already scaled for the current
    style, so callers never multiply by the size themselves.

    Usage:
        env = Environment(TableFontMetrics(), style=TexStyle.DISPLAY)
        sub_env = env.sub_style()
        print(env.axis_height, sub_env.axis_height)
    """

    metrics: FontMetrics = field(default_factory=TableFontMetrics)
    style: TexStyle = TexStyle.TEXT
    text_size: float = DEFAULT_TEXT_SIZE  # pt
    pixels_per_point: float = 1.0
    interline: Dimen = Dimen(1.0, UnitType.EX)

    # === Style transitions ===

    def with_style(self, style: TexStyle) -> "Environment":
        if style == self.style:
            return self
        return replace(self, style=TexStyle(style))

    def cramped_style(self) -> "Environment":
        return self.with_style(self.style.cramped())

    def sub_style(self) -> "Environment":
        return self.with_style(self.style.sub())

    def sub_sub_style(self) -> "Environment":
        return self.with_style(self.style.sub_sub())

    def sup_style(self) -> "Environment":
        return self.with_style(self.style.sup())

    # === Sizes ===

    @property
    def constants(self) -> MathConstants:
        return self.metrics.math_constants

    @property
    def scale(self) -> float:
        """Size factor of the current style relative to text size."""
        if self.style >= TexStyle.SCRIPT_SCRIPT:
            return self.constants.script_script_percent_scale_down
        if self.style >= TexStyle.SCRIPT:
            return self.constants.script_percent_scale_down
        return 1.0

    @property
    def size(self) -> float:
        """Current font size in points."""
        return self.text_size * self.scale

    def em(self, value: float) -> float:
        """Convert an em value from the metrics table to points."""
        return value * self.size

    @property
    def axis_height(self) -> float:
        return self.em(self.constants.axis_height)

    @property
    def x_height(self) -> float:
        return self.em(self.constants.x_height)

    @property
    def quad(self) -> float:
        return self.em(self.constants.quad)

    @property
    def rule_thickness(self) -> float:
        return self.em(self.constants.default_rule_thickness)

    @property
    def fraction_rule_thickness(self) -> float:
        return self.em(self.constants.fraction_rule_thickness)

    @property
    def overbar_rule_thickness(self) -> float:
        return self.em(self.constants.overbar_rule_thickness)

    @property
    def underbar_rule_thickness(self) -> float:
        return self.em(self.constants.underbar_rule_thickness)

    @property
    def line_space(self) -> float:
        return fsize(self.interline, self)

    def size_of(self, dimen: Dimen) -> float:
        return fsize(dimen, self)

    # === Glyphs ===

    def glyph_box(self, glyph: GlyphMetrics) -> CharBox:
        """Build a box for ``glyph`` at the current size."""
        return CharBox(
            glyph.char,
            self.em(glyph.width),
            self.em(glyph.height),
            self.em(glyph.depth),
            italic=self.em(glyph.italic),
            size=self.size,
        )

    def char_box(self, char: str) -> CharBox:
        return self.glyph_box(self.metrics.glyph(char))
