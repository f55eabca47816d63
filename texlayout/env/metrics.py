"""
Font metrics provider.

The layout engine only needs glyph boxes, stretchy variants and the
OpenType MATH constants. `FontMetrics` is the interface an external font
backend implements; `TableFontMetrics` is a table-driven implementation
loaded from JSON, shipped so the engine works without a font library.
All values are in em (fractions of the font size).
"""

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

# Reserved value meaning "attachment point undefined"
UNDEFINED_MATH_VALUE = -(2**31)


def is_undefined(value: float) -> bool:
    return value == UNDEFINED_MATH_VALUE


@dataclass(frozen=True)
class GlyphMetrics:
    """Metrics of one glyph (or one size variant of it)."""

    char: str
    width: float
    height: float
    depth: float
    italic: float = 0.0
    top_accent: float = UNDEFINED_MATH_VALUE
    variant: int = 0  # 0 is the base glyph, n the n-th larger variant

    @property
    def vlen(self) -> float:
        return self.height + self.depth


@dataclass(frozen=True)
class MathConstants:
    """
    Subset of the OpenType MATH constants table used by the layout engine.

    Percentages are given as factors (0.7 rather than 70).
    """

    axis_height: float = 0.25
    x_height: float = 0.430555
    quad: float = 1.0
    default_rule_thickness: float = 0.04
    fraction_rule_thickness: float = 0.04
    overbar_rule_thickness: float = 0.04
    underbar_rule_thickness: float = 0.04
    script_percent_scale_down: float = 0.7
    script_script_percent_scale_down: float = 0.5
    subscript_shift_down: float = 0.15
    subscript_top_max: float = 0.344
    subscript_baseline_drop_min: float = 0.05
    superscript_shift_up: float = 0.363
    superscript_shift_up_cramped: float = 0.289
    superscript_bottom_min: float = 0.108
    superscript_baseline_drop_max: float = 0.386
    superscript_bottom_max_with_subscript: float = 0.344
    sub_superscript_gap_min: float = 0.16
    space_after_script: float = 0.056
    upper_limit_gap_min: float = 0.2
    upper_limit_baseline_rise_min: float = 0.111
    lower_limit_gap_min: float = 0.167
    lower_limit_baseline_drop_min: float = 0.6
    display_operator_min_height: float = 1.3

    @classmethod
    def from_dict(cls, data: Dict[str, float]) -> "MathConstants":
        """Build from a mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            logger.debug(f"Ignoring unknown math constants: {sorted(unknown)}")
        return cls(**{k: float(v) for k, v in data.items() if k in known})


class FontMetrics(ABC):
    """
    Interface to a math font.

    Implementations must be read-only once constructed; one instance is
    shared by every environment derived from it.
    """

    name: str = "FontMetrics"

    @property
    @abstractmethod
    def math_constants(self) -> MathConstants:
        """The font's math constants."""
        pass

    @abstractmethod
    def glyph(self, char: str) -> GlyphMetrics:
        """Metrics of the base glyph for ``char``."""
        pass

    @abstractmethod
    def h_variants(self, char: str) -> List[GlyphMetrics]:
        """
        Horizontally growing variants of ``char``, narrowest first.

        The first entry is always the base glyph.
        """
        pass

    @abstractmethod
    def v_variants(self, char: str) -> List[GlyphMetrics]:
        """
        Vertically growing variants of ``char``, smallest first.

        The first entry is always the base glyph.
        """
        pass

    def has_glyph(self, char: str) -> bool:
        return True


class TableFontMetrics(FontMetrics):
    """
    Font metrics read from a JSON table.

    Glyphs are stored as ``[width, height, depth, italic?, top_accent?]``;
    variants as lists of such entries. Characters missing from the table
    use ``default_glyph``.

    Usage:
        metrics = TableFontMetrics()
        g = metrics.glyph("x")
        print(g.width, g.height)
    """

    DEFAULT_PATH = Path(__file__).parent.parent / "config" / "default_metrics.json"

    def __init__(self, metrics_path: Optional[Path] = None):
        """
        Load metrics from JSON.

        Args:
            metrics_path: Path to a metrics table; uses the bundled table if None
        """
        self.path = Path(metrics_path) if metrics_path else self.DEFAULT_PATH
        self._glyphs: Dict[str, GlyphMetrics] = {}
        self._h_variants: Dict[str, List[GlyphMetrics]] = {}
        self._v_variants: Dict[str, List[GlyphMetrics]] = {}
        self._constants = MathConstants()
        self._default = [0.5, 0.7, 0.0]

        self._load_metrics()

    def _load_metrics(self):
        """Load and parse the metrics table."""
        if not self.path.exists():
            raise FileNotFoundError(f"Font metrics not found: {self.path}")

        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)

        self.name = data.get("name", self.path.stem)
        self._constants = MathConstants.from_dict(data.get("constants", {}))
        self._default = data.get("default_glyph", self._default)

        for char, entry in data.get("glyphs", {}).items():
            self._glyphs[char] = self._make_glyph(char, entry)

        for char, entries in data.get("h_variants", {}).items():
            self._h_variants[char] = self._make_variants(char, entries)

        for char, entries in data.get("v_variants", {}).items():
            self._v_variants[char] = self._make_variants(char, entries)

        logger.debug(
            f"Loaded metrics '{self.name}': {len(self._glyphs)} glyphs, "
            f"{len(self._h_variants)} horizontal and {len(self._v_variants)} vertical variant families"
        )

    @staticmethod
    def _make_glyph(char: str, entry: List[float], variant: int = 0) -> GlyphMetrics:
        width, height, depth = entry[0], entry[1], entry[2]
        italic = entry[3] if len(entry) > 3 else 0.0
        top = entry[4] if len(entry) > 4 and entry[4] is not None else UNDEFINED_MATH_VALUE
        return GlyphMetrics(char, width, height, depth, italic, top, variant)

    def _make_variants(self, char: str, entries: List[List[float]]) -> List[GlyphMetrics]:
        variants = [self.glyph(char)]
        for i, entry in enumerate(entries, 1):
            variants.append(self._make_glyph(char, entry, variant=i))
        return variants

    @property
    def math_constants(self) -> MathConstants:
        return self._constants

    def glyph(self, char: str) -> GlyphMetrics:
        g = self._glyphs.get(char)
        if g is None:
            return self._make_glyph(char, self._default)
        return g

    def h_variants(self, char: str) -> List[GlyphMetrics]:
        return self._h_variants.get(char) or [self.glyph(char)]

    def v_variants(self, char: str) -> List[GlyphMetrics]:
        return self._v_variants.get(char) or [self.glyph(char)]

    def has_glyph(self, char: str) -> bool:
        return char in self._glyphs

    def __len__(self) -> int:
        return len(self._glyphs)
