"""
Layout context: the registries shared by every formula.

Predefined formulas, external fonts per Unicode block, named colors and the
output resolution live in one `LayoutContext`. It is initialized explicitly
(or used as a context manager) and is not meant for concurrent writers;
callers serialise registration.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Union

from ..atoms import AtomKind
from ..env import Environment, FontMetrics, TableFontMetrics
from ..models import AtomType, TexStyle
from ..utils.constants import DEFAULT_TEXT_SIZE, POINTS_PER_INCH
from ..utils.errors import FormulaNotFoundError, InvalidParameterError
from .formula import Formula
from .parser import FormulaParser

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UnicodeBlock:
    """A named range of code points."""

    name: str
    start: int
    end: int

    def contains(self, char: str) -> bool:
        return self.start <= ord(char) <= self.end

    @classmethod
    def of(cls, char: str) -> "UnicodeBlock":
        """Block containing ``char``; `UNKNOWN_BLOCK` if none matches."""
        for block in UNICODE_BLOCKS:
            if block.contains(char):
                return block
        return UNKNOWN_BLOCK


UNICODE_BLOCKS = [
    UnicodeBlock("BASIC_LATIN", 0x0000, 0x007F),
    UnicodeBlock("LATIN_1_SUPPLEMENT", 0x0080, 0x00FF),
    UnicodeBlock("LATIN_EXTENDED_A", 0x0100, 0x017F),
    UnicodeBlock("COMBINING_DIACRITICAL_MARKS", 0x0300, 0x036F),
    UnicodeBlock("GREEK", 0x0370, 0x03FF),
    UnicodeBlock("CYRILLIC", 0x0400, 0x04FF),
    UnicodeBlock("GENERAL_PUNCTUATION", 0x2000, 0x206F),
    UnicodeBlock("LETTERLIKE_SYMBOLS", 0x2100, 0x214F),
    UnicodeBlock("ARROWS", 0x2190, 0x21FF),
    UnicodeBlock("MATHEMATICAL_OPERATORS", 0x2200, 0x22FF),
    UnicodeBlock("MISCELLANEOUS_TECHNICAL", 0x2300, 0x23FF),
    UnicodeBlock("HIRAGANA", 0x3040, 0x309F),
    UnicodeBlock("KATAKANA", 0x30A0, 0x30FF),
    UnicodeBlock("CJK_UNIFIED_IDEOGRAPHS", 0x4E00, 0x9FFF),
    UnicodeBlock("HANGUL_SYLLABLES", 0xAC00, 0xD7AF),
    UnicodeBlock("MATHEMATICAL_ALPHANUMERIC_SYMBOLS", 0x1D400, 0x1D7FF),
]

UNKNOWN_BLOCK = UnicodeBlock("UNKNOWN", -1, -1)


@dataclass(frozen=True)
class FontInfos:
    """Font family names used for text in a Unicode block."""

    sansserif: str
    serif: str


DEFAULT_FONT_INFOS = FontInfos("SansSerif", "Serif")


class LayoutContext:
    """
    Registries and settings shared by the formulas of one host.

    Usage:
        with LayoutContext(parser=SympyLatexParser()) as ctx:
            ctx.register_color("brand", "#336699")
            formula = ctx.get_formula("pythagoras")
            box = layout(formula, ctx.create_environment())
    """

    FORMULAS_PATH = Path(__file__).parent.parent / "config" / "predefined_formulas.json"
    COLORS_PATH = Path(__file__).parent.parent / "config" / "colors.json"

    def __init__(
        self,
        parser: Optional[FormulaParser] = None,
        metrics: Optional[FontMetrics] = None,
        load_defaults: bool = True,
    ):
        """
        Args:
            parser: Parser for predefined formulas given as text
            metrics: Font metrics for environments; the bundled table if None
            load_defaults: Load the bundled colors and predefined formulas
                on `initialize`
        """
        self.parser = parser
        self._metrics = metrics
        self.load_defaults = load_defaults
        self.pixels_per_point = 1.0
        self._formula_sources: Dict[str, str] = {}
        self._formulas: Dict[str, Formula] = {}
        self._fonts: Dict[UnicodeBlock, FontInfos] = {}
        self._colors: Dict[str, str] = {}
        self._initialized = False

    # === Lifecycle ===

    def initialize(self) -> "LayoutContext":
        """Populate the registries with the bundled defaults."""
        if self._initialized:
            return self
        if self.load_defaults:
            for name, source in self._load_json(self.FORMULAS_PATH).items():
                self._formula_sources[name] = source
            for name, value in self._load_json(self.COLORS_PATH).items():
                self._colors[name] = value
        self._initialized = True
        logger.debug(
            f"Layout context ready: {len(self._formula_sources)} predefined formulas, "
            f"{len(self._colors)} colors"
        )
        return self

    def close(self):
        """Drop every registration and reset the resolution."""
        self._formula_sources.clear()
        self._formulas.clear()
        self._fonts.clear()
        self._colors.clear()
        self.pixels_per_point = 1.0
        self._initialized = False
        logger.debug("Layout context closed")

    @property
    def initialized(self) -> bool:
        return self._initialized

    def __enter__(self) -> "LayoutContext":
        return self.initialize()

    def __exit__(self, exc_type, exc, tb):
        self.close()

    @staticmethod
    def _load_json(path: Path) -> Dict[str, str]:
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)

    # === Metrics and environments ===

    @property
    def metrics(self) -> FontMetrics:
        if self._metrics is None:
            self._metrics = TableFontMetrics()
        return self._metrics

    def set_dpi_target(self, dpi: float):
        """
        Set the output resolution for environments created afterwards.

        Raises:
            InvalidParameterError: If ``dpi`` is not positive
        """
        if dpi <= 0:
            raise InvalidParameterError(f"DPI must be positive, got {dpi}")
        self.pixels_per_point = dpi / POINTS_PER_INCH
        logger.debug(f"Pixels per point set to {self.pixels_per_point:.4f}")

    def create_environment(
        self,
        style: TexStyle = TexStyle.TEXT,
        text_size: float = DEFAULT_TEXT_SIZE,
    ) -> Environment:
        return Environment(
            metrics=self.metrics,
            style=style,
            text_size=text_size,
            pixels_per_point=self.pixels_per_point,
        )

    # === Predefined formulas ===

    def register_formula(self, name: str, formula: Union[str, Formula]):
        """
        Register a predefined formula as source text or as a built formula.

        A later registration under the same name replaces the earlier one.
        """
        if name in self._formula_sources or name in self._formulas:
            logger.debug(f"Overwriting predefined formula '{name}'")
        self._formulas.pop(name, None)
        self._formula_sources.pop(name, None)
        if isinstance(formula, Formula):
            self._formulas[name] = formula.copy()
        else:
            self._formula_sources[name] = formula

    def get_formula(self, name: str) -> Formula:
        """
        Independent copy of a predefined formula.

        Source text is parsed on first use. The parsed formula is kept for
        later lookups only when its root is not a row; row-rooted formulas
        are parsed again on every lookup.

        Raises:
            FormulaNotFoundError: If ``name`` is not registered
            InvalidParameterError: If the formula must be parsed and no
                parser is configured
        """
        cached = self._formulas.get(name)
        if cached is not None:
            return cached.copy()

        source = self._formula_sources.get(name)
        if source is None:
            raise FormulaNotFoundError(name)
        if self.parser is None:
            raise InvalidParameterError(f"No parser configured to build predefined formula '{name}'")

        formula = Formula.from_text(source, self.parser)
        if formula.root is None or formula.root.kind is not AtomKind.ROW:
            self._formulas[name] = formula
            logger.debug(f"Cached predefined formula '{name}'")
            return formula.copy()
        return formula

    def formula_names(self) -> List[str]:
        return sorted(set(self._formula_sources) | set(self._formulas))

    # === External fonts ===

    def register_external_font(self, block: UnicodeBlock, sansserif: str, serif: Optional[str] = None):
        """Use the given font families for text in ``block``."""
        if block in self._fonts:
            logger.debug(f"Overwriting external font for block {block.name}")
        self._fonts[block] = FontInfos(sansserif, serif or sansserif)

    def is_registered_block(self, block: UnicodeBlock) -> bool:
        return block in self._fonts

    def get_external_font(self, block: UnicodeBlock) -> FontInfos:
        """Fonts for ``block``; an unregistered block gets and keeps the defaults."""
        infos = self._fonts.get(block)
        if infos is None:
            infos = DEFAULT_FONT_INFOS
            self._fonts[block] = infos
        return infos

    # === Colors ===

    def register_color(self, name: str, value: str):
        if name in self._colors:
            logger.debug(f"Overwriting color '{name}'")
        self._colors[name] = value

    def get_color(self, name: str) -> str:
        """
        Resolve a color name; ``#rrggbb`` values pass through.

        Raises:
            InvalidParameterError: If the name is not registered
        """
        if name.startswith("#"):
            return name
        try:
            return self._colors[name]
        except KeyError:
            raise InvalidParameterError(
                f"Unknown color: '{name}'",
                suggestions=["Register it with LayoutContext.register_color()"],
            ) from None

    def apply_colors(self, formula: Formula, foreground: Optional[str] = None, background: Optional[str] = None) -> Formula:
        """Color ``formula`` with registered color names or hex values."""
        if background is not None:
            formula.set_background(self.get_color(background))
        if foreground is not None:
            formula.set_color(self.get_color(foreground))
        return formula

    def fixed_type_formula(self, name: str, left: AtomType, right: AtomType) -> Formula:
        """A predefined formula whose neighbours see it as ``left``/``right``."""
        return self.get_formula(name).set_fixed_types(left, right)


_default_context: Optional[LayoutContext] = None


def get_default_context() -> LayoutContext:
    """Shared context with the bundled defaults and the sympy LaTeX parser."""
    global _default_context
    if _default_context is None:
        from ..input import SympyLatexParser

        _default_context = LayoutContext(parser=SympyLatexParser()).initialize()
    return _default_context
