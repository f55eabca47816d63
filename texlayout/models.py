"""
Core data structures for texlayout.

These enums and dataclasses define the contract between the atom layer,
the box layer and the environment.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum, auto
from typing import Any, Optional


class AtomType(IntEnum):
    """
    TeX atom classes.

    The first eight values index the inter-atom spacing table, so their
    order must not change.
    """

    ORDINARY = 0
    BIG_OPERATOR = 1
    BINARY_OPERATOR = 2
    RELATION = 3
    OPENING = 4
    CLOSING = 5
    PUNCTUATION = 6
    INNER = 7
    ACCENT = 10
    INTER_TEXT = 11
    UNDER = 12
    OVER = 13
    HLINE = 14
    MULTICOLUMN = 15
    NONE = -1

    @classmethod
    def from_name(cls, name: str) -> "AtomType":
        """Look up an atom type by its short symbol-table name ("ord", "bin", ...)."""
        from .utils.errors import InvalidAtomTypeError

        try:
            return _ATOM_TYPE_NAMES[name]
        except KeyError:
            raise InvalidAtomTypeError(name) from None


_ATOM_TYPE_NAMES = {
    "ord": AtomType.ORDINARY,
    "op": AtomType.BIG_OPERATOR,
    "bin": AtomType.BINARY_OPERATOR,
    "rel": AtomType.RELATION,
    "open": AtomType.OPENING,
    "close": AtomType.CLOSING,
    "punct": AtomType.PUNCTUATION,
    "inner": AtomType.INNER,
    "acc": AtomType.ACCENT,
    "intertext": AtomType.INTER_TEXT,
}


class TexStyle(IntEnum):
    """
    The eight TeX math styles.

    A bigger value means a smaller rendering; odd values are cramped.
    """

    DISPLAY = 0
    DISPLAY_CRAMPED = 1
    TEXT = 2
    TEXT_CRAMPED = 3
    SCRIPT = 4
    SCRIPT_CRAMPED = 5
    SCRIPT_SCRIPT = 6
    SCRIPT_SCRIPT_CRAMPED = 7

    @property
    def is_cramped(self) -> bool:
        return self % 2 == 1

    @property
    def is_script(self) -> bool:
        """True for script and scriptscript styles (tight spacing)."""
        return self >= TexStyle.SCRIPT

    def cramped(self) -> "TexStyle":
        return TexStyle(2 * (self // 2) + 1)

    def sub(self) -> "TexStyle":
        return TexStyle(2 * (self // 4) + 5)

    def sub_sub(self) -> "TexStyle":
        return self.sub().sub()

    def sup(self) -> "TexStyle":
        return TexStyle(2 * (self // 4) + 4 + self % 2)

    def numerator(self) -> "TexStyle":
        return TexStyle(self + 2 - 2 * (self // 6))

    def denominator(self) -> "TexStyle":
        return TexStyle(2 * (self // 2) + 3 - 2 * (self // 6))


class Alignment(Enum):
    """Horizontal and vertical alignment modes."""

    NONE = auto()
    LEFT = auto()
    RIGHT = auto()
    CENTER = auto()
    TOP = auto()
    BOTTOM = auto()


class UnitType(Enum):
    """Units a `Dimen` may be expressed in."""

    EM = "em"
    EX = "ex"
    POINT = "pt"
    PIXEL = "px"
    PICA = "pc"
    MU = "mu"
    CM = "cm"
    MM = "mm"
    IN = "in"
    BP = "bp"


class Rotation(Enum):
    """
    Named rotation origins.

    The first letter is the vertical anchor (b=bottom, B=baseline,
    c=center, t=top), the second the horizontal one (l, c, r).
    """

    BL = "bl"
    BC = "bc"
    BR = "br"
    TL = "tl"
    TC = "tc"
    TR = "tr"
    BASELINE_LEFT = "Bl"
    BASELINE_CENTER = "Bc"
    BASELINE_RIGHT = "Br"
    CL = "cl"
    CC = "cc"
    CR = "cr"
    NONE = "none"


class CancelType(Enum):
    """Overlay lines drawn by a cancel atom."""

    SLASH = auto()
    BACKSLASH = auto()
    CROSS = auto()


class SpaceType(Enum):
    """Named math spaces, in mu."""

    THIN_MU_SKIP = 3.0
    MED_MU_SKIP = 4.0
    THICK_MU_SKIP = 5.0
    NEG_THIN_MU_SKIP = -3.0
    QUAD = 18.0
    QQUAD = 36.0


@dataclass(frozen=True)
class Dimen:
    """A length with its unit, e.g. ``Dimen(1.5, UnitType.EM)``."""

    value: float
    unit: UnitType = UnitType.POINT

    def __neg__(self) -> "Dimen":
        return Dimen(-self.value, self.unit)

    def __str__(self) -> str:
        return f"{self.value:g}{self.unit.value}"


@dataclass
class CellSpecifier:
    """
    A per-row or per-cell option of an array (colour, alignment, ...).

    The layout engine only stores these; table environments interpret them.
    """

    name: str
    value: Optional[Any] = None
