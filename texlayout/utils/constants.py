"""
Layout constants.

TeX inter-atom spacing table and a few fixed kerns from the TeXbook.
"""

from ..models import AtomType, Dimen, SpaceType, UnitType


# Inter-atom spacing, TeXbook chapter 18. Rows are the left atom type,
# columns the right one, both in AtomType order (ord, op, bin, rel, open,
# close, punct, inner). "0" means no space, "1"/"2"/"3" thin/medium/thick,
# an upper-case letter means the space is dropped in script styles and
# "*" marks impossible pairs.
GLUE_TABLE = [
    "01BC000A",  # ord
    "11*C000A",  # op
    "BB**B**B",  # bin
    "CC*0C00C",  # rel
    "00*00000",  # open
    "01BC000A",  # close
    "AA*AAAAA",  # punct
    "A1BCA0AA",  # inner
]

GLUE_SPACES = {
    "1": SpaceType.THIN_MU_SKIP,
    "2": SpaceType.MED_MU_SKIP,
    "3": SpaceType.THICK_MU_SKIP,
    "A": SpaceType.THIN_MU_SKIP,
    "B": SpaceType.MED_MU_SKIP,
    "C": SpaceType.THICK_MU_SKIP,
}

# Types taking part in the spacing table; everything else spaces as ord.
SPACING_TYPES = frozenset(
    [
        AtomType.ORDINARY,
        AtomType.BIG_OPERATOR,
        AtomType.BINARY_OPERATOR,
        AtomType.RELATION,
        AtomType.OPENING,
        AtomType.CLOSING,
        AtomType.PUNCTUATION,
        AtomType.INNER,
    ]
)

# \underscore: rule width and leading kern
UNDERSCORE_WIDTH = Dimen(0.7, UnitType.EM)
UNDERSCORE_KERN = Dimen(0.06, UnitType.EM)

# Long division: scale of the bracket glyph and the struts padding each trace row
LONG_DIV_SYMBOL_SCALE = 1.2
LONG_DIV_ROW_HEIGHT = Dimen(2.0, UnitType.EX)
LONG_DIV_ROW_DEPTH = Dimen(0.4, UnitType.EX)

# Gap inserted between a direct accent and its accentee
DIRECT_ACCENT_GAP = Dimen(1.0, UnitType.MU)

# Points per inch, used by the DPI setter
POINTS_PER_INCH = 72.0

DEFAULT_TEXT_SIZE = 10.0  # pt

# Stretch and shrink of the math skips, in mu
GLUE_FLEX = {
    SpaceType.THIN_MU_SKIP: (0.0, 0.0),
    SpaceType.MED_MU_SKIP: (2.0, 4.0),
    SpaceType.THICK_MU_SKIP: (5.0, 0.0),
}

# Gaps of \overset/\underset style constructs, in mu
UNDER_OVER_GAP = Dimen(3.0, UnitType.MU)
