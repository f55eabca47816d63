"""
Inter-atom glue.

Looks up the TeX spacing table for a pair of adjacent atom types.
"""

from typing import Optional

from ..boxes import GlueBox
from ..models import AtomType, Dimen, UnitType
from ..utils.constants import GLUE_FLEX, GLUE_SPACES, GLUE_TABLE, SPACING_TYPES


def glue_code(left: AtomType, right: AtomType) -> str:
    """Spacing-table entry for ``left`` followed by ``right``."""
    if left not in SPACING_TYPES:
        left = AtomType.ORDINARY
    if right not in SPACING_TYPES:
        right = AtomType.ORDINARY
    return GLUE_TABLE[left][right]


def create_glue(left: AtomType, right: AtomType, env) -> Optional[GlueBox]:
    """
    Glue to insert between an atom of type ``left`` and one of type ``right``.

    Returns:
        A GlueBox, or None when the pair gets no space in ``env``'s style
    """
    code = glue_code(left, right)
    space = GLUE_SPACES.get(code)
    if space is None:
        return None
    if code.isalpha() and env.style.is_script:
        return None
    stretch, shrink = GLUE_FLEX[space]
    return GlueBox(
        env.size_of(Dimen(space.value, UnitType.MU)),
        env.size_of(Dimen(stretch, UnitType.MU)),
        env.size_of(Dimen(shrink, UnitType.MU)),
    )
