"""
Stretchy delimiters: ``\\left ... \\middle ... \\right`` and ``\\big`` sizes.
"""

import logging
from typing import List, Optional, Union

from ..boxes import Box, HBox, PlaceholderBox, ScaleBox, StrutBox
from ..env import Environment
from ..models import AtomType
from ..utils.errors import SymbolNotFoundError
from .base import Atom, AtomKind, MiddleAtom, SymbolAtom
from .glue import create_glue
from .symbols import get_symbol

logger = logging.getLogger(__name__)

# Delimiter name meaning "no delimiter"
NULL_DELIMITER = "."

DelimiterSpec = Union[str, SymbolAtom, None]


def resolve_delimiter(delim: DelimiterSpec) -> Optional[SymbolAtom]:
    """
    Turn a delimiter name into its symbol.

    Returns:
        The symbol, or None for an empty name or the null delimiter ``.``

    Raises:
        SymbolNotFoundError: If the name is unknown
    """
    if delim is None or isinstance(delim, SymbolAtom):
        return delim
    if not delim or delim == NULL_DELIMITER:
        return None
    return get_symbol(delim)


def center_on_axis(box: Box, env: Environment):
    """Shift ``box`` so its vertical center sits on the math axis."""
    box.shift = -(box.vlen / 2 - box.height) - env.axis_height


def create_v_delim(symbol: SymbolAtom, env: Environment, height: float) -> Box:
    """
    Delimiter box at least ``height`` points tall (height + depth).

    Picks the first size variant that is tall enough; past the largest
    variant the largest one is scaled vertically.
    """
    variants = env.metrics.v_variants(symbol.char)
    for glyph in variants:
        if env.em(glyph.vlen) >= height:
            return env.glyph_box(glyph)

    box = env.glyph_box(variants[-1])
    if box.vlen <= 0:
        return box
    logger.debug(
        f"Delimiter {symbol.name!r} stretched past its largest variant "
        f"({box.vlen:.3f}pt -> {height:.3f}pt)"
    )
    return ScaleBox(box, 1.0, height / box.vlen)


def create_v_delim_sized(symbol: SymbolAtom, env: Environment, size: int) -> Box:
    """Delimiter box using the ``size``-th variant (0 is the base glyph)."""
    variants = env.metrics.v_variants(symbol.char)
    return env.glyph_box(variants[max(0, min(size, len(variants) - 1))])


class FencedAtom(Atom):
    """
    Base enclosed in delimiters stretched to its height.

    ``middles`` are the `MiddleAtom`s placed somewhere inside ``base``;
    they are sized to the same height and spliced into the base box.

    Usage:
        fenced = FencedAtom(row, "lbrack", "rbrack")
        box = fenced.create_box(env)
    """

    kind = AtomKind.FENCED

    def __init__(
        self,
        base: Optional[Atom],
        left: DelimiterSpec = None,
        right: DelimiterSpec = None,
        middles: Optional[List[MiddleAtom]] = None,
    ):
        super().__init__(AtomType.INNER)
        self.base = base
        self.left = resolve_delimiter(left)
        self.right = resolve_delimiter(right)
        self.middles: List[MiddleAtom] = list(middles or [])

    def create_box(self, env: Environment) -> Box:
        if self.base is None:
            return StrutBox.empty()

        base = self.base.create_box(env)
        center_on_axis(base, env)
        height = base.vlen

        for middle in self.middles:
            box = middle.create_stretched_box(env, height)
            center_on_axis(box, env)
            box.shift -= base.shift
            placeholder = _find_placeholder(base, middle)
            if placeholder is None:
                logger.debug("Middle delimiter not found in fence base, skipped")
                continue
            if placeholder is base:
                box.shift += base.shift
                base = box
            else:
                base.replace_first(placeholder, box)

        hbox = HBox()
        if self.left is not None:
            delim = create_v_delim(self.left, env, height)
            center_on_axis(delim, env)
            hbox.add(delim)
            if not base.is_space:
                _add_glue(hbox, AtomType.OPENING, self.base.left_type(), env)

        hbox.add(base)

        if self.right is not None:
            if not base.is_space:
                _add_glue(hbox, self.base.right_type(), AtomType.CLOSING, env)
            delim = create_v_delim(self.right, env, height)
            center_on_axis(delim, env)
            hbox.add(delim)

        return hbox


def _find_placeholder(box: Box, source: MiddleAtom) -> Optional[PlaceholderBox]:
    for b in box.walk():
        if isinstance(b, PlaceholderBox) and b.source is source:
            return b
    return None


def _add_glue(hbox: HBox, left: AtomType, right: AtomType, env: Environment):
    glue = create_glue(left, right, env)
    if glue is not None:
        hbox.add(glue)


class BigDelimiterAtom(Atom):
    """A delimiter at one of the fixed ``\\big`` sizes, centered on the axis."""

    kind = AtomKind.BIG_DELIMITER

    def __init__(self, delim: DelimiterSpec, size: int, atom_type: Optional[AtomType] = None):
        symbol = resolve_delimiter(delim)
        if symbol is None:
            raise SymbolNotFoundError(str(delim), message="A big delimiter needs a symbol")
        super().__init__(atom_type if atom_type is not None else symbol.atom_type)
        self.symbol = symbol
        self.size = size

    def create_box(self, env: Environment) -> Box:
        box = create_v_delim_sized(self.symbol, env, self.size)
        center_on_axis(box, env)
        return HBox(box)
