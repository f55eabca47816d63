"""
Accents placed over a base (``\\hat``, ``\\widetilde``, ``\\vec``...).
"""

from typing import Optional

from ..boxes import Box, StrutBox, VBox
from ..env import Environment, is_undefined
from ..models import AtomType
from ..utils.constants import DIRECT_ACCENT_GAP
from ..utils.errors import InvalidFormulaError, InvalidSymbolTypeError
from .base import GLYPH_KINDS, Atom, AtomKind, SymbolAtom
from .symbols import get_symbol


class AccentedAtom(Atom):
    """
    Base with an accent symbol on top.

    In variant mode (the default) the accent is the narrowest horizontal
    variant of the accent glyph at least as wide as the base. In direct
    mode the accent symbol itself is drawn, in subscript size when
    ``change_size`` is set.

    Usage:
        AccentedAtom.from_name(CharAtom("x"), "hat")
        AccentedAtom(CharAtom("x"), get_symbol("dot"), direct=True)
    """

    kind = AtomKind.ACCENTED

    def __init__(
        self,
        base: Optional[Atom],
        accent: Atom,
        direct: bool = False,
        change_size: bool = True,
    ):
        """
        Args:
            base: Accentee, may be None
            accent: Accent symbol
            direct: Draw the symbol itself instead of a glyph variant
            change_size: In direct mode, draw the accent in subscript size

        Raises:
            InvalidSymbolTypeError: If ``accent`` is not a symbol, or in
                variant mode not a symbol of type acc
        """
        super().__init__(AtomType.ORDINARY)
        if accent is None or accent.kind is not AtomKind.SYMBOL:
            raise InvalidSymbolTypeError(
                repr(accent),
                message="Invalid accent: the accent must be a single symbol",
            )
        if not direct and accent.atom_type != AtomType.ACCENT:
            raise InvalidSymbolTypeError(
                accent.name,
                message=f"The symbol '{accent.name}' is not defined as an accent (type='acc')",
            )
        self.accentee = base
        self.accent: SymbolAtom = accent
        self.direct = direct
        self.change_size = change_size

    @classmethod
    def from_name(cls, base: Optional[Atom], name: str) -> "AccentedAtom":
        """Accent given by symbol name; raises SymbolNotFoundError if unknown."""
        return cls(base, get_symbol(name))

    @classmethod
    def from_formula(cls, base: Optional[Atom], formula) -> "AccentedAtom":
        """
        Accent given by a formula holding exactly one accent symbol.

        Raises:
            InvalidFormulaError: If the formula is missing or its root is
                not a single symbol
            InvalidSymbolTypeError: If that symbol is not an accent
        """
        if formula is None:
            raise InvalidFormulaError("<none>", message="The accent formula can't be None")
        root = formula.root
        if root is None or root.kind is not AtomKind.SYMBOL:
            raise InvalidFormulaError(
                repr(root),
                message="The accent formula does not represent a single symbol",
            )
        return cls(base, root)

    @property
    def glyph_base(self) -> Optional[Atom]:
        """Innermost non-accent base; its glyph gives the attachment point."""
        base = self.accentee
        while base is not None and base.kind is AtomKind.ACCENTED:
            base = base.accentee
        return base

    def _top_accent(self, env: Environment, accentee: Box) -> float:
        base = self.glyph_base
        if base is not None and base.kind in GLYPH_KINDS:
            pos = env.metrics.glyph(base.char).top_accent
            if not is_undefined(pos):
                return env.em(pos)
        return accentee.width / 2

    def create_box(self, env: Environment) -> Box:
        if self.accentee is None:
            accentee = StrutBox.empty()
        else:
            accentee = self.accentee.create_box(env.cramped_style())

        top = self._top_accent(env, accentee)

        if self.direct:
            accent_env = env.sub_style() if self.change_size else env
            accent = self.accent.create_box(accent_env)
            accent.shift = top - accent.width / 2
            gap = env.size_of(DIRECT_ACCENT_GAP)
        else:
            variants = env.metrics.h_variants(self.accent.char)
            glyph = next((g for g in variants if env.em(g.width) >= accentee.width), variants[-1])
            accent = env.glyph_box(glyph)
            pos = accent.width / 2 if is_undefined(glyph.top_accent) else env.em(glyph.top_accent)
            accent.shift = top - pos
            gap = -min(accentee.height, env.x_height)

        vbox = VBox(accent)
        vbox.add(StrutBox.vertical(gap))
        vbox.add(accentee)

        total = vbox.vlen
        vbox.depth = accentee.depth
        vbox.height = total - accentee.depth
        return vbox
