"""
Script attachment and stacked constructs.

Superscripts, subscripts, operator limits, over/under stacks, over and
under bars, and side-set scripts. Positions follow the OpenType MATH
constants (TeXbook Appendix G rules 13-18 in their OpenType form).
"""

from typing import Optional

from ..boxes import Box, CharBox, HBox, RuleBox, StrutBox, VBox
from ..env import Environment
from ..models import Alignment, AtomType, TexStyle
from ..utils.constants import UNDER_OVER_GAP
from .base import GLYPH_KINDS, Atom, AtomKind, CharAtom, PlaceholderAtom, RowAtom
from .fence import center_on_axis
from .transforms import PhantomAtom


def attach_scripts(
    env: Environment,
    base: Box,
    sub: Optional[Atom],
    sup: Optional[Atom],
    glyph_base: bool = False,
    align: Alignment = Alignment.LEFT,
) -> Box:
    """
    Attach laid-out scripts to an already built base box.

    Args:
        env: Environment of the base
        base: Base box
        sub: Subscript atom, or None
        sup: Superscript atom, or None
        glyph_base: True when the base is a single glyph; scripts are then
            positioned from the baseline instead of from the base's extent
        align: RIGHT aligns both scripts on their right edge

    Returns:
        HBox of base and scripts
    """
    if sub is None and sup is None:
        return base

    c = env.constants
    hbox = HBox(base)
    italic = base.italic if isinstance(base, CharBox) else 0.0

    if glyph_base:
        u = v = 0.0
    else:
        u = base.height - env.em(c.superscript_baseline_drop_max)
        v = base.depth + env.em(c.subscript_baseline_drop_min)

    space_after = StrutBox.horizontal(env.em(c.space_after_script))

    if sup is None:
        sub_box = sub.create_box(env.sub_style())
        v = max(v, env.em(c.subscript_shift_down), sub_box.height - env.em(c.subscript_top_max))
        sub_box.shift = v
        hbox.add(sub_box)
        hbox.add(space_after)
        return hbox

    shift_up = c.superscript_shift_up_cramped if env.style.is_cramped else c.superscript_shift_up
    sup_box = sup.create_box(env.sup_style())
    u = max(u, env.em(shift_up), sup_box.depth + env.em(c.superscript_bottom_min))

    if sub is None:
        if italic:
            hbox.add(StrutBox.horizontal(italic))
        sup_box.shift = -u
        hbox.add(sup_box)
        hbox.add(space_after)
        return hbox

    sub_box = sub.create_box(env.sub_style())
    v = max(v, env.em(c.subscript_shift_down))

    gap = (u - sup_box.depth) - (sub_box.height - v)
    min_gap = env.em(c.sub_superscript_gap_min)
    if gap < min_gap:
        v += min_gap - gap
        psi = env.em(c.superscript_bottom_max_with_subscript) - (u - sup_box.depth)
        if psi > 0:
            u += psi
            v -= psi

    if align is Alignment.RIGHT:
        width = max(sup_box.width, sub_box.width)
        sup_box.shift = width - sup_box.width
        sub_box.shift = width - sub_box.width
    else:
        sup_box.shift = italic
        sub_box.shift = 0.0

    vbox = VBox(sup_box)
    vbox.add(StrutBox.vertical(u - sup_box.depth + v - sub_box.height))
    vbox.add(sub_box)
    vbox.shift = -u
    hbox.add(vbox)
    hbox.add(space_after)
    return hbox


class ScriptsAtom(Atom):
    """
    Base with an optional subscript and superscript.

    Usage:
        x_sq = ScriptsAtom(CharAtom("x"), sup=CharAtom("2"))
    """

    kind = AtomKind.SCRIPTS

    def __init__(
        self,
        base: Optional[Atom],
        sub: Optional[Atom] = None,
        sup: Optional[Atom] = None,
        align: Alignment = Alignment.LEFT,
    ):
        super().__init__(base.atom_type if base is not None else AtomType.ORDINARY)
        self.base = base
        self.sub = sub
        self.sup = sup
        self.align = align

    def left_type(self) -> AtomType:
        return self.base.left_type() if self.base is not None else AtomType.ORDINARY

    def right_type(self) -> AtomType:
        return self.base.right_type() if self.base is not None else AtomType.ORDINARY

    def create_box(self, env: Environment) -> Box:
        base = self.base.create_box(env) if self.base is not None else StrutBox.empty()
        glyph_base = self.base is not None and self.base.kind in GLYPH_KINDS
        return attach_scripts(env, base, self.sub, self.sup, glyph_base, self.align)


class CumulativeScriptsAtom(Atom):
    """
    Scripts attached one after another to the same base (``x_1^2_3``).

    Attaching to a base that already carries scripts reuses its base and
    appends the new scripts to its script rows instead of nesting.

    Usage:
        a = CumulativeScriptsAtom(x, sub=CharAtom("1"))
        b = CumulativeScriptsAtom(a, sup=CharAtom("2"))
        b.to_scripts()  # one ScriptsAtom, sub row [1], sup row [2]
    """

    kind = AtomKind.CUMULATIVE_SCRIPTS

    def __init__(self, base: Optional[Atom], sub: Optional[Atom] = None, sup: Optional[Atom] = None):
        kind = base.kind if base is not None else None
        if kind is AtomKind.CUMULATIVE_SCRIPTS:
            self.base = base.base
            self.sub = base.sub
            self.sup = base.sup
        elif kind is AtomKind.SCRIPTS:
            self.base = base.base
            self.sub = RowAtom([base.sub] if base.sub is not None else [])
            self.sup = RowAtom([base.sup] if base.sup is not None else [])
        else:
            self.base = base
            self.sub = RowAtom()
            self.sup = RowAtom()
        self.sub.add(sub)
        self.sup.add(sup)
        super().__init__(self.base.atom_type if self.base is not None else AtomType.ORDINARY)

    def add_subscript(self, sub: Atom):
        self.sub.add(sub)

    def add_superscript(self, sup: Atom):
        self.sup.add(sup)

    def to_scripts(self) -> ScriptsAtom:
        """The equivalent single Scripts atom."""
        return ScriptsAtom(
            self.base,
            self.sub if len(self.sub) else None,
            self.sup if len(self.sup) else None,
        )

    def left_type(self) -> AtomType:
        return self.to_scripts().left_type()

    def right_type(self) -> AtomType:
        return self.to_scripts().right_type()

    def create_box(self, env: Environment) -> Box:
        return self.to_scripts().create_box(env)


def _fit(box: Box, width: float) -> HBox:
    return HBox(box, width, Alignment.CENTER)


class BigOperatorAtom(Atom):
    """
    Big operator (``\\sum``, ``\\int``...) with optional limits.

    Limits are stacked above and below in display style or when ``limits``
    is True; otherwise they are attached as scripts. A symbol base grows to
    its display variant in display style and is centered on the axis.
    """

    kind = AtomKind.BIG_OPERATOR

    def __init__(
        self,
        base: Atom,
        under: Optional[Atom] = None,
        over: Optional[Atom] = None,
        limits: Optional[bool] = None,
    ):
        super().__init__(AtomType.BIG_OPERATOR)
        self.base = base
        self.under = under
        self.over = over
        self.limits = limits

    def _base_box(self, env: Environment) -> Box:
        if self.base.kind is not AtomKind.SYMBOL:
            return self.base.create_box(env)
        if env.style < TexStyle.TEXT:
            min_height = env.em(env.constants.display_operator_min_height)
            variants = env.metrics.v_variants(self.base.char)
            glyph = next((g for g in variants if env.em(g.vlen) >= min_height), variants[-1])
            box = env.glyph_box(glyph)
        else:
            box = self.base.create_box(env)
        center_on_axis(box, env)
        return box

    def create_box(self, env: Environment) -> Box:
        base = self._base_box(env)
        use_limits = self.limits if self.limits is not None else env.style < TexStyle.TEXT
        if not use_limits:
            return attach_scripts(env, HBox(base), self.under, self.over)

        c = env.constants
        over = self.over.create_box(env.sup_style()) if self.over is not None else None
        under = self.under.create_box(env.sub_style()) if self.under is not None else None
        width = max(b.width for b in (base, over, under) if b is not None)

        vbox = VBox()
        height = 0.0
        depth = 0.0
        if over is not None:
            kern = max(env.em(c.upper_limit_gap_min), env.em(c.upper_limit_baseline_rise_min) - over.depth)
            vbox.add(_fit(over, width))
            vbox.add(StrutBox.vertical(kern))
            height += over.vlen + kern
        core = _fit(base, width)
        vbox.add(core)
        height += core.height
        depth += core.depth
        if under is not None:
            kern = max(env.em(c.lower_limit_gap_min), env.em(c.lower_limit_baseline_drop_min) - under.height)
            vbox.add(StrutBox.vertical(kern))
            vbox.add(_fit(under, width))
            depth += kern + under.vlen

        vbox.height = height
        vbox.depth = depth
        return vbox


class UnderOverAtom(Atom):
    """
    Base with atoms stacked above and/or below (``\\overset``, ``\\underset``).

    The stack keeps the base's baseline. ``*_small`` lays the
    corresponding piece out in script size.
    """

    kind = AtomKind.UNDER_OVER

    def __init__(
        self,
        base: Atom,
        under: Optional[Atom] = None,
        over: Optional[Atom] = None,
        under_small: bool = False,
        over_small: bool = False,
    ):
        super().__init__(base.atom_type)
        self.base = base
        self.under = under
        self.over = over
        self.under_small = under_small
        self.over_small = over_small

    def create_box(self, env: Environment) -> Box:
        base = self.base.create_box(env)
        over = None
        under = None
        if self.over is not None:
            over = self.over.create_box(env.sup_style() if self.over_small else env)
        if self.under is not None:
            under = self.under.create_box(env.sub_style() if self.under_small else env)
        width = max(b.width for b in (base, over, under) if b is not None)
        gap = env.size_of(UNDER_OVER_GAP)

        vbox = VBox()
        height = 0.0
        depth = 0.0
        if over is not None:
            vbox.add(_fit(over, width))
            vbox.add(StrutBox.vertical(gap))
            height += over.vlen + gap
        core = _fit(base, width)
        vbox.add(core)
        height += core.height
        depth += core.depth
        if under is not None:
            vbox.add(StrutBox.vertical(gap))
            vbox.add(_fit(under, width))
            depth += gap + under.vlen

        vbox.height = height
        vbox.depth = depth
        return vbox


class OverUnderBarAtom(Atom):
    """
    Overline or underline.

    The rule has the overbar thickness t, sits 3t away from the base and
    is padded by t on the outside. An overlined base is laid out cramped.
    """

    kind = AtomKind.OVER_UNDER_BAR

    def __init__(self, base: Atom, over: bool = True):
        super().__init__(AtomType.ORDINARY)
        self.base = base
        self.over = over

    def create_box(self, env: Environment) -> Box:
        if self.over:
            t = env.overbar_rule_thickness
            base = HBox(self.base.create_box(env.cramped_style()))
            vbox = VBox(StrutBox.vertical(t))
            vbox.add(RuleBox(t, base.width))
            vbox.add(StrutBox.vertical(3 * t))
            vbox.add(base)
            total = vbox.vlen
            vbox.depth = base.depth
            vbox.height = total - base.depth
            return vbox

        t = env.underbar_rule_thickness
        base = HBox(self.base.create_box(env))
        vbox = VBox(base)
        vbox.add(StrutBox.vertical(3 * t))
        vbox.add(RuleBox(t, base.width))
        vbox.add(StrutBox.vertical(t))
        return vbox


class SideSetsAtom(Atom):
    """
    Scripts on both sides of a base (``\\sideset{_a^b}{_c^d}\\sum``).

    Left and right clusters are Scripts atoms without a base; they are laid
    out against an invisible stand-in with the base's height, depth and
    shift, the left one right-aligned. Without a base a phantom ``M``
    (height and depth only) is used.
    """

    kind = AtomKind.SIDE_SETS

    def __init__(self, left: Optional[Atom], right: Optional[Atom], base: Optional[Atom] = None):
        super().__init__(base.atom_type if base is not None else AtomType.ORDINARY)
        self.left = left
        self.right = right
        self.base = base

    @staticmethod
    def _against(cluster: Optional[Atom], stand_in: Atom, align: Alignment) -> Optional[Atom]:
        if cluster is None:
            return None
        if cluster.kind is AtomKind.SCRIPTS and cluster.base is None:
            return ScriptsAtom(stand_in, cluster.sub, cluster.sup, align)
        return cluster

    def create_box(self, env: Environment) -> Box:
        base = self.base if self.base is not None else PhantomAtom(CharAtom("M"), width=False)
        base_box = base.create_box(env)
        stand_in = PlaceholderAtom(0.0, base_box.height, base_box.depth, base_box.shift)

        left = self._against(self.left, stand_in, Alignment.RIGHT)
        right = self._against(self.right, stand_in, Alignment.LEFT)

        hbox = HBox()
        if left is not None:
            hbox.add(left.create_box(env))
        hbox.add(base_box)
        if right is not None:
            hbox.add(right.create_box(env))
        return hbox
