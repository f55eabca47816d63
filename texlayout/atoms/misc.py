"""
Rules, lines and small composites: ``\\rule``, strike-through,
``\\vcenter``, ``\\_``, ``\\cancel`` and array rules.
"""

from typing import Optional

from ..boxes import Box, HBox, LineBox, RuleBox, StrutBox, VBox
from ..env import Environment
from ..models import AtomType, CancelType, Dimen
from ..utils.constants import UNDERSCORE_KERN, UNDERSCORE_WIDTH
from .base import Atom, AtomKind


class RuleAtom(Atom):
    """A filled rectangle of given width and height, raised by ``raise_``."""

    kind = AtomKind.RULE

    def __init__(self, width: Dimen, height: Dimen, raise_: Dimen = Dimen(0.0)):
        super().__init__(AtomType.ORDINARY)
        self.width = width
        self.height = height
        self.raise_ = raise_

    def create_box(self, env: Environment) -> Box:
        return RuleBox(env.size_of(self.height), env.size_of(self.width), env.size_of(self.raise_))


class StrikeThroughAtom(Atom):
    """Base crossed by a horizontal rule at the math axis."""

    kind = AtomKind.STRIKE_THROUGH

    def __init__(self, base: Atom):
        super().__init__(base.atom_type)
        self.base = base

    def create_box(self, env: Environment) -> Box:
        t = env.overbar_rule_thickness
        box = self.base.create_box(env)
        rule = RuleBox(t, box.width, -env.axis_height + t)
        hbox = HBox(box)
        hbox.add(StrutBox.horizontal(-box.width))
        hbox.add(rule)
        return hbox


class VCenterAtom(Atom):
    """Base vertically centered on the math axis."""

    kind = AtomKind.VCENTER

    def __init__(self, base: Atom):
        super().__init__(base.atom_type)
        self.base = base

    def create_box(self, env: Environment) -> Box:
        box = self.base.create_box(env)
        hbox = HBox(box)
        hbox.height = box.vlen / 2 + env.axis_height
        hbox.depth = box.vlen - hbox.height
        return hbox


class UnderScoreAtom(Atom):
    """The ``\\_`` glyph: a short kern followed by a baseline rule."""

    kind = AtomKind.UNDERSCORE

    def __init__(self):
        super().__init__(AtomType.ORDINARY)

    def create_box(self, env: Environment) -> Box:
        hbox = HBox(StrutBox.horizontal(env.size_of(UNDERSCORE_KERN)))
        hbox.add(RuleBox(env.rule_thickness, env.size_of(UNDERSCORE_WIDTH)))
        return hbox


class CancelAtom(Atom):
    """
    Base struck through diagonally (``\\cancel``, ``\\bcancel``, ``\\xcancel``).

    The lines span the base's bounding rectangle and use the fraction rule
    thickness; the measured size is that of the base.
    """

    kind = AtomKind.CANCEL

    def __init__(self, base: Atom, cancel_type: CancelType = CancelType.SLASH):
        super().__init__(base.atom_type)
        self.base = base
        self.cancel_type = cancel_type

    def create_box(self, env: Environment) -> Box:
        box = self.base.create_box(env)
        w, h = box.width, box.vlen
        if self.cancel_type is CancelType.SLASH:
            lines = [(0.0, 0.0, w, h)]
        elif self.cancel_type is CancelType.BACKSLASH:
            lines = [(w, 0.0, 0.0, h)]
        else:
            lines = [(0.0, 0.0, w, h), (w, 0.0, 0.0, h)]

        overlay = LineBox(lines, env.fraction_rule_thickness)
        overlay.width = box.width
        overlay.height = box.height
        overlay.depth = box.depth

        hbox = HBox(box)
        hbox.add(StrutBox.horizontal(-box.width))
        hbox.add(overlay)
        return hbox


class HlineAtom(Atom):
    """Horizontal rule of an array row, ``width`` and ``shift`` in points."""

    kind = AtomKind.HLINE

    def __init__(self, width: float = 0.0, shift: float = 0.0, color: Optional[str] = None):
        super().__init__(AtomType.HLINE)
        self.width = width
        self.shift = shift
        self.color = color

    def create_box(self, env: Environment) -> Box:
        rule = RuleBox(env.rule_thickness, self.width, self.shift, self.color)
        vbox = VBox(rule)
        vbox.atom_type = AtomType.HLINE
        return vbox
