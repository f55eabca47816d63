"""
Vertical stack of atoms.
"""

from typing import Iterable, List, Optional

from ..boxes import Box, HBox, VBox
from ..env import Environment
from ..models import Alignment, AtomType, Dimen, UnitType
from .base import Atom, AtomKind


class VRowAtom(Atom):
    """
    Atoms stacked top to bottom.

    ``halign`` other than NONE pads every row to the widest one with that
    alignment. ``valign`` picks the reference: TOP keeps the first row's
    height, BOTTOM the last row's depth, CENTER centers the stack on the
    math axis. ``add_interline`` puts a line-space strut between rows.

    Usage:
        vrow = VRowAtom([a, b, c], halign=Alignment.CENTER)
        box = vrow.create_box(env)
    """

    kind = AtomKind.VROW

    def __init__(
        self,
        elements: Optional[Iterable[Atom]] = None,
        halign: Alignment = Alignment.NONE,
        valign: Alignment = Alignment.CENTER,
        add_interline: bool = False,
        raise_: Dimen = Dimen(0.0, UnitType.EX),
    ):
        super().__init__(AtomType.ORDINARY)
        self.elements: List[Atom] = []
        self.halign = halign
        self.valign = valign
        self.add_interline = add_interline
        self.raise_ = raise_
        for atom in elements or []:
            if atom.kind is AtomKind.VROW:
                self.elements.extend(atom.elements)
            else:
                self.append(atom)

    def add(self, atom: Optional[Atom]):
        """Insert ``atom`` at the top."""
        if atom is not None:
            self.elements.insert(0, atom)

    def append(self, atom: Optional[Atom]):
        """Append ``atom`` at the bottom."""
        if atom is not None:
            self.elements.append(atom)

    def pop_last_atom(self) -> Atom:
        return self.elements.pop()

    def __len__(self) -> int:
        return len(self.elements)

    def create_box(self, env: Environment) -> Box:
        boxes = [atom.create_box(env) for atom in self.elements]
        if self.halign is not Alignment.NONE and boxes:
            max_width = max(b.width for b in boxes)
            boxes = [HBox(b, max_width, self.halign) for b in boxes]

        interline = env.line_space if self.add_interline else 0.0
        vbox = VBox()
        for box in boxes:
            vbox.add(box, interline=interline)

        vbox.shift = -env.size_of(self.raise_)
        if self.valign is Alignment.TOP:
            top = vbox.children[0].height if len(vbox) else 0.0
            total = vbox.vlen
            vbox.height = top
            vbox.depth = total - top
        elif self.valign is Alignment.BOTTOM:
            bottom = vbox.children[-1].depth if len(vbox) else 0.0
            total = vbox.vlen
            vbox.height = total - bottom
            vbox.depth = bottom
        else:
            axis = env.axis_height
            total = vbox.vlen
            vbox.height = total / 2 + axis
            vbox.depth = total / 2 - axis
        return vbox
