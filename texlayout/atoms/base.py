"""
Atom base class and the basic atom variants.

An atom is a node of the formula tree. Each variant lays itself out into a
box through `create_box(env)`; that call never modifies the atom. Code that
must special-case a child's variant inspects its `kind` tag.
"""

import copy
from abc import ABC, abstractmethod
from enum import Enum, auto
from typing import Iterable, List, Optional

from ..boxes import Box, HBox, PlaceholderBox, StrutBox
from ..env import Environment
from ..models import AtomType, Dimen, SpaceType, TexStyle, UnitType
from .glue import create_glue


class AtomKind(Enum):
    """Tag identifying each atom variant."""

    EMPTY = auto()
    ROW = auto()
    CHAR = auto()
    SYMBOL = auto()
    SPACE = auto()
    TYPED = auto()
    BREAK_MARK = auto()
    PLACEHOLDER = auto()
    STYLE = auto()
    SCRIPTS = auto()
    CUMULATIVE_SCRIPTS = auto()
    BIG_OPERATOR = auto()
    UNDER_OVER = auto()
    OVER_UNDER_BAR = auto()
    SIDE_SETS = auto()
    FENCED = auto()
    MIDDLE = auto()
    BIG_DELIMITER = auto()
    ACCENTED = auto()
    SCALE = auto()
    RAISE = auto()
    RESIZE = auto()
    ROTATE = auto()
    COLOR = auto()
    PHANTOM = auto()
    LAPED = auto()
    RULE = auto()
    STRIKE_THROUGH = auto()
    VCENTER = auto()
    UNDERSCORE = auto()
    LONG_DIV = auto()
    CANCEL = auto()
    VROW = auto()
    HLINE = auto()


# Kinds whose box is a single glyph (scripts attach without baseline drop)
GLYPH_KINDS = frozenset([AtomKind.CHAR, AtomKind.SYMBOL])


class Atom(ABC):
    """
    Base class of all atoms.

    Subclasses set the class attribute ``kind`` and implement
    ``create_box``. ``atom_type`` is the TeX class used for inter-atom glue.
    """

    kind: AtomKind
    is_space = False

    def __init__(self, atom_type: AtomType = AtomType.ORDINARY):
        self.atom_type = atom_type

    @abstractmethod
    def create_box(self, env: Environment) -> Box:
        """Lay out this atom in ``env``."""
        pass

    def left_type(self) -> AtomType:
        return self.atom_type

    def right_type(self) -> AtomType:
        return self.atom_type

    def copy(self) -> "Atom":
        """Return an independent deep copy of this subtree."""
        return copy.deepcopy(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.atom_type.name})"


class EmptyAtom(Atom):
    """Lays out to nothing; stands in for a failed or missing sub-formula."""

    kind = AtomKind.EMPTY

    def create_box(self, env: Environment) -> Box:
        return StrutBox.empty()


class CharAtom(Atom):
    """A single character from the math font."""

    kind = AtomKind.CHAR

    def __init__(self, char: str, atom_type: AtomType = AtomType.ORDINARY):
        super().__init__(atom_type)
        self.char = char

    def create_box(self, env: Environment) -> Box:
        return env.char_box(self.char)

    def __repr__(self) -> str:
        return f"CharAtom({self.char!r})"


class SymbolAtom(Atom):
    """
    A named symbol with its own atom type (``plus`` is bin, ``lbrack`` open).

    Instances are normally obtained from the symbol table with
    `texlayout.atoms.symbols.get_symbol`.
    """

    kind = AtomKind.SYMBOL

    def __init__(self, name: str, char: str, atom_type: AtomType = AtomType.ORDINARY):
        super().__init__(atom_type)
        self.name = name
        self.char = char

    def create_box(self, env: Environment) -> Box:
        return env.char_box(self.char)

    def __repr__(self) -> str:
        return f"SymbolAtom({self.name!r}, {self.atom_type.name})"


class SpaceAtom(Atom):
    """Explicit space of a given width, height and depth."""

    kind = AtomKind.SPACE
    is_space = True

    def __init__(
        self,
        width: Dimen = Dimen(0.0),
        height: Dimen = Dimen(0.0),
        depth: Dimen = Dimen(0.0),
    ):
        super().__init__(AtomType.NONE)
        self.width = width
        self.height = height
        self.depth = depth

    @classmethod
    def of(cls, space: SpaceType) -> "SpaceAtom":
        """A named math skip (thin, medium, thick, quad...)."""
        return cls(Dimen(space.value, UnitType.MU))

    def create_box(self, env: Environment) -> Box:
        return StrutBox(
            env.size_of(self.width),
            env.size_of(self.height),
            env.size_of(self.depth),
        )


class TypedAtom(Atom):
    """Base atom whose left and right glue types are forced."""

    kind = AtomKind.TYPED

    def __init__(self, left: AtomType, right: AtomType, base: Atom):
        super().__init__(left)
        self.left = left
        self.right = right
        self.base = base

    def create_box(self, env: Environment) -> Box:
        return self.base.create_box(env)

    def left_type(self) -> AtomType:
        return self.left

    def right_type(self) -> AtomType:
        return self.right


class BreakMarkAtom(Atom):
    """Marks a line-break opportunity inside a row; contributes no box."""

    kind = AtomKind.BREAK_MARK

    def __init__(self):
        super().__init__(AtomType.NONE)

    def create_box(self, env: Environment) -> Box:
        return StrutBox.empty()


class PlaceholderAtom(Atom):
    """Invisible atom of fixed, already computed, dimensions (in points)."""

    kind = AtomKind.PLACEHOLDER

    def __init__(self, width: float = 0.0, height: float = 0.0, depth: float = 0.0, shift: float = 0.0):
        super().__init__(AtomType.ORDINARY)
        self.width = width
        self.height = height
        self.depth = depth
        self.shift = shift

    def create_box(self, env: Environment) -> Box:
        return StrutBox(self.width, self.height, self.depth, self.shift)


class StyleAtom(Atom):
    """
    Base laid out in a declared style.

    The declared style is only adopted when it is smaller than the
    surrounding one, so a text-style island inside a fraction keeps the
    fraction's reduced size.
    """

    kind = AtomKind.STYLE

    def __init__(self, style: TexStyle, base: Atom):
        super().__init__(base.atom_type)
        self.style = style
        self.base = base

    def create_box(self, env: Environment) -> Box:
        inner = env.with_style(self.style) if self.style > env.style else env
        return self.base.create_box(inner)

    def left_type(self) -> AtomType:
        return self.base.left_type()

    def right_type(self) -> AtomType:
        return self.base.right_type()


# Left neighbours that turn a following binary operator into an ordinary atom
_BIN_AFTER = frozenset(
    [
        AtomType.BINARY_OPERATOR,
        AtomType.BIG_OPERATOR,
        AtomType.RELATION,
        AtomType.OPENING,
        AtomType.PUNCTUATION,
    ]
)
# Right neighbours with the same effect
_BIN_BEFORE = frozenset([AtomType.RELATION, AtomType.CLOSING, AtomType.PUNCTUATION])


class RowAtom(Atom):
    """
    Horizontal list of atoms.

    Layout inserts TeX inter-atom glue between consecutive non-space
    atoms and records break marks as break positions of the resulting HBox.

    Usage:
        row = RowAtom([CharAtom("x"), get_symbol("plus"), CharAtom("y")])
        box = row.create_box(env)
    """

    kind = AtomKind.ROW

    def __init__(self, elements: Optional[Iterable[Atom]] = None):
        super().__init__(AtomType.ORDINARY)
        self.elements: List[Atom] = []
        for atom in elements or []:
            self.add(atom)

    def add(self, atom: Optional[Atom]):
        """Append ``atom``; None is ignored."""
        if atom is not None:
            self.elements.append(atom)

    def __len__(self) -> int:
        return len(self.elements)

    def left_type(self) -> AtomType:
        for atom in self.elements:
            if atom.kind is not AtomKind.BREAK_MARK:
                return atom.left_type()
        return AtomType.ORDINARY

    def right_type(self) -> AtomType:
        for atom in reversed(self.elements):
            if atom.kind is not AtomKind.BREAK_MARK:
                return atom.right_type()
        return AtomType.ORDINARY

    def effective_types(self) -> List[Optional[tuple]]:
        """
        Glue types of every element after the binary-operator rules.

        A binary operator becomes ordinary when nothing precedes it, when it
        follows an operator, relation, opening or punctuation, or when it
        precedes a relation, closing or punctuation or ends the row.

        Returns:
            One ``(left, right)`` pair per element; None for spaces and
            break marks
        """
        types: List[Optional[tuple]] = []
        last = None  # index of the previous typed element
        for atom in self.elements:
            if atom.is_space or atom.kind is AtomKind.BREAK_MARK:
                types.append(None)
                continue
            left, right = atom.left_type(), atom.right_type()
            if left == AtomType.BINARY_OPERATOR:
                prev = types[last][1] if last is not None else None
                if prev is None or prev in _BIN_AFTER:
                    left = right = AtomType.ORDINARY
            if last is not None and types[last][1] == AtomType.BINARY_OPERATOR and left in _BIN_BEFORE:
                types[last] = (AtomType.ORDINARY, AtomType.ORDINARY)
            types.append((left, right))
            last = len(types) - 1
        if last is not None and types[last][1] == AtomType.BINARY_OPERATOR:
            types[last] = (AtomType.ORDINARY, AtomType.ORDINARY)
        return types

    def create_box(self, env: Environment) -> Box:
        hbox = HBox()
        types = self.effective_types()
        prev_right = None
        for atom, pair in zip(self.elements, types):
            if atom.kind is AtomKind.BREAK_MARK:
                hbox.add_break_position()
                continue
            if pair is not None and prev_right is not None:
                glue = create_glue(prev_right, pair[0], env)
                if glue is not None:
                    hbox.add(glue)
            hbox.add(atom.create_box(env))
            if pair is not None:
                prev_right = pair[1]
        return hbox

    def __repr__(self) -> str:
        return f"RowAtom({self.elements!r})"


class MiddleAtom(Atom):
    """
    A delimiter inside a fence (``\\middle|``).

    On its own it lays out to a placeholder; the enclosing `FencedAtom`
    replaces that placeholder by a delimiter stretched to the fence height.
    """

    kind = AtomKind.MIDDLE

    def __init__(self, symbol: SymbolAtom):
        super().__init__(symbol.atom_type)
        self.symbol = symbol

    def create_box(self, env: Environment) -> Box:
        return PlaceholderBox(source=self)

    def create_stretched_box(self, env: Environment, height: float) -> Box:
        from .fence import create_v_delim

        return create_v_delim(self.symbol, env, height)
