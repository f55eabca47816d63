"""
Formula: a handle around a root atom, plus array-mode bookkeeping.

`layout()` is the entry point renderers use: it turns a formula into a box
tree for a given environment. Layout is pure and can be repeated at other
sizes or styles without re-parsing.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple, Union

from ..atoms import (
    Atom,
    AtomKind,
    BreakMarkAtom,
    ColorAtom,
    EmptyAtom,
    MiddleAtom,
    RowAtom,
    TypedAtom,
    VRowAtom,
)
from ..boxes import Box, StrutBox
from ..env import Environment
from ..models import AtomType, CellSpecifier
from ..utils.errors import ParseError
from .parser import FormulaParser

logger = logging.getLogger(__name__)

# Right types after which a row gets a break opportunity
_BREAK_AFTER = frozenset([AtomType.BINARY_OPERATOR, AtomType.RELATION])


@dataclass
class ParseResult:
    """
    Outcome of parsing source text.

    ``error`` is set only when a partial parse failed; ``atom`` is then an
    `EmptyAtom` so layout can still proceed.
    """

    atom: Atom
    error: Optional[ParseError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def parse_formula(
    parser: FormulaParser,
    text: str,
    partial: bool = False,
    ignore_whitespace: bool = False,
) -> ParseResult:
    """
    Parse ``text``, recovering from errors in partial mode.

    Raises:
        ParseError: In strict mode, if the text is malformed
    """
    try:
        atom = parser.parse(text, partial, ignore_whitespace)
    except ParseError as e:
        if not partial:
            raise
        logger.warning(f"Could not parse {text!r}, laying out an empty formula: {e}")
        return ParseResult(EmptyAtom(), e)
    return ParseResult(atom)


class Formula:
    """
    Owner of a root atom.

    Usage:
        f = Formula()
        f.add(CharAtom("x"))
        f.add(get_symbol("plus"))
        f.add(CharAtom("y"))
        box = layout(f, env)
    """

    def __init__(self, root: Optional[Atom] = None):
        self.root: Optional[Atom] = None
        self.middles: List[MiddleAtom] = []
        self.parse_error: Optional[ParseError] = None
        if root is not None:
            self.add(root)

    @classmethod
    def from_text(
        cls,
        text: str,
        parser: FormulaParser,
        partial: bool = False,
        ignore_whitespace: bool = False,
    ) -> "Formula":
        """
        Parse ``text`` into a new formula.

        In partial mode a parse failure yields a formula holding an
        `EmptyAtom`, with the error kept in ``parse_error``.
        """
        result = parse_formula(parser, text, partial, ignore_whitespace)
        formula = cls(result.atom)
        formula.parse_error = result.error
        return formula

    @property
    def is_array_mode(self) -> bool:
        return False

    def add(self, atom: Optional[Atom]) -> "Formula":
        """
        Append ``atom``.

        The first atom becomes the root; later ones turn the root into a
        row. A break mark follows every appended binary operator or
        relation.
        """
        if atom is None:
            return self
        if atom.kind is AtomKind.MIDDLE:
            self.middles.append(atom)
        if self.root is None:
            self.root = atom
            return self
        if self.root.kind is not AtomKind.ROW:
            self.root = RowAtom([self.root])
        self.root.add(atom)
        if atom.right_type() in _BREAK_AFTER:
            self.root.add(BreakMarkAtom())
        return self

    def add_formula(self, other: Optional["Formula"]) -> "Formula":
        """Append an independent copy of another formula's root."""
        if other is None or other.root is None:
            return self
        root = other.root.copy()
        if root.kind is AtomKind.ROW:
            return self.add(RowAtom([root]))
        return self.add(root)

    def set_color(self, foreground: Optional[str]) -> "Formula":
        if foreground is not None and self.root is not None:
            self.root = ColorAtom(self.root, foreground=foreground)
        return self

    def set_background(self, background: Optional[str]) -> "Formula":
        if background is not None and self.root is not None:
            self.root = ColorAtom(self.root, background=background)
        return self

    def set_fixed_types(self, left: AtomType, right: AtomType) -> "Formula":
        """Force the glue types seen by neighbours of this formula."""
        if self.root is not None:
            self.root = TypedAtom(left, right, self.root)
        return self

    def create_box(self, env: Environment) -> Box:
        if self.root is None:
            return StrutBox.empty()
        return self.root.create_box(env)

    def copy(self) -> "Formula":
        """Independent copy; no atom is shared with this formula."""
        return Formula(self.root.copy() if self.root is not None else None)

    def __repr__(self) -> str:
        return f"Formula({self.root!r})"


class ArrayFormula(Formula):
    """
    Formula collecting cells of a matrix-like environment.

    The current cell is accumulated in ``root``; `add_col` closes it and
    `add_row` closes the row. Rows may end in ``None`` cells meaning
    "unfilled".

    Usage:
        arr = ArrayFormula()
        arr.add(a); arr.add_col()
        arr.add(b); arr.add_row()
        arr.add(c)
        arr.check_dimensions()  # [[a, b], [c, None]]
    """

    def __init__(self):
        super().__init__()
        self.array: List[List[Optional[Atom]]] = [[]]
        self.row_specifiers: Dict[int, List[CellSpecifier]] = {}
        self.cell_specifiers: Dict[Tuple[int, int], List[CellSpecifier]] = {}
        self._row = 0
        self._col = 0

    @property
    def is_array_mode(self) -> bool:
        return True

    @property
    def rows(self) -> int:
        return self._row

    @property
    def cols(self) -> int:
        return self._col

    def add_col(self, n: int = 1):
        """
        Close the current cell.

        Args:
            n: Number of columns the cell spans
        """
        self.array[self._row].append(self.root)
        for _ in range(1, n - 1):
            self.array[self._row].append(None)
        self.root = None
        self._col += n

    def insert_atom_into_col(self, col: int, atom: Atom):
        """Insert ``atom`` at column ``col`` of every completed row."""
        self._col += 1
        for j in range(self._row):
            self.array[j].insert(col, atom if j == 0 else atom.copy())

    def add_row(self):
        """Close the current cell and row."""
        self.add_col()
        self.array.append([])
        self._row += 1
        self._col = 0

    def add_row_specifier(self, spec: CellSpecifier):
        self.row_specifiers.setdefault(self._row, []).append(spec)

    def add_cell_specifier(self, spec: CellSpecifier):
        self.cell_specifiers.setdefault((self._row, self._col), []).append(spec)

    def as_vrow(self) -> VRowAtom:
        """All cells, row by row, as one interlined vertical stack."""
        vrow = VRowAtom(add_interline=True)
        for row in self.array:
            for cell in row:
                vrow.append(cell)
        return vrow

    def check_dimensions(self):
        """
        Close a pending row and pad rows to the widest one with ``None``.

        Rows starting with an inter-text cell span the full width and are
        left as they are.
        """
        if self.array[-1] or self.root is not None:
            self.add_row()

        self._row = len(self.array) - 1
        self._col = max((len(r) for r in self.array[: self._row]), default=0)

        for row in self.array[: self._row]:
            if len(row) == self._col or _is_inter_text(row):
                continue
            row.extend([None] * (self._col - len(row)))


def _is_inter_text(row: List[Optional[Atom]]) -> bool:
    return bool(row) and row[0] is not None and row[0].atom_type == AtomType.INTER_TEXT


def layout(formula: Union[Formula, Atom], env: Environment) -> Box:
    """
    Lay out a formula (or a bare atom tree) in ``env``.

    Returns:
        The root of a freshly built box tree
    """
    return formula.create_box(env)
