"""
Tests for formula assembly, parsing recovery and array bookkeeping.
"""

import pytest

from texlayout.atoms import (
    AtomKind,
    BreakMarkAtom,
    CharAtom,
    ColorAtom,
    EmptyAtom,
    MiddleAtom,
    RowAtom,
    TypedAtom,
    VRowAtom,
    get_symbol,
)
from texlayout.core import ArrayFormula, Formula, layout, parse_formula
from texlayout.models import AtomType, CellSpecifier
from texlayout.utils.errors import ParseError


class TestParseFormula:
    """Tests for parsing with and without recovery."""

    def test_strict_raises(self, char_parser):
        with pytest.raises(ParseError) as exc_info:
            parse_formula(char_parser, "x!")
        assert exc_info.value.latex == "x!"

    def test_partial_recovers(self, char_parser):
        """A failed partial parse yields an empty atom and keeps the error."""
        result = parse_formula(char_parser, "x!", partial=True)
        assert not result.ok
        assert isinstance(result.atom, EmptyAtom)
        assert isinstance(result.error, ParseError)

    def test_partial_logs_warning(self, char_parser, caplog):
        parse_formula(char_parser, "x!", partial=True)
        assert "Could not parse" in caplog.text

    def test_ok(self, char_parser):
        result = parse_formula(char_parser, "x y", ignore_whitespace=True)
        assert result.ok
        assert len(result.atom) == 2

    def test_from_text(self, char_parser):
        formula = Formula.from_text("x", char_parser)
        assert formula.root.kind is AtomKind.CHAR
        assert formula.parse_error is None

    def test_from_text_partial(self, char_parser, env):
        formula = Formula.from_text("!", char_parser, partial=True)
        assert formula.parse_error is not None
        assert layout(formula, env).vlen == 0.0


class TestFormula:
    """Tests for building formulas atom by atom."""

    def test_first_atom_is_root(self):
        x = CharAtom("x")
        assert Formula().add(x).root is x

    def test_promotes_to_row_with_breaks(self, env):
        """A break mark follows every binary operator or relation."""
        formula = Formula().add(CharAtom("x")).add(get_symbol("plus")).add(CharAtom("y"))
        root = formula.root
        assert root.kind is AtomKind.ROW
        assert isinstance(root.elements[2], BreakMarkAtom)
        assert len(root) == 4
        assert layout(formula, env).break_positions == [3]

    def test_none_ignored(self):
        formula = Formula().add(None)
        assert formula.root is None

    def test_middles_recorded(self):
        middle = MiddleAtom(get_symbol("vert"))
        formula = Formula().add(CharAtom("x")).add(middle)
        assert formula.middles == [middle]

    def test_add_formula_copies(self):
        other = Formula(CharAtom("x"))
        formula = Formula().add_formula(other)
        assert formula.root is not other.root
        assert formula.root.char == "x"

    def test_add_formula_wraps_rows(self):
        other = Formula(RowAtom([CharAtom("a"), CharAtom("b")]))
        formula = Formula(CharAtom("x")).add_formula(other)
        inner = formula.root.elements[1]
        assert inner.kind is AtomKind.ROW
        assert inner.elements[0].kind is AtomKind.ROW

    def test_add_empty_formula(self):
        formula = Formula(CharAtom("x")).add_formula(Formula())
        assert formula.root.kind is AtomKind.CHAR

    def test_color_wraps_root(self):
        formula = Formula(CharAtom("x")).set_color("#ff0000").set_background("#000000")
        assert isinstance(formula.root, ColorAtom)
        assert formula.root.background == "#000000"
        assert formula.root.base.foreground == "#ff0000"

    def test_no_color(self):
        formula = Formula(CharAtom("x")).set_color(None)
        assert formula.root.kind is AtomKind.CHAR

    def test_fixed_types(self):
        formula = Formula(CharAtom("x")).set_fixed_types(AtomType.RELATION, AtomType.CLOSING)
        assert isinstance(formula.root, TypedAtom)
        assert formula.root.left_type() == AtomType.RELATION
        assert formula.root.right_type() == AtomType.CLOSING

    def test_empty_layout(self, env):
        box = layout(Formula(), env)
        assert (box.width, box.height, box.depth) == (0.0, 0.0, 0.0)

    def test_layout_bare_atom(self, env):
        assert layout(CharAtom("x"), env).width == pytest.approx(5.72)

    def test_layout_repeatable(self, env, display_env):
        """The same formula can be laid out again in other environments."""
        formula = Formula().add(CharAtom("x")).add(get_symbol("plus")).add(CharAtom("y"))
        first = layout(formula, env).describe()
        layout(formula, display_env)
        assert layout(formula, env).describe() == first

    def test_copy(self):
        formula = Formula(RowAtom([CharAtom("x")]))
        clone = formula.copy()
        clone.root.add(CharAtom("y"))
        assert len(formula.root) == 1


class TestArrayFormula:
    """Tests for array-mode bookkeeping."""

    def build(self, cells):
        arr = ArrayFormula()
        for r, row in enumerate(cells):
            if r:
                arr.add_row()
            for c, atom in enumerate(row):
                if c:
                    arr.add_col()
                arr.add(atom)
        return arr

    def test_is_array_mode(self):
        assert ArrayFormula().is_array_mode
        assert not Formula().is_array_mode

    def test_check_dimensions_pads(self):
        """A short row is padded with None up to the widest row."""
        a, b, c, d = (CharAtom(ch) for ch in "abcd")
        arr = self.build([[a, b, c], [d]])
        arr.check_dimensions()
        assert arr.array[0] == [a, b, c]
        assert arr.array[1] == [d, None, None]
        assert arr.rows == 2
        assert arr.cols == 3

    def test_inter_text_rows_unpadded(self):
        a, b = CharAtom("a"), CharAtom("b")
        text = CharAtom("t", AtomType.INTER_TEXT)
        arr = self.build([[a, b], [text]])
        arr.check_dimensions()
        assert arr.array[1] == [text]

    def test_check_dimensions_keeps_closed_rows(self):
        arr = self.build([[CharAtom("a")]])
        arr.add_row()
        arr.check_dimensions()
        assert arr.rows == 1

    def test_add_col_span(self):
        arr = ArrayFormula()
        arr.add(CharAtom("a"))
        arr.add_col(3)
        assert arr.cols == 3
        assert arr.root is None
        assert arr.array[0][0].char == "a"

    def test_insert_atom_into_col(self):
        """The atom goes into every completed row; later rows get copies."""
        a, b, c, d = (CharAtom(ch) for ch in "abcd")
        arr = self.build([[a, b], [c, d]])
        arr.add_row()
        cols = arr.cols
        rule = CharAtom("|")
        arr.insert_atom_into_col(1, rule)
        assert arr.array[0][1] is rule
        assert arr.array[1][1] is not rule
        assert arr.array[1][1].char == "|"
        assert arr.cols == cols + 1

    def test_specifiers(self):
        arr = ArrayFormula()
        arr.add_row_specifier(CellSpecifier("color", "red"))
        arr.add(CharAtom("a"))
        arr.add_col()
        arr.add_cell_specifier(CellSpecifier("align", "left"))
        assert arr.row_specifiers[0] == [CellSpecifier("color", "red")]
        assert (0, 1) in arr.cell_specifiers

    def test_as_vrow(self, env):
        a, b, c = CharAtom("a"), CharAtom("b"), CharAtom("c")
        arr = self.build([[a, b], [c]])
        arr.check_dimensions()
        vrow = arr.as_vrow()
        assert isinstance(vrow, VRowAtom)
        assert vrow.add_interline
        assert vrow.elements == [a, b, c]
        assert len(vrow.create_box(env).children) == 5
