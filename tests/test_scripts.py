"""
Tests for scripts, operator limits and stacked constructs.
"""

import pytest

from texlayout.atoms import (
    BigOperatorAtom,
    CharAtom,
    CumulativeScriptsAtom,
    OverUnderBarAtom,
    PlaceholderAtom,
    RowAtom,
    ScriptsAtom,
    SideSetsAtom,
    UnderOverAtom,
    get_symbol,
)
from texlayout.boxes import HBox, VBox
from texlayout.env import Environment
from texlayout.models import AtomType, TexStyle


class TestScripts:
    """Tests for sub- and superscripts."""

    def test_superscript(self, env):
        """x^2: the exponent is raised by the superscript shift."""
        box = ScriptsAtom(CharAtom("x"), sup=CharAtom("2")).create_box(env)
        sup = box.children[1]
        assert sup.shift == pytest.approx(-3.63)
        assert box.width == pytest.approx(5.72 + 3.5 + 0.56)
        assert box.height == pytest.approx(4.508 + 3.63)
        assert box.depth == pytest.approx(0.0)

    def test_cramped_superscript_is_lower(self, metrics):
        env = Environment(metrics, style=TexStyle.TEXT_CRAMPED)
        box = ScriptsAtom(CharAtom("x"), sup=CharAtom("2")).create_box(env)
        assert box.children[1].shift == pytest.approx(-2.89)

    def test_subscript(self, env):
        box = ScriptsAtom(CharAtom("x"), sub=CharAtom("1")).create_box(env)
        assert box.depth == pytest.approx(1.5)
        assert box.children[1].width == pytest.approx(3.5)

    def test_both_scripts_keep_minimum_gap(self, env):
        """With both scripts the subscript is pushed down to clear the gap."""
        box = ScriptsAtom(CharAtom("x"), sub=CharAtom("1"), sup=CharAtom("2")).create_box(env)
        vbox = box.children[1]
        assert isinstance(vbox, VBox)
        assert vbox.shift == pytest.approx(-3.63)
        # strut between sup and sub equals the minimum gap
        assert vbox.children[1].height == pytest.approx(1.6)
        assert box.depth == pytest.approx(2.478)

    def test_compound_base_uses_base_extent(self, env):
        """Scripts on a tall compound base hang from its height."""
        box = ScriptsAtom(PlaceholderAtom(5.0, 20.0), sup=CharAtom("2")).create_box(env)
        assert box.children[1].shift == pytest.approx(-(20.0 - 3.86))

    def test_row_base_is_not_a_glyph(self, env):
        row = RowAtom([CharAtom("x")])
        box = ScriptsAtom(row, sub=CharAtom("1")).create_box(env)
        assert box.depth == pytest.approx(max(0.5, 1.5, 4.508 - 3.44))

    def test_no_scripts(self, env):
        box = ScriptsAtom(CharAtom("x")).create_box(env)
        assert box.width == pytest.approx(5.72)

    def test_type_follows_base(self):
        atom = ScriptsAtom(get_symbol("plus"), sup=CharAtom("2"))
        assert atom.left_type() == AtomType.BINARY_OPERATOR
        assert ScriptsAtom(None, sup=CharAtom("2")).left_type() == AtomType.ORDINARY


class TestCumulativeScripts:
    """Tests for scripts attached one after another."""

    def test_scripts_accumulate(self):
        x = CharAtom("x")
        a, b, c = CharAtom("a"), CharAtom("b"), CharAtom("c")
        atom = CumulativeScriptsAtom(x, sub=a)
        atom = CumulativeScriptsAtom(atom, sup=b)
        atom = CumulativeScriptsAtom(atom, sub=c)
        assert atom.base is x
        assert atom.sub.elements == [a, c]
        assert atom.sup.elements == [b]

    def test_add_scripts_in_place(self, env):
        """Scripts added later join the same rows."""
        atom = CumulativeScriptsAtom(CharAtom("x"), sub=CharAtom("a"))
        atom.add_superscript(CharAtom("b"))
        atom.add_subscript(CharAtom("c"))
        assert [a.char for a in atom.sub.elements] == ["a", "c"]
        assert [a.char for a in atom.sup.elements] == ["b"]
        assert atom.create_box(env).describe() == atom.to_scripts().create_box(env).describe()

    def test_from_scripts_atom(self):
        """Attaching to a Scripts atom reuses its base."""
        x = CharAtom("x")
        scripts = ScriptsAtom(x, sup=CharAtom("2"))
        atom = CumulativeScriptsAtom(scripts, sub=CharAtom("1"))
        assert atom.base is x
        assert len(atom.sub) == 1
        assert len(atom.sup) == 1

    def test_to_scripts(self, env):
        atom = CumulativeScriptsAtom(CharAtom("x"), sup=CharAtom("2"))
        scripts = atom.to_scripts()
        assert scripts.sub is None
        assert atom.create_box(env).width == pytest.approx(scripts.create_box(env).width)


class TestBigOperator:
    """Tests for big operators and their limits."""

    def test_display_limits(self, display_env):
        """In display style the variant glyph is used and limits are stacked."""
        atom = BigOperatorAtom(get_symbol("sum"), under=CharAtom("i"), over=CharAtom("n"))
        box = atom.create_box(display_env)
        assert isinstance(box, VBox)
        assert box.width == pytest.approx(14.44)
        assert box.height == pytest.approx(3.017 + 2.0 + 10.0)
        assert box.depth == pytest.approx(5.0 + 1.67 + 4.62)

    def test_text_style_attaches_scripts(self, env):
        """In text style the limits become scripts."""
        atom = BigOperatorAtom(get_symbol("sum"), under=CharAtom("i"), over=CharAtom("n"))
        box = atom.create_box(env)
        assert isinstance(box, HBox)
        assert box.width == pytest.approx(10.56 + 4.2 + 0.56)

    def test_forced_limits(self, env):
        atom = BigOperatorAtom(get_symbol("sum"), over=CharAtom("n"), limits=True)
        assert isinstance(atom.create_box(env), VBox)

    def test_forced_no_limits_in_display(self, display_env):
        atom = BigOperatorAtom(get_symbol("sum"), over=CharAtom("n"), limits=False)
        box = atom.create_box(display_env)
        assert isinstance(box, HBox)
        assert box.children[0].width == pytest.approx(14.44)

    def test_operator_centered_on_axis(self, env):
        box = BigOperatorAtom(get_symbol("sum")).create_box(env)
        glyph = box.children[0]
        assert (glyph.height - glyph.shift - (glyph.depth + glyph.shift)) / 2 == pytest.approx(env.axis_height)

    def test_type(self):
        assert BigOperatorAtom(get_symbol("sum")).atom_type == AtomType.BIG_OPERATOR


class TestUnderOver:
    """Tests for over/under stacks and bars."""

    def test_small_over(self, env):
        atom = UnderOverAtom(CharAtom("x"), over=CharAtom("a"), over_small=True)
        box = atom.create_box(env)
        assert box.height == pytest.approx(3.017 + 10.0 / 6 + 4.31)
        assert box.depth == pytest.approx(0.0)
        assert box.width == pytest.approx(5.72)

    def test_under_keeps_baseline(self, env):
        atom = UnderOverAtom(CharAtom("x"), under=CharAtom("y"))
        box = atom.create_box(env)
        assert box.height == pytest.approx(4.31)
        assert box.depth == pytest.approx(10.0 / 6 + 4.31 + 1.94)

    def test_narrow_pieces_are_centered(self, env):
        atom = UnderOverAtom(CharAtom("m"), over=CharAtom("i"))
        box = atom.create_box(env)
        over = box.children[0]
        assert over.width == pytest.approx(8.78)
        assert over.children[0].width == pytest.approx((8.78 - 3.45) / 2)

    def test_overbar(self, env):
        """Rule thickness t, gap 3t and padding t above the base."""
        box = OverUnderBarAtom(CharAtom("x")).create_box(env)
        assert box.height == pytest.approx(6.31)
        assert box.depth == pytest.approx(0.0)
        assert box.width == pytest.approx(5.72)

    def test_underbar(self, env):
        box = OverUnderBarAtom(CharAtom("x"), over=False).create_box(env)
        assert box.height == pytest.approx(4.31)
        assert box.depth == pytest.approx(2.0)


class TestSideSets:
    """Tests for scripts on both sides of a base."""

    def test_left_cluster_right_aligned(self, env):
        left = ScriptsAtom(None, sub=CharAtom("a"), sup=CharAtom("b"))
        right = ScriptsAtom(None, sub=CharAtom("c"), sup=CharAtom("d"))
        atom = SideSetsAtom(left, right, get_symbol("sum"))
        box = atom.create_box(env)
        vbox = box.children[0].children[1]
        sup, sub = vbox.children[0], vbox.children[2]
        assert sup.shift + sup.width == pytest.approx(sub.shift + sub.width)
        assert atom.atom_type == AtomType.BIG_OPERATOR

    def test_without_base(self, env):
        """A phantom M stands in: no width, the height of M."""
        left = ScriptsAtom(None, sup=CharAtom("b"))
        atom = SideSetsAtom(left, None)
        box = atom.create_box(env)
        middle = box.children[1]
        assert middle.width == 0.0
        assert middle.height == pytest.approx(6.83)
        assert atom.atom_type == AtomType.ORDINARY
