"""
Tests for styles, the layout environment, units and font metrics.
"""

import dataclasses
import json

import pytest

from texlayout.env import (
    UNDEFINED_MATH_VALUE,
    Environment,
    MathConstants,
    TableFontMetrics,
    fsize,
    is_undefined,
    parse_dimen,
    parse_options,
)
from texlayout.models import AtomType, Dimen, TexStyle, UnitType
from texlayout.utils.errors import InvalidAtomTypeError, InvalidUnitError


class TestTexStyle:
    """Tests for style transitions."""

    def test_cramped(self):
        """Cramping keeps the size tier."""
        assert TexStyle.DISPLAY.cramped() == TexStyle.DISPLAY_CRAMPED
        assert TexStyle.SCRIPT.cramped() == TexStyle.SCRIPT_CRAMPED
        assert TexStyle.TEXT_CRAMPED.cramped() == TexStyle.TEXT_CRAMPED

    @pytest.mark.parametrize(
        "style,sub,sub_sub",
        [
            (TexStyle.DISPLAY, TexStyle.SCRIPT_CRAMPED, TexStyle.SCRIPT_SCRIPT_CRAMPED),
            (TexStyle.TEXT, TexStyle.SCRIPT_CRAMPED, TexStyle.SCRIPT_SCRIPT_CRAMPED),
            (TexStyle.SCRIPT, TexStyle.SCRIPT_SCRIPT_CRAMPED, TexStyle.SCRIPT_SCRIPT_CRAMPED),
            (TexStyle.SCRIPT_SCRIPT, TexStyle.SCRIPT_SCRIPT_CRAMPED, TexStyle.SCRIPT_SCRIPT_CRAMPED),
        ],
    )
    def test_subscript_styles(self, style, sub, sub_sub):
        """Subscripts step down one or two tiers and are always cramped."""
        assert style.sub() == sub
        assert style.sub_sub() == sub_sub
        assert sub.is_cramped

    def test_superscript_keeps_cramped_flag(self):
        """Superscripts step down one tier and keep the cramped flag."""
        assert TexStyle.DISPLAY.sup() == TexStyle.SCRIPT
        assert TexStyle.TEXT_CRAMPED.sup() == TexStyle.SCRIPT_CRAMPED
        assert TexStyle.SCRIPT.sup() == TexStyle.SCRIPT_SCRIPT

    def test_fraction_styles(self):
        """Numerator and denominator styles follow TeX's table."""
        assert TexStyle.DISPLAY.numerator() == TexStyle.TEXT
        assert TexStyle.DISPLAY.denominator() == TexStyle.TEXT_CRAMPED
        assert TexStyle.TEXT.numerator() == TexStyle.SCRIPT
        assert TexStyle.TEXT.denominator() == TexStyle.SCRIPT_CRAMPED
        assert TexStyle.SCRIPT_SCRIPT.numerator() == TexStyle.SCRIPT_SCRIPT
        assert TexStyle.SCRIPT_SCRIPT.denominator() == TexStyle.SCRIPT_SCRIPT_CRAMPED

    def test_is_script(self):
        assert not TexStyle.TEXT_CRAMPED.is_script
        assert TexStyle.SCRIPT.is_script


class TestAtomType:
    """Tests for atom type lookup by name."""

    def test_from_name(self):
        assert AtomType.from_name("bin") == AtomType.BINARY_OPERATOR
        assert AtomType.from_name("acc") == AtomType.ACCENT

    def test_unknown_name(self):
        """Unknown names raise with the offending name attached."""
        with pytest.raises(InvalidAtomTypeError) as exc_info:
            AtomType.from_name("sideways")
        assert exc_info.value.name == "sideways"


class TestEnvironment:
    """Tests for the layout environment."""

    def test_defaults(self):
        """A bare environment uses text style at 10pt with the bundled metrics."""
        env = Environment()
        assert env.style == TexStyle.TEXT
        assert env.text_size == 10.0
        assert env.pixels_per_point == 1.0
        assert isinstance(env.metrics, TableFontMetrics)

    def test_accessors_are_scaled(self, env):
        """Lengths are returned in points at the current size."""
        assert env.axis_height == pytest.approx(2.5)
        assert env.x_height == pytest.approx(4.30555)
        assert env.quad == pytest.approx(10.0)
        assert env.rule_thickness == pytest.approx(0.4)
        assert env.fraction_rule_thickness == pytest.approx(0.4)
        assert env.overbar_rule_thickness == pytest.approx(0.4)
        assert env.line_space == pytest.approx(4.30555)

    def test_script_scale(self, env):
        """Script styles shrink by the font's script percentages."""
        assert env.sub_style().scale == pytest.approx(0.7)
        assert env.sub_sub_style().scale == pytest.approx(0.5)
        assert env.sub_style().axis_height == pytest.approx(1.75)

    def test_transitions_do_not_mutate(self, env):
        """Deriving a style returns a new environment."""
        sub = env.sub_style()
        assert sub is not env
        assert env.style == TexStyle.TEXT
        assert sub.style == TexStyle.SCRIPT_CRAMPED

    def test_same_style_returns_self(self, env):
        assert env.with_style(TexStyle.TEXT) is env

    def test_frozen(self, env):
        """Environments cannot be modified in place."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            env.style = TexStyle.DISPLAY

    def test_char_box(self, env):
        """Glyph boxes come from the metrics at the current size."""
        box = env.char_box("x")
        assert box.width == pytest.approx(5.72)
        assert box.height == pytest.approx(4.31)
        assert box.depth == 0.0
        assert box.size == 10.0


class TestUnits:
    """Tests for unit conversion."""

    @pytest.mark.parametrize(
        "dimen,points",
        [
            (Dimen(2.0), 2.0),
            (Dimen(1.0, UnitType.EM), 10.0),
            (Dimen(1.0, UnitType.EX), 4.30555),
            (Dimen(18.0, UnitType.MU), 10.0),
            (Dimen(1.0, UnitType.IN), 72.0),
            (Dimen(2.54, UnitType.CM), 72.0),
            (Dimen(1.0, UnitType.PICA), 12.0),
        ],
    )
    def test_fsize(self, env, dimen, points):
        assert fsize(dimen, env) == pytest.approx(points)

    def test_font_units_follow_style(self, env):
        """em and mu shrink with the style."""
        assert fsize(Dimen(1.0, UnitType.EM), env.sub_style()) == pytest.approx(7.0)

    def test_pixels(self, metrics):
        """Pixels depend on the pixels-per-point factor."""
        env = Environment(metrics, pixels_per_point=2.0)
        assert fsize(Dimen(4.0, UnitType.PIXEL), env) == pytest.approx(2.0)

    def test_parse_dimen(self):
        assert parse_dimen("1.5em") == Dimen(1.5, UnitType.EM)
        assert parse_dimen(" -3 mu") == Dimen(-3.0, UnitType.MU)
        assert parse_dimen(".5pt") == Dimen(0.5, UnitType.POINT)

    @pytest.mark.parametrize("text", ["3 furlongs", "3zz", "em", ""])
    def test_parse_dimen_invalid(self, text):
        with pytest.raises(InvalidUnitError):
            parse_dimen(text)

    def test_parse_options(self):
        """Options split on commas; keys without a value map to ''."""
        opts = parse_options("origin=bl, x=1em,flag")
        assert opts == {"origin": "bl", "x": "1em", "flag": ""}

    def test_dimen_str(self):
        assert str(Dimen(1.5, UnitType.EM)) == "1.5em"
        assert -Dimen(2.0) == Dimen(-2.0)


class TestFontMetrics:
    """Tests for the bundled metrics table."""

    def test_glyph(self, metrics):
        g = metrics.glyph("x")
        assert g.width == pytest.approx(0.572)
        assert g.top_accent == pytest.approx(0.314)

    def test_unknown_glyph_uses_default(self, metrics):
        """Characters missing from the table get the default metric."""
        g = metrics.glyph("☃")
        assert (g.width, g.height, g.depth) == (0.5, 0.7, 0.0)
        assert not metrics.has_glyph("☃")

    def test_undefined_attachment(self, metrics):
        """Glyphs without an accent attachment report the sentinel."""
        assert is_undefined(metrics.glyph("b").top_accent)
        assert metrics.glyph("b").top_accent == UNDEFINED_MATH_VALUE

    def test_v_variants_grow(self, metrics):
        """Delimiter variants start with the base glyph and grow."""
        variants = metrics.v_variants("(")
        assert variants[0] == metrics.glyph("(")
        lengths = [g.vlen for g in variants]
        assert lengths == sorted(lengths)
        assert len(variants) == 5

    def test_no_variants(self, metrics):
        """Glyphs without variants only offer themselves."""
        assert metrics.h_variants("a") == [metrics.glyph("a")]

    def test_constants_from_dict(self):
        """Unknown keys are ignored."""
        c = MathConstants.from_dict({"axis_height": 0.3, "bogus": 1.0})
        assert c.axis_height == 0.3
        assert c.quad == 1.0

    def test_custom_table(self, tmp_path):
        """A metrics table can be loaded from another path."""
        path = tmp_path / "tiny.json"
        path.write_text(
            json.dumps(
                {
                    "name": "tiny",
                    "constants": {"axis_height": 0.2},
                    "glyphs": {"x": [1.0, 0.5, 0.0]},
                }
            ),
            encoding="utf-8",
        )
        metrics = TableFontMetrics(path)
        assert metrics.name == "tiny"
        assert len(metrics) == 1
        assert metrics.math_constants.axis_height == 0.2
        assert Environment(metrics).char_box("x").width == 10.0

    def test_missing_table(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            TableFontMetrics(tmp_path / "missing.json")
