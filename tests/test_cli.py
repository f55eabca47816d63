"""
Tests for the command-line interface.
"""

import json
import logging

import pytest

from texlayout import cli
from texlayout.core import LayoutContext


@pytest.fixture(autouse=True)
def restore_logger():
    """main() reconfigures the package logger; put it back afterwards."""
    logger = logging.getLogger("texlayout")
    handlers, level = logger.handlers[:], logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)


@pytest.fixture
def default_ctx(monkeypatch, char_parser):
    """Shared context using the test parser instead of the LaTeX frontend."""
    ctx = LayoutContext(parser=char_parser).initialize()
    monkeypatch.setattr("texlayout.core.get_default_context", lambda: ctx)
    return ctx


class TestArgumentParser:
    """Tests for argument parsing."""

    def test_defaults(self):
        args = cli.create_parser().parse_args(["x"])
        assert args.formula == "x"
        assert args.format == "text"
        assert args.size == 10.0
        assert not args.display

    def test_options(self):
        args = cli.create_parser().parse_args(["-D", "-f", "json", "--size", "12", "-p", "half"])
        assert args.display
        assert args.format == "json"
        assert args.size == 12.0
        assert args.predefined == "half"

    def test_bad_format(self):
        with pytest.raises(SystemExit):
            cli.create_parser().parse_args(["-f", "png", "x"])


class TestBoxToDict:
    def test_nested(self, env):
        from texlayout.atoms import CharAtom, RowAtom

        box = RowAtom([CharAtom("x"), CharAtom("y")]).create_box(env)
        data = cli.box_to_dict(box)
        assert data["type"] == "HBox"
        assert data["width"] == pytest.approx(5.72 + 4.9)
        assert [child["type"] for child in data["children"]] == ["CharBox", "CharBox"]


class TestMain:
    """Tests for the main entry point."""

    def test_no_formula(self, capsys):
        assert cli.main([]) == 1
        assert "Give a formula" in capsys.readouterr().err

    def test_list_formulas(self, default_ctx, capsys):
        assert cli.main(["--list-formulas"]) == 0
        out = capsys.readouterr().out
        assert "pythagoras" in out
        assert "Total: 5 formulas" in out

    def test_text_output(self, default_ctx, capsys):
        assert cli.main(["xy"]) == 0
        out = capsys.readouterr().out
        assert out.startswith("HBox")
        assert "CharBox 'x'" in out

    def test_json_output(self, default_ctx, capsys):
        assert cli.main(["-f", "json", "x"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["type"] == "CharBox"
        assert data["width"] == pytest.approx(5.72)

    def test_size(self, default_ctx, capsys):
        assert cli.main(["-f", "json", "--size", "20", "x"]) == 0
        assert json.loads(capsys.readouterr().out)["width"] == pytest.approx(11.44)

    def test_color(self, default_ctx, capsys):
        assert cli.main(["-f", "json", "--color", "red", "x"]) == 0
        assert json.loads(capsys.readouterr().out)["type"] == "ColorBox"

    def test_predefined(self, default_ctx, capsys):
        assert cli.main(["-p", "xsquared"]) == 0
        assert capsys.readouterr().out

    def test_unknown_predefined(self, default_ctx, capsys):
        assert cli.main(["-p", "nope"]) == 1
        assert "No predefined formula named 'nope'" in capsys.readouterr().err

    def test_parse_error(self, default_ctx, capsys):
        assert cli.main(["x!"]) == 1
        assert capsys.readouterr().err.startswith("Error:")

    def test_partial_warns(self, default_ctx, capsys):
        assert cli.main(["--partial", "x!"]) == 0
        captured = capsys.readouterr()
        assert "Warning:" in captured.err
        assert captured.out.startswith("StrutBox")

    def test_invalid_dpi(self, default_ctx, capsys):
        assert cli.main(["--dpi", "0", "x"]) == 1
        assert default_ctx.pixels_per_point == 1.0

    def test_dpi_not_kept(self, default_ctx, capsys, monkeypatch):
        """A --dpi run uses the resolution but leaves the shared context alone."""
        seen = []
        create_environment = default_ctx.create_environment

        def recording(**kwargs):
            env = create_environment(**kwargs)
            seen.append(env.pixels_per_point)
            return env

        monkeypatch.setattr(default_ctx, "create_environment", recording)
        assert cli.main(["--dpi", "144", "x"]) == 0
        assert seen == [pytest.approx(2.0)]
        assert default_ctx.pixels_per_point == 1.0
