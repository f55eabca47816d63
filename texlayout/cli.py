"""
Command-line interface for texlayout.

Usage:
    texlayout "x^2 + 1"                 # Print the box tree
    texlayout -D "\\sum_{i=1}^{n} i"     # Lay out in display style
    texlayout -p pythagoras -f json     # Predefined formula as JSON
    texlayout --list-formulas           # List predefined formulas
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from . import __version__
from .utils.errors import TexLayoutError, format_error_for_user
from .utils.logging_config import setup_logging


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="texlayout",
        description="Lay out TeX math formulas into box trees",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  texlayout "x^2 + 1"                  Print the box tree of a formula
  texlayout -D "\\int_0^1 x dx"         Lay out in display style
  texlayout "E = mc^2" --size 12       Lay out at 12pt
  texlayout -p pythagoras -f json      Predefined formula as JSON
  texlayout --list-formulas            List predefined formulas
        """,
    )

    # Positional: formula to lay out
    parser.add_argument(
        "formula",
        nargs="?",
        help="LaTeX math formula",
    )

    parser.add_argument(
        "-p",
        "--predefined",
        metavar="NAME",
        help="Lay out a predefined formula instead",
    )

    parser.add_argument(
        "-f",
        "--format",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )

    parser.add_argument(
        "-D",
        "--display",
        action="store_true",
        help="Use display style instead of text style",
    )

    parser.add_argument(
        "--size",
        type=float,
        default=10.0,
        metavar="PT",
        help="Text size in points (default: 10)",
    )

    parser.add_argument(
        "--dpi",
        type=float,
        metavar="N",
        help="Target resolution in dots per inch",
    )

    parser.add_argument(
        "--color",
        metavar="NAME",
        help="Foreground color (name or #rrggbb)",
    )

    parser.add_argument(
        "--partial",
        action="store_true",
        help="Lay out an empty formula instead of failing on parse errors",
    )

    parser.add_argument(
        "--list-formulas",
        action="store_true",
        help="List predefined formulas",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show debug logging",
    )

    return parser


def box_to_dict(box) -> dict:
    """JSON-ready dump of a box tree."""
    return {
        "type": type(box).__name__,
        "width": box.width,
        "height": box.height,
        "depth": box.depth,
        "shift": box.shift,
        "children": [box_to_dict(child) for child in box.children],
    }


def layout_cli(args: argparse.Namespace) -> int:
    """Lay out the requested formula and print the box tree."""
    from .core import Formula, get_default_context, layout
    from .models import TexStyle

    ctx = get_default_context()
    if args.predefined:
        formula = ctx.get_formula(args.predefined)
    else:
        formula = Formula.from_text(args.formula, ctx.parser, partial=args.partial)
        if formula.parse_error is not None:
            print(f"Warning: {format_error_for_user(formula.parse_error)}", file=sys.stderr)

    if args.color:
        ctx.apply_colors(formula, foreground=args.color)

    # The shared context keeps its resolution for other callers
    previous_ppp = ctx.pixels_per_point
    try:
        if args.dpi is not None:
            ctx.set_dpi_target(args.dpi)
        style = TexStyle.DISPLAY if args.display else TexStyle.TEXT
        env = ctx.create_environment(style=style, text_size=args.size)
    finally:
        ctx.pixels_per_point = previous_ppp
    box = layout(formula, env)

    if args.format == "json":
        print(json.dumps(box_to_dict(box), indent=2))
    else:
        print(box.describe())
    return 0


def list_formulas() -> int:
    """List predefined formulas."""
    from .core import get_default_context

    ctx = get_default_context()
    names = ctx.formula_names()
    for name in names:
        print(f"  {name}")

    print(f"\nTotal: {len(names)} formulas")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    if args.list_formulas:
        return list_formulas()

    if not args.formula and not args.predefined:
        parser.print_usage(sys.stderr)
        print("Error: Give a formula or --predefined NAME", file=sys.stderr)
        return 1

    try:
        return layout_cli(args)
    except TexLayoutError as e:
        print(f"Error: {format_error_for_user(e)}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main() or 0)
