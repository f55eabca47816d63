#!/usr/bin/env python3
"""
texlayout - TeX math-mode layout engine.

Entry point for running from a source checkout.

Usage:
    python main.py "x^2 + 1"            # Print the box tree
    python main.py -D "\\sum_i x_i"      # Display style
"""

import sys

from texlayout.cli import main

if __name__ == "__main__":
    sys.exit(main() or 0)
