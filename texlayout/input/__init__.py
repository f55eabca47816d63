"""Input layer: turning LaTeX and SymPy expressions into atom trees."""

from .latex import SympyLatexParser, latex_to_atom
from .sympy_atoms import AtomBuilder, sympy_to_atom

__all__ = ["AtomBuilder", "SympyLatexParser", "latex_to_atom", "sympy_to_atom"]
