"""
SymPy expression to atom tree conversion.

Turns the expression trees produced by `sympy.parsing.latex.parse_latex`
(or built directly with sympy) into atoms the layout engine understands.
"""

from typing import List, Optional

import sympy as sp

from ..atoms import (
    Atom,
    BigOperatorAtom,
    CharAtom,
    FencedAtom,
    RowAtom,
    ScriptsAtom,
    SpaceAtom,
    SymbolTable,
    default_symbol_table,
)
from ..core.context import UnicodeBlock
from ..models import SpaceType
from ..utils.errors import InvalidParameterError

# sympy relational operator -> symbol name
REL_SYMBOLS = {
    "==": "equals",
    "!=": "neq",
    "<": "lt",
    "<=": "leq",
    ">": "gt",
    ">=": "geq",
}

BIG_OPERATORS = {
    sp.Integral: "int",
    sp.Sum: "sum",
    sp.Product: "prod",
}


class AtomBuilder:
    """
    Build atom trees from SymPy expressions.

    Usage:
        builder = AtomBuilder()
        x = sp.Symbol("x")
        atom = builder.build(x**2 + 1)  # row: scripts(x, 2), +, 1
    """

    def __init__(self, symbols: Optional[SymbolTable] = None):
        self.symbols = symbols or default_symbol_table()

    def build(self, expr: sp.Basic) -> Atom:
        """
        Convert ``expr`` into an atom.

        Raises:
            InvalidParameterError: If ``expr`` has no layout counterpart
        """
        if isinstance(expr, sp.core.relational.Relational):
            return self._relational(expr)
        if isinstance(expr, sp.Integer):
            return self._integer(int(expr))
        if isinstance(expr, sp.Rational):
            return self._rational(expr)
        if isinstance(expr, sp.Float):
            return self._chars(f"{float(expr):g}")
        if expr is sp.pi:
            return self.symbols.get("pi")
        if expr is sp.E:
            return CharAtom("e")
        if expr is sp.I:
            return CharAtom("i")
        if expr is sp.oo:
            return self.symbols.get("infty")
        if expr is sp.S.NegativeInfinity:
            return RowAtom([self.symbols.get("minus"), self.symbols.get("infty")])
        if isinstance(expr, sp.Symbol):
            return self._name(expr.name)
        if isinstance(expr, sp.Add):
            return self._add(expr)
        if isinstance(expr, sp.Mul):
            return self._mul(expr)
        if isinstance(expr, sp.Pow):
            return ScriptsAtom(self._fenced_if_compound(expr.base), sup=self.build(expr.exp))
        if isinstance(expr, sp.Abs):
            return FencedAtom(self.build(expr.args[0]), "vert", "vert")
        if isinstance(expr, sp.exp):
            return ScriptsAtom(CharAtom("e"), sup=self.build(expr.args[0]))
        for cls, name in BIG_OPERATORS.items():
            if isinstance(expr, cls):
                return self._big_operator(expr, name)
        if isinstance(expr, sp.Function):
            return self._function(expr)

        raise InvalidParameterError(
            f"Cannot lay out {type(expr).__name__} expressions",
            technical_details=sp.srepr(expr),
        )

    # === Leaves ===

    def _chars(self, text: str) -> Atom:
        if len(text) == 1:
            return CharAtom(text)
        return RowAtom(CharAtom(ch) for ch in text)

    def _integer(self, value: int) -> Atom:
        if value < 0:
            return RowAtom([self.symbols.get("minus"), self._chars(str(-value))])
        return self._chars(str(value))

    def _rational(self, value: sp.Rational) -> Atom:
        row = RowAtom()
        if value.p < 0:
            row.add(self.symbols.get("minus"))
        row.add(self._chars(str(abs(value.p))))
        row.add(self.symbols.get("slash"))
        row.add(self._chars(str(value.q)))
        return row

    def _name(self, name: str) -> Atom:
        """Symbol name; ``x_1`` becomes a subscripted ``x``."""
        if "_" in name:
            base, sub = name.split("_", 1)
            if base and sub:
                return ScriptsAtom(self._name(base), sub=self._name(sub.strip("{}")))
        if name in self.symbols:
            symbol = self.symbols.get(name)
            if UnicodeBlock.of(symbol.char).name == "GREEK":
                return symbol
        if len(name) == 1:
            return CharAtom(name)
        return RowAtom(CharAtom(ch) for ch in name)

    # === Compounds ===

    def _relational(self, expr: sp.core.relational.Relational) -> Atom:
        try:
            op = REL_SYMBOLS[expr.rel_op]
        except KeyError:
            raise InvalidParameterError(f"Unsupported relation: '{expr.rel_op}'") from None
        return RowAtom([self.build(expr.lhs), self.symbols.get(op), self.build(expr.rhs)])

    def _add(self, expr: sp.Add) -> Atom:
        terms = expr.as_ordered_terms()
        row = RowAtom([self.build(terms[0])])
        for term in terms[1:]:
            if term.could_extract_minus_sign():
                row.add(self.symbols.get("minus"))
                row.add(self.build(-term))
            else:
                row.add(self.symbols.get("plus"))
                row.add(self.build(term))
        return row

    def _mul(self, expr: sp.Mul) -> Atom:
        if expr.could_extract_minus_sign():
            return RowAtom([self.symbols.get("minus"), self._fenced_if_sum(-expr)])

        numerator, denominator = sp.fraction(expr)
        if denominator != 1:
            return RowAtom(
                [
                    self._fenced_if_compound(numerator),
                    self.symbols.get("slash"),
                    self._fenced_if_compound(denominator),
                ]
            )

        row = RowAtom()
        previous: Optional[sp.Basic] = None
        for factor in expr.as_ordered_factors():
            if previous is not None and previous.is_Number and factor.is_Number:
                row.add(self.symbols.get("cdot"))
            row.add(self._fenced_if_sum(factor))
            previous = factor
        return row

    def _function(self, expr: sp.Function) -> Atom:
        name = getattr(expr.func, "__name__", str(expr.func))
        args: List[Atom] = []
        for i, arg in enumerate(expr.args):
            if i > 0:
                args.append(self.symbols.get("comma"))
            args.append(self.build(arg))
        return RowAtom([self._chars(name), FencedAtom(RowAtom(args), "lbrack", "rbrack")])

    def _big_operator(self, expr: sp.Basic, name: str) -> Atom:
        row = RowAtom()
        for limit in reversed(expr.limits):
            under = over = None
            if len(limit) == 3:
                lower, upper = limit[1], limit[2]
                if name == "int":
                    under = self.build(lower)
                else:
                    under = RowAtom([self.build(limit[0]), self.symbols.get("equals"), self.build(lower)])
                over = self.build(upper)
            row.add(BigOperatorAtom(self.symbols.get(name), under=under, over=over))
        row.add(self._fenced_if_sum(expr.function))
        if name == "int":
            for limit in expr.limits:
                row.add(SpaceAtom.of(SpaceType.THIN_MU_SKIP))
                row.add(CharAtom("d"))
                row.add(self.build(limit[0]))
        return row

    # === Fencing ===

    def _fenced_if_sum(self, expr: sp.Basic) -> Atom:
        atom = self.build(expr)
        if isinstance(expr, sp.Add):
            return FencedAtom(atom, "lbrack", "rbrack")
        return atom

    def _fenced_if_compound(self, expr: sp.Basic) -> Atom:
        """Wrap in parentheses unless ``expr`` reads as one unit."""
        atom = self.build(expr)
        compound = (
            isinstance(expr, (sp.Add, sp.Mul, sp.Pow))
            or (expr.is_Rational and not expr.is_Integer)
            or (expr.is_Number and expr.is_negative)
        )
        if compound:
            return FencedAtom(atom, "lbrack", "rbrack")
        return atom


def sympy_to_atom(expr: sp.Basic) -> Atom:
    """
    Convenience function: convert a SymPy expression with the default symbols.

    Raises InvalidParameterError on unsupported expressions.
    """
    return AtomBuilder().build(expr)
