"""
Long division (``\\longdiv{divisor}{dividend}``) laid out the way it is
written on paper.
"""

from typing import List

from ..boxes import Box, HBox, RuleBox, StrutBox, VBox
from ..env import Environment
from ..models import Alignment, AtomType, SpaceType
from ..utils.constants import LONG_DIV_ROW_DEPTH, LONG_DIV_ROW_HEIGHT, LONG_DIV_SYMBOL_SCALE
from ..utils.errors import InvalidParameterError
from .base import Atom, AtomKind, CharAtom, RowAtom, SpaceAtom
from .scripts import OverUnderBarAtom
from .symbols import get_symbol
from .transforms import ScaleAtom
from .vrow import VRowAtom


def number_row(text: str) -> RowAtom:
    """One char atom per digit."""
    return RowAtom(CharAtom(ch) for ch in text)


class LongDivAtom(Atom):
    """
    Divisor, division bracket and the full digit-by-digit trace, with the
    quotient on a rule above the dividend.

    Usage:
        LongDivAtom(3, 7).calculate()  # ['2', '7', '6', '1']
    """

    kind = AtomKind.LONG_DIV

    def __init__(self, divisor: int, dividend: int):
        if divisor <= 0 or dividend < 0:
            raise InvalidParameterError(
                f"Long division needs a positive divisor and a non-negative dividend, "
                f"got {divisor} and {dividend}"
            )
        super().__init__(AtomType.ORDINARY)
        self.divisor = divisor
        self.dividend = dividend

    def calculate(self) -> List[str]:
        """
        Quotient followed by the division trace.

        Returns:
            ``[quotient, dividend, product_1, remainder_1, product_2, ...]``
            with one product/remainder pair per quotient digit
        """
        quotient = str(self.dividend // self.divisor)
        results = [quotient, str(self.dividend)]
        remaining = self.dividend
        for i, digit in enumerate(quotient):
            product = int(digit) * 10 ** (len(quotient) - i - 1) * self.divisor
            remaining -= product
            results.append(str(product))
            results.append(str(remaining))
        return results

    def create_box(self, env: Environment) -> Box:
        results = self.calculate()

        trace = VRowAtom(halign=Alignment.RIGHT, valign=Alignment.TOP)
        for i, number in enumerate(results[1:], 1):
            row = number_row(number)
            if i == 1:
                row.add(SpaceAtom(depth=LONG_DIV_ROW_DEPTH))
                trace.append(row)
                continue
            row.add(SpaceAtom(height=LONG_DIV_ROW_HEIGHT, depth=LONG_DIV_ROW_DEPTH))
            trace.append(OverUnderBarAtom(row, over=False) if i % 2 == 0 else row)

        trace_box = trace.create_box(env)

        hbox = HBox(number_row(str(self.divisor)).create_box(env))
        hbox.add(SpaceAtom.of(SpaceType.THIN_MU_SKIP).create_box(env))
        hbox.add(ScaleAtom(get_symbol("longdivision"), LONG_DIV_SYMBOL_SCALE).create_box(env))
        hbox.add(trace_box)

        quotient = number_row(results[0])
        quotient.add(SpaceAtom(height=LONG_DIV_ROW_HEIGHT, depth=LONG_DIV_ROW_DEPTH))
        quotient_box = quotient.create_box(env)
        quotient_box.shift = hbox.width - quotient_box.width

        t = env.overbar_rule_thickness * LONG_DIV_SYMBOL_SCALE
        rule = RuleBox(t, trace_box.width)
        rule.shift = hbox.width - rule.width

        vbox = VBox(quotient_box)
        vbox.add(rule)
        vbox.add(StrutBox.vertical(-t - 1.0))
        vbox.add(hbox)
        return vbox
