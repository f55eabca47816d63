"""
Unit conversion.

Layout arithmetic works in points (72 per inch). Font-relative units
(em, ex, mu) depend on the environment's current size; pixels depend on
its pixels-per-point factor.
"""

import re
from typing import Dict

from ..models import Dimen, UnitType
from ..utils.errors import InvalidUnitError

# Points per unit for the absolute units
ABSOLUTE_UNITS = {
    UnitType.POINT: 1.0,
    UnitType.BP: 1.0,
    UnitType.PICA: 12.0,
    UnitType.IN: 72.0,
    UnitType.CM: 72.0 / 2.54,
    UnitType.MM: 7.2 / 2.54,
}

_DIMEN_RE = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+))\s*([a-zA-Z]{2})\s*$")


def fsize(dimen: Dimen, env) -> float:
    """
    Convert a dimension to layout points.

    Args:
        dimen: Dimension to convert
        env: Environment providing the font-relative sizes

    Returns:
        Length in points
    """
    unit = dimen.unit
    if unit in ABSOLUTE_UNITS:
        return dimen.value * ABSOLUTE_UNITS[unit]
    if unit is UnitType.EM:
        return dimen.value * env.quad
    if unit is UnitType.EX:
        return dimen.value * env.x_height
    if unit is UnitType.MU:
        return dimen.value * env.quad / 18.0
    if unit is UnitType.PIXEL:
        return dimen.value / env.pixels_per_point
    raise InvalidUnitError(str(dimen))


def parse_dimen(text: str) -> Dimen:
    """
    Parse a textual dimension such as ``"1.5em"`` or ``"-3 mu"``.

    Raises:
        InvalidUnitError: If the number or the unit is malformed
    """
    match = _DIMEN_RE.match(text)
    if not match:
        raise InvalidUnitError(text)
    value, unit = match.groups()
    try:
        return Dimen(float(value), UnitType(unit))
    except ValueError:
        raise InvalidUnitError(text) from None


def parse_options(text: str) -> Dict[str, str]:
    """
    Parse a ``key=value`` option list, e.g. ``"origin=bl,x=1em"``.

    Keys without a value map to an empty string.
    """
    options = {}
    for item in text.split(","):
        item = item.strip()
        if not item:
            continue
        key, _, value = item.partition("=")
        options[key.strip()] = value.strip()
    return options
