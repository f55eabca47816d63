"""Atom layer: formula tree nodes and their layout algorithms."""

from .accent import AccentedAtom
from .base import (
    Atom,
    AtomKind,
    BreakMarkAtom,
    CharAtom,
    EmptyAtom,
    MiddleAtom,
    PlaceholderAtom,
    RowAtom,
    SpaceAtom,
    StyleAtom,
    SymbolAtom,
    TypedAtom,
)
from .fence import BigDelimiterAtom, FencedAtom, create_v_delim
from .glue import create_glue
from .longdiv import LongDivAtom
from .misc import CancelAtom, HlineAtom, RuleAtom, StrikeThroughAtom, UnderScoreAtom, VCenterAtom
from .scripts import (
    BigOperatorAtom,
    CumulativeScriptsAtom,
    OverUnderBarAtom,
    ScriptsAtom,
    SideSetsAtom,
    UnderOverAtom,
)
from .symbols import SymbolTable, default_symbol_table, get_symbol
from .transforms import (
    ColorAtom,
    LapedAtom,
    PhantomAtom,
    RaiseAtom,
    ResizeAtom,
    RotateAtom,
    ScaleAtom,
)
from .vrow import VRowAtom

__all__ = [
    "Atom",
    "AtomKind",
    "AccentedAtom",
    "BigDelimiterAtom",
    "BigOperatorAtom",
    "BreakMarkAtom",
    "CancelAtom",
    "CharAtom",
    "ColorAtom",
    "CumulativeScriptsAtom",
    "EmptyAtom",
    "FencedAtom",
    "HlineAtom",
    "LapedAtom",
    "LongDivAtom",
    "MiddleAtom",
    "OverUnderBarAtom",
    "PhantomAtom",
    "PlaceholderAtom",
    "RaiseAtom",
    "ResizeAtom",
    "RotateAtom",
    "RowAtom",
    "RuleAtom",
    "ScaleAtom",
    "ScriptsAtom",
    "SideSetsAtom",
    "SpaceAtom",
    "StrikeThroughAtom",
    "StyleAtom",
    "SymbolAtom",
    "SymbolTable",
    "TypedAtom",
    "UnderOverAtom",
    "UnderScoreAtom",
    "VCenterAtom",
    "VRowAtom",
    "create_glue",
    "create_v_delim",
    "default_symbol_table",
    "get_symbol",
]
