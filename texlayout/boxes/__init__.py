"""Box model: measured geometry produced by layout."""

from .base import PREC, Box, CharBox, GlueBox, LineBox, PlaceholderBox, RuleBox, StrutBox
from .group import BoxGroup, HBox, VBox
from .transforms import ColorBox, RotateBox, ScaleBox, WrapperBox

__all__ = [
    "PREC",
    "Box",
    "CharBox",
    "GlueBox",
    "LineBox",
    "PlaceholderBox",
    "RuleBox",
    "StrutBox",
    "BoxGroup",
    "HBox",
    "VBox",
    "ColorBox",
    "RotateBox",
    "ScaleBox",
    "WrapperBox",
]
