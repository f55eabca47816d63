"""
Wrapper boxes that transform a single child: scale, rotation, colour.
"""

import math
from typing import List, Optional, Tuple

from ..models import Rotation
from ..utils.errors import InvalidParameterError
from .base import Box


class WrapperBox(Box):
    """A box holding exactly one child."""

    def __init__(self, box: Box):
        super().__init__()
        self.box = box

    @property
    def children(self) -> List[Box]:
        return [self.box]

    def replace_first(self, old: Box, new: Box) -> bool:
        if self.box is old:
            self.box = new
            self._measure()
            return True
        if self.box.replace_first(old, new):
            self._measure()
            return True
        return False

    def _measure(self):
        raise NotImplementedError


class ScaleBox(WrapperBox):
    """
    Child scaled by ``sx`` horizontally and ``sy`` vertically.

    A negative factor mirrors the child; a non-finite factor is treated as 1.
    """

    def __init__(self, box: Box, sx: float, sy: Optional[float] = None):
        super().__init__(box)
        if sy is None:
            sy = sx
        self.sx = sx if math.isfinite(sx) else 1.0
        self.sy = sy if math.isfinite(sy) else 1.0
        self._measure()

    def _measure(self):
        b = self.box
        self.width = b.width * abs(self.sx)
        if self.sy > 0:
            self.height = b.height * self.sy
            self.depth = b.depth * self.sy
        else:
            self.height = -b.depth * self.sy
            self.depth = -b.height * self.sy
        self.shift = b.shift * self.sy

    def _label(self) -> str:
        return f"ScaleBox sx={self.sx:.4g} sy={self.sy:.4g}"


class RotateBox(WrapperBox):
    """
    Child rotated counter-clockwise by ``angle`` degrees.

    The pivot is either a named origin on the child's bounding box or an
    explicit ``(x, y)`` offset from the child's baseline-left point (y up).
    The new bounding box is computed from the four rotated corners;
    ``x_offset`` is how far the renderer must move the rotated child right
    so that its leftmost point sits at the box origin.

    Usage:
        rb = RotateBox(box, 90.0, origin=Rotation.BASELINE_LEFT)
        rb = RotateBox(box, 45.0, x=1.0, y=0.5)
    """

    def __init__(
        self,
        box: Box,
        angle: float,
        origin: Optional[Rotation] = None,
        x: float = 0.0,
        y: float = 0.0,
    ):
        super().__init__(box)
        self.angle = angle
        self.origin = origin
        self._x = x
        self._y = y
        self._measure()

    @staticmethod
    def origin_point(box: Box, origin: Rotation) -> Tuple[float, float]:
        """Pivot coordinates of a named origin, relative to the baseline-left point."""
        w, h, d = box.width, box.height, box.depth
        xs = {"l": 0.0, "c": w / 2, "r": w}
        ys = {"b": -d, "t": h, "B": 0.0, "c": (h - d) / 2}
        if origin is Rotation.NONE:
            raise InvalidParameterError("Rotation origin 'none' has no pivot point")
        v, hz = origin.value[0], origin.value[1]
        return xs[hz], ys[v]

    @property
    def pivot(self) -> Tuple[float, float]:
        if self.origin is not None and self.origin is not Rotation.NONE:
            return self.origin_point(self.box, self.origin)
        return self._x, self._y

    def _measure(self):
        b = self.box
        px, py = self.pivot
        rad = math.radians(self.angle)
        c, s = math.cos(rad), math.sin(rad)
        corners = [(0.0, -b.depth), (b.width, -b.depth), (b.width, b.height), (0.0, b.height)]
        xs, ys = [], []
        for cx, cy in corners:
            dx, dy = cx - px, cy - py
            xs.append(px + dx * c - dy * s)
            ys.append(py + dx * s + dy * c)
        self.x_offset = -min(xs)
        self.width = max(xs) - min(xs)
        self.height = max(ys)
        self.depth = -min(ys)

    def _label(self) -> str:
        return f"RotateBox {self.angle:g}deg"


class ColorBox(WrapperBox):
    """Child painted with a foreground and/or background colour."""

    def __init__(self, box: Box, foreground: Optional[str] = None, background: Optional[str] = None):
        super().__init__(box)
        self.foreground = foreground
        self.background = background
        self._measure()

    def _measure(self):
        b = self.box
        self.width, self.height, self.depth, self.shift = b.width, b.height, b.depth, b.shift

    def _label(self) -> str:
        return f"ColorBox fg={self.foreground} bg={self.background}"
