"""
Atoms wrapping a single base: scale, raise, resize, rotate, colour,
phantom and lap.
"""

from typing import Optional, Tuple

from ..boxes import Box, ColorBox, HBox, RotateBox, ScaleBox, StrutBox, VBox
from ..env import Environment, parse_dimen, parse_options
from ..models import AtomType, Dimen, Rotation, UnitType
from ..utils.errors import InvalidParameterError
from .base import Atom, AtomKind, RowAtom


class ScaleAtom(Atom):
    """Base scaled by ``sx`` horizontally and ``sy`` vertically."""

    kind = AtomKind.SCALE

    def __init__(self, base: Atom, sx: float, sy: Optional[float] = None):
        super().__init__(base.atom_type)
        self.base = base
        self.sx = sx
        self.sy = sx if sy is None else sy

    def create_box(self, env: Environment) -> Box:
        return ScaleBox(self.base.create_box(env), self.sx, self.sy)


class RaiseAtom(Atom):
    """Base moved up by ``raise_``, optionally with a forced height and depth."""

    kind = AtomKind.RAISE

    def __init__(
        self,
        base: Atom,
        raise_: Optional[Dimen] = None,
        height: Optional[Dimen] = None,
        depth: Optional[Dimen] = None,
    ):
        super().__init__(base.atom_type)
        self.base = base
        self.raise_ = raise_
        self.height = height
        self.depth = depth

    def create_box(self, env: Environment) -> Box:
        box = self.base.create_box(env)
        if self.raise_ is not None:
            box.shift = -env.size_of(self.raise_)
        hbox = HBox(box)
        if self.height is not None:
            hbox.height = env.size_of(self.height)
        if self.depth is not None:
            hbox.depth = env.size_of(self.depth)
        return hbox


def _ratio(target: float, actual: float) -> float:
    return target / actual if actual else 1.0


class ResizeAtom(Atom):
    """
    Base scaled to a target width and/or height.

    With a single target both axes use its ratio. With both targets each
    axis is scaled independently, unless ``keep_aspect_ratio`` is set, in
    which case both use the smaller ratio. The height target applies to
    the total vertical extent.
    """

    kind = AtomKind.RESIZE

    def __init__(
        self,
        base: Atom,
        width: Optional[Dimen] = None,
        height: Optional[Dimen] = None,
        keep_aspect_ratio: bool = False,
    ):
        super().__init__(base.atom_type)
        self.base = base
        self.width = width
        self.height = height
        self.keep_aspect_ratio = keep_aspect_ratio

    def scale_factors(self, box: Box, env: Environment) -> Tuple[float, float]:
        """Horizontal and vertical factors that bring ``box`` to the targets."""
        if self.width is not None and self.height is not None:
            sx = _ratio(env.size_of(self.width), box.width)
            sy = _ratio(env.size_of(self.height), box.vlen)
            if self.keep_aspect_ratio:
                sx = sy = min(sx, sy)
            return sx, sy
        if self.width is not None:
            sx = _ratio(env.size_of(self.width), box.width)
            return sx, sx
        if self.height is not None:
            sy = _ratio(env.size_of(self.height), box.vlen)
            return sy, sy
        return 1.0, 1.0

    def create_box(self, env: Environment) -> Box:
        box = self.base.create_box(env)
        if self.width is None and self.height is None:
            return box
        sx, sy = self.scale_factors(box, env)
        return ScaleBox(box, sx, sy)


def parse_rotation(name: str) -> Rotation:
    """
    Named rotation origin from its option text (``"bl"``, ``"Bc"``...).

    The two letters may be given in either order.

    Raises:
        InvalidParameterError: If the name is not a known origin
    """
    for candidate in (name, name[::-1]):
        try:
            return Rotation(candidate)
        except ValueError:
            continue
    raise InvalidParameterError(f"Unknown rotation origin: '{name}'")


class RotateAtom(Atom):
    """
    Base rotated counter-clockwise by ``angle`` degrees.

    The pivot is a named origin, or an (x, y) offset from the base's
    baseline-left point when no origin is given.

    Usage:
        RotateAtom(base, 90.0, origin=Rotation.BASELINE_LEFT)
        RotateAtom.from_options(base, 45.0, "x=1em,y=0.5em")
    """

    kind = AtomKind.ROTATE

    def __init__(
        self,
        base: Atom,
        angle: float,
        origin: Optional[Rotation] = None,
        x: Dimen = Dimen(0.0, UnitType.EM),
        y: Dimen = Dimen(0.0, UnitType.EM),
    ):
        super().__init__(base.atom_type)
        self.base = base
        self.angle = angle
        self.origin = origin
        self.x = x
        self.y = y

    @classmethod
    def from_options(cls, base: Atom, angle: float, options: str) -> "RotateAtom":
        """Build from an option list such as ``"origin=bl"`` or ``"x=1em,y=2pt"``."""
        opts = parse_options(options)
        if "origin" in opts:
            return cls(base, angle, origin=parse_rotation(opts["origin"]))
        x = parse_dimen(opts["x"]) if opts.get("x") else Dimen(0.0, UnitType.EM)
        y = parse_dimen(opts["y"]) if opts.get("y") else Dimen(0.0, UnitType.EM)
        return cls(base, angle, x=x, y=y)

    def create_box(self, env: Environment) -> Box:
        box = self.base.create_box(env)
        if self.origin is not None and self.origin is not Rotation.NONE:
            return RotateBox(box, self.angle, origin=self.origin)
        return RotateBox(box, self.angle, x=env.size_of(self.x), y=env.size_of(self.y))


class ColorAtom(Atom):
    """Base painted with a foreground and/or background colour."""

    kind = AtomKind.COLOR

    def __init__(self, base: Atom, foreground: Optional[str] = None, background: Optional[str] = None):
        super().__init__(base.atom_type)
        self.base = base
        self.foreground = foreground
        self.background = background

    def create_box(self, env: Environment) -> Box:
        return ColorBox(self.base.create_box(env), self.foreground, self.background)

    def left_type(self) -> AtomType:
        return self.base.left_type()

    def right_type(self) -> AtomType:
        return self.base.right_type()


class PhantomAtom(Atom):
    """Invisible base; each of width, height and depth can be kept or zeroed."""

    kind = AtomKind.PHANTOM

    def __init__(self, base: Optional[Atom], width: bool = True, height: bool = True, depth: bool = True):
        base = base if base is not None else RowAtom()
        super().__init__(base.atom_type)
        self.base = base
        self.keep_width = width
        self.keep_height = height
        self.keep_depth = depth

    def create_box(self, env: Environment) -> Box:
        box = self.base.create_box(env)
        return StrutBox(
            box.width if self.keep_width else 0.0,
            box.height if self.keep_height else 0.0,
            box.depth if self.keep_depth else 0.0,
            box.shift,
        )


class LapedAtom(Atom):
    """
    Base overlapping its neighbours: measured width is zero.

    ``mode`` is ``"l"`` (stick out to the left), ``"r"`` (to the right) or
    anything else for centered.
    """

    kind = AtomKind.LAPED

    def __init__(self, base: Atom, mode: str = "r"):
        super().__init__(base.atom_type)
        self.base = base
        self.mode = mode

    def create_box(self, env: Environment) -> Box:
        box = self.base.create_box(env)
        vbox = VBox()
        if self.mode == "l":
            box.shift = -box.width
        elif self.mode == "r":
            box.shift = 0.0
        else:
            box.shift = -box.width / 2
        vbox.add(box)
        vbox.width = 0.0
        return vbox
