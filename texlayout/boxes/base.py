"""
Leaf boxes of the box tree.

A box is a measured rectangle: ``width``, ``height`` above the baseline,
``depth`` below it, and a ``shift`` applied by its parent (vertical inside
an HBox, horizontal inside a VBox). Boxes hold geometry only; all layout
policy lives in the atoms.
"""

from typing import List, Optional, Tuple

from ..models import AtomType

# Differences below this are treated as equal
PREC = 1e-7


def _fmt(value: float) -> str:
    return f"{value:.4g}"


class Box:
    """
    Base class for all boxes.

    Leaves have no children; groups override ``children`` and
    ``replace_first``.
    """

    is_space = False

    def __init__(
        self,
        width: float = 0.0,
        height: float = 0.0,
        depth: float = 0.0,
        shift: float = 0.0,
    ):
        self.width = width
        self.height = height
        self.depth = depth
        self.shift = shift
        self.atom_type = AtomType.NONE

    @property
    def vlen(self) -> float:
        """Total vertical extent (height + depth)."""
        return self.height + self.depth

    @property
    def children(self) -> List["Box"]:
        return []

    def replace_first(self, old: "Box", new: "Box") -> bool:
        """
        Replace the first occurrence of ``old`` in this subtree by ``new``.

        Returns:
            True if a replacement happened
        """
        return False

    def walk(self):
        """Yield this box and all its descendants, depth first."""
        yield self
        for child in self.children:
            yield from child.walk()

    def _label(self) -> str:
        return type(self).__name__

    def describe(self, indent: int = 0) -> str:
        """Return an indented, human-readable dump of this subtree."""
        line = (
            f"{'  ' * indent}{self._label()} "
            f"w={_fmt(self.width)} h={_fmt(self.height)} "
            f"d={_fmt(self.depth)} s={_fmt(self.shift)}"
        )
        lines = [line]
        for child in self.children:
            lines.append(child.describe(indent + 1))
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(width={self.width:.6g}, height={self.height:.6g}, "
            f"depth={self.depth:.6g}, shift={self.shift:.6g})"
        )


class StrutBox(Box):
    """An invisible box reserving space."""

    is_space = True

    @classmethod
    def empty(cls) -> "StrutBox":
        return cls(0.0, 0.0, 0.0, 0.0)

    @classmethod
    def horizontal(cls, width: float) -> "StrutBox":
        return cls(width, 0.0, 0.0, 0.0)

    @classmethod
    def vertical(cls, height: float) -> "StrutBox":
        return cls(0.0, height, 0.0, 0.0)


class GlueBox(Box):
    """Inter-atom space with stretch and shrink components."""

    is_space = True

    def __init__(self, space: float, stretch: float = 0.0, shrink: float = 0.0):
        super().__init__(width=space)
        self.stretch = stretch
        self.shrink = shrink


class PlaceholderBox(StrutBox):
    """
    Zero-size marker left in a box tree where content is resolved later.

    ``source`` identifies the atom that emitted it so the owner can find and
    replace the right marker.
    """

    def __init__(self, source: object, height: float = 0.0, depth: float = 0.0, shift: float = 0.0):
        super().__init__(0.0, height, depth, shift)
        self.source = source


class CharBox(Box):
    """A single glyph at a given font size."""

    def __init__(self, char: str, width: float, height: float, depth: float, italic: float = 0.0, size: float = 1.0):
        super().__init__(width, height, depth)
        self.char = char
        self.italic = italic
        self.size = size

    def _label(self) -> str:
        return f"CharBox {self.char!r}"


class RuleBox(Box):
    """A filled rectangle; ``thickness`` is its height above the (shifted) baseline."""

    def __init__(self, thickness: float, width: float, raise_: float = 0.0, color: Optional[str] = None):
        super().__init__(width, thickness, 0.0, raise_)
        self.color = color


class LineBox(Box):
    """
    Straight overlay lines drawn inside the box's bounding rectangle.

    Each line is ``(x0, y0, x1, y1)`` measured from the bottom-left corner
    (y grows upwards).
    """

    def __init__(self, lines: List[Tuple[float, float, float, float]], thickness: float):
        super().__init__()
        self.lines = list(lines)
        self.thickness = thickness

    def _label(self) -> str:
        return f"LineBox x{len(self.lines)}"
