"""
Composite boxes: horizontal runs and vertical stacks.
"""

from typing import List, Optional, Tuple

from ..models import Alignment
from .base import PREC, Box, StrutBox


class BoxGroup(Box):
    """A box owning an ordered list of child boxes."""

    def __init__(self):
        super().__init__()
        self._children: List[Box] = []

    @property
    def children(self) -> List[Box]:
        return self._children

    def __len__(self) -> int:
        return len(self._children)

    def _natural(self) -> Tuple[float, float, float]:
        """Width, height and depth computed from the children alone."""
        raise NotImplementedError

    def replace_first(self, old: Box, new: Box) -> bool:
        for i, child in enumerate(self._children):
            if child is old:
                before = self._natural()
                self._children[i] = new
                self._apply_delta(before)
                return True
            before = self._natural()
            if child.replace_first(old, new):
                self._apply_delta(before)
                return True
        return False

    def _apply_delta(self, before: Tuple[float, float, float]):
        # Keeps manual adjustments made by the owner (e.g. a pinned height)
        after = self._natural()
        self.width += after[0] - before[0]
        self.height += after[1] - before[1]
        self.depth += after[2] - before[2]


class HBox(BoxGroup):
    """
    Children placed left to right on a common baseline.

    A child's ``shift`` moves it down (positive) or up (negative).

    Usage:
        hb = HBox(box, width=10.0, alignment=Alignment.RIGHT)
        hb.add(other)
    """

    def __init__(
        self,
        box: Optional[Box] = None,
        width: Optional[float] = None,
        alignment: Alignment = Alignment.CENTER,
    ):
        super().__init__()
        self.break_positions: List[int] = []
        if box is None:
            return
        rest = 0.0 if width is None else width - box.width
        if rest <= PREC:
            self.add(box)
        elif alignment is Alignment.LEFT:
            self.add(box)
            self.add(StrutBox.horizontal(rest))
        elif alignment is Alignment.RIGHT:
            self.add(StrutBox.horizontal(rest))
            self.add(box)
        else:
            self.add(StrutBox.horizontal(rest / 2))
            self.add(box)
            self.add(StrutBox.horizontal(rest / 2))

    def add(self, box: Box, index: Optional[int] = None):
        """Append ``box`` (or insert it at ``index``) and update the measurements."""
        if index is not None:
            self._children.insert(index, box)
            self.width, self.height, self.depth = self._natural()
            return
        first = not self._children
        self._children.append(box)
        self.width += box.width
        if first:
            self.height = box.height - box.shift
            self.depth = box.depth + box.shift
        else:
            self.height = max(self.height, box.height - box.shift)
            self.depth = max(self.depth, box.depth + box.shift)

    def add_break_position(self):
        """Mark the current end of the run as a line-break opportunity."""
        self.break_positions.append(len(self._children))

    def _natural(self) -> Tuple[float, float, float]:
        if not self._children:
            return 0.0, 0.0, 0.0
        width = sum(c.width for c in self._children)
        height = max(c.height - c.shift for c in self._children)
        depth = max(c.depth + c.shift for c in self._children)
        return width, height, depth


class VBox(BoxGroup):
    """
    Children stacked top to bottom.

    The baseline of the stack is the baseline of its first child; owners
    re-pin ``height``/``depth`` when they need another reference. A child's
    ``shift`` moves it to the right.
    """

    def __init__(self, box: Optional[Box] = None):
        super().__init__()
        self._left = 0.0
        self._right = 0.0
        if box is not None:
            self.add(box)

    def add(self, box: Box, interline: float = 0.0):
        """
        Append ``box`` at the bottom of the stack.

        Args:
            box: Box to append
            interline: Height of a strut inserted before ``box`` when the
                stack is not empty
        """
        if interline and self._children:
            self._append(StrutBox.vertical(interline))
        self._append(box)

    def _append(self, box: Box):
        if not self._children:
            self.height = box.height
            self.depth = box.depth
            self._left = box.shift
            self._right = box.shift + max(box.width, 0.0)
        else:
            self.depth += box.vlen
            self._left = min(self._left, box.shift)
            self._right = max(self._right, box.shift + max(box.width, 0.0))
        self._children.append(box)
        self.width = self._right - self._left

    @property
    def left_most(self) -> float:
        """Horizontal offset of the leftmost child edge."""
        return self._left

    def _natural(self) -> Tuple[float, float, float]:
        if not self._children:
            return 0.0, 0.0, 0.0
        first = self._children[0]
        left = min(c.shift for c in self._children)
        right = max(c.shift + max(c.width, 0.0) for c in self._children)
        depth = first.depth + sum(c.vlen for c in self._children[1:])
        return right - left, first.height, depth

    def _apply_delta(self, before: Tuple[float, float, float]):
        super()._apply_delta(before)
        self._left = min(c.shift for c in self._children)
        self._right = self._left + self.width
