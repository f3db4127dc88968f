"""Text styles made of offset, coloured copies of the drawn text."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

__all__ = ["StyleBit", "Style"]


@dataclass
class StyleBit:
    """One copy of the text, drawn at an offset in a colour.

    A bit whose colour components are all zero is drawn in the caller's
    colour.
    """

    x_offset: int = 0
    y_offset: int = 0
    r: int = 0
    g: int = 0
    b: int = 0
    a: int = 0


@dataclass
class Style:
    """A named list of style bits, drawn in order."""

    name: Optional[str] = None
    bits: List[StyleBit] = field(default_factory=list)

    def add_bit(
        self, x_offset: int, y_offset: int, r: int, g: int, b: int, a: int
    ) -> StyleBit:
        """Append a new bit and return it."""
        bit = StyleBit(x_offset, y_offset, r, g, b, a)
        self.bits.append(bit)
        return bit

    def offset_bounds(self) -> Tuple[int, int, int, int]:
        """Return ``(min_x, min_y, max_x, max_y)`` of the offsets.

        The bounds always include the origin, so minima are at most 0
        and maxima at least 0.
        """
        min_x = min((bit.x_offset for bit in self.bits), default=0)
        min_y = min((bit.y_offset for bit in self.bits), default=0)
        max_x = max((bit.x_offset for bit in self.bits), default=0)
        max_y = max((bit.y_offset for bit in self.bits), default=0)
        return min(min_x, 0), min(min_y, 0), max(max_x, 0), max(max_y, 0)