# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Graphics state: colors, line styles and the state tracked per page."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import IntEnum
from typing import TYPE_CHECKING

from pikepdf import Matrix

if TYPE_CHECKING:
    from .fonts.font import Font

Number = int | float


class JoinStyle(IntEnum):
    """Line join style (``j`` operator)."""

    MITER = 0
    ROUND = 1
    BEVEL = 2


class CapStyle(IntEnum):
    """Line cap style (``J`` operator)."""

    BUTT = 0
    ROUND = 1
    PROJECTING_SQUARE = 2


@dataclass(frozen=True)
class Color:
    """A device color, either RGB or gray.

    Components are stored in the 0..1 range used by PDF.
    """

    components: tuple[float, ...]

    def __post_init__(self) -> None:
        if len(self.components) not in (1, 3):
            raise ValueError("A color has either 1 (gray) or 3 (RGB) components")
        for value in self.components:
            if not 0 <= value <= 1:
                raise ValueError(f"Color component {value} outside 0..1")

    @classmethod
    def rgb(cls, red: int, green: int, blue: int) -> Color:
        """Creates an RGB color from 0-255 components."""
        return cls(tuple(_channel(v) for v in (red, green, blue)))

    @classmethod
    def gray(cls, level: int) -> Color:
        """Creates a gray level from 0 (black) to 255 (white)."""
        return cls((_channel(level),))

    @classmethod
    def from_floats(cls, *components: float) -> Color:
        """Creates a color from PDF components in the 0..1 range."""
        return cls(tuple(float(c) for c in components))

    @property
    def is_gray(self) -> bool:
        return len(self.components) == 1

    def stroke_operator(self) -> str:
        return "G" if self.is_gray else "RG"

    def fill_operator(self) -> str:
        return "g" if self.is_gray else "rg"


def _channel(value: int) -> float:
    if not 0 <= value <= 255:
        raise ValueError(f"Color channel {value} outside 0..255")
    return value / 255


BLACK = Color.gray(0)


@dataclass
class GraphicsState:
    """Parameters in effect at one point of a content stream.

    Mirrors the parts of the PDF graphics state that pdfcanvas changes,
    plus the text state and the tracked text position.
    """

    ctm: Matrix = field(default_factory=Matrix)
    stroke_color: Color = BLACK
    fill_color: Color = BLACK
    line_width: Number = 1
    cap_style: CapStyle = CapStyle.BUTT
    join_style: JoinStyle = JoinStyle.MITER
    dash_array: tuple[Number, ...] = ()
    dash_phase: Number = 0
    font: Font | None = None
    font_size: Number = 0
    char_spacing: Number = 0
    word_spacing: Number = 0
    leading: Number = 0
    rise: Number = 0
    # Start of the current text line and current position, in text space
    line_origin: tuple[float, float] = (0, 0)
    text_position: tuple[float, float] = (0, 0)

    def copy(self) -> GraphicsState:
        """Returns an independent copy; fonts are shared, not copied."""
        return copy.copy(self)
