# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Drawing on a page: content stream generation and graphics state.

A :class:`Canvas` turns drawing calls into content stream operators and
keeps a stack of :class:`GraphicsState` objects in step with the ``q``/``Q``
operators it emits. Text is drawn through a :class:`TextObject`, which only
exists between ``BT`` and ``ET``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence
from contextlib import contextmanager
from decimal import Decimal
from typing import TYPE_CHECKING

from pikepdf import Matrix

from .exceptions import (
    DocumentFinalizedError,
    TextStateError,
    UnbalancedGraphicsStateError,
)
from .fonts.constants import GLYPH_SPACE_UNITS
from .fonts.encodings import escape_for_literal
from .fonts.font import BuiltinFont, Font
from .graphics import CapStyle, Color, GraphicsState, JoinStyle
from .utils import format_number
from .writer import serialize_name

if TYPE_CHECKING:
    from .document import Page

logger = logging.getLogger(__name__)

Number = int | float | Decimal
Operand = Number | bytes | str | list

# Bezier control point distance for a quarter circle of radius 1
KAPPA = 0.551915024494


def _operand(value: Operand) -> bytes:
    if isinstance(value, bytes):
        return b"(" + escape_for_literal(value) + b")"
    if isinstance(value, str):
        return serialize_name(value)
    if isinstance(value, list):
        return b"[" + b" ".join(_operand(v) for v in value) + b"]"
    return format_number(value).encode("ascii")


class ContentStreamBuilder:
    """Content stream builder.

    Each call appends one operator line. Byte string operands are expected
    to be encoded already; they are escaped here. ``str`` operands are
    written as names.
    """

    def __init__(self) -> None:
        self._stream = bytearray()

    def _append(self, operator: str, *operands: Operand) -> ContentStreamBuilder:
        parts = [_operand(op) for op in operands]
        parts.append(operator.encode("ascii"))
        self._stream += b" ".join(parts) + b"\n"
        return self

    def extend(self, other: ContentStreamBuilder | bytes) -> ContentStreamBuilder:
        """Append another content stream."""
        if isinstance(other, ContentStreamBuilder):
            self._stream += other._stream
        else:
            self._stream += other + b"\n"
        return self

    # Graphics state
    def push(self):
        """Save the graphics state."""
        return self._append("q")

    def pop(self):
        """Restore the graphics state."""
        return self._append("Q")

    def cm(self, matrix: Matrix):
        """Concatenate matrix."""
        return self._append("cm", *matrix.shorthand)

    def set_line_width(self, width: Number):
        return self._append("w", width)

    def set_line_cap(self, style: CapStyle):
        return self._append("J", int(style))

    def set_line_join(self, style: JoinStyle):
        return self._append("j", int(style))

    def set_dashes(self, array: Sequence[Number] = (), phase: Number = 0):
        return self._append("d", list(array), phase)

    def set_stroke_color(self, color: Color):
        return self._append(color.stroke_operator(), *color.components)

    def set_fill_color(self, color: Color):
        return self._append(color.fill_operator(), *color.components)

    # Path construction
    def move_to(self, x: Number, y: Number):
        return self._append("m", x, y)

    def line_to(self, x: Number, y: Number):
        return self._append("l", x, y)

    def curve_to(self, x1, y1, x2, y2, x3, y3):
        return self._append("c", x1, y1, x2, y2, x3, y3)

    def append_rectangle(self, x: Number, y: Number, w: Number, h: Number):
        return self._append("re", x, y, w, h)

    def close_path(self):
        return self._append("h")

    # Path painting
    def stroke(self):
        return self._append("S")

    def stroke_and_close(self):
        return self._append("s")

    def fill(self):
        return self._append("f")

    def fill_and_stroke(self):
        return self._append("B")

    def close_fill_and_stroke(self):
        return self._append("b")

    def clip(self):
        return self._append("W")

    def end_path(self):
        return self._append("n")

    # Text
    def begin_text(self):
        """Begin text object.

        The text matrix is reset for each text object. Text objects may not
        be nested.
        """
        return self._append("BT")

    def end_text(self):
        """End text object."""
        return self._append("ET")

    def set_text_font(self, font: str, size: Number):
        """Set text font and size by resource name."""
        return self._append("Tf", font, size)

    def set_text_char_spacing(self, spacing: Number):
        return self._append("Tc", spacing)

    def set_text_word_spacing(self, spacing: Number):
        return self._append("Tw", spacing)

    def set_text_leading(self, leading: Number):
        return self._append("TL", leading)

    def set_text_rise(self, rise: Number):
        return self._append("Ts", rise)

    def move_cursor(self, dx: Number, dy: Number):
        """Move to the start of the next line, offset by (dx, dy)."""
        return self._append("Td", dx, dy)

    def show_text(self, encoded: bytes):
        """Show text.

        The text must be encoded in character codes expected by the font.
        """
        return self._append("Tj", encoded)

    def show_text_with_kerning(self, *parts: bytes | Number):
        """Show text with manual spacing between the byte strings.

        Numbers are in thousandths of a text space unit; positive values
        move the next glyph left.
        """
        return self._append("TJ", list(parts))

    def show_text_line(self, encoded: bytes):
        """Advance to the next line and show text."""
        return self._append("'", encoded)

    def build(self) -> bytes:
        """Build content stream."""
        return bytes(self._stream)


class Canvas:
    """Drawing surface of one page.

    Obtained from :attr:`pdfcanvas.Page.canvas`. Coordinates are in PDF
    user space: points, origin at the lower left corner of the page.
    """

    def __init__(self, page: Page) -> None:
        self._page = page
        self._cs = ContentStreamBuilder()
        self._states = [GraphicsState()]
        self._text: TextObject | None = None
        self._closed = False

    @property
    def page(self) -> Page:
        return self._page

    @property
    def state(self) -> GraphicsState:
        """The current (innermost) graphics state."""
        return self._states[-1]

    @property
    def depth(self) -> int:
        """Number of graphics states on the stack, 1 at top level."""
        return len(self._states)

    @property
    def in_text(self) -> bool:
        return self._text is not None

    def _check_open(self) -> None:
        if self._closed:
            raise DocumentFinalizedError("Cannot draw on a finalized page")

    def _check_graphics(self) -> None:
        self._check_open()
        if self._text is not None:
            raise TextStateError("Operator not allowed inside a text object")

    # Path construction

    def move_to(self, x: Number, y: Number) -> Canvas:
        """Begin a new subpath at (x, y)."""
        self._check_graphics()
        self._cs.move_to(x, y)
        return self

    def line_to(self, x: Number, y: Number) -> Canvas:
        """Append a straight segment to (x, y)."""
        self._check_graphics()
        self._cs.line_to(x, y)
        return self

    def curve_to(
        self,
        x1: Number,
        y1: Number,
        x2: Number,
        y2: Number,
        x3: Number,
        y3: Number,
    ) -> Canvas:
        """Append a cubic Bezier curve ending at (x3, y3)."""
        self._check_graphics()
        self._cs.curve_to(x1, y1, x2, y2, x3, y3)
        return self

    def rectangle(self, x: Number, y: Number, width: Number, height: Number) -> Canvas:
        """Append a rectangle with its lower left corner at (x, y)."""
        self._check_graphics()
        self._cs.append_rectangle(x, y, width, height)
        return self

    def line(self, x1: Number, y1: Number, x2: Number, y2: Number) -> Canvas:
        """Append a line from (x1, y1) to (x2, y2); it still needs painting."""
        self.move_to(x1, y1)
        return self.line_to(x2, y2)

    def circle(self, x: Number, y: Number, r: Number) -> Canvas:
        """Append a circle around (x, y) made of four Bezier curves."""
        top, bottom = y - r, y + r
        left, right = x - r, x + r
        dist = r * KAPPA
        up, down = y - dist, y + dist
        leftp, rightp = x - dist, x + dist
        self.move_to(x, top)
        self.curve_to(leftp, top, left, up, left, y)
        self.curve_to(left, down, leftp, bottom, x, bottom)
        self.curve_to(rightp, bottom, right, down, right, y)
        return self.curve_to(right, up, rightp, top, x, top)

    def close_path(self) -> Canvas:
        self._check_graphics()
        self._cs.close_path()
        return self

    # Path painting

    def stroke(self) -> Canvas:
        """Stroke the current path."""
        self._check_graphics()
        self._cs.stroke()
        return self

    def close_and_stroke(self) -> Canvas:
        """Close and stroke the current path."""
        self._check_graphics()
        self._cs.stroke_and_close()
        return self

    def fill(self) -> Canvas:
        """Fill the current path (nonzero winding rule)."""
        self._check_graphics()
        self._cs.fill()
        return self

    def fill_and_stroke(self) -> Canvas:
        self._check_graphics()
        self._cs.fill_and_stroke()
        return self

    def close_fill_and_stroke(self) -> Canvas:
        self._check_graphics()
        self._cs.close_fill_and_stroke()
        return self

    def clip(self) -> Canvas:
        """Intersect the clipping path with the current path.

        Takes effect after the next painting operator; use :meth:`end_path`
        to clip without painting.
        """
        self._check_graphics()
        self._cs.clip()
        return self

    def end_path(self) -> Canvas:
        """End the path without painting it."""
        self._check_graphics()
        self._cs.end_path()
        return self

    # Graphics state

    def set_line_width(self, width: Number) -> Canvas:
        if width < 0:
            raise ValueError(f"Line width must not be negative: {width}")
        self._check_graphics()
        self.state.line_width = width
        self._cs.set_line_width(width)
        return self

    def set_line_cap_style(self, style: CapStyle) -> Canvas:
        self._check_graphics()
        self.state.cap_style = CapStyle(style)
        self._cs.set_line_cap(style)
        return self

    def set_line_join_style(self, style: JoinStyle) -> Canvas:
        self._check_graphics()
        self.state.join_style = JoinStyle(style)
        self._cs.set_line_join(style)
        return self

    def set_dash(self, array: Sequence[Number] = (), phase: Number = 0) -> Canvas:
        """Set the dash pattern; an empty array draws solid lines."""
        if any(v < 0 for v in array) or (array and not any(array)):
            raise ValueError("Dash lengths must be non-negative and not all 0")
        self._check_graphics()
        self.state.dash_array = tuple(array)
        self.state.dash_phase = phase
        self._cs.set_dashes(array, phase)
        return self

    def set_stroke_color(self, color: Color) -> Canvas:
        self._check_open()
        self.state.stroke_color = color
        self._cs.set_stroke_color(color)
        return self

    def set_fill_color(self, color: Color) -> Canvas:
        self._check_open()
        self.state.fill_color = color
        self._cs.set_fill_color(color)
        return self

    def concat(self, matrix: Matrix | Sequence[Number]) -> Canvas:
        """Concatenate a transformation matrix to the current matrix."""
        if not isinstance(matrix, Matrix):
            matrix = Matrix(*matrix)
        self._check_graphics()
        self.state.ctm = matrix @ self.state.ctm
        self._cs.cm(matrix)
        return self

    def push(self) -> Canvas:
        """Save the graphics state.

        Every push must be matched by :meth:`pop` before the page is
        closed. Prefer :meth:`save_state`, which pops automatically.
        """
        self._check_graphics()
        self._cs.push()
        self._states.append(self.state.copy())
        return self

    def pop(self) -> Canvas:
        """Restore the previously saved graphics state.

        Raises:
            UnbalancedGraphicsStateError: If there is no saved state.
        """
        self._check_graphics()
        if len(self._states) == 1:
            raise UnbalancedGraphicsStateError(
                "pop() without a matching push()"
            )
        self._states.pop()
        self._cs.pop()
        return self

    @contextmanager
    def save_state(self, *, cm: Matrix | None = None) -> Iterator[Canvas]:
        """Save the graphics state and restore it on exit.

        The state is restored also when the body raises. A text object
        the body left open is ended first, and states the body pushed
        without popping are popped with this one. Optionally, concatenate
        a transformation matrix. Implements the commonly used pattern of::

            q cm ... Q
        """
        self.push()
        depth = self.depth
        try:
            if cm is not None:
                self.concat(cm)
            yield self
        finally:
            if not self._closed:
                self._unwind(depth)

    def _unwind(self, depth: int) -> None:
        if self._text is not None:
            logger.warning("Text object left open inside save_state, ending it")
            self.end_text()
        if self.depth != depth:
            logger.warning(
                "Graphics state depth changed inside save_state "
                "(%d, expected %d)",
                self.depth,
                depth,
            )
        while self.depth >= depth:
            self.pop()

    # Text

    def begin_text(self) -> TextObject:
        """Begin a text object; must be ended with :meth:`end_text`.

        Raises:
            TextStateError: If a text object is already open.
        """
        if self._text is not None:
            raise TextStateError("Text objects cannot be nested")
        self._check_open()
        self._cs.begin_text()
        self.state.line_origin = (0, 0)
        self.state.text_position = (0, 0)
        self._text = TextObject(self)
        return self._text

    def end_text(self) -> Canvas:
        """End the open text object."""
        self._check_open()
        if self._text is None:
            raise TextStateError("No text object is open")
        self._text._active = False
        self._text = None
        self._cs.end_text()
        return self

    @contextmanager
    def text(self) -> Iterator[TextObject]:
        """Open a text object for the duration of the block."""
        text = self.begin_text()
        try:
            yield text
        finally:
            if self._text is text:
                self.end_text()

    def get_font(self, font: BuiltinFont) -> Font:
        """Returns the document's font and adds it to the page resources."""
        resolved = self._page.document.get_font(font)
        self._page._use_font(resolved)
        return resolved

    def left_text(
        self, x: Number, y: Number, font: BuiltinFont, size: Number, text: str
    ) -> Canvas:
        """Place text starting at (x, y)."""
        return self._place_text(x, y, font, size, text, 0)

    def right_text(
        self, x: Number, y: Number, font: BuiltinFont, size: Number, text: str
    ) -> Canvas:
        """Place text ending at (x, y)."""
        return self._place_text(x, y, font, size, text, 1)

    def center_text(
        self, x: Number, y: Number, font: BuiltinFont, size: Number, text: str
    ) -> Canvas:
        """Place text centered on (x, y)."""
        return self._place_text(x, y, font, size, text, 0.5)

    def _place_text(self, x, y, font, size, text, align) -> Canvas:
        resolved = self.get_font(font)
        # show() does not kern, so neither does the measurement
        width = resolved.advance_width(text, size, kerning=False)
        with self.text() as t:
            t.set_font(resolved, size)
            t.pos(x - width * align, y)
            t.show(text)
        return self

    def add_outline(self, title: str) -> None:
        """Add an entry pointing at this page to the document outline."""
        self._check_open()
        self._page.document._add_outline(title, self._page)

    def _encode(self, font: Font, text: str | bytes) -> bytes:
        if isinstance(text, bytes):
            return text
        data, gaps = font.encode_with_gaps(text)
        if gaps:
            self._page.document._record_gaps(font, gaps)
        return data

    def _check_balanced(self) -> None:
        if self._text is not None:
            raise UnbalancedGraphicsStateError(
                "Page closed inside an open text object"
            )
        if len(self._states) != 1:
            raise UnbalancedGraphicsStateError(
                f"Page closed with {len(self._states) - 1} unrestored "
                "graphics state(s)"
            )

    def _close(self) -> bytes:
        """Checks the state stack and returns the content stream."""
        self._check_balanced()
        self._closed = True
        return self._cs.build()


class TextObject:
    """Text operations between ``BT`` and ``ET``.

    Obtained from :meth:`Canvas.text`. Text state (font, spacing, leading,
    rise) belongs to the graphics state and outlives the text object; the
    text position starts at (0, 0) in every text object.
    """

    def __init__(self, canvas: Canvas) -> None:
        self._canvas = canvas
        self._cs = canvas._cs
        self._active = True

    @property
    def state(self) -> GraphicsState:
        return self._canvas.state

    @property
    def position(self) -> tuple[float, float]:
        """Current text position, relative to the text space origin."""
        return self.state.text_position

    def _check(self) -> None:
        if not self._active:
            raise TextStateError("Text object has been ended")
        self._canvas._check_open()

    def _font(self) -> Font:
        font = self.state.font
        if font is None:
            raise TextStateError("No font set; call set_font() first")
        return font

    def set_font(self, font: Font | BuiltinFont, size: Number) -> TextObject:
        """Set the font and size (``Tf``)."""
        self._check()
        if isinstance(font, BuiltinFont):
            font = self._canvas.get_font(font)
        else:
            self._canvas._page._use_font(font)
        self.state.font = font
        self.state.font_size = size
        self._cs.set_text_font(font.resource_name, size)
        return self

    def set_leading(self, leading: Number) -> TextObject:
        """Set the distance between baselines used by :meth:`show_line`."""
        self._check()
        self.state.leading = leading
        self._cs.set_text_leading(leading)
        return self

    def set_rise(self, rise: Number) -> TextObject:
        """Move the baseline up (positive) or down for super/subscripts."""
        self._check()
        self.state.rise = rise
        self._cs.set_text_rise(rise)
        return self

    def set_char_spacing(self, spacing: Number) -> TextObject:
        self._check()
        self.state.char_spacing = spacing
        self._cs.set_text_char_spacing(spacing)
        return self

    def set_word_spacing(self, spacing: Number) -> TextObject:
        self._check()
        self.state.word_spacing = spacing
        self._cs.set_text_word_spacing(spacing)
        return self

    def set_stroke_color(self, color: Color) -> TextObject:
        self._check()
        self._canvas.set_stroke_color(color)
        return self

    def set_fill_color(self, color: Color) -> TextObject:
        self._check()
        self._canvas.set_fill_color(color)
        return self

    def pos(self, x: Number, y: Number) -> TextObject:
        """Move to the start of the next line, offset by (x, y) (``Td``)."""
        self._check()
        ox, oy = self.state.line_origin
        origin = (ox + x, oy + y)
        self.state.line_origin = origin
        self.state.text_position = origin
        self._cs.move_cursor(x, y)
        return self

    def _spacing(self, data: bytes) -> float:
        state = self.state
        return len(data) * state.char_spacing + data.count(b" ") * state.word_spacing

    def _advance(self, dx: float) -> None:
        x, y = self.state.text_position
        self.state.text_position = (x + dx, y)

    def show(self, text: str | bytes) -> TextObject:
        """Show a string (``Tj``) without pair kerning.

        Raises:
            TextStateError: If no font has been set.
        """
        self._check()
        font = self._font()
        data = self._canvas._encode(font, text)
        self._cs.show_text(data)
        width = font.advance_width(data, self.state.font_size, kerning=False)
        self._advance(width + self._spacing(data))
        return self

    def show_line(self, text: str | bytes) -> TextObject:
        """Move to the next line (by the leading) and show a string (``'``)."""
        self._check()
        font = self._font()
        data = self._canvas._encode(font, text)
        ox, oy = self.state.line_origin
        origin = (ox, oy - self.state.leading)
        self.state.line_origin = origin
        self.state.text_position = origin
        self._cs.show_text_line(data)
        width = font.advance_width(data, self.state.font_size, kerning=False)
        self._advance(width + self._spacing(data))
        return self

    def show_adjusted(
        self, runs: Iterable[str | bytes | Number], *, kerning: bool = True
    ) -> TextObject:
        """Show strings with manual offsets between them (``TJ``).

        Numbers are in thousandths of a text space unit; a positive number
        moves the following glyphs left. With ``kerning`` the font's pair
        kerning is added inside and between the strings and merged with
        the offsets given here.

        Raises:
            TextStateError: If no font has been set.
        """
        self._check()
        font = self._font()
        parts: list[bytes | Number] = []
        pending: Number = 0
        pending_client = False
        client_total: Number = 0
        all_text = bytearray()
        for run in runs:
            if isinstance(run, (str, bytes)):
                data = self._canvas._encode(font, run)
                if not data:
                    continue
                if kerning and all_text:
                    pending -= font.kern_codes(all_text[-1], data[0])
                if pending or pending_client:
                    parts.append(pending)
                pending, pending_client = 0, False
                parts.extend(font.kerned_runs(data) if kerning else [data])
                all_text += data
            elif isinstance(run, bool):
                raise TypeError("Offsets must be numbers")
            else:
                pending += run
                pending_client = True
                client_total += run
        if pending or pending_client:
            parts.append(pending)

        self._cs.show_text_with_kerning(*parts)
        data = bytes(all_text)
        size = self.state.font_size
        width = font.advance_width(data, size, kerning=kerning)
        width -= float(client_total) * size / GLYPH_SPACE_UNITS
        self._advance(width + self._spacing(data))
        return self
