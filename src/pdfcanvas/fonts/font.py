# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Built-in fonts and text width computation."""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

from .afm import FontMetrics, Number
from .constants import DEFAULT_MISSING_WIDTH, GLYPH_SPACE_UNITS, SYMBOL_FONTS
from .encodings import (
    SYMBOL_ENCODING,
    WIN_ANSI_ENCODING,
    ZAPFDINGBATS_ENCODING,
    Encoding,
)

logger = logging.getLogger(__name__)


class BuiltinFont(Enum):
    """The 14 standard PDF fonts."""

    TIMES_ROMAN = "Times-Roman"
    TIMES_BOLD = "Times-Bold"
    TIMES_ITALIC = "Times-Italic"
    TIMES_BOLD_ITALIC = "Times-BoldItalic"
    HELVETICA = "Helvetica"
    HELVETICA_BOLD = "Helvetica-Bold"
    HELVETICA_OBLIQUE = "Helvetica-Oblique"
    HELVETICA_BOLD_OBLIQUE = "Helvetica-BoldOblique"
    COURIER = "Courier"
    COURIER_BOLD = "Courier-Bold"
    COURIER_OBLIQUE = "Courier-Oblique"
    COURIER_BOLD_OBLIQUE = "Courier-BoldOblique"
    SYMBOL = "Symbol"
    ZAPF_DINGBATS = "ZapfDingbats"

    @property
    def pdf_name(self) -> str:
        """PostScript name used as /BaseFont."""
        return self.value

    @property
    def is_symbolic(self) -> bool:
        return self.value in SYMBOL_FONTS

    @property
    def encoding(self) -> Encoding:
        """The encoding this font is used with."""
        if self is BuiltinFont.SYMBOL:
            return SYMBOL_ENCODING
        if self is BuiltinFont.ZAPF_DINGBATS:
            return ZAPFDINGBATS_ENCODING
        return WIN_ANSI_ENCODING

    @classmethod
    def from_name(cls, name: str) -> "BuiltinFont":
        """Looks a font up by its PostScript name.

        Raises:
            ValueError: If the name is not one of the 14 standard fonts.
        """
        try:
            return cls(name)
        except ValueError:
            raise ValueError(f"'{name}' is not a standard PDF font") from None


@dataclass(frozen=True, eq=False)
class Font:
    """A built-in font bound to its encoding and metrics.

    Widths and kerning are resolved from glyph names to byte codes once,
    when the font is created. Fonts are obtained from
    :meth:`pdfcanvas.Document.get_font`, which hands out one instance per
    built-in font and assigns the resource name.
    """

    builtin: BuiltinFont
    metrics: FontMetrics
    resource_name: str
    _widths: tuple[Number, ...] = field(init=False, repr=False)
    _kerning: MappingProxyType = field(init=False, repr=False)

    def __post_init__(self) -> None:
        encoding = self.encoding
        widths = [DEFAULT_MISSING_WIDTH] * 256
        glyph_codes: dict[str, list[int]] = defaultdict(list)
        missing = []
        for code, glyph in encoding.code_to_glyph.items():
            glyph_codes[glyph].append(code)
            width = self.metrics.width(glyph)
            if width is None:
                missing.append(glyph)
            else:
                widths[code] = width
        if missing:
            logger.debug(
                "%s: %d encoded glyph(s) without metrics use width %d",
                self.name,
                len(missing),
                DEFAULT_MISSING_WIDTH,
            )

        kerning: dict[tuple[int, int], Number] = {}
        for (left, right), adjustment in self.metrics.kerning.items():
            for left_code in glyph_codes.get(left, ()):
                for right_code in glyph_codes.get(right, ()):
                    kerning[(left_code, right_code)] = adjustment

        object.__setattr__(self, "_widths", tuple(widths))
        object.__setattr__(self, "_kerning", MappingProxyType(kerning))

    @property
    def name(self) -> str:
        return self.builtin.pdf_name

    @property
    def encoding(self) -> Encoding:
        return self.builtin.encoding

    def encode(self, text: str, *, strict: bool = False) -> bytes:
        """Encodes text for this font (see :meth:`Encoding.encode`)."""
        return self.encoding.encode(text, strict=strict)

    def encode_with_gaps(
        self, text: str, *, strict: bool = False
    ) -> tuple[bytes, list[str]]:
        return self.encoding.encode_with_gaps(text, strict=strict)

    def code_width(self, code: int) -> Number:
        """Returns the glyph space width of a byte code."""
        return self._widths[code]

    def kern_codes(self, left: int, right: int) -> Number:
        """Returns the AFM kerning adjustment between two byte codes."""
        return self._kerning.get((left, right), 0)

    def _as_bytes(self, text: str | bytes) -> bytes:
        if isinstance(text, str):
            # Gaps are reported when the text is shown, not when measured
            data, _ = self.encoding.encode_with_gaps(text)
            return data
        return text

    def width_raw(self, text: str | bytes, *, kerning: bool = True) -> Number:
        """Returns the width of text in glyph space units (1/1000 em).

        Args:
            text: Unicode text, or bytes already in this font's encoding.
            kerning: Include the font's pair kerning.
        """
        data = self._as_bytes(text)
        total: Number = 0
        for code in data:
            total += self._widths[code]
        if kerning and self._kerning:
            for left, right in zip(data, data[1:]):
                total += self._kerning.get((left, right), 0)
        return total

    def advance_width(
        self, text: str | bytes, size: Number, *, kerning: bool = True
    ) -> float:
        """Returns the width of text set at ``size`` points, in text space."""
        return self.width_raw(text, kerning=kerning) * size / GLYPH_SPACE_UNITS

    def kerned_runs(self, data: bytes) -> list[bytes | Number]:
        """Splits encoded bytes at kerned pairs.

        Returns a TJ-style sequence of byte strings and adjustments. The
        adjustments are the negated AFM values, since a positive TJ number
        moves the next glyph to the left.
        """
        runs: list[bytes | Number] = []
        start = 0
        for i in range(1, len(data)):
            adjustment = self._kerning.get((data[i - 1], data[i]))
            if adjustment:
                runs.append(data[start:i])
                runs.append(-adjustment)
                start = i
        if data[start:] or not runs:
            runs.append(data[start:])
        return runs

    def __repr__(self) -> str:
        return f"Font({self.name!r}, /{self.resource_name})"


def advance_width(
    text: str | bytes, font: Font, size: Number, *, kerning: bool = True
) -> float:
    """Computes the advance width of text in a font at a given size.

    Sums the encoded glyph widths scaled by ``size / 1000`` and adds the
    kerning adjustment of every consecutive glyph pair.
    """
    return font.advance_width(text, size, kerning=kerning)
