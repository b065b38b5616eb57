# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Adobe Font Metrics (AFM) parser.

Only the parts of the AFM grammar needed for text layout are interpreted:
the global font information, the character metrics and the horizontal
kerning pairs. Everything else (track kerning, composites, unknown keys,
comments) is skipped so that newer or richer AFM files still load.

Example::

    StartFontMetrics 4.1
    FontName Helvetica
    FontBBox -166 -225 1000 931
    StartCharMetrics 2
    C 65 ; WX 667 ; N A ; B 14 0 654 718 ;
    C 86 ; WX 667 ; N V ; B 20 0 647 718 ;
    EndCharMetrics
    StartKernPairs 1
    KPX A V -70
    EndKernPairs
    EndFontMetrics
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from ..exceptions import MalformedMetricsError

logger = logging.getLogger(__name__)

Number = int | float

# Header keys that must be present in every metrics file
MANDATORY_KEYS = ("FontName", "FontBBox")

_NUMERIC_KEYS = {
    "ItalicAngle": "italic_angle",
    "CapHeight": "cap_height",
    "XHeight": "x_height",
    "Ascender": "ascender",
    "Descender": "descender",
    "UnderlinePosition": "underline_position",
    "UnderlineThickness": "underline_thickness",
}

_TEXT_KEYS = {
    "FontName": "font_name",
    "FullName": "full_name",
    "FamilyName": "family_name",
    "Weight": "weight",
    "EncodingScheme": "encoding_scheme",
}


@dataclass(frozen=True, eq=False)
class FontMetrics:
    """Parsed metrics of one font.

    Widths and kerning adjustments are in glyph space (1/1000 of the font
    size). ``codes`` holds the character code each glyph has in the font's
    built-in encoding; unencoded glyphs (``C -1``) are absent from it but
    still have a width.
    """

    font_name: str
    bbox: tuple[Number, Number, Number, Number]
    full_name: str | None = None
    family_name: str | None = None
    weight: str | None = None
    encoding_scheme: str | None = None
    italic_angle: Number = 0
    is_fixed_pitch: bool = False
    cap_height: Number | None = None
    x_height: Number | None = None
    ascender: Number | None = None
    descender: Number | None = None
    underline_position: Number | None = None
    underline_thickness: Number | None = None
    widths: Mapping[str, Number] = field(default_factory=dict)
    codes: Mapping[str, int] = field(default_factory=dict)
    kerning: Mapping[tuple[str, str], Number] = field(default_factory=dict)

    def width(self, glyph: str) -> Number | None:
        """Returns the advance width of a glyph, or None if unknown."""
        return self.widths.get(glyph)

    def kern(self, left: str, right: str) -> Number:
        """Returns the kerning adjustment for a glyph pair (0 if none)."""
        return self.kerning.get((left, right), 0)

    def __repr__(self) -> str:
        return (
            f"FontMetrics({self.font_name!r}, glyphs={len(self.widths)}, "
            f"kern_pairs={len(self.kerning)})"
        )


def _number(token: str, what: str, line_number: int) -> Number:
    try:
        value = float(token)
    except ValueError:
        raise MalformedMetricsError(
            f"{what} is not a number: {token!r}", line_number
        ) from None
    return int(value) if value.is_integer() else value


def _lines(source: str | bytes | Iterable[str]) -> Iterable[str]:
    if isinstance(source, bytes):
        # AFM files are ASCII; latin-1 never fails on stray bytes
        source = source.decode("latin-1")
    if isinstance(source, str):
        return source.splitlines()
    return source


def _parse_char_metrics(
    line: str, line_number: int
) -> tuple[int, str, Number]:
    """Parses one ``C code ; WX width ; N name ; ...`` line."""
    code: int | None = None
    width: Number | None = None
    name: str | None = None
    for item in line.split(";"):
        parts = item.split()
        if not parts:
            continue
        key, args = parts[0], parts[1:]
        if key in ("C", "CH"):
            if len(args) != 1:
                raise MalformedMetricsError(f"Bad {key} field", line_number)
            token = args[0]
            if key == "CH":
                token = token.strip("<>")
                try:
                    code = int(token, 16)
                except ValueError:
                    raise MalformedMetricsError(
                        f"Character code is not hexadecimal: {token!r}",
                        line_number,
                    ) from None
            else:
                try:
                    code = int(token)
                except ValueError:
                    raise MalformedMetricsError(
                        f"Character code is not an integer: {token!r}",
                        line_number,
                    ) from None
        elif key in ("WX", "W0X"):
            if len(args) != 1:
                raise MalformedMetricsError(f"Bad {key} field", line_number)
            width = _number(args[0], "Glyph width", line_number)
        elif key in ("W", "W0"):
            if len(args) != 2:
                raise MalformedMetricsError(f"Bad {key} field", line_number)
            width = _number(args[0], "Glyph width", line_number)
        elif key == "N":
            if len(args) != 1:
                raise MalformedMetricsError("Bad N field", line_number)
            name = args[0]
        elif key == "B":
            if len(args) != 4:
                raise MalformedMetricsError(
                    "Glyph bounding box needs 4 numbers", line_number
                )
            for token in args:
                _number(token, "Glyph bounding box", line_number)
        # L (ligature) and other keys do not affect layout

    if width is None:
        raise MalformedMetricsError("Character metrics without WX", line_number)
    if name is None:
        raise MalformedMetricsError("Character metrics without N", line_number)
    return (-1 if code is None else code), name, width


def _parse_kern_pair(
    parts: list[str], line_number: int
) -> tuple[str, str, Number] | None:
    """Parses a KPX/KP line; returns None for vertical-only pairs."""
    key = parts[0]
    if key == "KPY":
        return None
    expected = 4 if key == "KPX" else 5
    if len(parts) != expected:
        raise MalformedMetricsError(
            f"{key} needs {expected - 1} fields", line_number
        )
    return parts[1], parts[2], _number(parts[3], "Kerning adjustment", line_number)


def parse_afm(source: str | bytes | Iterable[str]) -> FontMetrics:
    """Parses AFM data into a FontMetrics object.

    Args:
        source: AFM file content as text or bytes, or an iterable of lines.

    Returns:
        The parsed FontMetrics.

    Raises:
        MalformedMetricsError: If the data is structurally invalid.
    """
    header: dict[str, object] = {}
    widths: dict[str, Number] = {}
    codes: dict[str, int] = {}
    kerning: dict[tuple[str, str], Number] = {}

    state = "start"
    line_number = 0
    for line_number, raw in enumerate(_lines(source), start=1):
        line = raw.strip()
        if not line or line.startswith("Comment"):
            continue
        parts = line.split()
        key = parts[0]

        if state == "start":
            if key != "StartFontMetrics":
                raise MalformedMetricsError(
                    "Metrics must begin with StartFontMetrics", line_number
                )
            state = "header"
            continue

        if state == "chars":
            if key == "EndCharMetrics":
                state = "header"
                continue
            code, name, width = _parse_char_metrics(line, line_number)
            widths[name] = width
            if code >= 0:
                codes.setdefault(name, code)
            continue

        if state == "kern":
            if key == "EndKernPairs":
                state = "header"
                continue
            if key in ("KPX", "KP", "KPY"):
                pair = _parse_kern_pair(parts, line_number)
                if pair is not None:
                    left, right, adjustment = pair
                    kerning[(left, right)] = adjustment
            continue

        # header state
        if key == "EndFontMetrics":
            state = "end"
            break
        if key == "StartCharMetrics":
            state = "chars"
        elif key in ("StartKernPairs", "StartKernPairs0"):
            state = "kern"
        elif key in _TEXT_KEYS:
            header[_TEXT_KEYS[key]] = line[len(key) :].strip()
        elif key in _NUMERIC_KEYS:
            if len(parts) != 2:
                raise MalformedMetricsError(f"{key} needs one value", line_number)
            header[_NUMERIC_KEYS[key]] = _number(parts[1], key, line_number)
        elif key == "FontBBox":
            if len(parts) != 5:
                raise MalformedMetricsError(
                    "FontBBox needs 4 numbers", line_number
                )
            header["bbox"] = tuple(
                _number(token, "FontBBox", line_number) for token in parts[1:]
            )
        elif key == "IsFixedPitch":
            if len(parts) != 2 or parts[1] not in ("true", "false"):
                raise MalformedMetricsError(
                    "IsFixedPitch must be true or false", line_number
                )
            header["is_fixed_pitch"] = parts[1] == "true"
        # any other key is ignored

    if state == "start":
        raise MalformedMetricsError("Empty metrics data", line_number or None)
    if state == "chars":
        raise MalformedMetricsError(
            "Unterminated character metrics block (missing EndCharMetrics)",
            line_number,
        )
    if state == "kern":
        raise MalformedMetricsError(
            "Unterminated kerning block (missing EndKernPairs)", line_number
        )

    for mandatory in MANDATORY_KEYS:
        attr = _TEXT_KEYS.get(mandatory, "bbox")
        if attr not in header or header[attr] == "":
            raise MalformedMetricsError(f"Missing mandatory key {mandatory}")

    metrics = FontMetrics(
        widths=MappingProxyType(widths),
        codes=MappingProxyType(codes),
        kerning=MappingProxyType(kerning),
        **header,
    )
    logger.debug(
        "Parsed metrics for %s: %d glyphs, %d kerning pairs",
        metrics.font_name,
        len(widths),
        len(kerning),
    )
    return metrics
