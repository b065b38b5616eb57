# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Standard-14 fonts: encodings, metrics and width computation."""

from ..exceptions import MalformedMetricsError, UnmappableCharacterError
from .afm import FontMetrics, parse_afm
from .constants import STANDARD_14_FONTS, SYMBOL_FONTS
from .encodings import (
    SYMBOL_ENCODING,
    WIN_ANSI_ENCODING,
    ZAPFDINGBATS_ENCODING,
    Encoding,
    encode,
    escape_for_literal,
    unescape_literal,
)
from .font import BuiltinFont, Font, advance_width
from .loader import AfmLoader
from .metrics import MetricsCache

__all__ = [
    # Exceptions
    "MalformedMetricsError",
    "UnmappableCharacterError",
    # Constants
    "STANDARD_14_FONTS",
    "SYMBOL_FONTS",
    # Encodings
    "Encoding",
    "WIN_ANSI_ENCODING",
    "SYMBOL_ENCODING",
    "ZAPFDINGBATS_ENCODING",
    "encode",
    "escape_for_literal",
    "unescape_literal",
    # Metrics
    "FontMetrics",
    "parse_afm",
    "AfmLoader",
    "MetricsCache",
    # Fonts
    "BuiltinFont",
    "Font",
    "advance_width",
]
