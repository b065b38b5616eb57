# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""pdfcanvas - Generate PDF files with vector graphics and the standard fonts."""

from importlib.metadata import PackageNotFoundError, version

from pikepdf import Matrix

from .canvas import Canvas, ContentStreamBuilder, TextObject
from .document import Document, OutlineItem, Page
from .exceptions import (
    DanglingReferenceError,
    DocumentFinalizedError,
    MalformedMetricsError,
    MetricsNotFoundError,
    PDFCanvasError,
    SinkWriteError,
    TextStateError,
    UnbalancedGraphicsStateError,
    UnmappableCharacterError,
)
from .fonts import (
    SYMBOL_ENCODING,
    WIN_ANSI_ENCODING,
    ZAPFDINGBATS_ENCODING,
    BuiltinFont,
    Encoding,
    Font,
    FontMetrics,
    MetricsCache,
    advance_width,
    encode,
    escape_for_literal,
    parse_afm,
)
from .graphics import CapStyle, Color, GraphicsState, JoinStyle
from .utils import setup_logging
from .writer import WriteResult

try:
    __version__ = version("pdfcanvas")
except PackageNotFoundError:
    __version__ = "unknown"

__all__ = [
    "__version__",
    # Document
    "Document",
    "Page",
    "OutlineItem",
    "WriteResult",
    # Drawing
    "Canvas",
    "ContentStreamBuilder",
    "TextObject",
    "GraphicsState",
    "Color",
    "JoinStyle",
    "CapStyle",
    "Matrix",
    # Fonts
    "BuiltinFont",
    "Font",
    "FontMetrics",
    "MetricsCache",
    "parse_afm",
    "advance_width",
    "Encoding",
    "WIN_ANSI_ENCODING",
    "SYMBOL_ENCODING",
    "ZAPFDINGBATS_ENCODING",
    "encode",
    "escape_for_literal",
    # Logging
    "setup_logging",
    # Exceptions
    "PDFCanvasError",
    "UnmappableCharacterError",
    "MalformedMetricsError",
    "MetricsNotFoundError",
    "UnbalancedGraphicsStateError",
    "DanglingReferenceError",
    "SinkWriteError",
    "DocumentFinalizedError",
    "TextStateError",
]
