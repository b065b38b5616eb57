# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Custom exceptions for pdfcanvas."""


class PDFCanvasError(Exception):
    """Base exception for all pdfcanvas errors."""


class UnmappableCharacterError(PDFCanvasError):
    """A character has no code in the active encoding and no fallback."""

    def __init__(self, char: str, encoding_name: str) -> None:
        self.char = char
        self.encoding_name = encoding_name
        super().__init__(
            f"Character {char!r} (U+{ord(char):04X}) cannot be encoded "
            f"in {encoding_name}"
        )


class MalformedMetricsError(PDFCanvasError):
    """Font metrics data could not be parsed."""

    def __init__(self, message: str, line_number: int | None = None) -> None:
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class UnbalancedGraphicsStateError(PDFCanvasError):
    """Graphics state save/restore operations do not match."""


class DanglingReferenceError(PDFCanvasError):
    """A reference points to an object that is not in the document."""


class SinkWriteError(PDFCanvasError):
    """The output sink rejected the serialized document."""


class DocumentFinalizedError(PDFCanvasError):
    """The document was modified after it has been finalized."""


class TextStateError(PDFCanvasError):
    """A text operator was used outside its valid context."""


class MetricsNotFoundError(PDFCanvasError):
    """No metrics source exists for the requested font."""
