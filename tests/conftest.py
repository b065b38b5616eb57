# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Pytest fixtures for the pdfcanvas test suite."""

from io import BytesIO

import pikepdf
import pytest
from pikepdf import Pdf

from pdfcanvas import Document, MetricsCache
from pdfcanvas.exceptions import MetricsNotFoundError
from pdfcanvas.fonts.constants import AFM_PATH_ENV

# -- Global PDF tracker --

_tracked_pdfs: list[Pdf] = []


@pytest.fixture(autouse=True)
def _auto_close_pdfs():
    """Close all tracked PDF objects after each test."""
    yield
    for pdf in reversed(_tracked_pdfs):
        pdf.close()
    _tracked_pdfs.clear()


def open_pdf(source, **kwargs) -> Pdf:
    """Open a tracked Pdf (auto-closed after test).

    ``source`` may be a path or the file content as bytes.
    """
    if isinstance(source, bytes):
        source = BytesIO(source)
    pdf = Pdf.open(source, **kwargs)
    _tracked_pdfs.append(pdf)
    return pdf


def page_operations(data: bytes, page_index: int = 0) -> list[tuple[list, str]]:
    """Parses a page's content stream into (operands, operator) pairs."""
    pdf = open_pdf(data)
    page = pdf.pages[page_index]
    return [
        (list(operands), str(operator))
        for operands, operator in pikepdf.parse_content_stream(page)
    ]


def object_offsets(data: bytes) -> list[int]:
    """Reads the in-use offsets from the cross-reference table."""
    xref = data.rindex(b"\nxref\n") + 1
    lines = data[xref:].split(b"\n")
    count = int(lines[1].split()[1])
    return [int(line[:10]) for line in lines[3 : 3 + count - 1]]


# Synthetic metrics with easily checked numbers. Glyph names and the
# FontName match Helvetica so the font can stand in for it.
KERNED_AFM = """\
StartFontMetrics 4.1
Comment Test font with round widths
FontName Helvetica
FullName Test Sans
FamilyName Test
Weight Medium
ItalicAngle 0
IsFixedPitch false
FontBBox 0 -200 1000 800
CapHeight 700
XHeight 500
Ascender 750
Descender -250
StartCharMetrics 6
C 32 ; WX 250 ; N space ; B 0 0 0 0 ;
C 65 ; WX 600 ; N A ; B 0 0 600 700 ;
C 86 ; WX 500 ; N V ; B 0 0 500 700 ;
C 84 ; WX 400 ; N T ; B 0 0 400 700 ;
C 111 ; WX 300 ; N o ; B 0 0 300 500 ;
C -1 ; WX 999 ; N unencoded ;
EndCharMetrics
StartKernData
StartKernPairs 4
KPX A V -70
KPX V A -80
KPX T o -50
KPY A T 10
EndKernPairs
EndKernData
EndFontMetrics
"""


class DictLoader:
    """AFM source serving fixed data by font name."""

    def __init__(self, data: dict[str, str | bytes]) -> None:
        self.data = data
        self.calls: list[str] = []

    def load(self, font_name: str) -> str | bytes:
        self.calls.append(font_name)
        try:
            return self.data[font_name]
        except KeyError:
            raise MetricsNotFoundError(font_name) from None


# -- Fixtures --


@pytest.fixture
def metrics_cache(monkeypatch: pytest.MonkeyPatch) -> MetricsCache:
    """Metrics cache reading the packaged AFM files."""
    monkeypatch.delenv(AFM_PATH_ENV, raising=False)
    return MetricsCache()


@pytest.fixture
def document(metrics_cache: MetricsCache) -> Document:
    """Empty document using the packaged metrics."""
    return Document(metrics_cache=metrics_cache)


@pytest.fixture
def kerned_cache() -> MetricsCache:
    """Metrics cache where Helvetica is replaced by the test font."""
    return MetricsCache(loader=DictLoader({"Helvetica": KERNED_AFM}))


@pytest.fixture
def kerned_document(kerned_cache: MetricsCache) -> Document:
    """Document whose Helvetica uses the synthetic kerned metrics."""
    return Document(metrics_cache=kerned_cache)
