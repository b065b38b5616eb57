# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Document assembly: pages, fonts, metadata and output."""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .canvas import Canvas
from .exceptions import DocumentFinalizedError, SinkWriteError
from .fonts.font import BuiltinFont, Font
from .fonts.metrics import MetricsCache
from .objects import Name, ObjectRegistry, Reference, Stream
from .writer import Sink, WriteResult, deliver, serialize_document

logger = logging.getLogger(__name__)

DEFAULT_PDF_VERSION = "1.7"
DEFAULT_PRODUCER = "pdfcanvas"


@dataclass
class OutlineItem:
    """An entry of the document outline, pointing at a page."""

    title: str
    page: Page


class Page:
    """A page of a Document.

    Pages are created with :meth:`Document.add_page`; draw on them through
    :attr:`canvas`.
    """

    def __init__(
        self, document: Document, ref: Reference, width: float, height: float
    ) -> None:
        self._document = document
        self.ref = ref
        self.width = width
        self.height = height
        self._contents_ref = document._registry.allocate()
        self._fonts: dict[str, Font] = {}
        self.canvas = Canvas(self)

    @property
    def document(self) -> Document:
        return self._document

    @property
    def media_box(self) -> list[float]:
        return [0, 0, self.width, self.height]

    @property
    def fonts(self) -> dict[str, Font]:
        """Fonts in the page resources, by resource name."""
        return dict(self._fonts)

    def _use_font(self, font: Font) -> None:
        if self._fonts.get(font.resource_name) is not font:
            if self._document._fonts.get(font.builtin) is not font:
                raise ValueError(f"{font!r} does not belong to this document")
            self._fonts[font.resource_name] = font

    def _close(self, pages_ref: Reference) -> None:
        registry = self._document._registry
        registry.assign(self._contents_ref, Stream(self.canvas._close()))
        resources: dict[str, Any] = {}
        if self._fonts:
            resources["Font"] = {
                name: self._document._font_refs[font.builtin]
                for name, font in self._fonts.items()
            }
        registry.assign(
            self.ref,
            {
                "Type": Name("Page"),
                "Parent": pages_ref,
                "MediaBox": self.media_box,
                "Resources": resources,
                "Contents": self._contents_ref,
            },
        )

    def __repr__(self) -> str:
        return f"Page({self.width} x {self.height}, obj {self.ref.number})"


class Document:
    """A PDF document under construction.

    Object 1 is the Catalog and object 2 the page tree root; everything
    else is numbered in creation order. :meth:`finalize` builds the file
    exactly once; afterwards the document can be written any number of
    times but no longer changed.

    Example:
        >>> doc = Document()
        >>> page = doc.add_page(612, 792)
        >>> with page.canvas.text() as t:
        ...     t.set_font(BuiltinFont.HELVETICA, 12)
        ...     t.pos(50, 700)
        ...     t.show("Hello World")
        >>> doc.save("hello.pdf")
    """

    def __init__(
        self,
        version: str = DEFAULT_PDF_VERSION,
        metrics_cache: MetricsCache | None = None,
    ) -> None:
        """Initializes the Document.

        Args:
            version: PDF version written in the header.
            metrics_cache: Font metrics cache, possibly shared with other
                documents. A private cache is created if omitted.
        """
        self.version = version
        self.metrics_cache = (
            metrics_cache if metrics_cache is not None else MetricsCache()
        )
        self._registry = ObjectRegistry()
        self._catalog_ref = self._registry.allocate()
        self._pages_ref = self._registry.allocate()
        self._pages: list[Page] = []
        self._fonts: dict[BuiltinFont, Font] = {}
        self._font_refs: dict[BuiltinFont, Reference] = {}
        self._info: dict[str, str] = {}
        self._keywords: list[str] = []
        self._outline: list[OutlineItem] = []
        self._info_ref: Reference | None = None
        self._built: tuple[bytes, WriteResult] | None = None
        self.warnings: list[str] = []

    @property
    def registry(self) -> ObjectRegistry:
        return self._registry

    @property
    def pages(self) -> list[Page]:
        return list(self._pages)

    @property
    def is_finalized(self) -> bool:
        return self._built is not None

    def _check_mutable(self) -> None:
        if self._built is not None:
            raise DocumentFinalizedError("Document has already been finalized")

    def add_page(self, width: float, height: float) -> Page:
        """Adds a page with the given media box size in points."""
        self._check_mutable()
        if width <= 0 or height <= 0:
            raise ValueError(f"Invalid page size {width} x {height}")
        page = Page(self, self._registry.allocate(), width, height)
        self._pages.append(page)
        logger.debug("Added page %d (%s x %s)", len(self._pages), width, height)
        return page

    def get_font(self, font: BuiltinFont) -> Font:
        """Returns the document's Font for a built-in font.

        The font dictionary is created on first use; later calls return the
        same instance.

        Raises:
            MalformedMetricsError: If the font's metrics cannot be parsed.
            MetricsNotFoundError: If no metrics exist for the font.
        """
        existing = self._fonts.get(font)
        if existing is not None:
            return existing
        self._check_mutable()
        metrics = self.metrics_cache.get(font.pdf_name)
        resolved = Font(font, metrics, f"F{len(self._fonts) + 1}")
        font_dict: dict[str, Any] = {
            "Type": Name("Font"),
            "Subtype": Name("Type1"),
            "BaseFont": Name(font.pdf_name),
        }
        if font.encoding.pdf_name is not None:
            font_dict["Encoding"] = Name(font.encoding.pdf_name)
        self._font_refs[font] = self._registry.add(font_dict)
        self._fonts[font] = resolved
        logger.debug("Registered font %s as /%s", font.pdf_name, resolved.resource_name)
        return resolved

    # Document information dictionary

    def _set_info(self, key: str, value: str) -> None:
        self._check_mutable()
        self._info[key] = value

    def set_title(self, title: str) -> None:
        self._set_info("Title", title)

    def set_author(self, author: str) -> None:
        self._set_info("Author", author)

    def set_subject(self, subject: str) -> None:
        self._set_info("Subject", subject)

    def set_creator(self, creator: str) -> None:
        self._set_info("Creator", creator)

    def set_producer(self, producer: str) -> None:
        self._set_info("Producer", producer)

    def add_keywords(self, keywords: str | Iterable[str]) -> None:
        """Adds keywords to the document information.

        Repeated calls merge with the keywords added before; a keyword
        already present is not added again.

        Args:
            keywords: One keyword, a comma separated list, or an iterable
                of keywords.
        """
        self._check_mutable()
        if isinstance(keywords, str):
            keywords = keywords.split(",")
        for keyword in keywords:
            keyword = keyword.strip()
            if keyword and keyword not in self._keywords:
                self._keywords.append(keyword)

    @property
    def keywords(self) -> list[str]:
        return list(self._keywords)

    @property
    def info(self) -> dict[str, str]:
        """The document information entries that will be written."""
        info = dict(self._info)
        if self._keywords:
            info["Keywords"] = ", ".join(self._keywords)
        if info:
            info.setdefault("Producer", DEFAULT_PRODUCER)
        return info

    # Outline

    def _add_outline(self, title: str, page: Page) -> None:
        self._check_mutable()
        self._outline.append(OutlineItem(title, page))

    @property
    def outline(self) -> list[OutlineItem]:
        return list(self._outline)

    def _record_gaps(self, font: Font, gaps: list[str]) -> None:
        message = (
            f"{len(gaps)} character(s) not in {font.encoding.name} replaced "
            f"by {font.encoding.fallback!r}: {''.join(dict.fromkeys(gaps))}"
        )
        logger.warning("%s (font %s)", message, font.name)
        self.warnings.append(message)

    # Output

    def _build_outline(self) -> Reference | None:
        if not self._outline:
            return None
        registry = self._registry
        root_ref = registry.allocate()
        item_refs = [registry.allocate() for _ in self._outline]
        for i, item in enumerate(self._outline):
            entry: dict[str, Any] = {"Title": item.title, "Parent": root_ref}
            if i > 0:
                entry["Prev"] = item_refs[i - 1]
            if i + 1 < len(item_refs):
                entry["Next"] = item_refs[i + 1]
            entry["Dest"] = [item.page.ref, Name("XYZ"), None, None, None]
            registry.assign(item_refs[i], entry)
        registry.assign(
            root_ref,
            {
                "Type": Name("Outlines"),
                "First": item_refs[0],
                "Last": item_refs[-1],
                "Count": len(item_refs),
            },
        )
        return root_ref

    def finalize(self) -> WriteResult:
        """Closes all pages and builds the file.

        Runs once; later calls return the same result.

        Raises:
            UnbalancedGraphicsStateError: If a page has unrestored graphics
                states or an open text object. The document stays
                unfinalized so the page can still be fixed.
            DanglingReferenceError: On an internal construction error.
        """
        return self._build()[1]

    def _build(self) -> tuple[bytes, WriteResult]:
        if self._built is not None:
            return self._built

        for page in self._pages:
            page.canvas._check_balanced()

        for page in self._pages:
            page._close(self._pages_ref)
        self._registry.assign(
            self._pages_ref,
            {
                "Type": Name("Pages"),
                "Kids": [page.ref for page in self._pages],
                "Count": len(self._pages),
            },
        )

        info = self.info
        if info:
            self._info_ref = self._registry.add(info)

        catalog: dict[str, Any] = {"Type": Name("Catalog"), "Pages": self._pages_ref}
        outline_ref = self._build_outline()
        if outline_ref is not None:
            catalog["Outlines"] = outline_ref
        self._registry.assign(self._catalog_ref, catalog)

        data, result = serialize_document(
            self._registry,
            self._catalog_ref,
            version=self.version,
            info=self._info_ref,
        )
        self._built = (data, result)
        logger.debug(
            "Finalized document: %d page(s), %d objects, %d bytes",
            len(self._pages),
            result.object_count,
            result.size,
        )
        return self._built

    def to_bytes(self) -> bytes:
        """Returns the finalized file content."""
        return self._build()[0]

    def write(self, sink: Sink) -> WriteResult:
        """Finalizes if needed and writes the file to a binary sink.

        Raises:
            SinkWriteError: If the sink fails; the cause is chained.
        """
        result = self.finalize()
        deliver(self.to_bytes(), sink)
        return result

    def save(self, path: str | os.PathLike) -> WriteResult:
        """Writes the file to ``path``.

        The data goes to a temporary file next to the target, which then
        replaces the target. On failure the target is left untouched.

        Raises:
            SinkWriteError: If the file cannot be written.
        """
        path = Path(path)
        result = self.finalize()
        try:
            fd, tmp_path = tempfile.mkstemp(
                suffix=".pdf", prefix=f".{path.stem}_", dir=path.parent
            )
        except OSError as e:
            raise SinkWriteError(
                f"Could not create temporary file in {path.parent}: {e}"
            ) from e
        tmp = Path(tmp_path)
        try:
            with os.fdopen(fd, "wb") as f:
                deliver(self.to_bytes(), f)
            os.replace(tmp, path)
        except OSError as e:
            tmp.unlink(missing_ok=True)
            raise SinkWriteError(f"Could not save {path}: {e}") from e
        except BaseException:
            tmp.unlink(missing_ok=True)
            raise
        logger.debug("Saved %s (%d bytes)", path, result.size)
        return result
