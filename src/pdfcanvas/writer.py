# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Serialization of an object registry into a complete PDF file.

Layout of the output::

    %PDF-1.7
    %<4 binary bytes>
    1 0 obj
    ...
    endobj
    ...
    xref
    0 N
    0000000000 65535 f   (20 bytes per entry)
    ...
    trailer
    << /Size N /Root 1 0 R >>
    startxref
    <offset of "xref">
    %%EOF

The file is assembled in memory and handed to the sink in a single write,
so a serialization error never reaches the sink.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from io import BytesIO
from typing import Any, BinaryIO, Protocol

import pikepdf  # noqa: F401  (registers the pdfdoc_pikepdf codec)

from .exceptions import DanglingReferenceError, SinkWriteError
from .fonts.encodings import escape_for_literal
from .objects import Name, ObjectRegistry, Reference, Stream
from .utils import format_number

logger = logging.getLogger(__name__)

BINARY_MARKER = b"%\xb5\xed\xae\xfb\n"
FREE_ENTRY = b"0000000000 65535 f \n"
XREF_ENTRY_LENGTH = 20

# Delimiters that must be written as #xx inside names (ISO 32000-1, 7.3.5)
_NAME_DELIMITERS = frozenset(b"()<>[]{}/%#")


class Sink(Protocol):
    def write(self, data: bytes, /) -> Any: ...


@dataclass
class WriteResult:
    """Summary of a serialized document.

    Attributes:
        object_count: Number of indirect objects written.
        size: Total file size in bytes.
        xref_offset: Byte offset of the ``xref`` keyword.
        offsets: Byte offset of each object's ``n 0 obj`` header.
    """

    object_count: int
    size: int
    xref_offset: int
    offsets: dict[int, int] = field(default_factory=dict)


def header(version: str) -> bytes:
    """Returns the file header for a PDF version."""
    return b"%PDF-" + version.encode("ascii") + b"\n" + BINARY_MARKER


def serialize_name(name: Name | str) -> bytes:
    """Writes a name, escaping irregular bytes as ``#xx``."""
    value = name.value if isinstance(name, Name) else name
    out = bytearray(b"/")
    for byte in value.encode("utf-8"):
        if byte < 0x21 or byte > 0x7E or byte in _NAME_DELIMITERS:
            out += b"#%02X" % byte
        else:
            out.append(byte)
    return bytes(out)


def serialize_string(value: bytes | str) -> bytes:
    """Writes a literal string.

    Text strings use PDFDocEncoding when every character fits, otherwise
    UTF-16BE with a byte order mark.
    """
    if isinstance(value, str):
        try:
            data = value.encode("pdfdoc_pikepdf")
        except UnicodeEncodeError:
            data = b"\xfe\xff" + value.encode("utf-16-be")
    else:
        data = value
    # Bare CR would be read back as LF
    return b"(" + escape_for_literal(data).replace(b"\r", b"\\r") + b")"


def serialize_value(value: Any, registry: ObjectRegistry | None = None) -> bytes:
    """Serializes a direct value.

    Args:
        value: The value to write.
        registry: If given, every reference is checked against it.

    Raises:
        DanglingReferenceError: If a reference has no assigned target.
        TypeError: If the value has no PDF representation.
        ValueError: If a number is NaN or infinite.
    """
    if value is None:
        return b"null"
    if isinstance(value, bool):
        return b"true" if value else b"false"
    if isinstance(value, (int, float, Decimal)):
        return format_number(value).encode("ascii")
    if isinstance(value, Name):
        return serialize_name(value)
    if isinstance(value, Reference):
        if registry is not None and not registry.is_assigned(value):
            raise DanglingReferenceError(
                f"Reference {value} points to a missing object"
            )
        return str(value).encode("ascii")
    if isinstance(value, (bytes, bytearray, str)):
        return serialize_string(bytes(value) if isinstance(value, bytearray) else value)
    if isinstance(value, dict):
        return _serialize_dict(value, registry)
    if isinstance(value, (list, tuple)):
        return b"[" + b" ".join(serialize_value(v, registry) for v in value) + b"]"
    if isinstance(value, Stream):
        raise TypeError("Streams must be indirect objects")
    raise TypeError(f"Cannot serialize {type(value).__name__} as a PDF value")


def _serialize_dict(value: dict, registry: ObjectRegistry | None) -> bytes:
    parts = [b"<<"]
    for key, item in value.items():
        parts.append(serialize_name(key))
        parts.append(serialize_value(item, registry))
    parts.append(b">>")
    return b" ".join(parts)


def serialize_object(
    number: int, value: Any, registry: ObjectRegistry | None = None
) -> bytes:
    """Serializes one indirect object including ``obj``/``endobj``."""
    if isinstance(value, Stream):
        dictionary = {"Length": len(value.data)}
        dictionary.update(
            (k, v)
            for k, v in value.dictionary.items()
            if (k.value if isinstance(k, Name) else k) != "Length"
        )
        body = (
            _serialize_dict(dictionary, registry)
            + b"\nstream\n"
            + value.data
            + b"\nendstream"
        )
    else:
        body = serialize_value(value, registry)
    return b"%d 0 obj\n%s\nendobj\n" % (number, body)


def xref_entry(offset: int) -> bytes:
    """Returns a 20-byte in-use cross-reference entry."""
    return b"%010d 00000 n \n" % offset


def serialize_document(
    registry: ObjectRegistry,
    root: Reference,
    *,
    version: str = "1.7",
    info: Reference | None = None,
) -> tuple[bytes, WriteResult]:
    """Serializes every object of a registry into PDF file bytes.

    Raises:
        DanglingReferenceError: If an object was allocated but never
            assigned, or any reference points to a missing object.
    """
    unassigned = registry.unassigned()
    if unassigned:
        raise DanglingReferenceError(
            "Objects allocated but never assigned: "
            + ", ".join(str(n) for n in unassigned)
        )

    buffer = BytesIO()
    buffer.write(header(version))
    offsets: dict[int, int] = {}
    for number, value in registry:
        offsets[number] = buffer.tell()
        buffer.write(serialize_object(number, value, registry))

    size = len(registry) + 1
    trailer: dict[str, Any] = {"Size": size, "Root": root}
    if info is not None:
        trailer["Info"] = info

    xref_offset = buffer.tell()
    buffer.write(b"xref\n0 %d\n" % size)
    buffer.write(FREE_ENTRY)
    for number in range(1, size):
        buffer.write(xref_entry(offsets[number]))
    buffer.write(b"trailer\n")
    buffer.write(_serialize_dict(trailer, registry))
    buffer.write(b"\nstartxref\n%d\n%%%%EOF\n" % xref_offset)

    data = buffer.getvalue()
    result = WriteResult(
        object_count=len(offsets),
        size=len(data),
        xref_offset=xref_offset,
        offsets=offsets,
    )
    logger.debug(
        "Serialized %d objects, %d bytes, xref at %d",
        result.object_count,
        result.size,
        xref_offset,
    )
    return data, result


def deliver(data: bytes, sink: Sink | BinaryIO) -> None:
    """Hands the complete file to a sink in a single write.

    Raises:
        SinkWriteError: If the sink fails to accept the data.
    """
    try:
        sink.write(data)
    except Exception as e:
        raise SinkWriteError(f"Could not write PDF output: {e}") from e
    logger.debug("Wrote %d bytes", len(data))


def write_document(
    registry: ObjectRegistry,
    sink: Sink | BinaryIO,
    root: Reference,
    *,
    version: str = "1.7",
    info: Reference | None = None,
) -> WriteResult:
    """Serializes a registry and writes the file to a sink.

    Raises:
        DanglingReferenceError: See :func:`serialize_document`.
        SinkWriteError: If the sink fails to accept the data.
    """
    data, result = serialize_document(registry, root, version=version, info=info)
    deliver(data, sink)
    return result
