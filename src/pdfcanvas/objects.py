# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""PDF object model.

Values are plain Python objects wherever one fits: ``dict`` is a
dictionary, ``list`` or ``tuple`` an array, ``bytes`` a byte string, ``str``
a text string, ``int``/``float``/``Decimal`` a number, ``bool`` a boolean
and ``None`` null. Names, references and streams have their own types.

Every indirect object lives in an :class:`ObjectRegistry`, which hands out
object numbers and owns the values. A :class:`Reference` is only a key into
the registry.
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Name:
    """A PDF name object, written as ``/value``."""

    value: str

    def __post_init__(self) -> None:
        if self.value.startswith("/"):
            object.__setattr__(self, "value", self.value[1:])

    def __str__(self) -> str:
        return f"/{self.value}"


@dataclass(frozen=True)
class Reference:
    """A reference to an indirect object.

    References are created by :class:`ObjectRegistry`; the generation is
    always 0 since files are written once.
    """

    number: int
    generation: int = 0

    def __str__(self) -> str:
        return f"{self.number} {self.generation} R"


@dataclass(eq=False)
class Stream:
    """A stream object: a dictionary plus a raw byte payload.

    The /Length entry is derived from ``data`` when the stream is written;
    a /Length in ``dictionary`` is ignored.
    """

    data: bytes = b""
    dictionary: dict = field(default_factory=dict)


_UNASSIGNED = object()


class ObjectRegistry:
    """Numbered store of indirect objects.

    Object numbers start at 1 (0 heads the free list) and increase by one
    per allocation. Numbers are never reused. An object may be allocated
    first and receive its value later, which allows forward references.
    """

    def __init__(self) -> None:
        self._objects: list[Any] = []

    def allocate(self) -> Reference:
        """Reserves the next object number without a value."""
        self._objects.append(_UNASSIGNED)
        ref = Reference(len(self._objects))
        logger.debug("Allocated object %d", ref.number)
        return ref

    def assign(self, ref: Reference, value: Any) -> None:
        """Sets the value of an allocated object.

        Raises:
            KeyError: If the reference was not allocated by this registry.
            ValueError: If the object already has a value.
        """
        index = self._index(ref)
        if self._objects[index] is not _UNASSIGNED:
            raise ValueError(f"Object {ref.number} is already assigned")
        self._objects[index] = value

    def add(self, value: Any) -> Reference:
        """Allocates a new object and assigns its value."""
        ref = self.allocate()
        self._objects[ref.number - 1] = value
        return ref

    def get(self, ref: Reference | int) -> Any:
        """Returns the value of an assigned object.

        Raises:
            KeyError: If the object does not exist or has no value yet.
        """
        value = self._objects[self._index(ref)]
        if value is _UNASSIGNED:
            raise KeyError(f"Object {self._number(ref)} has no value")
        return value

    def is_assigned(self, ref: Reference | int) -> bool:
        return ref in self and self._objects[self._index(ref)] is not _UNASSIGNED

    def unassigned(self) -> list[int]:
        """Returns the numbers of allocated objects still without a value."""
        return [
            number
            for number, value in enumerate(self._objects, start=1)
            if value is _UNASSIGNED
        ]

    @staticmethod
    def _number(ref: Reference | int) -> int:
        return ref.number if isinstance(ref, Reference) else ref

    def _index(self, ref: Reference | int) -> int:
        number = self._number(ref)
        if isinstance(ref, Reference) and ref.generation != 0:
            raise KeyError(f"No object {ref}")
        if not 1 <= number <= len(self._objects):
            raise KeyError(f"No object {number}")
        return number - 1

    def __contains__(self, ref: object) -> bool:
        if isinstance(ref, Reference):
            return ref.generation == 0 and 1 <= ref.number <= len(self._objects)
        if isinstance(ref, int) and not isinstance(ref, bool):
            return 1 <= ref <= len(self._objects)
        return False

    def __len__(self) -> int:
        return len(self._objects)

    def __iter__(self) -> Iterator[tuple[int, Any]]:
        """Yields (object number, value) in ascending number order.

        Unassigned objects are skipped.
        """
        for number, value in enumerate(self._objects, start=1):
            if value is not _UNASSIGNED:
                yield number, value
