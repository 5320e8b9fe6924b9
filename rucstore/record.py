"""Record identifiers, table file headers and records."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import ClassVar

RM_NO_PAGE = -1
RM_FILE_HDR_PAGE = 0
RM_FIRST_RECORD_PAGE = 1
RM_MAX_RECORD_SIZE = 512

_FILE_HDR = struct.Struct("<5i")
_PAGE_HDR = struct.Struct("<2i")
_SIZE = struct.Struct("<i")


@dataclass(frozen=True, order=True)
class Rid:
    """Location of a record: the page it lives on and its slot in that page."""

    page_no: int = RM_NO_PAGE
    slot_no: int = -1


@dataclass
class RmFileHdr:
    """Metadata of a table file, stored at the start of its page 0."""

    record_size: int
    num_pages: int = 1
    num_records_per_page: int = 0
    first_free_page_no: int = RM_NO_PAGE
    bitmap_size: int = 0

    SIZE: ClassVar[int] = _FILE_HDR.size

    def pack(self) -> bytes:
        """Encode the header as it is stored on disk."""
        return _FILE_HDR.pack(
            self.record_size,
            self.num_pages,
            self.num_records_per_page,
            self.first_free_page_no,
            self.bitmap_size,
        )

    @classmethod
    def unpack(cls, data: bytes) -> "RmFileHdr":
        """Decode a header from the bytes stored on disk."""
        return cls(*_FILE_HDR.unpack_from(data))


@dataclass
class RmPageHdr:
    """Metadata at the start of every record page."""

    next_free_page_no: int = RM_NO_PAGE
    num_records: int = 0

    SIZE: ClassVar[int] = _PAGE_HDR.size


@dataclass
class RmRecord:
    """The bytes of one record of a table."""

    data: bytes

    def __post_init__(self) -> None:
        self.data = bytes(self.data)

    @property
    def size(self) -> int:
        """Length of the record in bytes."""
        return len(self.data)

    def serialize(self) -> bytes:
        """Encode the record as its size followed by its bytes."""
        return _SIZE.pack(self.size) + self.data

    @classmethod
    def deserialize(cls, data: bytes) -> "RmRecord":
        """Decode a record written by :meth:`serialize`."""
        (size,) = _SIZE.unpack_from(data)
        end = _SIZE.size + size
        if size < 0 or len(data) < end:
            raise ValueError("truncated record")
        return cls(bytes(data[_SIZE.size:end]))