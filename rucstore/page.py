"""Page identifiers and in-memory page frames."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field

PAGE_SIZE = 4096
INVALID_PAGE_ID = -1
INVALID_LSN = -1

_LSN = struct.Struct("<i")


@dataclass(frozen=True, order=True)
class PageId:
    """A page located by the descriptor of its open file and its page number."""

    fd: int
    page_no: int = INVALID_PAGE_ID

    def __str__(self) -> str:
        return f"{{fd: {self.fd} page_no: {self.page_no}}}"

    @property
    def key(self) -> int:
        """The page id packed into a single integer."""
        return (self.fd << 16) | self.page_no


@dataclass(eq=False)
class Page:
    """One page of data held in a buffer pool frame."""

    OFFSET_PAGE_START = 0
    OFFSET_LSN = 0
    OFFSET_PAGE_HDR = 4

    page_id: PageId = field(default_factory=lambda: PageId(-1))
    data: bytearray = field(default_factory=lambda: bytearray(PAGE_SIZE))
    is_dirty: bool = False
    pin_count: int = 0

    @property
    def lsn(self) -> int:
        """The log sequence number stored at the start of the page."""
        return _LSN.unpack_from(self.data, self.OFFSET_LSN)[0]

    @lsn.setter
    def lsn(self, value: int) -> None:
        _LSN.pack_into(self.data, self.OFFSET_LSN, value)

    def reset_memory(self) -> None:
        """Fill the page's data with zero bytes."""
        self.data[:] = bytes(PAGE_SIZE)