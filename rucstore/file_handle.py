"""Access to the records of one open table file."""

from __future__ import annotations

import struct
from typing import Optional

from rucstore import bitmap
from rucstore.buffer_pool import BufferPoolManager
from rucstore.disk_manager import DiskManager
from rucstore.errors import InternalError, PageNotExistError
from rucstore.page import INVALID_PAGE_ID, Page, PageId
from rucstore.record import (
    RM_FILE_HDR_PAGE,
    RM_NO_PAGE,
    Rid,
    RmFileHdr,
    RmPageHdr,
    RmRecord,
)

_INT = struct.Struct("<i")


class RmPageHandle:
    """View of a record page: its header, its bitmap and its slots.

    Used as a context manager, the handle unpins its page on exit, marking it
    dirty if anything was written through the handle.
    """

    def __init__(
        self,
        file_hdr: RmFileHdr,
        page: Page,
        buffer_pool: Optional[BufferPoolManager] = None,
    ) -> None:
        self.file_hdr = file_hdr
        self.page = page
        self._pool = buffer_pool
        self._dirty = False
        self._hdr_off = Page.OFFSET_PAGE_HDR
        self._bitmap_off = self._hdr_off + RmPageHdr.SIZE
        self._slots_off = self._bitmap_off + file_hdr.bitmap_size

    def __enter__(self) -> "RmPageHandle":
        return self

    def __exit__(self, *exc_info: object) -> None:
        if self._pool is not None:
            self._pool.unpin_page(self.page.page_id, self._dirty)

    @property
    def page_no(self) -> int:
        """Number of the page within its file."""
        return self.page.page_id.page_no

    @property
    def next_free_page_no(self) -> int:
        """Next page with free slots once this one is full."""
        return _INT.unpack_from(self.page.data, self._hdr_off)[0]

    @next_free_page_no.setter
    def next_free_page_no(self, value: int) -> None:
        _INT.pack_into(self.page.data, self._hdr_off, value)
        self._dirty = True

    @property
    def num_records(self) -> int:
        """Number of records stored in the page."""
        return _INT.unpack_from(self.page.data, self._hdr_off + _INT.size)[0]

    @num_records.setter
    def num_records(self, value: int) -> None:
        _INT.pack_into(self.page.data, self._hdr_off + _INT.size, value)
        self._dirty = True

    @property
    def bitmap(self) -> memoryview:
        """Writable view of the page's slot occupancy bitmap."""
        return memoryview(self.page.data)[self._bitmap_off:self._slots_off]

    def _slot_range(self, slot_no: int) -> slice:
        if not 0 <= slot_no < self.file_hdr.num_records_per_page:
            raise IndexError(f"slot out of range: {slot_no}")
        start = self._slots_off + slot_no * self.file_hdr.record_size
        return slice(start, start + self.file_hdr.record_size)

    def get_slot(self, slot_no: int) -> bytes:
        """Return the bytes held in slot ``slot_no``."""
        return bytes(self.page.data[self._slot_range(slot_no)])

    def set_slot(self, slot_no: int, data: bytes) -> None:
        """Overwrite slot ``slot_no`` with exactly one record's bytes."""
        if len(data) != self.file_hdr.record_size:
            raise ValueError(
                f"record must be {self.file_hdr.record_size} bytes, got {len(data)}"
            )
        self.page.data[self._slot_range(slot_no)] = data
        self._dirty = True


class RmFileHandle:
    """One open table file, holding fixed-size records in its pages."""

    def __init__(
        self,
        disk_manager: DiskManager,
        buffer_pool_manager: BufferPoolManager,
        fd: int,
    ) -> None:
        self._disk = disk_manager
        self._pool = buffer_pool_manager
        self.fd = fd
        self.file_hdr = RmFileHdr.unpack(
            disk_manager.read_page(fd, RM_FILE_HDR_PAGE, RmFileHdr.SIZE)
        )
        disk_manager.set_fd2pageno(fd, self.file_hdr.num_pages)

    def _checked(self, buf: bytes) -> bytes:
        data = bytes(buf)
        if len(data) != self.file_hdr.record_size:
            raise ValueError(
                f"record must be {self.file_hdr.record_size} bytes, got {len(data)}"
            )
        return data

    def _missing(self, rid: Rid) -> InternalError:
        return InternalError(f"no record at page {rid.page_no} slot {rid.slot_no}")

    def is_record(self, rid: Rid) -> bool:
        """Whether a record is stored at ``rid``."""
        with self.fetch_page_handle(rid.page_no) as handle:
            return bitmap.is_set(handle.bitmap, rid.slot_no)

    def get_record(self, rid: Rid) -> RmRecord:
        """Return a copy of the record stored at ``rid``."""
        with self.fetch_page_handle(rid.page_no) as handle:
            if not bitmap.is_set(handle.bitmap, rid.slot_no):
                raise self._missing(rid)
            return RmRecord(handle.get_slot(rid.slot_no))

    def _fill(self, handle: RmPageHandle, slot_no: int, data: bytes) -> None:
        handle.set_slot(slot_no, data)
        bitmap.set_bit(handle.bitmap, slot_no)
        handle.num_records += 1
        if handle.num_records == self.file_hdr.num_records_per_page:
            self.file_hdr.first_free_page_no = handle.next_free_page_no

    def insert_record(self, buf: bytes) -> Rid:
        """Store a record in the first free slot and return where it went."""
        data = self._checked(buf)
        per_page = self.file_hdr.num_records_per_page
        with self._create_page_handle() as handle:
            slot_no = bitmap.first_bit(False, handle.bitmap, per_page)
            if slot_no < per_page:
                self._fill(handle, slot_no, data)
                return Rid(handle.page_no, slot_no)
        with self.create_new_page_handle() as handle:
            self._fill(handle, 0, data)
            return Rid(handle.page_no, 0)

    def insert_record_at(self, rid: Rid, buf: bytes) -> None:
        """Store a record at ``rid``, which must be a free slot."""
        data = self._checked(buf)
        with self.fetch_page_handle(rid.page_no) as handle:
            if bitmap.is_set(handle.bitmap, rid.slot_no):
                raise InternalError("Slot is already occupied. Cannot insert record.")
            self._fill(handle, rid.slot_no, data)

    def delete_record(self, rid: Rid) -> None:
        """Remove the record stored at ``rid``."""
        with self.fetch_page_handle(rid.page_no) as handle:
            if not bitmap.is_set(handle.bitmap, rid.slot_no):
                raise self._missing(rid)
            bitmap.reset_bit(handle.bitmap, rid.slot_no)
            handle.num_records -= 1
            if handle.num_records == self.file_hdr.num_records_per_page - 1:
                self._release_page_handle(handle)

    def update_record(self, rid: Rid, buf: bytes) -> None:
        """Replace the record stored at ``rid``."""
        data = self._checked(buf)
        with self.fetch_page_handle(rid.page_no) as handle:
            if not bitmap.is_set(handle.bitmap, rid.slot_no):
                raise self._missing(rid)
            handle.set_slot(rid.slot_no, data)

    def fetch_page_handle(self, page_no: int) -> RmPageHandle:
        """Return a handle on a page, pinned until the handle's context exits."""
        if page_no == INVALID_PAGE_ID:
            raise PageNotExistError(self._disk.get_file_name(self.fd), page_no)
        page = self._pool.fetch_page(PageId(self.fd, page_no))
        if page is None:
            raise InternalError("buffer pool has no frame to spare")
        return RmPageHandle(self.file_hdr, page, self._pool)

    def create_new_page_handle(self) -> RmPageHandle:
        """Append an empty record page to the file and return a pinned handle on it."""
        page = self._pool.new_page(self.fd)
        if page is None:
            raise InternalError("buffer pool has no frame to spare")
        handle = RmPageHandle(self.file_hdr, page, self._pool)
        handle.next_free_page_no = RM_NO_PAGE
        handle.num_records = 0
        self.file_hdr.num_pages += 1
        self.file_hdr.first_free_page_no = handle.page_no
        return handle

    def _create_page_handle(self) -> RmPageHandle:
        if self.file_hdr.first_free_page_no != RM_NO_PAGE:
            return self.fetch_page_handle(self.file_hdr.first_free_page_no)
        return self.create_new_page_handle()

    def _release_page_handle(self, handle: RmPageHandle) -> None:
        handle.next_free_page_no = self.file_hdr.first_free_page_no
        self.file_hdr.first_free_page_no = handle.page_no