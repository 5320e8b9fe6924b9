"""Creation, removal, opening and closing of table files."""

from __future__ import annotations

from rucstore.bitmap import BITMAP_WIDTH
from rucstore.buffer_pool import BufferPoolManager
from rucstore.disk_manager import DiskManager
from rucstore.errors import InvalidRecordSizeError
from rucstore.file_handle import RmFileHandle
from rucstore.page import PAGE_SIZE, PageId
from rucstore.record import RM_FILE_HDR_PAGE, RM_MAX_RECORD_SIZE, RM_NO_PAGE, RmFileHdr


class RmManager:
    """Manages the data files that hold the records of tables."""

    def __init__(self, disk_manager: DiskManager, buffer_pool_manager: BufferPoolManager) -> None:
        self._disk = disk_manager
        self._pool = buffer_pool_manager

    def create_file(self, filename: str, record_size: int) -> None:
        """Create a table file for records of ``record_size`` bytes."""
        if record_size < 1 or record_size > RM_MAX_RECORD_SIZE:
            raise InvalidRecordSizeError(record_size)
        self._disk.create_file(filename)
        fd = self._disk.open_file(filename)
        try:
            per_page = (BITMAP_WIDTH * (PAGE_SIZE - 1 - RmFileHdr.SIZE) + 1) // (
                1 + record_size * BITMAP_WIDTH
            )
            hdr = RmFileHdr(
                record_size=record_size,
                num_pages=1,
                num_records_per_page=per_page,
                first_free_page_no=RM_NO_PAGE,
                bitmap_size=(per_page + BITMAP_WIDTH - 1) // BITMAP_WIDTH,
            )
            self._disk.write_page(fd, RM_FILE_HDR_PAGE, hdr.pack())
        finally:
            self._disk.close_file(fd)

    def destroy_file(self, filename: str) -> None:
        """Delete a table file that is not open."""
        self._disk.destroy_file(filename)

    def open_file(self, filename: str) -> RmFileHandle:
        """Open a table file and return a handle on it."""
        fd = self._disk.open_file(filename)
        return RmFileHandle(self._disk, self._pool, fd)

    def close_file(self, file_handle: RmFileHandle) -> None:
        """Write the file's header and cached pages to disk and close it."""
        fd = file_handle.fd
        self._disk.write_page(fd, RM_FILE_HDR_PAGE, file_handle.file_hdr.pack())
        self._pool.flush_all_pages(fd)
        for page_no in range(file_handle.file_hdr.num_pages):
            self._pool.delete_page(PageId(fd, page_no))
        self._disk.close_file(fd)