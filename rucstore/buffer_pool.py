"""A fixed pool of in-memory page frames backed by the disk manager."""

from __future__ import annotations

import threading
from typing import Dict, List, Optional

from rucstore.disk_manager import DiskManager
from rucstore.page import PAGE_SIZE, Page, PageId
from rucstore.replacer import LRUReplacer, Replacer

BUFFER_POOL_SIZE = 65536


class BufferPoolManager:
    """Caches pages of open files in a fixed number of frames."""

    def __init__(
        self,
        pool_size: int,
        disk_manager: DiskManager,
        replacer: Optional[Replacer] = None,
    ) -> None:
        self.pool_size = pool_size
        self._disk = disk_manager
        self._pages: List[Page] = [Page() for _ in range(pool_size)]
        self._page_table: Dict[PageId, int] = {}
        self._free_list: List[int] = list(range(pool_size))
        self._replacer = replacer if replacer is not None else LRUReplacer(pool_size)
        self._lock = threading.Lock()

    @staticmethod
    def mark_dirty(page: Page) -> None:
        """Mark a page as changed since it was last written."""
        page.is_dirty = True

    def _find_victim_frame(self) -> Optional[int]:
        if self._free_list:
            return self._free_list.pop()
        return self._replacer.victim()

    def _write_back(self, page: Page) -> None:
        self._disk.write_page(page.page_id.fd, page.page_id.page_no, page.data)
        page.is_dirty = False

    def _rebind(self, page: Page, new_page_id: PageId, frame_id: int) -> None:
        if page.is_dirty:
            self._write_back(page)
        self._page_table.pop(page.page_id, None)
        page.page_id = new_page_id
        self._page_table[new_page_id] = frame_id

    def fetch_page(self, page_id: PageId) -> Optional[Page]:
        """Return the page pinned in memory, reading it from disk if needed.

        Returns None when every frame is pinned.
        """
        with self._lock:
            frame_id = self._page_table.get(page_id)
            if frame_id is not None:
                self._replacer.pin(frame_id)
                page = self._pages[frame_id]
                page.pin_count += 1
                return page
            frame_id = self._find_victim_frame()
            if frame_id is None:
                return None
            page = self._pages[frame_id]
            self._rebind(page, page_id, frame_id)
            try:
                data = self._disk.read_page(page_id.fd, page_id.page_no, PAGE_SIZE)
            except Exception:
                del self._page_table[page_id]
                page.page_id = PageId(-1)
                page.reset_memory()
                page.pin_count = 0
                self._free_list.append(frame_id)
                raise
            page.data[:] = data
            page.is_dirty = False
            page.pin_count = 1
            self._replacer.pin(frame_id)
            return page

    def unpin_page(self, page_id: PageId, is_dirty: bool) -> bool:
        """Release one pin on a page; False if it is not cached or not pinned."""
        with self._lock:
            frame_id = self._page_table.get(page_id)
            if frame_id is None:
                return False
            page = self._pages[frame_id]
            if page.pin_count == 0:
                return False
            page.pin_count -= 1
            if page.pin_count == 0:
                self._replacer.unpin(frame_id)
            if is_dirty:
                page.is_dirty = True
            return True

    def flush_page(self, page_id: PageId) -> bool:
        """Write a cached page to disk whether or not it is dirty."""
        with self._lock:
            frame_id = self._page_table.get(page_id)
            if frame_id is None:
                return False
            self._write_back(self._pages[frame_id])
            return True

    def new_page(self, fd: int) -> Optional[Page]:
        """Allocate a fresh zero-filled page in file ``fd`` and return it pinned.

        Returns None when every frame is pinned.
        """
        with self._lock:
            frame_id = self._find_victim_frame()
            if frame_id is None:
                return None
            page_no = self._disk.allocate_page(fd)
            page = self._pages[frame_id]
            self._rebind(page, PageId(fd, page_no), frame_id)
            page.reset_memory()
            page.is_dirty = False
            page.pin_count = 1
            self._replacer.pin(frame_id)
            return page

    def delete_page(self, page_id: PageId) -> bool:
        """Drop a page from the pool; False if it is still pinned."""
        with self._lock:
            frame_id = self._page_table.get(page_id)
            if frame_id is None:
                return True
            page = self._pages[frame_id]
            if page.pin_count != 0:
                return False
            if page.is_dirty:
                self._write_back(page)
            del self._page_table[page_id]
            self._replacer.pin(frame_id)
            page.page_id = PageId(-1)
            page.reset_memory()
            page.is_dirty = False
            page.pin_count = 0
            self._free_list.append(frame_id)
            return True

    def flush_all_pages(self, fd: int) -> None:
        """Write every dirty cached page of file ``fd`` to disk."""
        with self._lock:
            for page_id, frame_id in self._page_table.items():
                page = self._pages[frame_id]
                if page_id.fd == fd and page.is_dirty:
                    self._write_back(page)