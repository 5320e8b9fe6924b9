"""Sequential scan over the records of a table file."""

from __future__ import annotations

from typing import Iterator

from rucstore import bitmap
from rucstore.file_handle import RmFileHandle
from rucstore.record import RM_FIRST_RECORD_PAGE, RM_NO_PAGE, Rid


class RmScan:
    """Walks the occupied slots of a table file in page and slot order."""

    def __init__(self, file_handle: RmFileHandle) -> None:
        self._file_handle = file_handle
        self._rid = Rid(RM_FIRST_RECORD_PAGE, -1)
        self.next()

    def next(self) -> None:
        """Move to the next occupied slot, or to the end of the file."""
        if self.is_end():
            return
        hdr = self._file_handle.file_hdr
        per_page = hdr.num_records_per_page
        page_no, slot_no = self._rid.page_no, self._rid.slot_no
        while page_no < hdr.num_pages:
            with self._file_handle.fetch_page_handle(page_no) as handle:
                slot_no = bitmap.next_bit(True, handle.bitmap, per_page, slot_no)
            if slot_no < per_page:
                self._rid = Rid(page_no, slot_no)
                return
            page_no += 1
            slot_no = -1
        self._rid = Rid(RM_NO_PAGE, -1)

    def is_end(self) -> bool:
        """Whether the scan has passed the last record."""
        return self._rid.page_no == RM_NO_PAGE

    def rid(self) -> Rid:
        """Location of the record the scan is on."""
        return self._rid

    def __iter__(self) -> Iterator[Rid]:
        while not self.is_end():
            yield self._rid
            self.next()