import struct

from rucstore.page import INVALID_PAGE_ID, PAGE_SIZE, Page, PageId


def test_page_id_equality_and_hash():
    a = PageId(3, 5)
    b = PageId(3, 5)
    assert a == b
    assert {a: "x"}[b] == "x"
    assert PageId(3, 6) != a


def test_page_id_default_page_no_is_invalid():
    assert PageId(1).page_no == INVALID_PAGE_ID


def test_page_id_string_form():
    assert str(PageId(3, 5)) == "{fd: 3 page_no: 5}"


def test_page_id_key_packs_fd_and_page_no():
    assert PageId(0, 7).key == 7
    assert PageId(1, 0).key == 1 << 16


def test_new_page_is_clean_and_zeroed():
    page = Page()
    assert len(page.data) == PAGE_SIZE
    assert page.data == bytearray(PAGE_SIZE)
    assert page.is_dirty is False
    assert page.pin_count == 0


def test_lsn_round_trip_and_layout():
    page = Page()
    page.lsn = 1234
    assert page.lsn == 1234
    assert bytes(page.data[Page.OFFSET_LSN:Page.OFFSET_LSN + 4]) == struct.pack("<i", 1234)
    page.lsn = -1
    assert page.lsn == -1


def test_reset_memory_clears_data():
    page = Page()
    page.data[10:14] = b"abcd"
    page.lsn = 9
    page.reset_memory()
    assert page.data == bytearray(PAGE_SIZE)
    assert page.lsn == 0
    assert len(page.data) == PAGE_SIZE


def test_pages_do_not_share_buffers():
    first, second = Page(), Page()
    first.data[0] = 1
    assert second.data[0] == 0