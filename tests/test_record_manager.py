import os

import pytest

from rucstore.buffer_pool import BufferPoolManager
from rucstore.disk_manager import DiskManager
from rucstore.errors import (
    FileAlreadyExistsError,
    FileInUseError,
    FileMissingError,
    InvalidRecordSizeError,
)
from rucstore.page import PAGE_SIZE, Page
from rucstore.record import RM_MAX_RECORD_SIZE, RM_NO_PAGE, RmPageHdr
from rucstore.record_manager import RmManager


@pytest.fixture
def manager(tmp_path):
    disk = DiskManager(log_file_name=str(tmp_path / "db.log"))
    pool = BufferPoolManager(4, disk)
    return RmManager(disk, pool)


@pytest.mark.parametrize("size", [0, -1, RM_MAX_RECORD_SIZE + 1])
def test_invalid_record_size(manager, tmp_path, size):
    path = str(tmp_path / "bad.tbl")
    with pytest.raises(InvalidRecordSizeError):
        manager.create_file(path, size)
    assert not os.path.exists(path)


@pytest.mark.parametrize("size", [1, 8, 100, RM_MAX_RECORD_SIZE])
def test_new_file_header(manager, tmp_path, size):
    path = str(tmp_path / "t.tbl")
    manager.create_file(path, size)
    fh = manager.open_file(path)
    hdr = fh.file_hdr
    assert hdr.record_size == size
    assert hdr.num_pages == 1
    assert hdr.first_free_page_no == RM_NO_PAGE
    assert hdr.num_records_per_page >= 1
    assert hdr.bitmap_size * 8 >= hdr.num_records_per_page
    assert (hdr.bitmap_size - 1) * 8 < hdr.num_records_per_page
    layout = Page.OFFSET_PAGE_HDR + RmPageHdr.SIZE + hdr.bitmap_size
    assert layout + hdr.num_records_per_page * size <= PAGE_SIZE
    manager.close_file(fh)


def test_create_existing_file_raises(manager, tmp_path):
    path = str(tmp_path / "t.tbl")
    manager.create_file(path, 8)
    with pytest.raises(FileAlreadyExistsError):
        manager.create_file(path, 8)


def test_destroy_file(manager, tmp_path):
    path = str(tmp_path / "t.tbl")
    manager.create_file(path, 8)
    manager.destroy_file(path)
    assert not os.path.exists(path)
    with pytest.raises(FileMissingError):
        manager.destroy_file(path)


def test_destroy_open_file_raises(manager, tmp_path):
    path = str(tmp_path / "t.tbl")
    manager.create_file(path, 8)
    fh = manager.open_file(path)
    with pytest.raises(FileInUseError):
        manager.destroy_file(path)
    manager.close_file(fh)
    manager.destroy_file(path)
    assert not os.path.exists(path)


def test_close_persists_header(manager, tmp_path):
    path = str(tmp_path / "t.tbl")
    manager.create_file(path, 200)
    fh = manager.open_file(path)
    per_page = fh.file_hdr.num_records_per_page
    for i in range(per_page + 1):
        fh.insert_record(bytes([i % 256]) * 200)
    hdr = fh.file_hdr
    manager.close_file(fh)
    reopened = manager.open_file(path)
    assert reopened.file_hdr == hdr
    assert reopened.file_hdr.num_pages > 1


def test_open_missing_file_raises(manager, tmp_path):
    with pytest.raises(FileMissingError):
        manager.open_file(str(tmp_path / "absent.tbl"))