import pytest

from rucstore.buffer_pool import BufferPoolManager
from rucstore.disk_manager import DiskManager
from rucstore.record import RM_NO_PAGE
from rucstore.record_manager import RmManager
from rucstore.scan import RmScan

RECORD_SIZE = 500


def rec(i):
    return bytes([i % 256]) * RECORD_SIZE


@pytest.fixture
def handle(tmp_path):
    disk = DiskManager(log_file_name=str(tmp_path / "db.log"))
    pool = BufferPoolManager(2, disk)
    manager = RmManager(disk, pool)
    path = str(tmp_path / "s.tbl")
    manager.create_file(path, RECORD_SIZE)
    return manager.open_file(path)


def test_empty_file_scan_ends_at_once(handle):
    scan = RmScan(handle)
    assert scan.is_end()
    assert scan.rid().page_no == RM_NO_PAGE
    assert list(scan) == []


def test_scan_visits_all_records_in_order(handle):
    per_page = handle.file_hdr.num_records_per_page
    rids = [handle.insert_record(rec(i)) for i in range(per_page * 2 + 3)]
    assert list(RmScan(handle)) == sorted(rids)


def test_scan_skips_deleted_records(handle):
    per_page = handle.file_hdr.num_records_per_page
    rids = [handle.insert_record(rec(i)) for i in range(per_page + 2)]
    removed = {rids[0], rids[4], rids[per_page]}
    for rid in removed:
        handle.delete_record(rid)
    assert list(RmScan(handle)) == [r for r in rids if r not in removed]


def test_scan_skips_empty_page(handle):
    per_page = handle.file_hdr.num_records_per_page
    rids = [handle.insert_record(rec(i)) for i in range(per_page * 2 + 1)]
    for rid in rids[per_page:per_page * 2]:
        handle.delete_record(rid)
    assert list(RmScan(handle)) == rids[:per_page] + rids[per_page * 2:]


def test_next_and_rid_step_through(handle):
    rids = [handle.insert_record(rec(i)) for i in range(3)]
    scan = RmScan(handle)
    seen = []
    while not scan.is_end():
        seen.append(scan.rid())
        scan.next()
    assert seen == rids
    scan.next()
    assert scan.is_end()


def test_scan_records_match_data(handle):
    for i in range(5):
        handle.insert_record(rec(i))
    data = [handle.get_record(rid).data for rid in RmScan(handle)]
    assert data == [rec(i) for i in range(5)]