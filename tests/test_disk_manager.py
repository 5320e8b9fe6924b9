import pytest

from rucstore.disk_manager import DiskManager
from rucstore.errors import (
    FileAlreadyExistsError,
    FileInUseError,
    FileMissingError,
    FileNotOpenError,
    InternalError,
)
from rucstore.page import PAGE_SIZE


@pytest.fixture
def dm(tmp_path):
    return DiskManager(log_file_name=str(tmp_path / "db.log"))


def test_create_open_write_read_round_trip(dm, tmp_path):
    path = str(tmp_path / "t.tbl")
    dm.create_file(path)
    assert dm.is_file(path)
    fd = dm.open_file(path)
    payload = b"hello page"
    dm.write_page(fd, 2, payload)
    assert dm.read_page(fd, 2, len(payload)) == payload
    assert dm.get_file_size(path) == 2 * PAGE_SIZE + len(payload)
    dm.close_file(fd)


def test_full_page_round_trip(dm, tmp_path):
    path = str(tmp_path / "full.tbl")
    dm.create_file(path)
    fd = dm.open_file(path)
    data = bytes(i % 256 for i in range(PAGE_SIZE))
    dm.write_page(fd, 0, data)
    dm.write_page(fd, 1, data[::-1])
    assert dm.read_page(fd, 0, PAGE_SIZE) == data
    assert dm.read_page(fd, 1, PAGE_SIZE) == data[::-1]
    dm.close_file(fd)


def test_read_past_end_raises(dm, tmp_path):
    path = str(tmp_path / "short.tbl")
    dm.create_file(path)
    fd = dm.open_file(path)
    with pytest.raises(InternalError):
        dm.read_page(fd, 0, 16)
    dm.close_file(fd)


def test_create_twice_raises(dm, tmp_path):
    path = str(tmp_path / "dup.tbl")
    dm.create_file(path)
    with pytest.raises(FileAlreadyExistsError):
        dm.create_file(path)


def test_open_missing_raises(dm, tmp_path):
    with pytest.raises(FileMissingError):
        dm.open_file(str(tmp_path / "none.tbl"))


def test_open_twice_raises(dm, tmp_path):
    path = str(tmp_path / "twice.tbl")
    dm.create_file(path)
    fd = dm.open_file(path)
    with pytest.raises(FileInUseError):
        dm.open_file(path)
    dm.close_file(fd)


def test_destroy_open_file_refused_then_allowed(dm, tmp_path):
    path = str(tmp_path / "busy.tbl")
    dm.create_file(path)
    fd = dm.open_file(path)
    with pytest.raises(FileInUseError):
        dm.destroy_file(path)
    dm.close_file(fd)
    dm.destroy_file(path)
    assert dm.is_file(path) is False


def test_destroy_missing_raises(dm, tmp_path):
    with pytest.raises(FileMissingError):
        dm.destroy_file(str(tmp_path / "gone.tbl"))


def test_close_unknown_fd_raises(dm):
    with pytest.raises(FileNotOpenError):
        dm.close_file(999)


def test_file_name_and_fd_lookup(dm, tmp_path):
    path = str(tmp_path / "look.tbl")
    dm.create_file(path)
    fd = dm.get_file_fd(path)
    assert dm.get_file_name(fd) == path
    assert dm.get_file_fd(path) == fd
    dm.close_file(fd)
    with pytest.raises(FileNotOpenError):
        dm.get_file_name(fd)


def test_get_file_size_missing_is_minus_one(dm, tmp_path):
    assert dm.get_file_size(str(tmp_path / "nothing")) == -1


def test_allocate_page_counts_up_from_set_value(dm):
    assert dm.allocate_page(5) == 0
    assert dm.allocate_page(5) == 1
    dm.set_fd2pageno(5, 10)
    assert dm.get_fd2pageno(5) == 10
    assert dm.allocate_page(5) == 10
    assert dm.get_fd2pageno(5) == 11
    assert dm.get_fd2pageno(6) == 0


def test_allocate_page_rejects_bad_fd(dm):
    with pytest.raises(ValueError):
        dm.allocate_page(DiskManager.MAX_FD)


def test_directories(dm, tmp_path):
    path = str(tmp_path / "dbdir")
    assert dm.is_dir(path) is False
    dm.create_dir(path)
    assert dm.is_dir(path)
    dm.create_file(str(tmp_path / "dbdir" / "inner.tbl"))
    dm.destroy_dir(path)
    assert dm.is_dir(path) is False


def test_log_append_and_read(dm, tmp_path):
    dm.create_file(str(tmp_path / "db.log"))
    dm.write_log(b"first-")
    dm.write_log(b"second")
    assert dm.read_log(100, 0) == b"first-second"
    assert dm.read_log(3, 6) == b"sec"
    assert dm.read_log(10, 12) == b""
    assert dm.read_log(10, 13) is None
    dm.close_file(dm.log_fd)
    assert dm.log_fd == -1