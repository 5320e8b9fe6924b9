"""Page-granular access to the database's files on disk."""

from __future__ import annotations

import os
import shutil
import threading
from typing import Dict, Optional

from rucstore.errors import (
    FileAlreadyExistsError,
    FileInUseError,
    FileMissingError,
    FileNotOpenError,
    InternalError,
    UnixError,
)
from rucstore.page import PAGE_SIZE

LOG_FILE_NAME = "db.log"

_BINARY = getattr(os, "O_BINARY", 0)


class DiskManager:
    """Creates, opens and removes files and reads and writes their pages."""

    MAX_FD = 8192

    def __init__(self, log_file_name: str = LOG_FILE_NAME) -> None:
        self.log_file_name = log_file_name
        self.log_fd = -1
        self._path2fd: Dict[str, int] = {}
        self._fd2path: Dict[int, str] = {}
        self._fd2pageno: Dict[int, int] = {}
        self._lock = threading.Lock()

    # pages

    def write_page(self, fd: int, page_no: int, data: bytes) -> None:
        """Write ``data`` at the start of page ``page_no`` of the file ``fd``."""
        try:
            os.lseek(fd, page_no * PAGE_SIZE, os.SEEK_SET)
            written = os.write(fd, bytes(data))
        except OSError as exc:
            raise InternalError("DiskManager::write_page Error") from exc
        if written != len(data):
            raise InternalError("DiskManager::write_page Error")

    def read_page(self, fd: int, page_no: int, num_bytes: int) -> bytes:
        """Read ``num_bytes`` bytes from the start of page ``page_no`` of ``fd``."""
        try:
            os.lseek(fd, page_no * PAGE_SIZE, os.SEEK_SET)
            data = os.read(fd, num_bytes)
        except OSError as exc:
            raise InternalError("DiskManager::read_page Error") from exc
        if len(data) != num_bytes:
            raise InternalError("DiskManager::read_page Error")
        return data

    def allocate_page(self, fd: int) -> int:
        """Hand out the next unused page number of the file ``fd``."""
        if not 0 <= fd < self.MAX_FD:
            raise ValueError(f"file descriptor out of range: {fd}")
        with self._lock:
            page_no = self._fd2pageno.get(fd, 0)
            self._fd2pageno[fd] = page_no + 1
        return page_no

    def deallocate_page(self, page_no: int) -> None:
        """Release a page number; page numbers are never reused."""

    def set_fd2pageno(self, fd: int, start_page_no: int) -> None:
        """Set the number of pages already allocated in the file ``fd``."""
        with self._lock:
            self._fd2pageno[fd] = start_page_no

    def get_fd2pageno(self, fd: int) -> int:
        """Return the number of pages already allocated in the file ``fd``."""
        with self._lock:
            return self._fd2pageno.get(fd, 0)

    # directories

    def is_dir(self, path: str) -> bool:
        """Whether ``path`` names an existing directory."""
        return os.path.isdir(path)

    def create_dir(self, path: str) -> None:
        """Create the directory ``path``."""
        try:
            os.mkdir(path)
        except OSError as exc:
            raise UnixError(str(exc)) from exc

    def destroy_dir(self, path: str) -> None:
        """Remove the directory ``path`` with everything in it."""
        try:
            shutil.rmtree(path)
        except OSError as exc:
            raise UnixError(str(exc)) from exc

    # files

    def is_file(self, path: str) -> bool:
        """Whether ``path`` names an existing regular file."""
        return os.path.isfile(path)

    def create_file(self, path: str) -> None:
        """Create an empty file; it must not exist yet."""
        try:
            fd = os.open(path, os.O_CREAT | os.O_EXCL | os.O_RDONLY | _BINARY, 0o744)
        except FileExistsError as exc:
            raise FileAlreadyExistsError(path) from exc
        except OSError as exc:
            raise UnixError(str(exc)) from exc
        os.close(fd)

    def destroy_file(self, path: str) -> None:
        """Delete a file that is not currently open."""
        if path in self._path2fd:
            raise FileInUseError(path)
        try:
            os.unlink(path)
        except FileNotFoundError as exc:
            raise FileMissingError(path) from exc
        except OSError as exc:
            raise UnixError(str(exc)) from exc

    def open_file(self, path: str) -> int:
        """Open a file for reading and writing and return its descriptor."""
        if path in self._path2fd:
            raise FileInUseError(path)
        try:
            fd = os.open(path, os.O_RDWR | _BINARY)
        except FileNotFoundError as exc:
            raise FileMissingError(path) from exc
        except OSError as exc:
            raise UnixError(str(exc)) from exc
        self._path2fd[path] = fd
        self._fd2path[fd] = path
        return fd

    def close_file(self, fd: int) -> None:
        """Close a file opened by this manager."""
        if fd not in self._fd2path:
            raise FileNotOpenError(fd)
        try:
            os.close(fd)
        except OSError as exc:
            raise UnixError(str(exc)) from exc
        path = self._fd2path.pop(fd)
        del self._path2fd[path]
        if fd == self.log_fd:
            self.log_fd = -1

    def get_file_size(self, file_name: str) -> int:
        """Return the size of a file in bytes, or -1 if it cannot be examined."""
        try:
            return os.stat(file_name).st_size
        except OSError:
            return -1

    def get_file_name(self, fd: int) -> str:
        """Return the path of the open file ``fd``."""
        try:
            return self._fd2path[fd]
        except KeyError:
            raise FileNotOpenError(fd) from None

    def get_file_fd(self, file_name: str) -> int:
        """Return the descriptor of a file, opening it if it is not open."""
        fd = self._path2fd.get(file_name)
        return self.open_file(file_name) if fd is None else fd

    # log

    def _ensure_log_open(self) -> None:
        if self.log_fd == -1:
            self.log_fd = self.open_file(self.log_file_name)

    def read_log(self, size: int, offset: int) -> Optional[bytes]:
        """Read up to ``size`` bytes of the log starting at ``offset``.

        Returns None when ``offset`` lies beyond the end of the log.
        """
        self._ensure_log_open()
        file_size = self.get_file_size(self.log_file_name)
        if offset > file_size:
            return None
        size = min(size, file_size - offset)
        if size == 0:
            return b""
        os.lseek(self.log_fd, offset, os.SEEK_SET)
        data = os.read(self.log_fd, size)
        if len(data) != size:
            raise InternalError("DiskManager::read_log Error")
        return data

    def write_log(self, data: bytes) -> None:
        """Append ``data`` to the end of the log."""
        self._ensure_log_open()
        try:
            os.lseek(self.log_fd, 0, os.SEEK_END)
            written = os.write(self.log_fd, bytes(data))
        except OSError as exc:
            raise UnixError(str(exc)) from exc
        if written != len(data):
            raise UnixError("short write to log")