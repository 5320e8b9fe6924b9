"""Exceptions raised by the storage layer."""

from __future__ import annotations


class RmdbError(Exception):
    """Base class of every error the database reports."""

    def __init__(self, msg: str) -> None:
        super().__init__(msg)
        self.msg = msg

    def __str__(self) -> str:
        return self.msg


class InternalError(RmdbError):
    """An operation failed in a way that should not happen."""

    def __init__(self, msg: str) -> None:
        super().__init__(f"Internal Error: {msg}")


class UnixError(RmdbError):
    """A call into the operating system failed."""

    def __init__(self, msg: str = "") -> None:
        super().__init__(f"Unix Error: {msg}" if msg else "Unix Error")


class FileAlreadyExistsError(RmdbError):
    """A file that was to be created is already there."""

    def __init__(self, path: str) -> None:
        super().__init__(f"File already exists: {path}")
        self.path = path


class FileMissingError(RmdbError):
    """A file that was to be opened or removed does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(f"File not found: {path}")
        self.path = path


class FileNotOpenError(RmdbError):
    """A file descriptor does not belong to any open file."""

    def __init__(self, fd: int) -> None:
        super().__init__(f"File not opened: fd={fd}")
        self.fd = fd


class FileInUseError(RmdbError):
    """A file is open where it must not be, or opened a second time."""

    def __init__(self, path: str) -> None:
        super().__init__(f"File is currently open: {path}")
        self.path = path


class PageNotExistError(RmdbError):
    """A page number does not name a page of a table file."""

    def __init__(self, table_name: str, page_no: int) -> None:
        super().__init__(f"Page {page_no} does not exist in table {table_name}")
        self.table_name = table_name
        self.page_no = page_no


class InvalidRecordSizeError(RmdbError):
    """A record size lies outside the range a table file accepts."""

    def __init__(self, record_size: int) -> None:
        super().__init__(f"Invalid record size: {record_size}")
        self.record_size = record_size