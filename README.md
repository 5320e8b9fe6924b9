# rucstore

The storage layer of a small teaching relational database, written in
plain Python with no third-party dependencies.

## Modules

- `rucstore.ast` defines the SQL syntax tree node classes. Examples are
  `CreateTable`, `SelectStmt`, `BinaryExpr` and `OrderBy`. It also defines the
  enums they use: `SvType`, `SvCompOp`, `OrderByDir` and `JoinType`.
- `rucstore.printer` renders a tree as indented text, through `format_tree`
  (returns a string) and `print_tree` (writes to a file, standard output by
  default).
- `rucstore.page` holds fixed-size 4096-byte pages and their identifiers,
  `PageId` and `Page`.
- `rucstore.disk_manager` provides `DiskManager`. It reads and writes pages of
  files, creates, opens, closes and removes files and directories, tracks
  which files are open, hands out page numbers, and appends raw bytes to and
  reads raw bytes from a log file (`db.log` by default).
- `rucstore.replacer` provides the replacement policy: the `Replacer`
  interface and an `LRUReplacer`.
- `rucstore.buffer_pool` provides `BufferPoolManager`, which caches pages in a
  fixed number of frames and handles fetching, pinning, unpinning, flushing and
  deleting them. `fetch_page` and `new_page` return `None` when every frame is
  pinned.
- `rucstore.bitmap` has the helpers for per-page slot bitmaps: `set_bit`,
  `reset_bit`, `is_set`, `next_bit` and `first_bit`.
- `rucstore.record`, `rucstore.file_handle`, `rucstore.scan` and
  `rucstore.record_manager` manage fixed-size records in table files. They
  provide `Rid`, `RmRecord`, `RmManager`, `RmFileHandle` and `RmScan`.
- `rucstore.errors` defines the exception hierarchy, rooted at `RmdbError`.

## Install

```
pip install .
```

## Example

```python
from rucstore.disk_manager import DiskManager
from rucstore.buffer_pool import BufferPoolManager
from rucstore.record_manager import RmManager
from rucstore.scan import RmScan

disk = DiskManager()
pool = BufferPoolManager(64, disk)
records = RmManager(disk, pool)

records.create_file("people.tbl", 8)
handle = records.open_file("people.tbl")
rid = handle.insert_record(b"alice\0\0\0")
print(handle.get_record(rid).data)

for rid in RmScan(handle):
    print(rid)

records.close_file(handle)
```

Records must be exactly the record size the file was created with; record
sizes from 1 to 512 bytes are accepted. `RmScan` can also be driven by hand
with `is_end()`, `rid()` and `next()`.

Printing a syntax tree:

```python
from rucstore import ast
from rucstore.printer import format_tree

tree = ast.DropTable("tb")
print(format_tree(tree))
```

## What it does not do

This package is storage only. It has no SQL parser: syntax trees are built by
constructing the `rucstore.ast` classes directly. It does not plan or execute
queries, has no transactions, locking or structured log records, does no crash
recovery, and runs no server or interactive shell. The log file support in
`DiskManager` stores and returns bytes without interpreting them.

## Tests

```
pip install .[test]
pytest
```