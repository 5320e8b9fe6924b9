"""Bit-per-slot occupancy maps stored in byte buffers."""

from __future__ import annotations

from typing import Union

BITMAP_WIDTH = 8
BITMAP_HIGHEST_BIT = 0x80

Buffer = Union[bytearray, memoryview]


def _bucket(pos: int) -> int:
    return pos // BITMAP_WIDTH


def _mask(pos: int) -> int:
    return BITMAP_HIGHEST_BIT >> (pos % BITMAP_WIDTH)


def init(bm: Buffer) -> None:
    """Clear every bit of ``bm``."""
    bm[:] = bytes(len(bm))


def set_bit(bm: Buffer, pos: int) -> None:
    """Set bit ``pos`` to 1."""
    bm[_bucket(pos)] |= _mask(pos)


def reset_bit(bm: Buffer, pos: int) -> None:
    """Set bit ``pos`` to 0."""
    bm[_bucket(pos)] &= ~_mask(pos) & 0xFF


def is_set(bm: Union[bytes, Buffer], pos: int) -> bool:
    """Whether bit ``pos`` is 1."""
    return bm[_bucket(pos)] & _mask(pos) != 0


def next_bit(bit: bool, bm: Union[bytes, Buffer], max_n: int, curr: int) -> int:
    """Return the first position in ``[curr + 1, max_n)`` whose bit equals ``bit``.

    Returns ``max_n`` when there is none.
    """
    return next(
        (pos for pos in range(curr + 1, max_n) if is_set(bm, pos) == bit),
        max_n,
    )


def first_bit(bit: bool, bm: Union[bytes, Buffer], max_n: int) -> int:
    """Return the first position below ``max_n`` whose bit equals ``bit``."""
    return next_bit(bit, bm, max_n, -1)