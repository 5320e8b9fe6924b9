"""Policies that choose which buffer pool frame to evict."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from collections import OrderedDict
from typing import Optional


class Replacer(ABC):
    """Tracks which frames may be evicted and picks the next one to go."""

    @abstractmethod
    def victim(self) -> Optional[int]:
        """Remove and return the frame to evict, or None if no frame can be evicted."""

    @abstractmethod
    def pin(self, frame_id: int) -> None:
        """Mark a frame as in use, so that it is not evicted until unpinned."""

    @abstractmethod
    def unpin(self, frame_id: int) -> None:
        """Mark a frame as evictable."""

    @abstractmethod
    def size(self) -> int:
        """Return the number of frames that can currently be evicted."""

    def __len__(self) -> int:
        return self.size()


class LRUReplacer(Replacer):
    """Evicts the frame that has been evictable for the longest time."""

    def __init__(self, num_pages: int) -> None:
        self.max_size = num_pages
        # Oldest entry first; the most recently unpinned frame is at the end.
        self._frames: OrderedDict[int, None] = OrderedDict()
        self._lock = threading.Lock()

    def victim(self) -> Optional[int]:
        with self._lock:
            if not self._frames:
                return None
            frame_id, _ = self._frames.popitem(last=False)
            return frame_id

    def pin(self, frame_id: int) -> None:
        with self._lock:
            self._frames.pop(frame_id, None)

    def unpin(self, frame_id: int) -> None:
        with self._lock:
            if frame_id not in self._frames:
                self._frames[frame_id] = None

    def size(self) -> int:
        with self._lock:
            return len(self._frames)