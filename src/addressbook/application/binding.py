"""The single mutable reference to where a store persists."""

import threading
from collections.abc import Callable
from pathlib import Path


class StorageBinding:
    """Current persistence location of one ContactStore.

    swap() replaces the location and runs the reload for it; two swaps may not
    interleave, whether nested or from another thread. Owned by exactly one store.
    """

    def __init__(self, location: str | Path) -> None:
        self._location = Path(location)
        self._swapping = threading.Lock()

    @property
    def current(self) -> Path:
        return self._location

    def swap(self, location: str | Path, reload: Callable[[Path], bool]) -> bool:
        """Point at location and reload from it. Returns the reload's success flag."""
        if not self._swapping.acquire(blocking=False):
            raise RuntimeError("Storage rebind already in progress.")
        try:
            self._location = Path(location)
            return reload(self._location)
        finally:
            self._swapping.release()
