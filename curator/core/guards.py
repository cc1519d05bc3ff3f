import threading
from contextlib import contextmanager
from typing import Iterator, Optional


class ActionBusy(RuntimeError):
    """Raised when an action of the same kind is already in flight."""

    def __init__(self, action: str):
        super().__init__(f"'{action}' is already in progress")
        self.action = action


class ActionGuard:
    """Single-flight guard for one action kind.

    ``try_begin`` is a compare-and-set: the non-blocking acquire either wins
    and hands out a fresh epoch, or fails immediately. Only the holder of the
    current epoch can release the guard.
    """

    def __init__(self, action: str) -> None:
        self.action = action
        self._flight = threading.Lock()
        self._state = threading.Lock()
        self._epoch = 0
        self._active_epoch: Optional[int] = None

    @property
    def epoch(self) -> int:
        with self._state:
            return self._epoch

    @property
    def in_flight(self) -> bool:
        with self._state:
            return self._active_epoch is not None

    def try_begin(self) -> Optional[int]:
        if not self._flight.acquire(blocking=False):
            return None
        with self._state:
            self._epoch += 1
            self._active_epoch = self._epoch
            return self._epoch

    def end(self, epoch: int) -> bool:
        with self._state:
            if self._active_epoch != epoch:
                return False
            self._active_epoch = None
        self._flight.release()
        return True

    @contextmanager
    def hold(self) -> Iterator[int]:
        epoch = self.try_begin()
        if epoch is None:
            raise ActionBusy(self.action)
        try:
            yield epoch
        finally:
            self.end(epoch)


__all__ = ["ActionBusy", "ActionGuard"]
