"""Frame-synchronised callback scheduling."""

from __future__ import annotations

from typing import Callable
import itertools

FrameCallback = Callable[[], None]


class FrameScheduler:
    """One-shot callbacks that run on the next display refresh.

    The run loop calls ``dispatch`` once per frame. A callback that wants to
    keep running requests itself again; that request lands on the following
    frame, never the current one.
    """

    def __init__(self) -> None:
        self._callbacks: dict[int, FrameCallback] = {}
        self._handles = itertools.count(1)

    def request(self, callback: FrameCallback) -> int:
        """Queue a callback for the next frame and return its handle."""
        handle = next(self._handles)
        self._callbacks[handle] = callback
        return handle

    def cancel(self, handle: int | None) -> None:
        """Drop a queued callback. Unknown or spent handles are ignored."""
        if handle is None:
            return
        self._callbacks.pop(handle, None)

    @property
    def pending(self) -> int:
        return len(self._callbacks)

    def dispatch(self) -> int:
        """Run everything queued before this frame began."""
        due = list(self._callbacks)
        ran = 0
        for handle in due:
            # An earlier callback in this frame may have cancelled it.
            callback = self._callbacks.pop(handle, None)
            if callback is None:
                continue
            callback()
            ran += 1
        return ran
