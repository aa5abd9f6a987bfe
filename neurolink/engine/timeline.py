"""
Cancellable timers for the session scheduler

Both timelines wrap ``sched.scheduler`` so scheduled callbacks are explicit,
cancellable events. ``RealTimeline`` runs them on a single worker thread in
wall-clock time; ``VirtualTimeline`` runs them only when ``advance`` is called,
which makes timer behaviour deterministic in tests and fast replays.
"""

import logging
import sched
import threading
import time
from typing import Callable, Optional


class Timeline:
    """Common timer operations over a ``sched.scheduler``"""

    def __init__(self, timefunc: Callable[[], float], delayfunc: Callable[[float], None]):
        self._scheduler = sched.scheduler(timefunc, delayfunc)

    def now(self) -> float:
        return self._scheduler.timefunc()

    def call_later(self, delay: float, callback: Callable[[], None]) -> sched.Event:
        """Schedule ``callback`` to run once after ``delay`` seconds"""
        return self._scheduler.enter(delay, 0, callback)

    def cancel(self, handle: Optional[sched.Event]) -> bool:
        """
        Cancel a pending callback

        Cancelling ``None``, an event that already ran, or one cancelled before
        is a no-op.

        Returns:
            bool: True if a pending event was removed
        """
        if handle is None:
            return False
        try:
            self._scheduler.cancel(handle)
            return True
        except ValueError:
            return False

    def pending(self) -> int:
        return len(self._scheduler.queue)

    def start(self) -> None:
        pass

    def shutdown(self) -> None:
        pass


class VirtualTimeline(Timeline):
    """
    Manually advanced clock

    Time only moves inside ``advance``; every callback due up to the target
    time runs in order, including callbacks scheduled by earlier ones.
    """

    def __init__(self, start: float = 0.0):
        self._now = float(start)
        super().__init__(self._time, self._sleep)

    def _time(self) -> float:
        return self._now

    def _sleep(self, seconds: float) -> None:
        if seconds > 0:
            self._now += seconds

    def advance(self, seconds: float) -> None:
        if seconds < 0:
            raise ValueError(f"Cannot advance by a negative duration: {seconds}")
        target = self._now + seconds
        while True:
            queue = self._scheduler.queue
            if not queue or queue[0].time > target:
                break
            self._now = max(self._now, queue[0].time)
            self._scheduler.run(blocking=False)
        self._now = target


class RealTimeline(Timeline):
    """
    Wall-clock timeline with a single worker thread

    Callbacks never overlap: they all run on the worker thread, one at a time.
    """

    def __init__(self, poll_interval: float = 0.05):
        super().__init__(time.monotonic, time.sleep)
        self.poll_interval = poll_interval
        self._wakeup = threading.Event()
        self._shutdown = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def call_later(self, delay: float, callback: Callable[[], None]) -> sched.Event:
        event = super().call_later(delay, callback)
        self._wakeup.set()
        return event

    def start(self) -> None:
        if self._thread is not None and self._thread.is_alive():
            return
        self._shutdown.clear()
        self._thread = threading.Thread(target=self._run, name="neurolink-timeline", daemon=True)
        self._thread.start()
        logging.debug("Timeline worker started")

    def _run(self) -> None:
        while not self._shutdown.is_set():
            deadline = self._scheduler.run(blocking=False)
            if self._shutdown.is_set():
                break
            timeout = self.poll_interval if deadline is None else min(deadline, self.poll_interval)
            self._wakeup.wait(timeout)
            self._wakeup.clear()

    def shutdown(self) -> None:
        self._shutdown.set()
        self._wakeup.set()
        thread = self._thread
        if thread is None or thread is threading.current_thread():
            return
        thread.join(timeout=2.0)
        if thread.is_alive():
            logging.warning("Timeline worker did not exit within 2s")
            return
        self._thread = None
        logging.debug("Timeline worker stopped")
