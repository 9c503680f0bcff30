from __future__ import annotations

import os
import sys
import threading
from typing import Callable, Optional

DEFAULT_GRACE_PERIOD = 3.0


class ShutdownCoordinator:
    """Cooperative stop flag plus a watchdog that forces the process out.

    `running` is set while the pipeline runs. `request_stop()` clears it and
    arms a timer; if the reader thread is still blocked on input when the
    timer fires, `exit_func` ends the process. A blocked read cannot be
    interrupted, so shutdown is bounded by the grace period, not immediate.
    """

    def __init__(
        self,
        grace_period: float = DEFAULT_GRACE_PERIOD,
        exit_func: Callable[[int], None] = os._exit,
    ):
        self.grace_period = float(grace_period)
        self._exit_func = exit_func
        self.running = threading.Event()
        self.running.set()
        self._lock = threading.Lock()
        self._watchdog: Optional[threading.Timer] = None

    @property
    def stopping(self) -> bool:
        return not self.running.is_set()

    @property
    def watchdog(self) -> Optional[threading.Timer]:
        return self._watchdog

    def request_stop(self) -> None:
        """Running -> Stopping. Later calls are no-ops."""
        with self._lock:
            if self._watchdog is not None:
                return
            print("[shutdown] Exiting", file=sys.stderr)
            self.running.clear()
            self._watchdog = threading.Timer(self.grace_period, self._expire)
            self._watchdog.daemon = True
            self._watchdog.name = "shutdown-watchdog"
            self._watchdog.start()
            print(f"[shutdown] Waiting (forced exit in {self.grace_period:g}s)", file=sys.stderr)

    def wait_for(self, thread: Optional[threading.Thread]) -> None:
        """Join the reader thread; the watchdog covers the case where it never returns."""
        if thread is not None:
            print("[shutdown] Waiting for reader thread", file=sys.stderr)
            thread.join()
        print("[shutdown] Bye", file=sys.stderr)

    def _expire(self) -> None:
        print("[shutdown] reader thread still blocked on input, forcing exit. Bye", file=sys.stderr)
        sys.stderr.flush()
        self._exit_func(0)
