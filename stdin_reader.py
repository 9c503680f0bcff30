"""
Background reader: feeds lines from STDIN through a CaptureEngine into a SeriesStore.

Reads are blocking, so the keep-running event is only looked at between
lines. A reader stuck waiting for input that never arrives cannot notice a
shutdown request; see shutdown.ShutdownCoordinator for how that is handled.
"""
from __future__ import annotations

import sys
import threading
from typing import BinaryIO, Callable, Optional

from capture import CaptureArityError, CaptureEngine
from series_store import SeriesStore


class StdinReader:
    def __init__(
        self,
        engine: CaptureEngine,
        store: SeriesStore,
        running: threading.Event,
        stream: Optional[BinaryIO] = None,
    ):
        self._engine = engine
        self._store = store
        self._running = running
        self._stream = stream
        self._thread: Optional[threading.Thread] = None

        # Number of captured lines; x (or y) axis for single-group modes.
        self.line_number = 0.0

        # Callback invoked for each captured point
        # Signature: on_point(x: float, y: float, line: str) -> None
        self.on_point: Callable[[float, float, str], None] = (
            lambda x, y, line: print(f"[stdin reader] x, y = {x} {y} -> {line!r}", file=sys.stderr)
        )

    def start(self) -> threading.Thread:
        """Run the reader on a daemon thread and return it."""
        if self._thread is None:
            self._thread = threading.Thread(target=self.run, name="stdin-reader", daemon=True)
            self._thread.start()
        return self._thread

    def run(self) -> None:
        print("[stdin reader] Starting reader thread.", file=sys.stderr)
        stream = self._stream if self._stream is not None else sys.stdin.buffer
        for raw in stream:
            try:
                line = raw.decode("utf-8")
            except UnicodeDecodeError as e:
                print(f"[stdin reader] skipping undecodable line {raw!r}: {e}", file=sys.stderr)
            else:
                self.process_line(line.rstrip("\r\n"))

            if not self._running.is_set():
                print("[stdin reader] Will stop reading from stdin", file=sys.stderr)
                break
        else:
            print("[stdin reader] end of input", file=sys.stderr)

    def process_line(self, line: str) -> None:
        """Capture a point from `line` (if any), then apply the reset regex."""
        try:
            point = self._engine.capture(line, self.line_number)
        except CaptureArityError as e:
            print(f"[stdin reader] Error: {e} -> {line!r}", file=sys.stderr)
            point = None

        if point is not None:
            self.line_number += 1.0
            self._store.append(point)
            try:
                self.on_point(point[0], point[1], line)
            except Exception as e:
                print(f"[on_point error] {e}", file=sys.stderr)

        if self._engine.is_reset(line):
            print(f"[stdin reader] Clearing -> {line!r}", file=sys.stderr)
            self._store.clear()
