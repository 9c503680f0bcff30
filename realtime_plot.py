#!/usr/bin/env python3
"""
Realtime line chart of the points captured from STDIN.

Features
--------
- Fixed-size Matplotlib window (680x320 px) with a black background, green
  axes/grid and a green polyline through the series, in arrival order.
- Fixed axis range taken from the command line; no autoscaling.
- Render loop owned by the main thread:
    plotter = RealTimePlotter(store, config)
    plotter.setup()
    plotter.show()
    plotter.run()   # returns once the window is closed or ESC is pressed
- The loop never waits for data: every tick redraws whatever
  SeriesStore.snapshot() currently returns, including an empty series.
"""
from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Callable, Optional

import matplotlib
import matplotlib.pyplot as plt
from matplotlib.lines import Line2D
import numpy as np

from series_store import SeriesStore
from shutdown import DEFAULT_GRACE_PERIOD

W = 680
H = 320
DPI = 100
FRAME_INTERVAL_S = 0.032

BLACK = "#000000"
GREEN = "#00ff00"


@dataclass(frozen=True)
class RuntimeConfig:
    title: str = "Grapher"
    x_min: float = 0.0
    x_max: float = 100.0
    y_min: float = 0.0
    y_max: float = 100.0
    width: int = W
    height: int = H
    frame_interval: float = FRAME_INTERVAL_S
    grace_period: float = DEFAULT_GRACE_PERIOD


def get_window_title(config: RuntimeConfig) -> str:
    return f"{config.title}"


class RealTimePlotter:
    def __init__(self, store: SeriesStore, config: RuntimeConfig):
        self._store = store
        self._config = config

        # Matplotlib elements
        self._fig: Optional[plt.Figure] = None
        self._ax: Optional[plt.Axes] = None
        self._line: Optional[Line2D] = None

        self._close_requested = False
        self.frames_drawn = 0

        # Called once when the window is closed or ESC is pressed.
        self.on_close: Callable[[], None] = lambda: None

    # ---------- Public API ----------
    @property
    def figure(self) -> Optional[plt.Figure]:
        return self._fig

    @property
    def line(self) -> Optional[Line2D]:
        return self._line

    @property
    def closed(self) -> bool:
        if self._close_requested:
            return True
        return self._fig is None or not plt.fignum_exists(self._fig.number)

    def setup(self) -> None:
        """Create the figure and draw the empty chart once.

        Drawing before the reader thread starts means the window has content
        even when STDIN never delivers a line.
        """
        if self._fig is None:
            self._setup_plot()
        self.render_frame()

    def show(self) -> None:
        plt.ion()
        plt.show(block=False)

    def run(self) -> None:
        """Render at a fixed cadence until the window closes or ESC is pressed."""
        if self._fig is None:
            self.setup()
        # The window can go away while a frame is flushed, so look again
        # before every sleep as well as after it.
        while not self.closed:
            # Not corrected for draw time; the cadence is the sleep alone.
            self._fig.canvas.start_event_loop(self._config.frame_interval)
            if self.closed:
                break
            self.render_frame()
        self._notify_close()

    def render_frame(self) -> None:
        points = self._store.snapshot()
        self._refresh_visual(points)
        self._fig.canvas.draw()
        self._fig.canvas.flush_events()
        self.frames_drawn += 1

    def request_close(self) -> None:
        self._close_requested = True

    # ---------- Theme ----------
    def _apply_theme(self) -> None:
        rc = matplotlib.rcParams
        rc.update({
            "figure.facecolor": BLACK,
            "axes.facecolor": BLACK,
            "axes.edgecolor": GREEN,
            "axes.labelcolor": GREEN,
            "text.color": GREEN,
            "xtick.color": GREEN,
            "ytick.color": GREEN,
            "xtick.labelsize": 11,
            "ytick.labelsize": 11,
            "grid.color": GREEN,
            "grid.alpha": 0.2,
            "grid.linewidth": 0.8,
            "axes.grid": True,
            "font.family": "sans-serif",
            "toolbar": "None",
        })
        # No log scale, pan/zoom or home keys; the axis range is fixed.
        # Closing with the quit key still works.
        for key in list(rc):
            if key.startswith("keymap.") and key != "keymap.quit":
                rc[key] = []

    # ---------- Internals ----------
    def _setup_plot(self) -> None:
        self._apply_theme()
        cfg = self._config
        self._fig, self._ax = plt.subplots(figsize=(cfg.width / DPI, cfg.height / DPI), dpi=DPI)

        try:
            self._fig.canvas.manager.set_window_title(get_window_title(cfg))
        except Exception:
            pass

        self._line, = self._ax.plot([], [], lw=1.0, color=GREEN)
        self._ax.set_autoscale_on(False)
        self._ax.set_xlim(cfg.x_min, cfg.x_max)
        self._ax.set_ylim(cfg.y_min, cfg.y_max)
        self._fig.tight_layout(pad=0.8)

        # Event handlers
        self._fig.canvas.mpl_connect("key_press_event", self._on_key_press)
        self._fig.canvas.mpl_connect("close_event", self._on_close_event)

    def _refresh_visual(self, points) -> None:
        data = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        self._line.set_data(data[:, 0], data[:, 1])

    def _notify_close(self) -> None:
        try:
            self.on_close()
        except Exception as e:
            print(f"[on_close error] {e}", file=sys.stderr)

    # ---------- Interactivity ----------
    def _on_key_press(self, event):
        if event.key == "escape":
            self.request_close()

    def _on_close_event(self, _event):
        self.request_close()
