#!/usr/bin/env python3
# grapher: plot numbers captured from STDIN lines in a live window.
#
#   tail -f app.log | grapher -r "latency=(\d+)" --y_max 500
#   ./bench | grapher -r "(\d+),(\d+)" -c 12 --reset_regex "^RESTART"

import argparse
import sys
from typing import List, Optional

from capture import CaptureConfigError, CaptureEngine, CaptureSpec
from realtime_plot import RealTimePlotter, RuntimeConfig
from series_store import SeriesStore
from shutdown import ShutdownCoordinator
from stdin_reader import StdinReader

DEFAULT_TITLE = "Grapher"
DEFAULT_CAPTURE = "1"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="grapher",
        description="Capture numbers from STDIN lines with a regex and plot them live.",
    )
    parser.add_argument(
        "-r", "--regex", required=True,
        help="Regex with 1 or 2 groups containing a number; see --capture.",
    )
    parser.add_argument("-t", "--title", dest="window_title", default=DEFAULT_TITLE, help="Title of the window.")
    parser.add_argument("--x_min", type=float, default=0.0, help="Minimum x coordinate for the graph.")
    parser.add_argument("--x_max", type=float, default=100.0, help="Maximum x coordinate for the graph.")
    parser.add_argument("--y_min", type=float, default=0.0, help="Minimum y coordinate for the graph.")
    parser.add_argument("--y_max", type=float, default=100.0, help="Maximum y coordinate for the graph.")
    parser.add_argument(
        "-c", "--capture", dest="capture_method", default=DEFAULT_CAPTURE,
        help=(
            "How numbers are taken from the regex groups. "
            "'1': first group is y, number of matched lines is x. "
            "'-1': first group is x, number of matched lines is y. "
            "'12': first group is x, second group is y. "
            "'21': first group is y, second group is x."
        ),
    )
    parser.add_argument("--reset_regex", default=None, help="Clear the graph when a line matches this regex.")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    # Everything that can be wrong with the configuration is found here,
    # before a window or thread exists.
    try:
        spec = CaptureSpec.parse(args.regex, args.reset_regex, args.capture_method)
    except CaptureConfigError as e:
        print(f"[grapher] {e}", file=sys.stderr)
        return 1
    print(f"[grapher] {spec.mode.description}", file=sys.stderr)

    config = RuntimeConfig(
        title=args.window_title,
        x_min=args.x_min,
        x_max=args.x_max,
        y_min=args.y_min,
        y_max=args.y_max,
    )

    store = SeriesStore()
    coordinator = ShutdownCoordinator(grace_period=config.grace_period)

    plotter = RealTimePlotter(store, config)
    plotter.on_close = coordinator.request_stop
    plotter.setup()
    plotter.show()

    reader = StdinReader(CaptureEngine(spec), store, coordinator.running)
    thread = reader.start()

    status = 0
    try:
        plotter.run()
    except KeyboardInterrupt:
        print("\n[grapher] interrupted", file=sys.stderr)
    except Exception as e:
        print(f"[grapher] render loop failed: {e!r}", file=sys.stderr)
        status = 1
    finally:
        coordinator.request_stop()
        coordinator.wait_for(thread)
    return status


if __name__ == "__main__":
    raise SystemExit(main())
