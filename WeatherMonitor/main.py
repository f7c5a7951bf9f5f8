"""Terminal weather monitoring dashboard."""
import argparse
import logging
import os
import signal
import sys
import threading
from typing import Optional, TextIO

from config import BASE_DIR, CITIES, Config, find_city, load_config
from dashboard_view import format_weekly, render_dashboard
from openweather_provider import OpenWeatherProvider
from poll_controller import PollingController
from storage import JsonFileStore, KeyValueStore, MemoryStore, ReadingStore
from trend_chart import save_trend_chart

DEFAULT_LOG_FILE = os.path.join(BASE_DIR, "weather-monitor.log")

HELP_TEXT = """Commands:
  city <name>        switch city ({cities})
  threshold <value>  set alert threshold in °C
  summary            show weekly summaries
  cities             list available cities
  quit               stop monitoring"""


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser("Weather monitoring dashboard")
    parser.add_argument("--log-file", default=DEFAULT_LOG_FILE)
    parser.add_argument("--city", help="Initial city (overrides WEATHER_CITY)")
    parser.add_argument("--threshold", type=float, help="Alert threshold in °C")
    parser.add_argument("--interval", type=float, help="Seconds between polls")
    parser.add_argument("--store", help="Path of the JSON reading store")
    parser.add_argument("--memory-store", action="store_true", help="Keep readings in memory only")
    parser.add_argument("--chart", help="Write the trend chart PNG here after each poll")
    parser.add_argument("--timeout", type=int, default=10, help="HTTP timeout in seconds")
    parser.add_argument("--once", action="store_true", help="Poll once, print the dashboard and exit")
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def setup_logging(log_file: str, verbose: bool) -> None:
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(log_file)
        ]
    )


def apply_overrides(config: Config, args: argparse.Namespace) -> Config:
    if args.city:
        city = find_city(args.city)
        if city is None:
            raise SystemExit(f"Unknown city: {args.city}")
        config.city = city
    if args.threshold is not None:
        config.threshold = args.threshold
    if args.interval is not None:
        if args.interval <= 0:
            raise SystemExit("--interval must be positive")
        config.interval_seconds = args.interval
    if args.store:
        config.store_path = args.store
    return config


def build_controller(config: Config, args: argparse.Namespace) -> PollingController:
    store: KeyValueStore
    if args.memory_store:
        store = MemoryStore()
    else:
        store = JsonFileStore(config.store_path)
    provider = OpenWeatherProvider(api_key=config.api_key, timeout=args.timeout)
    controller = PollingController(
        provider=provider,
        reading_store=ReadingStore(store),
        city=config.city,
        threshold=config.threshold,
        interval_seconds=config.interval_seconds,
    )
    logging.info("Polling controller ready (interval=%ss)", config.interval_seconds)
    return controller


def make_dashboard_listener(out: TextIO, chart_path: Optional[str]):
    def on_update(controller: PollingController) -> None:
        out.write(render_dashboard(controller) + "\n\n")
        out.flush()
        if chart_path:
            save_trend_chart(controller.trend_points(), chart_path)
    return on_update


def handle_command(line: str, controller: PollingController, out: TextIO) -> bool:
    """
    Apply one dashboard command.

    Returns:
        False when the user asked to quit, True otherwise
    """
    parts = line.strip().split(maxsplit=1)
    if not parts:
        return True
    command = parts[0].lower()
    arg = parts[1] if len(parts) > 1 else ""

    if command in ("quit", "exit", "q"):
        return False
    if command == "city":
        city = find_city(arg)
        if city is None:
            out.write(f"Unknown city: {arg!r}\n")
        else:
            controller.select_city(city)
    elif command == "threshold":
        try:
            controller.set_threshold(float(arg))
        except ValueError:
            out.write(f"Invalid threshold: {arg!r}\n")
    elif command == "summary":
        out.write("\n".join(format_weekly(controller.aggregator.summarize_week(controller.city.name))) + "\n")
    elif command == "cities":
        out.write(", ".join(c.name for c in CITIES) + "\n")
    else:
        out.write(HELP_TEXT.format(cities=", ".join(c.name for c in CITIES)) + "\n")
    out.flush()
    return True


def command_loop(controller: PollingController, stdin: TextIO, out: TextIO) -> bool:
    """Read commands until quit (returns True) or end of input (returns False)."""
    for line in stdin:
        if not handle_command(line, controller, out):
            return True
    return False


def signal_handler(signum, frame):
    logging.info("Received signal %s, shutting down", signum)
    raise KeyboardInterrupt()


def main(argv=None) -> None:
    args = parse_args(argv)
    setup_logging(args.log_file, args.verbose)
    config = apply_overrides(load_config(), args)
    controller = build_controller(config, args)
    controller.add_listener(make_dashboard_listener(sys.stdout, args.chart))

    if args.once:
        if not controller.poll_once():
            raise SystemExit(f"Poll failed: {controller.last_error}")
        return

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    controller.start()
    try:
        if not command_loop(controller, sys.stdin, sys.stdout):
            # no interactive input; keep polling until signalled
            threading.Event().wait()
    except KeyboardInterrupt:
        logging.info("Stopping dashboard")
    finally:
        controller.stop()


if __name__ == "__main__":
    main()
