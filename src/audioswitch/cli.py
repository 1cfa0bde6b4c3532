"""CLI entry point."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, TextIO

from .catalog import DeviceCatalog, UnknownDeviceError
from .config import Config, ConfigError, load_config_or_default, save_config
from .events import ScenarioFormatError, parse_event
from .logging_utils import setup_logging
from .models import builtin_priority
from .renderer import render_legend, render_step, render_timeline
from .session_io import TraceFormatError, load_scenario, load_timeline, save_timeline
from .storage import trace_path
from .strategy import NotConnectedError, create_strategy
from .timeline import Step, Timeline

logger = logging.getLogger("audioswitch")


def _setup(config: Config) -> None:
    setup_logging(
        log_dir=config.log_dir,
        level=logging.DEBUG if config.debug_logging else logging.INFO,
    )


def _load(config_path: str) -> tuple[Config, DeviceCatalog, Timeline]:
    config = load_config_or_default(config_path)
    catalog = DeviceCatalog(config.catalog.to_spec())
    timeline = Timeline(Step.initial(create_strategy(config.strategy)))
    return config, catalog, timeline


def _play(
    timeline: Timeline,
    catalog: DeviceCatalog,
    stream: TextIO,
    out: TextIO,
) -> int:
    print(render_legend(), file=out)
    print(render_step(timeline.position, timeline.current, catalog), file=out)
    for raw in stream:
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        command = line.lower()
        if command in ("quit", "exit"):
            break
        if command == "show":
            print(render_step(timeline.position, timeline.current, catalog), file=out)
            continue
        if command == "history":
            print(render_timeline(timeline, catalog), file=out)
            continue
        try:
            event = parse_event(line)
            timeline.dispatch(event, catalog)
        except (ScenarioFormatError, UnknownDeviceError, NotConnectedError, IndexError) as exc:
            logger.info("Rejected %r: %s", line, exc)
            message = exc.args[0] if isinstance(exc, KeyError) and exc.args else exc
            print(f"Error: {message}", file=out)
            continue
        print(render_step(timeline.position, timeline.current, catalog), file=out)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="audioswitch")
    sub = parser.add_subparsers(dest="command")

    devices_cmd = sub.add_parser("devices")
    devices_cmd.add_argument("--config", default="audioswitch_config.yml", help="Config.")
    devices_cmd.add_argument("--match", help="Filter device names by substring.")

    run_cmd = sub.add_parser("run")
    run_cmd.add_argument("scenario", help="Path to a YAML scenario file.")
    run_cmd.add_argument("--config", default="audioswitch_config.yml", help="Config.")
    run_cmd.add_argument("--title", default="Timeline", help="Trace title.")
    run_cmd.add_argument("--out", help="Write the timeline trace to this JSON file.")
    run_cmd.add_argument("--out-dir", help="Write a timestamped trace into this directory.")
    run_cmd.add_argument(
        "--quiet",
        action="store_true",
        help="Only print the final step.",
    )

    play_cmd = sub.add_parser("play")
    play_cmd.add_argument("--config", default="audioswitch_config.yml", help="Config.")

    show_cmd = sub.add_parser("show")
    show_cmd.add_argument("path", help="Path to a .timeline.json trace.")

    config_cmd = sub.add_parser("config")
    config_cmd.add_argument(
        "--path", default="audioswitch_config.yml", help="Where to write the config."
    )

    args = parser.parse_args(argv)

    if args.command == "devices":
        try:
            config = load_config_or_default(args.config)
        except (OSError, ConfigError) as exc:
            logger.error("Config load failed: %s", exc)
            print(f"Error: {exc}")
            return 1
        catalog = DeviceCatalog(config.catalog.to_spec())
        for device in catalog:
            if args.match and args.match.lower() not in device.name.lower():
                continue
            print(f"{device.name} (type: {device.type.value}, priority: {builtin_priority(device)})")
        return 0

    if args.command == "run":
        try:
            config, catalog, timeline = _load(args.config)
        except (OSError, ValueError) as exc:
            logger.error("Config load failed: %s", exc)
            print(f"Error: {exc}")
            return 1
        _setup(config)
        try:
            events = load_scenario(args.scenario)
        except (OSError, ScenarioFormatError) as exc:
            logger.error("Scenario load failed: %s", exc)
            print(f"Error: {exc}")
            return 1

        logger.info("Running %s (%s events)", args.scenario, len(events))
        for number, event in enumerate(events, start=1):
            try:
                timeline.dispatch(event, catalog)
            except (UnknownDeviceError, NotConnectedError, IndexError) as exc:
                logger.exception("Event %s (%s) failed", number, event.describe())
                message = exc.args[0] if isinstance(exc, KeyError) and exc.args else exc
                print(f"Error: event {number} ({event.describe()}): {message}")
                return 1

        if args.quiet:
            print(render_step(timeline.position, timeline.current, catalog))
        else:
            print(render_timeline(timeline, catalog), end="")

        out_path = args.out
        if not out_path and args.out_dir:
            out_path = trace_path(args.out_dir, args.title)
        if out_path:
            save_timeline(out_path, timeline)
            print(f"Wrote {out_path}")
        logger.info("Finished %s with %s steps", args.scenario, len(timeline))
        return 0

    if args.command == "play":
        try:
            config, catalog, timeline = _load(args.config)
        except (OSError, ValueError) as exc:
            logger.error("Config load failed: %s", exc)
            print(f"Error: {exc}")
            return 1
        _setup(config)
        return _play(timeline, catalog, sys.stdin, sys.stdout)

    if args.command == "show":
        try:
            records = load_timeline(args.path)
        except (OSError, TraceFormatError) as exc:
            logger.error("Trace load failed: %s", exc)
            print(f"Error: {args.path}: {exc}")
            return 1
        for record in records:
            active = record.active or "(none)"
            connected = ", ".join(record.connected) or "(none)"
            preference = " > ".join(record.preference) or "(empty)"
            print(f"{record.index}. {record.label}")
            print(f"   connected: {connected}")
            print(f"   active: {active}")
            print(f"   preference: {preference}")
        return 0

    if args.command == "config":
        save_config(args.path, Config())
        print(f"Wrote {args.path}")
        return 0

    parser.print_help()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
