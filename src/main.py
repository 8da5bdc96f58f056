"""Application entrypoint for the critical threshold monitor."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional, Sequence

from config import Config, load_config
from core.registry import SensorRegistry
from core.thresholds import describe_kinds
from dbus_io import DbusTransport
from infra import ConfigurationError, SetupError, TransportError, configure_logging, install_exception_hook
from services import ActionDispatcher, RemoteCaller, SensorResolver, SignalFilter, SignalHandler
from state_machine import EventLoop

logger = logging.getLogger("app.main")


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Watch sensor critical thresholds on D-Bus and request a chassis power-off on assertion."
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a YAML/JSON configuration file. Built-in defaults are used when omitted.",
    )
    parser.add_argument(
        "--bus",
        type=str,
        default=None,
        help="Override the bus to connect to: 'system', 'session' or a D-Bus address.",
    )
    parser.add_argument(
        "--check-config",
        action="store_true",
        help="Validate the configuration, print the subscription rule and exit.",
    )
    return parser.parse_args(argv)


def build_handler(config: Config, transport: RemoteCaller) -> tuple[SignalFilter, SignalHandler]:
    registry = SensorRegistry(config.sensors)
    resolver = SensorResolver(registry, mode=config.monitor.mode, global_kinds=config.monitor.global_kinds)
    if resolver.mode == "global":
        logger.warning(
            "Global classification mode: watching %s on every sender; per-sensor settings are ignored.",
            describe_kinds(config.monitor.global_kinds),
        )
    else:
        registry.log_summary()

    signal_filter = SignalFilter()
    dispatcher = ActionDispatcher(transport, config.action)
    return signal_filter, SignalHandler(signal_filter, resolver, dispatcher)


def bootstrap(config: Config) -> int:
    install_exception_hook()

    transport = DbusTransport(config.bus)
    try:
        signal_filter, handler = build_handler(config, transport)
    except ConfigurationError as exc:
        logger.critical("%s", exc)
        return 1

    try:
        transport.open()
        transport.add_match(signal_filter.match_rule(), handler)
    except SetupError as exc:
        logger.critical("%s", exc)
        transport.close()
        return 1

    loop = EventLoop(transport)
    try:
        loop.run()
    except TransportError:
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted by user (Ctrl+C).")
        return 0
    finally:
        transport.close()
        logger.info("Shutdown complete.")
    return 1


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    try:
        config = load_config(args.config)
    except ConfigurationError as exc:
        print(f"Cannot load configuration: {exc}", file=sys.stderr)
        sys.exit(1)

    if args.bus:
        config = _with_bus_address(config, args.bus)

    configure_logging(config.logging)
    logger.info("Configuration loaded from %s", args.config or "built-in defaults")

    if args.check_config:
        try:
            SensorRegistry(config.sensors)
        except ConfigurationError as exc:
            logger.error("%s", exc)
            sys.exit(1)
        print(SignalFilter().match_rule())
        return

    sys.exit(bootstrap(config))


def _with_bus_address(config: Config, address: str) -> Config:
    return replace(config, bus=replace(config.bus, address=address))


if __name__ == "__main__":
    main()
