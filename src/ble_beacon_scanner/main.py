"""Entry point for the beacon scanner.

This module runs the scanner as a standalone command. It handles:
- Logging configuration
- Signal handling for graceful shutdown
- Printing a summary for every newly discovered beacon

Usage:
    python -m ble_beacon_scanner
    # or
    ble-beacon-scan  (if installed via pip/uv)
"""

import argparse
import asyncio
import logging
import signal
import sys

from .registry import RegistryEvent, Updated
from .render import format_event
from .scanner import DEFAULT_ADAPTER, BeaconScanner, ScannerConfig, ScannerConfigError
from .session import ScanSession

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the application.

    Args:
        verbose: If True, set log level to DEBUG; otherwise INFO
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        description="Scan for iBeacon, Eddystone and RuuviTag advertisements",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Recognized advertisements (first match wins):
    iBeacon          Apple manufacturer data (0x004C)
    Eddystone        UID, URL and TLM frames (service 0xFEAA)
    RuuviTag         RAWv2 manufacturer data (0x0499)
    GATT service     Battery, Environmental Sensing, Heart Rate service data

Examples:
    # Scan until Ctrl+C
    python -m ble_beacon_scanner

    # Scan for 30 seconds and show RSSI updates
    python -m ble_beacon_scanner --duration 30 --show-updates

    # Use a specific Bluetooth adapter
    python -m ble_beacon_scanner --adapter hci1
        """,
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose (debug) logging",
    )
    parser.add_argument(
        "--adapter",
        default=DEFAULT_ADAPTER,
        help=f"Bluetooth adapter to use on Linux (default: {DEFAULT_ADAPTER})",
    )
    parser.add_argument(
        "--duration",
        type=float,
        metavar="SECONDS",
        help="Stop after this many seconds (default: run until interrupted)",
    )
    parser.add_argument(
        "--show-updates",
        action="store_true",
        help="Print a line for every RSSI update of a known beacon",
    )
    return parser.parse_args(argv)


def make_event_printer(show_updates: bool):
    """Return an on_event callback that prints events to stdout."""

    def print_event(event: RegistryEvent) -> None:
        if isinstance(event, Updated) and not show_updates:
            return
        text = format_event(event)
        if text is not None:
            print(text, flush=True)

    return print_event


async def async_main(config: ScannerConfig, show_updates: bool) -> None:
    """Async entry point with signal handling.

    Args:
        config: Scanner configuration
        show_updates: Whether to print RSSI updates
    """
    session = ScanSession()
    scanner = BeaconScanner(session, make_event_printer(show_updates), config)

    loop = asyncio.get_running_loop()
    task = asyncio.current_task()

    def signal_handler(sig: signal.Signals) -> None:
        logger.info(f"[MAIN] Received signal {sig.name}, initiating shutdown...")
        task.cancel()

    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, signal_handler, sig)
        except NotImplementedError:
            # Windows event loops: rely on KeyboardInterrupt instead
            pass

    try:
        await scanner.run_forever()
    except Exception as e:
        logger.error(f"[MAIN] Error during scanning: {e}")
        raise
    finally:
        logger.info("[MAIN] Shutdown complete")


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the beacon scanner."""
    args = parse_args(argv)
    setup_logging(verbose=args.verbose)

    logger.info("[MAIN] Starting beacon scanner...")

    try:
        config = ScannerConfig(adapter=args.adapter, duration=args.duration)
    except ScannerConfigError as e:
        logger.error(f"[MAIN] {e}")
        sys.exit(1)

    logger.info(f"[MAIN]   Adapter: {config.adapter}")
    if config.duration is not None:
        logger.info(f"[MAIN]   Duration: {config.duration:g} s")

    try:
        asyncio.run(async_main(config, args.show_updates))
    except KeyboardInterrupt:
        logger.info("[MAIN] Interrupted")
    except Exception as e:
        logger.error(f"[MAIN] Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
