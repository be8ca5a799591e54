"""CLI interface for uptimed."""

from __future__ import annotations

import argparse
import logging
import logging.handlers
import signal
import sys

from . import __version__
from .config import STATSD_PORT, LoggingConfig, TargetConfig, load_settings
from .errors import ConfigError, UptimedError

logger = logging.getLogger(__name__)

USAGE = f"""\
Usage: uptimed [options] statsd-server namespace filesystem network-interface

Stats are read from the running kernel (see
https://www.kernel.org/doc/html/latest/filesystems/proc.html) and sent once
per minute as statsd gauges to statsd-server:{STATSD_PORT}, named
<namespace>.<hostname>.<stat>:

  - net-rx    Bytes received in the last minute
  - net-tx    Bytes transmitted in the last minute
  - uptime    Seconds of uptime. Alert if not seen in the last 5 minutes
  - availmem  Percent of memory available. Alert if < 20
  - diskfree  Percent of disk free on filesystem. Alert if < 10
  - load      Load average, scaled 100x and divided by the number of
              cores. 100 is generally saturation. Alert if > 100

Options:
  -c, --config PATH   Settings file (default: ./uptimed.yaml if present)
  --log-level LEVEL   Override the configured log level
  --dry-run           Print payloads to stdout instead of sending them
  --version           Print version and exit
"""


class _ArgumentParser(argparse.ArgumentParser):
    """Prints the usage text and exits 1 on any argument error."""

    def error(self, message: str) -> None:  # type: ignore[override]
        self.print_usage_text()
        sys.exit(1)

    def print_usage_text(self) -> None:
        sys.stdout.write(USAGE)
        sys.stdout.flush()


def _build_parser() -> _ArgumentParser:
    parser = _ArgumentParser(prog="uptimed", add_help=False)
    parser.add_argument("destination")
    parser.add_argument("namespace")
    parser.add_argument("filesystem")
    parser.add_argument("interface")
    parser.add_argument("--config", "-c", default=None)
    parser.add_argument("--log-level", default=None)
    parser.add_argument("--dry-run", action="store_true")
    parser.add_argument("--version", action="version", version=f"uptimed {__version__}")
    return parser


def _init_logging(config: LoggingConfig) -> None:
    level = logging.getLevelName(config.level.upper())
    if not isinstance(level, int):
        raise ConfigError(f"Unknown log level {config.level!r}")
    logging.basicConfig(level=level, format=config.format)

    if config.file:
        # rotate daily, after midnight (UTC)
        try:
            handler = logging.handlers.TimedRotatingFileHandler(
                config.file, when="midnight", utc=True, backupCount=2,
            )
        except OSError as exc:
            raise ConfigError(f"Cannot open log file {config.file}: {exc}") from exc
        handler.setFormatter(logging.Formatter(config.format))
        logging.getLogger(None).addHandler(handler)


def _print_payload(payload: str) -> None:
    sys.stdout.write(payload)
    sys.stdout.flush()


def main(argv: list[str] | None = None) -> None:
    """Entry point for the uptimed CLI."""
    if argv is None:
        argv = sys.argv[1:]

    if "-h" in argv or "--help" in argv:
        sys.stdout.write(USAGE)
        return

    args = _build_parser().parse_args(argv)

    try:
        settings = load_settings(args.config)
        if args.log_level:
            settings.logging.level = args.log_level
        _init_logging(settings.logging)
    except ConfigError as exc:
        print(f"uptimed: {exc}", file=sys.stderr)
        sys.exit(1)

    from .scheduler import Scheduler
    from .snapshot import Snapshot
    from .sources import PsutilMetricSource

    source = PsutilMetricSource()
    try:
        config = TargetConfig(
            destination=args.destination,
            namespace=args.namespace,
            filesystem=args.filesystem,
            interface=args.interface,
            hostname=source.read_hostname(),
        )
        snapshot = Snapshot.create(config, source)
    except UptimedError as exc:
        logger.error("%s", exc)
        sys.exit(1)

    scheduler = Scheduler(
        snapshot,
        source,
        send=_print_payload if args.dry_run else None,
    )

    def _handle_signal(_sig: int, _frame: object) -> None:
        scheduler.stop()

    signal.signal(signal.SIGINT, _handle_signal)
    signal.signal(signal.SIGTERM, _handle_signal)

    logger.info(
        "Reporting %s.* for %s (%s) to %s:%d%s",
        config.prefix,
        config.interface,
        config.filesystem,
        config.destination,
        STATSD_PORT,
        " [dry run]" if args.dry_run else "",
    )
    try:
        scheduler.run()
    except UptimedError as exc:
        logger.error("%s", exc)
        sys.exit(1)


if __name__ == "__main__":
    main()
