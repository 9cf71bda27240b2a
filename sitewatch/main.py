"""Monitor entry point - runs the check loop until SIGINT/SIGTERM."""
import argparse
import asyncio
import logging
import signal
import sys
from typing import List, Optional

from pydantic import ValidationError

from .config import Settings, build_email_config, build_monitor_config, get_log_root
from .exceptions import LogWriteError
from .schemas import MonitorConfig
from .services.log_store import LogStore
from .services.notifier import Notifier, build_notifier
from .services.scheduler import MonitorLoop

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_LOG_FAILURE = 1
EXIT_BAD_CONFIG = 2

STOP_SIGNALS = (signal.SIGINT, signal.SIGTERM)


def configure_logging(level: str = "INFO"):
    """Console logging for every module; the durable trail is the log store."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    # Keep per-request client chatter out of the console
    logging.getLogger("httpx").setLevel(logging.WARNING)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sitewatch",
        description="Monitor one website and alert when it goes down or recovers.",
        epilog="Options override the MONITOR_NAME, MONITOR_URL, ALERT_EMAIL, CHECK_INTERVAL, "
        "FAILURE_THRESHOLD, REQUEST_TIMEOUT and LOG_ROOT environment variables.",
    )
    parser.add_argument("--name", help="monitor name, used as the log directory")
    parser.add_argument("--url", help="URL to monitor (http or https)")
    parser.add_argument("--email", dest="recipients", help="comma-separated alert recipients")
    parser.add_argument("--interval", dest="check_interval", type=float, help="seconds between checks")
    parser.add_argument("--threshold", dest="failure_threshold", type=int,
                        help="consecutive failures before alerting")
    parser.add_argument("--timeout", dest="request_timeout", type=float, help="request timeout in seconds")
    parser.add_argument("--log-root", help="base directory for log files")
    return parser


def print_banner(config: MonitorConfig):
    logger.info("=============================================")
    logger.info("   sitewatch - Website Monitor")
    logger.info("=============================================")
    logger.info(f"Monitoring: {config.url}")
    logger.info(f"Alerts to:  {config.recipients or '(none)'}")
    logger.info(f"Check interval: {config.check_interval:g} seconds")
    logger.info(f"Failure threshold: {config.failure_threshold} consecutive failures")
    logger.info("Press Ctrl+C to stop")


def install_signal_handlers(loop: asyncio.AbstractEventLoop, monitor: MonitorLoop):
    """Route SIGINT and SIGTERM to monitor.stop()."""
    for sig in STOP_SIGNALS:
        try:
            loop.add_signal_handler(sig, monitor.stop)
        except (NotImplementedError, RuntimeError):
            # Event loops without signal support (e.g. Windows)
            signal.signal(sig, lambda *_: loop.call_soon_threadsafe(monitor.stop))


def remove_signal_handlers(loop: asyncio.AbstractEventLoop):
    for sig in STOP_SIGNALS:
        try:
            loop.remove_signal_handler(sig)
        except (NotImplementedError, RuntimeError):
            signal.signal(sig, signal.SIG_DFL if sig != signal.SIGINT else signal.default_int_handler)


async def serve(config: MonitorConfig, log_store: LogStore, notifier: Notifier) -> int:
    """Run the monitor until stopped. Returns the process exit code."""
    monitor = MonitorLoop(config, log_store, notifier)
    loop = asyncio.get_running_loop()
    install_signal_handlers(loop, monitor)

    try:
        await monitor.run()
    except LogWriteError as e:
        logger.critical(f"Log write failed, stopping monitor: {e}")
        print(f"sitewatch: fatal: {e}", file=sys.stderr)
        return EXIT_LOG_FAILURE
    finally:
        remove_signal_handlers(loop)
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = Settings()
        config = build_monitor_config(
            settings,
            name=args.name,
            url=args.url,
            recipients=args.recipients,
            check_interval=args.check_interval,
            failure_threshold=args.failure_threshold,
            request_timeout=args.request_timeout,
        )
    except ValidationError as e:
        configure_logging()
        logger.error(f"Invalid configuration:\n{e}")
        return EXIT_BAD_CONFIG

    configure_logging(settings.log_level)
    print_banner(config)

    log_store = LogStore(get_log_root(settings, args.log_root))
    notifier = build_notifier(
        build_email_config(settings, config.recipients),
        settings.webhook_url,
    )
    return asyncio.run(serve(config, log_store, notifier))


if __name__ == "__main__":
    sys.exit(main())
