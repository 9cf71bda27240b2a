#!/usr/bin/env python3
"""Uptime calculator - reports availability for a monitor from its log files.

Usage:
    sitewatch-uptime              # Interactive mode - prompts for the monitor name
    sitewatch-uptime <monitor>    # Report for the named monitor
    sitewatch-uptime --json demo  # Machine-readable output
"""
import argparse
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from .config import Settings, get_log_root
from .exceptions import InvalidMonitorNameError, MonitorNotFoundError
from .schemas import UptimeStats
from .services.uptime import UptimeReporter


def format_project_list(reporter: UptimeReporter) -> str:
    """Indented list of monitor names found under the log root."""
    if not reporter.log_root.is_dir():
        return "  (no logs directory found)"
    monitors = reporter.list_monitors()
    if not monitors:
        return "  (no projects found)"
    return "\n".join(f"  - {name}" for name in monitors)


def format_report(stats: UptimeStats) -> str:
    if not stats.has_data:
        return (
            f"\nNo check data found for project '{stats.monitor_name}'.\n"
            "The logs may be empty or contain only startup/shutdown entries."
        )

    lines = [
        "",
        "=" * 45,
        f"   Uptime Report: {stats.monitor_name}",
        "=" * 45,
        "",
        f"  {'Total Checks:':<20} {stats.total}",
        f"  {'Successful Checks:':<20} {stats.success}",
        f"  {'Failed Checks:':<20} {stats.fail}",
        "  " + "-" * 43,
        f"  {'Uptime Percentage:':<20} {stats.uptime_percent:.4f}%",
        "",
        "=" * 45,
        "",
        f"Status: {stats.rating} - {stats.rating_description}",
    ]
    return "\n".join(lines)


def build_parser(reporter: UptimeReporter) -> argparse.ArgumentParser:
    return argparse.ArgumentParser(
        prog="sitewatch-uptime",
        description="Calculate uptime percentage from sitewatch log files.",
        epilog="If the monitor name is omitted you will be prompted for it.\n\n"
        f"Available projects:\n{format_project_list(reporter)}",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )


def _resolve_log_root(argv: List[str]) -> Path:
    """Find --log-root before full parsing so --help can list monitors."""
    pre = argparse.ArgumentParser(add_help=False)
    pre.add_argument("--log-root")
    known, _ = pre.parse_known_args(argv)
    try:
        settings = Settings()
    except ValidationError:
        settings = Settings.model_construct()
    return get_log_root(settings, known.log_root)


def prompt_for_name(reporter: UptimeReporter) -> str:
    print("=" * 45)
    print("   sitewatch - Uptime Calculator")
    print("=" * 45)
    print("")
    print("Available projects:")
    print(format_project_list(reporter))
    print("")
    try:
        return input("Enter project name: ").strip()
    except EOFError:
        return ""


def main(argv: Optional[List[str]] = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    reporter = UptimeReporter(_resolve_log_root(argv))

    parser = build_parser(reporter)
    parser.add_argument("monitor", nargs="?", help="monitor (project) name")
    parser.add_argument("--log-root", help="base directory of the log files (default: LOG_ROOT or ~/logs)")
    parser.add_argument("--json", action="store_true", help="print the stats as JSON")
    args = parser.parse_args(argv)

    name = args.monitor if args.monitor is not None else prompt_for_name(reporter)

    try:
        stats = reporter.report(name)
    except (InvalidMonitorNameError, MonitorNotFoundError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(stats.model_dump_json())
    else:
        print(format_report(stats))
    return 0


if __name__ == "__main__":
    sys.exit(main())
