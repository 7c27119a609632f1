from __future__ import annotations

import argparse
import logging
from pathlib import Path

from .commands import check as cmd_check
from .commands.output import matched, unmatched
from .config import load_settings
from .core.identity import EntityMatcher, extract_core_names, normalize_name

LOG_FORMAT = "%(levelname).1s | %(name)s | %(message)s"

C_RESET = "\033[0m"
LEVEL_COLORS = {
    logging.DEBUG: "\033[36m",  # Cyan
    logging.INFO: "\033[37m",  # Light gray
    logging.WARNING: "\033[33m",  # Yellow
    logging.ERROR: "\033[31m",  # Red
    logging.CRITICAL: "\033[35m",  # Magenta
}


class ColorFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        color = LEVEL_COLORS.get(record.levelno)
        if not color:
            return message
        return f"{color}{message}{C_RESET}"


class WarningBufferHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.WARNING)
        self.records: list[str] = []

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
        except Exception:  # pragma: no cover
            msg = record.getMessage()
        self.records.append(msg)


def configure_logging(level_name: str) -> WarningBufferHandler:
    log_level = getattr(logging, level_name.upper(), logging.INFO)
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(log_level)

    color_handler = logging.StreamHandler()
    color_handler.setFormatter(ColorFormatter(LOG_FORMAT))
    root_logger.addHandler(color_handler)

    warn_buffer = WarningBufferHandler()
    warn_buffer.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(warn_buffer)
    return warn_buffer


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Donation pledge donor matching")
    parser.add_argument("--config", type=Path, help="Path to donor-match.yaml")
    parser.add_argument("--log-level", default="INFO", help="Python logging level")

    subparsers = parser.add_subparsers(dest="command", required=True)
    match_parser = subparsers.add_parser(
        "match", help="Check whether a scraped donor name matches an existing one"
    )
    match_parser.add_argument("scraped", help="Donor name as scraped")
    match_parser.add_argument("existing", help="Donor name as recorded in the ledger")
    match_parser.add_argument(
        "--explain",
        action="store_true",
        help="Also print normalized names and core names of both sides",
    )
    check_parser = subparsers.add_parser(
        "check", help="Replay a YAML file of [scraped, existing, expected] cases"
    )
    check_parser.add_argument("cases", type=Path, help="YAML fixture file")
    check_parser.add_argument(
        "--symmetric",
        action="store_true",
        help="Also check every case with both names swapped",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    warn_buffer = configure_logging(args.log_level)
    settings = load_settings(args.config)
    matcher = EntityMatcher(settings.build_converter())

    try:
        match args.command:
            case "match":
                verdict = matcher.match(args.scraped, args.existing)
                label = f'"{args.scraped}" vs "{args.existing}"'
                render = matched if verdict.matched else unmatched
                print(render(label, str(verdict.reason)))
                if args.explain:
                    for side, name in (("scraped", args.scraped), ("existing", args.existing)):
                        print(f"  {side}: normalized={normalize_name(name)!r}")
                        print(f"  {side}: cores={extract_core_names(name)}")
                if not verdict.matched:
                    raise SystemExit(1)
            case "check":
                cases = cmd_check.load_cases(args.cases)
                report = cmd_check.run(matcher, cases, symmetric=args.symmetric)
                for line in report.lines:
                    print(line)
                print(f"\nResults: {report.passed} passed, {report.failed} failed")
                if not report.ok:
                    raise SystemExit(1)
            case _:
                parser.error("Unknown command")
    finally:
        if warn_buffer.records:
            print("\n\033[33mWarnings/Errors summary:\033[0m")
            for line in warn_buffer.records:
                print(f" - {line}")
