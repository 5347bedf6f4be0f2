from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.pretty import Pretty
from rich.text import Text
from loguru import logger

from json2php.config import load_config
from json2php.config.loader import env_snapshot
from json2php.convert.errors import InvalidJsonError
from json2php.convert.service import EMPTY_INPUT_MESSAGE, INVALID_INPUT_MESSAGE, ConversionResult, Notification, convert
from json2php.export.files import export_outputs
from json2php.utils.logging import setup_logging

console = Console()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="json2php")
    parser.add_argument("--config", type=Path, default=None, help="Path to custom config YAML")
    parser.add_argument("--profile", type=str, default=None, help="Config profile name")
    parser.add_argument("--output-dir", type=Path, default=None, help="Override export directory")
    parser.add_argument("--log-level", type=str, default=None, help="Override log level")

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("config", help="Validate and print effective config")

    convert_parser = subparsers.add_parser("convert", help="Convert JSON to formatted JSON and a PHP array")
    source = convert_parser.add_mutually_exclusive_group()
    source.add_argument("--input", type=Path, default=None, help="Read JSON from a file (default: stdin)")
    source.add_argument("--text", type=str, default=None, help="JSON text to convert")
    convert_parser.add_argument("--no-sanitize", action="store_true", help="Skip escape repair before parsing")
    convert_parser.add_argument("--export", action="store_true", help="Write both outputs to the output directory")
    convert_parser.add_argument(
        "--only",
        choices=["json", "php"],
        default=None,
        help="Print only the formatted JSON or only the PHP array",
    )

    return parser


def _build_overrides(args: argparse.Namespace) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    app_overrides: dict[str, Any] = {}
    if args.output_dir:
        app_overrides["output_dir"] = str(args.output_dir)
    if args.log_level:
        app_overrides["log_level"] = args.log_level
    if app_overrides:
        overrides["app"] = app_overrides
    if getattr(args, "no_sanitize", False):
        overrides["convert"] = {"sanitize": False}
    return overrides


def _read_input(args: argparse.Namespace) -> str:
    if args.text is not None:
        return args.text
    if args.input is not None:
        return args.input.read_text(encoding="utf-8")
    return sys.stdin.read()


def _print_config(config) -> None:
    console.print(Panel(Pretty(config.model_dump(mode="json")), title="Effective Config"))
    console.print(Panel(Pretty(env_snapshot()), title="Env Snapshot"))


def _print_notification(notification: Notification) -> None:
    style = "green" if notification.level == "success" else "red"
    console.print(Text(f"{notification.title}: {notification.message}", style=style))


def _print_result(result: ConversionResult, only: str | None) -> None:
    if only in (None, "json"):
        console.print(Panel(Text(result.formatted), title="Formatted JSON"))
    if only in (None, "php"):
        console.print(Panel(Text(result.array_literal), title="PHP Array"))


def run(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    config = load_config(
        config_path=args.config,
        profile=args.profile,
        overrides=_build_overrides(args),
    )

    setup_logging(config.app.log_level)
    logger.debug("Loaded configuration")

    if args.command == "config":
        _print_config(config)
        return 0

    if args.command == "convert":
        raw = _read_input(args)
        try:
            result = convert(
                raw,
                sanitize_input=config.convert.sanitize,
                notify=_print_notification,
                observability=config.observability,
            )
        except InvalidJsonError as exc:
            message = EMPTY_INPUT_MESSAGE if exc.reason == "empty" else INVALID_INPUT_MESSAGE
            console.print(Panel(Text(message, style="red"), title="Error"))
            return 1

        _print_result(result, args.only)

        if args.export:
            export_result = export_outputs(result, config)
            console.print(Panel(Text(f"Exported to {export_result.output_dir}"), title="Export"))
        return 0

    raise ValueError(f"Unsupported command: {args.command}")


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
