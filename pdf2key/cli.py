#!/usr/bin/env python3
"""Command line front end: convert PDFs into Keynote presentations."""

from __future__ import annotations

import argparse
import subprocess
import sys
import time
from pathlib import Path

from pydantic import ValidationError

from pdf2key.configs.config import config
from pdf2key.configs.logging_config import setup_logging
from pdf2key.console import (
    conversion_progress,
    failure_panel,
    get_console,
    pages_payload,
    pages_table,
    success_message,
)
from pdf2key.core.errors import OpenError, Pdf2KeyError
from pdf2key.core.models import ConversionStatus
from pdf2key.core.status import StatusSink
from pdf2key.document.renderer import PageRenderer
from pdf2key.pipeline.coordinator import ConversionOrchestrator
from pdf2key.schemas.conversion import ConversionRequest

POLL_INTERVAL = 0.1

console = get_console()
err_console = get_console(stderr=True)


def _print_validation_error(exc: ValidationError) -> None:
    for error in exc.errors():
        err_console.print(f"[bold red]{error['msg']}[/]")


def _finished(sink: StatusSink) -> tuple[bool, ConversionStatus]:
    # The flag clears before the terminal write; wait for both
    converting = sink.is_converting()
    status = sink.snapshot()
    return not converting and status.is_terminal, status


def wait_for_completion(
    sink: StatusSink, *, show_progress: bool = True, interval: float = POLL_INTERVAL
) -> ConversionStatus:
    """Poll ``sink`` until the job has written its terminal status."""
    if not show_progress:
        done, status = _finished(sink)
        while not done:
            time.sleep(interval)
            done, status = _finished(sink)
        return status

    with conversion_progress(console) as progress:
        task = progress.add_task("Initializing...", total=1.0)
        while True:
            done, status = _finished(sink)
            progress.update(task, completed=status.progress, description=status.message)
            if done:
                return status
            time.sleep(interval)


def reveal_in_finder(path: Path) -> None:
    """Select ``path`` in a Finder window."""
    try:
        subprocess.run(["open", "-R", str(path)], check=False)
    except OSError as exc:
        err_console.print(f"[yellow]Could not reveal {path}: {exc}[/]")


def cmd_convert(args: argparse.Namespace) -> int:
    try:
        request = ConversionRequest(
            source_path=Path(args.source),
            destination_path=Path(args.output) if args.output else None,
            dpi=args.dpi if args.dpi is not None else config.dpi,
        )
    except ValidationError as exc:
        _print_validation_error(exc)
        return 2

    orchestrator = ConversionOrchestrator(dpi=request.dpi)
    sink = orchestrator.status_sink
    future = orchestrator.start(request.source_path, request.output_path)
    status = wait_for_completion(sink, show_progress=not args.json)

    error = future.exception()
    if args.json:
        console.print_json(data=status.model_dump())
        return 0 if error is None else 1

    if error is not None:
        console.print(failure_panel(status))
        return 1

    job = future.result()
    console.print(success_message(len(job.slides), request.output_path))
    if args.reveal:
        reveal_in_finder(request.output_path)
    return 0


def cmd_pages(args: argparse.Namespace) -> int:
    renderer = PageRenderer()
    source = Path(args.source)
    try:
        count = renderer.page_count(source)
        with renderer.open(source) as handle:
            pages = handle.pages()
    except OpenError as exc:
        err_console.print(f"[bold red]{exc}[/]")
        return 1

    if args.json:
        console.print_json(data=pages_payload(count, pages))
    else:
        console.print(pages_table(source.name, count, pages))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Convert PDF documents into editable Keynote presentations",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  pdf2key convert deck.pdf                 # writes deck.key next to the PDF
  pdf2key convert deck.pdf -o ~/talk.key   # choose the destination
  pdf2key pages deck.pdf                   # show page count and sizes
        """,
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    sub = parser.add_subparsers(dest="command", help="Available commands")

    convert_parser = sub.add_parser("convert", help="Convert a PDF into Keynote")
    convert_parser.add_argument("source", help="PDF document to convert")
    convert_parser.add_argument(
        "-o", "--output", help="Destination .key file (default: next to the PDF)"
    )
    convert_parser.add_argument(
        "--dpi",
        type=int,
        default=None,
        help=f"Render resolution (default: {config.dpi})",
    )
    convert_parser.add_argument(
        "--reveal",
        action="store_true",
        help="Show the presentation in Finder when done",
    )
    convert_parser.add_argument(
        "--json",
        action="store_true",
        help="Output the final status as JSON",
    )
    convert_parser.set_defaults(func=cmd_convert)

    pages_parser = sub.add_parser("pages", help="Show page count and page sizes")
    pages_parser.add_argument("source", help="PDF document to inspect")
    pages_parser.add_argument(
        "--json",
        action="store_true",
        help="Output JSON instead of a table",
    )
    pages_parser.set_defaults(func=cmd_pages)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(
        log_level="DEBUG" if args.verbose else None,
        enable_file_logging=bool(config.log_file),
    )
    if not getattr(args, "command", None):
        parser.print_help()
        return 0
    try:
        return int(args.func(args))
    except Pdf2KeyError as exc:
        err_console.print(f"[bold red]{exc}[/]")
        return 1


if __name__ == "__main__":
    sys.exit(main())
