"""
Rich renderables for the pdf2key command line.

Progress output and reports go to stdout; diagnostics go to the stderr console.
"""

from __future__ import annotations

from collections.abc import Sequence
from functools import lru_cache
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn
from rich.table import Table
from rich.text import Text

from pdf2key.core.models import ConversionStatus, PageInfo


@lru_cache(maxsize=2)
def get_console(stderr: bool = False) -> Console:
    return Console(stderr=stderr)


def conversion_progress(console: Console) -> Progress:
    """Transient bar driven by ``ConversionStatus.progress`` (0..1)."""
    return Progress(
        SpinnerColumn(),
        BarColumn(),
        TextColumn("{task.percentage:>3.0f}%"),
        TextColumn("{task.description}"),
        console=console,
        transient=True,
    )


def success_message(slide_count: int, destination: Path) -> Text:
    noun = "slide" if slide_count == 1 else "slides"
    return Text.assemble(
        ("[OK]", "bold green"),
        " ",
        (f"{slide_count} {noun}", "bold white"),
        " saved to ",
        (str(destination), "cyan"),
    )


def failure_panel(status: ConversionStatus) -> Panel:
    """Panel showing the terminal error text verbatim."""
    return Panel.fit(
        Text(status.error or status.message, style="bold red"),
        title="Conversion failed",
        subtitle=f"stopped at {status.progress:.0%}",
        border_style="red",
    )


def pages_table(name: str, count: int, pages: Sequence[PageInfo]) -> Table:
    table = Table(title=f"{name}: {count} page(s)", header_style="bold cyan")
    table.add_column("Page", justify="right", style="bold white")
    table.add_column("Width (pt)", justify="right")
    table.add_column("Height (pt)", justify="right")
    for page in pages:
        table.add_row(
            str(page.index + 1), f"{page.width_pt:.1f}", f"{page.height_pt:.1f}"
        )
    return table


def pages_payload(count: int, pages: Sequence[PageInfo]) -> dict:
    return {
        "page_count": count,
        "pages": [
            {"index": p.index, "width_pt": p.width_pt, "height_pt": p.height_pt}
            for p in pages
        ],
    }
