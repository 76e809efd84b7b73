"""
Configuration file for pytest test suite.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path

import fitz  # PyMuPDF
import pytest

from pdf2key.keynote.runner import ExitResult

LETTER = (612.0, 792.0)


def write_pdf(path: Path, sizes: Sequence[tuple[float, float]]) -> Path:
    """Write a PDF with one labelled page per (width, height) in points."""
    document = fitz.open()
    for number, (width, height) in enumerate(sizes, start=1):
        page = document.new_page(width=width, height=height)
        page.insert_text((10, 20), f"Page {number}", fontsize=12)
    document.save(str(path))
    document.close()
    return path


def parse_applescript_literals(source: str) -> tuple[list[str], str]:
    """Split AppleScript source into its decoded string literals and the rest."""
    literals: list[str] = []
    outside: list[str] = []
    buffer: list[str] | None = None
    escapes = {"n": "\n", "r": "\r", "t": "\t"}
    index = 0
    while index < len(source):
        char = source[index]
        if buffer is None:
            if char == '"':
                buffer = []
            else:
                outside.append(char)
        elif char == "\\":
            index += 1
            buffer.append(escapes.get(source[index], source[index]))
        elif char == '"':
            literals.append("".join(buffer))
            buffer = None
        else:
            buffer.append(char)
        index += 1
    assert buffer is None, "unterminated string literal"
    return literals, "".join(outside)


class FakeRunner:
    """Automation runner that records scripts instead of running osascript."""

    def __init__(self, result: ExitResult | None = None) -> None:
        self.result = result or ExitResult(returncode=0)
        self.scripts: list[str] = []

    def run(self, script: str) -> ExitResult:
        self.scripts.append(script)
        return self.result


@pytest.fixture
def make_pdf(tmp_path: Path) -> Callable[..., Path]:
    """Factory for small PDFs written under ``tmp_path``."""

    def _make(
        name: str = "deck.pdf",
        sizes: Sequence[tuple[float, float]] = (LETTER,),
    ) -> Path:
        return write_pdf(tmp_path / name, sizes)

    return _make


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def make_runner() -> Callable[..., FakeRunner]:
    """Factory for runners that report a given exit status."""

    def _make(returncode: int = 0, stderr: str = "") -> FakeRunner:
        return FakeRunner(ExitResult(returncode=returncode, stderr=stderr))

    return _make


@pytest.fixture
def applescript_literals() -> Callable[[str], tuple[list[str], str]]:
    return parse_applescript_literals
