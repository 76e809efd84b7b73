"""
Page rendering module for pdf2key.

This module opens PDF documents with PyMuPDF and rasterizes every page into an
RGBA image sized from the page's own dimensions and the requested DPI. Page
counting goes through PyPDF2, which reads the page tree without loading the
rendering engine.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from types import TracebackType

import fitz  # PyMuPDF
import PyPDF2
from loguru import logger
from PIL import Image
from PyPDF2.errors import PdfReadError

from pdf2key.core.errors import OpenError, RenderError
from pdf2key.core.models import PageInfo, RenderedImage

POINTS_PER_INCH = 72


def target_size(width_pt: float, height_pt: float, dpi: int) -> tuple[int, int]:
    """Pixel dimensions of a page rendered at ``dpi``."""
    width = max(1, round(width_pt * dpi / POINTS_PER_INCH))
    height = max(1, round(height_pt * dpi / POINTS_PER_INCH))
    return width, height


def _check_dpi(dpi: int) -> None:
    if isinstance(dpi, bool) or not isinstance(dpi, int) or dpi <= 0:
        raise ValueError(f"dpi must be a positive integer, got {dpi!r}")


def _check_source(path: Path) -> None:
    if not path.exists():
        raise OpenError(f"Source file not found: {path}")
    if not path.is_file():
        raise OpenError(f"Source path is not a file: {path}")


class DocumentHandle:
    """Open PDF document; owns the PyMuPDF resources until closed."""

    def __init__(self, path: Path, document: fitz.Document) -> None:
        self.path = path
        self._document = document

    @property
    def page_count(self) -> int:
        return self._document.page_count

    @property
    def closed(self) -> bool:
        return self._document.is_closed

    def pages(self) -> list[PageInfo]:
        """Return page sizes in points without rendering anything."""
        return [
            PageInfo(
                index=page.number,
                width_pt=page.rect.width,
                height_pt=page.rect.height,
            )
            for page in self._document
        ]

    def load_page(self, index: int) -> fitz.Page:
        return self._document.load_page(index)

    def close(self) -> None:
        if not self._document.is_closed:
            self._document.close()

    def __enter__(self) -> DocumentHandle:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


class PageRenderer:
    """Rasterizes PDF pages into RGBA images."""

    def open(self, path: Path | str) -> DocumentHandle:
        """
        Open a PDF document for rendering.

        Raises OpenError when the file is missing, unreadable, not a PDF or
        protected by a password.
        """
        path = Path(path)
        _check_source(path)
        try:
            document = fitz.open(str(path), filetype="pdf")
        except Exception as e:
            raise OpenError(f"Failed to open PDF file {path}: {e}") from e

        if not document.is_pdf or document.needs_pass:
            document.close()
            raise OpenError(
                f"Failed to open PDF file {path}: document is encrypted or not a PDF"
            )

        logger.info(f"[PDF] Opened {path.name} ({document.page_count} pages)")
        return DocumentHandle(path, document)

    def render_pages(
        self, handle: DocumentHandle, dpi: int
    ) -> Iterator[RenderedImage]:
        """
        Render every page of ``handle`` in document order.

        Pages are produced lazily; iterating again requires reopening the
        document. The first page that fails stops the sequence with a
        RenderError naming that page.
        """
        _check_dpi(dpi)
        if handle.closed:
            raise RenderError(f"Document {handle.path} is already closed")

        for index in range(handle.page_count):
            try:
                image = self._render_page(handle.load_page(index), dpi)
            except Exception as e:
                raise RenderError(
                    f"Failed to render page {index + 1}: {e}", page_index=index
                ) from e
            logger.debug(
                f"[PDF] Rendered page {index + 1} at {image.width}x{image.height}"
            )
            yield RenderedImage(index=index, image=image)

    def _render_page(self, page: fitz.Page, dpi: int) -> Image.Image:
        width_pt, height_pt = page.rect.width, page.rect.height
        width, height = target_size(width_pt, height_pt, dpi)

        # Separate x/y scale factors land the page exactly on the target box
        matrix = fitz.Matrix(width / width_pt, height / height_pt)
        pixmap = page.get_pixmap(matrix=matrix, alpha=False)
        image = Image.frombytes("RGB", (pixmap.width, pixmap.height), pixmap.samples)

        if image.size != (width, height):
            # PyMuPDF rounds the device box outward; trim the off-by-one
            image = image.resize((width, height), Image.Resampling.LANCZOS)
        return image.convert("RGBA")

    def page_count(self, path: Path | str) -> int:
        """Return the number of pages in the PDF at ``path``."""
        path = Path(path)
        _check_source(path)
        try:
            with path.open("rb") as file:
                reader = PyPDF2.PdfReader(file)
                return len(reader.pages)
        except (PdfReadError, OSError, ValueError) as e:
            raise OpenError(f"Failed to read PDF file {path}: {e}") from e
