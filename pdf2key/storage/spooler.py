"""
Image spooling for pdf2key.

Each rendered page is written as ``slide_<index>.png`` inside the job's
workspace. Names are zero-padded to four digits so a directory listing sorts
in slide order.
"""

from __future__ import annotations

from pathlib import Path

from loguru import logger

from pdf2key.core.errors import SpoolError
from pdf2key.core.models import ConversionJob, RenderedImage, SpooledSlide
from pdf2key.storage.workspace import create_workspace

MAX_SLIDE_INDEX = 9999


def slide_filename(index: int) -> str:
    if index < 0 or index > MAX_SLIDE_INDEX:
        raise ValueError(f"Slide index out of range 0..{MAX_SLIDE_INDEX}: {index}")
    return f"slide_{index:04d}.png"


class ImageSpooler:
    """Persists rendered pages into a job workspace."""

    def spool(self, job: ConversionJob, image: RenderedImage, index: int) -> Path:
        """
        Write ``image`` as PNG and record it on ``job``.

        The workspace is created on the first write. Any filesystem failure is
        raised as SpoolError naming the page.
        """
        expected = len(job.slides)
        if index != expected:
            raise SpoolError(
                f"Page {index + 1} spooled out of order (expected page {expected + 1})",
                page_index=index,
            )

        if not job.slides:
            create_workspace(job.workspace)

        try:
            path = job.workspace / slide_filename(index)
        except ValueError as e:
            raise SpoolError(
                f"Cannot name page {index + 1}: {e}", page_index=index
            ) from e

        try:
            image.image.save(path, format="PNG")
        except OSError as e:
            raise SpoolError(
                f"Failed to write page {index + 1} to {path}: {e}", page_index=index
            ) from e

        job.slides.append(SpooledSlide(index=index, path=path))
        logger.debug(f"[Spool] Wrote {path.name}")
        return path
