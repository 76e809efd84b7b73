"""
Conversion coordinator for pdf2key.

This module sequences a conversion job: mint a workspace, render every page,
spool the images, assemble the Keynote deck and remove the workspace. Each
phase publishes its message to the status sink before doing its work, and the
terminal status is always the sink's last write for the job.
"""

from __future__ import annotations

import asyncio
import time
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path

from loguru import logger

from pdf2key.configs.config import config
from pdf2key.core.errors import (
    ConversionError,
    ConversionInProgressError,
    Pdf2KeyError,
    RenderError,
    SpoolError,
)
from pdf2key.core.models import ConversionJob
from pdf2key.core.progress_utils import (
    ASSEMBLING_PROGRESS,
    RENDERING_PROGRESS,
    compute_spooling_progress,
)
from pdf2key.core.status import StatusSink
from pdf2key.document.renderer import PageRenderer
from pdf2key.keynote.assembler import PresentationAssembler
from pdf2key.storage.spooler import ImageSpooler
from pdf2key.storage.workspace import (
    Clock,
    create_workspace,
    mint_workspace_path,
    remove_workspace,
)

PHASE_DISPLAY_NAMES = {
    "preparing": "Prepare workspace",
    "rendering": "Render pages",
    "spooling": "Write slide images",
    "assembling": "Assemble Keynote presentation",
}


class ConversionOrchestrator:
    """Runs PDF to Keynote conversions off the caller's thread."""

    def __init__(
        self,
        renderer: PageRenderer | None = None,
        spooler: ImageSpooler | None = None,
        assembler: PresentationAssembler | None = None,
        status_sink: StatusSink | None = None,
        *,
        dpi: int | None = None,
        temp_root: Path | None = None,
        workspace_prefix: str | None = None,
        keep_workspace: bool | None = None,
        clock: Clock = time.time_ns,
    ) -> None:
        self.renderer = renderer or PageRenderer()
        self.spooler = spooler or ImageSpooler()
        self.assembler = assembler or PresentationAssembler()
        self.status_sink = status_sink or StatusSink()
        self.dpi = dpi or config.dpi
        self.temp_root = temp_root or config.temp_root
        self.workspace_prefix = workspace_prefix or config.workspace_prefix
        self.keep_workspace = (
            config.keep_workspace if keep_workspace is None else keep_workspace
        )
        self.clock = clock

    def start(
        self,
        source_path: Path | str,
        destination_path: Path | str,
        status_sink: StatusSink | None = None,
        *,
        dpi: int | None = None,
    ) -> Future[ConversionJob]:
        """
        Start a conversion on a dedicated worker thread and return at once.

        The sink is claimed before this returns, so ``is_converting()`` is
        already True for observers. Raises ConversionInProgressError when the
        sink is busy with another job.
        """
        source, destination = Path(source_path), Path(destination_path)
        sink = self._claim(status_sink)
        executor = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="pdf2key-convert"
        )
        try:
            return executor.submit(self._run, source, destination, sink, dpi)
        finally:
            executor.shutdown(wait=False)

    def convert(
        self,
        source_path: Path | str,
        destination_path: Path | str,
        status_sink: StatusSink | None = None,
        *,
        dpi: int | None = None,
    ) -> ConversionJob:
        """Run a whole conversion on the calling thread."""
        source, destination = Path(source_path), Path(destination_path)
        sink = self._claim(status_sink)
        return self._run(source, destination, sink, dpi)

    async def convert_async(
        self,
        source_path: Path | str,
        destination_path: Path | str,
        status_sink: StatusSink | None = None,
        *,
        dpi: int | None = None,
    ) -> ConversionJob:
        """
        Await a conversion without blocking the event loop.

        Cancelling the awaiting task does not stop the worker; the job runs
        to its terminal status on the sink.
        """
        source, destination = Path(source_path), Path(destination_path)
        sink = self._claim(status_sink)
        loop = asyncio.get_running_loop()
        executor = ThreadPoolExecutor(max_workers=1)
        try:
            return await loop.run_in_executor(
                executor, self._run, source, destination, sink, dpi
            )
        finally:
            executor.shutdown(wait=False)

    def _claim(self, status_sink: StatusSink | None) -> StatusSink:
        sink = status_sink or self.status_sink
        if not sink.try_begin():
            raise ConversionInProgressError(
                "A conversion is already in progress for this status sink"
            )
        return sink

    def _run(
        self,
        source_path: Path,
        destination_path: Path,
        sink: StatusSink,
        dpi: int | None,
    ) -> ConversionJob:
        logger.info(f"[Pipeline] Starting conversion of {source_path}")
        workspace: Path | None = None

        try:
            workspace = mint_workspace_path(
                self.temp_root, self.workspace_prefix, self.clock
            )
            job = ConversionJob(
                source_path=source_path,
                destination_path=destination_path,
                workspace=workspace,
            )
            self._execute(job, sink, dpi or self.dpi)
            self._cleanup(workspace)
            sink.succeed()
            job.status = sink.snapshot()
            logger.info(
                f"[Pipeline] Converted {len(job.slides)} pages into {destination_path}"
            )
            return job
        except Exception as e:
            failure = self._to_conversion_error(e, sink)
            if isinstance(e, Pdf2KeyError):
                logger.error(
                    f"[Pipeline] {PHASE_DISPLAY_NAMES[failure.phase]} failed: {failure}"
                )
            else:
                logger.exception(f"[Pipeline] Unexpected error during {failure.phase}")
            if workspace is not None:
                self._cleanup(workspace)
            sink.fail(str(failure))
            raise failure from failure.__cause__

    def _execute(self, job: ConversionJob, sink: StatusSink, dpi: int) -> None:
        create_workspace(job.workspace)

        sink.update("Rendering pages...", RENDERING_PROGRESS, "rendering")
        with self.renderer.open(job.source_path) as handle:
            total = handle.page_count
            for image in self.renderer.render_pages(handle, dpi):
                sink.update(
                    f"Processing page {image.index + 1} of {total}...",
                    compute_spooling_progress(image.index, total),
                    "spooling",
                )
                self.spooler.spool(job, image, image.index)

        if len(job.slides) != total:
            raise RenderError(
                f"Rendered {len(job.slides)} of {total} pages",
                page_index=len(job.slides),
            )

        sink.update(
            "Creating presentation in Keynote...", ASSEMBLING_PROGRESS, "assembling"
        )
        self.assembler.assemble(job.slide_paths, job.destination_path)

    def _cleanup(self, workspace: Path) -> None:
        if self.keep_workspace:
            logger.info(f"[Pipeline] Keeping workspace {workspace}")
            return
        remove_workspace(workspace)

    @staticmethod
    def _to_conversion_error(exc: Exception, sink: StatusSink) -> ConversionError:
        if isinstance(exc, ConversionError):
            return exc

        phase = sink.snapshot().phase
        if isinstance(exc, RenderError):
            phase = "rendering"
        elif isinstance(exc, SpoolError):
            phase = "spooling" if exc.page_index is not None else "preparing"
        elif phase not in PHASE_DISPLAY_NAMES:
            phase = "preparing"

        error = ConversionError(
            str(exc) or exc.__class__.__name__,
            phase=phase,
            page_index=getattr(exc, "page_index", None),
        )
        error.__cause__ = exc
        return error
