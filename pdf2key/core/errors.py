"""
Error types raised by the conversion pipeline.

Each stage raises its own error type; the orchestrator wraps whichever one
stops the job in a :class:`ConversionError` naming the failed phase.
"""

from __future__ import annotations


class Pdf2KeyError(Exception):
    """Base class for every pdf2key failure."""


class OpenError(Pdf2KeyError):
    """The source document is missing, unreadable or not a PDF."""


class RenderError(Pdf2KeyError):
    """A page could not be rasterized."""

    def __init__(self, message: str, page_index: int | None = None) -> None:
        super().__init__(message)
        self.page_index = page_index


class SpoolError(Pdf2KeyError, OSError):
    """Writing to the temporary workspace failed."""

    def __init__(self, message: str, page_index: int | None = None) -> None:
        super().__init__(message)
        self.page_index = page_index


class WorkspaceTimeError(Pdf2KeyError):
    """The system clock could not provide a timestamp for the workspace name."""


class AssemblyError(Pdf2KeyError):
    """Keynote could not be driven to build the presentation."""


class ConversionInProgressError(Pdf2KeyError):
    """A conversion is already running against the same status sink."""


class ConversionError(Pdf2KeyError):
    """Terminal failure of a conversion job."""

    def __init__(
        self, message: str, phase: str, page_index: int | None = None
    ) -> None:
        super().__init__(message)
        self.phase = phase
        self.page_index = page_index
