"""
Core components for pdf2key: data model, errors and the shared status sink.
"""

from .errors import (
    AssemblyError,
    ConversionError,
    ConversionInProgressError,
    OpenError,
    Pdf2KeyError,
    RenderError,
    SpoolError,
    WorkspaceTimeError,
)
from .models import (
    ConversionJob,
    ConversionStatus,
    PageInfo,
    RenderedImage,
    SpooledSlide,
)
from .status import StatusSink

__all__ = [
    "AssemblyError",
    "ConversionError",
    "ConversionInProgressError",
    "ConversionJob",
    "ConversionStatus",
    "OpenError",
    "PageInfo",
    "Pdf2KeyError",
    "RenderError",
    "RenderedImage",
    "SpoolError",
    "SpooledSlide",
    "StatusSink",
    "WorkspaceTimeError",
]
