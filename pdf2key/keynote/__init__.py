"""
Keynote automation for pdf2key.
"""

from .applescript import build_keynote_script, quote_applescript_string
from .assembler import PERMISSIONS_HINT, PresentationAssembler
from .runner import AutomationRunner, ExitResult, OsascriptRunner

__all__ = [
    "AutomationRunner",
    "ExitResult",
    "OsascriptRunner",
    "PERMISSIONS_HINT",
    "PresentationAssembler",
    "build_keynote_script",
    "quote_applescript_string",
]
