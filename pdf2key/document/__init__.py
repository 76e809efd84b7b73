"""
Document processing package for pdf2key.

This package opens source PDFs and rasterizes their pages for assembly.
"""

from .renderer import DocumentHandle, PageRenderer, target_size

__all__ = ["DocumentHandle", "PageRenderer", "target_size"]
