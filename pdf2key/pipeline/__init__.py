"""
Conversion pipeline for pdf2key.
"""

from .coordinator import ConversionOrchestrator

__all__ = ["ConversionOrchestrator"]
