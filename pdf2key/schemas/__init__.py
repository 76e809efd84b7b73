"""
Request schemas for pdf2key.
"""

from .conversion import ConversionRequest

__all__ = ["ConversionRequest"]
