"""
pdf2key: turn PDF documents into editable Keynote presentations.
"""

__version__ = "0.1.0"
