"""
Temporary storage for pdf2key: job workspaces and spooled slide images.
"""

from .spooler import ImageSpooler, slide_filename
from .workspace import create_workspace, mint_workspace_path, remove_workspace

__all__ = [
    "ImageSpooler",
    "create_workspace",
    "mint_workspace_path",
    "remove_workspace",
    "slide_filename",
]
