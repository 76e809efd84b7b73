"""
Configs components for pdf2key
"""

from .config import Config, config, default_output_path

__all__ = ["Config", "config", "default_output_path"]
