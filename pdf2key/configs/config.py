"""
Configuration module for pdf2key (configs).
"""

import os
import tempfile
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

PRESENTATION_SUFFIX = ".key"


class Config:
    def __init__(self) -> None:
        self._temp_root: Path | None = None

        # Rendering
        self.dpi = int(os.getenv("PDF2KEY_DPI", "200"))

        # Workspace
        self.workspace_prefix = os.getenv("PDF2KEY_WORKSPACE_PREFIX", "pdf2key")
        self.keep_workspace = (
            os.getenv("PDF2KEY_KEEP_WORKSPACE", "false").lower() == "true"
        )

        # Automation
        self.osascript_bin = os.getenv("OSASCRIPT_BIN", "osascript")
        self.keynote_app_name = os.getenv("KEYNOTE_APP_NAME", "Keynote")

        # Logging / runtime
        self.log_level = os.getenv("LOG_LEVEL", "WARNING").upper()
        self.log_file = os.getenv("LOG_FILE")
        self.log_dir = os.getenv("LOG_DIR", "logs")

    @property
    def temp_root(self) -> Path:
        if self._temp_root is None:
            temp_root_env = os.getenv("PDF2KEY_TEMP_ROOT")
            if temp_root_env:
                self._temp_root = Path(temp_root_env).resolve()
            else:
                self._temp_root = Path(tempfile.gettempdir())
        return self._temp_root


def default_output_path(source_path: Path | str) -> Path:
    """Return the presentation path placed next to the source document."""
    return Path(source_path).with_suffix(PRESENTATION_SUFFIX)


config = Config()
