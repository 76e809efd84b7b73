"""
Helpers for the per-job temporary workspace.

A workspace is ``<root>/<prefix>_<nanoseconds>``. Names minted in the same
process are strictly increasing, so back-to-back jobs never share a directory
even on clocks coarser than a nanosecond.
"""

from __future__ import annotations

import shutil
import threading
import time
from collections.abc import Callable
from pathlib import Path

from loguru import logger

from pdf2key.core.errors import SpoolError, WorkspaceTimeError

Clock = Callable[[], int]

_mint_lock = threading.Lock()
_last_minted_ns = 0


def mint_workspace_path(
    root: Path, prefix: str, clock: Clock = time.time_ns
) -> Path:
    """Return a fresh workspace path under ``root``."""
    global _last_minted_ns

    try:
        now_ns = int(clock())
    except (OSError, OverflowError, ValueError) as e:
        raise WorkspaceTimeError(f"System clock unavailable: {e}") from e
    if now_ns <= 0:
        raise WorkspaceTimeError(
            f"System clock reports a time before the epoch ({now_ns} ns)"
        )

    with _mint_lock:
        stamp = max(now_ns, _last_minted_ns + 1)
        _last_minted_ns = stamp
    return Path(root) / f"{prefix}_{stamp}"


def create_workspace(path: Path) -> Path:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise SpoolError(f"Failed to create workspace {path}: {e}") from e
    logger.info(f"[Workspace] Created {path}")
    return path


def remove_workspace(path: Path) -> bool:
    """Delete ``path`` recursively. Failures are logged, never raised."""
    if not path.exists():
        return True
    try:
        shutil.rmtree(path)
    except OSError as exc:
        logger.warning(f"[Workspace] Could not remove {path}: {exc}")
        return False
    logger.debug(f"[Workspace] Removed {path}")
    return True
