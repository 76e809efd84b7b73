"""
Keynote presentation assembly.

Turns an ordered list of slide images into a saved Keynote document by
generating an AppleScript and running it through an :class:`AutomationRunner`.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from loguru import logger

from pdf2key.configs.config import config
from pdf2key.core.errors import AssemblyError
from pdf2key.keynote.applescript import build_keynote_script
from pdf2key.keynote.runner import AutomationRunner, OsascriptRunner

PERMISSIONS_HINT = (
    "Keynote automation failed (check that this app is allowed to control "
    "Keynote in System Settings > Privacy & Security > Automation)"
)


class PresentationAssembler:
    """Builds a Keynote deck with one full-bleed image slide per path."""

    def __init__(
        self,
        runner: AutomationRunner | None = None,
        app_name: str | None = None,
    ) -> None:
        self.runner = runner or OsascriptRunner(config.osascript_bin)
        self.app_name = app_name or config.keynote_app_name

    def assemble(
        self, ordered_paths: Sequence[Path | str], destination_path: Path | str
    ) -> None:
        """
        Create the presentation at ``destination_path``.

        Raises AssemblyError when there is nothing to assemble or the
        automation run fails. Keynote writes the destination only on its final
        save, so a failure leaves no partial file behind.
        """
        if not ordered_paths:
            raise AssemblyError("No slides were added")

        script = build_keynote_script(ordered_paths, destination_path, self.app_name)
        logger.info(
            f"[Keynote] Creating presentation with {len(ordered_paths)} slides..."
        )

        try:
            result = self.runner.run(script)
        except OSError as e:
            raise AssemblyError(f"{PERMISSIONS_HINT}: {e}") from e

        if not result.ok:
            stderr = result.stderr.strip()
            logger.error(f"[Keynote] Exit status {result.returncode}: {stderr}")
            raise AssemblyError(f"{PERMISSIONS_HINT}: {stderr}")

        logger.info(f"[Keynote] Presentation saved to {destination_path}")
