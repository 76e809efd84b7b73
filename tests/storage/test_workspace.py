"""
Unit tests for workspace naming and lifecycle.
"""

import time
from unittest.mock import patch

import pytest

from pdf2key.core.errors import WorkspaceTimeError
from pdf2key.storage.workspace import (
    create_workspace,
    mint_workspace_path,
    remove_workspace,
)


class TestMintWorkspacePath:
    """Test cases for mint_workspace_path."""

    def test_name_uses_prefix_and_clock(self, tmp_path):
        reading = time.time_ns() * 2

        path = mint_workspace_path(tmp_path, "pdf2key", clock=lambda: reading)

        assert path.parent == tmp_path
        assert path.name == f"pdf2key_{reading}"

    def test_same_clock_reading_gives_distinct_paths(self, tmp_path):
        """Test that a frozen clock still mints unique, increasing names."""
        frozen = lambda: 1_000  # noqa: E731

        paths = [
            mint_workspace_path(tmp_path, "pdf2key", clock=frozen) for _ in range(5)
        ]
        stamps = [int(p.name.split("_")[1]) for p in paths]

        assert len(set(paths)) == 5
        assert stamps == sorted(stamps)

    def test_consecutive_real_clock_paths_differ(self, tmp_path):
        first = mint_workspace_path(tmp_path, "pdf2key")
        second = mint_workspace_path(tmp_path, "pdf2key")

        assert first != second

    @pytest.mark.parametrize("reading", [0, -5])
    def test_clock_before_epoch(self, tmp_path, reading):
        with pytest.raises(WorkspaceTimeError):
            mint_workspace_path(tmp_path, "pdf2key", clock=lambda: reading)

    def test_clock_failure(self, tmp_path):
        """Test that an unavailable clock is reported as WorkspaceTimeError."""

        def broken_clock():
            raise OSError("clock unavailable")

        with pytest.raises(WorkspaceTimeError, match="clock unavailable"):
            mint_workspace_path(tmp_path, "pdf2key", clock=broken_clock)


class TestWorkspaceLifecycle:
    """Test cases for create_workspace and remove_workspace."""

    def test_create_and_remove(self, tmp_path):
        workspace = create_workspace(tmp_path / "nested" / "pdf2key_1")
        (workspace / "slide_0000.png").write_bytes(b"png")

        assert workspace.is_dir()
        assert remove_workspace(workspace) is True
        assert not workspace.exists()

    def test_remove_missing_is_success(self, tmp_path):
        assert remove_workspace(tmp_path / "never_created") is True

    def test_remove_failure_is_reported_not_raised(self, tmp_path):
        """Test that cleanup problems never raise."""
        workspace = create_workspace(tmp_path / "pdf2key_1")

        with patch(
            "pdf2key.storage.workspace.shutil.rmtree",
            side_effect=PermissionError("busy"),
        ):
            assert remove_workspace(workspace) is False

        assert workspace.exists()
