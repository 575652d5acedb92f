"""Tests for the ToolManager: lookup order and hash verification."""

import hashlib
import pytest

from filescan.security.errors import ToolLaunchError
from filescan.security.tool_manager import ToolManager, file_sha256


@pytest.fixture
def isolated_path(monkeypatch, tmp_path):
    """Empty PATH so nothing resolves from the host system."""
    empty = tmp_path / "empty_path"
    empty.mkdir()
    monkeypatch.setenv("PATH", str(empty))
    return empty


class TestDescribe:
    def test_known_tool(self, tmp_tools_dir):
        info = ToolManager(tools_dir=str(tmp_tools_dir)).describe("clamscan")
        assert info.display_name == "ClamAV clamscan"
        assert info.exe_name == "clamscan"
        assert info.installed is False

    def test_unknown_tool_named_after_itself(self, tmp_tools_dir):
        info = ToolManager(tools_dir=str(tmp_tools_dir)).describe("sigtool")
        assert info.display_name == "sigtool"
        assert info.exe_name == "sigtool"

    def test_config_overrides(self, tmp_tools_dir):
        tm = ToolManager(
            tools_dir=str(tmp_tools_dir),
            tools={"clamscan": {"expected_hash": "custom_hash", "exe_name": "clamscan.exe"}},
        )
        info = tm.describe("clamscan")
        assert info.expected_hash == "custom_hash"
        assert info.exe_name == "clamscan.exe"

    def test_null_overrides_ignored(self, tmp_tools_dir):
        tm = ToolManager(tools_dir=str(tmp_tools_dir), tools={"clamscan": {"exe_name": None}})
        assert tm.describe("clamscan").exe_name == "clamscan"


class TestLocate:
    def test_not_found(self, tmp_tools_dir, isolated_path):
        tool = ToolManager(tools_dir=str(tmp_tools_dir)).locate("clamscan")
        assert tool.installed is False
        assert tool.path is None

    def test_configured_path(self, tmp_path, tmp_tools_dir, isolated_path):
        exe = tmp_path / "custom" / "clamscan-1.4"
        exe.parent.mkdir()
        exe.write_text("fake")
        tm = ToolManager(
            tools_dir=str(tmp_tools_dir),
            tools={"clamscan": {"path": str(exe)}},
        )
        assert tm.locate("clamscan").path == exe.resolve()

    def test_configured_path_missing_falls_through(self, tmp_path, tmp_tools_dir, isolated_path):
        (tmp_tools_dir / "clamscan").write_text("fake")
        tm = ToolManager(
            tools_dir=str(tmp_tools_dir),
            tools={"clamscan": {"path": str(tmp_path / "gone")}},
        )
        assert tm.locate("clamscan").path == (tmp_tools_dir / "clamscan").resolve()

    def test_found_in_subdirectory(self, tmp_tools_dir, isolated_path):
        tool_dir = tmp_tools_dir / "clamscan"
        tool_dir.mkdir()
        (tool_dir / "clamscan").write_text("fake binary")

        tool = ToolManager(tools_dir=str(tmp_tools_dir)).locate("clamscan")
        assert tool.installed is True
        assert tool.path == (tool_dir / "clamscan").resolve()

    def test_found_nested(self, tmp_tools_dir, isolated_path):
        nested = tmp_tools_dir / "clamscan" / "bin"
        nested.mkdir(parents=True)
        (nested / "clamscan").write_text("fake")

        tool = ToolManager(tools_dir=str(tmp_tools_dir)).locate("clamscan")
        assert tool.path == (nested / "clamscan").resolve()

    def test_subdirectory_before_flat(self, tmp_tools_dir, isolated_path):
        (tmp_tools_dir / "clamscan").mkdir()
        (tmp_tools_dir / "clamscan" / "clamscan.bin").write_text("nested")
        (tmp_tools_dir / "clamscan.bin").write_text("flat")
        tm = ToolManager(
            tools_dir=str(tmp_tools_dir),
            tools={"clamscan": {"exe_name": "clamscan.bin"}},
        )
        assert tm.locate("clamscan").path.read_text() == "nested"

    def test_found_flat(self, tmp_tools_dir, isolated_path):
        (tmp_tools_dir / "clamdscan").write_text("fake")
        assert ToolManager(tools_dir=str(tmp_tools_dir)).locate("clamdscan").installed is True

    def test_found_on_path(self, tmp_tools_dir, isolated_path):
        exe = isolated_path / "clamscan"
        exe.write_text("#!/bin/sh\n")
        exe.chmod(0o755)

        tool = ToolManager(tools_dir=str(tmp_tools_dir)).locate("clamscan")
        assert tool.path == exe.resolve()


class TestExecutableFor:
    def test_returns_path(self, tmp_tools_dir, isolated_path):
        (tmp_tools_dir / "clamscan").write_text("fake")
        tm = ToolManager(tools_dir=str(tmp_tools_dir))
        assert tm.executable_for("clamscan") == str((tmp_tools_dir / "clamscan").resolve())

    def test_not_found_is_launch_error(self, tmp_tools_dir, isolated_path):
        tm = ToolManager(tools_dir=str(tmp_tools_dir))
        with pytest.raises(ToolLaunchError, match="tools.clamscan.path"):
            tm.executable_for("clamscan")

    def test_verify_mismatch(self, tmp_tools_dir, isolated_path):
        (tmp_tools_dir / "clamscan").write_text("fake")
        tm = ToolManager(
            tools_dir=str(tmp_tools_dir),
            tools={"clamscan": {"expected_hash": "0" * 64}},
        )
        assert tm.executable_for("clamscan")
        with pytest.raises(ToolLaunchError, match="integrity"):
            tm.executable_for("clamscan", verify=True)


class TestVerify:
    def _install(self, tmp_tools_dir, content=b"fake clamscan"):
        (tmp_tools_dir / "clamscan").write_bytes(content)
        return hashlib.sha256(content).hexdigest()

    def test_no_hash_configured(self, tmp_tools_dir, isolated_path):
        self._install(tmp_tools_dir)
        tm = ToolManager(tools_dir=str(tmp_tools_dir))
        assert tm.verify(tm.locate("clamscan")) is True

    def test_hash_matches_case_insensitive(self, tmp_tools_dir, isolated_path):
        digest = self._install(tmp_tools_dir)
        tm = ToolManager(
            tools_dir=str(tmp_tools_dir),
            tools={"clamscan": {"expected_hash": digest.upper()}},
        )
        assert tm.verify(tm.locate("clamscan")) is True

    def test_hash_mismatch(self, tmp_tools_dir, isolated_path):
        self._install(tmp_tools_dir)
        tm = ToolManager(
            tools_dir=str(tmp_tools_dir),
            tools={"clamscan": {"expected_hash": "0" * 64}},
        )
        assert tm.verify(tm.locate("clamscan")) is False

    def test_not_installed(self, tmp_tools_dir, isolated_path):
        tm = ToolManager(tools_dir=str(tmp_tools_dir))
        assert tm.verify(tm.locate("clamscan")) is False

    def test_file_sha256_large_file(self, tmp_path):
        data = b"x" * 200_000
        path = tmp_path / "blob"
        path.write_bytes(data)
        assert file_sha256(path) == hashlib.sha256(data).hexdigest()
