"""
Tests for path, extension and size validation.
"""

import tempfile
from pathlib import Path

import pytest

from mcp_file_editor import (
    FileEditorConfig,
    PathState,
    check_append_result_size,
    check_content_size,
    check_existing_file_size,
    get_extension,
    is_extension_allowed,
    is_safe_path,
    probe_path,
)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def config():
    """Create a small test policy."""
    return FileEditorConfig(allowed_extensions=[".md", ".txt"], max_file_size=100)


class TestPathSafety:
    """Test is_safe_path."""

    @pytest.mark.parametrize(
        "path",
        ["notes.md", "docs/notes.md", "./notes.md", "folder/../notes.md", "", "a..b.md"],
    )
    def test_safe_relative_paths(self, path):
        """Test relative paths that stay below the working directory."""
        assert is_safe_path(path) is True

    @pytest.mark.parametrize(
        "path",
        ["../notes.md", "../../etc/passwd", "docs/../../notes.md", "..", "a/b/../../../c.md"],
    )
    def test_traversal_rejected(self, path):
        """Test relative paths that climb out through '..'."""
        assert is_safe_path(path) is False

    @pytest.mark.parametrize(
        "path", ["/etc/passwd", "/tmp/../etc/shadow.md", "/home/user/notes.md"]
    )
    def test_absolute_paths_always_safe(self, path):
        """Absolute paths are accepted as-is; no root confinement is enforced."""
        assert is_safe_path(path) is True


class TestExtensionPolicy:
    """Test extension extraction and the allow-set check."""

    def test_get_extension(self):
        """Test extension extraction from the final segment."""
        assert get_extension("notes.md") == ".md"
        assert get_extension("dir.d/archive.tar.gz") == ".gz"
        assert get_extension("dir.d/Makefile") == ""
        assert get_extension(".bashrc") == ""

    def test_allowed(self, config):
        """Test allowed and disallowed extensions."""
        assert is_extension_allowed("notes.md", config) is True
        assert is_extension_allowed("docs/readme.txt", config) is True
        assert is_extension_allowed("script.js", config) is False

    def test_case_sensitive(self, config):
        """Test that matching is case-sensitive."""
        assert is_extension_allowed("NOTES.MD", config) is False

    def test_extensionless_rejected_by_default(self):
        """Test that files without an extension are rejected by default."""
        assert is_extension_allowed("README", FileEditorConfig()) is False

    def test_extensionless_allowed_when_configured(self):
        """Test that an explicit empty extension allows extensionless files."""
        config = FileEditorConfig(allowed_extensions=[""])
        assert is_extension_allowed("README", config) is True

    def test_env_normalized_set(self):
        """Test extension checks against a set loaded from the environment."""
        config = FileEditorConfig.from_env({"ALLOWED_EXTENSIONS": ".md,txt"})
        assert is_extension_allowed("a.txt", config) is True
        assert is_extension_allowed("a.json", config) is False


class TestSizePolicy:
    """Test size checks."""

    def test_content_size_limit(self, config):
        """Test content size boundary in bytes."""
        assert check_content_size("x" * 100, config) is True
        assert check_content_size("x" * 101, config) is False

    def test_content_size_counts_utf8_bytes(self, config):
        """Test that multibyte characters count by encoded length."""
        # 34 * 3 bytes = 102 bytes
        assert check_content_size("あ" * 34, config) is False
        assert check_content_size("あ" * 33, config) is True

    @pytest.mark.asyncio
    async def test_existing_file_size(self, temp_dir, config):
        """Test the existing file size check."""
        small = temp_dir / "small.md"
        small.write_text("x" * 100)
        large = temp_dir / "large.md"
        large.write_text("x" * 101)

        assert await check_existing_file_size(str(small), config) is True
        assert await check_existing_file_size(str(large), config) is False

    @pytest.mark.asyncio
    async def test_missing_file_passes(self, temp_dir, config):
        """Test that a file that doesn't exist passes the size check."""
        assert await check_existing_file_size(str(temp_dir / "new.md"), config) is True

    @pytest.mark.asyncio
    async def test_append_result_size(self, temp_dir, config):
        """Test that the append check sums current and new sizes."""
        path = temp_dir / "a.md"
        path.write_text("x" * 50)

        assert await check_append_result_size(str(path), "y" * 50, config) is True
        assert await check_append_result_size(str(path), "y" * 60, config) is False

    @pytest.mark.asyncio
    async def test_append_result_size_reads_fresh(self, temp_dir, config):
        """Test that the current size is re-read on every call."""
        path = temp_dir / "a.md"
        path.write_text("x" * 10)
        assert await check_append_result_size(str(path), "y" * 80, config) is True

        path.write_text("x" * 30)
        assert await check_append_result_size(str(path), "y" * 80, config) is False


class TestProbePath:
    """Test probe_path."""

    @pytest.mark.asyncio
    async def test_present_file(self, temp_dir):
        """Test probing an existing file."""
        path = temp_dir / "a.md"
        path.write_text("hello")

        probe = await probe_path(str(path))
        assert probe.state is PathState.PRESENT
        assert probe.kind == "file"
        assert probe.size == 5
        assert probe.is_file is True

    @pytest.mark.asyncio
    async def test_present_directory(self, temp_dir):
        """Test probing a directory."""
        probe = await probe_path(str(temp_dir))
        assert probe.state is PathState.PRESENT
        assert probe.kind == "directory"
        assert probe.is_file is False

    @pytest.mark.asyncio
    async def test_absent(self, temp_dir):
        """Test probing a missing path."""
        probe = await probe_path(str(temp_dir / "missing.md"))
        assert probe.state is PathState.ABSENT
        assert probe.exists is False

    @pytest.mark.asyncio
    async def test_absent_below_a_file(self, temp_dir):
        """Test probing a path whose parent is a regular file."""
        parent = temp_dir / "a.md"
        parent.write_text("")

        probe = await probe_path(str(parent / "child.md"))
        assert probe.state is PathState.ABSENT
