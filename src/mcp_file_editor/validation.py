"""
Security validation for file editor operations.

Provides the path traversal, extension and size checks that every
operation runs before touching the filesystem, plus a tri-state probe
used instead of try-the-operation existence checks.
"""

import asyncio
import logging
import os
import stat
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from mcp_file_editor.config import FileEditorConfig

logger = logging.getLogger(__name__)


class PathState(str, Enum):
    """Result of probing a path."""

    PRESENT = "present"
    ABSENT = "absent"
    ERROR = "error"


@dataclass(frozen=True)
class PathProbe:
    """What a path currently resolves to."""

    state: PathState
    kind: Optional[str] = None  # "file", "directory" or "other" when present
    size: Optional[int] = None
    error: Optional[str] = None

    @property
    def exists(self) -> bool:
        return self.state is PathState.PRESENT

    @property
    def is_file(self) -> bool:
        return self.state is PathState.PRESENT and self.kind == "file"


def entry_kind(mode: int) -> str:
    if stat.S_ISREG(mode):
        return "file"
    if stat.S_ISDIR(mode):
        return "directory"
    return "other"


def _probe(path: str) -> PathProbe:
    try:
        st = os.stat(path)
    except (FileNotFoundError, NotADirectoryError):
        return PathProbe(PathState.ABSENT)
    except OSError as e:
        return PathProbe(PathState.ERROR, error=e.strerror or str(e))
    return PathProbe(PathState.PRESENT, kind=entry_kind(st.st_mode), size=st.st_size)


async def probe_path(path: str) -> PathProbe:
    """
    Probe whether a path exists without performing any operation on it.

    Args:
        path: Path to probe

    Returns:
        PathProbe with state PRESENT (plus kind and size), ABSENT, or
        ERROR (plus the underlying error text)
    """
    return await asyncio.to_thread(_probe, path)


def is_safe_path(path: str) -> bool:
    """
    Check a path for parent directory traversal.

    The path is normalized lexically. A relative path is unsafe when its
    normalized form still climbs out through a '..' segment. Absolute
    paths are always accepted; no root confinement is enforced here.

    Examples:
        is_safe_path("notes/todo.md")        # True
        is_safe_path("folder/../notes.md")   # True, normalizes to notes.md
        is_safe_path("../../etc/passwd")     # False
        is_safe_path("/etc/passwd")          # True
    """
    if os.path.isabs(path):
        return True
    normalized = os.path.normpath(path)
    return os.pardir not in normalized.split(os.sep)


def get_extension(path: str) -> str:
    """Extension of the final path segment, including the dot ('' if none)."""
    return os.path.splitext(os.path.basename(path))[1]


def is_extension_allowed(path: str, config: FileEditorConfig) -> bool:
    """Check the path's extension against the allow-set (case-sensitive)."""
    return get_extension(path) in config.allowed_extensions


def content_size(content: str) -> int:
    """UTF-8 byte length of content."""
    return len(content.encode("utf-8"))


def check_content_size(content: str, config: FileEditorConfig) -> bool:
    """Check that content to be written fits within the size limit."""
    return content_size(content) <= config.max_file_size


async def check_existing_file_size(path: str, config: FileEditorConfig) -> bool:
    """
    Check that an existing file fits within the size limit.

    A path that does not exist (or cannot be stat'ed) passes; the
    operation itself reports the underlying failure.
    """
    probe = await probe_path(path)
    if not probe.exists:
        return True
    return probe.size <= config.max_file_size


async def check_append_result_size(
    path: str, content: str, config: FileEditorConfig
) -> bool:
    """
    Check that appending content keeps the file within the size limit.

    The current size is read fresh on every call.
    """
    probe = await probe_path(path)
    current = probe.size if probe.exists else 0
    total = current + content_size(content)
    if total > config.max_file_size:
        logger.debug(
            f"Append would grow {path} to {total} bytes "
            f"(limit {config.max_file_size} bytes)"
        )
        return False
    return True
