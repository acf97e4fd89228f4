"""
File operation handlers.

Each handler runs the validators in a fixed order (path safety, extension,
size), stops at the first failure, performs a single filesystem operation
and formats a text result. Failures are returned as text starting with
"Error:"; nothing but a programming error inside this module escapes.

Handlers hold no state besides the configuration and take no locks.
Concurrent calls on the same path can interleave, e.g. a create and an
append racing on the existence check.
"""

import asyncio
import logging
import os
from datetime import datetime
from typing import Optional

from mcp_file_editor.config import FileEditorConfig
from mcp_file_editor.exceptions import (
    ExtensionNotAllowedError,
    FileAlreadyExistsError,
    FileEditorError,
    FileMissingError,
    FileSizeLimitExceededError,
    StorageError,
    UnsafePathError,
)
from mcp_file_editor.reader import read_window
from mcp_file_editor.validation import (
    PathState,
    check_append_result_size,
    check_content_size,
    check_existing_file_size,
    content_size,
    entry_kind,
    get_extension,
    is_extension_allowed,
    is_safe_path,
    probe_path,
)

logger = logging.getLogger(__name__)


def _write_text(path: str, content: str, mode: str) -> None:
    with open(path, mode, encoding="utf-8", newline="") as f:
        f.write(content)


def _ensure_parent(path: str) -> None:
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)


def _format_timestamp(timestamp: float) -> str:
    return datetime.fromtimestamp(timestamp).isoformat(sep=" ", timespec="seconds")


def _creation_time(st: os.stat_result) -> str:
    """
    Creation time of a stat result.

    Where the platform records no birth time (Linux) st_ctime is the last
    metadata change, so it is reported with that label instead.
    """
    birthtime = getattr(st, "st_birthtime", None)
    if birthtime is not None:
        return _format_timestamp(birthtime)
    if os.name == "nt":
        return _format_timestamp(st.st_ctime)
    return f"{_format_timestamp(st.st_ctime)} (metadata change time; creation time unavailable)"


class FileOperationHandlers:
    """
    The six file operations exposed to clients.

    Usage:
        handlers = FileOperationHandlers(FileEditorConfig.from_env())
        text = await handlers.read_file("notes.md", start_line=5, max_lines=3)
    """

    def __init__(self, config: FileEditorConfig):
        self.config = config

    # Validation steps

    def _require_safe_path(self, path: str) -> None:
        if not is_safe_path(path):
            raise UnsafePathError(path)

    def _require_allowed_extension(self, path: str) -> None:
        if not is_extension_allowed(path, self.config):
            raise ExtensionNotAllowedError(
                path, get_extension(path), self.config.allowed_extensions
            )

    def _require_content_fits(self, path: str, content: str) -> None:
        if not check_content_size(content, self.config):
            raise FileSizeLimitExceededError(
                path, self.config.max_file_size, subject="content size"
            )

    async def _run(self, operation: str, path: str, action) -> str:
        """Run an operation and convert every failure into a text result."""
        logger.info(f"{operation}: {path}")
        try:
            return await action()
        except FileEditorError as e:
            logger.warning(f"{operation} rejected: {e}")
            return f"Error: {e}"
        except (OSError, UnicodeError) as e:
            error = StorageError(path, operation.replace("_", " "), str(e))
            logger.error(f"{operation} failed: {error}")
            return f"Error: {error}"
        except Exception as e:
            logger.exception(f"{operation} unexpected error")
            return f"Error: unexpected error during {operation} - {e}"

    # Operations

    async def read_file(
        self,
        path: str,
        start_line: Optional[int] = None,
        end_line: Optional[int] = None,
        max_lines: Optional[int] = None,
    ) -> str:
        """
        Read a whole file, or a range of its lines.

        Without range parameters the content is returned exactly as
        stored. With any of them the selected lines are preceded by a
        header such as "[notes.md] lines 5-7 of 10".
        """

        async def action() -> str:
            self._require_safe_path(path)
            self._require_allowed_extension(path)
            if not await check_existing_file_size(path, self.config):
                raise FileSizeLimitExceededError(path, self.config.max_file_size)
            window = await read_window(path, start_line, end_line, max_lines)
            return window.render(path)

        return await self._run("read_file", path, action)

    async def write_file(self, path: str, content: str) -> str:
        """Write content to a file, overwriting it and creating parent directories."""

        async def action() -> str:
            self._require_safe_path(path)
            self._require_allowed_extension(path)
            self._require_content_fits(path, content)
            await asyncio.to_thread(_ensure_parent, path)
            await asyncio.to_thread(_write_text, path, content, "w")
            size = content_size(content)
            logger.info(f"Wrote {size} bytes to {path}")
            return f"Success: wrote {size} bytes to '{path}'."

        return await self._run("write_file", path, action)

    async def create_file(self, path: str, content: str = "") -> str:
        """Create a new file; fails if anything already exists at the path."""

        async def action() -> str:
            self._require_safe_path(path)
            self._require_allowed_extension(path)
            probe = await probe_path(path)
            if probe.state is PathState.PRESENT:
                raise FileAlreadyExistsError(path)
            if probe.state is PathState.ERROR:
                raise StorageError(path, "create file", probe.error)
            self._require_content_fits(path, content)
            await asyncio.to_thread(_ensure_parent, path)
            await asyncio.to_thread(_write_text, path, content, "w")
            logger.info(f"Created {path}")
            return f"Success: created new file '{path}'."

        return await self._run("create_file", path, action)

    async def append_file(self, path: str, content: str) -> str:
        """Append content to an existing file."""

        async def action() -> str:
            self._require_safe_path(path)
            self._require_allowed_extension(path)
            probe = await probe_path(path)
            if probe.state is PathState.ABSENT:
                raise FileMissingError(path)
            if probe.state is PathState.ERROR:
                raise StorageError(path, "append file", probe.error)
            if not probe.is_file:
                raise StorageError(path, "append file", "not a regular file")
            if not await check_append_result_size(path, content, self.config):
                raise FileSizeLimitExceededError(
                    path, self.config.max_file_size, subject="file size after append"
                )
            await asyncio.to_thread(_write_text, path, content, "a")
            logger.info(f"Appended {content_size(content)} bytes to {path}")
            return f"Success: appended content to '{path}'."

        return await self._run("append_file", path, action)

    async def file_exists(self, path: str) -> str:
        """Report whether anything exists at the path."""

        async def action() -> str:
            self._require_safe_path(path)
            probe = await probe_path(path)
            if probe.state is PathState.ERROR:
                raise StorageError(path, "check file", probe.error)
            if probe.exists:
                return f"File '{path}' exists."
            return f"File '{path}' does not exist."

        return await self._run("file_exists", path, action)

    async def get_file_info(self, path: str) -> str:
        """
        Report size, timestamps, kind, extension and extension policy status.

        "Created" falls back to the metadata change time, labelled as such,
        on platforms without a recorded birth time.
        """

        async def action() -> str:
            self._require_safe_path(path)
            st = await asyncio.to_thread(os.stat, path)
            extension = get_extension(path)
            allowed = is_extension_allowed(path, self.config)
            info = {
                "Path": path,
                "Size": f"{st.st_size} bytes",
                "Created": _creation_time(st),
                "Modified": _format_timestamp(st.st_mtime),
                "Type": entry_kind(st.st_mode),
                "Extension": extension or "(none)",
                "Extension allowed": "yes" if allowed else "no",
            }
            return "\n".join(f"{key}: {value}" for key, value in info.items())

        return await self._run("get_file_info", path, action)
