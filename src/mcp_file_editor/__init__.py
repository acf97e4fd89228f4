"""
MCP File Editor - constrained file I/O tools for automated agents.

This package exposes read, write, create, append, existence and metadata
operations on files, guarded by path traversal, extension and size
policies, over the Model Context Protocol.
"""

__version__ = "0.1.0"

from mcp_file_editor.config import FileEditorConfig
from mcp_file_editor.exceptions import (
    ConfigurationError,
    ExtensionNotAllowedError,
    FileAlreadyExistsError,
    FileEditorError,
    FileMissingError,
    FileSizeLimitExceededError,
    LineRangeError,
    PolicyViolationError,
    ProtocolError,
    StateConflictError,
    StorageError,
    UnknownToolError,
    UnsafePathError,
)
from mcp_file_editor.handlers import FileOperationHandlers
from mcp_file_editor.reader import LineWindow, read_window, select_window, split_lines
from mcp_file_editor.tools import FileEditorTools
from mcp_file_editor.validation import (
    PathProbe,
    PathState,
    check_append_result_size,
    check_content_size,
    check_existing_file_size,
    get_extension,
    is_extension_allowed,
    is_safe_path,
    probe_path,
)

__all__ = [
    # Version
    "__version__",
    # Config
    "FileEditorConfig",
    # Errors
    "FileEditorError",
    "PolicyViolationError",
    "UnsafePathError",
    "ExtensionNotAllowedError",
    "FileSizeLimitExceededError",
    "StateConflictError",
    "FileAlreadyExistsError",
    "FileMissingError",
    "LineRangeError",
    "StorageError",
    "ProtocolError",
    "UnknownToolError",
    "ConfigurationError",
    # Validation
    "is_safe_path",
    "get_extension",
    "is_extension_allowed",
    "check_content_size",
    "check_existing_file_size",
    "check_append_result_size",
    "probe_path",
    "PathProbe",
    "PathState",
    # Reader
    "LineWindow",
    "split_lines",
    "select_window",
    "read_window",
    # Operations
    "FileOperationHandlers",
    "FileEditorTools",
]
