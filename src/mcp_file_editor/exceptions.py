"""
Exceptions for file editor operations.

Policy, state and range failures are raised by the validators and the
reader, and converted into text results by the operation handlers.
Only ProtocolError is meant to reach the transport.
"""

from typing import Iterable


class FileEditorError(Exception):
    """Base exception for file editor operations."""

    pass


class PolicyViolationError(FileEditorError):
    """Raised when a request breaks a configured safety rule."""

    pass


class UnsafePathError(PolicyViolationError):
    """Raised when a relative path escapes through parent directory segments."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(
            f"invalid file path '{path}' (parent directory traversal is not allowed)"
        )


class ExtensionNotAllowedError(PolicyViolationError):
    """Raised when a file extension is not in the allow-set."""

    def __init__(self, path: str, extension: str, allowed: Iterable[str]):
        self.path = path
        self.extension = extension
        self.allowed = sorted(allowed)
        super().__init__(
            f"file extension '{extension}' is not allowed. "
            f"Allowed extensions: [{', '.join(self.allowed)}]"
        )


class FileSizeLimitExceededError(PolicyViolationError):
    """Raised when a stored or prospective file size exceeds the limit."""

    def __init__(self, path: str, limit: int, subject: str = "file size"):
        self.path = path
        self.limit = limit
        self.subject = subject
        super().__init__(f"{subject} exceeds the limit (max: {limit} bytes): {path}")


class StateConflictError(FileEditorError):
    """Raised when the filesystem state contradicts an operation's precondition."""

    pass


class FileAlreadyExistsError(StateConflictError):
    def __init__(self, path: str):
        self.path = path
        super().__init__(f"file '{path}' already exists")


class FileMissingError(StateConflictError):
    def __init__(self, path: str):
        self.path = path
        super().__init__(f"file '{path}' does not exist")


class LineRangeError(FileEditorError):
    """Raised when a requested line range falls outside the file."""

    def __init__(self, path: str, start: int, end: int, total_lines: int, reason: str):
        self.path = path
        self.start = start
        self.end = end
        self.total_lines = total_lines
        super().__init__(
            f"{reason} (requested lines {start}-{end}, file has {total_lines} lines): {path}"
        )


class StorageError(FileEditorError):
    """Raised when the underlying filesystem call fails."""

    def __init__(self, path: str, operation: str, reason: str):
        self.path = path
        self.operation = operation
        self.reason = reason
        super().__init__(f"failed to {operation} '{path}' - {reason}")


class ProtocolError(ValueError):
    """Raised when a tool call does not match the advertised tool surface."""

    pass


class UnknownToolError(ProtocolError):
    def __init__(self, tool_name: str):
        self.tool_name = tool_name
        super().__init__(f"Unknown tool: {tool_name}")


class ConfigurationError(ValueError):
    """Raised when environment or file configuration is malformed."""

    pass
