"""
Tool surface for the file editor.

Declares the six tools and dispatches tool calls to the operation handlers,
validating arguments against the models in models.py. Results are always
text; only protocol mismatches (unknown tool, malformed arguments) raise.
"""

import logging
from typing import Any, Awaitable, Callable

from pydantic import BaseModel, ValidationError

from mcp_file_editor.config import FileEditorConfig
from mcp_file_editor.exceptions import ProtocolError, UnknownToolError
from mcp_file_editor.handlers import FileOperationHandlers
from mcp_file_editor.models import (
    AppendFileArguments,
    CreateFileArguments,
    PathArguments,
    ReadFileArguments,
    WriteFileArguments,
)

logger = logging.getLogger(__name__)

TOOL_DESCRIPTIONS = {
    "read_file": "Read the contents of a file, either whole or a range of lines "
    "(start_line, end_line, max_lines). A windowed result starts with a header "
    "giving the selected range and the total line count. A start_line past the "
    "last line, an end_line before start_line, or a negative max_lines returns "
    "an error naming the total line count.",
    "write_file": "Write content to a file, overwriting it if it exists.",
    "file_exists": "Check whether a file exists.",
    "create_file": "Create a new file. Fails if the file already exists.",
    "append_file": "Append content to the end of an existing file.",
    "get_file_info": "Get file details: size, creation and modification time, "
    "type, extension and whether the extension is allowed.",
}

TOOL_ARGUMENTS: dict[str, type[BaseModel]] = {
    "read_file": ReadFileArguments,
    "write_file": WriteFileArguments,
    "file_exists": PathArguments,
    "create_file": CreateFileArguments,
    "append_file": AppendFileArguments,
    "get_file_info": PathArguments,
}


class FileEditorTools:
    """
    File editor tools for agent tool calling.

    Usage:
        tools = FileEditorTools(FileEditorConfig.from_env())

        # Execute tool call
        text = await tools.execute_tool(
            tool_name="read_file",
            arguments={"path": "notes.md", "start_line": 5, "max_lines": 3},
        )
    """

    def __init__(self, config: FileEditorConfig):
        """
        Initialize file editor tools.

        Args:
            config: File editor policy
        """
        self.config = config
        self.handlers = FileOperationHandlers(config)
        self._dispatch: dict[str, Callable[..., Awaitable[str]]] = {
            "read_file": self.handlers.read_file,
            "write_file": self.handlers.write_file,
            "file_exists": self.handlers.file_exists,
            "create_file": self.handlers.create_file,
            "append_file": self.handlers.append_file,
            "get_file_info": self.handlers.get_file_info,
        }

    @property
    def tool_names(self) -> list[str]:
        return list(self._dispatch)

    async def execute_tool(self, tool_name: str, arguments: dict[str, Any]) -> str:
        """
        Execute a tool call.

        Args:
            tool_name: Name of the tool to execute
            arguments: Tool arguments

        Returns:
            Text result (success or "Error: ..." message)

        Raises:
            UnknownToolError: If tool name is unknown
            ProtocolError: If the arguments don't match the tool schema
        """
        handler = self._dispatch.get(tool_name)
        if handler is None:
            raise UnknownToolError(tool_name)

        try:
            parsed = TOOL_ARGUMENTS[tool_name].model_validate(arguments or {})
        except ValidationError as e:
            logger.warning(f"Invalid arguments for {tool_name}: {e}")
            raise ProtocolError(f"Invalid arguments for {tool_name}: {e}") from e

        return await handler(**parsed.model_dump())

    def get_summary(self) -> dict[str, Any]:
        """
        Get a summary of the file editor policy.

        Returns:
            Dict with configuration summary
        """
        return {
            "tools": self.tool_names,
            "allowed_extensions": self.config.sorted_extensions(),
            "max_file_size": self.config.max_file_size,
            "max_file_size_mb": self.config.max_file_size / (1024 * 1024),
        }
