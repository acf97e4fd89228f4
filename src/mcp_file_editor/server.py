"""
MCP stdio server exposing the file editor tools.

Every tool is a thin wrapper around FileEditorTools.execute_tool, and its
parameters take their descriptions from the argument models, so the MCP
surface and local dispatch validate and behave identically.
"""

import logging
from typing import Annotated, Optional

from mcp.server.fastmcp import FastMCP

from mcp_file_editor.config import FileEditorConfig
from mcp_file_editor.models import (
    AppendFileArguments,
    CreateFileArguments,
    PathArguments,
    ReadFileArguments,
    WriteFileArguments,
    field_description,
)
from mcp_file_editor.tools import TOOL_DESCRIPTIONS, FileEditorTools

logger = logging.getLogger(__name__)

SERVER_NAME = "mcp-file-editor"

ReadPath = Annotated[str, field_description(ReadFileArguments, "path")]
StartLine = Annotated[Optional[int], field_description(ReadFileArguments, "start_line")]
EndLine = Annotated[Optional[int], field_description(ReadFileArguments, "end_line")]
MaxLines = Annotated[Optional[int], field_description(ReadFileArguments, "max_lines")]
FilePath = Annotated[str, field_description(PathArguments, "path")]
WriteContent = Annotated[str, field_description(WriteFileArguments, "content")]
CreateContent = Annotated[str, field_description(CreateFileArguments, "content")]
AppendContent = Annotated[str, field_description(AppendFileArguments, "content")]


def _without_none(**arguments) -> dict:
    return {key: value for key, value in arguments.items() if value is not None}


def create_server(config: FileEditorConfig) -> FastMCP:
    """
    Build an MCP server whose tools delegate to FileEditorTools.

    Args:
        config: File editor policy shared by all tools

    Returns:
        FastMCP server, ready for run()
    """
    tools = FileEditorTools(config)
    mcp = FastMCP(SERVER_NAME)

    @mcp.tool(name="read_file", description=TOOL_DESCRIPTIONS["read_file"])
    async def read_file(
        path: ReadPath,
        start_line: StartLine = None,
        end_line: EndLine = None,
        max_lines: MaxLines = None,
    ) -> str:
        arguments = _without_none(
            path=path, start_line=start_line, end_line=end_line, max_lines=max_lines
        )
        return await tools.execute_tool("read_file", arguments)

    @mcp.tool(name="write_file", description=TOOL_DESCRIPTIONS["write_file"])
    async def write_file(path: FilePath, content: WriteContent) -> str:
        return await tools.execute_tool("write_file", {"path": path, "content": content})

    @mcp.tool(name="file_exists", description=TOOL_DESCRIPTIONS["file_exists"])
    async def file_exists(path: FilePath) -> str:
        return await tools.execute_tool("file_exists", {"path": path})

    @mcp.tool(name="create_file", description=TOOL_DESCRIPTIONS["create_file"])
    async def create_file(path: FilePath, content: CreateContent = "") -> str:
        return await tools.execute_tool("create_file", {"path": path, "content": content})

    @mcp.tool(name="append_file", description=TOOL_DESCRIPTIONS["append_file"])
    async def append_file(path: FilePath, content: AppendContent) -> str:
        return await tools.execute_tool("append_file", {"path": path, "content": content})

    @mcp.tool(name="get_file_info", description=TOOL_DESCRIPTIONS["get_file_info"])
    async def get_file_info(path: FilePath) -> str:
        return await tools.execute_tool("get_file_info", {"path": path})

    logger.debug(f"Registered {', '.join(tools.tool_names)} on {SERVER_NAME}")
    return mcp


def run_server(config: FileEditorConfig) -> None:
    """Serve the file editor tools over stdio until the client disconnects."""
    for line in config.describe():
        logger.info(line)
    create_server(config).run(transport="stdio")
