"""
Argument models for file editor tool calls.

These are the single source of argument names, types and descriptions:
FileEditorTools validates calls against them and the MCP server builds
its tool signatures from their fields. Line parameters are not
range-checked here; the reader clamps or rejects them and reports the
outcome as a text result.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field


class PathArguments(BaseModel):
    """Arguments for tools that only take a path (file_exists, get_file_info)."""

    model_config = {"extra": "forbid"}

    path: str = Field(description="Path to the file")


class ReadFileArguments(PathArguments):
    start_line: Optional[int] = Field(
        default=None,
        description="First line to read (1-indexed; missing or below 1 means 1)",
    )
    end_line: Optional[int] = Field(
        default=None,
        description="Last line to read, inclusive (default: last line). "
        "Must not be before start_line",
    )
    max_lines: Optional[int] = Field(
        default=None,
        description="Maximum number of lines to read, not negative "
        "(ignored when end_line is set)",
    )


class WriteFileArguments(PathArguments):
    content: str = Field(description="Content to write")


class CreateFileArguments(PathArguments):
    content: str = Field(default="", description="Initial content (default: empty)")


class AppendFileArguments(PathArguments):
    content: str = Field(description="Content to append")


def field_description(model: type[BaseModel], name: str) -> Any:
    """A Field carrying the description of a model field, for use in Annotated."""
    return Field(description=model.model_fields[name].description)
