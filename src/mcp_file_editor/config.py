"""
Configuration for the file editor policy.

The policy is built once at startup and handed to every validator and
handler explicitly. It is immutable after construction.
"""

import json
import os
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from mcp_file_editor.exceptions import ConfigurationError

DEFAULT_ALLOWED_EXTENSIONS = (".md", ".txt", ".json", ".yaml", ".yml", ".csv", ".log")
DEFAULT_MAX_FILE_SIZE = 10_485_760  # 10 MiB

ENV_ALLOWED_EXTENSIONS = "ALLOWED_EXTENSIONS"
ENV_MAX_FILE_SIZE = "MAX_FILE_SIZE"


def normalize_extension(ext: str) -> str:
    """Trim an extension token and make sure it starts with a dot."""
    ext = ext.strip()
    if ext and not ext.startswith("."):
        ext = f".{ext}"
    return ext


def parse_extension_list(raw: str) -> list[str]:
    """Split a comma separated extension list, skipping blank tokens."""
    return [normalize_extension(token) for token in raw.split(",") if token.strip()]


class FileEditorConfig(BaseModel):
    """
    File editor policy.

    Defines which extensions may be read or written and the maximum
    resulting size of any stored file.

    Usage:
        config = FileEditorConfig(allowed_extensions=["md", ".txt"])
        config = FileEditorConfig.from_env()
        config = FileEditorConfig.from_file("~/.config/mcp-file-editor.yaml")
    """

    model_config = {"frozen": True, "extra": "forbid"}

    allowed_extensions: frozenset[str] = Field(
        default=frozenset(DEFAULT_ALLOWED_EXTENSIONS),
        description="Allowed file extensions, case-sensitive, including the dot",
    )

    max_file_size: int = Field(
        default=DEFAULT_MAX_FILE_SIZE,
        ge=0,
        description="Maximum size of a stored file (bytes)",
    )

    @field_validator("allowed_extensions", mode="before")
    @classmethod
    def normalize_extensions(cls, v):
        """Ensure extensions start with a dot."""
        if isinstance(v, str):
            return frozenset(parse_extension_list(v))
        if not isinstance(v, (list, tuple, set, frozenset)):
            raise ValueError("allowed_extensions must be a list or a comma separated string")
        if not all(isinstance(ext, str) for ext in v):
            raise ValueError("allowed_extensions entries must be strings")
        return frozenset(normalize_extension(ext) for ext in v)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "FileEditorConfig":
        """
        Load configuration from environment variables.

        Environment variables:
            ALLOWED_EXTENSIONS - Comma separated extensions, dot optional
            MAX_FILE_SIZE - Maximum file size in bytes

        Args:
            environ: Mapping to read from (default: os.environ)

        Returns:
            FileEditorConfig instance

        Raises:
            ConfigurationError: If MAX_FILE_SIZE is not a non-negative integer
        """
        if environ is None:
            environ = os.environ

        data: dict[str, Any] = {}

        # a value with no tokens at all (e.g. ",") counts as unset
        extensions = parse_extension_list(environ.get(ENV_ALLOWED_EXTENSIONS, ""))
        if extensions:
            data["allowed_extensions"] = extensions

        raw_size = environ.get(ENV_MAX_FILE_SIZE, "").strip()
        if raw_size:
            try:
                data["max_file_size"] = int(raw_size, 10)
            except ValueError:
                raise ConfigurationError(
                    f"{ENV_MAX_FILE_SIZE} must be an integer byte count, got {raw_size!r}"
                )

        return cls.from_dict(data)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "FileEditorConfig":
        """
        Load configuration from a YAML or JSON file.

        File format (YAML):
            ```yaml
            allowed_extensions: [md, txt, json]
            max_file_size: 1048576
            ```

        Raises:
            FileNotFoundError: If the config file doesn't exist
            ConfigurationError: If the file content is invalid
        """
        path = Path(path).expanduser().resolve()

        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        content = path.read_text()

        try:
            if path.suffix == ".json":
                data = json.loads(content)
            else:
                data = yaml.safe_load(content)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Cannot parse configuration file {path}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise ConfigurationError(
                f"Configuration file {path} must contain a mapping, "
                f"got {type(data).__name__}"
            )

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FileEditorConfig":
        """Create configuration from a dictionary."""
        try:
            return cls(**data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid file editor configuration: {e}") from e

    def sorted_extensions(self) -> list[str]:
        return sorted(self.allowed_extensions)

    def describe(self) -> list[str]:
        """Startup summary lines."""
        return [
            f"Allowed extensions: {', '.join(self.sorted_extensions())}",
            f"Max file size: {self.max_file_size} bytes",
        ]

    def __repr__(self) -> str:
        return (
            f"FileEditorConfig("
            f"allowed_extensions={self.sorted_extensions()}, "
            f"max_file_size={self.max_file_size})"
        )
