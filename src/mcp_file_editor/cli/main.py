"""
CLI for mcp-file-editor.

Runs the MCP stdio server, shows the effective policy, and can execute a
single tool call locally for testing.
"""

import asyncio
import logging
import sys
from typing import Optional

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from mcp_file_editor import __version__
from mcp_file_editor.config import FileEditorConfig
from mcp_file_editor.exceptions import ConfigurationError, ProtocolError
from mcp_file_editor.tools import FileEditorTools

# Load environment variables
load_dotenv()

# stdout carries the protocol, so everything human-facing goes to stderr
console = Console(stderr=True)

INTEGER_ARGUMENTS = {"start_line", "end_line", "max_lines"}


def setup_logging(verbose: bool = False) -> None:
    """Setup rich logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def load_config(config_path: Optional[str]) -> FileEditorConfig:
    """Load the policy from a file if given, otherwise from the environment."""
    try:
        if config_path:
            return FileEditorConfig.from_file(config_path)
        return FileEditorConfig.from_env()
    except ConfigurationError as e:
        console.print(f"[bold red]Configuration error:[/bold red] {e}")
        sys.exit(1)


def parse_arguments(pairs: tuple[str, ...]) -> dict:
    """Turn key=value pairs into tool arguments."""
    arguments = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep:
            raise click.BadParameter(f"expected key=value, got {pair!r}", param_hint="--arg")
        if key in INTEGER_ARGUMENTS:
            try:
                arguments[key] = int(value)
            except ValueError:
                raise click.BadParameter(f"{key} must be an integer", param_hint="--arg")
        else:
            arguments[key] = value
    return arguments


@click.group()
@click.version_option(version=__version__)
def cli():
    """MCP File Editor - policy-guarded file tools for agents."""
    pass


@cli.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="YAML or JSON policy file (default: ALLOWED_EXTENSIONS / MAX_FILE_SIZE)",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def serve(config_path: Optional[str], verbose: bool):
    """
    Serve the file tools over MCP stdio.

    Examples:

        mcp-file-editor serve

        ALLOWED_EXTENSIONS=md,txt MAX_FILE_SIZE=1048576 mcp-file-editor serve
    """
    from mcp_file_editor.server import run_server

    setup_logging(verbose)
    config = load_config(config_path)
    run_server(config)


@cli.command("show-config")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="YAML or JSON policy file",
)
def show_config(config_path: Optional[str]):
    """Show the effective file policy."""
    config = load_config(config_path)
    summary = FileEditorTools(config).get_summary()

    table = Table(title="mcp-file-editor policy")
    table.add_column("Setting", style="bold")
    table.add_column("Value")
    table.add_row("Allowed extensions", ", ".join(summary["allowed_extensions"]))
    table.add_row(
        "Max file size",
        f"{summary['max_file_size']} bytes ({summary['max_file_size_mb']:.2f} MB)",
    )
    table.add_row("Tools", ", ".join(summary["tools"]))
    Console().print(table)


@cli.command()
@click.argument("tool_name")
@click.option(
    "--arg",
    "-a",
    "pairs",
    multiple=True,
    help="Tool argument as key=value (repeatable)",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="YAML or JSON policy file",
)
def call(tool_name: str, pairs: tuple[str, ...], config_path: Optional[str]):
    """
    Execute a single tool call and print its result.

    Examples:

        mcp-file-editor call read_file -a path=notes.md -a start_line=5 -a max_lines=3

        mcp-file-editor call create_file -a path=todo.md -a content="# Notes"
    """
    config = load_config(config_path)
    tools = FileEditorTools(config)
    arguments = parse_arguments(pairs)

    try:
        result = asyncio.run(tools.execute_tool(tool_name, arguments))
    except ProtocolError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        sys.exit(2)

    click.echo(result)


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
