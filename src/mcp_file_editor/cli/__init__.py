"""Command line interface for mcp-file-editor."""
