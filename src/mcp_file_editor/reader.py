"""
Line-windowed file reader.

Reads a whole text file and returns either its exact content or a
contiguous, 1-indexed range of its lines with a descriptive header.
Nothing is cached: every call re-reads the file.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Optional

from mcp_file_editor.exceptions import LineRangeError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LineWindow:
    """A contiguous range of lines drawn from a file."""

    start: int
    end: int
    total_lines: int
    lines: list[str] = field(default_factory=list)
    windowed: bool = True

    @property
    def body(self) -> str:
        return "".join(self.lines)

    @property
    def line_count(self) -> int:
        return len(self.lines)

    def header(self, path: str) -> str:
        if not self.lines:
            return f"[{path}] no lines selected (file has {self.total_lines} lines)"
        return f"[{path}] lines {self.start}-{self.end} of {self.total_lines}"

    def render(self, path: str) -> str:
        """
        Render the window as tool output.

        A whole-file read without range parameters is returned verbatim so
        it matches the stored bytes; a windowed read gets a header line.
        """
        if not self.windowed:
            return self.body
        return f"{self.header(path)}\n{self.body}"


def split_lines(content: str) -> list[str]:
    """
    Split text on '\\n', keeping terminators.

    ''.join(split_lines(s)) == s for every s. A trailing newline does not
    produce an extra empty line.
    """
    parts = content.split("\n")
    lines = [part + "\n" for part in parts[:-1]]
    if parts[-1]:
        lines.append(parts[-1])
    return lines


def select_window(
    content: str,
    start_line: Optional[int] = None,
    end_line: Optional[int] = None,
    max_lines: Optional[int] = None,
    path: str = "",
) -> LineWindow:
    """
    Select a range of lines from content.

    Args:
        content: Full file content
        start_line: First line (1-indexed, default 1; values below 1 mean 1)
        end_line: Last line, inclusive (default: last line of the file)
        max_lines: Number of lines from start_line, used only when
            end_line is not given
        path: Path used in error messages

    Returns:
        LineWindow with the selected lines

    Raises:
        LineRangeError: If the range starts past the end of the file, ends
            before it starts, or max_lines is negative
    """
    lines = split_lines(content)
    total = len(lines)
    windowed = not (start_line is None and end_line is None and max_lines is None)

    start = start_line if start_line is not None and start_line >= 1 else 1

    if end_line is not None:
        if end_line < start:
            raise LineRangeError(
                path, start, end_line, total, "end_line is before start_line"
            )
        end = end_line
    elif max_lines is not None:
        if max_lines < 0:
            raise LineRangeError(
                path, start, start + max_lines - 1, total, "max_lines must not be negative"
            )
        end = start + max_lines - 1
    else:
        end = total

    if windowed and start > total:
        raise LineRangeError(
            path, start, end, total, f"start line {start} is beyond the end of the file"
        )

    end = min(end, total)
    return LineWindow(
        start=start,
        end=end,
        total_lines=total,
        lines=lines[start - 1 : end],
        windowed=windowed,
    )


def _read_text(path: str) -> str:
    # newline="" keeps '\r\n' and '\r' exactly as stored
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()


async def read_window(
    path: str,
    start_line: Optional[int] = None,
    end_line: Optional[int] = None,
    max_lines: Optional[int] = None,
) -> LineWindow:
    """
    Read a file and select a range of its lines.

    Raises:
        LineRangeError: If the requested range is outside the file
        OSError: If the file can't be read
        UnicodeDecodeError: If the file is not valid UTF-8
    """
    content = await asyncio.to_thread(_read_text, path)
    window = select_window(content, start_line, end_line, max_lines, path=path)
    logger.debug(
        f"Read {path}: lines {window.start}-{window.end} of {window.total_lines}"
    )
    return window
