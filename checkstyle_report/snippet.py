"""Source snippet extraction for parsed issues."""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_CONTEXT_LINES = 3


def get_snippet(path: str, line: int, column: int,
                context_lines: int = DEFAULT_CONTEXT_LINES) -> str:
    """Return the lines leading up to *line* in *path*, with a column caret.

    The window starts ``context_lines`` before the target line. When the
    target line is itself smaller than ``context_lines`` the window starts at
    the target line, so issues near the top of a file get a one-line snippet.

    A non-zero *column* adds a final line with a ``^`` under that column.
    Returns an empty string when the file can't be read.
    """
    try:
        # Bytes, not read_text: only "\n" separates lines, "\r" is kept
        text = Path(path).read_bytes().decode("utf-8", errors="replace")
    except (OSError, ValueError) as exc:
        logger.warning("Unable to load file to generate snippet: %s", exc)
        return ""

    if line < context_lines:
        start_line = line
    else:
        start_line = line - context_lines

    parts: list[str] = []
    for number, source_line in enumerate(text.split("\n"), start=1):
        if start_line <= number <= line:
            parts.append(source_line if number == line else source_line + "\n")
    snippet = "".join(parts)

    if column != 0:
        snippet += "\n" + " " * (column - 1) + "^"

    return snippet
