"""Tokenizer for single checkstyle output lines.

Usage:
    issue = parse_line("[WARN] /tmp/x/foo.go:12:5: Missing doc. [MissingComment]")
    # Issue(file_path="/tmp/x/foo.go", line_number=12, column_number=5, ...)
    parse_line("[INFO] starting audit")   # -> None

Grammar of a matching line:

    [WARN] <path>[:<line>[:<column>]]: <description>. [<CheckName>]
"""

import string

from checkstyle_report.models import Issue

WARN_MARKER = "[WARN] "
PATH_SEPARATOR = ": "
LINE_COL_SEPARATOR = ":"
DESCRIPTION_END = ". ["

_WORD_CHARS = frozenset(string.ascii_letters + string.digits + "_")


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class ParseError(Exception):
    """Base exception for lines that match the marker but can't be parsed."""


class LineFormatError(ParseError):
    """Raised when a ``[WARN]`` line does not follow the expected layout."""


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def parse_line(line: str) -> Issue | None:
    """Parse one line of checkstyle output into an Issue skeleton.

    Returns None when the line does not start with the ``[WARN] `` marker.
    The returned Issue carries the unstripped file path, no snippet and a
    zero report id; the dispatcher fills those in.

    Raises:
        LineFormatError: the line carries the marker but the separator, the
                         trailing check label or a numeric field is malformed.
    """
    if not line.startswith(WARN_MARKER):
        return None

    rest = line[len(WARN_MARKER):]
    location, sep, message = rest.partition(PATH_SEPARATOR)
    if not sep:
        raise LineFormatError(f"missing '{PATH_SEPARATOR}' after the file path")

    check_name = _check_name(message)
    # Without ". [" the whole message (label included) becomes the description
    raw_description = message.split(DESCRIPTION_END, 1)[0]

    file_path, line_number, column_number = _location(location)

    return Issue(
        file_path=file_path,
        line_number=line_number,
        column_number=column_number,
        check_name=check_name,
        description=f"{raw_description}.",
    )


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _check_name(message: str) -> str:
    """Return the ``[CheckName]`` label anchored at the end of *message*."""
    if not message.endswith("]"):
        raise LineFormatError("missing trailing [CheckName] label")
    start = message.rfind("[")
    if start == -1:
        raise LineFormatError("missing trailing [CheckName] label")
    name = message[start + 1:-1]
    if not all(c in _WORD_CHARS for c in name):
        raise LineFormatError(f"invalid check label '[{name}]'")
    return name


def _location(location: str) -> tuple[str, int, int]:
    """Split ``path:line:column``; absent numeric parts are zero."""
    segments = location.split(LINE_COL_SEPARATOR)
    file_path = segments[0]
    line_number = 0
    column_number = 0
    if len(segments) > 1:
        line_number = _to_int(segments[1], "line number")
    if len(segments) > 2:
        column_number = _to_int(segments[2], "column number")
    return file_path, line_number, column_number


def _to_int(text: str, what: str) -> int:
    if not (text.isascii() and text.isdigit()):
        raise LineFormatError(f"cannot convert {what} to integer: '{text}'")
    try:
        return int(text)
    except ValueError as exc:
        # Digit strings beyond the interpreter's conversion limit
        raise LineFormatError(f"cannot convert {what} to integer: too many digits") from exc
