"""Data models for checkstyle reports.

Contains dataclasses used to structure and serialize the JSON output:
    - Issue        one finding parsed from a ``[WARN]`` line
    - LineError    a matching line that could not be turned into an Issue
    - ParseResult  everything produced by one dispatcher call
"""

from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass(frozen=True)
class Issue:
    report_id: int = 0
    file_path: str = ""
    line_number: int = 0
    column_number: int = 0
    check_name: str = ""
    description: str = ""
    source_snippet: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class LineError:
    line_index: int
    line: str
    message: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class ParseResult:
    """Issues (unordered) and per-line errors (ordered by ``line_index``)."""

    issues: list[Issue] = field(default_factory=list)
    errors: list[LineError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors
