"""Concurrent conversion of a whole checkstyle report into issues.

Usage:
    result = get_issues(output, commit_sha, "/tmp/build", report_id=7)
    result.issues   # unordered list of Issue
    result.errors   # LineError per malformed [WARN] line, by line index

Each report line is handled by its own unit of work on a small thread pool
(MAX_WORKERS at a time). Units share nothing but the result, which is only
touched under a lock.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace

from checkstyle_report.models import Issue, LineError, ParseResult
from checkstyle_report.parser import ParseError, parse_line
from checkstyle_report.snippet import DEFAULT_CONTEXT_LINES, get_snippet

logger = logging.getLogger(__name__)

MAX_WORKERS = 3


class BasePathError(ParseError):
    """Raised when the base path does not occur in an issue's file path."""


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def get_issues(
    output: str,
    commit_sha: str,
    base_path: str,
    report_id: int,
    *,
    context_lines: int = DEFAULT_CONTEXT_LINES,
    max_workers: int = MAX_WORKERS,
    strict: bool = False,
) -> ParseResult:
    """Parse every line of *output* and return the resulting issues.

    Args:
        output:        Raw checkstyle output, one diagnostic per line.
        commit_sha:    Commit the report was produced for. Not stamped on
                       issues; report envelopes carry it instead.
        base_path:     Prefix removed from every file path, e.g. the CI
                       checkout directory.
        report_id:     Identifier stamped on every produced issue.
        context_lines: Snippet window size, see ``get_snippet``.
        max_workers:   Number of lines processed concurrently.
        strict:        Re-raise the first line's ParseError instead of
                       collecting it in ``ParseResult.errors``.

    Raises:
        ParseError: only when *strict* is set and a line failed.
        ValueError: when *max_workers* is not positive.
    """
    if max_workers < 1:
        raise ValueError(f"max_workers must be at least 1, got {max_workers}")

    lines = output.split("\n")
    logger.debug("Dispatching %d lines for report %s (commit %s)",
                 len(lines), report_id, commit_sha or "-")

    result = ParseResult()
    failures: list[tuple[int, ParseError]] = []
    lock = threading.Lock()

    def work(index: int, line: str) -> None:
        try:
            issue = _process_line(line, base_path, report_id, context_lines)
        except ParseError as exc:
            logger.warning("Skipping line %d of report %s: %s", index, report_id, exc)
            with lock:
                failures.append((index, exc))
                result.errors.append(LineError(line_index=index, line=line, message=str(exc)))
            return
        if issue is None:
            return
        with lock:
            result.issues.append(issue)

    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        futures = [pool.submit(work, index, line) for index, line in enumerate(lines, start=1)]
    # Leaving the executor waits for every unit; surface anything unexpected
    for future in futures:
        future.result()

    result.errors.sort(key=lambda e: e.line_index)
    if strict and failures:
        raise min(failures, key=lambda f: f[0])[1]

    logger.debug("Report %s: %d issues, %d errors",
                 report_id, len(result.issues), len(result.errors))
    return result


def strip_base_path(file_path: str, base_path: str) -> str:
    """Return the part of *file_path* after the first occurrence of *base_path*.

    Raises:
        BasePathError: *base_path* does not occur in *file_path*.
    """
    pos = file_path.find(base_path)
    if pos == -1:
        raise BasePathError(f"base path '{base_path}' not found in '{file_path}'")
    return file_path[pos + len(base_path):]


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _process_line(line: str, base_path: str, report_id: int,
                  context_lines: int) -> Issue | None:
    issue = parse_line(line)
    if issue is None:
        return None
    # The snippet is read from the absolute path, before stripping
    snippet = get_snippet(issue.file_path, issue.line_number, issue.column_number,
                          context_lines)
    return replace(
        issue,
        report_id=report_id,
        source_snippet=snippet,
        file_path=strip_base_path(issue.file_path, base_path),
    )
