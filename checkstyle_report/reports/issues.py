"""Issue report envelope.

Functions:
    build_report(result, report_id, commit_sha, base_path) -> dict
"""

from collections import Counter
from datetime import datetime, timezone

from checkstyle_report.models import Issue, ParseResult


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def build_report(
    result: ParseResult,
    report_id: int,
    commit_sha: str,
    base_path: str,
) -> dict:
    """Wrap a ParseResult into the JSON document emitted by the CLI."""
    return {
        "report_type":  "checkstyle_issues",
        "report_id":    report_id,
        "commit_sha":   commit_sha,
        "base_path":    base_path,
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "summary": _build_summary(result),
        "issues":  [issue.to_dict() for issue in result.issues],
        "errors":  [error.to_dict() for error in result.errors],
    }


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _count_by_check(issues: list[Issue]) -> dict[str, int]:
    return dict(Counter(issue.check_name for issue in issues))


def _build_summary(result: ParseResult) -> dict:
    return {
        "total":    len(result.issues),
        "errors":   len(result.errors),
        "by_check": _count_by_check(result.issues),
    }
