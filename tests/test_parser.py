"""Tests for checkstyle_report/parser.py"""

import pytest

from checkstyle_report.parser import LineFormatError, ParseError, parse_line

EXAMPLE = "[WARN] /tmp/build/src/foo.go:12:5: Missing doc comment. [MissingComment]"


# ---------------------------------------------------------------------------
# Non-matching lines
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("line", [
    "",
    "Starting audit...",
    "Audit done.",
    "[INFO] /tmp/build/src/foo.go:12:5: Missing doc comment. [MissingComment]",
    "[ERROR] /tmp/build/src/foo.go:12:5: Missing doc comment. [MissingComment]",
    "[WARN]/tmp/build/src/foo.go:12:5: Missing doc comment. [MissingComment]",
    " [WARN] /tmp/build/src/foo.go:12:5: Missing doc comment. [MissingComment]",
    "[warn] /tmp/build/src/foo.go:12:5: Missing doc comment. [MissingComment]",
])
def test_lines_without_warn_marker_do_not_match(line):
    assert parse_line(line) is None


# ---------------------------------------------------------------------------
# Matching lines
# ---------------------------------------------------------------------------

def test_example_line_fields():
    issue = parse_line(EXAMPLE)
    assert issue.file_path     == "/tmp/build/src/foo.go"
    assert issue.line_number   == 12
    assert issue.column_number == 5
    assert issue.check_name    == "MissingComment"
    assert issue.description   == "Missing doc comment."


def test_skeleton_has_no_snippet_or_report_id():
    issue = parse_line(EXAMPLE)
    assert issue.report_id == 0
    assert issue.source_snippet == ""


def test_line_without_column():
    issue = parse_line("[WARN] /src/Foo.java:7: Line is longer than 100 characters. [LineLength]")
    assert issue.line_number   == 7
    assert issue.column_number == 0


def test_path_only_yields_zero_line_and_column():
    issue = parse_line("[WARN] /src/Foo.java: File does not end with a newline. [NewlineAtEndOfFile]")
    assert issue.file_path     == "/src/Foo.java"
    assert issue.line_number   == 0
    assert issue.column_number == 0
    assert issue.check_name    == "NewlineAtEndOfFile"


def test_description_ending_with_period_gets_double_period():
    issue = parse_line("[WARN] /src/Foo.java:3:1: Ends with a dot.. [Dots]")
    assert issue.description == "Ends with a dot.."


def test_description_without_period_before_label_keeps_label():
    issue = parse_line("[WARN] /src/Foo.java:3:1: No full stop [NoStop]")
    assert issue.check_name  == "NoStop"
    assert issue.description == "No full stop [NoStop]."


def test_description_is_cut_at_first_period_bracket():
    issue = parse_line("[WARN] /src/Foo.java:3:1: First. [x] then more. [Check]")
    assert issue.description == "First."
    assert issue.check_name  == "Check"


def test_description_may_contain_colon_space():
    issue = parse_line("[WARN] /src/Foo.java:3:1: Name 'x' must match pattern: '^[a-z]+$'. [MemberName]")
    assert issue.file_path   == "/src/Foo.java"
    assert issue.check_name  == "MemberName"
    assert issue.description == "Name 'x' must match pattern: '^[a-z]+$'."


def test_empty_check_label_is_accepted():
    issue = parse_line("[WARN] /src/Foo.java:3:1: Something odd. []")
    assert issue.check_name == ""


# ---------------------------------------------------------------------------
# Malformed [WARN] lines
# ---------------------------------------------------------------------------

def test_non_numeric_line_number_raises():
    with pytest.raises(LineFormatError, match="line number"):
        parse_line("[WARN] /src/Foo.java:abc:5: Bad line. [Check]")


def test_non_numeric_column_number_raises():
    with pytest.raises(LineFormatError, match="column number"):
        parse_line("[WARN] /src/Foo.java:12:x5: Bad column. [Check]")


def test_oversized_line_number_raises_line_format_error():
    with pytest.raises(LineFormatError, match="too many digits"):
        parse_line("[WARN] /src/Foo.java:" + "9" * 5000 + ":1: Huge. [Check]")


def test_oversized_column_number_raises_line_format_error():
    with pytest.raises(LineFormatError, match="column number"):
        parse_line("[WARN] /src/Foo.java:1:" + "9" * 5000 + ": Huge. [Check]")


@pytest.mark.parametrize("segment", ["+12", "-12", " 12", "1_2"])
def test_signed_or_decorated_numbers_raise(segment):
    with pytest.raises(LineFormatError, match="line number"):
        parse_line(f"[WARN] /src/Foo.java:{segment}:1: Signed. [Check]")


def test_empty_line_segment_raises():
    with pytest.raises(LineFormatError):
        parse_line("[WARN] /src/Foo.java::5: Empty line. [Check]")


def test_missing_separator_raises():
    with pytest.raises(LineFormatError, match="missing"):
        parse_line("[WARN] /src/Foo.java:12:5 no separator here [Check]")


def test_missing_check_label_raises():
    with pytest.raises(LineFormatError, match="CheckName"):
        parse_line("[WARN] /src/Foo.java:12:5: No label at all.")


def test_check_label_with_spaces_raises():
    with pytest.raises(LineFormatError, match="invalid check label"):
        parse_line("[WARN] /src/Foo.java:12:5: Spaces. [Not A Word]")


def test_line_format_error_is_parse_error():
    assert issubclass(LineFormatError, ParseError)
