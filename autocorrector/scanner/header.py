"""Check the ``__author__`` attribution line every submitted module must carry.

The required form is::

    __author__ = "<student id>, <name>"

The line has to start at column 1. When the module has a docstring the
attribution must come after it, otherwise the docstring stops being the
module docstring.
"""

from __future__ import annotations

import re
from typing import List, Optional, Tuple

from autocorrector.models.contracts import Finding, Location
from autocorrector.scanner.source import split_lines

MARKER = "__author__"

# compiled once, matched against whole lines
MARKER_TOKEN_RE = re.compile(rf"{MARKER}\b")
AUTHOR_RE = re.compile(rf'{MARKER} = "(?P<student_id>[0-9]+), (?P<name>\w+)"')
DOCSTRING_START_RE = re.compile(r'(?i:[ru]?)("""|\'\'\')')

MSG_MISSING = f"missing {MARKER} line"
MSG_INVALID = f'invalid {MARKER} line format, expected {MARKER} = "<student id>, <name>"'
MSG_ORDER = f"{MARKER} line must come after the module docstring"


def is_marker_line(line: str) -> bool:
    return MARKER_TOKEN_RE.match(line) is not None


def is_valid_marker_line(line: str) -> bool:
    return AUTHOR_RE.fullmatch(line.rstrip()) is not None


def module_docstring_span(lines: List[str]) -> Optional[Tuple[int, int]]:
    """Return the 1-based first and last rows of the module docstring, if there is one.

    Blank lines, comments and attribution lines may precede it; anything else
    means the module has no leading docstring. An unterminated docstring runs
    to the end of the file.
    """
    for row, line in enumerate(lines, start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#") or is_marker_line(line):
            continue
        m = DOCSTRING_START_RE.match(line)
        if m is None:
            return None
        quote = m.group(1)
        if quote in line[m.end():]:
            return row, row
        for end, rest in enumerate(lines[row:], start=row + 1):
            if quote in rest:
                return row, end
        return row, len(lines)
    return None


def find_module_docstring(lines: List[str]) -> Optional[int]:
    span = module_docstring_span(lines)
    return span[0] if span else None


def _line_finding(row: int, start_col: int, end_col: int, message: str) -> Finding:
    return Finding(
        location=Location(row=row, column=start_col),
        end_location=Location(row=row, column=end_col),
        message=message,
    )


def check_author_header(source: str, *, require_after_docstring: bool = True) -> List[Finding]:
    lines = split_lines(source)
    findings: List[Finding] = []

    docstring = module_docstring_span(lines)
    seen_marker = False

    for row, line in enumerate(lines, start=1):
        if not is_marker_line(line):
            continue
        # prose inside the docstring may mention the marker
        if docstring is not None and docstring[0] <= row <= docstring[1]:
            continue
        seen_marker = True
        line = line.rstrip()
        if not is_valid_marker_line(line):
            findings.append(_line_finding(row, len(MARKER) + 1, len(line) + 1, MSG_INVALID))
        if require_after_docstring and docstring is not None and row < docstring[0]:
            findings.append(_line_finding(row, 1, len(line) + 1, MSG_ORDER))

    if not seen_marker:
        findings.append(_line_finding(1, 1, 1, MSG_MISSING))

    return findings
