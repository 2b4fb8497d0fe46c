"""Render the code around a finding as highlighted HTML."""

from __future__ import annotations

from functools import lru_cache
from typing import List, Optional, Tuple

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import PythonLexer

from autocorrector.models.contracts import Finding

CONTEXT_LINES = 5
CSS_CLASS = "highlight"


def context_window(line_count: int, start_row: int, end_row: int, context: int = CONTEXT_LINES) -> Tuple[int, int]:
    """Return the first and last 1-based rows to show, clamped to the file."""
    start_row = min(max(start_row, 1), line_count)
    end_row = min(max(end_row, start_row), line_count)
    return max(1, start_row - context), min(line_count, end_row + context)


@lru_cache(maxsize=None)
def stylesheet(style: str = "default") -> str:
    return HtmlFormatter(style=style, cssclass=CSS_CLASS).get_style_defs(f".{CSS_CLASS}")


def render_snippet(
    lines: List[str],
    finding: Finding,
    context: int = CONTEXT_LINES,
    style: str = "default",
) -> Optional[str]:
    if not lines:
        return None

    first, last = context_window(len(lines), finding.location.row, finding.end_location.row, context)
    # hl_lines counts from the first line of the snippet, not from linenostart
    marked = [row - first + 1 for row in finding.rows if first <= row <= last]

    formatter = HtmlFormatter(
        style=style,
        cssclass=CSS_CLASS,
        linenos="inline",
        linenostart=first,
        hl_lines=marked,
        wrapcode=True,
    )
    # stripnl would drop leading blank lines and shift the highlighted rows
    lexer = PythonLexer(stripnl=False)
    return highlight("\n".join(lines[first - 1:last]), lexer, formatter)
