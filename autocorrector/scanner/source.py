"""Decoding and line splitting shared by the checks.

Rows are counted the way ruff and editors count them: only ``\\n``,
``\\r\\n`` and ``\\r`` end a line. ``str.splitlines`` also breaks on form
feeds and other separators, which would shift every later row.
"""

from __future__ import annotations

import codecs
import re
from typing import List, Optional

from autocorrector.models.contracts import Finding, Location

LINE_END_RE = re.compile(r"\r\n|\r|\n")

MSG_NOT_UTF8 = "file is not valid UTF-8, save it with UTF-8 encoding"


def split_lines(source: str) -> List[str]:
    if not source:
        return []
    lines = LINE_END_RE.split(source)
    if lines[-1] == "":
        lines.pop()
    return lines


def decode_source(raw: bytes) -> str:
    return raw.decode("utf-8-sig", errors="replace")


def utf8_error(raw: bytes) -> Optional[Finding]:
    """Return a finding at the first byte that is not valid UTF-8, if any."""
    body = raw[len(codecs.BOM_UTF8):] if raw.startswith(codecs.BOM_UTF8) else raw
    try:
        body.decode("utf-8")
    except UnicodeDecodeError as e:
        # everything before the bad byte decodes cleanly
        prefix = LINE_END_RE.split(body[:e.start].decode("utf-8"))
        location = Location(row=len(prefix), column=len(prefix[-1]) + 1)
        return Finding(
            location=location,
            end_location=Location(row=location.row, column=location.column + 1),
            message=f"{MSG_NOT_UTF8} (byte 0x{body[e.start]:02x})",
        )
    return None
