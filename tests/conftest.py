"""Shared test fixtures for the autocorrector tests."""

from __future__ import annotations

import io
import json
import subprocess
import zipfile
from typing import Callable, Dict, List, Optional, Tuple

import pytest

from autocorrector.config import AutocorrectorConfig, set_config
from autocorrector.scanner import linter

GOOD_SOURCE = '"""Say hello."""\n__author__ = "12345, Alice"\n\nprint("hello")\n'

F401 = {
    "cell": None,
    "code": "F401",
    "end_location": {"column": 10, "row": 4},
    "filename": "-",
    "fix": {
        "applicability": "safe",
        "edits": [{"content": "", "end_location": {"column": 1, "row": 5}, "location": {"column": 1, "row": 4}}],
        "message": "Remove unused import: `os`",
    },
    "location": {"column": 8, "row": 4},
    "message": "`os` imported but unused",
    "noqa_row": 4,
    "url": "https://docs.astral.sh/ruff/rules/unused-import",
}

F821 = {
    "cell": None,
    "code": "F821",
    "end_location": {"column": 15, "row": 5},
    "filename": "-",
    "fix": None,
    "location": {"column": 1, "row": 5},
    "message": "Undefined name `undefined_name`",
    "noqa_row": 5,
    "url": "https://docs.astral.sh/ruff/rules/undefined-name",
}


class FakeRuff:
    """Stand-in for ``subprocess.run`` that answers like ``ruff check --fix -``.

    By default it echoes the input back as the fixed source and reports no
    diagnostics. ``responses`` maps an input payload to
    ``(stdout, diagnostics, returncode)``.
    """

    def __init__(self) -> None:
        self.calls: List[dict] = []
        self.responses: Dict[bytes, Tuple[bytes, list, int]] = {}
        self.fixed_suffix = b""
        self.error: Optional[BaseException] = None

    def __call__(self, cmd, input=None, capture_output=False, timeout=None, **kwargs):
        self.calls.append({"cmd": cmd, "input": input, "timeout": timeout})
        if self.error is not None:
            raise self.error
        if input in self.responses:
            stdout, diagnostics, rc = self.responses[input]
        else:
            stdout, diagnostics, rc = input + self.fixed_suffix, [], 0
        return subprocess.CompletedProcess(cmd, rc, stdout=stdout, stderr=json.dumps(diagnostics).encode())


@pytest.fixture
def fake_ruff(monkeypatch) -> FakeRuff:
    fake = FakeRuff()
    monkeypatch.setattr(linter.subprocess, "run", fake)
    return fake


@pytest.fixture
def config():
    cfg = AutocorrectorConfig()
    set_config(cfg)
    yield cfg
    set_config(None)


@pytest.fixture
def make_zip() -> Callable[..., bytes]:
    """Build an in-memory zip archive from ``(name, data)`` pairs or ZipInfo objects."""

    def _make(entries) -> bytes:
        buf = io.BytesIO()
        with zipfile.ZipFile(buf, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            for name, data in entries:
                if isinstance(data, str):
                    data = data.encode("utf-8")
                zf.writestr(name, data)
        return buf.getvalue()

    return _make
