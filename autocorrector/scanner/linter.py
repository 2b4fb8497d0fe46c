"""
ruff adapter.

Pipes a file through ``ruff check --fix`` and collects the diagnostics that
remain after fixing. With ``--fix`` on stdin, ruff writes the fixed source to
stdout and the JSON diagnostics to stderr.
"""

from __future__ import annotations

import json
import logging
import subprocess
from dataclasses import dataclass, field
from typing import List, Optional, Union

from pydantic import TypeAdapter, ValidationError

from autocorrector.config import LinterConfig
from autocorrector.errors import AutocorrectorError, ErrorCode
from autocorrector.models.contracts import RuffDiagnostic

logger = logging.getLogger(__name__)

# exit code 1 means diagnostics were reported, not that ruff failed
OK_EXIT_CODES = (0, 1)
STDERR_EXCERPT = 2000

# fixed rule set every submission is graded against
RUFF_SELECT = "F,E,W,N,I,D100,D101,D102,D103,D104,D105,D106,D107"

_diagnostics_adapter = TypeAdapter(List[RuffDiagnostic])


@dataclass
class LinterOutput:
    fixed: bytes
    diagnostics: List[RuffDiagnostic] = field(default_factory=list)


def build_command(config: LinterConfig) -> List[str]:
    return [
        config.python, "-m", "ruff", "check",
        "--isolated",
        "--output-format=json",
        "-",
        f"--select={RUFF_SELECT}",
        "--fix",
    ]


def parse_diagnostics(payload: Union[bytes, str], source_name: Optional[str] = None) -> List[RuffDiagnostic]:
    """Parse ruff's JSON output into diagnostics.

    An empty payload counts as no diagnostics.

    Raises:
        AutocorrectorError: LINTER_OUTPUT_INVALID when the payload is not a
            JSON list of diagnostics.
    """
    if isinstance(payload, bytes):
        payload = payload.decode("utf-8", errors="replace")
    if not payload.strip():
        return []

    try:
        data = json.loads(payload)
    except json.JSONDecodeError as e:
        raise AutocorrectorError(
            ErrorCode.LINTER_OUTPUT_INVALID,
            f"Invalid JSON from linter: {e}",
            details={"file": source_name, "output": payload[:STDERR_EXCERPT]},
        ) from e

    try:
        return _diagnostics_adapter.validate_python(data)
    except ValidationError as e:
        raise AutocorrectorError(
            ErrorCode.LINTER_OUTPUT_INVALID,
            "Unexpected diagnostic shape from linter",
            details={"file": source_name, "errors": str(e)[:STDERR_EXCERPT]},
        ) from e


def run_linter(content: bytes, config: LinterConfig, source_name: Optional[str] = None) -> LinterOutput:
    cmd = build_command(config)
    logger.debug("Running linter on %s: %s", source_name, cmd)

    try:
        proc = subprocess.run(
            cmd,
            input=content,
            capture_output=True,
            timeout=config.timeout_seconds,
        )
    except subprocess.TimeoutExpired as e:
        # subprocess.run kills the child before re-raising
        logger.error("Linter timed out after %ss on %s", config.timeout_seconds, source_name)
        raise AutocorrectorError(
            ErrorCode.LINTER_TIMEOUT,
            f"Linter did not finish within {config.timeout_seconds} seconds",
            details={"file": source_name},
        ) from e
    except FileNotFoundError as e:
        logger.error("Linter executable not found: %s", config.python)
        raise AutocorrectorError(
            ErrorCode.LINTER_NOT_INSTALLED,
            f"Linter executable not found: {config.python}",
            details={"file": source_name},
        ) from e

    if proc.returncode not in OK_EXIT_CODES:
        stderr = proc.stderr.decode("utf-8", errors="replace").strip()
        logger.error("Linter exited with %d on %s: %s", proc.returncode, source_name, stderr[:STDERR_EXCERPT])
        raise AutocorrectorError(
            ErrorCode.LINTER_FAILED,
            f"Linter exited with code {proc.returncode}",
            details={"file": source_name, "stderr": stderr[:STDERR_EXCERPT]},
        )

    diagnostics = parse_diagnostics(proc.stderr, source_name)
    return LinterOutput(fixed=proc.stdout, diagnostics=diagnostics)
