from __future__ import annotations
import io
import logging
import stat
import zipfile
import zlib
from typing import List, Optional, Tuple

from autocorrector.config import AutocorrectorConfig, get_config
from autocorrector.errors import AutocorrectorError, ErrorCode
from autocorrector.models.contracts import ArchiveResult, Finding, LintReport
from autocorrector.scanner.header import check_author_header
from autocorrector.scanner.linter import run_linter
from autocorrector.scanner.snippets import render_snippet
from autocorrector.scanner.source import decode_source, split_lines, utf8_error

logger = logging.getLogger(__name__)

# errors zipfile raises for a damaged or unsupported member
ENTRY_READ_ERRORS = (zipfile.BadZipFile, zlib.error, NotImplementedError, RuntimeError, EOFError, OSError)


def is_regular_file(info: zipfile.ZipInfo) -> bool:
    if info.is_dir():
        return False
    # archives written outside unix carry no mode; a mode without type bits is a plain file too
    mode = info.external_attr >> 16
    return stat.S_IFMT(mode) in (0, stat.S_IFREG)


def is_target(info: zipfile.ZipInfo, extension: str) -> bool:
    return is_regular_file(info) and info.filename.endswith(extension)


def attach_snippets(findings: List[Finding], source: str, config: AutocorrectorConfig) -> None:
    if not findings or config.check.context_lines <= 0:
        return
    lines = split_lines(source)
    for finding in findings:
        finding.snippet = render_snippet(
            lines, finding, context=config.check.context_lines, style=config.check.pygments_style
        )


def check_file(name: str, raw: bytes, config: AutocorrectorConfig) -> Tuple[bytes, List[Finding]]:
    """Run every check on one source file.

    Returns the linter's fixed content and the findings in report order:
    header findings first, then the linter's remaining diagnostics. A file
    that is not valid UTF-8 is reported instead of being sent to the linter,
    which would reject it, and is kept unchanged.
    """
    source = decode_source(raw)
    findings = check_author_header(
        source, require_after_docstring=config.check.require_author_after_docstring
    )

    encoding_error = utf8_error(raw)
    if encoding_error is not None:
        findings.append(encoding_error)
        attach_snippets(findings, source, config)
        logger.debug("%s: not valid UTF-8, skipped linter", name)
        return raw, findings

    output = run_linter(raw, config.linter, source_name=name)
    lint_findings = [d.to_finding() for d in output.diagnostics]

    attach_snippets(findings, source, config)
    # with --fix, ruff reports rows of the fixed output
    attach_snippets(lint_findings, decode_source(output.fixed), config)

    findings.extend(lint_findings)
    logger.debug("%s: %d finding(s)", name, len(findings))
    return output.fixed, findings


def process_archive(data: bytes, config: Optional[AutocorrectorConfig] = None) -> ArchiveResult:
    """Check every source file of a zip archive and build the corrected archive.

    Entries that are not target source files are copied with the same
    header and the same bytes. Target files are replaced by the linter's
    fixed output. The corrected archive is only returned when no file has
    any finding left.

    Raises ARCHIVE_INVALID when ``data`` is not a readable zip archive and
    ARCHIVE_READ_FAILED when a member cannot be decompressed.
    """
    config = config or get_config()
    extension = config.check.target_extension
    report = LintReport()
    out = io.BytesIO()

    try:
        zin = zipfile.ZipFile(io.BytesIO(data), "r")
    except (zipfile.BadZipFile, zipfile.LargeZipFile, ValueError) as e:
        raise AutocorrectorError(ErrorCode.ARCHIVE_INVALID, f"Upload is not a valid zip archive: {e}") from e

    with zin, zipfile.ZipFile(out, "w") as zout:
        for info in zin.infolist():
            try:
                raw = zin.read(info)
            except ENTRY_READ_ERRORS as e:
                raise AutocorrectorError(
                    ErrorCode.ARCHIVE_READ_FAILED,
                    f"Could not read archive entry {info.filename}: {e}",
                    details={"entry": info.filename},
                ) from e

            if not is_target(info, extension):
                zout.writestr(info, raw)
                continue

            fixed, findings = check_file(info.filename, raw, config)
            report.add(info.filename, findings)
            zout.writestr(info, fixed)

    logger.info(
        "Checked %d file(s) of %d entries: %d finding(s) in %d file(s)",
        report.files_checked, len(zin.infolist()), report.total_findings, len(report.files),
    )

    if report.has_findings:
        return ArchiveResult(report=report)
    return ArchiveResult(report=report, archive=out.getvalue())
