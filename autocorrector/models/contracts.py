# Shared contract between the upload API and the scanner
# ruff's JSON fields are mirrored as-is; keep RuffDiagnostic in sync with `ruff check --output-format=json`

from typing import Optional, List
from pydantic import BaseModel, Field


class Location(BaseModel):
    row: int
    column: int


class Finding(BaseModel):
    code: Optional[str] = None
    location: Location
    end_location: Location
    message: str
    url: Optional[str] = None
    snippet: Optional[str] = None

    @property
    def rows(self) -> List[int]:
        start = max(self.location.row, 1)
        end = max(self.end_location.row, start)
        return list(range(start, end + 1))


class RuffEdit(BaseModel):
    content: Optional[str] = None
    location: Location
    end_location: Location


class RuffFix(BaseModel):
    applicability: Optional[str] = None
    message: Optional[str] = None
    edits: List[RuffEdit] = Field(default_factory=list)


class RuffDiagnostic(BaseModel):
    code: Optional[str] = None
    filename: Optional[str] = None
    location: Location
    end_location: Location
    message: str
    fix: Optional[RuffFix] = None
    noqa_row: Optional[int] = None
    url: Optional[str] = None

    def to_finding(self) -> Finding:
        return Finding(
            code=self.code,
            location=self.location,
            end_location=self.end_location,
            message=self.message,
            url=self.url,
        )


class FileReport(BaseModel):
    filename: str
    findings: List[Finding] = Field(default_factory=list)


class LintReport(BaseModel):
    files: List[FileReport] = Field(default_factory=list)
    files_checked: int = 0

    @property
    def total_findings(self) -> int:
        return sum(len(f.findings) for f in self.files)

    @property
    def has_findings(self) -> bool:
        return self.total_findings > 0

    def add(self, filename: str, findings: List[Finding]) -> None:
        self.files_checked += 1
        if findings:
            self.files.append(FileReport(filename=filename, findings=findings))


class ArchiveResult(BaseModel):
    report: LintReport
    archive: Optional[bytes] = None
