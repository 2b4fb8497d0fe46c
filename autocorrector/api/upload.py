#endpoints

import logging
import re

from fastapi import APIRouter, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from starlette.datastructures import UploadFile

from autocorrector.config import get_config
from autocorrector.errors import AutocorrectorError, ErrorCode
from autocorrector.scanner.ingest import process_archive
from autocorrector.scanner.snippets import stylesheet

logger = logging.getLogger(__name__)

UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


upload_router = APIRouter()


def sanitize_filename(name: str) -> str:
    """Make a filename safe for a Content-Disposition header value."""
    return UNSAFE_FILENAME_CHARS.sub("_", name)


def output_filename(upload_name: str) -> str:
    if upload_name.endswith(".zip"):
        upload_name = upload_name[: -len(".zip")]
    return sanitize_filename(upload_name + "_out.zip")


@upload_router.get("/", response_class=HTMLResponse)
def upload_form(request: Request):
    config = get_config()
    return request.app.state.templates.TemplateResponse(
        request, "upload.html", {"title": config.title}
    )


@upload_router.api_route("/upload", methods=["GET", "POST"])
async def upload(request: Request):
    content_type = request.headers.get("content-type", "")
    if request.method != "POST" or not content_type.startswith("multipart/form-data"):
        return RedirectResponse("/", status_code=303)

    config = get_config()

    try:
        form = await request.form()
    except Exception as e:
        raise AutocorrectorError(ErrorCode.UPLOAD_INVALID, f"Could not parse upload form: {e}") from e

    upload_file = form.get("file")
    if not isinstance(upload_file, UploadFile):
        raise AutocorrectorError(ErrorCode.UPLOAD_MISSING_FILE, "Form field 'file' is missing")

    data = await upload_file.read(config.max_upload_bytes + 1)
    await upload_file.close()
    if len(data) > config.max_upload_bytes:
        raise AutocorrectorError(
            ErrorCode.UPLOAD_TOO_LARGE,
            f"Upload exceeds {config.max_upload_mb} MB",
            details={"limit_bytes": config.max_upload_bytes},
        )

    filename = upload_file.filename or "upload.zip"
    logger.info("Received %s (%d bytes)", filename, len(data))

    result = await run_in_threadpool(process_archive, data, config)

    if result.archive is not None:
        return Response(
            content=result.archive,
            media_type="application/zip",
            headers={"Content-Disposition": f"attachment; filename={output_filename(filename)}"},
        )

    return request.app.state.templates.TemplateResponse(
        request,
        "report.html",
        {
            "title": config.title,
            "filename": filename,
            "report": result.report,
            "highlight_css": stylesheet(config.check.pygments_style),
        },
    )
