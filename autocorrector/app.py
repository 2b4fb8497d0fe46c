# autocorrector/app.py
# FastAPI application: routes, static assets, templates and error mapping

from __future__ import annotations

import logging
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from autocorrector import __version__
from autocorrector.api.upload import upload_router
from autocorrector.config import get_config
from autocorrector.errors import AutocorrectorError, ErrorCode

logger = logging.getLogger(__name__)

PACKAGE_DIR = Path(__file__).resolve().parent
STATIC_DIR = PACKAGE_DIR / "static"
TEMPLATES_DIR = PACKAGE_DIR / "templates"


async def autocorrector_error_handler(request: Request, exc: AutocorrectorError):
    logger.error(f"[API] {exc.code.value}: {exc.message}", extra={"details": exc.details})
    return JSONResponse(status_code=exc.http_status, content=exc.to_dict())


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error("[API] Unhandled error on %s", request.url.path, exc_info=exc)
    error = AutocorrectorError(
        ErrorCode.INTERNAL_ERROR,
        "Internal server error",
        details={"original_type": type(exc).__name__},
    )
    return JSONResponse(status_code=error.http_status, content=error.to_dict())


def create_app() -> FastAPI:
    app = FastAPI(
        title=get_config().title,
        description="Checks zipped Python submissions and returns a corrected archive or a report",
        version=__version__,
    )
    app.state.templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
    app.add_exception_handler(AutocorrectorError, autocorrector_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")
    app.include_router(upload_router)
    return app


app = create_app()
