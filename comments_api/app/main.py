"""
Main entrypoint for the Comments API.

This module assembles the FastAPI application, sets up logging and
includes versioned routers.  The ``create_app`` function builds and
configures the app, which is then instantiated at module import time
as ``app``.  Run it with uvicorn or another ASGI server, e.g.::

    uvicorn comments_api.app.main:app --reload
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .api.v1.router import router as v1_router
from .core.config import Settings, settings
from .core.logging_config import setup_logging
from .core.storage import JsonFileStorage
from .services.comment_service import CommentService


logger = logging.getLogger(__name__)


def _validation_error_message(exc: RequestValidationError) -> str:
    """Name the first offending body field, or describe a malformed body."""
    for error in exc.errors():
        loc = error.get("loc", ())
        if len(loc) >= 2 and loc[0] == "body" and isinstance(loc[1], str):
            return f"Field {loc[1]} is invalid"
    return "Comment payload is malformed"


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # 422 is reserved for duplicate comments, so malformed payloads are 400.
    message = _validation_error_message(exc)
    logger.warning("Rejected request to %s: %s", request.url.path, message)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": message})


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    app_settings : Optional[Settings]
        Settings to use instead of the module level ``settings``.
        Tests pass their own to point the app at a temporary file.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    app_settings = app_settings or settings
    setup_logging(
        app_settings.log_level,
        app_settings.log_file,
        max_bytes=app_settings.log_max_bytes,
        backup_count=app_settings.log_backup_count,
    )

    storage = JsonFileStorage(app_settings.get_comments_path())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Create the comments file on first start so that reads succeed.
        storage.initialize()
        logger.info("Serving comments from %s", storage.path)
        yield

    app = FastAPI(
        title=app_settings.project_name,
        version=app_settings.api_version,
        debug=app_settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.comment_service = CommentService(storage)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    app.include_router(v1_router, prefix=app_settings.api_prefix)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
