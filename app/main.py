import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.config.settings import settings
from app.core.errors import AuthenticationRequiredError, ClipError
from app.core.logging import configure_logging
from app.features.video_clipping.domain.failures import AUTH_DOCS, AUTH_HINT
from app.api.routes import router
from app.api.schemas import format_validation_errors

logger = logging.getLogger(__name__)


async def handle_clip_error(request: Request, exc: ClipError) -> JSONResponse:
    body = {"error": str(exc)}
    if isinstance(exc, AuthenticationRequiredError):
        body["hint"] = AUTH_HINT
        body["docs"] = AUTH_DOCS
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(status_code=exc.status_code, content=body)


async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": format_validation_errors(exc.errors())})


def create_app() -> FastAPI:
    configure_logging(settings.LOG_LEVEL)
    settings.ensure_dirs()

    app = FastAPI(title="AIClips backend")
    app.include_router(router)
    app.add_exception_handler(ClipError, handle_clip_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    return app


app = create_app()


def run() -> None:
    logger.info(f"AIClips backend listening on http://{settings.HOST}:{settings.PORT}")
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
