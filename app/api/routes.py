import logging
import secrets
from typing import Optional

import anyio
import anyio.to_thread
from fastapi import APIRouter, Depends
from pydantic import ValidationError as PydanticValidationError

from app.core.common.timecode import parse_time_to_seconds
from app.core.config.settings import settings
from app.core.errors import AuthorizationError, ClipError, ValidationError
from app.features.credentials.service.api import stage_cookie_jar
from app.features.video_clipping.domain.failures import classify_failure
from app.features.video_clipping.domain.interfaces import IClipDownloader
from app.features.video_clipping.domain.models import ClipOptions
from app.features.video_clipping.service.api import build_downloader, download_clip

from .allowlist import is_allowed_source
from .schemas import ClipRequest, format_validation_errors
from .streaming import ClipStreamingResponse, RequestArtifacts, release

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


def get_downloader() -> IClipDownloader:
    """FastAPI dependency; tests override it with a fake engine."""
    return build_downloader()


def new_base_name() -> str:
    # 8 url-safe chars; uniqueness is the only guard in the shared temp dir
    return f"aiclips-{secrets.token_urlsafe(6)}"


@router.get("/health")
async def health():
    return {"ok": True}


@router.get("/clip")
async def clip_from_query(
    url: str = "",
    start: str = "",
    end: str = "",
    cookieHeader: Optional[str] = None,
    downloader: IClipDownloader = Depends(get_downloader),
):
    """Browser-friendly form: mp4 only, no cookie jar upload."""
    try:
        request = ClipRequest(url=url, start=start, end=end, cookieHeader=cookieHeader or None)
    except PydanticValidationError as e:
        raise ValidationError(format_validation_errors(e.errors())) from e
    return await serve_clip(request, downloader)


@router.post("/clip")
async def clip_from_json(request: ClipRequest, downloader: IClipDownloader = Depends(get_downloader)):
    return await serve_clip(request, downloader)


async def serve_clip(request: ClipRequest, downloader: IClipDownloader) -> ClipStreamingResponse:
    """
    Runs one extraction and streams the clip back.
    All failures are raised before the response starts; the exception
    handlers in app.main turn them into JSON.
    """
    url = str(request.url)

    # 1. Authorize
    if not is_allowed_source(url, settings.ALLOWED_DOMAINS):
        logger.info(f"Rejected clip request for disallowed host: {request.url.host}")
        raise AuthorizationError("Only YouTube URLs are supported")

    # 2. Resolve times (parser errors surface verbatim)
    start_seconds = parse_time_to_seconds(request.start)
    end_seconds = parse_time_to_seconds(request.end)

    output_dir = settings.CLIP_OUTPUT_DIR
    base_name = new_base_name()

    artifacts = RequestArtifacts()
    artifacts.add_output(output_dir, base_name)

    try:
        # 3. Stage credentials
        cookies_file = None
        if request.cookiesTxtBase64:
            credential = await anyio.to_thread.run_sync(stage_cookie_jar, request.cookiesTxtBase64)
            artifacts.add_credential(credential)
            cookies_file = credential.path

        # 4. Extract
        options = ClipOptions(
            url=url,
            start_seconds=start_seconds,
            end_seconds=end_seconds,
            output_directory=output_dir,
            output_base_name=base_name,
            container=request.format,
            cookie_header=request.cookieHeader,
            cookies_file=cookies_file,
            timeout_seconds=settings.CLIP_TIMEOUT_SECONDS,
        )
        result = await download_clip(options, downloader)
        artifacts.add_file(result.output_path)
    except BaseException as exc:
        # Includes cancellation: the staged jar and partial output must not outlive the request
        await release(artifacts)
        if not isinstance(exc, Exception):
            raise
        classified = classify_failure(exc)
        if classified is not exc:
            logger.warning(f"Extraction for {url} needs authentication")
            raise classified from exc
        if isinstance(exc, ClipError):
            raise
        logger.exception(f"Unexpected failure while clipping {url}")
        raise ClipError(str(exc) or exc.__class__.__name__) from exc

    # 5. Stream
    filename = result.output_path.name
    headers = {"Content-Disposition": f'attachment; filename="{filename}"'}
    logger.info(f"Streaming {filename} to client")

    return ClipStreamingResponse(
        result.output_path,
        artifacts,
        media_type=request.format.media_type,
        headers=headers,
    )
