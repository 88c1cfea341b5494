from typing import Optional

from app.core.config.settings import settings
from ..domain.interfaces import IClipDownloader
from ..domain.models import ClipOptions, ClipResult
from ..data.ytdlp_adapter import YtDlpClipAdapter


def build_downloader() -> IClipDownloader:
    """Default engine: yt-dlp, configured from process settings."""
    return YtDlpClipAdapter(config=settings.ytdlp_config())


async def download_clip(options: ClipOptions, downloader: Optional[IClipDownloader] = None) -> ClipResult:
    """
    Public Service API: Extract a time range of a remote video into a local file.

    Args:
        options: Resolved ClipOptions (offsets in seconds, output dir, container...).
        downloader: Engine override; defaults to the yt-dlp adapter.

    Returns:
        ClipResult. The caller is responsible for deleting result.output_path.
    """
    engine = downloader or build_downloader()
    return await engine.download_clip(options)
