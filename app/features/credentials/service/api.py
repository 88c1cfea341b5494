from pathlib import Path
from typing import Optional

from app.core.common.files import remove_quietly
from app.core.config.settings import settings
from ..domain.models import StagedCredential
from ..data.cookie_jar import TempCookieJarStager


def stage_cookie_jar(cookies_b64: str, directory: Optional[Path] = None) -> StagedCredential:
    """
    Public Service API: materialise a base64 cookies.txt for yt-dlp.
    The caller owns the returned file and must discard() it.
    """
    stager = TempCookieJarStager(directory or settings.CLIP_COOKIE_DIR)
    return stager.stage(cookies_b64)


def discard(credential: StagedCredential) -> None:
    remove_quietly(credential.path)
