import base64
import binascii
import logging
import os
import secrets
import time
from pathlib import Path

from app.core.errors import ValidationError
from ..domain.interfaces import ICredentialStager
from ..domain.models import StagedCredential

logger = logging.getLogger(__name__)


class TempCookieJarStager(ICredentialStager):
    """
    Writes cookie jars to: <directory>/cookies-<ms>-<random>.txt
    Files are created exclusively with mode 0600.
    """

    def __init__(self, directory: Path):
        self.directory = directory

    def stage(self, cookies_b64: str) -> StagedCredential:
        # 1. Decode
        try:
            content = base64.b64decode(cookies_b64, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValidationError(f"cookiesTxtBase64 is not valid base64: {e}") from e

        # 2. Ensure the shared cookie dir exists (owner-only on first creation)
        self.directory.mkdir(mode=0o700, parents=True, exist_ok=True)

        # 3. Write with restrictive permissions from the start
        path = self.directory / f"cookies-{int(time.time() * 1000)}-{secrets.token_urlsafe(6)[:6]}.txt"
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
        with os.fdopen(fd, "wb") as f:
            f.write(content)

        logger.debug(f"Staged cookie jar ({len(content)} bytes) at {path}")
        return StagedCredential(path=path)
