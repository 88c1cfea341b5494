# File: app/core/config/settings.py

import os
import shutil
import tempfile
from pathlib import Path
from typing import Tuple

from dotenv import load_dotenv

from app.features.video_clipping.domain.models import YtDlpConfig

# Local .env overrides are optional; real environment variables win.
load_dotenv(override=False)


def _split_domains(raw: str) -> Tuple[str, ...]:
    return tuple(d.strip().lower() for d in raw.split(",") if d.strip())


class Settings:
    # --- Server ---
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8080"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # --- Paths ---
    # Shared temp storage; every request writes uniquely named files here.
    TMP_DIR: Path = Path(tempfile.gettempdir())
    CLIP_OUTPUT_DIR: Path = Path(os.getenv("CLIP_OUTPUT_DIR", str(TMP_DIR / "aiclips")))
    CLIP_COOKIE_DIR: Path = Path(os.getenv("CLIP_COOKIE_DIR", str(TMP_DIR / "aiclips-cookies")))

    # --- Source allow-list ---
    ALLOWED_DOMAINS: Tuple[str, ...] = _split_domains(
        os.getenv("CLIP_ALLOWED_DOMAINS", "youtube.com,youtu.be")
    )

    # --- External Tools ---
    # Auto-detect yt-dlp or use env var
    YTDLP_BINARY: str = os.getenv("YTDLP_BINARY_PATH", shutil.which("yt-dlp") or "yt-dlp")
    CLIP_TIMEOUT_SECONDS: float = float(os.getenv("CLIP_TIMEOUT_SECONDS", "900"))

    # --- Request overrides for yt-dlp ---
    YOUTUBE_USER_AGENT: str = os.getenv("YOUTUBE_USER_AGENT", "")
    YOUTUBE_COOKIE_HEADER: str = os.getenv("YOUTUBE_COOKIE_HEADER", "")
    YT_COOKIES_FILE: str = os.getenv("YT_COOKIES_FILE", "")

    def ytdlp_config(self) -> YtDlpConfig:
        """Snapshot of the yt-dlp related settings, handed to the adapter at construction."""
        return YtDlpConfig(
            binary=self.YTDLP_BINARY,
            user_agent=self.YOUTUBE_USER_AGENT or None,
            cookie_header=self.YOUTUBE_COOKIE_HEADER or None,
            cookies_file=Path(self.YT_COOKIES_FILE) if self.YT_COOKIES_FILE else None,
            timeout_seconds=self.CLIP_TIMEOUT_SECONDS,
        )

    def ensure_dirs(self):
        """Creates the temp directories if they don't exist."""
        self.CLIP_OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
        self.CLIP_COOKIE_DIR.mkdir(parents=True, exist_ok=True)


settings = Settings()
