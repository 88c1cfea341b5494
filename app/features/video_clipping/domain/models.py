from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from app.core.common.enums import ContainerFormat
from app.core.shared_types import TimeRange

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/122.0.0.0 Safari/537.36"
)
DEFAULT_TIMEOUT_SECONDS = 15 * 60
MIN_TIMEOUT_SECONDS = 10
TIMEOUT_MARKER = "Timed out while running yt-dlp"


@dataclass(frozen=True)
class YtDlpConfig:
    """
    Process-wide defaults for the yt-dlp adapter.
    Built once from Settings so the adapter never reads os.environ itself.
    """
    binary: str = "yt-dlp"
    user_agent: Optional[str] = None
    cookie_header: Optional[str] = None
    cookies_file: Optional[Path] = None
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS


@dataclass(frozen=True)
class ClipOptions:
    """
    Fully resolved parameters for one extraction.
    Explicit values here take precedence over YtDlpConfig.
    """
    url: str
    start_seconds: float
    end_seconds: float
    output_directory: Path
    output_base_name: Optional[str] = None
    container: ContainerFormat = ContainerFormat.MP4
    cookie_header: Optional[str] = None
    cookies_file: Optional[Path] = None
    user_agent: Optional[str] = None
    timeout_seconds: Optional[float] = None

    @property
    def time_range(self) -> TimeRange:
        """Raises InvalidRangeError when end is not after start."""
        return TimeRange(self.start_seconds, self.end_seconds)


@dataclass
class ClipResult:
    """
    The result of a successful extraction.
    The caller owns output_path and must delete it.
    """
    output_path: Path
    stdout: str = ""
    stderr: str = ""
