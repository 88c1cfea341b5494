from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from .models import ClipOptions, ClipResult


class IClipDownloader(ABC):
    """
    Contract for the remote clip engine.
    Abstracts away the underlying tool (yt-dlp) from the request handling.
    """

    @abstractmethod
    async def download_clip(self, options: ClipOptions) -> ClipResult:
        """
        Fetches only the requested time range of the remote video.

        Args:
            options: Resolved ClipOptions for a single request.

        Returns:
            ClipResult pointing at the produced file. The caller owns that file.

        Raises:
            InvalidRangeError: If end is not after start. Nothing is spawned.
            ProcessSpawnError: If the tool could not be started.
            ProcessExitError: If the tool exited non-zero (incl. timeouts).
            OutputNotFoundError: If the tool succeeded but left no file behind.
        """
        pass


class IOutputLocator(ABC):
    """
    yt-dlp picks the final extension itself and does not report it,
    so the produced file has to be found after the fact.
    """

    @abstractmethod
    def locate(self, directory: Path, base_name: str) -> Optional[Path]:
        """Returns the produced file for `base_name`, or None if there is none."""
        pass
