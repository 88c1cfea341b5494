from pathlib import Path
from typing import Optional, Sequence

from ..domain.interfaces import IOutputLocator


class OrderedThenScanLocator(IOutputLocator):
    """
    Two-phase lookup for the file yt-dlp produced:
    1. Check `<base>.<ext>` for a fixed, ordered list of containers.
    2. Otherwise take the first directory entry named `<base>.*`.
    """

    # Most-preferred containers first
    PREFERRED_EXTENSIONS = ("mp4", "mkv", "webm", "mov", "m4a", "mp3")

    def __init__(self, extensions: Sequence[str] = PREFERRED_EXTENSIONS):
        self.extensions = tuple(extensions)

    def locate(self, directory: Path, base_name: str) -> Optional[Path]:
        for ext in self.extensions:
            candidate = directory / f"{base_name}.{ext}"
            if candidate.is_file():
                return candidate

        if not directory.is_dir():
            return None

        prefix = f"{base_name}."
        # sorted() keeps the fallback deterministic across filesystems
        for entry in sorted(directory.iterdir()):
            if entry.name.startswith(prefix) and entry.is_file():
                return entry
        return None
