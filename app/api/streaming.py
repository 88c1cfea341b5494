import logging
from pathlib import Path
from typing import AsyncIterator, List, Tuple

import anyio
import anyio.to_thread
from fastapi.responses import StreamingResponse

from app.core.common.files import remove_quietly
from app.features.credentials.domain.models import StagedCredential
from app.features.credentials.service.api import discard

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


class RequestArtifacts:
    """
    Every temp file one request created: the clip (and any partial
    `<base>.*` leftovers) plus a staged cookie jar.
    cleanup() is idempotent; it is wired to every way a response can end.
    """

    def __init__(self):
        self._paths: List[Path] = []
        self._prefixes: List[Tuple[Path, str]] = []
        self._credentials: List[StagedCredential] = []
        self._cleaned = False

    def add_file(self, path: Path) -> None:
        self._paths.append(path)

    def add_output(self, directory: Path, base_name: str) -> None:
        self._prefixes.append((directory, base_name))

    def add_credential(self, credential: StagedCredential) -> None:
        self._credentials.append(credential)

    def cleanup(self) -> None:
        """Blocking filesystem work; async callers go through release()."""
        if self._cleaned:
            return
        self._cleaned = True

        targets = list(self._paths)
        for directory, base_name in self._prefixes:
            if directory.is_dir():
                targets.extend(directory.glob(f"{base_name}.*"))

        for path in targets:
            remove_quietly(path)
        for credential in self._credentials:
            discard(credential)
        logger.debug(f"Cleaned up {len(targets) + len(self._credentials)} temp file(s)")


async def release(artifacts: RequestArtifacts) -> None:
    """
    Runs cleanup() in a worker thread. Shielded, so it still completes
    when the calling task is being cancelled.
    """
    with anyio.CancelScope(shield=True):
        await anyio.to_thread.run_sync(artifacts.cleanup)


async def iter_file(path: Path, artifacts: RequestArtifacts, chunk_size: int = CHUNK_SIZE) -> AsyncIterator[bytes]:
    """
    Streams `path` in order without loading it into memory.
    Cleanup runs when the stream ends, fails, or is cancelled by a disconnect.
    """
    try:
        async with await anyio.open_file(path, "rb") as f:
            while True:
                chunk = await f.read(chunk_size)
                if not chunk:
                    break
                yield chunk
    finally:
        await release(artifacts)


class ClipStreamingResponse(StreamingResponse):
    """
    StreamingResponse that releases the request's artifacts however the
    send ends: completion, client disconnect, or a failed write.
    """

    def __init__(self, path: Path, artifacts: RequestArtifacts, **kwargs):
        super().__init__(iter_file(path, artifacts), **kwargs)
        self.artifacts = artifacts

    async def __call__(self, scope, receive, send) -> None:
        try:
            await super().__call__(scope, receive, send)
        finally:
            await release(self.artifacts)
