import asyncio
import codecs
import logging
import os
import shlex
import signal
import time
from pathlib import Path
from typing import List, Optional

from app.core.common.enums import ContainerFormat
from app.core.common.timecode import seconds_to_hms
from app.core.errors import (
    ExtractionTimeoutError,
    OutputNotFoundError,
    ProcessExitError,
    ProcessSpawnError,
)
from ..domain.interfaces import IClipDownloader, IOutputLocator
from ..domain.models import (
    DEFAULT_USER_AGENT,
    MIN_TIMEOUT_SECONDS,
    TIMEOUT_MARKER,
    ClipOptions,
    ClipResult,
    YtDlpConfig,
)
from .output_locator import OrderedThenScanLocator

logger = logging.getLogger(__name__)

_READ_CHUNK = 64 * 1024
_POSIX = hasattr(os, "killpg")


async def _drain(stream: Optional[asyncio.StreamReader], sink: List[str]) -> None:
    """Appends decoded output to `sink` as it arrives, so a kill keeps what was read."""
    if stream is None:
        return
    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    while True:
        chunk = await stream.read(_READ_CHUNK)
        if not chunk:
            break
        sink.append(decoder.decode(chunk))
    sink.append(decoder.decode(b"", final=True))


def _kill(process: asyncio.subprocess.Process) -> None:
    """SIGKILL the whole process group (POSIX) or just the process."""
    if process.returncode is not None:
        return
    try:
        if _POSIX:
            os.killpg(process.pid, signal.SIGKILL)
        else:
            process.kill()
    except ProcessLookupError:
        pass


def _redacted(args: List[str]) -> List[str]:
    """Copy of the argument vector that is safe to log (no cookie values)."""
    return ["Cookie: ***" if a.startswith("Cookie:") else a for a in args]


class YtDlpClipAdapter(IClipDownloader):
    """
    Concrete implementation of IClipDownloader using yt-dlp.
    Downloads only the requested section and lets yt-dlp remux/merge
    into the target container.
    """

    def __init__(self, config: Optional[YtDlpConfig] = None, locator: Optional[IOutputLocator] = None):
        self.config = config or YtDlpConfig()
        self.locator = locator or OrderedThenScanLocator()

    def build_args(self, options: ClipOptions, output_stem: Path) -> List[str]:
        """
        Deterministic yt-dlp argument vector (binary not included).
        Order matters to tests; append new flags at the end.
        """
        start = seconds_to_hms(options.start_seconds)
        end = seconds_to_hms(options.end_seconds)

        # -f bv*+ba/b: best video+audio, or best combined stream
        # --force-keyframes-at-cuts: re-encode around cut points so the range is frame-accurate
        args = [
            options.url,
            "-f", "bv*+ba/b",
            "--no-playlist",
            "--no-progress",
            "--newline",
            "--force-keyframes-at-cuts",
            "--download-sections", f"*{start}-{end}",
            "-o", f"{output_stem}.%(ext)s",
        ]

        if options.container == ContainerFormat.MP4:
            args += ["--remux-video", "mp4"]
        else:
            args += ["--merge-output-format", options.container.value]

        user_agent = options.user_agent or self.config.user_agent or DEFAULT_USER_AGENT
        args += ["--add-header", f"User-Agent: {user_agent}"]
        args += ["--add-header", "Accept-Language: en-US,en;q=0.9"]
        args += ["--add-header", "DNT: 1"]

        cookie_header = options.cookie_header or self.config.cookie_header
        cookies_file = options.cookies_file or self.config.cookies_file
        if cookie_header:
            args += ["--add-header", f"Cookie: {cookie_header}"]
        if cookies_file:
            args += ["--cookies", str(cookies_file)]

        return args

    def effective_timeout(self, options: ClipOptions) -> float:
        requested = options.timeout_seconds
        if requested is None:
            requested = self.config.timeout_seconds
        return max(MIN_TIMEOUT_SECONDS, requested)

    async def download_clip(self, options: ClipOptions) -> ClipResult:
        # 1. Validate the range before touching disk or spawning anything
        time_range = options.time_range

        # 2. Prepare the output location
        output_dir = options.output_directory
        await asyncio.to_thread(output_dir.mkdir, parents=True, exist_ok=True)

        base_name = options.output_base_name or f"aiclips-{int(time.time() * 1000)}"
        output_stem = output_dir / base_name

        # 3. Build & run
        args = self.build_args(options, output_stem)
        logger.info(f"Clipping {time_range.duration:.1f}s from {options.url} into {output_stem}")
        logger.info(f"Executing yt-dlp: {self.config.binary} {shlex.join(_redacted(args))}")

        exit_code, stdout, stderr, timed_out = await self._run(args, self.effective_timeout(options))

        # 4. Interpret the exit
        if exit_code != 0:
            combined = (stdout + "\n" + stderr).strip()
            message = combined or f"yt-dlp exited with code {exit_code}"
            error_cls = ExtractionTimeoutError if timed_out else ProcessExitError
            logger.error(f"yt-dlp failed (code {exit_code}). STDERR: {stderr.strip()}")
            raise error_cls(message, exit_code=exit_code, stdout=stdout, stderr=stderr)

        # 5. Find what yt-dlp actually wrote
        produced = await asyncio.to_thread(self.locator.locate, output_dir, base_name)
        if produced is None:
            logger.error(f"yt-dlp exited cleanly but nothing matches {output_stem}.*")
            raise OutputNotFoundError("Clip produced no output file")

        logger.info(f"Clip ready: {produced}")
        return ClipResult(output_path=produced.resolve(), stdout=stdout, stderr=stderr)

    async def _run(self, args: List[str], timeout: float):
        """
        Spawns yt-dlp and supervises it.
        Returns (exit_code, stdout, stderr, timed_out). The process is always reaped.
        """
        try:
            process = await asyncio.create_subprocess_exec(
                self.config.binary,
                *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                # Inherit the service environment (proxy settings, HOME for yt-dlp config)
                env=dict(os.environ),
                # Own process group, so a kill also reaches the ffmpeg yt-dlp starts
                start_new_session=_POSIX,
            )
        except OSError as e:
            logger.error(f"Could not start {self.config.binary}: {e}")
            raise ProcessSpawnError(f"Failed to start {self.config.binary}: {e}") from e

        out: List[str] = []
        err: List[str] = []

        async def communicate() -> int:
            await asyncio.gather(_drain(process.stdout, out), _drain(process.stderr, err))
            return await process.wait()

        timed_out = False
        try:
            exit_code = await asyncio.wait_for(communicate(), timeout=timeout)
        except asyncio.TimeoutError:
            # Straight to SIGKILL, no grace period
            timed_out = True
            logger.warning(f"yt-dlp exceeded {timeout}s, killing pid {process.pid}")
            _kill(process)
            exit_code = await process.wait()
        finally:
            # Cancelled from outside (shutdown, handler cancelled): never leave yt-dlp running
            if process.returncode is None:
                logger.warning(f"yt-dlp supervision interrupted, killing pid {process.pid}")
                _kill(process)
                await asyncio.shield(process.wait())

        stdout = "".join(out)
        stderr = "".join(err)
        if timed_out:
            stderr += f"\n{TIMEOUT_MARKER}"
            # A process that ignored the deadline but exited 0 during the kill is still a failure
            if exit_code == 0:
                exit_code = -9

        return exit_code, stdout, stderr, timed_out
