# File: tests/conftest.py

import os
import stat
import sys
from pathlib import Path

import pytest

# 1. Add project root to path
sys.path.append(os.getcwd())

# 2. Import Settings
from app.core.config.settings import settings

# Shared prologue for fake yt-dlp scripts: recovers the `-o` template
# and exposes the output stem (template without ".%(ext)s") as $stem.
FAKE_YTDLP_PROLOGUE = """#!/bin/sh
out=""
prev=""
for a in "$@"; do
  if [ "$prev" = "-o" ]; then out="$a"; fi
  prev="$a"
done
stem="${out%.*}"
"""


@pytest.fixture
def fake_ytdlp(tmp_path):
    """
    Factory: writes an executable stand-in for yt-dlp and returns its path.
    `body` is shell script run after the prologue above.
    """
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()

    def _make(body: str, name: str = "yt-dlp") -> Path:
        script = bin_dir / name
        script.write_text(FAKE_YTDLP_PROLOGUE + body + "\n")
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return script

    return _make


@pytest.fixture
def isolated_dirs(tmp_path, monkeypatch):
    """
    Points the shared temp directories at a per-test location so
    cleanup assertions can inspect them.
    """
    output_dir = tmp_path / "clips"
    cookie_dir = tmp_path / "cookies"
    monkeypatch.setattr(settings, "CLIP_OUTPUT_DIR", output_dir)
    monkeypatch.setattr(settings, "CLIP_COOKIE_DIR", cookie_dir)
    settings.ensure_dirs()
    return output_dir, cookie_dir
