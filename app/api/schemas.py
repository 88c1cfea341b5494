from typing import Any, Dict, Iterable, Optional

from pydantic import BaseModel, Field, HttpUrl

from app.core.common.enums import ContainerFormat


class ClipRequest(BaseModel):
    """
    Inbound clip request. Field names follow the public JSON API.
    `start`/`end` stay raw strings here; the time parser resolves them later.
    """
    url: HttpUrl
    start: str
    end: str
    # Optional ways to pass cookies
    cookieHeader: Optional[str] = Field(default=None, min_length=1)
    cookiesTxtBase64: Optional[str] = Field(default=None, min_length=1)
    format: ContainerFormat = ContainerFormat.MP4


def format_validation_errors(errors: Iterable[Dict[str, Any]]) -> str:
    """Flattens pydantic error dicts into one readable line."""
    parts = []
    for error in errors:
        location = ".".join(str(p) for p in error.get("loc", ()) if p != "body")
        message = error.get("msg", "invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts) or "Invalid request"
