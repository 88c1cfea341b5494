import re

from app.core.errors import AuthenticationRequiredError

# yt-dlp has no structured error channel; these are the phrases it prints
# when YouTube wants a signed-in session. Keep every signature here.
_AUTH_SIGNATURES = re.compile(
    r"Sign in to confirm you[’']?re not a bot"
    r"|Use --cookies-from-browser"
    r"|pass cookies to yt-dlp",
    re.IGNORECASE,
)

AUTH_ERROR_MESSAGE = "YouTube requires authentication. Pass cookieHeader or cookiesTxtBase64."
AUTH_HINT = "Export cookies.txt or forward your Cookie header for youtube.com"
AUTH_DOCS = "https://github.com/yt-dlp/yt-dlp/wiki/FAQ#how-do-i-pass-cookies-to-yt-dlp"


def requires_authentication(message: str) -> bool:
    return bool(message) and _AUTH_SIGNATURES.search(message) is not None


def classify_failure(exc: Exception) -> Exception:
    """
    Upgrades a tool failure to AuthenticationRequiredError when its text
    matches a known sign-in prompt. Anything else is returned unchanged.
    """
    if isinstance(exc, AuthenticationRequiredError):
        return exc
    if requires_authentication(str(exc)):
        return AuthenticationRequiredError(AUTH_ERROR_MESSAGE, cause=exc)
    return exc
