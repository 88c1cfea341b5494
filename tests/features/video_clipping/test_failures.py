import pytest

from app.core.errors import AuthenticationRequiredError, ProcessExitError
from app.features.video_clipping.domain.failures import classify_failure, requires_authentication


@pytest.mark.parametrize("message", [
    "ERROR: [youtube] abc: Sign in to confirm you're not a bot. This helps protect our community.",
    "ERROR: [youtube] abc: Sign in to confirm you’re not a bot.",
    "sign in to confirm youre not a bot",
    "Use --cookies-from-browser or --cookies for the authentication.",
    "See https://github.com/yt-dlp/yt-dlp/wiki/FAQ for how to manually pass cookies to yt-dlp",
])
def test_detects_auth_prompts(message):
    assert requires_authentication(message)


@pytest.mark.parametrize("message", ["", "ERROR: Video unavailable", "HTTP Error 403: Forbidden"])
def test_ignores_other_failures(message):
    assert not requires_authentication(message)


def test_classify_wraps_auth_failures():
    original = ProcessExitError("ERROR: Sign in to confirm you're not a bot", exit_code=1)

    classified = classify_failure(original)

    assert isinstance(classified, AuthenticationRequiredError)
    assert classified.cause is original
    assert classified.status_code == 401


def test_classify_leaves_other_errors_alone():
    original = ProcessExitError("ERROR: Video unavailable", exit_code=1)

    assert classify_failure(original) is original
