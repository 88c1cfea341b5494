from typing import Optional


class ClipError(Exception):
    """
    Base class for every failure the clip service knows how to report.
    `status_code` is the HTTP status the API boundary maps it to.
    """
    status_code: int = 500


# --- 400: the caller sent something we won't work with ---

class ValidationError(ClipError):
    """Malformed request shape or payload."""
    status_code = 400


class TimeFormatError(ValidationError):
    """A time expression matched none of the supported grammars."""


class AuthorizationError(ClipError):
    """The URL's host is not on the source allow-list."""
    status_code = 400


class InvalidRangeError(ClipError, ValueError):
    status_code = 400


# --- 401: the external tool wants credentials ---

class AuthenticationRequiredError(ClipError):
    status_code = 401

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


# --- 500: the extraction itself went wrong ---

class ProcessSpawnError(ClipError):
    """The external binary is missing or could not be started."""


class ExtractionFailedError(ClipError):
    """
    Common parent for "the tool ran but we got no clip".
    The message is the raw cause, kept verbatim for operators.
    """


class ProcessExitError(ExtractionFailedError):
    def __init__(self, message: str, exit_code: int, stdout: str = "", stderr: str = ""):
        super().__init__(message)
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr


class ExtractionTimeoutError(ProcessExitError):
    """Non-zero exit caused by our own kill after the time budget ran out."""


class OutputNotFoundError(ExtractionFailedError):
    """Zero exit code, but no file matching the output base name exists."""
