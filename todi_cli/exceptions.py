"""
todi-cli exception hierarchy.

All custom exceptions live here to avoid circular imports.
Every CliError subclass carries the process exit code it maps to.
"""


class CliError(Exception):
    """Exit code 1 — runtime, API, I/O and resolution failures."""

    exit_code = 1


class UsageError(CliError):
    """Exit code 2 — bad flags, missing arguments, conflicting options."""

    exit_code = 2


class ConfirmationError(UsageError):
    """Exit code 2 — destructive action declined or not confirmable."""


class AuthError(CliError):
    """Exit code 1 — no API token available."""


class ConfigError(CliError):
    """Exit code 1 — config file could not be read, parsed or written."""


class ApiError(CliError):
    """Non-2xx response from the Todoist API."""

    def __init__(self, status, reason, body=""):
        self.status = status
        self.reason = reason
        self.body = body
        detail = (body or "").strip()
        message = f"api error: {status} {reason}".rstrip()
        if detail:
            message += f": {detail}"
        super().__init__(message)


class DecodeError(CliError):
    """Response body was not the JSON shape we expected."""

    def __init__(self, detail):
        self.detail = detail
        super().__init__(f"decode response: {detail}")


class PaginationError(CliError):
    """Cursor sequence did not terminate."""


class ResolutionError(CliError):
    """Base for name-to-ID lookup failures."""

    def __init__(self, kind, name, message):
        self.kind = kind
        self.name = name
        super().__init__(message)


class NotFoundError(ResolutionError):
    def __init__(self, kind, name):
        super().__init__(kind, name, f"{kind} not found: {name}")


class NotUniqueError(ResolutionError):
    def __init__(self, kind, name, noun="name", hint=None):
        message = f"{kind} {noun} not unique: {name}"
        if hint:
            message += f" (use {hint})"
        super().__init__(kind, name, message)


class HTTPError(Exception):
    """Raised by _http_request for HTTP errors that callers want to handle."""

    def __init__(self, code, reason, body, headers=None):
        self.code = code
        self.reason = reason
        self.body = body
        self.headers = headers or {}
