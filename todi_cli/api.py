"""
HTTP request layer and wire helpers for todi-cli.

Everything here is transport-level: URL building, the urllib call,
multipart framing and JSON decoding. Todoist semantics live in client.py.
"""

import http.client
import json
import mimetypes
import os
import urllib.error
import urllib.parse
import urllib.request
import uuid

from todi_cli import config
from todi_cli.exceptions import CliError, DecodeError, HTTPError

# ---------------------------------------------------------------------------
# Security helpers
# ---------------------------------------------------------------------------


def _mask_token(token):
    """Show only first 6 chars of a token for safe logging."""
    return token[:6] + "..." if len(token) > 6 else token


# ---------------------------------------------------------------------------
# URL and body helpers
# ---------------------------------------------------------------------------


def normalize_base(base):
    """Strip trailing slashes from an API base URL."""
    return (base or "").rstrip("/")


def build_url(base, path, params=None):
    """Join *base* and *path* and append non-empty *params* in sorted key order."""
    url = normalize_base(base) + path
    if params:
        pairs = sorted((k, str(v)) for k, v in params.items() if v is not None and str(v) != "")
        if pairs:
            url += "?" + urllib.parse.urlencode(pairs)
    return url


def decode_json(raw, context="response"):
    """Decode a JSON response body, raising DecodeError on malformed input."""
    try:
        return json.loads(raw.decode("utf-8"))
    except UnicodeDecodeError as e:
        raise DecodeError(f"{context} is not valid UTF-8: {e.reason}") from e
    except json.JSONDecodeError as e:
        raise DecodeError(f"{e.msg} at position {e.pos}") from e


_FILENAME_ESCAPES = {"\r": "%0D", "\n": "%0A", '"': "%22"}


def _quote_filename(name):
    """Percent-encode CR, LF and double quotes so a file name stays inside its header."""
    return "".join(_FILENAME_ESCAPES.get(ch, ch) for ch in name)


def encode_multipart(form_fields, file_field, file_name, content):
    """Build a multipart/form-data body.

    Returns (body_bytes, content_type_header).
    """
    boundary = uuid.uuid4().hex
    crlf = b"\r\n"
    chunks = []
    for name, value in form_fields.items():
        if value is None or value == "":
            continue
        chunks.append(f"--{boundary}".encode())
        chunks.append(f'Content-Disposition: form-data; name="{name}"'.encode())
        chunks.append(b"")
        chunks.append(str(value).encode("utf-8"))
    mime = mimetypes.guess_type(file_name)[0] or "application/octet-stream"
    safe_name = _quote_filename(file_name)
    chunks.append(f"--{boundary}".encode())
    chunks.append(
        f'Content-Disposition: form-data; name="{file_field}"; filename="{safe_name}"'.encode()
    )
    chunks.append(f"Content-Type: {mime}".encode())
    chunks.append(b"")
    chunks.append(content)
    chunks.append(f"--{boundary}--".encode())
    chunks.append(b"")
    return crlf.join(chunks), f"multipart/form-data; boundary={boundary}"


def read_upload_file(path):
    """Read a file for upload. The handle is closed on every exit path."""
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as e:
        raise CliError(f"open file: {e}") from e


def upload_file_name(path, override=None):
    return override or os.path.basename(path)


# ---------------------------------------------------------------------------
# HTTP request layer
# ---------------------------------------------------------------------------


def _http_request(url, body=None, headers=None, method="GET", timeout=None):
    """Make a single HTTP request (no retries).

    Returns the raw response body as bytes.
    Raises HTTPError for status >= 400 (caller maps it).
    Raises CliError on network/timeout errors."""
    if timeout is None:
        timeout = config.HTTP_TIMEOUT_SECONDS
    req = urllib.request.Request(url, data=body, headers=headers or {}, method=method)
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            return resp.read()
    except urllib.error.HTTPError as e:
        error_body = e.read().decode("utf-8", errors="replace") if e.fp else ""
        raise HTTPError(e.code, e.reason, error_body, headers=e.headers) from e
    except TimeoutError as e:
        raise CliError(f"request timed out after {timeout} seconds: {method} {url}") from e
    except urllib.error.URLError as e:
        raise CliError(f"connection failed: {e.reason}") from e
    except (http.client.HTTPException, ConnectionError) as e:
        raise CliError(f"connection failed: {e}") from e
