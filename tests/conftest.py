"""
Shared test fixtures for todi-cli tests.
Isolates the environment and replaces urlopen so no test touches the network
or the real config file.
"""

import io
import json
import os
import sys
import urllib.error
import urllib.parse

import pytest

# Add project root to path so imports work without installing
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from todi_cli import config  # noqa: E402
from todi_cli.cli import run  # noqa: E402


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch, tmp_path):
    """Every test starts without a token and with a throwaway config dir."""
    monkeypatch.delenv(config.TOKEN_ENV, raising=False)
    monkeypatch.delenv(config.API_BASE_ENV, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))


@pytest.fixture
def token(monkeypatch):
    monkeypatch.setenv(config.TOKEN_ENV, "test-token-123456")
    return "test-token-123456"


# ---------------------------------------------------------------------------
# Fake Todoist server
# ---------------------------------------------------------------------------


class FakeResponse:
    def __init__(self, body):
        self._body = body

    def read(self):
        return self._body

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


class Recorded:
    """One request seen by FakeTodoist."""

    def __init__(self, req):
        parts = urllib.parse.urlsplit(req.full_url)
        self.url = req.full_url
        self.method = req.get_method()
        self.path = parts.path
        self.query = dict(urllib.parse.parse_qsl(parts.query))
        self.headers = {k.lower(): v for k, v in req.header_items()}
        self.data = req.data

    def json(self):
        return json.loads(self.data.decode("utf-8"))


class FakeTodoist:
    """Stands in for urllib.request.urlopen.

    Responses are queued per (method, path); the last one queued for a
    route is reused once the queue is down to it.
    """

    def __init__(self):
        self.routes = {}
        self.requests = []

    def add(self, method, path, body=None, status=200, reason="OK"):
        if isinstance(body, (dict, list)):
            body = json.dumps(body)
        if isinstance(body, str):
            body = body.encode("utf-8")
        key = (method, config.API_PREFIX + path)
        self.routes.setdefault(key, []).append((status, reason, body or b""))

    def page(self, path, results, next_cursor=""):
        self.add("GET", path, {"results": results, "next_cursor": next_cursor})

    def __call__(self, req, timeout=None):
        rec = Recorded(req)
        self.requests.append(rec)
        queue = self.routes.get((rec.method, rec.path))
        if not queue:
            raise AssertionError(f"unexpected request: {rec.method} {rec.url}")
        status, reason, body = queue.pop(0) if len(queue) > 1 else queue[0]
        if status >= 400:
            raise urllib.error.HTTPError(rec.url, status, reason, {}, io.BytesIO(body))
        return FakeResponse(body)

    def calls(self, method, path):
        return [r for r in self.requests if r.method == method and r.path == config.API_PREFIX + path]


@pytest.fixture
def fake_api(monkeypatch):
    fake = FakeTodoist()
    monkeypatch.setattr("todi_cli.api.urllib.request.urlopen", fake)
    return fake


# ---------------------------------------------------------------------------
# CLI runner
# ---------------------------------------------------------------------------


class TTYInput(io.StringIO):
    """stdin that claims to be a terminal."""

    def isatty(self):
        return True


@pytest.fixture
def tty():
    return TTYInput


class CliResult:
    def __init__(self, code, out, err):
        self.code = code
        self.out = out
        self.err = err

    def json(self):
        return json.loads(self.out)


@pytest.fixture
def cli():
    def _run(*args, stdin=None):
        out, err = io.StringIO(), io.StringIO()
        code = run(list(args), out=out, err=err, stdin=stdin or io.StringIO())
        return CliResult(code, out.getvalue(), err.getvalue())

    return _run
