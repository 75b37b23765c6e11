"""Tests for api.py — URL building, multipart framing, decoding, HTTP errors."""

import http.client
import io
import urllib.error
from unittest.mock import patch

import pytest

from todi_cli.api import (
    _http_request,
    _mask_token,
    build_url,
    decode_json,
    encode_multipart,
    normalize_base,
    read_upload_file,
    upload_file_name,
)
from todi_cli.exceptions import CliError, DecodeError, HTTPError


class TestMaskToken:
    def test_long_token(self):
        assert _mask_token("abcdef1234567890") == "abcdef..."

    def test_short_token(self):
        assert _mask_token("abc") == "abc"

    def test_exactly_six(self):
        assert _mask_token("abcdef") == "abcdef"


class TestBuildUrl:
    def test_strips_trailing_slash(self):
        assert normalize_base("http://localhost:8080///") == "http://localhost:8080"
        assert build_url("http://x/", "/api/v1/tasks") == "http://x/api/v1/tasks"

    def test_params_sorted_and_blank_dropped(self):
        url = build_url(
            "https://api.todoist.com",
            "/api/v1/tasks",
            {"project_id": "p1", "limit": 50, "cursor": "", "label": None},
        )
        assert url == "https://api.todoist.com/api/v1/tasks?limit=50&project_id=p1"

    def test_values_are_escaped(self):
        url = build_url("http://x", "/uploads", {"file_url": "https://f/a b?c=1"})
        assert url == "http://x/uploads?file_url=https%3A%2F%2Ff%2Fa+b%3Fc%3D1"

    def test_all_params_blank_means_no_query(self):
        assert build_url("http://x", "/tasks", {"cursor": ""}) == "http://x/tasks"


class TestDecodeJson:
    def test_object(self):
        assert decode_json(b'{"a": 1}') == {"a": 1}

    def test_invalid_json(self):
        with pytest.raises(DecodeError) as exc_info:
            decode_json(b"<html>")
        assert str(exc_info.value).startswith("decode response: ")
        assert exc_info.value.exit_code == 1

    def test_invalid_utf8(self):
        with pytest.raises(DecodeError):
            decode_json(b"\xff\xfe")


class TestMultipart:
    def test_fields_and_file_part(self):
        body, content_type = encode_multipart(
            {"project_id": "p1", "file_name": None}, "file", "notes.txt", b"hello"
        )
        assert content_type.startswith("multipart/form-data; boundary=")
        boundary = content_type.split("boundary=", 1)[1]
        assert body.startswith(f"--{boundary}\r\n".encode())
        assert b'Content-Disposition: form-data; name="project_id"\r\n\r\np1\r\n' in body
        assert b'name="file_name"' not in body
        assert b'name="file"; filename="notes.txt"' in body
        assert b"Content-Type: text/plain\r\n\r\nhello\r\n" in body
        assert body.endswith(f"--{boundary}--\r\n".encode())

    def test_unknown_extension_is_octet_stream(self):
        body, _ = encode_multipart({}, "file", "blob.zzzunknown", b"\x00")
        assert b"Content-Type: application/octet-stream" in body

    def test_quotes_in_file_name_escaped(self):
        body, _ = encode_multipart({}, "file", 'a"b.txt', b"")
        assert b'filename="a%22b.txt"' in body

    def test_line_breaks_in_file_name_escaped(self):
        body, _ = encode_multipart({}, "file", "a\r\nX-Injected: 1.txt", b"")
        assert b'filename="a%0D%0AX-Injected: 1.txt"' in body
        assert b"\r\nX-Injected" not in body


class TestUploadFile:
    def test_reads_bytes(self, tmp_path):
        path = tmp_path / "a.bin"
        path.write_bytes(b"\x01\x02")
        assert read_upload_file(str(path)) == b"\x01\x02"

    def test_missing_file(self, tmp_path):
        with pytest.raises(CliError) as exc_info:
            read_upload_file(str(tmp_path / "nope.txt"))
        assert "open file:" in str(exc_info.value)

    def test_file_name_override(self):
        assert upload_file_name("/tmp/dir/report.pdf") == "report.pdf"
        assert upload_file_name("/tmp/dir/report.pdf", "final.pdf") == "final.pdf"


class TestHttpRequest:
    @patch("todi_cli.api.urllib.request.urlopen")
    def test_returns_raw_body(self, mock_urlopen):
        mock_resp = mock_urlopen.return_value.__enter__.return_value
        mock_resp.read.return_value = b'{"ok": true}'
        assert _http_request("https://api.todoist.com/api/v1/user") == b'{"ok": true}'
        req = mock_urlopen.call_args.args[0]
        assert req.get_method() == "GET"

    @patch("todi_cli.api.urllib.request.urlopen")
    def test_http_error_carries_body(self, mock_urlopen):
        mock_urlopen.side_effect = urllib.error.HTTPError(
            "https://api.todoist.com/",
            404,
            "Not Found",
            {},
            io.BytesIO(b"task not found"),
        )
        with pytest.raises(HTTPError) as exc_info:
            _http_request("https://api.todoist.com/api/v1/tasks/1")
        assert exc_info.value.code == 404
        assert exc_info.value.reason == "Not Found"
        assert exc_info.value.body == "task not found"

    @patch("todi_cli.api.urllib.request.urlopen")
    def test_connection_failure(self, mock_urlopen):
        mock_urlopen.side_effect = urllib.error.URLError("refused")
        with pytest.raises(CliError) as exc_info:
            _http_request("http://localhost:1/")
        assert str(exc_info.value) == "connection failed: refused"

    @patch("todi_cli.api.urllib.request.urlopen")
    def test_timeout(self, mock_urlopen):
        mock_urlopen.side_effect = TimeoutError()
        with pytest.raises(CliError) as exc_info:
            _http_request("http://localhost:1/", method="POST", timeout=5)
        assert "request timed out after 5 seconds: POST" in str(exc_info.value)

    @patch("todi_cli.api.urllib.request.urlopen")
    def test_server_drops_connection(self, mock_urlopen):
        mock_urlopen.side_effect = http.client.RemoteDisconnected(
            "Remote end closed connection without response"
        )
        with pytest.raises(CliError) as exc_info:
            _http_request("http://localhost:1/")
        assert exc_info.value.exit_code == 1
        assert str(exc_info.value).startswith("connection failed: Remote end closed")

    @patch("todi_cli.api.urllib.request.urlopen")
    def test_truncated_body(self, mock_urlopen):
        mock_resp = mock_urlopen.return_value.__enter__.return_value
        mock_resp.read.side_effect = http.client.IncompleteRead(b"{", 10)
        with pytest.raises(CliError) as exc_info:
            _http_request("http://localhost:1/")
        assert exc_info.value.exit_code == 1
        assert str(exc_info.value).startswith("connection failed: IncompleteRead")

    @patch("todi_cli.api.urllib.request.urlopen")
    def test_connection_reset_while_reading(self, mock_urlopen):
        mock_resp = mock_urlopen.return_value.__enter__.return_value
        mock_resp.read.side_effect = ConnectionResetError(104, "Connection reset by peer")
        with pytest.raises(CliError):
            _http_request("http://localhost:1/")
