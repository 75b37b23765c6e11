"""Tests for exceptions.py — exit codes and messages."""

from todi_cli.exceptions import (
    ApiError,
    AuthError,
    CliError,
    ConfirmationError,
    DecodeError,
    NotUniqueError,
    PaginationError,
    UsageError,
)


class TestExitCodes:
    def test_runtime_errors_exit_one(self):
        for exc in (CliError("x"), AuthError("x"), PaginationError("x"), DecodeError("x")):
            assert exc.exit_code == 1

    def test_usage_errors_exit_two(self):
        assert UsageError("x").exit_code == 2
        assert ConfirmationError("aborted").exit_code == 2
        assert isinstance(ConfirmationError("aborted"), UsageError)


class TestMessages:
    def test_api_error_trims_body(self):
        e = ApiError(400, "Bad Request", "  invalid argument \n")
        assert str(e) == "api error: 400 Bad Request: invalid argument"
        assert e.body == "  invalid argument \n"

    def test_api_error_without_body(self):
        assert str(ApiError(500, "Internal Server Error")) == "api error: 500 Internal Server Error"

    def test_not_unique_without_hint(self):
        assert str(NotUniqueError("label", "home")) == "label name not unique: home"

    def test_decode_error_prefix(self):
        assert str(DecodeError("bad")) == "decode response: bad"
