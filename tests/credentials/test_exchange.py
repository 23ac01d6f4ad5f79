"""
Tests for the credential exchange.
"""

import json
import pytest

from aws_setter.credentials import CommandResult, exchange, parse_assume_role_response
from aws_setter.errors import ExchangeRejected, ExchangeResponseMalformed

from conftest import ASSUME_ROLE_OUTPUT, ROLE_ARN, SESSION_NAME


def test_parse_assume_role_response():
    """Test parsing a successful assume-role response."""
    response = parse_assume_role_response(ASSUME_ROLE_OUTPUT)

    assert response.credentials.access_key_id == "ASIA2NEWKEY"
    assert response.credentials.secret_access_key == "new/secret+key"
    assert response.credentials.session_token == "FwoGZXIvYXdzEnewtoken%=="
    assert response.credentials.expiration == "2026-10-19T13:00:00+00:00"
    assert response.assumed_role_user.assumed_role_id == "AROAEXAMPLE:jane.doe@example.com"
    assert response.assumed_role_user.arn.endswith("assumed-role/Developer/jane.doe@example.com")


def test_parse_ignores_extra_fields():
    """Test that additional response fields such as PackedPolicySize are ignored."""
    payload = json.loads(ASSUME_ROLE_OUTPUT)
    payload["PackedPolicySize"] = 6

    response = parse_assume_role_response(json.dumps(payload))

    assert response.credentials.access_key_id == "ASIA2NEWKEY"


@pytest.mark.parametrize("text", [
    "",
    "not json",
    "[]",
    '{"Credentials": {}}',
])
def test_parse_malformed(text):
    """Test that unusable output raises ExchangeResponseMalformed."""
    with pytest.raises(ExchangeResponseMalformed):
        parse_assume_role_response(text)


def test_parse_missing_credential_field():
    """Test that a response missing one credential field is rejected as a whole."""
    payload = json.loads(ASSUME_ROLE_OUTPUT)
    del payload["Credentials"]["SessionToken"]

    with pytest.raises(ExchangeResponseMalformed) as exc_info:
        parse_assume_role_response(json.dumps(payload))

    assert "Credentials.SessionToken" in str(exc_info.value)


def test_parse_missing_assumed_role_user():
    """Test that the assumed-role metadata is required."""
    payload = json.loads(ASSUME_ROLE_OUTPUT)
    del payload["AssumedRoleUser"]

    with pytest.raises(ExchangeResponseMalformed):
        parse_assume_role_response(json.dumps(payload))


def test_credentials_repr_masks_secrets():
    """Test that secrets do not show up in repr."""
    response = parse_assume_role_response(ASSUME_ROLE_OUTPUT)

    text = repr(response.credentials)
    assert "new/secret+key" not in text
    assert "FwoGZXIvYXdzEnewtoken" not in text


def test_exchange_success(fake_cli):
    """Test a successful exchange."""
    response = exchange(fake_cli, "default", ROLE_ARN, SESSION_NAME)

    assert response.credentials.access_key_id == "ASIA2NEWKEY"
    assert fake_cli.calls == [("assume_role", "default", ROLE_ARN, SESSION_NAME)]


def test_exchange_stderr_with_zero_exit(fake_cli):
    """Test that stderr output fails the exchange even if the exit code is 0."""
    fake_cli.assume_result = CommandResult(
        0, ASSUME_ROLE_OUTPUT.encode("utf-8"), b"ExpiredToken: The security token included in the request is expired"
    )

    with pytest.raises(ExchangeRejected) as exc_info:
        exchange(fake_cli, "default", ROLE_ARN, SESSION_NAME)

    assert exc_info.value.stderr == "ExpiredToken: The security token included in the request is expired"
    assert exc_info.value.exit_code == 6


def test_exchange_stderr_kept_verbatim(fake_cli):
    """Test that the stderr text is passed on unchanged."""
    stderr = "\nAn error occurred (AccessDenied) when calling the AssumeRole operation: denied\n"
    fake_cli.assume_result = CommandResult(254, b"", stderr.encode("utf-8"))

    with pytest.raises(ExchangeRejected) as exc_info:
        exchange(fake_cli, "default", ROLE_ARN, SESSION_NAME)

    assert exc_info.value.stderr == stderr
    assert str(exc_info.value) == (
        "Role could not be assumed: An error occurred (AccessDenied) "
        "when calling the AssumeRole operation: denied"
    )


def test_exchange_nonzero_exit_without_stderr(fake_cli):
    """Test that a failing exit code without stderr is still a rejection."""
    fake_cli.assume_result = CommandResult(255, b"", b"")

    with pytest.raises(ExchangeRejected) as exc_info:
        exchange(fake_cli, "default", ROLE_ARN, SESSION_NAME)

    assert "255" in str(exc_info.value)


def test_exchange_malformed_stdout(fake_cli):
    """Test that unparsable stdout raises ExchangeResponseMalformed."""
    fake_cli.assume_result = CommandResult(0, b"Credentials  ASIA2NEWKEY  secret  token", b"")

    with pytest.raises(ExchangeResponseMalformed) as exc_info:
        exchange(fake_cli, "default", ROLE_ARN, SESSION_NAME)

    assert str(exc_info.value).startswith("Could not handle output")


def test_exchange_invalid_utf8(fake_cli):
    """Test that non UTF-8 stdout raises ExchangeResponseMalformed."""
    fake_cli.assume_result = CommandResult(0, b"\xff\xfe{}", b"")

    with pytest.raises(ExchangeResponseMalformed):
        exchange(fake_cli, "default", ROLE_ARN, SESSION_NAME)


def test_exchange_multiline_stderr_message_is_one_line(fake_cli):
    """Test that a multi-line AWS CLI error gives a one-line message but keeps the raw text."""
    stderr = "\nAn error occurred (AccessDenied) when calling\nthe AssumeRole operation:\n  not authorized\n"
    fake_cli.assume_result = CommandResult(254, b"", stderr.encode("utf-8"))

    with pytest.raises(ExchangeRejected) as exc_info:
        exchange(fake_cli, "default", ROLE_ARN, SESSION_NAME)

    assert "\n" not in str(exc_info.value)
    assert str(exc_info.value) == (
        "Role could not be assumed: An error occurred (AccessDenied) "
        "when calling the AssumeRole operation: not authorized"
    )
    assert exc_info.value.stderr == stderr
