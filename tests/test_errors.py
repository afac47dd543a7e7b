"""Tests for the error taxonomy and its status code table."""

from usersapi import errors


def test_every_error_kind_has_a_status_code():
    for kind in errors.ApiError.__subclasses__():
        assert kind in errors.ERROR_STATUS_CODES, kind.__name__


def test_status_codes():
    assert errors.status_code_for(errors.NotFoundError()) == 404
    assert errors.status_code_for(errors.WrongCredentialsError()) == 401
    assert errors.status_code_for(errors.MissingCredentialsError()) == 400
    assert errors.status_code_for(errors.InvalidTokenError()) == 401
    assert errors.status_code_for(errors.TokenCreationError()) == 500
    assert errors.status_code_for(errors.CreateFailedError()) == 500
    assert errors.status_code_for(errors.StoreError()) == 500
    assert errors.status_code_for(errors.ConflictError()) == 409
    assert errors.status_code_for(errors.RequestTimeoutError()) == 408


def test_message_defaults_and_overrides():
    assert errors.NotFoundError().message == "not found"
    assert str(errors.NotFoundError()) == "not found"
    assert errors.InvalidTokenError("Token expired").message == "Token expired"
    # Overriding an instance message leaves the class default alone.
    assert errors.InvalidTokenError.message == "Invalid token"
