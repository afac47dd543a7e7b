"""Tests for the placeholder login check."""

import pytest

from usersapi.auth.credentials import CredentialValidator
from usersapi.errors import WrongCredentialsError


def test_accepted_identity_authenticates_with_any_password():
    validator = CredentialValidator()
    assert validator.authenticate("claytonfaria", "whatever") == "claytonfaria"
    assert validator.authenticate("claytonfaria", "") == "claytonfaria"


def test_other_identity_is_rejected():
    with pytest.raises(WrongCredentialsError):
        CredentialValidator().authenticate("anyone_else", "whatever")


def test_accepted_identity_is_configurable():
    validator = CredentialValidator(accepted_login="ops@example.com")
    assert validator.authenticate("ops@example.com", "x") == "ops@example.com"
    with pytest.raises(WrongCredentialsError):
        validator.authenticate("claytonfaria", "x")
