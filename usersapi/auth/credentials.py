"""Login credential check.

This is a placeholder: a single accepted identity and no password comparison.
A real deployment needs a credential store with hashed passwords.
"""

from usersapi.errors import WrongCredentialsError


class CredentialValidator:
    """Checks a login submission against the accepted identity."""

    def __init__(self, accepted_login: str = "claytonfaria"):
        self.accepted_login = accepted_login

    def authenticate(self, email: str, password: str) -> str:
        """Return the subject for a valid login.

        The password is not checked.

        Raises:
            WrongCredentialsError: If the email is not the accepted identity
        """
        if email != self.accepted_login:
            raise WrongCredentialsError()
        return email
