"""Authentication service over an external identity provider."""

import logging
from dataclasses import dataclass
from typing import Protocol

from calorie_ledger.domain.errors import AuthError, ValidationError

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthSession:
    """Tokens issued by the identity provider for a signed-in user."""

    user_id: str
    email: str | None
    access_token: str | None
    refresh_token: str | None = None


class IdentityProvider(Protocol):
    """Interface to the external identity provider."""

    def sign_up(self, email: str, password: str) -> AuthSession:
        """Create an account and return its session."""

    def sign_in(self, email: str, password: str) -> AuthSession:
        """Sign in with email and password."""

    def sign_out(self, access_token: str) -> None:
        """Invalidate the session behind an access token."""

    def get_user_id(self, access_token: str) -> str:
        """Return the user id an access token belongs to."""


@dataclass
class AuthService:
    """Application service for sign-up, sign-in and sign-out."""

    provider: IdentityProvider

    def sign_up(self, email: str, password: str) -> AuthSession:
        """Register a new account."""
        _require_credentials(email, password)
        session = self.provider.sign_up(email.strip(), password)
        _logger.info("Account created: user_id=%s", session.user_id)
        return session

    def sign_in(self, email: str, password: str) -> AuthSession:
        """Sign in an existing account."""
        _require_credentials(email, password)
        session = self.provider.sign_in(email.strip(), password)
        _logger.info("Signed in: user_id=%s", session.user_id)
        return session

    def sign_out(self, authorization: str | None) -> str:
        """Sign out the bearer session and return the user it belonged to."""
        token = parse_bearer_token(authorization)
        if token is None:
            raise AuthError("Missing bearer token")
        user_id = self.provider.get_user_id(token)
        self.provider.sign_out(token)
        _logger.info("Signed out: user_id=%s", user_id)
        return user_id

    def resolve_user(self, authorization: str | None) -> str:
        """Return the user id for an ``Authorization: Bearer`` header value."""
        token = parse_bearer_token(authorization)
        if token is None:
            raise AuthError("Missing bearer token")
        return self.provider.get_user_id(token)


def parse_bearer_token(authorization: str | None) -> str | None:
    """Extract the token from a bearer authorization header."""
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def _require_credentials(email: str, password: str) -> None:
    if not email.strip() or not password:
        raise ValidationError("Email and password are required")
