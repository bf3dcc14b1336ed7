"""Supabase Auth identity provider."""

import logging
from dataclasses import dataclass

from supabase import AuthError as SupabaseAuthError
from supabase import Client
from supabase_auth.types import AuthResponse

from calorie_ledger.domain.errors import AuthError
from calorie_ledger.services.auth import AuthSession, IdentityProvider

_logger = logging.getLogger(__name__)


@dataclass
class SupabaseIdentityProvider(IdentityProvider):
    """Email/password auth backed by Supabase Auth."""

    client: Client

    def sign_up(self, email: str, password: str) -> AuthSession:
        """Create an account; the session is empty until email is confirmed."""
        try:
            response = self.client.auth.sign_up({"email": email, "password": password})
        except SupabaseAuthError as exc:
            raise AuthError(f"Sign-up error: {exc.message}") from exc
        return _to_session(response, "Sign-up error")

    def sign_in(self, email: str, password: str) -> AuthSession:
        """Sign in with email and password."""
        try:
            response = self.client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except SupabaseAuthError as exc:
            raise AuthError(f"Sign-in error: {exc.message}") from exc
        return _to_session(response, "Sign-in error")

    def sign_out(self, access_token: str) -> None:
        """Revoke the session behind an access token."""
        try:
            self.client.auth.admin.sign_out(access_token)
        except SupabaseAuthError as exc:
            _logger.warning("Sign-out error: %s", exc.message)
            raise AuthError(f"Sign-out error: {exc.message}") from exc

    def get_user_id(self, access_token: str) -> str:
        """Return the user id for a valid access token."""
        try:
            response = self.client.auth.get_user(access_token)
        except SupabaseAuthError as exc:
            raise AuthError(exc.message) from exc
        if response is None or response.user is None:
            raise AuthError("Invalid or expired session")
        return str(response.user.id)


def _to_session(response: AuthResponse, error_prefix: str) -> AuthSession:
    if response.user is None:
        raise AuthError(f"{error_prefix}: no user returned")
    session = response.session
    return AuthSession(
        user_id=str(response.user.id),
        email=response.user.email,
        access_token=session.access_token if session else None,
        refresh_token=session.refresh_token if session else None,
    )
