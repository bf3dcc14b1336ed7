"""Authentication endpoints and the bearer-token dependency."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Header, Request

from calorie_ledger.api.models import Credentials
from calorie_ledger.services.tracker import TrackerSession

if TYPE_CHECKING:
    from calorie_ledger.containers import AppContainer

router = APIRouter(prefix="/auth", tags=["auth"])


async def current_session(
    request: Request, authorization: str | None = Header(default=None)
) -> TrackerSession:
    """Resolve the bearer token and return the user's tracker session."""
    container: AppContainer = request.app.state.container
    user_id = container.auth_service.resolve_user(authorization)
    return container.tracker_service.open(user_id)


@router.post("/signup")
async def sign_up(credentials: Credentials, request: Request) -> dict[str, object]:
    """Create an account."""
    container: AppContainer = request.app.state.container
    session = container.auth_service.sign_up(credentials.email, credentials.password)
    return {"message": "Account created successfully!", "session": session}


@router.post("/signin")
async def sign_in(credentials: Credentials, request: Request) -> dict[str, object]:
    """Sign in and return provider tokens."""
    container: AppContainer = request.app.state.container
    session = container.auth_service.sign_in(credentials.email, credentials.password)
    return {"message": "Signed in successfully!", "session": session}


@router.post("/signout")
async def sign_out(
    request: Request, authorization: str | None = Header(default=None)
) -> dict[str, str]:
    """Sign out and drop the cached tracker session."""
    container: AppContainer = request.app.state.container
    user_id = container.auth_service.sign_out(authorization)
    container.tracker_service.close(user_id)
    return {"status": "ok"}
