"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from calorie_ledger.adapters.supabase_identity_provider import (
    SupabaseIdentityProvider,
)
from calorie_ledger.adapters.supabase_user_data_repository import (
    SupabaseUserDataRepository,
)
from calorie_ledger.config import Settings
from calorie_ledger.services.auth import AuthService
from calorie_ledger.services.cache import InMemoryCache
from calorie_ledger.services.tracker import TrackerService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    auth_service: AuthService
    tracker_service: TrackerService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    # Auth calls use their own anon-key client.
    data_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    auth_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_anon_key
    )
    repository = SupabaseUserDataRepository(
        data_client, table=resolved_settings.user_data_table
    )
    tracker_service = TrackerService(
        repository=repository,
        cache=InMemoryCache(),
        ttl_seconds=resolved_settings.session_ttl_seconds,
    )
    auth_service = AuthService(SupabaseIdentityProvider(auth_client))
    return AppContainer(
        settings=resolved_settings,
        auth_service=auth_service,
        tracker_service=tracker_service,
    )
