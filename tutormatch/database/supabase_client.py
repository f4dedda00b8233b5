"""
Supabase clients for tutormatch.

Request handlers use the anon-key client so row level security applies to
the caller. Match inserts from a discovery session run on the
match-recorder thread pool after the request has returned, so they use the
service-role client instead.
"""

from supabase import create_client, Client
from tutormatch.config import settings


class SupabaseClient:
    _client: Client = None
    _service_client: Client = None

    @classmethod
    def get_client(cls) -> Client:
        if cls._client is None:
            cls._client = create_client(settings.supabase_url, settings.supabase_key)
        return cls._client

    @classmethod
    def get_service_client(cls) -> Client:
        """Client for MatchRecorder workers (see discovery.routes.get_worker_match_service).

        The worker has no caller token when it inserts the pending match row,
        so it writes with the service_role key. Without that key configured
        (local development) it falls back to the anon client.
        """
        if cls._service_client is None and settings.supabase_service_role_key:
            cls._service_client = create_client(
                settings.supabase_url, settings.supabase_service_role_key
            )
        return cls._service_client or cls.get_client()

    @classmethod
    def reset_client(cls):
        cls._client = None
        cls._service_client = None


def get_supabase() -> Client:
    return SupabaseClient.get_client()
