from supabase import create_client, Client
from app.config.settings import settings


class SupabaseClient:
    _service_client: Client = None

    @classmethod
    def get_service_client(cls) -> Client:
        """Client with service_role key; auth.admin calls fail with any other key."""
        if cls._service_client is None:
            if not settings.supabase_service_role_key:
                raise RuntimeError("SUPABASE_SERVICE_ROLE_KEY is not configured")
            cls._service_client = create_client(
                settings.supabase_url, settings.supabase_service_role_key
            )
        return cls._service_client

    @classmethod
    def reset_client(cls):
        cls._service_client = None


def get_service_supabase() -> Client:
    return SupabaseClient.get_service_client()
