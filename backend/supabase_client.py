from functools import lru_cache

from supabase import Client, create_client

from config import Settings
from errors import ConfigurationError


@lru_cache(maxsize=4)
def get_supabase(settings: Settings) -> Client:
    if not settings.feedback_store_configured:
        raise ConfigurationError("Missing SUPABASE_URL or SUPABASE_SERVICE_ROLE_KEY")
    return create_client(settings.supabase_url, settings.supabase_service_role_key)
