import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Sequence

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent / ".env")

# Earlier names win.
ORDER_WEBHOOK_URL_ENV = ("SHEETS_WEBHOOK_URL", "APPS_SCRIPT_URL")
ORDER_WEBHOOK_TOKEN_ENV = ("SHEETS_TOKEN", "PUZZLE_REQUEST_TOKEN")


def _first_env(env: Mapping[str, str], names: Sequence[str]) -> Optional[str]:
    for name in names:
        value = env.get(name)
        if value:
            return value
    return None


@dataclass(frozen=True)
class Settings:
    cloudinary_cloud_name: Optional[str] = None
    cloudinary_api_key: Optional[str] = None
    cloudinary_api_secret: Optional[str] = None
    supabase_url: Optional[str] = None
    supabase_service_role_key: Optional[str] = None
    order_webhook_url: Optional[str] = None
    order_webhook_token: Optional[str] = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if env is None else env
        return cls(
            cloudinary_cloud_name=env.get("CLOUDINARY_CLOUD_NAME") or None,
            cloudinary_api_key=env.get("CLOUDINARY_API_KEY") or None,
            cloudinary_api_secret=env.get("CLOUDINARY_API_SECRET") or None,
            supabase_url=env.get("SUPABASE_URL") or None,
            supabase_service_role_key=env.get("SUPABASE_SERVICE_ROLE_KEY") or None,
            order_webhook_url=_first_env(env, ORDER_WEBHOOK_URL_ENV),
            order_webhook_token=_first_env(env, ORDER_WEBHOOK_TOKEN_ENV),
            log_level=env.get("LOG_LEVEL", "INFO").upper(),
        )

    @property
    def cloudinary_configured(self) -> bool:
        return bool(
            self.cloudinary_cloud_name
            and self.cloudinary_api_key
            and self.cloudinary_api_secret
        )

    @property
    def feedback_store_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_service_role_key)

    @property
    def order_webhook_configured(self) -> bool:
        return bool(self.order_webhook_url and self.order_webhook_token)


settings = Settings.from_env()


def get_settings() -> Settings:
    return settings
