from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List


class Settings(BaseSettings):
    # Supabase
    supabase_url: str = ""
    supabase_service_role_key: Optional[str] = None  # Required by the approval edge functions

    # Mock data store
    mock_delay_ms: int = 500  # simulated backend latency applied to every store call
    seed_demo_data: bool = True
    session_ttl_seconds: int = 60 * 60 * 24
    session_max_count: int = 1000

    # Seeded admin account
    admin_email: str = "admin@example.com"
    admin_password: str = "admin"
    admin_full_name: str = "Admin User"

    # App
    app_name: str = "builders-arc-backend"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000,http://127.0.0.1:5173,http://localhost:8080"
    login_rate_limit: str = "10/minute"  # slowapi format, e.g. "10/minute"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def mock_delay_seconds(self) -> float:
        return max(self.mock_delay_ms, 0) / 1000.0

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",  # No prefix needed
        extra="ignore"
    )


settings = Settings()
