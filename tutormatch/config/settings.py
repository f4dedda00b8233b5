from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List


class Settings(BaseSettings):
    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_service_role_key: Optional[str] = None  # Used by background match workers (RLS bypass)

    # Discovery
    tutor_fetch_limit: int = 20
    default_max_price: float = 200
    default_container_width: float = 375
    swipe_threshold_ratio: float = 0.25  # fraction of container width a drag must cross to commit
    swipe_exit_duration_ms: int = 250
    rotation_factor: float = 0.05  # degrees per pixel of horizontal drag
    max_rotation_deg: float = 15
    min_drag_opacity: float = 0.8
    opacity_fade_ratio: float = 0.4  # drag distance (fraction of width) at which opacity reaches its floor
    match_workers: int = 4

    # App
    app_name: str = "tutormatch-backend"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:8081,http://localhost:19006,http://127.0.0.1:8081"
    rate_limit: str = "100/minute"  # slowapi format, e.g. "100/minute"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",  # No prefix needed
        extra="ignore"
    )


settings = Settings()
