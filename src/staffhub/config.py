from functools import lru_cache

from pydantic import ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "Staff Hub API"
    debug: bool = False
    log_level: str = "INFO"
    database_url: str = "sqlite:///./staffhub.db"
    jwt_secret: str = "change_this_secret"  # random 32-bytes | run in terminal: openssl rand -hex 32
    jwt_alg: str = "HS256"
    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000,http://localhost:5173,http://127.0.0.1:5173"
    menu_deep_cascade: bool = False  # delete whole subtrees instead of one level of children

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    @field_validator("debug", "menu_deep_cascade", mode="before")
    @classmethod
    def _coerce_bool(cls, value, info: ValidationInfo):
        if isinstance(value, bool) or value is None:
            return value
        if isinstance(value, str):
            normalized = value.strip().lower()
            if normalized in {"1", "true", "yes", "on"}:
                return True
            if normalized in {"0", "false", "no", "off"}:
                return False
            # DEBUG is often set to a log level name; treat those as non-debug.
            if info.field_name == "debug" and normalized in {"warn", "warning", "info", "error", "critical"}:
                return False
        return value

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()
