# app/settings.py

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    database_url: str = "sqlite+aiosqlite:///db.sqlite"  # file in project root
    bcrypt_rounds: int = 10
    log_level: str = "INFO"

    latest_invoices_limit: int = 5
    items_per_page: int = 6


SETTINGS = Settings()
