from pathlib import Path

from pydantic_settings import BaseSettings

from core.constants import DEFAULT_PAGE_SIZE, SESSION_FILE


class Settings(BaseSettings):
    api_endpoint: str = "localhost:3000"
    api_endpoint_ssl: bool = False
    api_timeout: float = 30.0

    session_file: Path = SESSION_FILE

    auth_login_path: str = "/auth/login"
    auth_refresh_path: str = "/auth/refresh"
    auth_logout_path: str = "/auth/logout"
    # Statuses meaning "credential expired or invalid"
    auth_failure_status_codes: list[int] = [401]

    businesses_page_size: int = DEFAULT_PAGE_SIZE
    news_page_size: int = 9
    gallery_page_size: int = DEFAULT_PAGE_SIZE
    general_info_page_size: int = DEFAULT_PAGE_SIZE

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()


def get_settings() -> Settings:
    return settings
