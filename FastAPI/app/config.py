from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Required from environment (.env / deployment secrets)
    database_url: str
    secret_key: str
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 7  # 7 days
    app_env: str = "development"  # development, staging, production

    # Connection pool owned by the Database object (ignored for SQLite)
    db_pool_size: int = 5
    db_max_overflow: int = 10

    # CORS origins as comma-separated values
    # Example: "https://app.example.com,https://admin.example.com"
    cors_allow_origins: str = "http://localhost:3000"

    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR

    # Notifications are stored pre-rendered in this language: en, ar
    notification_locale: str = "en"
    notifications_page_size: int = 50

    # Public offers listing
    offers_page_size: int = 10
    offers_max_page_size: int = 50

    # Public candidates listing
    candidates_page_size: int = 12
    candidates_max_page_size: int = 50

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
