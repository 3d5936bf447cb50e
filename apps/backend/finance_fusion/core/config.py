from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path


class Settings(BaseSettings):
    APP_NAME: str = "Finance Fusion Server"
    ENV: str = "dev"

    # Default SQLite file DB next to the backend package; absolute so the CWD does not matter.
    # PostgreSQL works as well, e.g. postgresql+psycopg2://user:pw@host:5432/finance_fusion
    _default_db_path = Path(__file__).resolve().parents[2] / "db.sqlite3"
    DATABASE_URL: str = f"sqlite:///{_default_db_path}"

    CORS_ORIGINS: list[str] = ["*"]
    LOG_LEVEL: str = "INFO"

    HOST: str = "0.0.0.0"
    REST_PORT: int = 5000

    # Auth
    JWT_SECRET: str | None = None
    SESSION_TTL_HOURS: int = 24
    # Secure flag on the session cookie; switch off for plain-http development
    COOKIE_SECURE: bool = True
    LOCKOUT_THRESHOLD: int = 3
    BCRYPT_ROUNDS: int = 12

    model_config = SettingsConfigDict(env_file=(".env",), env_prefix="FUSION_", case_sensitive=False)


settings = Settings()
