from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

BACKEND_DIR = Path(__file__).resolve().parents[2]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Database
    DATABASE_URL: str = "sqlite:///./healthinfo.db"

    # JWT Authentication
    JWT_SECRET: str = "healthinfojobs_secret_key"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_DAYS: int = 7

    # Cookie session (legacy login handshake)
    SESSION_SECRET: str = "healthinfojobs_session_secret"
    SESSION_MAX_AGE_SECONDS: int = 7 * 24 * 60 * 60

    # Upstream labor-market services
    BLS_API_KEY: str = "register_api_key"
    BLS_BASE_URL: str = "https://api.bls.gov/publicAPI/v2"
    ONET_API_KEY: str = "developer"
    ONET_BASE_URL: str = "https://services.onetcenter.org/ws"
    UPSTREAM_TIMEOUT_SECONDS: float = 5.0

    # Job listings dataset served to the dashboards
    JOB_LISTINGS_CSV: str = "data/health_informatics.csv"

    # Application
    APP_NAME: str = "Health Informatics Job Insights"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    BACKEND_CORS_ORIGINS: str = (
        "http://localhost:5000,"
        "http://localhost:5173,"
        "http://127.0.0.1:5173"
    )

    @property
    def listings_csv_path(self) -> Path:
        """Dataset path; relative paths resolve against the backend directory."""
        path = Path(self.JOB_LISTINGS_CSV)
        return path if path.is_absolute() else BACKEND_DIR / path

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    def insecure_defaults(self) -> list[str]:
        """Names of secrets still set to their built-in development values."""
        defaults = type(self).model_fields
        return [
            name
            for name in ("JWT_SECRET", "SESSION_SECRET", "BLS_API_KEY", "ONET_API_KEY")
            if getattr(self, name) == defaults[name].default
        ]


settings = Settings()
