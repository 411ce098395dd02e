from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Values are read from process environment and optionally from `.env`.
    """

    port: int = 3002
    frontend_url: str | None = None
    github_token: str | None = None
    github_graphql_url: str = "https://api.github.com/graphql"
    github_timeout_seconds: float = 20.0
    log_level: str = "INFO"
    sentry_dsn: str | None = None
    environment: str = "development"
    release: str | None = None
    sentry_traces_sample_rate: float = 0.1

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def cors_origins(self) -> list[str]:
        """Split `FRONTEND_URL` into the CORS allow-list."""

        if not self.frontend_url:
            return []
        return [
            origin.strip()
            for origin in self.frontend_url.split(",")
            if origin.strip()
        ]
