from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import PostgresDsn, computed_field
from typing import Optional

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_ignore_empty=True, extra="ignore")

    # Security: no default credentials - they must be set in .env
    POSTGRES_USER: str
    POSTGRES_PASSWORD: str
    POSTGRES_DB: str = "network_crm"
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432

    # Full SQLAlchemy URL, e.g. sqlite+aiosqlite:///./crm.db for local runs
    DATABASE_URL_OVERRIDE: Optional[str] = None

    @computed_field
    def DATABASE_URL(self) -> str:
        if self.DATABASE_URL_OVERRIDE:
            return self.DATABASE_URL_OVERRIDE
        return str(PostgresDsn.build(
            scheme="postgresql+asyncpg",
            username=self.POSTGRES_USER,
            password=self.POSTGRES_PASSWORD,
            host=self.POSTGRES_HOST,
            port=self.POSTGRES_PORT,
            path=self.POSTGRES_DB,
        ))

    ENV: str = "production"
    LOG_LEVEL: str = "INFO"

    # Public deployments hide the interactive docs
    APP_DOMAIN: Optional[str] = None

    # Fall back to the first user row when a request carries no X-User-Id header
    DEMO_USER_FALLBACK: bool = True

    @property
    def is_dev_mode(self) -> bool:
        return self.ENV.lower() in ["dev", "development", "local"]

settings = Settings()
