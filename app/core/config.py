import logging
from typing import List, Union, Any, Optional, Dict
from pydantic import AnyHttpUrl, PostgresDsn, Field, field_validator, SecretStr, computed_field
from pydantic_settings import BaseSettings
from google.cloud import secretmanager
from google.api_core.exceptions import NotFound
import os

logger = logging.getLogger(__name__)

SECRET_IDS = ['DATABASE_URL', 'POSTGRES_SERVER', 'POSTGRES_USER', 'POSTGRES_PASSWORD', 'POSTGRES_DB']


def get_secrets() -> Optional[dict[str, str]]:
    if os.getenv('GOOGLE_CLOUD_PROJECT'):
        client = secretmanager.SecretManagerServiceClient()
        project_id = os.getenv('GOOGLE_CLOUD_PROJECT')

        secrets = {}
        for secret_id in SECRET_IDS:
            try:
                name = f"projects/{project_id}/secrets/{secret_id}/versions/latest"
                response = client.access_secret_version(request={"name": name})
                secrets[secret_id] = response.payload.data.decode("UTF-8")
            except NotFound:
                logger.warning(f"Secret {secret_id} not found in GCP Secret Manager.")
            except Exception as e:
                logger.error(f"Error retrieving secret {secret_id}: {e}")

        return secrets
    else:
        return None


class Settings(BaseSettings):
    API_PREFIX: str = "/api"
    PROJECT_NAME: str = "Sectioned Blog"

    BACKEND_CORS_ORIGINS: List[AnyHttpUrl] = [
        "http://localhost",
        "http://localhost:3000",
        "http://localhost:8000",
    ]

    GOOGLE_CLOUD_PROJECT: Optional[str] = None
    ENVIRONMENT: str = Field(default="development")

    POSTGRES_SERVER: str = "localhost"
    POSTGRES_USER: str = "blog"
    POSTGRES_PASSWORD: SecretStr = Field(default=SecretStr(""))
    POSTGRES_DB: str = "blog"
    POSTGRES_PORT: int = Field(default=5432)
    DATABASE_URL: Optional[str] = None
    SQL_ECHO: bool = False

    # Attempts made when a concurrent writer claims a slug between probe and commit
    SLUG_MAX_RETRIES: int = Field(default=3, ge=1)

    base_url: str = Field(default="http://localhost:8000")

    @field_validator("DATABASE_URL", mode='before')
    @classmethod
    def assemble_db_connection(cls, v: Optional[str], info: Any) -> Any:
        if isinstance(v, str) and v:
            return v
        password = info.data.get("POSTGRES_PASSWORD")
        if isinstance(password, SecretStr):
            password = password.get_secret_value()
        return str(PostgresDsn.build(
            scheme="postgresql",
            username=info.data.get("POSTGRES_USER"),
            password=password or None,
            host=info.data.get("POSTGRES_SERVER"),
            port=int(info.data.get("POSTGRES_PORT", 5432)),
            path=info.data.get('POSTGRES_DB') or '',
        ))

    @computed_field
    @property
    def BASE_URL(self) -> str:
        return self.base_url.rstrip("/")

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> Union[List[str], str]:
        if isinstance(v, str):
            try:
                import json
                return json.loads(v)
            except json.JSONDecodeError:
                return [i.strip() for i in v.split(",") if i.strip()]
        return v

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "allow"
        validate_default = True

    @classmethod
    def from_gcp_secrets(cls) -> 'Settings':
        secrets = get_secrets()
        if secrets:
            return cls(**secrets)
        return cls()


def get_settings() -> Settings:
    env = os.getenv("ENVIRONMENT", "development")
    if env == "production":
        return Settings.from_gcp_secrets()
    return Settings()


def log_settings(settings: Settings) -> None:
    logger.info("Settings loaded:")
    for field, value in settings.model_dump().items():
        if isinstance(value, SecretStr) or field == "DATABASE_URL":
            logger.info(f"{field}: [REDACTED]")
        else:
            logger.info(f"{field}: {value}")


settings = get_settings()
