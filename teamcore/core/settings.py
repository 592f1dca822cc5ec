# teamcore/core/settings.py
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
from typing import Annotated, List, Optional
from pydantic import field_validator

from teamcore.core.domains import RESERVED_SUBDOMAINS


class Settings(BaseSettings):
    """
    Environment variables and process-wide settings.
    Values are read from the environment or .env.
    """
    # Database
    DATABASE_URL: str

    # Public URL of the app, e.g. https://app.example.com
    URL: str = "http://localhost:3000"

    # Multi-tenant subdomains
    SUBDOMAINS_ENABLED: bool = False
    RESERVED_SUBDOMAINS: Annotated[List[str], NoDecode] = list(RESERVED_SUBDOMAINS)
    SUBDOMAIN_MAX_ATTEMPTS: int = 500

    # Object storage (S3 or compatible)
    AWS_ACCESS_KEY_ID: Optional[str] = None
    AWS_SECRET_ACCESS_KEY: Optional[str] = None
    AWS_REGION: str = "us-east-1"
    AWS_S3_UPLOAD_BUCKET_URL: str = "http://localhost:4569"
    AWS_S3_UPLOAD_BUCKET_NAME: str = "teamcore"

    # Avatars
    AVATAR_FETCH_TIMEOUT: float = 10.0
    DEFAULT_AVATAR_HOST: str = "https://tiley.herokuapp.com"

    # Onboarding templates; packaged defaults are used when unset
    ONBOARDING_DIR: Optional[str] = None

    # Comma-separated list in .env
    @field_validator("RESERVED_SUBDOMAINS", mode="before")
    @classmethod
    def split_reserved(cls, v):
        if isinstance(v, str):
            return [i.strip().lower() for i in v.split(",") if i.strip()]
        return v

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

settings = Settings()
