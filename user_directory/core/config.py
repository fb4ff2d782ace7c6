from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # ── App ──────────────────────────────────────────────────────────────────
    app_name: str = "User Directory"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = Field(default="info", alias="LOG_LEVEL")

    # ── Server ───────────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=5000, alias="PORT")

    # ── AWS Region ───────────────────────────────────────────────────────────
    aws_region: str = Field(default="us-east-1", alias="AWS_REGION")

    # ── DynamoDB ─────────────────────────────────────────────────────────────
    dynamodb_table_name: str = Field(
        default="UserDirectory", alias="DYNAMODB_TABLE_NAME"
    )
    # Set to http://localhost:8000 for DynamoDB Local
    dynamodb_endpoint_url: str | None = Field(
        default=None, alias="DYNAMODB_ENDPOINT_URL"
    )
    create_table_if_missing: bool = Field(
        default=False, alias="CREATE_TABLE_IF_MISSING"
    )

    # ── Users ────────────────────────────────────────────────────────────────
    seed_sample_users: bool = Field(default=True, alias="SEED_SAMPLE_USERS")
    default_country: str = Field(default="Jordan", alias="DEFAULT_COUNTRY")

    # ── CORS ─────────────────────────────────────────────────────────────────
    cors_origins: list[str] = Field(
        default=["http://localhost:3000"], alias="CORS_ORIGINS"
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
