from functools import lru_cache
import os
from pydantic import BaseModel, Field


class Settings(BaseModel):
    env: str = Field(default="dev", alias="ENV")
    timezone: str = Field(default="Asia/Kolkata", alias="TIMEZONE")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    database_url: str = Field(default="", alias="DATABASE_URL")
    postgres_db: str = Field(default="photobook", alias="POSTGRES_DB")
    postgres_user: str = Field(default="photobook", alias="POSTGRES_USER")
    postgres_password: str = Field(default="photobook", alias="POSTGRES_PASSWORD")
    postgres_host: str = Field(default="localhost", alias="POSTGRES_HOST")
    postgres_port: int = Field(default=5432, alias="POSTGRES_PORT")

    jwt_secret: str = Field(default="secret", alias="JWT_SECRET")

    payment_webhook_secret: str = Field(default="", alias="PAYMENT_WEBHOOK_SECRET")

    overlap_strategy: str = Field(default="scan", alias="OVERLAP_STRATEGY")
    conflict_scan_interval_min: int = Field(default=60, alias="CONFLICT_SCAN_INTERVAL_MIN")

    class Config:
        populate_by_name = True


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings(**os.environ)
