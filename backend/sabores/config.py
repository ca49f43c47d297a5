from functools import lru_cache
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field


load_dotenv()


class Settings(BaseModel):
    database_url: Optional[str] = Field(default=None)
    echo_sql: bool = Field(default=False)
    environment: str = Field(default="development")
    max_capacity: int = Field(default=50, ge=1)
    max_party_size: int = Field(default=12, ge=1)
    timezone: Optional[str] = Field(default=None)
    log_level: str = Field(default="INFO")
    port: int = Field(default=3000)

    @property
    def store_configured(self) -> bool:
        return bool(self.database_url)


@lru_cache
def get_settings() -> Settings:
    return Settings(
        database_url=os.getenv("DATABASE_URL") or None,
        echo_sql=bool(int(os.getenv("ECHO_SQL", "0"))),
        environment=os.getenv("APP_ENV", Settings.model_fields["environment"].default),
        max_capacity=int(os.getenv("MAX_CAPACITY", "50")),
        max_party_size=int(os.getenv("MAX_PARTY_SIZE", "12")),
        timezone=os.getenv("APP_TIMEZONE") or None,
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        port=int(os.getenv("PORT", "3000")),
    )
