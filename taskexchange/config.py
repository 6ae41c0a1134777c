# taskexchange/config.py
from pydantic_settings import BaseSettings
from typing import List, Optional
from pydantic import Field

class Settings(BaseSettings):
    SECRET_KEY: str = Field("dev-secret-change-me")
    ALGORITHM: str = Field("HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(7 * 24 * 60)

    # Single JSON document holding every collection
    DATA_FILE: str = Field("./db.json")

    API_PREFIX: str = Field("/api")
    CORS_ORIGINS: List[str] = Field(default_factory=list)

    LOG_DIR: Optional[str] = None
    LOG_LEVEL: str = Field("INFO")

    model_config = {
        "env_file": ".env",
        "extra": "allow",
    }

    @property
    def api_prefix(self) -> str:
        return self.API_PREFIX.rstrip("/")

settings = Settings()
