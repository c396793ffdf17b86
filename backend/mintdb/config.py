"""
Data layer configuration loaded from environment variables.
"""
from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Data layer settings from environment variables."""
    
    # MongoDB (both required, checked by DbHelper)
    mongo_uri: str = Field(default="", description="MONGO_URI connection string")
    mongo_database: str = Field(default="", description="MONGO_DATABASE name")
    mongo_server_api_version: str = "1"
    
    # SMS verification
    sms_resend_interval_seconds: int = 60
    
    # Logging
    log_level: str = "INFO"
    
    class Config:
        env_file = ".env"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
