from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    
    Loading priority (highest to lowest):
    1. Environment variables
    2. .env file
    3. Default values below
    """
    
    # Environment
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"
    
    # Application
    app_name: str = "TinyLink"
    app_version: str = "1.0"
    
    # Server
    host: str = "127.0.0.1"
    port: int = 4000
    
    # Database
    database_url: str = "sqlite:///./tinylink.db"
    
    # Short links are composed as f"{base_url}/{code}".
    # When unset, the base is derived from the inbound request.
    base_url: Optional[str] = None
    
    # Short code generation
    short_code_length: int = 6
    short_code_strategy: str = "base62"  # Options: "base62", "hex"
    max_code_attempts: int = 5
    
    # CORS
    cors_origins: List[str] = ["*"]
    
    @field_validator("short_code_length")
    @classmethod
    def check_code_length(cls, value: int) -> int:
        if not 6 <= value <= 8:
            raise ValueError("short_code_length must be between 6 and 8")
        return value
    
    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, value: Optional[str]) -> Optional[str]:
        return value.rstrip("/") if value else None
    
    # Pydantic v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Create settings instance
settings = Settings()
