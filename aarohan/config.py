"""
Configuration settings for the AAROHAN eligibility service
"""
from typing import List
from pydantic_settings import BaseSettings
from pydantic import Field, ConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # MongoDB Configuration
    mongodb_url: str = Field(default="mongodb://localhost:27017")
    mongodb_db_name: str = Field(default="aarohan_db")

    # OpenRouter API Configuration
    openrouter_api_key: str = Field(default="")
    openrouter_base_url: str = Field(default="https://openrouter.ai/api/v1")
    openrouter_model: str = Field(default="google/gemini-2.0-flash-001")
    llm_timeout_seconds: float = Field(default=30.0)
    llm_max_tokens: int = Field(default=2000)

    # Application Configuration
    app_name: str = Field(default="AAROHAN API")
    app_version: str = Field(default="1.0.0")
    debug: bool = Field(default=True)
    log_level: str = Field(default="INFO")

    # API Configuration
    cors_origins: str = Field(default="http://localhost:3000,http://localhost:5173")

    # Assistant and matcher behaviour
    summary_interval: int = Field(default=10, ge=2)  # compress history every N messages
    recent_turns: int = Field(default=6, ge=1)
    recommendations_use_llm: bool = Field(default=True)

    def get_cors_origins_list(self) -> List[str]:
        """Get CORS origins as a list"""
        if ',' in self.cors_origins:
            return [origin.strip() for origin in self.cors_origins.split(',')]
        return [self.cors_origins.strip()]

    def llm_configured(self) -> bool:
        """Whether an OpenRouter key has been provided"""
        key = self.openrouter_api_key.strip()
        return bool(key) and key != "your_openrouter_api_key_here"

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Create global settings instance
settings = Settings()
