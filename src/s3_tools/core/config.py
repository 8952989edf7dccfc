"""Configuration management for s3-tools."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    log_level: str = "INFO"
    log_format: str = "json"
    otel_enabled: bool = False
    otel_service_name: str = "s3-tools"
    default_region: str = "us-east-1"
    retries: int = 5
    retry_delay: float = 1.0

    model_config = {
        "env_prefix": "S3_TOOLS_",
        "case_sensitive": False,
    }


settings = Settings()
