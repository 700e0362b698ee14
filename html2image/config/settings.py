"""
Application Settings
===================

Main application settings and environment configuration using Pydantic Settings.
Supports development, testing, and production environments.
"""

from typing import Annotated, Optional, List, Union
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
import json


# Chromium flags for constrained/serverless hosts: no sandbox, no GPU, no /dev/shm
SERVERLESS_CHROMIUM_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
    "--no-first-run",
    "--no-zygote",
    "--single-process",
    "--hide-scrollbars",
    "--mute-audio",
    "--font-render-hinting=none",
]


class Settings(BaseSettings):
    """Main application settings with environment variable support."""

    # Application Configuration
    app_name: str = Field(default="HTML to Image API", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: str = Field(
        default="development", description="Environment: development, testing, production"
    )
    debug: bool = Field(default=True, description="Debug mode")

    # Server Configuration
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, description="Server port")
    endpoint_path: str = Field(default="/api", description="Path of the conversion endpoint")

    # Rendering Configuration
    default_width: int = Field(default=800, gt=0, description="Default viewport width")
    default_height: int = Field(default=600, gt=0, description="Default viewport height")
    default_format: str = Field(default="png", description="Default image format")
    jpeg_quality: int = Field(default=90, ge=0, le=100, description="JPEG screenshot quality")
    content_load_timeout_ms: int = Field(
        default=8000, ge=0, description="Timeout for loading HTML content in milliseconds"
    )
    screenshot_timeout_ms: int = Field(
        default=0, ge=0, description="Screenshot timeout in milliseconds (0 disables it)"
    )

    # Browser Configuration
    browser_headless: bool = Field(default=True, description="Run browser in headless mode")
    browser_executable_path: Optional[str] = Field(
        default=None, description="Chromium executable to launch instead of the bundled one"
    )
    browser_args: Annotated[List[str], NoDecode] = Field(
        default_factory=lambda: list(SERVERLESS_CHROMIUM_ARGS),
        description="Chromium launch arguments",
    )
    ignore_https_errors: bool = Field(
        default=True, description="Ignore TLS certificate errors while loading content"
    )

    # CORS Configuration
    cors_allow_origin: str = Field(default="*", description="Access-Control-Allow-Origin value")

    # Monitoring Configuration
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        allowed = {"development", "testing", "production"}
        if v not in allowed:
            raise ValueError(f"Environment must be one of: {allowed}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"Log level must be one of: {allowed}")
        return v.upper()

    @field_validator("default_format")
    @classmethod
    def validate_default_format(cls, v: str) -> str:
        """Validate default image format."""
        allowed = {"png", "jpeg"}
        if v.lower() not in allowed:
            raise ValueError(f"Default format must be one of: {allowed}")
        return v.lower()

    @field_validator("endpoint_path")
    @classmethod
    def validate_endpoint_path(cls, v: str) -> str:
        """Ensure the endpoint path is absolute."""
        return v if v.startswith("/") else f"/{v}"

    @field_validator("browser_args", mode="before")
    @classmethod
    def parse_browser_args(cls, v: Union[str, List[str]]) -> List[str]:
        """Parse browser arguments from string or list."""
        if isinstance(v, str):
            # Handle JSON-like string: ["--no-sandbox", "--disable-gpu"]
            v = v.strip()
            if v.startswith("[") and v.endswith("]"):
                try:
                    return json.loads(v)
                except json.JSONDecodeError:
                    pass
            # Handle comma-separated string: "--no-sandbox,--disable-gpu"
            return [arg.strip() for arg in v.split(",") if arg.strip()]
        return v

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, env_prefix="HTML2IMAGE_"
    )


# Global settings instance - will be initialized when needed
settings = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global settings
    if settings is None:
        settings = Settings()
    return settings


def reload_settings() -> Settings:
    """Reload settings from environment."""
    global settings
    settings = Settings()
    return settings
