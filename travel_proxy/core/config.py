"""
Configuration settings for the Travel Proxy API
"""

import logging
from typing import List, Optional, Dict, Any
from enum import Enum
from pydantic import AliasChoices, Field, field_validator, model_validator
from pydantic_settings import BaseSettings


class Environment(str, Enum):
    """Supported environment types"""
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class LogLevel(str, Enum):
    """Supported log levels"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


# Placeholder values a misconfigured client bundle can leak into the environment
_UNSET_MARKERS = {"", "undefined", "null", "none"}


class Settings(BaseSettings):
    """Application settings loaded from environment variables with validation"""

    # API Configuration
    API_TITLE: str = Field(default="Travel Proxy API", description="API title")
    API_VERSION: str = Field(default="1.0.0", description="API version")
    API_HOST: str = Field(default="0.0.0.0", description="API host")
    API_PORT: int = Field(default=8000, ge=1, le=65535, description="API port")
    PLACES_SERVER_PORT: int = Field(
        default=3000,
        ge=1,
        le=65535,
        description="Port for the auxiliary places passthrough server"
    )

    # CORS Configuration (stored as string, parsed to list)
    CORS_ORIGINS_STR: str = Field(
        default="http://localhost:3000,http://localhost:8081",
        description="Allowed CORS origins (comma-separated)",
        alias="CORS_ORIGINS"
    )

    # Logging Configuration
    LOG_LEVEL: LogLevel = Field(
        default=LogLevel.INFO,
        description="Logging level"
    )

    # Environment Configuration
    ENVIRONMENT: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment"
    )

    # Upstream API Keys
    AVIATION_STACK_API_KEY: str = Field(
        default="",
        description="Aviation Stack access key for flight data",
        validation_alias=AliasChoices("AVIATION_STACK_API_KEY", "EXPO_PUBLIC_AVIATION_STACK_API_KEY"),
    )
    GOOGLE_PLACES_API_KEY: str = Field(
        default="",
        description="Google Places API key for places search",
        validation_alias=AliasChoices("GOOGLE_PLACES_API_KEY", "EXPO_PUBLIC_GOOGLE_PLACES_API_KEY"),
    )

    # Upstream endpoints
    AVIATION_STACK_BASE_URL: str = Field(
        default="https://api.aviationstack.com/v1",
        description="Aviation Stack API base URL"
    )
    GOOGLE_PLACES_BASE_URL: str = Field(
        default="https://maps.googleapis.com/maps/api/place",
        description="Google Places API base URL"
    )
    WIKIPEDIA_SUMMARY_URL: str = Field(
        default="https://en.wikipedia.org/api/rest_v1/page/summary",
        description="Wikipedia REST page summary endpoint"
    )

    # Local chat model (Ollama)
    OLLAMA_URL: str = Field(
        default="http://127.0.0.1:11434",
        description="Base URL of the Ollama server used by the chat advisor",
        validation_alias=AliasChoices("OLLAMA_URL", "EXPO_PUBLIC_OLLAMA_URL"),
    )
    OLLAMA_MODEL: str = Field(
        default="llama3.2:3b",
        description="Ollama model answering chat advisor questions",
        validation_alias=AliasChoices("OLLAMA_MODEL", "EXPO_PUBLIC_OLLAMA_MODEL"),
    )

    # Request Configuration
    UPSTREAM_TIMEOUT: int = Field(
        default=10,
        ge=1,
        le=120,
        description="Timeout in seconds for each upstream API call"
    )
    WIKIPEDIA_TIMEOUT: int = Field(
        default=3,
        ge=1,
        le=60,
        description="Timeout in seconds for the Wikipedia fallback lookup"
    )
    CHAT_TIMEOUT: int = Field(
        default=30,
        ge=1,
        le=300,
        description="Timeout in seconds for one chat model generation"
    )

    # Archive Configuration
    PROJECT_ROOT: str = Field(
        default=".",
        description="Directory archived by the source download"
    )
    ARCHIVE_TMP_DIR: str = Field(
        default="/tmp",
        description="Directory where temporary archives are written"
    )
    ARCHIVE_NAME_PREFIX: str = Field(
        default="travel-app",
        description="Prefix of generated archive filenames"
    )
    ARCHIVE_EXCLUDES_STR: str = Field(
        default="node_modules,.expo,dist,.git,*.log,.DS_Store,__pycache__,.venv",
        description="Path globs excluded from source archives (comma-separated)",
        alias="ARCHIVE_EXCLUDES"
    )
    BUILD_COMMAND: str = Field(
        default="npm run export:web",
        description="Command producing the web build before a build download"
    )
    BUILD_OUTPUT_DIR: str = Field(
        default="dist",
        description="Build output directory, relative to PROJECT_ROOT"
    )

    @property
    def CORS_ORIGINS(self) -> List[str]:
        """Get CORS origins as a list"""
        return [origin.strip() for origin in self.CORS_ORIGINS_STR.split(',') if origin.strip()]

    @property
    def ARCHIVE_EXCLUDES(self) -> List[str]:
        """Get archive exclude globs as a list"""
        return [pattern.strip() for pattern in self.ARCHIVE_EXCLUDES_STR.split(',') if pattern.strip()]

    @field_validator('AVIATION_STACK_API_KEY', 'GOOGLE_PLACES_API_KEY', mode='before')
    @classmethod
    def normalize_api_key(cls, v) -> str:
        """Strip whitespace and treat placeholder values as unset"""
        v = (v or "").strip()
        if v.lower() in _UNSET_MARKERS:
            return ""
        return v

    @field_validator('LOG_LEVEL', mode='before')
    @classmethod
    def validate_log_level(cls, v) -> str:
        """Validate and normalize log level"""
        if isinstance(v, str):
            return v.upper()
        return v

    @field_validator('AVIATION_STACK_BASE_URL', 'GOOGLE_PLACES_BASE_URL', 'WIKIPEDIA_SUMMARY_URL', 'OLLAMA_URL')
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Base URLs are joined with '/', so drop any trailing slash"""
        return v.rstrip('/')

    @model_validator(mode='after')
    def validate_environment_specific_settings(self) -> 'Settings':
        """Validate environment-specific configuration"""
        if self.ENVIRONMENT == Environment.PRODUCTION:
            if any('localhost' in origin for origin in self.CORS_ORIGINS):
                logging.warning(
                    "Production environment detected with localhost CORS origins. "
                    "Consider updating CORS_ORIGINS for production."
                )

            if self.LOG_LEVEL == LogLevel.DEBUG:
                logging.warning(
                    "DEBUG log level detected in production environment. "
                    "Consider using INFO or WARNING for production."
                )

        return self

    def is_configured(self, key_name: str) -> bool:
        """Check whether an upstream credential is present"""
        return bool(getattr(self, key_name, ""))

    def get_upstream_config(self) -> Dict[str, Any]:
        """Get upstream API configuration"""
        return {
            'aviation_stack_base_url': self.AVIATION_STACK_BASE_URL,
            'google_places_base_url': self.GOOGLE_PLACES_BASE_URL,
            'wikipedia_summary_url': self.WIKIPEDIA_SUMMARY_URL,
            'timeout': self.UPSTREAM_TIMEOUT,
            'wikipedia_timeout': self.WIKIPEDIA_TIMEOUT,
            'ollama_url': self.OLLAMA_URL,
            'ollama_model': self.OLLAMA_MODEL,
            'chat_timeout': self.CHAT_TIMEOUT,
        }

    def configure_logging(self) -> None:
        """Apply LOG_LEVEL to the root logger"""
        logging.getLogger().setLevel(self.LOG_LEVEL)

    def get_archive_config(self) -> Dict[str, Any]:
        """Get archive builder configuration"""
        return {
            'project_root': self.PROJECT_ROOT,
            'tmp_dir': self.ARCHIVE_TMP_DIR,
            'name_prefix': self.ARCHIVE_NAME_PREFIX,
            'excludes': self.ARCHIVE_EXCLUDES,
            'build_command': self.BUILD_COMMAND,
            'build_output_dir': self.BUILD_OUTPUT_DIR,
        }

    def mask_sensitive_data(self) -> Dict[str, Any]:
        """Get configuration with sensitive data masked for logging"""
        config = self.model_dump()

        for key in ('AVIATION_STACK_API_KEY', 'GOOGLE_PLACES_API_KEY'):
            if config.get(key):
                config[key] = f"{config[key][:4]}***"

        return config

    model_config = {
        "env_file": ".env",
        "extra": "ignore",
        "case_sensitive": True,
        "populate_by_name": True,
        "validate_assignment": True,
        "use_enum_values": True,
        "env_parse_none_str": "None",
    }


def get_settings() -> Settings:
    """Get a freshly loaded settings instance"""
    return Settings()


# Global settings instance - will be initialized when first accessed
settings: Optional[Settings] = None


def get_global_settings() -> Settings:
    """Get or create global settings instance"""
    global settings
    if settings is None:
        settings = get_settings()
    return settings
