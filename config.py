"""Configuration management for URL shortener."""

from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field, field_validator


class Config(BaseSettings):
    """Application configuration.
    
    Every field can be set from the environment using its upper-cased name
    (e.g. BASE_URL, DATABASE_DSN) or from a .env file.
    """
    
    # Server settings
    server_address: str = Field(
        default="localhost:8080",
        description="host:port to listen on"
    )
    
    base_url: str = Field(
        default="http://localhost:8080",
        description="Base URL prefixed to short codes in responses"
    )
    
    # Storage settings (first one set wins: database, then file, then memory)
    database_dsn: Optional[str] = Field(
        default=None,
        description="PostgreSQL connection string"
    )
    
    file_storage_path: Optional[str] = Field(
        default=None,
        description="Path of the JSON storage file"
    )
    
    db_pool_max_size: int = Field(
        default=10,
        ge=1,
        description="Maximum size of the database connection pool"
    )
    
    db_command_timeout_seconds: int = Field(
        default=30,
        ge=1,
        description="Timeout for a single database command"
    )
    
    # Identity settings
    secret_key: str = Field(
        default="some secret key",
        min_length=1,
        description="Key signing user identity tokens; tokens do not survive a change"
    )
    
    # URL shortener settings
    short_code_length: int = Field(
        default=8,
        ge=4,
        le=32,
        description="Length of derived short codes"
    )
    
    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    
    log_file: Optional[str] = Field(
        default=None,
        description="Log file path (logs to stdout if not specified)"
    )
    
    log_json: bool = Field(
        default=False,
        description="Use JSON format for logs"
    )
    
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",  # Ignore extra environment variables
    }
    
    @field_validator("server_address")
    @classmethod
    def validate_server_address(cls, v: str) -> str:
        """Require host:port or :port."""
        _, sep, port = v.rpartition(":")
        if not sep or not port.isdigit():
            raise ValueError("server_address must look like host:port")
        return v
    
    @property
    def host(self) -> str:
        host, _, _ = self.server_address.rpartition(":")
        return host or "localhost"
    
    @property
    def port(self) -> int:
        _, _, port = self.server_address.rpartition(":")
        return int(port)


def load_config(**overrides) -> Config:
    """Load configuration from environment; non-empty overrides win."""
    return Config(**{key: value for key, value in overrides.items() if value})
