"""Configuration management for ethserver using Pydantic Settings."""

from enum import Enum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    TEXT = "text"


class EthServerConfig(BaseSettings):
    """ethserver configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    # Default server
    rpc_url: str | None = Field(default=None, alias="ETHSERVER_RPC_URL")
    network_id: str = Field(default="*", alias="ETHSERVER_NETWORK_ID")
    default_server: str = Field(default="default", alias="ETHSERVER_DEFAULT_SERVER")
    server_label: str = Field(default="Default server", alias="ETHSERVER_SERVER_LABEL")

    # Connectivity
    rpc_timeout: float = Field(default=10.0, alias="ETHSERVER_RPC_TIMEOUT", gt=0)

    # Network registry
    networks_file: str | None = Field(default=None, alias="ETHSERVER_NETWORKS_FILE")

    # Observability
    metrics_port: int = Field(default=8080, alias="ETHSERVER_METRICS_PORT", ge=1, le=65535)
    log_level: str = Field(default="INFO", alias="ETHSERVER_LOG_LEVEL")
    log_format: LogFormat = Field(default=LogFormat.JSON, alias="ETHSERVER_LOG_FORMAT")
