"""
Configuration loader for the gcloud MCP server.

Loads settings from config.yaml. Environment variables are used ONLY for secrets
(tenant access tokens when running over stdio). Never log secrets.
"""

from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, Field


class ServerConfig(BaseModel):
    """Configuration for the HTTP gateway and MCP server identity."""

    name: str = Field(default="gcloud-mcp", description="Server name reported to MCP clients")
    version: str = Field(default="1.0.0", description="Server version reported to MCP clients")
    host: str = Field(default="127.0.0.1", description="Host to bind to")
    port: int = Field(default=8000, description="Port to bind to")


class GCloudConfig(BaseModel):
    """Configuration for outbound Google Cloud REST calls."""

    request_timeout: float = Field(
        default=30.0, description="Timeout in seconds for a single REST call"
    )
    user_agent: str = Field(default="gcloud-mcp/1.0.0", description="User-Agent header value")


class Config(BaseModel):
    """Main configuration object."""

    server: ServerConfig = Field(default_factory=ServerConfig)
    gcloud: GCloudConfig = Field(default_factory=GCloudConfig)
    log_level: str = Field(default="INFO", description="Logging level")
    enable_pretty_print: bool = Field(
        default=False, description="Enable custom pretty print for debugging"
    )
    save_to_file: bool = Field(default=False, description="Save logs to file")
    log_file_path: str = Field(default="server.log", description="Log file path (relative to root)")
    max_log_file_size: int = Field(
        default=10485760, description="Max log file size in bytes (10MB)"
    )
    backup_count: int = Field(default=5, description="Number of backup log files to keep")


_LOGGING_KEYS = (
    "enable_pretty_print",
    "save_to_file",
    "log_file_path",
    "max_log_file_size",
    "backup_count",
)


def load_config(config_path: Optional[Path] = None) -> Config:
    """
    Load configuration from YAML file.

    Environment variables are used ONLY for secrets (access tokens), not configuration.

    Args:
        config_path: Path to config.yaml file. Defaults to ./config.yaml

    Returns:
        Loaded configuration object
    """
    if config_path is None:
        config_path = Path("config.yaml")

    config_data: Dict[str, Any] = {}

    if config_path.exists():
        with open(config_path, "r", encoding="utf-8") as f:
            config_data = yaml.safe_load(f) or {}

    # Flatten the nested logging block onto the top-level fields
    logging_config = config_data.pop("logging", None) or {}
    if "level" in logging_config:
        config_data["log_level"] = logging_config["level"]
    for key in _LOGGING_KEYS:
        if key in logging_config:
            config_data[key] = logging_config[key]

    return Config(**config_data)
