"""Pydantic configuration models for urltomarkdown."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field

ENV_PREFIX = "URLTOMARKDOWN_"


class NetworkConfig(BaseModel):
    """Configuration for the HTTP fetch engine."""

    timeout: float = Field(15.0, gt=0, description="Deadline in seconds for a whole fetch")
    user_agent: Optional[str] = Field(None, description="Custom User-Agent header")
    proxy: Optional[str] = Field(None, description="HTTP/HTTPS proxy URL")
    max_content_size: int = Field(
        10 * 1024 * 1024,
        ge=1,
        description="Maximum response size in bytes",
    )

    model_config = {"extra": "forbid"}


class ValidationConfig(BaseModel):
    """Configuration for URL syntactic validation."""

    allowed_schemes: set[str] = Field(
        default_factory=lambda: {"http", "https"},
        description="URL schemes accepted as input",
    )
    block_private_ips: bool = Field(False, description="Reject private and loopback addresses")

    model_config = {"extra": "forbid"}


class ServiceConfig(BaseModel):
    """
    Root configuration model for urltomarkdown.

    Example:
        config = ServiceConfig(network=NetworkConfig(timeout=10))

    YAML format:
        network:
          timeout: 10
          user_agent: my-bot/1.0
        validation:
          block_private_ips: true
        log_level: DEBUG
    """

    network: NetworkConfig = Field(default_factory=NetworkConfig)
    validation: ValidationConfig = Field(default_factory=ValidationConfig)

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        "INFO",
        description="Logging level",
    )
    log_file: Optional[Path] = Field(None, description="Log file path")

    model_config = {"extra": "forbid"}

    @classmethod
    def from_yaml(cls, yaml_str: str) -> ServiceConfig:
        """Load config from YAML string."""
        import yaml

        data = yaml.safe_load(yaml_str) or {}
        return cls.model_validate(data)

    @classmethod
    def from_yaml_file(cls, path: Path) -> ServiceConfig:
        """Load config from YAML file."""
        return cls.from_yaml(path.read_text())

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> ServiceConfig:
        """
        Load config from URLTOMARKDOWN_* environment variables.

        Recognized: URLTOMARKDOWN_TIMEOUT, URLTOMARKDOWN_USER_AGENT,
        URLTOMARKDOWN_PROXY, URLTOMARKDOWN_LOG_LEVEL.
        """
        import os

        env = os.environ if environ is None else environ

        network: dict = {}
        if env.get(f"{ENV_PREFIX}TIMEOUT"):
            network["timeout"] = env[f"{ENV_PREFIX}TIMEOUT"]
        if env.get(f"{ENV_PREFIX}USER_AGENT"):
            network["user_agent"] = env[f"{ENV_PREFIX}USER_AGENT"]
        if env.get(f"{ENV_PREFIX}PROXY"):
            network["proxy"] = env[f"{ENV_PREFIX}PROXY"]

        data: dict = {"network": network}
        if env.get(f"{ENV_PREFIX}LOG_LEVEL"):
            data["log_level"] = env[f"{ENV_PREFIX}LOG_LEVEL"].upper()

        return cls.model_validate(data)
