from __future__ import annotations

import os
from typing import Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field

CREDENTIALS_PATH = (
    "/zones/{zone_id}/api_gateway/token_validation/{token_config_id}/credentials"
)


class ApiConfig(BaseModel):
    """Configuration for the management API."""

    model_config = ConfigDict(frozen=True)

    base_url: str = "https://api.cloudflare.com/client/v4"
    token_env: str = "CF_API_TOKEN"


class RotatorConfig(BaseModel):
    """Top-level configuration model."""

    model_config = ConfigDict(frozen=True)

    zone_id: str = ""
    token_config_id: str = ""
    source_url: str = ""
    api: ApiConfig = ApiConfig()
    schedule_interval: float = Field(default=3600.0, gt=0)

    @property
    def credentials_url(self) -> str:
        """Management API endpoint holding the token configuration's keys."""
        return self.api.base_url.rstrip("/") + CREDENTIALS_PATH.format(
            zone_id=self.zone_id, token_config_id=self.token_config_id
        )


def load_config(path: Optional[str] = None) -> RotatorConfig:
    """Load configuration from YAML file.

    Args:
        path: Optional path to config file. Falls back to TVROTATE_CONFIG env
            variable or 'config.yaml' in the current directory.
    """

    config_path = path or os.getenv("TVROTATE_CONFIG", "config.yaml")
    data: dict = {}
    if os.path.exists(config_path):
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

    overrides = {
        "zone_id": os.getenv("TVROTATE_ZONE_ID"),
        "token_config_id": os.getenv("TVROTATE_TOKEN_CONFIG_ID"),
        "source_url": os.getenv("TVROTATE_SOURCE_URL"),
    }
    data.update({k: v for k, v in overrides.items() if v})

    env_base_url = os.getenv("TVROTATE_API_BASE_URL")
    if env_base_url:
        data["api"] = {**(data.get("api") or {}), "base_url": env_base_url}

    return RotatorConfig(**data)
