"""
Settings for the Powerlink node.

Settings are read once from the environment and cached. The defaults
point at the public Powerlink API, so a host needs no configuration at
all; the variables exist for staging endpoints and request debugging.

    POWERLINK_BASE_URL       API root (default https://api.powerlink.co.il/api)
    POWERLINK_LOG_REQUESTS   "true" to log outgoing requests at DEBUG
    POWERLINK_LOG_RESPONSES  "true" to log response bodies at DEBUG
"""

from __future__ import annotations

import os
from functools import lru_cache

from pydantic import BaseModel, Field, field_validator

from powerlink_node.integrations.powerlink.builders import BASE_URL
from powerlink_node.integrations.powerlink.client import PowerlinkConfig


class NodeSettings(BaseModel):
    """Type-safe settings for the node."""

    base_url: str = Field(default=BASE_URL, description="Powerlink API root URL")
    log_requests: bool = False
    log_responses: bool = False

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    def client_config(self, api_key: str) -> PowerlinkConfig:
        """Build the client configuration for one invocation."""
        return PowerlinkConfig(
            api_key=api_key,
            base_url=self.base_url,
            log_requests=self.log_requests,
            log_responses=self.log_responses,
        )


@lru_cache()
def get_settings() -> NodeSettings:
    """
    Get node settings from environment.

    Uses lru_cache for singleton pattern.
    """
    return NodeSettings(
        base_url=os.getenv("POWERLINK_BASE_URL", BASE_URL),
        log_requests=os.getenv("POWERLINK_LOG_REQUESTS", "false").lower() == "true",
        log_responses=os.getenv("POWERLINK_LOG_RESPONSES", "false").lower() == "true",
    )
