"""
Integrations Layer.

Clients for the external SaaS APIs the node talks to. Each integration
follows the same pattern:

1. Client: Handles authentication and API communication
2. Schemas: Pydantic models for request/response values
3. Builders: Pure builders mapping user input onto REST calls

Directory Structure:
    integrations/
    ├── base.py           # Base client and error taxonomy
    └── powerlink/        # Powerlink CRM
        ├── client.py     # PowerlinkClient
        ├── builders.py   # Per-action request builders
        └── schemas.py    # Pydantic models
"""

from powerlink_node.integrations.base import (
    AuthenticationError,
    IntegrationClient,
    IntegrationConfig,
    IntegrationError,
    NotFoundError,
    RateLimitError,
    ValidationError,
)

__all__ = [
    "AuthenticationError",
    "IntegrationClient",
    "IntegrationConfig",
    "IntegrationError",
    "NotFoundError",
    "RateLimitError",
    "ValidationError",
]
