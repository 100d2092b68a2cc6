"""
Plugin entry point.

The host calls `load_plugin()` once at startup to discover the node and
credential types this package provides.
"""

from __future__ import annotations

from powerlink_node.config import NodeSettings
from powerlink_node.credentials import PowerlinkApiCredentials
from powerlink_node.nodes.powerlink import PowerlinkNode
from powerlink_node.nodes.registry import NodeRegistry


def load_plugin(
    registry: NodeRegistry | None = None,
    *,
    settings: NodeSettings | None = None,
) -> NodeRegistry:
    """Register the Powerlink credential type and node."""
    registry = registry if registry is not None else NodeRegistry()
    credentials = PowerlinkApiCredentials()
    registry.register_credentials(credentials)
    registry.register_node(PowerlinkNode(settings=settings, credentials_type=credentials))
    return registry
