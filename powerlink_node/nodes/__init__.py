"""
Nodes.

A node is one step a workflow host can run. Each node carries a
declarative descriptor (what the host renders) and an async execute
method (what the host calls).

Usage:
    registry = NodeRegistry()
    registry.register_credentials(PowerlinkApiCredentials())
    registry.register_node(PowerlinkNode())

    node = registry.get_node_required("powerlink")
    outputs = await node.execute(context)
"""

from .base import (
    Node,
    NodeCredentialRequirement,
    NodeDescription,
    NodeExecutionData,
    NodeProperty,
    NodePropertyCollection,
    NodePropertyOption,
)
from .context import NodeCredentialsError, NodeExecutionContext, NodeParameterError
from .registry import NodeRegistry, NodeRegistryError

__all__ = [
    # Contract
    "Node",
    "NodeCredentialRequirement",
    "NodeDescription",
    "NodeExecutionData",
    "NodeProperty",
    "NodePropertyCollection",
    "NodePropertyOption",
    # Execution
    "NodeCredentialsError",
    "NodeExecutionContext",
    "NodeParameterError",
    # Registry
    "NodeRegistry",
    "NodeRegistryError",
]
