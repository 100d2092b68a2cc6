"""
Node Registry.

The registry is what the host's plugin loader sees: the node types and
credential types this package provides, looked up by name.

Usage:
    registry = NodeRegistry()
    registry.register_node(PowerlinkNode())
    registry.register_credentials(PowerlinkApiCredentials())

    node = registry.get_node_required("powerlink")
    descriptors = registry.to_descriptors()
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from powerlink_node.credentials import PowerlinkApiCredentials

    from .base import Node

logger = logging.getLogger(__name__)


class NodeRegistryError(Exception):
    """Error in node registry operations."""

    pass


class NodeRegistry:
    """
    Registry of node and credential types.

    Types are registered once at load time and not changed afterwards.
    """

    def __init__(self) -> None:
        self._nodes: dict[str, Node] = {}
        self._credentials: dict[str, PowerlinkApiCredentials] = {}

    def register_node(self, node: Node) -> None:
        """
        Register a node.

        Raises:
            NodeRegistryError: If the name is taken or the node's credential
                types are not registered
        """
        name = node.name
        if name in self._nodes:
            raise NodeRegistryError(
                f"Node '{name}' already registered. Use a unique name or unregister first."
            )

        for requirement in node.description.credentials:
            if requirement.name not in self._credentials:
                raise NodeRegistryError(
                    f"Node '{name}' needs credentials '{requirement.name}', "
                    "register them first"
                )

        self._nodes[name] = node
        logger.info(f"[node_registry] Registered node: {name}")

    def register_credentials(self, credentials: PowerlinkApiCredentials) -> None:
        """
        Register a credential type.

        Raises:
            NodeRegistryError: If the name is taken
        """
        if credentials.name in self._credentials:
            raise NodeRegistryError(f"Credentials '{credentials.name}' already registered.")

        self._credentials[credentials.name] = credentials
        logger.info(f"[node_registry] Registered credentials: {credentials.name}")

    def unregister_node(self, name: str) -> bool:
        """Unregister a node by name; returns False if it was not registered."""
        if name in self._nodes:
            del self._nodes[name]
            logger.info(f"[node_registry] Unregistered node: {name}")
            return True
        return False

    def get_node(self, name: str) -> Node | None:
        return self._nodes.get(name)

    def get_node_required(self, name: str) -> Node:
        """
        Get a node by name, raising if not found.

        Raises:
            NodeRegistryError: If node not found
        """
        node = self._nodes.get(name)
        if node is None:
            available = list(self._nodes.keys())
            raise NodeRegistryError(f"Node '{name}' not found. Available nodes: {available}")
        return node

    def get_credentials(self, name: str) -> PowerlinkApiCredentials | None:
        return self._credentials.get(name)

    def list_node_names(self) -> list[str]:
        return list(self._nodes.keys())

    def list_credential_names(self) -> list[str]:
        return list(self._credentials.keys())

    def to_descriptors(self) -> dict[str, list[dict[str, Any]]]:
        """Export every registered descriptor for the host."""
        return {
            "nodes": [node.description.to_dict() for node in self._nodes.values()],
            "credentials": [cred.to_dict() for cred in self._credentials.values()],
        }

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, name: str) -> bool:
        return name in self._nodes

    def __repr__(self) -> str:
        return f"<NodeRegistry nodes={self.list_node_names()}>"
