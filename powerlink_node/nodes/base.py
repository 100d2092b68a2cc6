"""
Node Base Classes.

This module defines the plugin contract a workflow host loads nodes through:
- NodeProperty: One parameter of the node's declarative UI schema
- NodeDescription: The full descriptor (identity, credentials, properties)
- NodeExecutionData: One output item
- Node: Base class for all nodes

Design Principle:
    The descriptor is data. The host renders it and evaluates the
    display rules; nodes never branch on UI state. A node only reads
    its parameters from the execution context and returns output items.

Usage:
    class EchoNode(Node):
        @property
        def description(self) -> NodeDescription:
            return NodeDescription(display_name="Echo", name="echo")

        async def execute(self, context) -> list[list[NodeExecutionData]]:
            value = context.get_node_parameter("value", 0, "")
            return [[NodeExecutionData(json={"value": value})]]
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .context import NodeExecutionContext


@dataclass(frozen=True, slots=True)
class NodePropertyOption:
    """A selectable value of an `options` property."""

    name: str
    value: Any
    description: str | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"name": self.name, "value": self.value}
        if self.description is not None:
            result["description"] = self.description
        return result


@dataclass(frozen=True, slots=True)
class NodePropertyCollection:
    """A named group of nested properties inside a `fixedCollection`."""

    display_name: str
    name: str
    values: tuple[NodeProperty, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "displayName": self.display_name,
            "name": self.name,
            "values": [value.to_dict() for value in self.values],
        }


@dataclass(frozen=True, slots=True)
class NodeProperty:
    """
    One parameter of the node's UI schema.

    Attributes:
        display_name: Label shown to the user
        name: Parameter name the node reads at execution time
        type: Host field type (string, number, boolean, options, fixedCollection)
        default: Value used when the user sets nothing
        required: Whether the host marks the field as required
        description: Help text
        options: Choices for `options` properties, or nested collections
            for `fixedCollection` properties
        display_options: Visibility rules, e.g. {"show": {"action": ["query"]}}
        placeholder: Placeholder text
        type_options: Extra host-specific field settings
    """

    display_name: str
    name: str
    type: str
    default: Any = None
    required: bool = False
    description: str | None = None
    options: tuple[NodePropertyOption | NodePropertyCollection, ...] = ()
    display_options: dict[str, Any] | None = None
    placeholder: str | None = None
    type_options: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to the host's camelCase shape."""
        result: dict[str, Any] = {
            "displayName": self.display_name,
            "name": self.name,
            "type": self.type,
            "default": self.default,
        }

        if self.required:
            result["required"] = True
        if self.description is not None:
            result["description"] = self.description
        if self.options:
            result["options"] = [option.to_dict() for option in self.options]
        if self.display_options is not None:
            result["displayOptions"] = self.display_options
        if self.placeholder is not None:
            result["placeholder"] = self.placeholder
        if self.type_options is not None:
            result["typeOptions"] = self.type_options

        return result


@dataclass(frozen=True, slots=True)
class NodeCredentialRequirement:
    """A credential type the node asks the host for."""

    name: str
    required: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "required": self.required}


@dataclass(frozen=True, slots=True)
class NodeDescription:
    """Declarative descriptor of a node."""

    display_name: str
    name: str
    icon: str | None = None
    group: tuple[str, ...] = ("transform",)
    version: int = 1
    subtitle: str | None = None
    description: str = ""
    defaults: dict[str, Any] = field(default_factory=dict)
    inputs: tuple[str, ...] = ("main",)
    outputs: tuple[str, ...] = ("main",)
    credentials: tuple[NodeCredentialRequirement, ...] = ()
    properties: tuple[NodeProperty, ...] = ()

    def get_property(self, name: str) -> NodeProperty | None:
        for prop in self.properties:
            if prop.name == name:
                return prop
        return None

    def to_dict(self) -> dict[str, Any]:
        """Convert to the host's camelCase shape."""
        result: dict[str, Any] = {
            "displayName": self.display_name,
            "name": self.name,
            "group": list(self.group),
            "version": self.version,
            "description": self.description,
            "defaults": self.defaults or {"name": self.display_name},
            "inputs": list(self.inputs),
            "outputs": list(self.outputs),
            "credentials": [cred.to_dict() for cred in self.credentials],
            "properties": [prop.to_dict() for prop in self.properties],
        }

        if self.icon is not None:
            result["icon"] = self.icon
        if self.subtitle is not None:
            result["subtitle"] = self.subtitle

        return result


@dataclass(frozen=True, slots=True)
class NodeExecutionData:
    """One output item handed back to the host."""

    json: Any

    def to_dict(self) -> dict[str, Any]:
        return {"json": self.json}


class Node(ABC):
    """
    Base class for all nodes.

    Contract:
        - description: Declarative descriptor read by the host
        - execute: Async method run once per invocation

    Errors:
        Unlike a tool that reports failures in its result, a node raises.
        The host decides whether the workflow stops or routes the item
        to an error branch.
    """

    @property
    @abstractmethod
    def description(self) -> NodeDescription:
        """Declarative descriptor of the node."""
        ...

    @property
    def name(self) -> str:
        return self.description.name

    @abstractmethod
    async def execute(
        self,
        context: NodeExecutionContext,
    ) -> list[list[NodeExecutionData]]:
        """
        Run the node.

        Args:
            context: Parameters and credentials supplied by the host

        Returns:
            Output items, one list per output
        """
        ...

    def __repr__(self) -> str:
        return f"<Node {self.name}>"
