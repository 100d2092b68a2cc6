"""
Execution Context for nodes.

The context carries everything the host supplies for one invocation:
the user's parameter values and the decrypted credentials. Nodes read
from it and never write to it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
from uuid import UUID, uuid4


class NodeParameterError(Exception):
    """A parameter is missing or holds a value the node cannot use."""

    def __init__(self, message: str, parameter: str):
        super().__init__(message)
        self.parameter = parameter


class NodeCredentialsError(Exception):
    """The host supplied no credentials of the requested type."""


_MISSING: Any = object()


@dataclass
class NodeExecutionContext:
    """
    Request-scoped context for a single node invocation.

    Parameters are keyed by name. Nested values (such as the entries of a
    fixedCollection) are reached with dotted paths, for example
    "fieldsUi.fieldValues".

    Parameters hold one value per name, so every item index resolves to
    the same value.
    """

    parameters: dict[str, Any] = field(default_factory=dict)
    credentials: dict[str, dict[str, Any]] = field(default_factory=dict)
    execution_id: UUID = field(default_factory=uuid4)

    def get_node_parameter(
        self,
        name: str,
        item_index: int = 0,
        default: Any = _MISSING,
    ) -> Any:
        """
        Look up a parameter value.

        Args:
            name: Parameter name or dotted path
            item_index: Index of the input item being processed
            default: Value returned when the parameter is absent

        Raises:
            NodeParameterError: If absent and no default was given
        """
        value: Any = self.parameters
        for part in name.split("."):
            if isinstance(value, dict) and part in value:
                value = value[part]
                continue
            if default is _MISSING:
                raise NodeParameterError(
                    f"Could not get parameter '{name}'", parameter=name
                )
            return default
        return value

    def get_credentials(self, name: str) -> dict[str, Any]:
        """
        Return the decrypted credentials of type `name`.

        Raises:
            NodeCredentialsError: If the host supplied none
        """
        try:
            return self.credentials[name]
        except KeyError:
            raise NodeCredentialsError(
                f"No credentials of type '{name}' were supplied"
            ) from None
