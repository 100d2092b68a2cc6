"""
Powerlink API credentials.

Two pieces live here:

- PowerlinkCredential: the value the host hands the node at execution
  time. It holds the API key and nothing else.
- PowerlinkApiCredentials: the declarative descriptor the host's plugin
  loader reads. It declares the single secret field and how the key is
  injected into outgoing requests.

The key is never validated. An empty key passes through unchanged and
the remote API rejects it.

Usage:
    credential = PowerlinkCredential(api_key="xxxx")
    credential.get()  # {"apiKey": "xxxx"}

    descriptor = PowerlinkApiCredentials()
    request = descriptor.authenticate(request, credential)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from powerlink_node.integrations.powerlink.schemas import OutgoingRequest

TOKEN_HEADER = "tokenid"
TOKEN_QUERY_PARAM = "api_key"


class CredentialProvider(Protocol):
    """Anything that can hand out the API key."""

    def get(self) -> dict[str, str]:
        ...


@dataclass(frozen=True, slots=True)
class PowerlinkCredential:
    """The decrypted credential supplied by the host."""

    api_key: str = ""

    def get(self) -> dict[str, str]:
        """Return the credential in the host's shape."""
        return {"apiKey": self.api_key}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PowerlinkCredential:
        """Build from the host's decrypted credential object."""
        value = data.get("apiKey", "")
        return cls(api_key="" if value is None else str(value))

    def __repr__(self) -> str:
        return "PowerlinkCredential(api_key='***')"


class CredentialInjection(str, Enum):
    """Where the key goes on an outgoing request."""

    HEADER = "header"
    QUERY = "query"


@dataclass(frozen=True, slots=True)
class CredentialProperty:
    """A single field of the credential form."""

    display_name: str
    name: str
    type: str = "string"
    default: Any = ""
    password: bool = False

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "displayName": self.display_name,
            "name": self.name,
            "type": self.type,
            "default": self.default,
        }
        if self.password:
            result["typeOptions"] = {"password": True}
        return result


@dataclass(frozen=True, slots=True)
class PowerlinkApiCredentials:
    """
    Credential type descriptor for the Powerlink API.

    The `tokenid` header is always set. With QUERY injection the key is
    additionally sent as the `api_key` query parameter.
    """

    name: str = "powerlinkApi"
    display_name: str = "Powerlink API"
    documentation_url: str = "https://api.powerlink.co.il/"
    injection: CredentialInjection = CredentialInjection.HEADER
    properties: tuple[CredentialProperty, ...] = field(
        default_factory=lambda: (
            CredentialProperty(
                display_name="API Key",
                name="apiKey",
                password=True,
            ),
        )
    )

    def authenticate(
        self,
        request: OutgoingRequest,
        credential: CredentialProvider,
    ) -> OutgoingRequest:
        """Return a copy of `request` carrying the credential."""
        api_key = credential.get()["apiKey"]
        headers = {**request.headers, TOKEN_HEADER: api_key}
        params = dict(request.params)
        if self.injection == CredentialInjection.QUERY:
            params[TOKEN_QUERY_PARAM] = api_key
        return request.model_copy(update={"headers": headers, "params": params})

    def to_dict(self) -> dict[str, Any]:
        """Serialize for the host's plugin loader."""
        if self.injection == CredentialInjection.QUERY:
            properties = {"qs": {TOKEN_QUERY_PARAM: "={{$credentials.apiKey}}"}}
        else:
            properties = {"headers": {TOKEN_HEADER: "={{$credentials.apiKey}}"}}
        return {
            "name": self.name,
            "displayName": self.display_name,
            "documentationUrl": self.documentation_url,
            "properties": [prop.to_dict() for prop in self.properties],
            "authenticate": {"type": "generic", "properties": properties},
        }
