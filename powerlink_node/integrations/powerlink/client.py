"""
Powerlink API Client.

Async access to the Powerlink CRM REST API. The client sends requests
built by `powerlink_node.integrations.powerlink.builders` and returns the
decoded JSON body. Errors are mapped onto IntegrationError subtypes and
propagate to the caller; nothing is retried.

Usage:
    async with PowerlinkClient(PowerlinkConfig(api_key="xxxx")) as client:
        # Query records
        body = await client.query(object_type=1, page_size=50, page_number=1)

        # Add a record
        body = await client.add_record(1, [FieldValue(fieldId="name", fieldValue="Bob")])

        # Send a pre-built request
        body = await client.send(outgoing)
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import httpx

from powerlink_node.credentials import TOKEN_HEADER, PowerlinkCredential
from powerlink_node.integrations.base import IntegrationClient, IntegrationConfig
from powerlink_node.integrations.powerlink import builders
from powerlink_node.integrations.powerlink.schemas import (
    ActionRequest,
    FieldValue,
    OutgoingRequest,
    PowerlinkAction,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Configuration
# =============================================================================


@dataclass(frozen=True, slots=True)
class PowerlinkConfig(IntegrationConfig):
    """Configuration for the Powerlink client."""

    api_key: str = ""
    base_url: str = builders.BASE_URL


# =============================================================================
# Client
# =============================================================================


class PowerlinkClient(IntegrationClient):
    """
    Async client for the Powerlink API.

    The client handles:
    - Authentication via the `tokenid` header
    - JSON encoding of request bodies
    - Error mapping to IntegrationError subtypes
    """

    def __init__(
        self,
        config: PowerlinkConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(config, transport=transport)
        self._credential = PowerlinkCredential(api_key=config.api_key)

    @property
    def name(self) -> str:
        """Integration name."""
        return "powerlink"

    @property
    def base_url(self) -> str:
        return self.config.base_url

    def _get_auth_headers(self) -> dict[str, str]:
        """Return Powerlink authentication headers."""
        return {TOKEN_HEADER: self.config.api_key}

    async def send(self, outgoing: OutgoingRequest) -> Any:
        """
        Send a pre-built request and return the decoded response body.

        Args:
            outgoing: Request produced by a builder

        Returns:
            Decoded JSON body, or None for an empty body

        Raises:
            IntegrationError: On any transport failure or non-2xx status
        """
        logger.info(f"[powerlink] {outgoing.method} {outgoing.url}")

        response = await self._request(
            outgoing.method,
            outgoing.url,
            params=outgoing.params or None,
            json=outgoing.body,
            headers=outgoing.headers,
        )
        return self._decode_json(response)

    async def _dispatch(self, request: ActionRequest) -> Any:
        outgoing = builders.build_request(
            request, self._credential, base_url=self.base_url
        )
        return await self.send(outgoing)

    # =========================================================================
    # Records
    # =========================================================================

    async def query(
        self,
        object_type: int,
        *,
        page_size: int = 500,
        page_number: int = 1,
        fields: str = "*",
        sort_by: str = "",
        sort_type: str = "ASC",
        query_params: Sequence[FieldValue] = (),
    ) -> Any:
        """
        Query records of one object type.

        Returns the full response body; unwrapping `data.Data` is left to
        the caller.
        """
        return await self._dispatch(
            ActionRequest(
                action=PowerlinkAction.QUERY,
                object_type=object_type,
                page_size=page_size,
                page_number=page_number,
                fields=fields,
                sort_by=sort_by,
                sort_type=sort_type,
                query_params=tuple(query_params),
            )
        )

    async def add_record(
        self,
        object_type: int,
        query_params: Sequence[FieldValue] = (),
    ) -> Any:
        """Create a record from field/value pairs."""
        return await self._dispatch(
            ActionRequest(
                action=PowerlinkAction.ADD_RECORD,
                object_type=object_type,
                query_params=tuple(query_params),
            )
        )

    async def update_record(
        self,
        object_type: int,
        object_id: str,
        query_params: Sequence[FieldValue] = (),
    ) -> Any:
        """Update the given fields of an existing record."""
        return await self._dispatch(
            ActionRequest(
                action=PowerlinkAction.UPDATE_RECORD,
                object_type=object_type,
                object_id=object_id,
                query_params=tuple(query_params),
            )
        )

    async def delete_record(self, object_type: int, object_id: str) -> Any:
        return await self._dispatch(
            ActionRequest(
                action=PowerlinkAction.DELETE_RECORD,
                object_type=object_type,
                object_id=object_id,
            )
        )

    # =========================================================================
    # Notes and Tasks
    # =========================================================================

    async def add_comment(self, object_type: int, object_id: str, message: str) -> Any:
        """Attach a note to a record."""
        return await self._dispatch(
            ActionRequest(
                action=PowerlinkAction.ADD_COMMENT,
                object_type=object_type,
                object_id=object_id,
                message=message,
            )
        )

    async def add_task(
        self,
        owner_id: str,
        object_type: int,
        object_id: str,
        message: str,
    ) -> Any:
        """Create a task linked to a record, due now."""
        return await self._dispatch(
            ActionRequest(
                action=PowerlinkAction.ADD_TASK,
                owner_id=owner_id,
                object_type=object_type,
                object_id=object_id,
                message=message,
            )
        )
