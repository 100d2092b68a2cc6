"""
Powerlink Integration.

Powerlink is a CRM. This integration covers:
- Record queries with simple AND filters
- Record create, update and delete
- Notes (comments) on records
- Tasks linked to records

Usage:
    from powerlink_node.integrations.powerlink import PowerlinkClient, PowerlinkConfig

    async with PowerlinkClient(PowerlinkConfig(api_key="xxxx")) as client:
        body = await client.query(object_type=1, page_size=50)
        records = body["data"]["Data"]
"""

from powerlink_node.integrations.powerlink.builders import BASE_URL, build_request
from powerlink_node.integrations.powerlink.client import PowerlinkClient, PowerlinkConfig
from powerlink_node.integrations.powerlink.schemas import (
    ActionRequest,
    FieldValue,
    OutgoingRequest,
    PowerlinkAction,
)

__all__ = [
    "BASE_URL",
    "ActionRequest",
    "FieldValue",
    "OutgoingRequest",
    "PowerlinkAction",
    "PowerlinkClient",
    "PowerlinkConfig",
    "build_request",
]
