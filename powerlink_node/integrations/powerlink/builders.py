"""
Request builders for the Powerlink API.

Each action owns one builder that turns an ActionRequest into exactly one
OutgoingRequest. Builders are pure apart from AddTask, which stamps the
current time. Nothing is sent from here.

    Action        Method  URL
    ------------  ------  ------------------------------------------
    query         POST    {base}/query
    addRecord     POST    {base}/record/{objectType}
    updateRecord  PUT     {base}/record/{objectType}/{objectId}
    deleteRecord  DELETE  {base}/record/{objectType}/{objectId}
    addComment    POST    {base}/record/{objectType}/{objectId}/Note
    addTask       POST    {base}/v2/record/10
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import datetime, timezone
from typing import Any

from powerlink_node.credentials import TOKEN_HEADER, CredentialProvider
from powerlink_node.integrations.powerlink.schemas import (
    ActionRequest,
    FieldValue,
    OutgoingRequest,
    PowerlinkAction,
)

BASE_URL = "https://api.powerlink.co.il/api"

# Tasks always live under object type 10
TASK_OBJECT_TYPE = 10


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(value: datetime) -> str:
    """Format as ISO-8601 UTC with milliseconds, e.g. 2024-05-01T09:30:00.123Z."""
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def _filter_value(value: str | None) -> str:
    return "null" if value is None else value


def build_query_filter(query_params: Iterable[FieldValue]) -> str:
    """
    Join field/value pairs into a Powerlink query string.

    Values are inserted as given, without quoting or escaping. A null
    value is written as `null`.
    """
    return " AND ".join(
        f"({p.field_id} = {_filter_value(p.field_value)})" for p in query_params
    )


def build_record_fields(query_params: Iterable[FieldValue]) -> dict[str, str | None]:
    """Map field IDs to values; a repeated field ID keeps its last value."""
    fields: dict[str, str | None] = {}
    for param in query_params:
        fields[param.field_id] = param.field_value
    return fields


def _auth_headers(credential: CredentialProvider) -> dict[str, str]:
    return {TOKEN_HEADER: credential.get()["apiKey"]}


# =============================================================================
# Builders
# =============================================================================


def build_query(
    request: ActionRequest,
    credential: CredentialProvider,
    *,
    base_url: str = BASE_URL,
) -> OutgoingRequest:
    body: dict[str, Any] = {
        "objecttype": request.object_type,
        "page_size": request.page_size,
        "page_number": request.page_number,
        "fields": request.fields,
        "sort_by": request.sort_by,
        "sort_type": request.sort_type,
    }
    if request.query_params:
        body["query"] = build_query_filter(request.query_params)

    return OutgoingRequest(
        method="POST",
        url=f"{base_url}/query",
        headers=_auth_headers(credential),
        body=body,
    )


def build_add_record(
    request: ActionRequest,
    credential: CredentialProvider,
    *,
    base_url: str = BASE_URL,
) -> OutgoingRequest:
    return OutgoingRequest(
        method="POST",
        url=f"{base_url}/record/{request.object_type}",
        headers=_auth_headers(credential),
        body=build_record_fields(request.query_params),
    )


def build_update_record(
    request: ActionRequest,
    credential: CredentialProvider,
    *,
    base_url: str = BASE_URL,
) -> OutgoingRequest:
    return OutgoingRequest(
        method="PUT",
        url=f"{base_url}/record/{request.object_type}/{request.object_id}",
        headers=_auth_headers(credential),
        body=build_record_fields(request.query_params),
    )


def build_delete_record(
    request: ActionRequest,
    credential: CredentialProvider,
    *,
    base_url: str = BASE_URL,
) -> OutgoingRequest:
    return OutgoingRequest(
        method="DELETE",
        url=f"{base_url}/record/{request.object_type}/{request.object_id}",
        headers=_auth_headers(credential),
    )


def build_add_comment(
    request: ActionRequest,
    credential: CredentialProvider,
    *,
    base_url: str = BASE_URL,
) -> OutgoingRequest:
    return OutgoingRequest(
        method="POST",
        url=f"{base_url}/record/{request.object_type}/{request.object_id}/Note",
        headers=_auth_headers(credential),
        body={
            "notetext": f"<span>{request.message}</span>",
            "notetype": "note",
        },
    )


def build_add_task(
    request: ActionRequest,
    credential: CredentialProvider,
    *,
    base_url: str = BASE_URL,
    now: Callable[[], datetime] = _utc_now,
) -> OutgoingRequest:
    """
    Build an AddTask request.

    `scheduledend` is always the time of construction; the caller has no
    way to set it.
    """
    return OutgoingRequest(
        method="POST",
        url=f"{base_url}/v2/record/{TASK_OBJECT_TYPE}",
        headers=_auth_headers(credential),
        body={
            "ownerid": request.owner_id,
            "scheduledend": format_timestamp(now()),
            "subject": request.message,
            "objectid": request.object_id,
            "objecttypecode": request.object_type,
        },
    )


RequestBuilder = Callable[..., OutgoingRequest]

BUILDERS: dict[PowerlinkAction, RequestBuilder] = {
    PowerlinkAction.QUERY: build_query,
    PowerlinkAction.ADD_RECORD: build_add_record,
    PowerlinkAction.UPDATE_RECORD: build_update_record,
    PowerlinkAction.DELETE_RECORD: build_delete_record,
    PowerlinkAction.ADD_COMMENT: build_add_comment,
    PowerlinkAction.ADD_TASK: build_add_task,
}


def build_request(
    request: ActionRequest,
    credential: CredentialProvider,
    *,
    base_url: str = BASE_URL,
) -> OutgoingRequest:
    """Build the single HTTP request for `request.action`."""
    builder = BUILDERS[request.action]
    return builder(request, credential, base_url=base_url)
