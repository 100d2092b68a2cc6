"""
Pydantic schemas for the Powerlink API.

These schemas describe the request-scoped values the node works with:
the user's action and parameters, and the HTTP request derived from them.
Response bodies are passed through untouched, so they have no schema.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# =============================================================================
# Enums
# =============================================================================


class PowerlinkAction(str, Enum):
    """Actions the node can perform. Values are the host-facing option values."""

    QUERY = "query"
    ADD_RECORD = "addRecord"
    ADD_TASK = "addTask"
    ADD_COMMENT = "addComment"
    DELETE_RECORD = "deleteRecord"
    UPDATE_RECORD = "updateRecord"

    @classmethod
    def from_string(cls, value: str) -> PowerlinkAction:
        """
        Convert a string to an action.

        Accepts the option value ("addRecord"), the display form
        ("AddRecord", "Add Record") or the member name ("ADD_RECORD").

        Raises:
            ValueError: If the string names no known action
        """
        key = value.replace("_", "").replace(" ", "").lower()
        for action in cls:
            if action.value.lower() == key:
                return action
        raise ValueError(f"Unknown Powerlink action: {value!r}")

    @property
    def display_name(self) -> str:
        """Human-readable option name, e.g. "Add Record"."""
        return {
            PowerlinkAction.QUERY: "Query",
            PowerlinkAction.ADD_RECORD: "Add Record",
            PowerlinkAction.ADD_TASK: "Add Task",
            PowerlinkAction.ADD_COMMENT: "Add Comment",
            PowerlinkAction.DELETE_RECORD: "Delete Record",
            PowerlinkAction.UPDATE_RECORD: "Update Record",
        }[self]


# =============================================================================
# Request Schemas
# =============================================================================


class FieldValue(BaseModel):
    """One user-supplied field/value pair from the "Query Parameters" collection."""

    model_config = ConfigDict(
        populate_by_name=True,
        coerce_numbers_to_str=True,
        frozen=True,
    )

    field_id: str = Field("", alias="fieldId", description="Powerlink field name")
    field_value: str | None = Field("", alias="fieldValue", description="Field value")


class ActionRequest(BaseModel):
    """
    A single invocation of the node.

    Which fields matter depends on `action`; the rest are ignored.
    Nothing here is validated against the remote schema, the API is
    the final arbiter.
    """

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    action: PowerlinkAction
    object_type: int = Field(1, description="Powerlink object type code")
    object_id: str = Field("", description="Record ID")

    # Query
    page_size: int | None = None
    page_number: int | None = None
    sort_by: str | None = None
    sort_type: str | None = None
    fields: str | None = None

    # Comments and tasks
    message: str = ""
    owner_id: str = ""

    query_params: tuple[FieldValue, ...] = ()
    hide_columns: bool = True


class OutgoingRequest(BaseModel):
    """An HTTP request ready to be sent to Powerlink."""

    model_config = ConfigDict(frozen=True)

    method: str
    url: str
    headers: dict[str, str] = Field(default_factory=dict)
    params: dict[str, str] = Field(default_factory=dict)
    body: dict[str, Any] | None = None

    @property
    def has_body(self) -> bool:
        return self.body is not None
