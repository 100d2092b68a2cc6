"""
Action field table for the Powerlink node.

ACTION_FIELDS says which parameters each action reads. The node's UI
schema is generated from it: a property is shown only for the actions
that use it, so visibility rules are never written by hand.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from powerlink_node.integrations.powerlink.schemas import PowerlinkAction
from powerlink_node.nodes.base import (
    NodeProperty,
    NodePropertyCollection,
    NodePropertyOption,
)

# Host-facing parameter names
ACTION = "action"
OBJECT_TYPE = "objectType"
OBJECT_ID = "objectId"
PAGE_SIZE = "pageSize"
PAGE_NUMBER = "pageNumber"
SORT_BY = "sortBy"
SORT_TYPE = "sortType"
FIELDS = "fields"
MESSAGE = "message"
OWNER_ID = "ownerid"
QUERY_PARAMS = "fieldsUi"
QUERY_PARAMS_PATH = "fieldsUi.fieldValues"
HIDE_COLUMNS = "toggleHideColumns"


@dataclass(frozen=True, slots=True)
class ActionFields:
    """Parameters an action reads, split by whether the API needs them."""

    required: tuple[str, ...] = ()
    optional: tuple[str, ...] = ()

    @property
    def all(self) -> tuple[str, ...]:
        return self.required + self.optional

    def uses(self, name: str) -> bool:
        return name in self.required or name in self.optional


ACTION_FIELDS: dict[PowerlinkAction, ActionFields] = {
    PowerlinkAction.QUERY: ActionFields(
        required=(OBJECT_TYPE, PAGE_SIZE, PAGE_NUMBER, FIELDS),
        optional=(SORT_BY, SORT_TYPE, QUERY_PARAMS, HIDE_COLUMNS),
    ),
    PowerlinkAction.ADD_RECORD: ActionFields(
        required=(OBJECT_TYPE,),
        optional=(QUERY_PARAMS,),
    ),
    PowerlinkAction.UPDATE_RECORD: ActionFields(
        required=(OBJECT_TYPE, OBJECT_ID),
        optional=(QUERY_PARAMS,),
    ),
    PowerlinkAction.DELETE_RECORD: ActionFields(
        required=(OBJECT_TYPE, OBJECT_ID),
    ),
    PowerlinkAction.ADD_COMMENT: ActionFields(
        required=(OBJECT_TYPE, OBJECT_ID, MESSAGE),
    ),
    PowerlinkAction.ADD_TASK: ActionFields(
        required=(OWNER_ID, OBJECT_TYPE, OBJECT_ID, MESSAGE),
    ),
}

DEFAULT_ACTION = PowerlinkAction.QUERY

DEFAULTS: dict[str, Any] = {
    OBJECT_TYPE: 1,
    OBJECT_ID: "",
    PAGE_SIZE: 500,
    PAGE_NUMBER: 1,
    SORT_BY: "",
    SORT_TYPE: "ASC",
    FIELDS: "*",
    MESSAGE: "",
    OWNER_ID: "",
    HIDE_COLUMNS: True,
}


def actions_using(name: str) -> list[PowerlinkAction]:
    """Actions that read parameter `name`, in table order."""
    return [action for action, fields in ACTION_FIELDS.items() if fields.uses(name)]


def _display_options(name: str) -> dict[str, Any] | None:
    actions = actions_using(name)
    if len(actions) == len(ACTION_FIELDS):
        return None
    return {"show": {ACTION: [action.value for action in actions]}}


def _action_property() -> NodeProperty:
    options = sorted(
        (NodePropertyOption(name=a.display_name, value=a.value) for a in PowerlinkAction),
        key=lambda option: option.name,
    )
    return NodeProperty(
        display_name="Action",
        name=ACTION,
        type="options",
        options=tuple(options),
        default=DEFAULT_ACTION.value,
    )


def _property(
    display_name: str,
    name: str,
    type: str,
    description: str,
    *,
    required: bool = False,
    **kwargs: Any,
) -> NodeProperty:
    return NodeProperty(
        display_name=display_name,
        name=name,
        type=type,
        default=kwargs.pop("default", DEFAULTS.get(name)),
        required=required,
        description=description,
        display_options=_display_options(name),
        **kwargs,
    )


def build_properties() -> tuple[NodeProperty, ...]:
    """Build the node's UI schema from the action field table."""
    return (
        _action_property(),
        _property(
            "Object Type",
            OBJECT_TYPE,
            "number",
            "Enter the integer value for Object Type",
            required=True,
        ),
        _property(
            "Object ID",
            OBJECT_ID,
            "string",
            "Enter the ID of the record",
            required=True,
        ),
        _property("Page Size", PAGE_SIZE, "number", "Enter the integer value for Page Size"),
        _property(
            "Page Number", PAGE_NUMBER, "number", "Enter the integer value for Page Number"
        ),
        _property("Sort By", SORT_BY, "string", "Enter the field to sort by"),
        _property("Sort Type", SORT_TYPE, "string", "Enter the sort type (e.g., ASC or DESC)"),
        _property(
            "Fields",
            FIELDS,
            "string",
            "Enter the fields to retrieve (comma-separated). Use * for all fields.",
        ),
        _property(
            "Message",
            MESSAGE,
            "string",
            "Enter a comment to be added to the record",
            required=True,
        ),
        _property(
            "Owner ID",
            OWNER_ID,
            "string",
            "The ID of the powerlink user agent, to act as the task reporter",
            required=True,
        ),
        _property(
            "Query Parameters",
            QUERY_PARAMS,
            "fixedCollection",
            (
                "Field must be defined in the collection, otherwise it will be ignored. "
                "If field defined in the collection is not set here, it will be set to null."
            ),
            default={},
            placeholder="Add Field",
            type_options={
                "multipleValueButtonText": "Add Field to Send",
                "multipleValues": True,
            },
            options=(
                NodePropertyCollection(
                    display_name="Field",
                    name="fieldValues",
                    values=(
                        NodeProperty(
                            display_name="Field ID", name="fieldId", type="string", default=""
                        ),
                        NodeProperty(
                            display_name="Field Value",
                            name="fieldValue",
                            type="string",
                            default="",
                        ),
                    ),
                ),
            ),
        ),
        _property(
            "Options",
            HIDE_COLUMNS,
            "boolean",
            "Whether to return only the data without columns",
        ),
    )
