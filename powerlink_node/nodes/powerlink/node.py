"""
Powerlink Node.

Reads the user's action and parameters from the execution context,
builds the single Powerlink request for that action, sends it and hands
the response body back as one output item.

Failures are not handled here. The node logs which action failed and
re-raises the original exception so the host can stop the workflow or
route to an error branch.

Usage:
    node = PowerlinkNode()
    context = NodeExecutionContext(
        parameters={"action": "query", "objectType": 1},
        credentials={"powerlinkApi": {"apiKey": "xxxx"}},
    )
    [[item]] = await node.execute(context)
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from pydantic import ValidationError as SchemaValidationError

from powerlink_node.config import NodeSettings, get_settings
from powerlink_node.credentials import PowerlinkApiCredentials, PowerlinkCredential
from powerlink_node.integrations.base import IntegrationError
from powerlink_node.integrations.powerlink.builders import build_request
from powerlink_node.integrations.powerlink.client import PowerlinkClient, PowerlinkConfig
from powerlink_node.integrations.powerlink.schemas import (
    ActionRequest,
    FieldValue,
    PowerlinkAction,
)
from powerlink_node.nodes.base import (
    Node,
    NodeCredentialRequirement,
    NodeDescription,
    NodeExecutionData,
)
from powerlink_node.nodes.context import NodeExecutionContext, NodeParameterError
from powerlink_node.nodes.powerlink import fields

logger = logging.getLogger(__name__)

NODE_VERSION = "0.1.11"

# Host parameter name -> ActionRequest attribute
_REQUEST_ATTRIBUTES: dict[str, str] = {
    fields.OBJECT_TYPE: "object_type",
    fields.OBJECT_ID: "object_id",
    fields.PAGE_SIZE: "page_size",
    fields.PAGE_NUMBER: "page_number",
    fields.SORT_BY: "sort_by",
    fields.SORT_TYPE: "sort_type",
    fields.FIELDS: "fields",
    fields.MESSAGE: "message",
    fields.OWNER_ID: "owner_id",
    fields.QUERY_PARAMS: "query_params",
    fields.HIDE_COLUMNS: "hide_columns",
}


def shape_response(request: ActionRequest, body: Any) -> Any:
    """
    Shape a response body into the node's output value.

    Only Query is reshaped: with hide_columns set, the records under
    `data.Data` are returned without the column metadata.
    """
    if request.action != PowerlinkAction.QUERY or not request.hide_columns:
        return body

    try:
        return body["data"]["Data"]
    except (KeyError, TypeError) as e:
        raise IntegrationError(
            "Malformed query response: missing data.Data",
            "powerlink",
        ) from e


class PowerlinkNode(Node):
    """
    Workflow node for the Powerlink CRM API.

    Supported actions: query, addRecord, updateRecord, deleteRecord,
    addComment, addTask. Exactly one HTTP request is sent per execution.
    """

    def __init__(
        self,
        *,
        settings: NodeSettings | None = None,
        credentials_type: PowerlinkApiCredentials | None = None,
        client_factory: Callable[[PowerlinkConfig], PowerlinkClient] = PowerlinkClient,
    ):
        """
        Initialize the node.

        Args:
            settings: Node settings (read from the environment when omitted)
            credentials_type: Credential descriptor used to authenticate requests
            client_factory: Builds the HTTP client for each execution
        """
        self._settings = settings
        self._credentials_type = credentials_type or PowerlinkApiCredentials()
        self._client_factory = client_factory
        self._description = NodeDescription(
            display_name="Powerlink",
            name="powerlink",
            icon="file:powerlink.svg",
            group=("transform",),
            version=1,
            subtitle=NODE_VERSION,
            description="Get data from Powerlink API",
            defaults={"name": "Powerlink"},
            credentials=(NodeCredentialRequirement(name=self._credentials_type.name),),
            properties=fields.build_properties(),
        )

    @property
    def description(self) -> NodeDescription:
        return self._description

    @property
    def settings(self) -> NodeSettings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def credentials_type(self) -> PowerlinkApiCredentials:
        return self._credentials_type

    def read_action(self, context: NodeExecutionContext) -> PowerlinkAction:
        value = context.get_node_parameter(fields.ACTION, 0, fields.DEFAULT_ACTION.value)
        try:
            return PowerlinkAction.from_string(str(value))
        except ValueError as e:
            raise NodeParameterError(str(e), parameter=fields.ACTION) from e

    def read_request(
        self,
        context: NodeExecutionContext,
        action: PowerlinkAction,
    ) -> ActionRequest:
        """Collect the parameters `action` uses into an ActionRequest."""
        values: dict[str, Any] = {"action": action}

        for name in fields.ACTION_FIELDS[action].all:
            if name == fields.QUERY_PARAMS:
                value = self._read_query_params(context)
            else:
                value = context.get_node_parameter(name, 0, fields.DEFAULTS.get(name))
            if value is not None:
                values[_REQUEST_ATTRIBUTES[name]] = value

        try:
            return ActionRequest(**values)
        except SchemaValidationError as e:
            raise NodeParameterError(
                f"Invalid parameters for {action.value}: {e}", parameter=action.value
            ) from e

    def _read_query_params(self, context: NodeExecutionContext) -> tuple[FieldValue, ...]:
        raw = context.get_node_parameter(fields.QUERY_PARAMS_PATH, 0, [])
        if not raw:
            return ()
        if not isinstance(raw, list):
            raise NodeParameterError(
                "Query parameters must be a list of fieldId/fieldValue entries",
                parameter=fields.QUERY_PARAMS_PATH,
            )
        try:
            return tuple(FieldValue.model_validate(entry) for entry in raw)
        except SchemaValidationError as e:
            raise NodeParameterError(
                f"Invalid query parameter: {e}", parameter=fields.QUERY_PARAMS_PATH
            ) from e

    def read_credential(self, context: NodeExecutionContext) -> PowerlinkCredential:
        return PowerlinkCredential.from_dict(
            context.get_credentials(self._credentials_type.name)
        )

    async def execute(
        self,
        context: NodeExecutionContext,
    ) -> list[list[NodeExecutionData]]:
        """
        Run one Powerlink action.

        Returns:
            A single output holding a single item

        Raises:
            IntegrationError: If the remote call fails
            NodeParameterError: If a parameter cannot be used
            NodeCredentialsError: If the credentials are missing
        """
        action = self.read_action(context)
        settings = self.settings

        try:
            credential = self.read_credential(context)
            request = self.read_request(context, action)
            outgoing = build_request(request, credential, base_url=settings.base_url)
            outgoing = self._credentials_type.authenticate(outgoing, credential)

            async with self._client_factory(
                settings.client_config(credential.api_key)
            ) as client:
                body = await client.send(outgoing)

            result = shape_response(request, body)
        except Exception as e:
            logger.error(
                f"[powerlink_node] Error making {action.value} request to Powerlink API: {e}"
            )
            raise

        logger.info(f"[powerlink_node] {action.value} completed")
        return [[NodeExecutionData(json=result)]]
