"""
Powerlink Node - a workflow node for the Powerlink CRM API.

The node turns one user-selected action into one REST call:

- **Query**: filtered, paged record queries
- **Add / Update / Delete Record**: record CRUD from field/value pairs
- **Add Comment**: notes on a record
- **Add Task**: tasks linked to a record

Quick Start:
    >>> from powerlink_node import NodeExecutionContext, load_plugin
    >>>
    >>> node = load_plugin().get_node_required("powerlink")
    >>> context = NodeExecutionContext(
    ...     parameters={"action": "query", "objectType": 1},
    ...     credentials={"powerlinkApi": {"apiKey": "xxxx"}},
    ... )
    >>> [[item]] = await node.execute(context)
"""

__version__ = "0.1.11"

from powerlink_node.credentials import PowerlinkApiCredentials, PowerlinkCredential
from powerlink_node.integrations import IntegrationError
from powerlink_node.nodes import NodeExecutionContext, NodeExecutionData
from powerlink_node.nodes.powerlink import PowerlinkNode
from powerlink_node.plugin import load_plugin

__all__ = [
    "__version__",
    "IntegrationError",
    "NodeExecutionContext",
    "NodeExecutionData",
    "PowerlinkApiCredentials",
    "PowerlinkCredential",
    "PowerlinkNode",
    "load_plugin",
]
