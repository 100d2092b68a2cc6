"""
Powerlink node.

Usage:
    from powerlink_node.nodes.powerlink import PowerlinkNode

    node = PowerlinkNode()
    [[item]] = await node.execute(context)
"""

from .fields import ACTION_FIELDS, ActionFields, actions_using, build_properties
from .node import PowerlinkNode, shape_response

__all__ = [
    "ACTION_FIELDS",
    "ActionFields",
    "PowerlinkNode",
    "actions_using",
    "build_properties",
    "shape_response",
]
