"""
Attribute lookup for JSX opening elements.

Props are composed left to right, so when a name appears more than once
the last occurrence wins at runtime. A spread attribute after a named one
may override it with a value that cannot be seen statically.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .ast_utils import element_attributes, is_attr_with_name, node_type


@dataclass(frozen=True)
class AttrPosition:
    """Position of an attribute inside its element's attribute list."""
    index: int
    node: Dict[str, Any]


def find_attr(element: Any, name: str) -> Optional[AttrPosition]:
    """
    Find the last attribute named ``name``.

    Args:
        element: ``JSXOpeningElement`` or ``JSXElement``
        name: Attribute name

    Returns:
        AttrPosition of the last match, or None
    """
    attributes = element_attributes(element)
    for index in range(len(attributes) - 1, -1, -1):
        if is_attr_with_name(attributes[index], name):
            return AttrPosition(index=index, node=attributes[index])
    return None


def has_attr(element: Any, name: str) -> bool:
    return find_attr(element, name) is not None


def last_spread_index(element: Any) -> int:
    """Return the index of the last spread attribute, or -1 if there is none."""
    attributes = element_attributes(element)
    for index in range(len(attributes) - 1, -1, -1):
        if node_type(attributes[index]) == "JSXSpreadAttribute":
            return index
    return -1
