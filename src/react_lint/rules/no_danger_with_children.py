"""
no-danger-with-children: an element must not get both children and
``dangerouslySetInnerHTML``.

Only props that are visible in the markup or factory call are considered:
named attributes, object-literal properties and object literals spread in
place. Props spread from a variable are not followed.
"""

import re
from typing import Any, Dict, Iterator, List

from ..ast_utils import element_attributes, get_function_name, node_type, property_key_name
from ..pragmas import resolve_pragmas
from .base import Rule

DANGER_PROP = "dangerouslySetInnerHTML"
CHILDREN_PROP = "children"

# JSX drops text that is only whitespace and contains a line break
DROPPED_TEXT_RE = re.compile(r"^\s*\n\s*$")


def object_prop_names(node: Any) -> Iterator[str]:
    """
    Yield the statically known keys of an object literal.

    Object literals spread inside it (``{...{a: 1}}``) are flattened.
    """
    if node_type(node) != "ObjectExpression":
        return
    for prop in node.get("properties") or []:
        ptype = node_type(prop)
        if ptype == "Property":
            name = property_key_name(prop)
            if name is not None:
                yield name
        elif ptype in ("SpreadElement", "SpreadProperty", "ExperimentalSpreadProperty"):
            yield from object_prop_names(prop.get("argument"))


def jsx_prop_names(element: Dict[str, Any]) -> Iterator[str]:
    """Yield the prop names visible on a JSX element."""
    for attribute in element_attributes(element):
        atype = node_type(attribute)
        if atype == "JSXAttribute":
            name = attribute.get("name")
            if node_type(name) == "JSXIdentifier":
                yield name.get("name")
        elif atype == "JSXSpreadAttribute":
            yield from object_prop_names(attribute.get("argument"))


def is_meaningful_child(child: Any) -> bool:
    """
    Check whether a JSX child produces content.

    Whitespace-only text containing a line break is dropped by JSX; single
    line whitespace is kept. ``{/* comments */}`` produce nothing.
    """
    ctype = node_type(child)
    if ctype in ("JSXText", "Literal"):
        text = child.get("value")
        if not isinstance(text, str):
            return True
        return text != "" and DROPPED_TEXT_RE.match(text) is None
    if ctype == "JSXExpressionContainer":
        return node_type(child.get("expression")) != "JSXEmptyExpression"
    return ctype is not None


class NoDangerWithChildrenRule(Rule):
    """Report elements and factory calls with both children and dangerouslySetInnerHTML."""

    rule_id = "no-danger-with-children"
    description = "Disallow using children together with dangerouslySetInnerHTML"
    schema = {}
    messages = {
        "dangerWithChildren": (
            'Only set either "children" or "props.dangerouslySetInnerHTML", but not both.'
        ),
    }

    def create(self, context):
        def on_element(node):
            props: List[str] = list(jsx_prop_names(node))
            if DANGER_PROP not in props:
                return
            has_children = CHILDREN_PROP in props or any(
                is_meaningful_child(child) for child in node.get("children") or []
            )
            if has_children:
                context.report(node, "dangerWithChildren")

        def on_call(node):
            callee_name = get_function_name(node.get("callee"))
            if callee_name is None or callee_name != resolve_pragmas(context)["jsx"]:
                return
            args = node.get("arguments") or []
            if len(args) < 2:
                return
            props = list(object_prop_names(args[1]))
            if DANGER_PROP not in props:
                return
            if len(args) > 2 or CHILDREN_PROP in props:
                context.report(node, "dangerWithChildren")

        return {
            "JSXElement": on_element,
            "CallExpression": on_call,
        }
