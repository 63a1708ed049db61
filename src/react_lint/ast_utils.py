"""
Helpers for reading the dict-shaped ESTree/JSX AST produced by the parser.

Every helper here is total: nodes of an unexpected shape read as
"no match" rather than raising.
"""

from typing import Dict, Any, Iterator, List, Optional, Tuple

# Keys that never hold child nodes
NON_CHILD_KEYS = frozenset({
    "type",
    "loc",
    "range",
    "comments",
    "tokens",
    "errors",
    "leadingComments",
    "trailingComments",
    "innerComments",
})

# Child keys in source order for the node types the rules care about.
# Types missing from this table fall back to the dict's own key order.
VISITOR_KEYS: Dict[str, Tuple[str, ...]] = {
    "Program": ("body",),
    "ExpressionStatement": ("expression",),
    "BlockStatement": ("body",),
    "ReturnStatement": ("argument",),
    "IfStatement": ("test", "consequent", "alternate"),
    "VariableDeclaration": ("declarations",),
    "VariableDeclarator": ("id", "init"),
    "FunctionDeclaration": ("id", "params", "body"),
    "FunctionExpression": ("id", "params", "body"),
    "ArrowFunctionExpression": ("params", "body"),
    "CallExpression": ("callee", "arguments"),
    "NewExpression": ("callee", "arguments"),
    "MemberExpression": ("object", "property"),
    "ArrayExpression": ("elements",),
    "ObjectExpression": ("properties",),
    "Property": ("key", "value"),
    "SpreadElement": ("argument",),
    "LogicalExpression": ("left", "right"),
    "BinaryExpression": ("left", "right"),
    "ConditionalExpression": ("test", "consequent", "alternate"),
    "AssignmentExpression": ("left", "right"),
    "TemplateLiteral": ("quasis", "expressions"),
    "JSXElement": ("openingElement", "children", "closingElement"),
    "JSXFragment": ("openingFragment", "children", "closingFragment"),
    "JSXOpeningElement": ("name", "attributes"),
    "JSXClosingElement": ("name",),
    "JSXAttribute": ("name", "value"),
    "JSXSpreadAttribute": ("argument",),
    "JSXExpressionContainer": ("expression",),
    "JSXMemberExpression": ("object", "property"),
    "JSXNamespacedName": ("namespace", "name"),
}

FUNCTION_TYPES = frozenset({
    "FunctionDeclaration",
    "FunctionExpression",
    "ArrowFunctionExpression",
})


def is_node(value: Any) -> bool:
    """Return True if value looks like an AST node."""
    return isinstance(value, dict) and isinstance(value.get("type"), str)


def node_type(node: Any) -> Optional[str]:
    """Return the node's type, or None for anything that is not a node."""
    if not is_node(node):
        return None
    return node["type"]


def iter_child_nodes(node: Dict[str, Any]) -> Iterator[Dict[str, Any]]:
    """
    Yield the direct child nodes of a node in source order.

    Args:
        node: AST node

    Yields:
        Child nodes (lists are flattened, holes skipped)
    """
    keys = VISITOR_KEYS.get(node.get("type"))
    if keys is None:
        keys = tuple(k for k in node.keys() if k not in NON_CHILD_KEYS)

    for key in keys:
        value = node.get(key)
        if is_node(value):
            yield value
        elif isinstance(value, list):
            for item in value:
                if is_node(item):
                    yield item


def node_position(node: Dict[str, Any]) -> Tuple[int, int]:
    """Return the 1-based line and 0-based column of a node's start."""
    start = (node.get("loc") or {}).get("start") or {}
    return start.get("line", 0) or 0, start.get("column", 0) or 0


def node_end_position(node: Dict[str, Any]) -> Tuple[int, int]:
    end = (node.get("loc") or {}).get("end") or {}
    return end.get("line", 0) or 0, end.get("column", 0) or 0


def node_range(node: Dict[str, Any]) -> Optional[Tuple[int, int]]:
    """Return the node's [start, end) character range, if the parser recorded one."""
    rng = node.get("range")
    if isinstance(rng, (list, tuple)) and len(rng) == 2:
        return int(rng[0]), int(rng[1])
    return None


def is_attr_with_name(node: Any, name: str) -> bool:
    """
    Check whether a node is a plain JSX attribute with the given name.

    Spread attributes and namespaced names (``xlink:href``) never match.
    """
    if node_type(node) != "JSXAttribute":
        return False
    attr_name = node.get("name")
    return node_type(attr_name) == "JSXIdentifier" and attr_name.get("name") == name


def element_attributes(node: Any) -> List[Dict[str, Any]]:
    """
    Return the attribute list of a JSX element or opening element.

    Args:
        node: ``JSXElement`` or ``JSXOpeningElement``

    Returns:
        Ordered attribute nodes (empty for anything else)
    """
    ntype = node_type(node)
    if ntype == "JSXElement":
        node = node.get("openingElement")
        ntype = node_type(node)
    if ntype != "JSXOpeningElement":
        return []
    return [a for a in node.get("attributes") or [] if is_node(a)]


def jsx_name(name_node: Any) -> Optional[str]:
    """
    Render a JSX tag name as text.

    ``<a>`` gives ``"a"``, ``<custom-form>`` gives ``"custom-form"``,
    ``<Foo.Link>`` gives ``"Foo.Link"`` and ``<svg:a>`` gives ``"svg:a"``.
    """
    ntype = node_type(name_node)
    if ntype == "JSXIdentifier":
        return name_node.get("name")
    if ntype == "JSXMemberExpression":
        obj = jsx_name(name_node.get("object"))
        prop = jsx_name(name_node.get("property"))
        if obj and prop:
            return f"{obj}.{prop}"
        return None
    if ntype == "JSXNamespacedName":
        ns = jsx_name(name_node.get("namespace"))
        local = jsx_name(name_node.get("name"))
        if ns and local:
            return f"{ns}:{local}"
    return None


def get_function_name(node: Any) -> Optional[str]:
    """
    Extract a dotted name from a call's callee.

    Handles identifiers and non-computed member chains of any depth
    (``h``, ``React.createElement``, ``preact.h.bind``).

    Args:
        node: Callee AST node

    Returns:
        Dotted name or None
    """
    ntype = node_type(node)
    if ntype == "Identifier":
        return node.get("name")
    if ntype == "MemberExpression" and not node.get("computed"):
        obj = get_function_name(node.get("object"))
        prop = node.get("property")
        if obj and node_type(prop) == "Identifier":
            return f"{obj}.{prop.get('name')}"
    return None


def member_property_name(node: Any) -> Optional[str]:
    """Return the identifier name of a non-computed member access, e.g. ``map`` in ``xs.map``."""
    if node_type(node) != "MemberExpression" or node.get("computed"):
        return None
    prop = node.get("property")
    if node_type(prop) == "Identifier":
        return prop.get("name")
    return None


def property_key_name(prop: Any) -> Optional[str]:
    """Return the static key of an object-literal property (``a`` or ``"a"``)."""
    if node_type(prop) != "Property" or prop.get("computed"):
        return None
    key = prop.get("key")
    ktype = node_type(key)
    if ktype == "Identifier":
        return key.get("name")
    if ktype == "Literal" and isinstance(key.get("value"), str):
        return key.get("value")
    return None
