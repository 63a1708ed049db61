"""
Conservative static evaluation of JSX attribute values.

Two complementary questions are answered here:

- ``get_static_value`` asks "what is the one provable value of this node?"
  and answers "unknown" whenever it cannot be sure.
- ``potential_value_nodes`` asks "which expressions could end up being the
  value at runtime?" by descending through short-circuit, conditional and
  assignment expressions.

Callers compose them: enumerate the leaves first, then resolve each leaf.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterator, Optional

from .ast_utils import is_node, node_type


@dataclass(frozen=True)
class StaticValue:
    """
    Outcome of constant resolution.

    A resolved value is the only possible runtime value of its node; an
    unresolved one carries no value at all.
    """
    resolved: bool
    value: Any = None


UNRESOLVED = StaticValue(resolved=False)


def get_static_value(node: Optional[Dict[str, Any]]) -> StaticValue:
    """
    Resolve a node to a constant if that is provable.

    Args:
        node: AST node (or None)

    Returns:
        StaticValue, resolved only for literals, expression containers
        around resolvable expressions and templates whose interpolations
        all resolve
    """
    if not is_node(node):
        return UNRESOLVED

    ntype = node["type"]

    if ntype == "JSXExpressionContainer":
        return get_static_value(node.get("expression"))

    if ntype == "Literal":
        if "regex" in node and node.get("regex"):
            return UNRESOLVED
        return StaticValue(resolved=True, value=node.get("value"))

    if ntype == "TemplateLiteral":
        values = []
        for expr in node.get("expressions") or []:
            result = get_static_value(expr)
            if not result.resolved:
                return UNRESOLVED
            values.append(result.value)

        parts = []
        for i, quasi in enumerate(node.get("quasis") or []):
            cooked = (quasi.get("value") or {}).get("cooked")
            if cooked is None:
                # Invalid escape sequence in a tagged-style template
                return UNRESOLVED
            parts.append(cooked)
            if not quasi.get("tail") and i < len(values):
                parts.append(js_string(values[i]))
        return StaticValue(resolved=True, value="".join(parts))

    return UNRESOLVED


def potential_value_nodes(node: Optional[Dict[str, Any]]) -> Iterator[Dict[str, Any]]:
    """
    Yield every expression that could be the runtime value of ``node``.

    Descends depth-first, left to right. The test of a conditional is never
    yielded since it is not a possible value.

    Args:
        node: AST node (or None)

    Yields:
        Leaf expression nodes
    """
    if not is_node(node):
        return

    ntype = node_type(node)
    if ntype == "JSXExpressionContainer":
        yield from potential_value_nodes(node.get("expression"))
    elif ntype == "LogicalExpression":
        yield from potential_value_nodes(node.get("left"))
        yield from potential_value_nodes(node.get("right"))
    elif ntype == "ConditionalExpression":
        yield from potential_value_nodes(node.get("consequent"))
        yield from potential_value_nodes(node.get("alternate"))
    elif ntype == "AssignmentExpression":
        yield from potential_value_nodes(node.get("right"))
    else:
        yield node


def js_string(value: Any) -> str:
    """
    Convert a resolved literal value to text the way JavaScript's ``String()`` does.

    >>> js_string(True), js_string(None), js_string(2.0), js_string(0.5)
    ('true', 'null', '2', '0.5')
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if value != value:
            return "NaN"
        if value in (float("inf"), float("-inf")):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(value)
    return str(value)


def value_identity(value: Any) -> tuple:
    """
    Build a hashable key that compares the way JavaScript's ``Map`` keys do.

    Python treats ``True == 1 == 1.0``; JavaScript does not, so each value is
    tagged with its JavaScript type first.
    """
    if value is None:
        return ("null", None)
    if isinstance(value, bool):
        return ("boolean", value)
    if isinstance(value, (int, float)):
        return ("number", float(value))
    if isinstance(value, str):
        return ("string", value)
    return ("other", repr(value))
