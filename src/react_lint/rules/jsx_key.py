"""
jsx-key: elements produced in lists need a unique ``key`` prop.
"""

from typing import Any, Dict, List

from ..ast_utils import (
    element_attributes,
    get_function_name,
    is_attr_with_name,
    member_property_name,
    node_type,
)
from ..attributes import has_attr
from ..callbacks import CallbackResultTracker
from ..pragmas import resolve_pragmas
from ..static_values import get_static_value, potential_value_nodes, value_identity
from .base import Rule


def is_children_to_array_call(node: Dict[str, Any]) -> bool:
    """
    Check for ``Children.toArray(...)`` or ``<X>.Children.toArray(...)``.

    ``toArray`` assigns keys itself, so keys inside its arguments are
    irrelevant.
    """
    if node_type(node) != "CallExpression":
        return False
    callee = node.get("callee")
    if member_property_name(callee) != "toArray":
        return False
    owner = get_function_name(callee.get("object"))
    if owner is None:
        return False
    parts = owner.split(".")
    return parts[-1] == "Children" and len(parts) <= 2


class JsxKeyRule(Rule):
    """Report missing ``key`` props in arrays and iterator callbacks, and duplicate keys."""

    rule_id = "jsx-key"
    description = "Disallow missing or duplicate key props on elements in lists"
    schema = {
        "type": "object",
        "properties": {
            "checkFragmentShorthand": {"type": "boolean"},
            "checkKeyMustBeforeSpread": {"type": "boolean"},
            "warnOnDuplicates": {"type": "boolean"},
        },
        "additionalProperties": False,
    }
    defaults = {
        "checkFragmentShorthand": False,
        "checkKeyMustBeforeSpread": False,
        "warnOnDuplicates": True,
    }
    messages = {
        "missingElementKey": 'Missing "key" prop for element in {{container}}.',
        "missingFragmentKey": (
            'Missing "key" prop for element in {{container}}. Shorthand fragment '
            "tags do not support key props: use {{jsxFrag}} instead."
        ),
        "keyBeforeSpread": '"key" prop must appear before a spread ({...props}).',
        "nonUniqueKeys": '"key" props must be unique.',
    }

    def create(self, context):
        options = self.resolve_options(context.options)
        check_fragment_shorthand = options["checkFragmentShorthand"]
        check_key_must_before_spread = options["checkKeyMustBeforeSpread"]
        warn_on_duplicates = options["warnOnDuplicates"]

        tracker = CallbackResultTracker()
        state = {"children_to_array_depth": 0}

        def report_missing_key(node: Any, container: str) -> None:
            ntype = node_type(node)
            if ntype == "JSXElement":
                if not has_attr(node, "key"):
                    context.report(node, "missingElementKey", {"container": container})
            elif ntype == "JSXFragment" and check_fragment_shorthand:
                context.report(
                    node,
                    "missingFragmentKey",
                    {"container": container, "jsxFrag": resolve_pragmas(context)["jsxFrag"]},
                )

        def report_duplicate_keys(nodes: List[Any]) -> None:
            if not warn_on_duplicates:
                return

            # value identity -> [first key attribute, already reported?]
            seen: Dict[tuple, list] = {}
            for node in nodes:
                if node_type(node) != "JSXElement":
                    continue
                for attribute in element_attributes(node):
                    if not is_attr_with_name(attribute, "key"):
                        continue
                    result = get_static_value(attribute.get("value"))
                    if not result.resolved:
                        continue

                    identity = value_identity(result.value)
                    entry = seen.get(identity)
                    if entry is None:
                        seen[identity] = [attribute, False]
                        continue
                    if not entry[1]:
                        context.report(entry[0], "nonUniqueKeys")
                        entry[1] = True
                    context.report(attribute, "nonUniqueKeys")

        def check_function_results(function_node: Any) -> None:
            results = tracker.results_for(function_node)
            if not results:
                return
            for result in results:
                for node in potential_value_nodes(result):
                    report_missing_key(node, "iterator")

        def suppressed() -> bool:
            return state["children_to_array_depth"] > 0

        def on_call(node):
            if is_children_to_array_call(node):
                state["children_to_array_depth"] += 1

        def on_call_exit(node):
            if not suppressed():
                method = member_property_name(node.get("callee"))
                args = node.get("arguments") or []
                if method == "map" and len(args) >= 1:
                    check_function_results(args[0])
                elif method == "from" and len(args) >= 2:
                    check_function_results(args[1])

            if is_children_to_array_call(node):
                state["children_to_array_depth"] -= 1

        def on_element(node):
            if suppressed():
                return
            if check_key_must_before_spread:
                for attribute in element_attributes(node):
                    if is_attr_with_name(attribute, "key"):
                        break
                    if node_type(attribute) == "JSXSpreadAttribute":
                        context.report(node, "keyBeforeSpread")
                        break
            report_duplicate_keys(node.get("children") or [])

        def on_fragment(node):
            if suppressed():
                return
            report_duplicate_keys(node.get("children") or [])

        def on_array(node):
            if suppressed():
                return
            elements = node.get("elements") or []
            for element in elements:
                report_missing_key(element, "array")
            report_duplicate_keys(elements)

        return {
            "onCodePathStart": tracker.on_code_path_start,
            "onCodePathEnd": tracker.on_code_path_end,
            "ReturnStatement": tracker.on_return,
            "CallExpression": on_call,
            "CallExpression:exit": on_call_exit,
            "JSXElement": on_element,
            "JSXFragment": on_fragment,
            "ArrayExpression": on_array,
        }
