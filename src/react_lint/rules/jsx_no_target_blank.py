"""
jsx-no-target-blank: external links opened with ``target="_blank"`` need
``rel="noreferrer"``.

Every check errs on the side of reporting: a value that cannot be proven
safe is treated as unsafe, and with ``warnOnSpreadAttributes`` a trailing
spread is assumed to carry the worst possible values.
"""

import re
from typing import Any, Dict, Optional

from ..ast_utils import element_attributes, jsx_name, node_type
from ..attributes import find_attr, last_spread_index
from ..static_values import get_static_value, potential_value_nodes
from .base import Rule

# RFC 1738 section 2.1: scheme characters are letters, digits, "+", "." and
# "-", compared case-insensitively. "//" starts a protocol-relative URL.
EXTERNAL_LINK_RE = re.compile(r"^([a-z0-9+\-.]+:|//)", re.IGNORECASE)


def is_external_link(attribute: Dict[str, Any]) -> bool:
    value = attribute.get("value")
    if node_type(value) != "Literal":
        return False
    text = value.get("value")
    return isinstance(text, str) and EXTERNAL_LINK_RE.match(text.strip()) is not None


def is_dynamic_link(attribute: Dict[str, Any]) -> bool:
    return node_type(attribute.get("value")) == "JSXExpressionContainer"


def component_table(defaults, entries, attribute_key: str) -> Dict[str, str]:
    """
    Build a tag name -> link attribute table from settings.

    Args:
        defaults: Built-in (name, attribute) pairs, applied first
        entries: Settings entries, either a tag name or a
            ``{"name": ..., attribute_key: ...}`` record
        attribute_key: ``"linkAttribute"`` or ``"formAttribute"``

    Returns:
        Mapping of component name to the attribute holding its URL
    """
    default_attribute = defaults[0][1]
    table = dict(defaults)
    for entry in entries or []:
        if isinstance(entry, str):
            table[entry] = default_attribute
        elif isinstance(entry, dict) and entry.get("name"):
            table[entry["name"]] = entry.get(attribute_key) or default_attribute
    return table


def append_noreferrer(raw: str) -> Optional[str]:
    """Append the keyword inside a quoted literal, keeping its quote character."""
    if len(raw) < 2 or raw[-1] not in ("'", '"'):
        return None
    return raw[:-1] + " noreferrer" + raw[-1]


class JsxNoTargetBlankRule(Rule):
    """Report unsafe ``target="_blank"`` links and forms."""

    rule_id = "jsx-no-target-blank"
    description = 'Disallow target="_blank" on external links without rel="noreferrer"'
    fixable = "code"
    schema = {
        "type": "object",
        "properties": {
            "allowReferrer": {"type": "boolean"},
            "enforceDynamicLinks": {"enum": ["always", "never"]},
            "warnOnSpreadAttributes": {"type": "boolean"},
            "links": {"type": "boolean"},
            "forms": {"type": "boolean"},
        },
        "additionalProperties": False,
    }
    defaults = {
        "allowReferrer": False,
        "enforceDynamicLinks": "always",
        "warnOnSpreadAttributes": False,
        "links": True,
        "forms": False,
    }
    messages = {
        "noTargetBlankWithoutNoreferrer": (
            'Using target="_blank" without rel="noreferrer" (which implies '
            'rel="noopener") is a security risk in older browsers: see '
            "https://mathiasbynens.github.io/rel-noopener/#recommendations"
        ),
        "noTargetBlankWithoutNoopener": (
            'Using target="_blank" without rel="noreferrer" or rel="noopener" '
            "(the former implies the latter and is preferred due to wider "
            "support) is a security risk: see "
            "https://mathiasbynens.github.io/rel-noopener/#recommendations"
        ),
    }

    def create(self, context):
        options = self.resolve_options(context.options)
        allow_referrer = options["allowReferrer"]
        enforce_dynamic_links = options["enforceDynamicLinks"]
        warn_on_spread_attributes = options["warnOnSpreadAttributes"]
        settings = context.settings or {}

        link_components = component_table(
            [("a", "href")], settings.get("linkComponents"), "linkAttribute"
        )
        form_components = component_table(
            [("form", "action")], settings.get("formComponents"), "formAttribute"
        )

        def may_have_unsafe_link(node, link_attribute: str, spread_idx: int) -> bool:
            link = find_attr(node, link_attribute)
            if link is None:
                return spread_idx >= 0
            if spread_idx > link.index:
                return True
            return is_external_link(link.node) or (
                enforce_dynamic_links == "always" and is_dynamic_link(link.node)
            )

        def may_have_target_blank(node, spread_idx: int) -> bool:
            target = find_attr(node, "target")
            if target is None:
                return spread_idx >= 0
            if spread_idx > target.index:
                return True
            for value_node in potential_value_nodes(target.node.get("value")):
                result = get_static_value(value_node)
                if result.resolved and result.value == "_blank":
                    return True
            return False

        def may_have_unsafe_rel(node, spread_idx: int) -> bool:
            rel = find_attr(node, "rel")
            if rel is None or spread_idx > rel.index or rel.node.get("value") is None:
                return True

            for value_node in potential_value_nodes(rel.node.get("value")):
                result = get_static_value(value_node)
                if not result.resolved or not isinstance(result.value, str):
                    return True
                keywords = result.value.lower().split()
                if "noreferrer" in keywords:
                    continue
                if not allow_referrer or "noopener" not in keywords:
                    return True
            return False

        def build_fix(node, spread_idx: int):
            def fix(fixer):
                attributes = element_attributes(node)
                if not attributes:
                    return None

                rel = find_attr(node, "rel")
                if rel is None:
                    if spread_idx >= 0:
                        return None
                    return fixer.insert_text_after(attributes[-1], ' rel="noreferrer"')
                if spread_idx > rel.index:
                    return None

                value = rel.node.get("value")
                if value is None:
                    return fixer.replace_text(rel.node, 'rel="noreferrer"')

                if node_type(value) == "Literal":
                    if not isinstance(value.get("value"), str):
                        return None
                    text = append_noreferrer(value.get("raw") or "")
                    return fixer.replace_text(value, text) if text else None

                if node_type(value) == "JSXExpressionContainer":
                    expr = value.get("expression")
                    if node_type(expr) != "Literal":
                        return None
                    if not isinstance(expr.get("value"), str):
                        return fixer.replace_text(value, '"noreferrer"')
                    text = append_noreferrer(expr.get("raw") or "")
                    return fixer.replace_text(expr, text) if text else None

                return None

            return fix

        def check(node, components: Dict[str, str]) -> None:
            link_attribute = components.get(jsx_name(node.get("name")))
            if link_attribute is None:
                return

            spread_idx = last_spread_index(node) if warn_on_spread_attributes else -1

            if not may_have_unsafe_link(node, link_attribute, spread_idx):
                return
            if not may_have_target_blank(node, spread_idx):
                return
            if may_have_unsafe_rel(node, spread_idx):
                message_id = (
                    "noTargetBlankWithoutNoopener"
                    if allow_referrer
                    else "noTargetBlankWithoutNoreferrer"
                )
                context.report(node, message_id, fix=build_fix(node, spread_idx))

        def on_opening_element(node):
            if options["links"]:
                check(node, link_components)
            if options["forms"]:
                check(node, form_components)

        return {"JSXOpeningElement": on_opening_element}
