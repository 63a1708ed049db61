"""
Registry of the available lint rules.
"""

from typing import Dict

from .base import Rule
from .jsx_key import JsxKeyRule
from .jsx_no_comment_textnodes import JsxNoCommentTextnodesRule
from .jsx_no_target_blank import JsxNoTargetBlankRule
from .no_danger_with_children import NoDangerWithChildrenRule

RULES: Dict[str, Rule] = {
    rule.rule_id: rule
    for rule in (
        JsxKeyRule(),
        JsxNoTargetBlankRule(),
        NoDangerWithChildrenRule(),
        JsxNoCommentTextnodesRule(),
    )
}

__all__ = [
    "RULES",
    "Rule",
    "JsxKeyRule",
    "JsxNoTargetBlankRule",
    "NoDangerWithChildrenRule",
    "JsxNoCommentTextnodesRule",
]
