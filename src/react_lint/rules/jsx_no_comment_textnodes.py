"""
jsx-no-comment-textnodes: comments written as JSX text are rendered as text.
"""

import re

from .base import Rule

COMMENT_RE = re.compile(r"^\s*(//|/\*)", re.MULTILINE)


class JsxNoCommentTextnodesRule(Rule):
    """Report JSX text that looks like a comment."""

    rule_id = "jsx-no-comment-textnodes"
    description = "Disallow comments written as JSX text"
    schema = {}
    messages = {
        "putCommentInBraces": (
            "Comments inside children section of tag should be placed inside braces."
        ),
    }

    def create(self, context):
        def on_text(node):
            value = node.get("value")
            if isinstance(value, str) and COMMENT_RE.search(value):
                context.report(node, "putCommentInBraces")

        return {"JSXText": on_text}
