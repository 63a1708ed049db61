"""
Base class for lint rules.
"""

from typing import Any, Callable, ClassVar, Dict, Optional


class Rule:
    """
    A lint rule.

    Subclasses declare their metadata as class attributes and implement
    ``create``, which receives a RuleContext and returns a mapping of
    traversal keys (``"JSXElement"``, ``"CallExpression:exit"``,
    ``"onCodePathEnd"``...) to handlers. A new handler set is created for
    every source unit, so state kept in ``create``'s closure is scoped to
    one traversal.
    """

    rule_id: ClassVar[str] = ""
    description: ClassVar[str] = ""
    type: ClassVar[str] = "problem"
    fixable: ClassVar[Optional[str]] = None
    # Closed object schema: {"properties": {name: {"type": "boolean"} | {"enum": [...]}}}
    schema: ClassVar[Dict[str, Any]] = {}
    defaults: ClassVar[Dict[str, Any]] = {}
    messages: ClassVar[Dict[str, str]] = {}

    def resolve_options(self, options: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        """Merge user options over the rule's defaults."""
        resolved = dict(self.defaults)
        if options:
            resolved.update(options)
        return resolved

    def create(self, context) -> Dict[str, Callable[..., None]]:
        raise NotImplementedError
