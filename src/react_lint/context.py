"""
Objects handed to rules while they run: source access, reporting and fixes.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from .ast_utils import node_end_position, node_position, node_range

MESSAGE_DATA_RE = re.compile(r"\{\{\s*([^{}]+?)\s*\}\}")


@dataclass
class Fix:
    """A single text edit: replace ``range`` with ``text``."""
    range: Tuple[int, int]
    text: str


@dataclass
class Problem:
    """
    A diagnostic produced by a rule.
    """
    rule_id: str
    message_id: str
    message: str
    line: int
    column: int
    end_line: int = 0
    end_column: int = 0
    fix: Optional[Fix] = None
    node: Optional[Dict[str, Any]] = field(default=None, repr=False, compare=False)

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "rule": self.rule_id,
            "message_id": self.message_id,
            "message": self.message,
            "line": self.line,
            "column": self.column,
            "end_line": self.end_line,
            "end_column": self.end_column,
        }
        if self.fix is not None:
            result["fix"] = {"range": list(self.fix.range), "text": self.fix.text}
        return result


class SourceCode:
    """
    One parsed source unit.

    Holds the text, the AST and its comments. Per-unit caches (such as the
    resolved pragmas) live on this object so they die with it.
    """

    def __init__(self, text: str, ast: Dict[str, Any], filename: str = "<input>"):
        self.text = text
        self.ast = ast
        self.filename = filename
        self._cache: Dict[str, Any] = {}

    def get_all_comments(self) -> List[Dict[str, Any]]:
        return list(self.ast.get("comments") or [])

    def cached(self, key: str, compute: Callable[[], Any]) -> Any:
        if key not in self._cache:
            self._cache[key] = compute()
        return self._cache[key]


class Fixer:
    """
    Builds text edits relative to node ranges.

    Nodes without a recorded range cannot be fixed; the builder then
    returns None, which callers treat as "no fix".
    """

    def insert_text_after(self, node: Dict[str, Any], text: str) -> Optional[Fix]:
        rng = node_range(node)
        if rng is None:
            return None
        return Fix(range=(rng[1], rng[1]), text=text)

    def replace_text(self, node: Dict[str, Any], text: str) -> Optional[Fix]:
        rng = node_range(node)
        if rng is None:
            return None
        return Fix(range=rng, text=text)


def interpolate(template: str, data: Optional[Dict[str, Any]]) -> str:
    """
    Fill ``{{name}}`` slots of a message template.

    Unknown slots are left untouched.
    """
    if not data:
        return template

    def substitute(match: "re.Match") -> str:
        key = match.group(1)
        if key in data:
            return str(data[key])
        return match.group(0)

    return MESSAGE_DATA_RE.sub(substitute, template)


class RuleContext:
    """
    The view of the linter a rule gets when it is created.

    Args:
        rule_id: Id the rule is registered under
        messages: The rule's message templates
        options: Validated rule options
        settings: Shared settings
        source_code: Source unit being linted
        sink: Receives every Problem reported
    """

    def __init__(
        self,
        rule_id: str,
        messages: Dict[str, str],
        options: Dict[str, Any],
        settings: Dict[str, Any],
        source_code: SourceCode,
        sink: Callable[[Problem], None],
    ):
        self.id = rule_id
        self.messages = messages
        self.options = options
        self.settings = settings
        self.source_code = source_code
        self._sink = sink
        self._fixer = Fixer()

    def report(
        self,
        node: Dict[str, Any],
        message_id: str,
        data: Optional[Dict[str, Any]] = None,
        fix: Optional[Callable[[Fixer], Optional[Fix]]] = None,
    ) -> None:
        """
        Report a problem on ``node``.

        Args:
            node: Node the problem is located at
            message_id: Key into the rule's messages
            data: Values for the message's ``{{slots}}``
            fix: Optional callable building a Fix from a Fixer
        """
        template = self.messages.get(message_id, message_id)
        line, column = node_position(node)
        end_line, end_column = node_end_position(node)
        problem = Problem(
            rule_id=self.id,
            message_id=message_id,
            message=interpolate(template, data),
            line=line,
            column=column,
            end_line=end_line,
            end_column=end_column,
            fix=fix(self._fixer) if fix is not None else None,
            node=node,
        )
        self._sink(problem)
