"""
Depth-first AST walk with enter/exit and code-path events.

Rules register handlers under keys of the form:

- ``"JSXElement"``: called when a node of that type is entered
- ``"JSXElement:exit"``: called when it is left, after all its children
- ``"onCodePathStart"`` / ``"onCodePathEnd"``: called with
  ``(code_path, node)`` when the program or a function starts and ends

A function's code path ends after its ``:exit`` handlers ran, so anything
collected inside the function is complete by the time its parent's exit
handlers run.
"""

from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Callable, Dict, List

from .ast_utils import FUNCTION_TYPES, is_node, iter_child_nodes

Handler = Callable[..., None]


@dataclass
class CodePath:
    """The control-flow region of the program or of one function."""
    id: int
    origin: str  # "program" or "function"
    node: Dict[str, Any]


class Traverser:
    """
    Dispatch traversal events to registered handlers.

    Several handlers may share a key; they run in registration order.
    """

    def __init__(self):
        self._handlers: Dict[str, List[Handler]] = defaultdict(list)
        self._next_code_path_id = 0

    def add_handlers(self, handlers: Dict[str, Handler]) -> None:
        for key, handler in handlers.items():
            self._handlers[key].append(handler)

    def _emit(self, key: str, *args: Any) -> None:
        for handler in self._handlers.get(key, ()):
            handler(*args)

    def _code_path_origin(self, node: Dict[str, Any]) -> str:
        if node["type"] == "Program":
            return "program"
        if node["type"] in FUNCTION_TYPES:
            return "function"
        return ""

    def traverse(self, root: Dict[str, Any]) -> None:
        """
        Walk ``root`` depth-first and fire every event.

        The walk uses an explicit stack so deeply nested markup does not hit
        the interpreter's recursion limit.

        Args:
            root: Root node, normally a ``Program``
        """
        if not is_node(root):
            return

        # (node, code_path or None, leaving?)
        stack: List[Any] = [(root, None, False)]
        while stack:
            node, code_path, leaving = stack.pop()
            ntype = node["type"]

            if leaving:
                self._emit(f"{ntype}:exit", node)
                if code_path is not None:
                    self._emit("onCodePathEnd", code_path, node)
                continue

            origin = self._code_path_origin(node)
            if origin:
                code_path = CodePath(id=self._next_code_path_id, origin=origin, node=node)
                self._next_code_path_id += 1
                self._emit("onCodePathStart", code_path, node)
            else:
                code_path = None

            self._emit(ntype, node)

            stack.append((node, code_path, True))
            children = list(iter_child_nodes(node))
            for child in reversed(children):
                stack.append((child, None, False))
