"""
Tracking of the values functions can produce.

A rule that needs to know what an ``xs.map(cb)`` callback returns cannot
look at the callback when the call is entered, because the callback has
not been walked yet. Instead the tracker collects return arguments while
each function's code path is open and publishes them when it closes; the
call's exit event comes later and reads them back.
"""

from typing import Any, Dict, List, Optional

from .ast_utils import node_type


class CallbackResultTracker:
    """
    Collect candidate result expressions per function.

    One tracker serves one traversal. Frames follow lexical nesting, so a
    ``return`` inside an inner function never counts for the outer one.
    """

    def __init__(self):
        self._frames: List[List[Dict[str, Any]]] = []
        # id(function node) -> candidate expressions
        self._results: Dict[int, List[Dict[str, Any]]] = {}
        # Keeps published nodes alive so their ids stay unique
        self._functions: Dict[int, Dict[str, Any]] = {}

    def on_code_path_start(self, code_path: Any, node: Dict[str, Any]) -> None:
        self._frames.append([])

    def on_return(self, node: Dict[str, Any]) -> None:
        """Record a return statement's argument for the innermost open function."""
        argument = node.get("argument")
        if argument is None or not self._frames:
            return
        self._frames[-1].append(argument)

    def on_code_path_end(self, code_path: Any, node: Dict[str, Any]) -> None:
        """
        Close the innermost frame and publish it if it belongs to a function.

        Args:
            code_path: Code path being closed (its ``origin`` tells
                functions apart from the program)
            node: Node that owns the code path
        """
        if not self._frames:
            return
        results = self._frames.pop()
        if getattr(code_path, "origin", None) != "function":
            return

        body = node.get("body")
        if node_type(node) == "ArrowFunctionExpression" and node_type(body) not in (None, "BlockStatement"):
            results.append(body)
        self._results[id(node)] = results
        self._functions[id(node)] = node

    def results_for(self, function_node: Any) -> Optional[List[Dict[str, Any]]]:
        """
        Return the candidates published for a closed function.

        Args:
            function_node: Function node (typically a call argument)

        Returns:
            List of candidate expressions, or None if ``function_node`` is
            not a function whose code path has closed
        """
        if function_node is None or self._functions.get(id(function_node)) is not function_node:
            return None
        return list(self._results.get(id(function_node), []))
