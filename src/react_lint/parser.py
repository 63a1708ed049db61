"""
JSX and HTML parser module.

This module parses JavaScript/JSX source (and inline scripts of HTML
pages) into plain-dict ESTree ASTs that the linter walks.
"""

import bisect
import re
from pathlib import Path
from typing import Dict, List, Any, Optional

import esprima
from bs4 import BeautifulSoup

from .context import SourceCode

JS_SUFFIXES = {".js", ".jsx", ".mjs", ".cjs"}
HTML_SUFFIXES = {".html", ".htm"}

# <script type="..."> values whose content is worth linting
SCRIPT_TYPES = {
    "",
    "text/javascript",
    "application/javascript",
    "module",
    "text/babel",
    "text/jsx",
}

PARSE_OPTIONS = {
    "jsx": True,
    "loc": True,
    "range": True,
    "comment": True,
    "tolerant": True,
}

# Tag name given to shorthand fragments while esprima reads the text
FRAGMENT_PLACEHOLDER = "__ReactLintFragment__"

LINE_BREAK_RE = re.compile(r"\r\n|[\n\r\u2028\u2029]")


def line_starts(text: str) -> List[int]:
    """Return the offset at which every line of text starts."""
    return [0] + [m.end() for m in LINE_BREAK_RE.finditer(text)]


def error_index(error: Exception, text: str) -> Optional[int]:
    """
    Return the character offset an esprima error points at.

    esprima errors carry ``index``; ``lineNumber``/``column`` (1-based
    column) are used when it is missing.
    """
    index = getattr(error, "index", None)
    if isinstance(index, int):
        return index
    line = getattr(error, "lineNumber", None)
    column = getattr(error, "column", None)
    if isinstance(line, int) and isinstance(column, int):
        starts = line_starts(text)
        if 1 <= line <= len(starts):
            return starts[line - 1] + column - 1
    return None


class ShorthandFragments:
    """
    Source rewriting that lets esprima read ``<>...</>``.

    esprima 4 has no shorthand fragment syntax. Each ``<>`` / ``</>`` the
    parser stops at gets FRAGMENT_PLACEHOLDER as its tag name. After
    parsing, ``restore`` turns the placeholder elements into
    ``JSXFragment`` nodes and maps every range and location back onto the
    original text.
    """

    def __init__(self, code: str):
        self.code = code
        # Offsets in code where the placeholder is inserted, ascending
        self.insertions: List[int] = []

    @property
    def text(self) -> str:
        parts = []
        cursor = 0
        for offset in self.insertions:
            parts.append(self.code[cursor:offset])
            parts.append(FRAGMENT_PLACEHOLDER)
            cursor = offset
        parts.append(self.code[cursor:])
        return "".join(parts)

    def to_original(self, position: int) -> int:
        """Map an offset in the rewritten text to an offset in the original."""
        width = len(FRAGMENT_PLACEHOLDER)
        for count, offset in enumerate(self.insertions):
            start = offset + width * count
            if position < start:
                return position - width * count
            if position < start + width:
                return offset
        return position - width * len(self.insertions)

    def name_fragment_at(self, index: Optional[int]) -> bool:
        """
        Insert the placeholder before the ``>`` at ``index`` if it closes ``<`` or ``</``.

        Args:
            index: Offset in the rewritten text where parsing failed

        Returns:
            True if the text changed and should be parsed again
        """
        if index is None:
            return False
        offset = self.to_original(index)
        if self.code[offset:offset + 1] != ">" or offset in self.insertions:
            return False

        before = self.code[:offset].rstrip()
        if before.endswith("/"):
            before = before[:-1].rstrip()
        if not before.endswith("<"):
            return False

        bisect.insort(self.insertions, offset)
        return True

    def restore(self, ast: Dict[str, Any]) -> None:
        """Rewrite placeholder elements as fragments and remap positions, in place."""
        starts = line_starts(self.code)
        stack: List[Any] = [ast]
        while stack:
            value = stack.pop()
            if isinstance(value, list):
                stack.extend(value)
                continue
            if not isinstance(value, dict):
                continue

            if value.get("type") == "JSXElement" and self._is_placeholder(value.get("openingElement")):
                self._to_fragment(value)
            self._remap(value, starts)

            for key, child in value.items():
                if key not in ("loc", "range"):
                    stack.append(child)

    def _is_placeholder(self, opening: Any) -> bool:
        name = opening.get("name") if isinstance(opening, dict) else None
        return isinstance(name, dict) and name.get("type") == "JSXIdentifier" \
            and name.get("name") == FRAGMENT_PLACEHOLDER

    def _to_fragment(self, node: Dict[str, Any]) -> None:
        opening = node.pop("openingElement")
        closing = node.pop("closingElement", None)
        node["type"] = "JSXFragment"
        node["openingFragment"] = self._boundary("JSXOpeningFragment", opening)
        node["closingFragment"] = self._boundary("JSXClosingFragment", closing) if closing else None

    def _boundary(self, node_type: str, element_tag: Dict[str, Any]) -> Dict[str, Any]:
        boundary = {"type": node_type}
        for key in ("range", "loc"):
            if key in element_tag:
                boundary[key] = element_tag[key]
        return boundary

    def _remap(self, node: Dict[str, Any], starts: List[int]) -> None:
        rng = node.get("range")
        if not (isinstance(rng, (list, tuple)) and len(rng) == 2):
            return
        start, end = self.to_original(rng[0]), self.to_original(rng[1])
        node["range"] = [start, end]
        if isinstance(node.get("loc"), dict):
            loc = dict(node["loc"])
            loc["start"] = self._position(start, starts)
            loc["end"] = self._position(end, starts)
            node["loc"] = loc

    def _position(self, offset: int, starts: List[int]) -> Dict[str, int]:
        line = bisect.bisect_right(starts, offset)
        return {"line": line, "column": offset - starts[line - 1]}


class JSXParser:
    """
    Parser for JSX code and HTML files.

    This class handles parsing JavaScript/JSX files and the inline scripts
    of HTML files into dict ASTs with locations, ranges and comments.
    """

    def __init__(self, verbose: bool = False):
        """
        Initialize the parser.

        Args:
            verbose: Enable verbose output
        """
        self.verbose = verbose

    def parse_file(self, file_path: Path) -> Dict[str, Any]:
        """
        Parse a JSX or HTML file.

        Args:
            file_path: Path to the file

        Returns:
            Dictionary containing the parsed units and metadata

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If the file cannot be parsed
        """
        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        if self.verbose:
            print(f"Parsing file: {file_path}")

        if file_path.suffix in HTML_SUFFIXES:
            return self._parse_html_file(file_path)

        content = file_path.read_text(encoding="utf-8", errors="ignore")
        result = self.parse_code(content, str(file_path))
        result["units"] = [{"source": result["source_code"], "line_offset": 0}]
        return result

    def _parse_html_file(self, file_path: Path) -> Dict[str, Any]:
        """
        Parse the inline scripts of an HTML file.

        Each script is parsed on its own; its line offset into the page is
        kept so findings can be mapped back to page lines.

        Args:
            file_path: Path to the HTML file

        Returns:
            Dictionary containing parsed scripts
        """
        content = file_path.read_text(encoding="utf-8", errors="ignore")

        result: Dict[str, Any] = {
            "file": str(file_path),
            "file_type": "html",
            "units": [],
            "script_errors": [],
        }

        soup = BeautifulSoup(content, "lxml")
        search_from = 0
        for script in soup.find_all("script"):
            script_type = (script.get("type") or "").strip().lower()
            script_content = script.string
            if script_type not in SCRIPT_TYPES or not script_content or not script_content.strip():
                continue

            position = content.find(script_content, search_from)
            if position < 0:
                line_offset = 0
            else:
                line_offset = content.count("\n", 0, position)
                search_from = position + len(script_content)

            try:
                parsed = self.parse_code(script_content, f"{file_path}:script")
            except ValueError as e:
                if self.verbose:
                    print(f"Warning: Could not parse inline script: {e}")
                result["script_errors"].append({"line": line_offset + 1, "error": str(e)})
                continue

            result["units"].append({
                "source": parsed["source_code"],
                "line_offset": line_offset,
                "type": script_type or "text/javascript",
            })

        return result

    def parse_code(self, code: str, filename: str = "<string>") -> Dict[str, Any]:
        """
        Parse JSX code from a string.

        Args:
            code: Source code
            filename: Optional filename for error reporting

        Returns:
            Dictionary containing the dict AST, its comments and a SourceCode

        Raises:
            ValueError: If the code cannot be parsed
        """
        if self.verbose:
            print(f"Parsing code from {filename}")

        try:
            ast, fragments = self._parse_with_fragments(esprima.parseScript, code)
        except Exception as script_err:
            try:
                ast, fragments = self._parse_with_fragments(esprima.parseModule, code)
            except Exception:
                raise ValueError(f"{filename}: {script_err}") from script_err

        if fragments.insertions:
            if self.verbose:
                print(f"Restoring {len(fragments.insertions)} shorthand fragment tag(s) in {filename}")
            fragments.restore(ast)

        return {
            "file": filename,
            "file_type": "javascript",
            "ast": ast,
            "comments": list(ast.get("comments") or []),
            "source_code": SourceCode(code, ast, filename),
        }

    def _parse_with_fragments(self, parse, code: str):
        """
        Run an esprima entry point, naming shorthand fragments as they are hit.

        Every ``<>`` or ``</>`` the parser stops at gets a placeholder tag
        name and the text is parsed again; any other error propagates.

        Args:
            parse: ``esprima.parseScript`` or ``esprima.parseModule``
            code: Source code

        Returns:
            (dict AST in rewritten coordinates, the ShorthandFragments used)
        """
        fragments = ShorthandFragments(code)
        while True:
            try:
                ast_obj = parse(fragments.text, **PARSE_OPTIONS)
            except Exception as e:
                if not fragments.name_fragment_at(error_index(e, fragments.text)):
                    raise
                continue

            if hasattr(ast_obj, "toDict"):
                return ast_obj.toDict(), fragments
            return self._esprima_to_dict(ast_obj), fragments

    def _esprima_to_dict(self, obj: Any) -> Any:
        """
        Convert an esprima AST object to a dictionary.

        Args:
            obj: Esprima AST object

        Returns:
            Dictionary representation
        """
        if isinstance(obj, (str, int, float, bool, type(None))):
            return obj
        elif isinstance(obj, list):
            return [self._esprima_to_dict(item) for item in obj]
        elif isinstance(obj, dict):
            return {k: self._esprima_to_dict(v) for k, v in obj.items()}
        elif hasattr(obj, "__dict__"):
            result = {}
            for key, value in obj.__dict__.items():
                if not key.startswith("_"):
                    result[key] = self._esprima_to_dict(value)
            return result
        else:
            return obj
