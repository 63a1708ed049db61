"""
Resolution of the JSX factory names (``@jsx`` / ``@jsxFrag`` pragmas).
"""

import re
from typing import Any, Dict

# One pragma per comment line, optionally behind a JSDoc-style "*"
PRAGMA_RE = re.compile(r"^\s*\*?\s*@(jsx|jsxFrag)\s+(\S+)\s*$", re.MULTILINE)

DEFAULT_PRAGMA = "React"
DEFAULT_FRAGMENT = "Fragment"

SETTINGS_NAMESPACE = "react"


def pragmas_from_settings(settings: Dict[str, Any]) -> Dict[str, str]:
    """
    Derive factory names from shared settings.

    ``jsxFactory`` / ``jsxFragmentFactory`` win over the
    ``pragma`` / ``fragment`` pair.

    Args:
        settings: Shared settings (the ``react`` namespace is read)

    Returns:
        Dict with ``jsx`` and ``jsxFrag`` keys
    """
    react = settings.get(SETTINGS_NAMESPACE) or {}
    if not isinstance(react, dict):
        react = {}
    pragma = react.get("pragma") or DEFAULT_PRAGMA
    fragment = react.get("fragment") or DEFAULT_FRAGMENT
    return {
        "jsx": react.get("jsxFactory") or f"{pragma}.createElement",
        "jsxFrag": react.get("jsxFragmentFactory") or f"{pragma}.{fragment}",
    }


def pragmas_from_comments(comments) -> Dict[str, str]:
    """Collect ``@jsx`` / ``@jsxFrag`` pragmas from comments; later ones win."""
    found: Dict[str, str] = {}
    for comment in comments:
        value = comment.get("value") or ""
        for match in PRAGMA_RE.finditer(value):
            found[match.group(1)] = match.group(2)
    return found


def resolve_pragmas(context) -> Dict[str, str]:
    """
    Resolve the factory names in effect for the unit being linted.

    Source pragmas beat settings, settings beat the defaults. The comment
    scan runs once per source unit and is cached on its SourceCode.

    Args:
        context: RuleContext of the calling rule

    Returns:
        Dict with ``jsx`` and ``jsxFrag`` keys
    """
    source_code = context.source_code
    from_source = source_code.cached(
        "pragmas",
        lambda: pragmas_from_comments(source_code.get_all_comments()),
    )
    resolved = pragmas_from_settings(context.settings or {})
    resolved.update(from_source)
    return resolved
