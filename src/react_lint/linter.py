"""
Linter: runs the enabled rules over a source unit and applies fixes.

This module is the glue between parsing, configuration and the rules.
All rules share a single traversal of each source unit.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

from .config import InvalidOptionsError, normalize_rule_entry, validate_options
from .context import Fix, Problem, RuleContext, SourceCode
from .parser import JSXParser
from .rules import RULES
from .traversal import Traverser

MAX_FIX_PASSES = 10


@dataclass
class FixResult:
    """Outcome of ``Linter.verify_and_fix``."""
    output: str
    fixed: bool
    problems: List[Problem] = field(default_factory=list)


def apply_fixes(text: str, problems: List[Problem]) -> Tuple[str, bool]:
    """
    Apply the fixes attached to problems.

    Fixes are applied in source order; a fix overlapping one already taken
    is skipped and will be retried in a later pass.

    Args:
        text: Source text
        problems: Problems, some carrying a Fix

    Returns:
        (new text, whether anything changed)
    """
    fixes: List[Fix] = sorted(
        (p.fix for p in problems if p.fix is not None),
        key=lambda f: (f.range[0], f.range[1]),
    )
    if not fixes:
        return text, False

    parts = []
    cursor = 0
    for fix in fixes:
        start, end = fix.range
        if start < cursor:
            continue
        parts.append(text[cursor:start])
        parts.append(fix.text)
        cursor = end
    parts.append(text[cursor:])
    output = "".join(parts)
    return output, output != text


class Linter:
    """
    Run rules over JSX source.

    Args:
        verbose: Enable verbose output
    """

    def __init__(self, verbose: bool = False):
        self.verbose = verbose
        self.parser = JSXParser(verbose=verbose)
        self.rules = dict(RULES)

    def _enabled_rules(self, rule_config: Optional[Dict[str, Any]]):
        """
        Resolve which rules run and with which options.

        Every registered rule runs with default options unless the
        configuration says otherwise.

        Raises:
            InvalidOptionsError: For unknown rules or malformed options
        """
        rule_config = rule_config or {}
        for rule_id in rule_config:
            if rule_id not in self.rules:
                raise InvalidOptionsError(f"Unknown rule: {rule_id}")

        enabled = []
        for rule_id, rule in self.rules.items():
            entry = rule_config.get(rule_id, "error")
            on, options = normalize_rule_entry(rule_id, entry)
            if not on:
                continue
            enabled.append((rule, validate_options(rule, options)))
        return enabled

    def verify(
        self,
        code: Union[str, SourceCode],
        rules: Optional[Dict[str, Any]] = None,
        settings: Optional[Dict[str, Any]] = None,
        filename: str = "<input>",
    ) -> List[Problem]:
        """
        Lint one source unit.

        Args:
            code: Source text, or an already parsed SourceCode
            rules: Rule configuration (``{"jsx-key": ["error", {...}]}``)
            settings: Shared settings (``react``, ``linkComponents``...)
            filename: Name used when parsing text

        Returns:
            Problems sorted by position

        Raises:
            ValueError: If the code cannot be parsed or the options are invalid
        """
        enabled = self._enabled_rules(rules)

        if isinstance(code, SourceCode):
            source_code = code
        else:
            source_code = self.parser.parse_code(code, filename)["source_code"]

        problems: List[Problem] = []
        traverser = Traverser()
        for rule, options in enabled:
            context = RuleContext(
                rule_id=rule.rule_id,
                messages=rule.messages,
                options=options,
                settings=settings or {},
                source_code=source_code,
                sink=problems.append,
            )
            traverser.add_handlers(rule.create(context))

        traverser.traverse(source_code.ast)

        if self.verbose:
            print(f"{source_code.filename}: {len(problems)} problem(s)")

        problems.sort(key=lambda p: (p.line, p.column))
        return problems

    def verify_and_fix(
        self,
        code: str,
        rules: Optional[Dict[str, Any]] = None,
        settings: Optional[Dict[str, Any]] = None,
        filename: str = "<input>",
    ) -> FixResult:
        """
        Lint and fix until no fix applies or the pass limit is reached.

        Args:
            code: Source text
            rules: Rule configuration
            settings: Shared settings
            filename: Name used when parsing

        Returns:
            FixResult with the fixed text and the problems left in it
        """
        text = code
        fixed = False
        problems = self.verify(text, rules, settings, filename)
        for _ in range(MAX_FIX_PASSES):
            text, changed = apply_fixes(text, problems)
            if not changed:
                break
            fixed = True
            problems = self.verify(text, rules, settings, filename)
        return FixResult(output=text, fixed=fixed, problems=problems)
