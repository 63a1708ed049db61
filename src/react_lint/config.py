"""
Configuration module for managing environment variables, settings and rule options.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

DEFAULT_CONFIG_FILE = ".reactlintrc.json"

# Accepted spellings of a rule's severity
RULE_ON = {"error", "warn", "on", 2, 1, True}
RULE_OFF = {"off", 0, False}


class InvalidOptionsError(ValueError):
    """Raised when rule options or the configuration file are malformed."""


def validate_options(rule, options: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Validate options against a rule's declarative schema.

    Schemas are closed objects whose properties are either
    ``{"type": "boolean"}`` or ``{"enum": [...]}``. A rule with an empty
    schema accepts no options.

    Args:
        rule: Rule instance
        options: User options (or None)

    Returns:
        The options, unchanged

    Raises:
        InvalidOptionsError: If an option is unknown or has the wrong type
    """
    if options is None:
        return {}
    if not isinstance(options, dict):
        raise InvalidOptionsError(f"{rule.rule_id}: options must be an object, got {type(options).__name__}")

    properties = (rule.schema or {}).get("properties", {})
    for name, value in options.items():
        schema = properties.get(name)
        if schema is None:
            raise InvalidOptionsError(f"{rule.rule_id}: unknown option '{name}'")
        if schema.get("type") == "boolean" and not isinstance(value, bool):
            raise InvalidOptionsError(f"{rule.rule_id}: option '{name}' must be a boolean")
        if "enum" in schema and value not in schema["enum"]:
            allowed = ", ".join(repr(v) for v in schema["enum"])
            raise InvalidOptionsError(f"{rule.rule_id}: option '{name}' must be one of {allowed}")
    return options


class Config:
    """
    Configuration manager for lint settings and rule selection.

    Values come from, in increasing precedence: built-in defaults, a JSON
    config file, and environment variables (a ``.env`` file is loaded
    first if present).
    """

    def __init__(self, config_path: Optional[Path] = None, load_env: bool = True):
        """
        Initialize configuration.

        Args:
            config_path: Explicit JSON config file. Defaults to
                ``$REACT_LINT_CONFIG`` or ``.reactlintrc.json`` in the
                working directory when it exists.
            load_env: Load a ``.env`` file from the working directory
        """
        if load_env:
            load_dotenv(Path.cwd() / ".env")

        self.settings: Dict[str, Any] = {}
        self.rules: Dict[str, Any] = {}

        if config_path is None:
            env_path = os.getenv("REACT_LINT_CONFIG")
            if env_path:
                config_path = Path(env_path)
            elif (Path.cwd() / DEFAULT_CONFIG_FILE).exists():
                config_path = Path.cwd() / DEFAULT_CONFIG_FILE

        self.config_path: Optional[Path] = Path(config_path) if config_path else None
        if self.config_path is not None:
            self._load_file(self.config_path)

        pragma = os.getenv("REACT_LINT_PRAGMA")
        if pragma:
            self.settings.setdefault("react", {})["pragma"] = pragma

    def _load_file(self, path: Path) -> None:
        """
        Load a JSON config file.

        Raises:
            FileNotFoundError: If the file doesn't exist
            InvalidOptionsError: If the file is not valid JSON or has the wrong shape
        """
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise InvalidOptionsError(f"Invalid JSON in {path}: {e}") from e

        if not isinstance(data, dict):
            raise InvalidOptionsError(f"{path}: top level must be an object")

        settings = data.get("settings", {})
        rules = data.get("rules", {})
        if not isinstance(settings, dict) or not isinstance(rules, dict):
            raise InvalidOptionsError(f"{path}: 'settings' and 'rules' must be objects")
        self.settings = settings
        self.rules = rules

    def rule_config(self) -> Dict[str, Any]:
        """Return the raw rule configuration, suitable for ``Linter.verify``."""
        return dict(self.rules)


def normalize_rule_entry(rule_id: str, entry: Any):
    """
    Turn a rule configuration entry into ``(enabled, options)``.

    Accepts ``"off"``/``"error"``/``"warn"``, booleans, 0/1/2,
    an options object, or ``[severity, options]``.

    Raises:
        InvalidOptionsError: If the entry cannot be understood
    """
    options = None
    severity = entry
    if isinstance(entry, (list, tuple)):
        if not entry or len(entry) > 2:
            raise InvalidOptionsError(f"{rule_id}: expected [severity] or [severity, options]")
        severity = entry[0]
        options = entry[1] if len(entry) == 2 else None
    elif isinstance(entry, dict):
        severity, options = "error", entry

    if not isinstance(severity, (str, int)):
        raise InvalidOptionsError(f"{rule_id}: unknown severity {severity!r}")
    if isinstance(severity, str):
        severity = severity.lower()
    if severity in RULE_OFF:
        return False, None
    if severity in RULE_ON:
        return True, options
    raise InvalidOptionsError(f"{rule_id}: unknown severity {severity!r}")
