"""
react-lint - Static checks for JSX markup

Finds missing and duplicate list keys, unsafe target="_blank" links and
elements mixing children with dangerouslySetInnerHTML, without running
the code.
"""

__version__ = "0.1.0"

from .linter import Linter, FixResult
from .context import Problem, Fix, SourceCode
from .detector import ReactLintDetector
from .parser import JSXParser
from .config import Config, InvalidOptionsError
from .rules import RULES

__all__ = [
    "Linter",
    "FixResult",
    "Problem",
    "Fix",
    "SourceCode",
    "ReactLintDetector",
    "JSXParser",
    "Config",
    "InvalidOptionsError",
    "RULES",
]
