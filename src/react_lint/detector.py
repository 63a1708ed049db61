"""
Main detector module that coordinates parsing, linting and reporting.

This module provides the high-level API for linting files and directories.
"""

import json
from pathlib import Path
from typing import Dict, List, Any, Optional

from .config import Config
from .context import Problem
from .linter import Linter
from .parser import JS_SUFFIXES, HTML_SUFFIXES

SUPPORTED_SUFFIXES = JS_SUFFIXES | HTML_SUFFIXES


class ReactLintDetector:
    """
    Main detector class for JSX findings.

    This class coordinates the parsing and linting of JSX code and
    collects results per file.
    """

    def __init__(self, config: Optional[Config] = None, verbose: bool = False):
        """
        Initialize the detector.

        Args:
            config: Loaded configuration (rule selection and settings);
                defaults to every rule with default options
            verbose: Enable verbose output
        """
        self.verbose = verbose
        self.config = config
        self.linter = Linter(verbose=verbose)
        self.parser = self.linter.parser

    @property
    def rules(self) -> Dict[str, Any]:
        return self.config.rule_config() if self.config else {}

    @property
    def settings(self) -> Dict[str, Any]:
        return self.config.settings if self.config else {}

    def analyze(self, path: Path, fix: bool = False) -> Dict[str, Any]:
        """
        Lint a file or directory.

        Args:
            path: Path to a file or directory
            fix: Write fixed JavaScript files back to disk

        Returns:
            Dictionary containing analysis results

        Raises:
            ValueError: If the path is invalid
        """
        if path.is_file():
            return self._analyze_file(path, fix)
        elif path.is_dir():
            return self._analyze_directory(path, fix)
        else:
            raise ValueError(f"Invalid path: {path}")

    def _format_findings(self, problems: List[Problem], line_offset: int = 0) -> List[Dict[str, Any]]:
        findings = []
        for problem in problems:
            finding = problem.to_dict()
            finding["line"] += line_offset
            if finding["end_line"]:
                finding["end_line"] += line_offset
            findings.append(finding)
        return findings

    def _analyze_file(self, file_path: Path, fix: bool = False) -> Dict[str, Any]:
        """
        Lint a single file.

        Args:
            file_path: Path to the file
            fix: Write fixes back (JavaScript files only)

        Returns:
            Dictionary containing analysis results
        """
        if self.verbose:
            print(f"Analyzing file: {file_path}")

        if file_path.suffix not in SUPPORTED_SUFFIXES:
            if self.verbose:
                print(f"Skipping unsupported file: {file_path}")
            return {
                "file": str(file_path),
                "skipped": True,
                "reason": "Not a JavaScript or HTML file",
            }

        try:
            if fix and file_path.suffix in JS_SUFFIXES:
                return self._fix_file(file_path)

            parsed = self.parser.parse_file(file_path)
            findings: List[Dict[str, Any]] = []
            for unit in parsed["units"]:
                problems = self.linter.verify(unit["source"], self.rules, self.settings)
                findings.extend(self._format_findings(problems, unit.get("line_offset", 0)))

            result = {
                "file": str(file_path),
                "findings": findings,
                "finding_count": len(findings),
            }
            if parsed.get("script_errors"):
                result["script_errors"] = parsed["script_errors"]
            return result

        except Exception as e:
            return {
                "file": str(file_path),
                "error": str(e),
            }

    def _fix_file(self, file_path: Path) -> Dict[str, Any]:
        content = file_path.read_text(encoding="utf-8")
        fix_result = self.linter.verify_and_fix(content, self.rules, self.settings, str(file_path))
        if fix_result.fixed:
            file_path.write_text(fix_result.output, encoding="utf-8")
            if self.verbose:
                print(f"Fixed: {file_path}")

        findings = self._format_findings(fix_result.problems)
        return {
            "file": str(file_path),
            "findings": findings,
            "finding_count": len(findings),
            "fixed": fix_result.fixed,
        }

    def _analyze_directory(self, dir_path: Path, fix: bool = False) -> Dict[str, Any]:
        """
        Lint all supported files in a directory recursively.

        Args:
            dir_path: Path to the directory
            fix: Write fixes back

        Returns:
            Dictionary containing analysis results for all files
        """
        if self.verbose:
            print(f"Analyzing directory: {dir_path}")

        results = {
            "directory": str(dir_path),
            "files": [],
            "total_findings": 0,
        }

        files = sorted(
            p for p in dir_path.rglob("*")
            if p.is_file() and p.suffix in SUPPORTED_SUFFIXES and "node_modules" not in p.parts
        )
        for file_path in files:
            file_result = self._analyze_file(file_path, fix)
            results["files"].append(file_result)
            results["total_findings"] += file_result.get("finding_count", 0)

        return results

    def print_results(self, results: Dict[str, Any]) -> None:
        """
        Print analysis results to stdout in a human-readable format.

        Args:
            results: Analysis results dictionary
        """
        if "directory" in results:
            print(f"\n=== Lint Results for {results['directory']} ===\n")
            print(f"Files analyzed: {len(results['files'])}")
            print(f"Total findings: {results['total_findings']}\n")

            for file_result in results["files"]:
                self._print_single_file_result(file_result)
        else:
            self._print_single_file_result(results, header=True)

    def _print_single_file_result(self, result: Dict[str, Any], header: bool = False) -> None:
        """Helper to print the result for a single file."""
        file_path = result.get("file", "Unknown")

        if header:
            print(f"\n=== Lint Results for {file_path} ===\n")

        if result.get("skipped"):
            if header:
                print(f"Skipped: {result['reason']}")
            return

        if "error" in result:
            print(f"[-] {file_path}: Error - {result['error']}")
            return

        count = result.get("finding_count", 0)
        if count > 0:
            print(f"[!] {file_path}: {count} finding(s)")
        else:
            print(f"[+] {file_path}: No findings")

        for finding in result.get("findings", []):
            print(
                f"   {finding['line']}:{finding['column']}  {finding['message']}  [{finding['rule']}]"
            )

    def save_results(self, results: Dict[str, Any], output_path: Path) -> None:
        """
        Save analysis results to a JSON file.

        Args:
            results: Analysis results dictionary
            output_path: Path to save the results
        """
        with open(output_path, "w") as f:
            json.dump(results, f, indent=2)

        if self.verbose:
            print(f"Results saved to {output_path}")
