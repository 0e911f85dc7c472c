"""Flake8 plugin to enforce safe subprocess usage.

This plugin checks that godll launches external tools only through
godll.subprocess_utils, so every vswhere, lib and go invocation gets the
Windows console flags and can be replaced by a fake CommandRunner in tests.

Error Codes:
    SUB001: Direct subprocess.run() call detected - use safe_run() instead
    SUB002: Direct subprocess.Popen() call detected - use a CommandRunner instead
    SUB003: Direct subprocess.call() call detected - use safe_run() instead
    SUB004: Direct subprocess.check_call() call detected - use safe_run() instead
    SUB005: Direct subprocess.check_output() call detected - use safe_run() instead
    SUB006: os.system() call detected - use safe_run() instead

Usage:
    flake8 --select=SUB src/
"""

import ast
from typing import Any, Generator, Tuple, Type


class SubprocessSafetyChecker:
    """Flake8 plugin to check for unsafe subprocess usage."""

    name = "subprocess-safety-checker"
    version = "1.0.0"

    ERRORS = {
        "SUB001": "SUB001 Direct subprocess.run() call - use safe_run() from godll.subprocess_utils",
        "SUB002": "SUB002 Direct subprocess.Popen() call - use a CommandRunner from godll.subprocess_utils",
        "SUB003": "SUB003 Direct subprocess.call() call - use safe_run() from godll.subprocess_utils",
        "SUB004": "SUB004 Direct subprocess.check_call() call - use safe_run() from godll.subprocess_utils",
        "SUB005": "SUB005 Direct subprocess.check_output() call - use safe_run() from godll.subprocess_utils",
        "SUB006": "SUB006 os.system() call - use safe_run() from godll.subprocess_utils",
    }

    # (module, attribute) pairs mapped to error codes
    UNSAFE_CALLS = {
        ("subprocess", "run"): "SUB001",
        ("subprocess", "Popen"): "SUB002",
        ("subprocess", "call"): "SUB003",
        ("subprocess", "check_call"): "SUB004",
        ("subprocess", "check_output"): "SUB005",
        ("os", "system"): "SUB006",
    }

    # The wrapper implementation itself is allowed to call subprocess directly
    EXCLUDED_PATTERNS = [
        "subprocess_utils.py",
        "test_subprocess_utils.py",
    ]

    def __init__(self, tree: ast.AST, filename: str = "(none)") -> None:
        self._tree = tree
        self._filename = filename

    def run(self) -> Generator[Tuple[int, int, str, Type[Any]], None, None]:
        """Run the checker and yield violations.

        Yields:
            Tuple of (line, column, message, checker_class)
        """
        for pattern in self.EXCLUDED_PATTERNS:
            if pattern in self._filename:
                return

        visitor = SubprocessCallVisitor()
        visitor.visit(self._tree)

        for line, col, msg in visitor.errors:
            yield (line, col, msg, type(self))


class SubprocessCallVisitor(ast.NodeVisitor):
    """AST visitor to find unsafe subprocess calls."""

    def __init__(self) -> None:
        self.errors: list[Tuple[int, int, str]] = []

    def visit_Call(self, node: ast.Call) -> None:
        func = node.func
        if isinstance(func, ast.Attribute) and isinstance(func.value, ast.Name):
            error_code = SubprocessSafetyChecker.UNSAFE_CALLS.get((func.value.id, func.attr))
            if error_code is not None:
                message = SubprocessSafetyChecker.ERRORS[error_code]
                self.errors.append((node.lineno, node.col_offset, message))

        self.generic_visit(node)
