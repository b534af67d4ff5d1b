#!/usr/bin/env python3
"""Log PII gate for source files.

Fails if, anywhere under src/:
- print( is called in runtime code
- a logger call passes guest contact data (email, phone, names, special
  requests) that has not gone through safe_log_context/redact_value/redact_string

Usage:
    python scripts/check_log_pii.py
"""

from __future__ import annotations

import ast
import sys
from pathlib import Path

LOG_METHODS = frozenset({"debug", "info", "warning", "error", "critical", "exception"})

# Variable / attribute names that hold guest PII
SENSITIVE_NAMES = frozenset(
    {"email", "phone", "full_name", "guest_name", "special_requests", "stored_email"}
)

REDACTION_FUNCS = frozenset({"safe_log_context", "redact_value", "redact_string"})


def _call_name(node: ast.Call) -> str | None:
    if isinstance(node.func, ast.Name):
        return node.func.id
    if isinstance(node.func, ast.Attribute):
        return node.func.attr
    return None


def _is_logger_call(node: ast.Call) -> bool:
    func = node.func
    return (
        isinstance(func, ast.Attribute)
        and func.attr in LOG_METHODS
        and isinstance(func.value, ast.Name)
        and func.value.id == "logger"
    )


def _unredacted_names(node: ast.AST) -> list[str]:
    """Sensitive names referenced under ``node`` outside a redaction call."""
    if isinstance(node, ast.Call) and _call_name(node) in REDACTION_FUNCS:
        return []
    if isinstance(node, ast.Name) and node.id in SENSITIVE_NAMES:
        return [node.id]
    if isinstance(node, ast.Attribute) and node.attr in SENSITIVE_NAMES:
        return [node.attr]
    found: list[str] = []
    for child in ast.iter_child_nodes(node):
        found.extend(_unredacted_names(child))
    return found


def check_source(source: str, filename: str = "<string>") -> list[str]:
    """Check one module's source. Returns list of error messages."""
    tree = ast.parse(source, filename=filename)
    errors: list[str] = []

    for node in ast.walk(tree):
        if not isinstance(node, ast.Call):
            continue

        if isinstance(node.func, ast.Name) and node.func.id == "print":
            errors.append(f"{filename}:{node.lineno}: print() not allowed in runtime code")
            continue

        if _is_logger_call(node):
            for name in sorted(set(_unredacted_names(node))):
                errors.append(
                    f"{filename}:{node.lineno}: logger call with '{name}' "
                    "must use redaction (safe_log_context/redact_value)"
                )

    return errors


def main() -> int:
    """Run the gate on the src directory."""
    src_dir = Path("src")

    if not src_dir.exists():
        src_dir = Path(__file__).parent.parent / "src"

    if not src_dir.exists():
        sys.stderr.write("Error: src directory not found\n")
        return 1

    all_errors: list[str] = []
    for pyfile in sorted(src_dir.rglob("*.py")):
        all_errors.extend(check_source(pyfile.read_text(encoding="utf-8"), str(pyfile)))

    if all_errors:
        sys.stderr.write("Log PII gate FAILED:\n")
        for err in all_errors:
            sys.stderr.write(f"  {err}\n")
        return 1

    sys.stdout.write("Log PII gate PASSED\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
