"""Tests for scripts/check_log_pii.py."""

from __future__ import annotations

import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "scripts"))

from check_log_pii import check_source, main  # noqa: E402


def test_plain_pii_in_logger_call_flagged():
    source = 'logger.info("booked", extra={"extra_fields": {"email": email}})\n'
    errors = check_source(source, "mod.py")
    assert len(errors) == 1
    assert "'email'" in errors[0]


def test_multiline_call_flagged():
    source = (
        "logger.warning(\n"
        '    "lookup",\n'
        '    extra={"extra_fields": {"who": request.phone}},\n'
        ")\n"
    )
    assert any("'phone'" in e for e in check_source(source, "mod.py"))


def test_redacted_pii_allowed():
    source = 'logger.info("booked", extra={"extra_fields": safe_log_context(email=email)})\n'
    assert check_source(source, "mod.py") == []


def test_print_flagged():
    assert check_source('print("debug")\n', "mod.py") == [
        "mod.py:1: print() not allowed in runtime code"
    ]


def test_project_sources_pass(monkeypatch):
    monkeypatch.chdir(os.path.join(os.path.dirname(__file__), ".."))
    assert main() == 0
