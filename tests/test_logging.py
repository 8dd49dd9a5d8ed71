from __future__ import annotations

import json
import logging

from jobapp.core.logging import JsonLogFormatter, set_correlation_id


def _record(**extra: object) -> logging.LogRecord:
    record = logging.LogRecord("jobapp.pdf.filler", logging.WARNING, __file__, 1, "Could not place %s", ("x",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_correlation_and_extra_keys() -> None:
    set_correlation_id("req-42")

    payload = json.loads(
        JsonLogFormatter().format(_record(submission_id="sub-1", attribute="personal_info.city", ignored="x"))
    )

    assert payload["message"] == "Could not place x"
    assert payload["level"] == "WARNING"
    assert payload["correlation_id"] == "req-42"
    assert payload["submission_id"] == "sub-1"
    assert payload["attribute"] == "personal_info.city"
    assert "ignored" not in payload


def test_json_formatter_skips_empty_extras() -> None:
    set_correlation_id("")

    payload = json.loads(JsonLogFormatter().format(_record(document_name="")))

    assert "document_name" not in payload
    assert payload["correlation_id"] == ""
