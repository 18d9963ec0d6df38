from __future__ import annotations

import json
import logging

from hashcash.core.config import LoggingConfig
from hashcash.core.logs import JsonFormatter, TextFormatter, configure_logging


def _record(**extra: object) -> logging.LogRecord:
    record = logging.LogRecord("hashcash.core.verifier", logging.INFO, __file__, 1, "stamp_rejected", None, None)
    for k, v in extra.items():
        setattr(record, k, v)
    return record


def test_json_formatter_emits_event_and_extras() -> None:
    line = JsonFormatter().format(_record(fingerprint="abc", code="spent"))
    payload = json.loads(line)
    assert payload["event"] == "stamp_rejected"
    assert payload["level"] == "INFO"
    assert payload["fingerprint"] == "abc"
    assert payload["code"] == "spent"


def test_text_formatter_appends_extras() -> None:
    line = TextFormatter("%(levelname)s %(message)s").format(_record(code="timestamp"))
    assert line == "INFO stamp_rejected code=timestamp"


def test_configure_logging_installs_one_root_handler() -> None:
    configure_logging(LoggingConfig(level="debug", json_output=True))
    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0].formatter, JsonFormatter)
