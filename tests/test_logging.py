import json
import logging

from task_api.app.error_handlers import format_validation_errors
from task_api.observability.logging import JsonFormatter, setup_logging


def test_json_formatter_includes_extras_only():
    record = logging.LogRecord("taskapi.tasks", logging.INFO, __file__, 1, "task.create", None, None)
    record.category = "tasks"
    record.event = "task.create"

    payload = json.loads(JsonFormatter().format(record))
    assert payload["msg"] == "task.create"
    assert payload["level"] == "INFO"
    assert payload["category"] == "tasks"
    assert payload["ts"].endswith("Z")
    assert "pathname" not in payload
    assert "lineno" not in payload


def test_setup_logging_writes_jsonl_file(tmp_path):
    log_path = setup_logging("INFO", str(tmp_path / "logs"))
    logging.getLogger("taskapi.test").info("hello", extra={"category": "test", "event": "hello"})
    for handler in logging.getLogger().handlers:
        handler.flush()

    lines = log_path.read_text(encoding="utf-8").splitlines()
    entry = json.loads(lines[-1])
    assert entry["event"] == "hello"
    assert entry["logger"] == "taskapi.test"


def test_format_validation_errors_strips_location_prefix():
    errors = [
        {"loc": ("body", "title"), "msg": "String should have at least 1 character"},
        {"loc": ("query", "sortBy"), "msg": "Input should be 'id'"},
        {"loc": ("body",), "msg": "Field required"},
    ]
    assert format_validation_errors(errors) == (
        "title: String should have at least 1 character; sortBy: Input should be 'id'; Field required"
    )
