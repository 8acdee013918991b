import json
import logging
import warnings

from django.conf import settings
from django.utils.module_loading import import_string


def _json_formatter():
    spec = settings.LOGGING["formatters"]["json"]
    with warnings.catch_warnings():
        warnings.simplefilter("error", DeprecationWarning)
        formatter_class = import_string(spec["()"])
        return formatter_class(fmt=spec["format"])


def test_json_formatter_loads_without_deprecation():
    assert settings.LOGGING["formatters"]["json"]["()"] == "pythonjsonlogger.json.JsonFormatter"
    _json_formatter()


def test_json_formatter_carries_request_id():
    record = logging.LogRecord("orders", logging.INFO, __file__, 1, "Created cart %s", ("12",), None)
    record.request_id = "req-1"
    payload = json.loads(_json_formatter().format(record))
    assert payload["message"] == "Created cart 12"
    assert payload["request_id"] == "req-1"
    assert payload["levelname"] == "INFO"
