import json
import logging

import structlog
from structlog.processors import JSONRenderer

from core.config import KibanaSettings
from core.logging_config import CLIENT_LOGGERS, configure_logging, get_renderer, redact_secrets


def test_redact_secrets_masks_top_level_and_headers():
    event = redact_secrets(None, "info", {
        "event": "kibana.http",
        "password": "changeme",
        "headers": {"Authorization": "ApiKey abc", "X-Team": "ops"},
    })
    assert event["password"] == "[redacted]"
    assert event["headers"] == {"Authorization": "[redacted]", "X-Team": "ops"}
    assert event["event"] == "kibana.http"


def test_json_renderer_keeps_unicode():
    renderer = get_renderer(log_json=True)
    assert isinstance(renderer, JSONRenderer)
    assert json.loads(renderer(None, "info", {"event": "空间"}))["event"] == "空间"


def test_configure_logging_leaves_root_alone(capsys):
    root_handlers = list(logging.getLogger().handlers)
    try:
        configure_logging(KibanaSettings(log_json=True, log_level="DEBUG"))
        for name in CLIENT_LOGGERS:
            lib_logger = logging.getLogger(name)
            assert lib_logger.level == logging.DEBUG
            assert lib_logger.propagate is False
        assert logging.getLogger().handlers == root_handlers

        structlog.get_logger("kibana.test").info("kibana.call", endpoint="spaces.get", api_key="k")
        line = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
        assert line["event"] == "kibana.call"
        assert line["logger"] == "kibana.test"
        assert line["api_key"] == "[redacted]"
    finally:
        for name in CLIENT_LOGGERS:
            lib_logger = logging.getLogger(name)
            lib_logger.handlers.clear()
            lib_logger.propagate = True
            lib_logger.setLevel(logging.NOTSET)
        structlog.reset_defaults()
