"""Tests for log context binding."""

import pytest
import structlog

from evento.core.logging_config import LogContext, configure_logging


@pytest.fixture(autouse=True)
def clean_context():
    structlog.contextvars.clear_contextvars()
    yield
    structlog.contextvars.clear_contextvars()


@pytest.mark.unit
def test_context_bound_in_scope_only():
    with LogContext(template_id="tpl_1"):
        assert structlog.contextvars.get_contextvars() == {"template_id": "tpl_1"}
    assert structlog.contextvars.get_contextvars() == {}


@pytest.mark.unit
def test_nested_context_restores_outer_value():
    with LogContext(request_id="req_outer"):
        with LogContext(request_id="req_inner", instance_id="inst_1"):
            assert structlog.contextvars.get_contextvars()["request_id"] == "req_inner"
        assert structlog.contextvars.get_contextvars() == {"request_id": "req_outer"}


@pytest.mark.unit
@pytest.mark.parametrize("json_logs", [True, False])
def test_configure_logging(json_logs):
    configure_logging("DEBUG", json_logs=json_logs)
    structlog.get_logger("test").debug("configured")
