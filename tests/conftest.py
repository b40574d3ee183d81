from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
import structlog

from greeter.application import Extensions, InvocationContext
from greeter.config import Settings

FUNCTION_ARN = "arn:aws:lambda:us-east-1:123456789012:function:greeter"


@pytest.fixture(autouse=True)
def clear_log_context():
    yield
    structlog.contextvars.clear_contextvars()


@pytest.fixture
def test_settings() -> Settings:
    return Settings(default_alias="default", timeout_margin_ms=500)


@pytest.fixture
def mock_logger() -> MagicMock:
    return MagicMock()


@pytest.fixture
def extensions(mock_logger, test_settings) -> Extensions:
    return Extensions(logger=mock_logger, config=test_settings)


@pytest.fixture
def invocation_context() -> InvocationContext:
    return InvocationContext(alias="dev", request_id="req-123", function_name="greeter")


@pytest.fixture
def callback() -> MagicMock:
    return MagicMock()


def _make_lambda_context(
    alias: str | None = "dev",
    request_id: str = "req-123",
    remaining_ms: int = 3000,
) -> SimpleNamespace:
    """Stand-in for the runtime's LambdaContext object."""
    arn = f"{FUNCTION_ARN}:{alias}" if alias else FUNCTION_ARN
    return SimpleNamespace(
        invoked_function_arn=arn,
        aws_request_id=request_id,
        function_name="greeter",
        get_remaining_time_in_millis=lambda: remaining_ms,
    )


@pytest.fixture
def lambda_context() -> SimpleNamespace:
    return _make_lambda_context()


@pytest.fixture
def make_lambda_context():
    return _make_lambda_context
