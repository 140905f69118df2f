"""
Pytest configuration and fixtures for payment processing tests.
"""

from typing import List

import pytest

from payment_processing.config import get_settings
from payment_processing.logging_config import setup_logging

STRIPE_KEY = "sk_test_123456"
PAYPAL_KEY = "12345678901234567890123456789012"


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Drop cached settings and keep ambient PAYMENTS_* variables out."""
    for name in (
        "PAYMENTS_STRIPE_API_KEY",
        "PAYMENTS_PAYPAL_API_KEY",
        "PAYMENTS_LOG_LEVEL",
        "PAYMENTS_JSON_LOGS",
        "PAYMENTS_APP_ENV",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    setup_logging(level="DEBUG", json_logs=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def output() -> List[str]:
    """Collects user-facing lines; pass ``output.append`` as the sink."""
    return []


@pytest.fixture
def stripe_key() -> str:
    return STRIPE_KEY


@pytest.fixture
def paypal_key() -> str:
    return PAYPAL_KEY
