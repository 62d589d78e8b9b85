"""Test configuration and fixtures."""

import os

os.environ.setdefault("ENVIRONMENT", "test")

import pytest

from core.dependencies import clear_settings
from core.settings import Settings
from factories import (
    RECIPIENT_HEX,
    USDC_CONTRACT_HEX,
    USDT_CONTRACT_HEX,
    text_address,
)
from payments.models import ExpectedPayment, TokenKind
from payments.tokens import TokenRegistry
from payments.verifier import TransactionVerifier


@pytest.fixture(autouse=True)
def setup_test_environment():
    """Setup test environment variables before each test."""
    # Store original env vars
    original_env = dict(os.environ)

    os.environ.update(
        {
            "ENVIRONMENT": "test",
            "USDT_CONTRACT_ADDRESS": USDT_CONTRACT_HEX,
            "USDC_CONTRACT_ADDRESS": USDC_CONTRACT_HEX,
        }
    )
    clear_settings()

    yield

    # Restore original env vars
    os.environ.clear()
    os.environ.update(original_env)
    clear_settings()


@pytest.fixture
def mock_settings():
    return Settings(
        USDT_CONTRACT_ADDRESS=USDT_CONTRACT_HEX,
        USDC_CONTRACT_ADDRESS=USDC_CONTRACT_HEX,
        ENVIRONMENT="test",
    )


@pytest.fixture
def registry():
    return TokenRegistry(
        {USDT_CONTRACT_HEX: TokenKind.USDT, USDC_CONTRACT_HEX: TokenKind.USDC}
    )


@pytest.fixture
def verifier(registry):
    return TransactionVerifier(registry)


@pytest.fixture
def expected_trx():
    return ExpectedPayment(
        destination_address=text_address(RECIPIENT_HEX),
        amount="1500000",
        token_kind=TokenKind.TRX,
    )


@pytest.fixture
def expected_usdt():
    return ExpectedPayment(
        destination_address=text_address(RECIPIENT_HEX),
        amount="25000000",
        token_kind=TokenKind.USDT,
        contract_address=USDT_CONTRACT_HEX,
    )


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
    config.addinivalue_line("markers", "slow: marks tests as slow running")
