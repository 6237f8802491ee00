"""Pytest configuration and shared fixtures."""

from typing import Any

import pytest

from tests.fixtures.rpc import SAMPLE_ETH_CALL_ERROR, SAMPLE_ETH_CALL_RESULT
from tests.fixtures.transactions import TEST_PRIVATE_KEY
from tests.mocks.chain import MockApprovalContract, MockChainProbe
from tests.mocks.clob import MockOrderClientFactory

# ===== Pytest Markers =====


def pytest_configure(config: Any) -> None:
    """Register custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, no external dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests (need POLYGON_RPC_URL)")


# ===== Mock Collaborator Fixtures =====


@pytest.fixture
def mock_chain() -> MockChainProbe:
    """Chain probe where every address is an EOA."""
    return MockChainProbe()


@pytest.fixture
def mock_approval_contract() -> MockApprovalContract:
    """Approval contract that starts unapproved."""
    return MockApprovalContract()


@pytest.fixture
def mock_order_client_factory() -> MockOrderClientFactory:
    """Factory recording the CLOB clients it builds."""
    return MockOrderClientFactory()


# ===== JSON-RPC Fixtures =====


@pytest.fixture
def sample_eth_call_result() -> dict[str, Any]:
    """Successful eth_call response."""
    return SAMPLE_ETH_CALL_RESULT.copy()


@pytest.fixture
def sample_eth_call_error() -> dict[str, Any]:
    """eth_call response carrying a node error."""
    return SAMPLE_ETH_CALL_ERROR.copy()


# ===== Settings Fixtures =====


@pytest.fixture
def test_private_key() -> str:
    """Well-known development private key."""
    return TEST_PRIVATE_KEY


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host environment variables out of Settings."""
    for name in (
        "POLYGON_RPC_URL",
        "RPC_URL",
        "PRIVATE_KEY",
        "CLOB_HTTP_URL",
        "LOG_LEVEL",
        "JSON_LOGS",
        "SAFE_PROXY_FACTORY_ADDRESS",
        "PROXY_FUNCTION_SIGNATURE",
        "REQUEST_TIMEOUT_SECONDS",
        "WALLET_ADDRESS",
    ):
        monkeypatch.delenv(name, raising=False)
