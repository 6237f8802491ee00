"""Tests for custom exceptions."""

import pytest

from src.prediction_sdk.core.enums import ErrorCode
from src.prediction_sdk.core.exceptions import (
    ApprovalFailedError,
    BlockchainConnectionError,
    ClientNotInitializedError,
    ConfigurationError,
    PredictionSDKError,
    RpcError,
    RpcInvalidResultError,
    RpcNodeError,
    RpcRequestFailedError,
    RpcResponseEmptyError,
    TransactionFailedError,
)


class TestBaseException:
    """Test base exception class."""

    def test_base_exception_message(self):
        """Should preserve error message."""
        with pytest.raises(PredictionSDKError, match="Custom error message"):
            raise PredictionSDKError("Custom error message")

    @pytest.mark.parametrize(
        "exc_class",
        [
            ConfigurationError,
            BlockchainConnectionError,
            ClientNotInitializedError,
            ApprovalFailedError,
            TransactionFailedError,
            RpcError,
        ],
    )
    def test_subclasses_share_base(self, exc_class):
        """All SDK errors should be catchable as PredictionSDKError."""
        assert issubclass(exc_class, PredictionSDKError)


class TestApprovalFailedError:
    """Test approval failure message."""

    def test_default_message(self):
        assert str(ApprovalFailedError()) == "Approval failed"


class TestRpcErrors:
    """Test JSON-RPC error kinds."""

    @pytest.mark.parametrize(
        "exc_class,code",
        [
            (RpcRequestFailedError, ErrorCode.RPC_REQUEST_FAILED),
            (RpcResponseEmptyError, ErrorCode.RPC_RESPONSE_EMPTY),
            (RpcInvalidResultError, ErrorCode.RPC_INVALID_RESULT),
        ],
    )
    def test_default_message_is_code(self, exc_class, code):
        """Message should default to the error kind."""
        error = exc_class()

        assert isinstance(error, RpcError)
        assert error.code == code
        assert str(error) == code.value

    def test_custom_message(self):
        assert str(RpcRequestFailedError("RPC_REQUEST_FAILED: 503")) == "RPC_REQUEST_FAILED: 503"

    def test_node_error_carries_code(self):
        """Node errors should render as RPC_ERROR:<code>."""
        error = RpcNodeError(-32000, "execution reverted")

        assert str(error) == "RPC_ERROR:-32000"
        assert error.rpc_code == -32000
        assert error.rpc_message == "execution reverted"
        assert error.code == ErrorCode.RPC_ERROR
