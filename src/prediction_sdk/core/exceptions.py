"""Core exceptions for the prediction SDK."""

from src.prediction_sdk.core.enums import ErrorCode


class PredictionSDKError(Exception):
    """Base exception for all SDK errors."""

    pass


class ConfigurationError(PredictionSDKError):
    """Raised when configuration is invalid."""

    pass


class BlockchainConnectionError(PredictionSDKError):
    """Raised when the chain provider cannot be reached or a call fails."""

    pass


class ClientNotInitializedError(PredictionSDKError):
    """Raised when the CLOB client is used before create_client()."""

    pass


class ApprovalFailedError(PredictionSDKError):
    """Raised when the exchange approval transaction does not take effect."""

    def __init__(self, message: str = "Approval failed"):
        super().__init__(message)


class RpcError(PredictionSDKError):
    """Base class for JSON-RPC failures.

    The message always starts with the error-kind identifier so callers
    can match on the prefix.
    """

    code: ErrorCode

    def __init__(self, message: str | None = None):
        super().__init__(message or self.code.value)


class RpcRequestFailedError(RpcError):
    """Raised on a transport-level HTTP failure (non-ok status)."""

    code = ErrorCode.RPC_REQUEST_FAILED


class RpcResponseEmptyError(RpcError):
    """Raised when the response body is missing or not parsable as JSON."""

    code = ErrorCode.RPC_RESPONSE_EMPTY


class RpcInvalidResultError(RpcError):
    """Raised when a response has neither a usable result nor an error."""

    code = ErrorCode.RPC_INVALID_RESULT


class RpcNodeError(RpcError):
    """Raised when the node returns a JSON-RPC error object."""

    code = ErrorCode.RPC_ERROR

    def __init__(self, rpc_code: int, rpc_message: str = ""):
        self.rpc_code = rpc_code
        self.rpc_message = rpc_message
        super().__init__(f"{ErrorCode.RPC_ERROR.value}:{rpc_code}")


class TransactionFailedError(PredictionSDKError):
    """Raised when a transaction cannot be built, signed or sent."""

    pass
