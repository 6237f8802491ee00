"""Core enumerations for the prediction SDK."""

from enum import Enum, IntEnum


class ErrorCode(str, Enum):
    """Error-kind identifiers surfaced as exception message prefixes."""

    RPC_REQUEST_FAILED = "RPC_REQUEST_FAILED"
    RPC_RESPONSE_EMPTY = "RPC_RESPONSE_EMPTY"
    RPC_ERROR = "RPC_ERROR"
    RPC_INVALID_RESULT = "RPC_INVALID_RESULT"


class SignatureType(IntEnum):
    """CLOB order signature type.

    Values match the ones expected by the Polymarket order utilities.
    """

    EOA = 0  # Plain externally owned account
    POLY_PROXY = 1  # Email/Magic proxy wallet
    POLY_GNOSIS_SAFE = 2  # Gnosis Safe proxy wallet


class BlockTag(str, Enum):
    """Block tag eth_call reads are made against."""

    LATEST = "latest"
