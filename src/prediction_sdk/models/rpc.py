"""JSON-RPC request and response models."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from src.prediction_sdk.config.constants import JSON_RPC_REQUEST_ID, JSON_RPC_VERSION
from src.prediction_sdk.core.enums import BlockTag
from src.prediction_sdk.core.exceptions import RpcInvalidResultError, RpcResponseEmptyError


class EthCallObject(BaseModel):
    """Transaction call object for eth_call."""

    model_config = ConfigDict(frozen=True)

    to: str = Field(..., description="Contract address to call")
    data: str = Field(..., description="ABI-encoded call data (0x-prefixed)")


class JsonRpcRequest(BaseModel):
    """eth_call request envelope.

    Field declaration order is the serialization order:
    jsonrpc, method, params, id.
    """

    model_config = ConfigDict(frozen=True)

    jsonrpc: Literal["2.0"] = JSON_RPC_VERSION
    method: Literal["eth_call"] = "eth_call"
    params: tuple[EthCallObject, str]
    id: int = JSON_RPC_REQUEST_ID

    @classmethod
    def eth_call(
        cls,
        to: str,
        data: str,
        block: str = BlockTag.LATEST.value,
        request_id: int = JSON_RPC_REQUEST_ID,
    ) -> "JsonRpcRequest":
        """Build an eth_call request against a block tag."""
        return cls(params=(EthCallObject(to=to, data=data), block), id=request_id)

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON-ready request dict."""
        return self.model_dump(mode="json")


class JsonRpcError(BaseModel):
    """Error object returned by a JSON-RPC node."""

    code: int
    message: str = ""
    data: Any = None


class JsonRpcSuccess(BaseModel):
    """Response carrying a hex result."""

    result: str
    jsonrpc: str | None = None
    id: int | str | None = None


class JsonRpcFailure(BaseModel):
    """Response carrying an error object."""

    error: JsonRpcError
    jsonrpc: str | None = None
    id: int | str | None = None


JsonRpcResponse = JsonRpcSuccess | JsonRpcFailure


def parse_json_rpc_response(payload: Any) -> JsonRpcResponse:
    """Convert a decoded JSON body into a success or failure response.

    An error object takes precedence over a result.

    Raises:
        RpcResponseEmptyError: If the body decoded to nothing
        RpcInvalidResultError: If there is neither a usable result nor an error
    """
    if payload is None:
        raise RpcResponseEmptyError()
    if not isinstance(payload, dict):
        raise RpcInvalidResultError()

    envelope = {key: payload.get(key) for key in ("jsonrpc", "id")}

    result = payload.get("result")
    try:
        if payload.get("error"):
            return JsonRpcFailure(error=payload["error"], **envelope)
        if isinstance(result, str) and result:
            return JsonRpcSuccess(result=result, **envelope)
    except ValidationError as e:
        raise RpcInvalidResultError() from e

    raise RpcInvalidResultError()
