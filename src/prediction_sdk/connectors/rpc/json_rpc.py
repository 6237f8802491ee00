"""Minimal JSON-RPC over HTTP transport.

Issues a single POST per call. Transport and protocol failures are
normalized into the RpcError hierarchy; nothing is retried.
"""

import json

import requests

from src.prediction_sdk.core.exceptions import (
    RpcNodeError,
    RpcRequestFailedError,
    RpcResponseEmptyError,
)
from src.prediction_sdk.models.rpc import (
    JsonRpcFailure,
    JsonRpcRequest,
    JsonRpcResponse,
    parse_json_rpc_response,
)
from src.prediction_sdk.utils.logger import get_logger

logger = get_logger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}


class JsonRpcClient:
    """JSON-RPC client bound to one endpoint."""

    def __init__(self, rpc_url: str, timeout: float | None = None):
        """Initialize JSON-RPC client.

        Args:
            rpc_url: HTTP(S) JSON-RPC endpoint
            timeout: Request timeout in seconds (None waits indefinitely)
        """
        self.rpc_url = rpc_url
        self.timeout = timeout

    def post(self, rpc_request: JsonRpcRequest) -> JsonRpcResponse:
        """Send a request and return the parsed response.

        The body is compact JSON (no whitespace) with the request fields
        in declaration order.

        Returns:
            JsonRpcSuccess or JsonRpcFailure

        Raises:
            RpcRequestFailedError: If the HTTP call fails or the status is not ok
            RpcResponseEmptyError: If the body is empty or not JSON
            RpcInvalidResultError: If the body has neither result nor error
        """
        body = json.dumps(rpc_request.to_payload(), separators=(",", ":"))

        logger.debug(
            "Sending JSON-RPC request",
            rpc_url=self.rpc_url,
            method=rpc_request.method,
            request_id=rpc_request.id,
        )

        try:
            response = requests.post(
                self.rpc_url,
                data=body,
                headers=JSON_HEADERS,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.warning("JSON-RPC transport error", rpc_url=self.rpc_url, error=str(e))
            raise RpcRequestFailedError() from e

        if not response.ok:
            logger.warning(
                "JSON-RPC request rejected",
                rpc_url=self.rpc_url,
                status_code=response.status_code,
            )
            raise RpcRequestFailedError()

        try:
            payload = response.json()
        except ValueError as e:
            raise RpcResponseEmptyError() from e

        return parse_json_rpc_response(payload)

    def eth_call(self, to: str, data: str, block: str = "latest") -> str:
        """Execute eth_call and return the raw hex result.

        Raises:
            RpcNodeError: If the node answers with an error object
            RpcError: For any transport or decoding failure
        """
        rpc_response = self.post(JsonRpcRequest.eth_call(to=to, data=data, block=block))

        if isinstance(rpc_response, JsonRpcFailure):
            logger.warning(
                "JSON-RPC node returned error",
                rpc_url=self.rpc_url,
                code=rpc_response.error.code,
                message=rpc_response.error.message,
            )
            raise RpcNodeError(rpc_response.error.code, rpc_response.error.message)

        return rpc_response.result


def post_json_rpc(
    rpc_url: str, rpc_request: JsonRpcRequest, timeout: float | None = None
) -> JsonRpcResponse:
    """Send one JSON-RPC request to rpc_url."""
    return JsonRpcClient(rpc_url, timeout=timeout).post(rpc_request)
