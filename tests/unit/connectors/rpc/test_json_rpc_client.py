"""Unit tests for the JSON-RPC transport."""

from unittest.mock import MagicMock, patch

import pytest
import requests

from src.prediction_sdk.connectors.rpc.json_rpc import JsonRpcClient, post_json_rpc
from src.prediction_sdk.core.exceptions import (
    RpcError,
    RpcInvalidResultError,
    RpcNodeError,
    RpcRequestFailedError,
    RpcResponseEmptyError,
)
from src.prediction_sdk.models.rpc import JsonRpcFailure, JsonRpcRequest, JsonRpcSuccess
from tests.fixtures.rpc import (
    RPC_URL,
    SAMPLE_ETH_CALL_ERROR,
    SAMPLE_ETH_CALL_NO_RESULT,
    SAMPLE_ETH_CALL_RESULT,
)


def make_response(payload=None, ok=True, status_code=200, json_error=None):
    """Build a mock requests.Response."""
    response = MagicMock()
    response.ok = ok
    response.status_code = status_code
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response


@pytest.fixture
def mock_post():
    """Patch requests.post in the transport module."""
    with patch("src.prediction_sdk.connectors.rpc.json_rpc.requests.post") as mock:
        yield mock


@pytest.fixture
def rpc_request():
    """Simple eth_call request."""
    return JsonRpcRequest.eth_call(to="0xfactory", data="0xdeadbeef")


class TestJsonRpcClientPost:
    """Test JsonRpcClient.post."""

    def test_post_sends_json_body_and_header(self, mock_post, rpc_request):
        """Request should be POSTed as JSON with the canonical body."""
        mock_post.return_value = make_response(SAMPLE_ETH_CALL_RESULT)

        JsonRpcClient(RPC_URL).post(rpc_request)

        mock_post.assert_called_once_with(
            RPC_URL,
            data=(
                '{"jsonrpc":"2.0","method":"eth_call",'
                '"params":[{"to":"0xfactory","data":"0xdeadbeef"},"latest"],"id":1}'
            ),
            headers={"Content-Type": "application/json"},
            timeout=None,
        )

    def test_post_passes_timeout(self, mock_post, rpc_request):
        """Configured timeout should reach requests."""
        mock_post.return_value = make_response(SAMPLE_ETH_CALL_RESULT)

        JsonRpcClient(RPC_URL, timeout=5.0).post(rpc_request)

        assert mock_post.call_args.kwargs["timeout"] == 5.0

    def test_post_returns_success(self, mock_post, rpc_request):
        """A result payload should parse into JsonRpcSuccess."""
        mock_post.return_value = make_response(SAMPLE_ETH_CALL_RESULT)

        response = JsonRpcClient(RPC_URL).post(rpc_request)

        assert isinstance(response, JsonRpcSuccess)
        assert response.result == SAMPLE_ETH_CALL_RESULT["result"]

    def test_post_returns_failure(self, mock_post, rpc_request):
        """An error payload should parse into JsonRpcFailure, not raise."""
        mock_post.return_value = make_response(SAMPLE_ETH_CALL_ERROR)

        response = JsonRpcClient(RPC_URL).post(rpc_request)

        assert isinstance(response, JsonRpcFailure)
        assert response.error.code == -32000

    @pytest.mark.parametrize("status_code", [400, 429, 500, 503])
    def test_post_raises_on_http_error(self, mock_post, rpc_request, status_code):
        """Non-ok HTTP status should raise RPC_REQUEST_FAILED."""
        mock_post.return_value = make_response(ok=False, status_code=status_code)

        with pytest.raises(RpcRequestFailedError, match="RPC_REQUEST_FAILED"):
            JsonRpcClient(RPC_URL).post(rpc_request)

    def test_post_raises_on_transport_error(self, mock_post, rpc_request):
        """Connection failures should raise RPC_REQUEST_FAILED."""
        mock_post.side_effect = requests.exceptions.ConnectionError("refused")

        with pytest.raises(RpcRequestFailedError):
            JsonRpcClient(RPC_URL).post(rpc_request)

    def test_post_raises_on_unparsable_body(self, mock_post, rpc_request):
        """Non-JSON body should raise RPC_RESPONSE_EMPTY."""
        mock_post.return_value = make_response(json_error=ValueError("Expecting value"))

        with pytest.raises(RpcResponseEmptyError, match="RPC_RESPONSE_EMPTY"):
            JsonRpcClient(RPC_URL).post(rpc_request)

    def test_post_raises_on_null_body(self, mock_post, rpc_request):
        """A null body should raise RPC_RESPONSE_EMPTY."""
        mock_post.return_value = make_response(None)

        with pytest.raises(RpcResponseEmptyError):
            JsonRpcClient(RPC_URL).post(rpc_request)

    def test_post_raises_on_missing_result(self, mock_post, rpc_request):
        """Neither result nor error should raise RPC_INVALID_RESULT."""
        mock_post.return_value = make_response(SAMPLE_ETH_CALL_NO_RESULT)

        with pytest.raises(RpcInvalidResultError, match="RPC_INVALID_RESULT"):
            JsonRpcClient(RPC_URL).post(rpc_request)

    def test_post_makes_single_attempt(self, mock_post, rpc_request):
        """Failures should not be retried."""
        mock_post.return_value = make_response(ok=False, status_code=502)

        with pytest.raises(RpcRequestFailedError):
            JsonRpcClient(RPC_URL).post(rpc_request)

        assert mock_post.call_count == 1

    def test_post_json_rpc_function(self, mock_post, rpc_request):
        """Module-level helper should behave like the client."""
        mock_post.return_value = make_response(SAMPLE_ETH_CALL_RESULT)

        response = post_json_rpc(RPC_URL, rpc_request)

        assert isinstance(response, JsonRpcSuccess)
        assert mock_post.call_args.args[0] == RPC_URL


class TestJsonRpcClientEthCall:
    """Test JsonRpcClient.eth_call."""

    def test_eth_call_returns_result(self, mock_post):
        """eth_call should return the raw hex result."""
        mock_post.return_value = make_response(SAMPLE_ETH_CALL_RESULT)

        result = JsonRpcClient(RPC_URL).eth_call(to="0xfactory", data="0xdeadbeef")

        assert result == SAMPLE_ETH_CALL_RESULT["result"]

    def test_eth_call_raises_node_error_with_code(self, mock_post):
        """Node errors should raise RPC_ERROR:<code>."""
        mock_post.return_value = make_response(SAMPLE_ETH_CALL_ERROR)

        with pytest.raises(RpcNodeError, match="RPC_ERROR:-32000") as exc_info:
            JsonRpcClient(RPC_URL).eth_call(to="0xfactory", data="0xdeadbeef")

        assert exc_info.value.rpc_code == -32000
        assert exc_info.value.rpc_message == "error"

    def test_eth_call_errors_share_base_class(self, mock_post):
        """All transport failures should be catchable as RpcError."""
        mock_post.return_value = make_response(ok=False, status_code=500)

        with pytest.raises(RpcError):
            JsonRpcClient(RPC_URL).eth_call(to="0xfactory", data="0x")
