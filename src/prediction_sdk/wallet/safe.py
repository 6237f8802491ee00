"""Gnosis Safe proxy wallet helpers.

Polymarket users who sign up through the web app trade from a Safe proxy
whose address is a deterministic function of the owner EOA. The factory
exposes that derivation as a view, which is queried here with a raw
eth_call rather than through a contract binding.
"""

from collections.abc import Mapping
from typing import Any

from src.prediction_sdk.config.constants import EMPTY_CODE
from src.prediction_sdk.config.settings import SafeProxyConfig
from src.prediction_sdk.connectors.blockchain.polygon import PolygonClient
from src.prediction_sdk.connectors.rpc.json_rpc import JsonRpcClient
from src.prediction_sdk.core.enums import BlockTag
from src.prediction_sdk.core.interfaces import ChainProbe
from src.prediction_sdk.utils.abi import decode_address, encode_call_data
from src.prediction_sdk.utils.logger import get_logger

logger = get_logger(__name__)


def _resolve_config(options: SafeProxyConfig | Mapping[str, Any] | None) -> SafeProxyConfig:
    if options is None:
        return SafeProxyConfig()
    if isinstance(options, SafeProxyConfig):
        return options
    return SafeProxyConfig(**options)


def get_safe_proxy_address(
    rpc_url: str,
    owner_address: str,
    options: SafeProxyConfig | Mapping[str, Any] | None = None,
    rpc_client: JsonRpcClient | None = None,
) -> str:
    """Compute the Safe proxy address owned by owner_address.

    Args:
        rpc_url: Polygon JSON-RPC endpoint
        owner_address: Owner EOA (any case, with or without 0x)
        options: Factory address / function signature overrides
        rpc_client: Client to use instead of a fresh one for rpc_url

    Returns:
        str: Lowercase proxy address with 0x prefix

    Raises:
        RpcRequestFailedError: HTTP failure
        RpcResponseEmptyError: Empty or non-JSON body
        RpcNodeError: Node returned an error object (message "RPC_ERROR:<code>")
        RpcInvalidResultError: Missing or malformed result
    """
    config = _resolve_config(options)
    client = rpc_client or JsonRpcClient(rpc_url)

    data = encode_call_data(config.function_signature, owner_address)

    hex_result = client.eth_call(
        to=config.safe_proxy_factory_address,
        data=data,
        block=BlockTag.LATEST.value,
    )
    proxy_address = decode_address(hex_result)

    logger.debug(
        "Derived Safe proxy address",
        owner=owner_address,
        factory=config.safe_proxy_factory_address,
        proxy=proxy_address,
    )
    return proxy_address


def is_gnosis_safe(address: str, rpc_url: str, probe: ChainProbe | None = None) -> bool:
    """Return True if address has deployed bytecode.

    On Polymarket a contract wallet is a Safe proxy, which needs the
    POLY_GNOSIS_SAFE signature type instead of EOA.

    Args:
        address: Address to inspect
        rpc_url: Polygon JSON-RPC endpoint
        probe: Chain provider to use instead of a PolygonClient for rpc_url
    """
    if probe is None:
        probe = PolygonClient(rpc_url)

    return probe.get_code(address) != EMPTY_CODE
