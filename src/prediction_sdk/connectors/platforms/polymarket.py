"""Polymarket trading facade.

Ties together the CLOB order client (py-clob-client), the Polygon provider
and the Conditional Token Framework contract:

- create and post market orders
- manage the exchange's operator approval
- support both EOA and Gnosis Safe wallets

Example:
    polymarket = PolymarketClient(rpc_url="https://polygon-rpc.com", private_key="0x...")
    polymarket.create_client()
    if not polymarket.is_approved():
        polymarket.approval_all()
    polymarket.post_order(MarketOrderArgs(token_id="...", amount=5.0, side=BUY))
"""

from collections.abc import Callable
from typing import Any

from eth_account import Account
from py_clob_client.client import ClobClient
from py_clob_client.clob_types import ApiCreds, OrderType
from web3 import Web3

from src.prediction_sdk.config.constants import (
    APPROVAL_GAS_LIMIT,
    CLOB_HTTP_URL,
    FALLBACK_GAS_PRICE_GWEI,
    GAS_PRICE_BUFFER_DENOMINATOR,
    GAS_PRICE_BUFFER_NUMERATOR,
    POLYGON_CHAIN_ID,
    POLYMARKET_EXCHANGE_ADDRESS,
)
from src.prediction_sdk.connectors.blockchain.polygon import CTFApprovalContract, PolygonClient
from src.prediction_sdk.core.enums import SignatureType
from src.prediction_sdk.core.exceptions import (
    ApprovalFailedError,
    ClientNotInitializedError,
    ConfigurationError,
)
from src.prediction_sdk.core.interfaces import ApprovalContract, ChainProbe, OrderClient
from src.prediction_sdk.utils.logger import get_logger
from src.prediction_sdk.wallet.safe import is_gnosis_safe

logger = get_logger(__name__)


class ClobOrderClient(OrderClient):
    """OrderClient backed by the official py-clob-client."""

    def __init__(
        self,
        host: str,
        chain_id: int,
        private_key: str,
        creds: ApiCreds | None = None,
        signature_type: SignatureType = SignatureType.EOA,
        funder: str | None = None,
    ):
        self.client = ClobClient(
            host,
            chain_id=chain_id,
            key=private_key,
            creds=creds,
            signature_type=int(signature_type),
            funder=funder,
        )

    def create_market_order(self, order: Any, options: Any = None) -> Any:
        return self.client.create_market_order(order, options)

    def post_order(self, signed_order: Any, order_type: Any) -> Any:
        return self.client.post_order(signed_order, order_type)

    def create_or_derive_api_creds(self) -> ApiCreds:
        return self.client.create_or_derive_api_creds()


# (host, chain_id, private_key, creds, signature_type, funder) -> OrderClient
OrderClientFactory = Callable[
    [str, int, str, ApiCreds | None, SignatureType, str | None], OrderClient
]


class PolymarketClient:
    """Client for trading on Polymarket."""

    def __init__(
        self,
        rpc_url: str,
        private_key: str,
        clob_http_url: str | None = None,
        *,
        chain: ChainProbe | None = None,
        approval_contract: ApprovalContract | None = None,
        order_client_factory: OrderClientFactory | None = None,
        chain_id: int = POLYGON_CHAIN_ID,
    ):
        """Initialize Polymarket client.

        Args:
            rpc_url: Polygon RPC endpoint URL
            private_key: Private key of the trading wallet
            clob_http_url: CLOB API URL (defaults to https://clob.polymarket.com)
            chain: Chain provider (defaults to a PolygonClient for rpc_url)
            approval_contract: CTF binding (defaults to the mainnet CTF contract)
            order_client_factory: Builds CLOB clients (defaults to ClobOrderClient)
            chain_id: CLOB chain id

        Raises:
            ValueError: If the private key is invalid
        """
        self.rpc_url = rpc_url
        self.clob_http_url = clob_http_url or CLOB_HTTP_URL
        self.chain_id = chain_id
        self._private_key = private_key

        try:
            self.wallet_address = Account.from_key(private_key).address
        except Exception as e:
            raise ValueError(f"Invalid private key: {e}") from e

        self.chain = chain or PolygonClient(rpc_url, private_key=private_key)
        self._approval_contract = approval_contract
        self._order_client_factory = order_client_factory or ClobOrderClient

        self.client: OrderClient | None = None
        self.signature_type: SignatureType | None = None

    @property
    def approval_contract(self) -> ApprovalContract:
        """CTF approval binding, created on first use."""
        if self._approval_contract is None:
            if not isinstance(self.chain, PolygonClient):
                raise ConfigurationError(
                    "An approval contract is required when using a custom chain provider"
                )
            self._approval_contract = CTFApprovalContract(self.chain)
        return self._approval_contract

    def create_client(self, funder_address: str | None = None) -> OrderClient:
        """Create the CLOB client with derived API credentials.

        A funder address with deployed code is treated as a Gnosis Safe
        proxy (POLY_GNOSIS_SAFE, funder set); otherwise the wallet signs as
        a plain EOA.

        Args:
            funder_address: Address holding the funds (defaults to the wallet)

        Returns:
            OrderClient: Client authenticated with L2 API credentials
        """
        address = funder_address or self.wallet_address
        is_proxy_safe = is_gnosis_safe(address, self.rpc_url, probe=self.chain)
        signature_type = SignatureType.POLY_GNOSIS_SAFE if is_proxy_safe else SignatureType.EOA
        funder = address if is_proxy_safe else None

        logger.info(
            "Creating CLOB client",
            address=address,
            signature_type=signature_type.name,
            clob_http_url=self.clob_http_url,
        )

        bootstrap_client = self._order_client_factory(
            self.clob_http_url, self.chain_id, self._private_key, None, signature_type, funder
        )
        api_creds = bootstrap_client.create_or_derive_api_creds()

        self.client = self._order_client_factory(
            self.clob_http_url, self.chain_id, self._private_key, api_creds, signature_type, funder
        )
        self.signature_type = signature_type
        return self.client

    def post_order(self, user_market_order: Any, options: Any = None) -> Any:
        """Sign a market order and submit it Fill-or-Kill.

        Args:
            user_market_order: Market order arguments (e.g. MarketOrderArgs)
            options: Partial order creation options (tick size, neg risk)

        Returns:
            Any: CLOB response for the posted order

        Raises:
            ClientNotInitializedError: If create_client() has not been called
        """
        if self.client is None:
            raise ClientNotInitializedError("Call create_client() before posting orders")

        signed_order = self.client.create_market_order(user_market_order, options)
        response = self.client.post_order(signed_order, OrderType.FOK)
        logger.info("Market order posted", order_type=OrderType.FOK)
        return response

    def is_approved(self) -> bool:
        """Check whether the exchange may move the wallet's outcome tokens."""
        return self.approval_contract.is_approved_for_all(
            self.wallet_address, POLYMARKET_EXCHANGE_ADDRESS
        )

    def approval_all(self) -> bool:
        """Approve the exchange to manage all conditional tokens.

        The node's gas price is raised by 50%; 50 gwei is used when the
        node reports none.

        Returns:
            bool: True once the approval is mined and visible on chain

        Raises:
            ApprovalFailedError: If the receipt status is not 1 or the
                approval is still not visible afterwards
        """
        fee_data = self.chain.get_fee_data()
        if fee_data.gas_price:
            gas_price = fee_data.gas_price * GAS_PRICE_BUFFER_NUMERATOR // GAS_PRICE_BUFFER_DENOMINATOR
        else:
            gas_price = Web3.to_wei(FALLBACK_GAS_PRICE_GWEI, "gwei")

        tx_hash = self.approval_contract.set_approval_for_all(
            POLYMARKET_EXCHANGE_ADDRESS,
            True,
            gas_price=gas_price,
            gas_limit=APPROVAL_GAS_LIMIT,
        )
        receipt = self.approval_contract.wait_for_receipt(tx_hash)

        if receipt.get("status") == 1 and self.is_approved():
            logger.info("Exchange approval confirmed", tx_hash=tx_hash)
            return True

        logger.error("Exchange approval failed", tx_hash=tx_hash, status=receipt.get("status"))
        raise ApprovalFailedError()
