"""Polygon chain connector using Web3.py."""

from typing import Any

from web3 import Web3
from web3.exceptions import TimeExhausted, Web3Exception

from src.prediction_sdk.config.constants import (
    CTF_ABI,
    CTF_CONTRACT_ADDRESS,
    EMPTY_CODE,
    POLYGON_CHAIN_ID,
    TRANSACTION_TIMEOUT_SECONDS,
)
from src.prediction_sdk.core.exceptions import (
    BlockchainConnectionError,
    ConfigurationError,
    TransactionFailedError,
)
from src.prediction_sdk.core.interfaces import ApprovalContract, ChainProbe, FeeData
from src.prediction_sdk.utils.logger import get_logger

logger = get_logger(__name__)


class PolygonClient(ChainProbe):
    """Polygon provider wrapper implementing ChainProbe.

    The chain id is fixed rather than probed from the node.
    """

    def __init__(
        self,
        rpc_url: str,
        private_key: str | None = None,
        timeout: float | None = None,
        chain_id: int = POLYGON_CHAIN_ID,
    ):
        """Initialize Polygon client.

        Args:
            rpc_url: Polygon RPC endpoint URL
            private_key: Key for signing transactions (read-only client if None)
            timeout: HTTP timeout in seconds
            chain_id: Chain id used when building transactions

        Raises:
            BlockchainConnectionError: If the provider cannot be created
            ValueError: If the private key is invalid
        """
        self.rpc_url = rpc_url
        self.chain_id = chain_id

        request_kwargs = {"timeout": timeout} if timeout else None
        try:
            self.w3 = Web3(Web3.HTTPProvider(rpc_url, request_kwargs=request_kwargs))
        except Exception as e:
            raise BlockchainConnectionError(f"Failed to initialize Web3: {e}") from e

        self.account = None
        if private_key:
            try:
                self.account = self.w3.eth.account.from_key(private_key)
            except Exception as e:
                raise ValueError(f"Invalid private key: {e}") from e

    @property
    def wallet_address(self) -> str:
        """Checksummed address of the signing account."""
        if self.account is None:
            raise ConfigurationError("PolygonClient was created without a private key")
        return self.account.address

    def get_code(self, address: str) -> str:
        """Get deployed bytecode at address as a 0x-prefixed hex string.

        Raises:
            BlockchainConnectionError: If the call fails
        """
        try:
            code = self.w3.eth.get_code(Web3.to_checksum_address(address))
        except (Web3Exception, ConnectionError, TimeoutError) as e:
            raise BlockchainConnectionError(f"Failed to get code for {address}: {e}") from e

        if isinstance(code, str):
            return code if code.startswith("0x") else "0x" + code
        if not code:
            return EMPTY_CODE
        return "0x" + bytes(code).hex()

    def get_fee_data(self) -> FeeData:
        """Get the node's current gas price.

        Raises:
            BlockchainConnectionError: If the call fails
        """
        try:
            gas_price = self.w3.eth.gas_price
        except (Web3Exception, ConnectionError, TimeoutError) as e:
            raise BlockchainConnectionError(f"Failed to get gas price: {e}") from e

        return FeeData(gas_price=int(gas_price) if gas_price else None)

    def get_nonce(self, address: str) -> int:
        """Get the pending nonce for address."""
        try:
            return self.w3.eth.get_transaction_count(address, "pending")
        except (Web3Exception, ConnectionError, TimeoutError) as e:
            raise BlockchainConnectionError(f"Failed to get nonce: {e}") from e

    def send_transaction(self, tx: dict[str, Any]) -> str:
        """Sign and broadcast a built transaction.

        Args:
            tx: Transaction dict (as returned by build_transaction)

        Returns:
            str: Transaction hash (hex string with 0x prefix)

        Raises:
            TransactionFailedError: If signing or broadcasting fails
            BlockchainConnectionError: If the node cannot be reached
        """
        if self.account is None:
            raise ConfigurationError("PolygonClient was created without a private key")

        try:
            signed_tx = self.account.sign_transaction(tx)
            tx_hash = self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)
        except (ConnectionError, TimeoutError) as e:
            raise BlockchainConnectionError(f"Failed to send transaction: {e}") from e
        except (ValueError, Web3Exception) as e:
            raise TransactionFailedError(f"Transaction failed: {e}") from e

        if isinstance(tx_hash, bytes):
            return "0x" + tx_hash.hex().removeprefix("0x")
        return tx_hash

    def wait_for_transaction_receipt(
        self,
        tx_hash: str,
        timeout: int = TRANSACTION_TIMEOUT_SECONDS,
    ) -> dict[str, Any]:
        """Wait for a transaction to be mined.

        The receipt is returned whatever its status; callers decide what a
        reverted transaction means.

        Raises:
            TimeoutError: If the transaction is not mined within timeout
            BlockchainConnectionError: If the node cannot be reached
        """
        try:
            receipt = self.w3.eth.wait_for_transaction_receipt(tx_hash, timeout=timeout)
        except TimeExhausted as e:
            raise TimeoutError(f"Transaction {tx_hash} not confirmed within {timeout}s") from e
        except (Web3Exception, ConnectionError) as e:
            raise BlockchainConnectionError(f"Failed to get transaction receipt: {e}") from e

        return dict(receipt) if not isinstance(receipt, dict) else receipt


class CTFApprovalContract(ApprovalContract):
    """Conditional Token Framework binding for operator approvals."""

    def __init__(self, client: PolygonClient, contract_address: str = CTF_CONTRACT_ADDRESS):
        """Initialize the binding.

        Args:
            client: Connected Polygon client (needs a private key to approve)
            contract_address: CTF contract address
        """
        self.client = client
        self.contract_address = contract_address
        self.contract = client.w3.eth.contract(
            address=Web3.to_checksum_address(contract_address), abi=CTF_ABI
        )

    def is_approved_for_all(self, owner: str, operator: str) -> bool:
        """Check whether operator may move all of owner's outcome tokens.

        Raises:
            BlockchainConnectionError: If the call fails
        """
        try:
            return bool(
                self.contract.functions.isApprovedForAll(
                    Web3.to_checksum_address(owner),
                    Web3.to_checksum_address(operator),
                ).call()
            )
        except (Web3Exception, ConnectionError, TimeoutError) as e:
            raise BlockchainConnectionError(f"Failed to read approval state: {e}") from e

    def set_approval_for_all(
        self,
        operator: str,
        approved: bool,
        gas_price: int,
        gas_limit: int,
    ) -> str:
        """Send setApprovalForAll with a fixed gas price and limit.

        Returns:
            str: Transaction hash
        """
        sender = self.client.wallet_address
        try:
            tx = self.contract.functions.setApprovalForAll(
                Web3.to_checksum_address(operator), approved
            ).build_transaction(
                {
                    "from": sender,
                    "nonce": self.client.get_nonce(sender),
                    "chainId": self.client.chain_id,
                    "gas": gas_limit,
                    "gasPrice": gas_price,
                }
            )
        except Web3Exception as e:
            raise TransactionFailedError(f"Failed to build approval transaction: {e}") from e

        tx_hash = self.client.send_transaction(tx)
        logger.info(
            "Approval transaction sent",
            operator=operator,
            approved=approved,
            gas_price=gas_price,
            tx_hash=tx_hash,
        )
        return tx_hash

    def wait_for_receipt(self, tx_hash: str) -> dict[str, Any]:
        """Wait for the approval transaction receipt."""
        return self.client.wait_for_transaction_receipt(tx_hash)
