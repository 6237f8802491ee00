"""Capability interfaces for the vendor services the SDK delegates to."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class FeeData:
    """Gas pricing reported by the chain provider."""

    gas_price: int | None = None  # wei


class ChainProbe(ABC):
    """Interface for read-only chain queries."""

    @abstractmethod
    def get_code(self, address: str) -> str:
        """Get deployed bytecode at an address.

        Args:
            address: Ethereum address

        Returns:
            str: 0x-prefixed bytecode, "0x" when the account has none

        Raises:
            BlockchainConnectionError: If the provider call fails
        """
        pass

    @abstractmethod
    def get_fee_data(self) -> FeeData:
        """Get current gas pricing.

        Returns:
            FeeData: gas_price in wei, or None when unavailable

        Raises:
            BlockchainConnectionError: If the provider call fails
        """
        pass


class ApprovalContract(ABC):
    """Interface for the ERC-1155 operator approval used before trading."""

    @abstractmethod
    def is_approved_for_all(self, owner: str, operator: str) -> bool:
        """Check whether operator may move all of owner's tokens."""
        pass

    @abstractmethod
    def set_approval_for_all(
        self,
        operator: str,
        approved: bool,
        gas_price: int,
        gas_limit: int,
    ) -> str:
        """Sign and send setApprovalForAll.

        Returns:
            str: Transaction hash

        Raises:
            TransactionFailedError: If the transaction cannot be sent
        """
        pass

    @abstractmethod
    def wait_for_receipt(self, tx_hash: str) -> dict[str, Any]:
        """Wait for a transaction to be mined.

        Returns:
            Dict[str, Any]: Receipt; "status" is 1 on success
        """
        pass


class OrderClient(ABC):
    """Interface for the CLOB order client."""

    @abstractmethod
    def create_market_order(self, order: Any, options: Any = None) -> Any:
        """Build and sign a market order."""
        pass

    @abstractmethod
    def post_order(self, signed_order: Any, order_type: Any) -> Any:
        """Submit a signed order to the order book."""
        pass

    @abstractmethod
    def create_or_derive_api_creds(self) -> Any:
        """Create L2 API credentials, or derive the existing ones."""
        pass
