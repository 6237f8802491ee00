"""Constants for the Polymarket integration on Polygon."""

from web3 import Web3

# Polygon PoS mainnet
POLYGON_CHAIN_ID = 137

# Polymarket CLOB (central limit order book) API
CLOB_HTTP_URL = "https://clob.polymarket.com"

# Contract Addresses (Polygon mainnet)
POLYMARKET_EXCHANGE_ADDRESS = "0x4bFb41d5B3570DeFd03C39a9A4D8dE6Bd8B8982E"  # CTF Exchange
CTF_CONTRACT_ADDRESS = "0x4D97DCd97eC945f40cF65F87097ACe5EA0476045"  # Conditional Tokens
USDC_CONTRACT_ADDRESS = "0x3c499c542cEF5E3811e1192ce70d8cC03d5c3359"
SAFE_PROXY_FACTORY_ADDRESS = "0xaacFeEa03eb1561C4e67d661e40682Bd20E3541b"

# Factory view used to derive a Safe proxy from its owner
COMPUTE_PROXY_ADDRESS_FUNCTION_SIGNATURE = "computeProxyAddress(address)"

# JSON-RPC
JSON_RPC_VERSION = "2.0"
JSON_RPC_REQUEST_ID = 1
EMPTY_CODE = "0x"  # eth_getCode result for an account without bytecode

# Gas Configuration (approval transaction)
APPROVAL_GAS_LIMIT = 100_000
FALLBACK_GAS_PRICE_GWEI = 50  # Used when the node reports no gas price
GAS_PRICE_BUFFER_NUMERATOR = 150  # gas_price * 150 / 100 = +50%
GAS_PRICE_BUFFER_DENOMINATOR = 100
TRANSACTION_TIMEOUT_SECONDS = 120

# Token decimals
USDC_DECIMALS = 6

# Conditional Token Framework ABI (approval subset)
CTF_ABI = [
    {
        "inputs": [
            {"name": "operator", "type": "address"},
            {"name": "approved", "type": "bool"},
        ],
        "name": "setApprovalForAll",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
    {
        "inputs": [
            {"name": "account", "type": "address"},
            {"name": "operator", "type": "address"},
        ],
        "name": "isApprovedForAll",
        "outputs": [{"name": "", "type": "bool"}],
        "stateMutability": "view",
        "type": "function",
    },
]

# ============================================================
# Address Validation (Runtime checks at module import)
# ============================================================

_ADDRESSES_TO_VALIDATE = {
    "POLYMARKET_EXCHANGE_ADDRESS": POLYMARKET_EXCHANGE_ADDRESS,
    "CTF_CONTRACT_ADDRESS": CTF_CONTRACT_ADDRESS,
    "USDC_CONTRACT_ADDRESS": USDC_CONTRACT_ADDRESS,
    "SAFE_PROXY_FACTORY_ADDRESS": SAFE_PROXY_FACTORY_ADDRESS,
}

for _name, _address in _ADDRESSES_TO_VALIDATE.items():
    try:
        if not Web3.is_checksum_address(_address):
            raise ValueError(
                f"{_name} address '{_address}' is not properly checksummed. "
                f"Expected: {Web3.to_checksum_address(_address)}"
            )
    except Exception as e:
        raise ValueError(f"Invalid address for {_name}: {_address}") from e

# Clean up namespace
del _name, _address, _ADDRESSES_TO_VALIDATE
