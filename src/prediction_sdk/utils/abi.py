"""Narrow ABI helpers for single-address contract calls.

Only what one ``f(address) returns (address)`` call needs: the function
selector, a left-padded address argument and an address return value.

Terminology:
    Word: 32 bytes = 64 hex characters
    Address: 20 bytes = 40 hex characters, right-aligned inside a word
"""

from web3 import Web3

from src.prediction_sdk.config.constants import USDC_DECIMALS
from src.prediction_sdk.core.exceptions import RpcInvalidResultError

ABI_WORD_HEX = 64
ADDRESS_HEX = 40
SELECTOR_LENGTH = 10  # "0x" + 4 bytes


def _strip_0x(value: str) -> str:
    if value[:2] in ("0x", "0X"):
        return value[2:]
    return value


def get_function_selector(function_signature: str) -> str:
    """Return the 4-byte selector for an ABI function signature.

    Args:
        function_signature: Canonical signature, e.g. "computeProxyAddress(address)"

    Returns:
        str: Lowercase selector with 0x prefix (10 characters)
    """
    digest = Web3.to_hex(Web3.keccak(text=function_signature))
    return digest[:SELECTOR_LENGTH]


def encode_address(address: str) -> str:
    """ABI-encode an address as a 32-byte word (no 0x prefix).

    No checksum or length validation is performed; malformed input is
    lower-cased and padded as-is.
    """
    clean_address = _strip_0x(address.lower())
    return clean_address.rjust(ABI_WORD_HEX, "0")


def pad_to_32_bytes(hex_value: str) -> str:
    """Left-pad a hex value to a full 0x-prefixed word."""
    return "0x" + _strip_0x(hex_value).rjust(ABI_WORD_HEX, "0")


def decode_address(hex_result: str) -> str:
    """Decode the last 20 bytes of an eth_call result into an address.

    Args:
        hex_result: Hex-encoded return data, with or without 0x prefix

    Returns:
        str: Lowercase address with 0x prefix

    Raises:
        RpcInvalidResultError: If the result is shorter than an address
    """
    clean_hex = _strip_0x(hex_result)
    if len(clean_hex) < ADDRESS_HEX:
        raise RpcInvalidResultError()
    return "0x" + clean_hex[-ADDRESS_HEX:].lower()


def encode_call_data(function_signature: str, *addresses: str) -> str:
    """Build call data from a selector followed by encoded address arguments."""
    return get_function_selector(function_signature) + "".join(
        encode_address(address) for address in addresses
    )


def format_clob_amount(raw: str | int, decimals: int = USDC_DECIMALS) -> str:
    """Format a raw integer token amount as a decimal string.

    Always keeps at least one fractional digit, so one USDC (6 decimals)
    formats as "1.0".

    Example:
        format_clob_amount("1000000")  # "1.0"
        format_clob_amount("1500000000000000000", 18)  # "1.5"
    """
    value = int(raw)
    sign = "-" if value < 0 else ""
    whole, fraction = divmod(abs(value), 10**decimals)
    fraction_text = str(fraction).rjust(decimals, "0").rstrip("0") if decimals else ""
    return f"{sign}{whole}.{fraction_text or '0'}"
