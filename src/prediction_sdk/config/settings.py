"""Settings configuration for the prediction SDK."""

from dotenv import load_dotenv
from eth_account import Account
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.prediction_sdk.config.constants import (
    CLOB_HTTP_URL,
    COMPUTE_PROXY_ADDRESS_FUNCTION_SIGNATURE,
    SAFE_PROXY_FACTORY_ADDRESS,
)

# Load environment variables from .env file
load_dotenv()


def _validate_address_format(v: str) -> str:
    if not v.startswith("0x") or len(v) != 42:
        raise ValueError(f"Invalid Ethereum address format: {v}")
    try:
        int(v, 16)
    except ValueError as e:
        raise ValueError(f"Address must be hexadecimal: {v}") from e
    return v


class SafeProxyConfig(BaseModel):
    """Inputs for Safe proxy address derivation.

    Defaults target Polymarket's Safe proxy factory on Polygon. Empty values
    fall back to the defaults.
    """

    model_config = ConfigDict(frozen=True)

    safe_proxy_factory_address: str = Field(
        default=SAFE_PROXY_FACTORY_ADDRESS,
        description="Factory contract exposing the proxy derivation view",
    )
    function_signature: str = Field(
        default=COMPUTE_PROXY_ADDRESS_FUNCTION_SIGNATURE,
        description="Factory function taking the owner address",
    )

    @field_validator("safe_proxy_factory_address", mode="before")
    @classmethod
    def default_factory(cls, v: str | None) -> str:
        """Fall back to the default factory on empty input."""
        return v or SAFE_PROXY_FACTORY_ADDRESS

    @field_validator("function_signature", mode="before")
    @classmethod
    def default_signature(cls, v: str | None) -> str:
        """Fall back to the default signature on empty input."""
        return v or COMPUTE_PROXY_ADDRESS_FUNCTION_SIGNATURE


class Settings(BaseSettings):
    """SDK settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Blockchain Configuration
    polygon_rpc_url: str = Field(
        ...,
        validation_alias=AliasChoices("polygon_rpc_url", "rpc_url"),
        description="Polygon JSON-RPC endpoint URL",
    )
    clob_http_url: str = Field(default=CLOB_HTTP_URL, description="Polymarket CLOB API URL")
    request_timeout_seconds: float | None = Field(
        default=None, gt=0, description="HTTP timeout for RPC calls (None = no timeout)"
    )

    # Wallet Configuration
    private_key: str | None = Field(
        default=None,
        description="Private key for signing (64 hex chars, with or without 0x prefix)",
    )
    wallet_address: str | None = Field(None, description="Wallet address (derived from private key)")

    # Safe proxy derivation
    safe_proxy_factory_address: str = Field(default=SAFE_PROXY_FACTORY_ADDRESS)
    proxy_function_signature: str = Field(default=COMPUTE_PROXY_ADDRESS_FUNCTION_SIGNATURE)

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    json_logs: bool = Field(default=False, description="Emit JSON log lines")

    @field_validator("polygon_rpc_url", "clob_http_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate URL format."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("URL must start with http:// or https://")
        return v

    @field_validator("private_key", mode="before")
    @classmethod
    def normalize_private_key(cls, v: str | None) -> str | None:
        """Accept keys with or without 0x and validate the hex payload."""
        if v is None or v == "":
            return None
        if not v.startswith("0x"):
            v = "0x" + v
        if len(v) != 66:
            raise ValueError("Private key must be 64 hex characters")
        try:
            int(v, 16)
        except ValueError as e:
            raise ValueError("Private key must be a valid hexadecimal string") from e
        return v

    @field_validator("safe_proxy_factory_address")
    @classmethod
    def validate_factory_address(cls, v: str) -> str:
        """Validate factory address format."""
        return _validate_address_format(v)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v_upper

    @model_validator(mode="after")
    def derive_wallet_address(self) -> "Settings":
        """Derive the wallet address from the private key when one is set."""
        if self.private_key and not self.wallet_address:
            try:
                self.wallet_address = Account.from_key(self.private_key).address
            except Exception as e:
                raise ValueError(f"Failed to derive wallet address from private key: {e}") from e
        return self

    def safe_proxy_config(self) -> SafeProxyConfig:
        """Return the proxy derivation config described by these settings."""
        return SafeProxyConfig(
            safe_proxy_factory_address=self.safe_proxy_factory_address,
            function_signature=self.proxy_function_signature,
        )
