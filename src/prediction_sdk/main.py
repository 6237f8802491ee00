"""Command-line entry point for the prediction SDK."""

import click
from pydantic import ValidationError

from src.prediction_sdk.config.settings import SafeProxyConfig, Settings
from src.prediction_sdk.connectors.blockchain.polygon import PolygonClient
from src.prediction_sdk.connectors.platforms.polymarket import PolymarketClient
from src.prediction_sdk.connectors.rpc.json_rpc import JsonRpcClient
from src.prediction_sdk.core.exceptions import PredictionSDKError
from src.prediction_sdk.utils.logger import configure_logging
from src.prediction_sdk.wallet.safe import get_safe_proxy_address, is_gnosis_safe

# Errors reported as a one-line message instead of a traceback
COMMAND_ERRORS = (PredictionSDKError, ValueError, TimeoutError)


def load_settings(rpc_url: str | None) -> Settings:
    """Load settings, letting --rpc-url override the environment."""
    try:
        if rpc_url:
            return Settings(polygon_rpc_url=rpc_url)
        return Settings()
    except ValidationError as e:
        raise click.ClickException(f"Invalid configuration: {e}") from e


def _polymarket_client(settings: Settings) -> PolymarketClient:
    if not settings.private_key:
        raise click.ClickException("PRIVATE_KEY is required for this command")
    chain = PolygonClient(
        settings.polygon_rpc_url,
        private_key=settings.private_key,
        timeout=settings.request_timeout_seconds,
    )
    return PolymarketClient(
        rpc_url=settings.polygon_rpc_url,
        private_key=settings.private_key,
        clob_http_url=settings.clob_http_url,
        chain=chain,
    )


@click.group()
@click.option("--rpc-url", envvar="POLYGON_RPC_URL", default=None, help="Polygon JSON-RPC URL")
@click.option("--log-level", default=None, help="Logging level (overrides LOG_LEVEL)")
@click.option("--json-logs", is_flag=True, default=False, help="Emit JSON log lines")
@click.pass_context
def cli(ctx: click.Context, rpc_url: str | None, log_level: str | None, json_logs: bool) -> None:
    """Polymarket helpers: Safe proxy lookup and exchange approvals."""
    settings = load_settings(rpc_url)
    configure_logging(log_level or settings.log_level, json_logs or settings.json_logs)
    ctx.obj = settings


@cli.command("proxy-address")
@click.argument("owner")
@click.option("--factory", default=None, help="Safe proxy factory address")
@click.option("--signature", default=None, help="Factory function signature")
@click.pass_obj
def proxy_address(settings: Settings, owner: str, factory: str | None, signature: str | None) -> None:
    """Print the Safe proxy address derived from OWNER."""
    defaults = settings.safe_proxy_config()
    config = SafeProxyConfig(
        safe_proxy_factory_address=factory or defaults.safe_proxy_factory_address,
        function_signature=signature or defaults.function_signature,
    )
    client = JsonRpcClient(settings.polygon_rpc_url, timeout=settings.request_timeout_seconds)
    try:
        address = get_safe_proxy_address(
            settings.polygon_rpc_url, owner, options=config, rpc_client=client
        )
    except COMMAND_ERRORS as e:
        raise click.ClickException(str(e)) from e
    click.echo(address)


@cli.command("is-safe")
@click.argument("address")
@click.pass_obj
def is_safe(settings: Settings, address: str) -> None:
    """Print whether ADDRESS is a contract (Safe) wallet."""
    try:
        probe = PolygonClient(settings.polygon_rpc_url, timeout=settings.request_timeout_seconds)
        result = is_gnosis_safe(address, settings.polygon_rpc_url, probe=probe)
    except COMMAND_ERRORS as e:
        raise click.ClickException(str(e)) from e
    click.echo("true" if result else "false")


@cli.command("check-approval")
@click.pass_obj
def check_approval(settings: Settings) -> None:
    """Print whether the exchange is approved for the wallet's tokens."""
    try:
        client = _polymarket_client(settings)
        approved = client.is_approved()
    except COMMAND_ERRORS as e:
        raise click.ClickException(str(e)) from e
    click.echo("approved" if approved else "not approved")


@cli.command("approve")
@click.pass_obj
def approve(settings: Settings) -> None:
    """Approve the exchange for all of the wallet's conditional tokens."""
    try:
        client = _polymarket_client(settings)
        if client.is_approved():
            click.echo("already approved")
            return
        client.approval_all()
    except COMMAND_ERRORS as e:
        raise click.ClickException(str(e)) from e
    click.echo("approved")


def main() -> None:
    """Console script entry point."""
    cli()


if __name__ == "__main__":
    main()
