"""Command-line interface for Extractly."""

from __future__ import annotations

import asyncio
import json
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

import click
import structlog
from rich.console import Console
from rich.panel import Panel

from extractly import __version__
from extractly.auth import AuthenticationError, InvalidExpiryError, JWTManager, parse_expires_in
from extractly.config import DEFAULT_SECRET_KEY, Config, MonitoringConfig, load_config
from extractly.errors import ExtractlyError
from extractly.fetcher import HtmlFetcher
from extractly.observability import configure_logging
from extractly.service import ExtractionService

console = Console()
logger = structlog.get_logger(__name__)


def _load(ctx: click.Context) -> Config:
    config: Config = ctx.obj.get("config") or load_config(ctx.obj["config_path"])
    ctx.obj["config"] = config
    return config


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "-c", type=click.Path(exists=True), help="Configuration file path")
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    help="Logging level (defaults to config)",
)
@click.pass_context
def cli(ctx: click.Context, config: Optional[str], log_level: Optional[str]) -> None:
    """Extractly - rule-based article extraction API."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = Path(config) if config else None
    ctx.obj["log_level"] = log_level


@cli.command()
@click.option("--host", default=None, help="Host to bind to (defaults to config)")
@click.option("--port", default=None, type=int, help="Port to bind to (defaults to config)")
@click.option("--reload", is_flag=True, help="Reload on code changes")
@click.pass_context
def serve(ctx: click.Context, host: Optional[str], port: Optional[int], reload: bool) -> None:
    """Start the extraction API server."""
    from extractly.web.main import run_web_server

    config = _load(ctx)
    if host:
        config.web.host = host
    if port:
        config.web.port = port
    level = ctx.obj["log_level"] or config.monitoring.log_level
    configure_logging(config.monitoring.model_copy(update={"log_level": level}))

    console.print(f"[green]Starting Extractly API at http://{config.web.host}:{config.web.port}[/green]")
    run_web_server(config, reload=reload)


@cli.command()
@click.option("--user-id", default=None, help="Subject recorded in the token")
@click.option("--expires-in", default=None, help="Lifetime such as 7d, 12h, 30m or seconds")
@click.option("--production", is_flag=True, help="Issue a deployment token; refuses the default secret")
@click.option("--url", "api_url", default="http://localhost:3000", show_default=True, help="API base URL for the usage example")
@click.pass_context
def token(
    ctx: click.Context,
    user_id: Optional[str],
    expires_in: Optional[str],
    production: bool,
    api_url: str,
) -> None:
    """Generate a signed bearer token."""
    config = _load(ctx)
    manager = JWTManager(config.auth)

    claims: Dict[str, Any] = {}
    if production:
        if config.auth.secret_key == DEFAULT_SECRET_KEY:
            console.print("[red]EXTRACTLY_AUTH__SECRET_KEY is not set; refusing to sign a production token.[/red]")
            sys.exit(1)
        user_id = user_id or "production-user"
        claims = {"env": "production", "generatedAt": datetime.now(timezone.utc).isoformat()}

    lifetime = expires_in or config.auth.default_expires_in
    try:
        expires_at = datetime.now(timezone.utc) + parse_expires_in(lifetime)
        signed = manager.create_token(user_id=user_id or "test-user", expires_in=lifetime, extra_claims=claims)
    except InvalidExpiryError as e:
        console.print(f"[red]{e.message}[/red]")
        sys.exit(1)

    console.print(Panel(signed, title="Token", subtitle=f"expires {expires_at.isoformat(timespec='seconds')}"))
    console.print(f"Authorization: Bearer {signed}", soft_wrap=True)
    console.print("\nExample:", style="bold")
    console.print(
        f"curl -X POST {api_url}/api/extract \\\n"
        f'  -H "Authorization: Bearer {signed}" \\\n'
        '  -H "Content-Type: application/json" \\\n'
        "  -d '{\"url\":\"https://example.com\"}'",
        soft_wrap=True,
        markup=False,
    )


@cli.command("verify-token")
@click.argument("token_value", metavar="TOKEN")
@click.pass_context
def verify_token(ctx: click.Context, token_value: str) -> None:
    """Verify a bearer token and print its claims."""
    config = _load(ctx)
    try:
        data = JWTManager(config.auth).verify_token(token_value)
    except AuthenticationError as e:
        console.print(f"[red]{e.message}[/red]")
        sys.exit(1)
    click.echo(json.dumps(data.to_payload(), indent=2, ensure_ascii=False))


@cli.command()
@click.argument("url")
@click.pass_context
def extract(ctx: click.Context, url: str) -> None:
    """Fetch URL and print the extracted article as JSON."""
    config = _load(ctx)
    configure_logging(MonitoringConfig(log_level=ctx.obj["log_level"] or "WARNING"), stream=sys.stderr)

    async def run_extraction() -> Dict[str, Any]:
        async with HtmlFetcher(config.fetcher) as fetcher:
            result = await ExtractionService(fetcher).extract_url(url)
            return result.to_dict()

    try:
        data = asyncio.run(run_extraction())
    except ExtractlyError as e:
        click.echo(json.dumps(e.to_dict(), ensure_ascii=False), err=True)
        sys.exit(1)
    click.echo(json.dumps({"success": True, "data": data}, indent=2, ensure_ascii=False))


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
