"""edgegrid-auth CLI - Sign requests and inspect credentials."""

import sys
from urllib.parse import urlsplit

import click
from rich.console import Console
from rich.table import Table

from edgegrid_auth.common.errors import EdgeGridError
from edgegrid_auth.common.logging import configure_logging
from edgegrid_auth.common.settings import get_settings
from edgegrid_auth.config import load_credential
from edgegrid_auth.signing.models import Credential, SignableRequest
from edgegrid_auth.signing.signer import sign_request

console = Console()
err_console = Console(stderr=True)


def _redact(value: str | None) -> str:
    if not value:
        return "-"
    if len(value) <= 8:
        return "****"
    return f"{value[:4]}...{value[-4:]}"


def _parse_header(raw: str) -> tuple[str, str]:
    name, sep, value = raw.partition(":")
    if not sep or not name.strip():
        raise click.BadParameter(f"expected 'Name: value', got {raw!r}", param_hint="--header")
    return name.strip(), value.strip()


def _load(ctx: click.Context) -> Credential:
    try:
        return load_credential(
            ctx.obj["edgerc"],
            ctx.obj["section"],
            use_env=ctx.obj["use_env"],
        )
    except EdgeGridError as e:
        err_console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


@click.group()
@click.option(
    "--edgerc",
    default=None,
    type=click.Path(dir_okay=False),
    help="Path to the .edgerc credentials file",
)
@click.option("--section", default=None, help="Credential section")
@click.option("--env", "use_env", is_flag=True, help="Read AKAMAI_* env vars first")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(
    ctx: click.Context,
    edgerc: str | None,
    section: str | None,
    use_env: bool,
    debug: bool,
) -> None:
    """edgegrid-auth - EG1-HMAC-SHA256 request signing."""
    settings = get_settings()
    configure_logging("DEBUG" if debug else settings.log_level, settings.log_json)

    ctx.ensure_object(dict)
    ctx.obj["edgerc"] = edgerc or settings.edgerc_path
    ctx.obj["section"] = section or settings.section
    ctx.obj["use_env"] = use_env or settings.use_env


@cli.command()
@click.argument("method")
@click.argument("url")
@click.option("-H", "--header", "headers", multiple=True, help="Request header 'Name: value'")
@click.option("-d", "--data", default=None, help="Request body")
@click.pass_context
def sign(
    ctx: click.Context,
    method: str,
    url: str,
    headers: tuple[str, ...],
    data: str | None,
) -> None:
    """Print the Authorization header for METHOD URL."""
    parts = urlsplit(url)
    if not parts.scheme or not parts.netloc:
        raise click.BadParameter(f"expected an absolute URL, got {url!r}", param_hint="URL")

    credential = _load(ctx)
    request = SignableRequest.from_url(
        method,
        url,
        headers=[_parse_header(raw) for raw in headers],
        body=data,
    )
    try:
        header = sign_request(request, credential)
    except EdgeGridError as e:
        err_console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)
    click.echo(header)


@cli.command("show-config")
@click.pass_context
def show_config(ctx: click.Context) -> None:
    """Show the loaded credential with secrets redacted."""
    credential = _load(ctx)

    table = Table(title=f"Credential [{ctx.obj['section']}]")
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    table.add_row("host", credential.host)
    table.add_row("client_token", _redact(credential.client_token))
    table.add_row("client_secret", _redact(credential.client_secret))
    table.add_row("access_token", _redact(credential.access_token))
    table.add_row("max_body", str(credential.max_body_size))
    table.add_row("headers_to_sign", ", ".join(credential.headers_to_sign) or "-")
    table.add_row("account_key", _redact(credential.account_key))

    console.print(table)


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
