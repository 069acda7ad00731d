"""
checkpwn CLI - check accounts and passwords against Have I Been Pwned.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import json
import logging
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn
from rich.table import Table

from checkpwn import __version__
from checkpwn.api import CheckKind
from checkpwn.config import CheckpwnConfig, default_config_path
from checkpwn.errors import CheckpwnError
from checkpwn.models import CheckResult
from checkpwn.password import Password

console = Console()


def read_accounts(target: str) -> list[str]:
    """Expand TARGET into accounts.

    A path to an existing file yields one account per line, skipping blank
    lines and # comments. Anything else is a single account.
    """
    path = Path(target)
    if not path.is_file():
        return [target]

    accounts = []
    for line in path.read_text().splitlines():
        line = line.strip()
        if line and not line.startswith("#"):
            accounts.append(line)
    return accounts


def print_json(results: list[CheckResult]) -> None:
    """Print results as JSON."""
    data = [r.to_dict() for r in results]
    click.echo(json.dumps(data if len(data) != 1 else data[0], indent=2, default=str))


def status_text(result: CheckResult) -> str:
    if result.error:
        return f"[yellow]Error: {result.error}[/yellow]"
    if result.breached:
        return "[red]BREACHED[/red]"
    return "[green]NO BREACH FOUND[/green]"


@click.group()
@click.version_option(version=__version__, prog_name="checkpwn")
@click.option("--config", "config_path", type=click.Path(dir_okay=False),
              help=f"Config file (default: {default_config_path()})")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_path: str | None, debug: bool) -> None:
    """checkpwn - Have I Been Pwned breach checking.

    Account checks need an HIBP API key (CHECKPWN_API_KEY, HIBP_API_KEY,
    or `checkpwn register`). Password checks use k-anonymity and send only
    the first 5 characters of the password's SHA-1 hash.
    """
    ctx.ensure_object(dict)
    ctx.obj["console"] = console
    ctx.obj["config_path"] = config_path

    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True))],
        )


def load_config(ctx: click.Context) -> CheckpwnConfig:
    try:
        return CheckpwnConfig.load(ctx.obj.get("config_path"))
    except (OSError, ValueError) as e:
        console.print(f"[red]Could not load config: {e}[/red]")
        raise SystemExit(1)


# =============================================================================
# Account Checking
# =============================================================================

@main.command("acc")
@click.argument("target")
@click.option("--api-key", "-k", help="HIBP API key (overrides config and environment)")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
@click.pass_context
def check_accounts(
    ctx: click.Context,
    target: str,
    api_key: str | None,
    json_output: bool,
) -> None:
    """Check an account, or a file of accounts, for breaches.

    TARGET is an email address, a username, or a path to a file with one
    account per line. Exits with status 1 if any account is breached.

    Example:
        checkpwn acc user@example.com
        checkpwn acc accounts.txt --json
    """
    config = load_config(ctx)
    if api_key:
        config.api_key = api_key

    try:
        config.require_api_key()
    except CheckpwnError as e:
        console.print(f"[red]{e}[/red]")
        console.print("Get a key at: https://haveibeenpwned.com/API/Key")
        raise SystemExit(1)

    accounts = read_accounts(target)
    if not accounts:
        console.print("[yellow]No accounts found[/yellow]")
        return

    results = []
    with config.create_client() as client:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TextColumn("{task.completed}/{task.total}"),
            console=console,
            transient=True,
            disable=json_output,
        ) as progress:
            task = progress.add_task("Checking accounts...", total=len(accounts))

            for account in accounts:
                result = CheckResult(kind=CheckKind.ACCOUNT, target=account)
                try:
                    result.breached = client.check_account(account)
                except CheckpwnError as e:
                    result.error = str(e)
                results.append(result)
                progress.advance(task)

    if json_output:
        print_json(results)
    elif len(results) == 1:
        result = results[0]
        console.print(Panel(
            f"[cyan]{result.target}[/cyan]: {status_text(result)}",
            title="Account Check Result",
        ))
    else:
        table = Table(title="Account Check Results")
        table.add_column("Account", style="cyan")
        table.add_column("Status")
        for result in results:
            table.add_row(result.target, status_text(result))
        console.print(table)

    if any(not r.ok for r in results):
        raise SystemExit(1)


# =============================================================================
# Password Checking
# =============================================================================

@main.command("pass")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
@click.pass_context
def check_pass(ctx: click.Context, json_output: bool) -> None:
    """Check a password against Pwned Passwords.

    The password is read from a hidden prompt and never leaves this
    system. Exits with status 1 if the password is breached.

    Example:
        checkpwn pass
    """
    config = load_config(ctx)
    plaintext = click.prompt("Password", hide_input=True)

    result = CheckResult.for_password()
    try:
        password = Password(plaintext)
    except CheckpwnError as e:
        result.error = str(e)
    else:
        try:
            with config.create_client() as client:
                result.breached = client.check_password(password)
        except CheckpwnError as e:
            result.error = str(e)
        finally:
            password.clear()
    del plaintext

    if json_output:
        print_json([result])
    elif result.error:
        console.print(f"[red]Error: {result.error}[/red]")
    elif result.breached:
        console.print(Panel(
            "[red]Warning![/red] This password has been found in known data breaches.\n"
            "Do not use it.",
            title="Password Check Result",
        ))
    else:
        console.print(Panel(
            "[green]Good news![/green] This password has NOT been found in any known data breaches.",
            title="Password Check Result",
        ))

    if not result.ok:
        raise SystemExit(1)


# =============================================================================
# Configuration
# =============================================================================

@main.command("register")
@click.argument("api_key")
@click.pass_context
def register(ctx: click.Context, api_key: str) -> None:
    """Save an HIBP API key to the config file.

    Example:
        checkpwn register 0123456789abcdef
    """
    path = Path(ctx.obj.get("config_path") or default_config_path())

    try:
        config = CheckpwnConfig.from_file(path) if path.exists() else CheckpwnConfig()
        config.api_key = api_key
        saved = config.save(path)
    except (OSError, ValueError) as e:
        console.print(f"[red]Could not write config: {e}[/red]")
        raise SystemExit(1)

    console.print(f"[green]API key saved to {saved}[/green]")


if __name__ == "__main__":
    main()
