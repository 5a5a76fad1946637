from __future__ import annotations

import pathlib
from typing import Optional

import click
import typer
import structlog
from rich.console import Console
from rich.markup import escape

from .config import load_config, NZBanksConfig
from .accounts.checks import check_account
from .accounts.checksum import AccountValidator
from .accounts.identify import AccountIdentifier
from .accounts.normalize import normalize as normalize_account
from .directory.database import (
    SqlBankDirectory,
    create_database_engine,
    create_session_factory,
    database_ready,
    init_database,
)
from .errors import RegisterError
from .register.ingest import IngestPolicy, RegisterLoader, read_register

console = Console()
log = structlog.get_logger()
app = typer.Typer(add_completion=False, no_args_is_help=True, help="nzbanks — New Zealand bank account validator")


def version_callback(value: bool):
    if value:
        from . import __version__
        console.print(f"nzbanks {__version__}")
        raise typer.Exit()


@app.callback()
def common(
    ctx: typer.Context,
    config: Optional[pathlib.Path] = typer.Option(None, "--config", help="Path to nzbanks.yaml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logs"),
    version: Optional[bool] = typer.Option(None, "--version", callback=version_callback, is_eager=True),
):
    """Global options (config, verbosity)."""
    structlog.configure(processors=[structlog.processors.JSONRenderer()])
    ctx.obj = {"config": load_config(config) if config else NZBanksConfig()}
    if verbose:
        log.info("verbose_enabled")


def _directory(cfg: NZBanksConfig, create: bool = False) -> SqlBankDirectory:
    engine = create_database_engine(cfg.database.url, echo=cfg.database.echo)
    if create:
        init_database(engine)
    elif not database_ready(engine):
        log.info("database_not_ready", url=cfg.database.url)
        console.print("[red]No bank register loaded; run load-register first.[/red]")
        raise typer.Exit(code=1)
    return SqlBankDirectory(create_session_factory(engine))


@app.command()
def normalize(
    account: str = typer.Argument(..., help="Account number, any separators"),
    delimiter: Optional[str] = typer.Option(None, "--delimiter", help="Group separator (default from config)"),
):
    """Print the canonical form of an account number."""
    cfg: NZBanksConfig = click.get_current_context().obj["config"]
    canonical = normalize_account(account, delimiter if delimiter is not None else cfg.accounts.delimiter)
    if canonical is None:
        console.print("[red]Bank account number format not accepted.[/red]")
        raise typer.Exit(code=1)
    console.print(canonical)


@app.command()
def identify(account: str = typer.Argument(..., help="Account number to identify")):
    """Show the bank branch an account number belongs to."""
    cfg: NZBanksConfig = click.get_current_context().obj["config"]
    record = AccountIdentifier(_directory(cfg)).identify(account)
    if record is None:
        log.info("bank_not_identified", account=account)
        console.print("[red]Bank not identified[/red]")
        raise typer.Exit(code=1)
    console.print(f"{record.prefix}  {record.bank_name} / {record.branch_information} ({record.city})")


@app.command()
def check(account: str = typer.Argument(..., help="Account number to validate")):
    """Validate format, bank identity and checksum; report every failure."""
    cfg: NZBanksConfig = click.get_current_context().obj["config"]
    identifier = AccountIdentifier(_directory(cfg))
    validator = AccountValidator(cfg.accounts.checksum)
    result = check_account(account, identifier, validator, delimiter=cfg.accounts.delimiter)
    if not result.ok:
        log.info("account_rejected", account=account, issues=[i.value for i in result.issues])
        for message in result.messages:
            console.print(f"[red]{message}[/red]")
        raise typer.Exit(code=1)
    console.print(f"[green]Valid[/green] {result.canonical}")


@app.command("load-register")
def load_register(
    src: pathlib.Path = typer.Argument(..., help="Bank Branch Register text file"),
    overwrite: bool = typer.Option(False, "--overwrite", help="Replace branches that already exist"),
):
    """Load the Payments NZ bank register into the database."""
    cfg: NZBanksConfig = click.get_current_context().obj["config"]
    try:
        text = read_register(src, encoding=cfg.bank_register.encoding)
    except RegisterError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    policy = IngestPolicy.OVERWRITE if overwrite else IngestPolicy(cfg.bank_register.policy)
    summary = RegisterLoader(_directory(cfg, create=True), policy=policy).load(text)
    log.info(
        "register_loaded",
        written=summary.written,
        skipped=summary.skipped,
        rejected=len(summary.rejected),
    )
    console.print(f"{summary.written} records written, {summary.skipped} unchanged, {len(summary.rejected)} rejected")
