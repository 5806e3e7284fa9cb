"""CLI for SplitLedger using Typer."""

import logging
import sys
from enum import Enum
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import Settings, load_settings
from .currency import format_money
from .exceptions import ConfigurationError
from .ledger import load_group
from .models import Group
from .service import LedgerService

app = typer.Typer(
    name="splitledger",
    help="Compute who owes whom in a shared expense group",
)

console = Console()

LEDGER_ARGUMENT = typer.Argument(
    None,
    help="Path to the group ledger JSON file (defaults to SPLITLEDGER_LEDGER_PATH)",
)
VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Verbose output")


class ExportKind(str, Enum):
    transactions = "transactions"
    balances = "balances"


def setup_logging(verbose: bool = False):
    """Setup logging configuration."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def _load(ledger: Path | None) -> tuple[Settings, LedgerService, Group]:
    """Load settings, build the service and read the group ledger."""
    settings = load_settings()
    path = ledger or settings.ledger_path
    if path is None:
        raise ConfigurationError(
            "No ledger file given. Pass a path or set SPLITLEDGER_LEDGER_PATH."
        )
    return settings, LedgerService(settings), load_group(path)


def _fail(e: Exception, verbose: bool):
    console.print(f"\n[bold red]Error:[/bold red] {escape(str(e))}")
    if verbose:
        raise e
    sys.exit(1)


def _member_name(group: Group, member_id: str) -> str:
    return group.member_names.get(member_id, member_id)


@app.command()
def balances(ledger: Path | None = LEDGER_ARGUMENT, verbose: bool = VERBOSE_OPTION):
    """Show each member's net balance."""
    setup_logging(verbose)

    try:
        _, service, group = _load(ledger)
        currency = service.currency_for(group)
        net = service.net_balances(group)

        table = Table(
            title=f"Net Balances: {group.name}",
            show_header=True,
            header_style="bold magenta",
        )
        table.add_column("Member", style="cyan")
        table.add_column("Status")
        table.add_column("Balance", justify="right")

        for b in net:
            if b.balance > 0:
                status, style = "is owed", "green"
            elif b.balance < 0:
                status, style = "owes", "red"
            else:
                status, style = "settled", "dim"
            table.add_row(
                _member_name(group, b.member_id),
                status,
                f"[{style}]{format_money(b.balance, currency)}[/{style}]",
            )

        console.print(table)

    except Exception as e:
        _fail(e, verbose)


@app.command()
def settle(ledger: Path | None = LEDGER_ARGUMENT, verbose: bool = VERBOSE_OPTION):
    """Show the payments that settle all debts."""
    setup_logging(verbose)

    try:
        _, service, group = _load(ledger)
        summary = service.summarize(group)

        if not summary.settlements:
            console.print("[bold green]✓ Everyone is settled up![/bold green]")
        else:
            table = Table(
                title=f"Settlements: {group.name}",
                show_header=True,
                header_style="bold magenta",
            )
            table.add_column("From", style="cyan")
            table.add_column("To", style="cyan")
            table.add_column("Amount", justify="right", style="yellow")

            for s in summary.settlements:
                table.add_row(
                    _member_name(group, s.from_member_id),
                    _member_name(group, s.to_member_id),
                    format_money(s.amount, summary.currency),
                )

            console.print(table)

        if summary.residual:
            console.print(
                "\n[yellow]⚠️  Some balances cannot be settled because "
                "split shares don't add up to their totals:[/yellow]"
            )
            for b in summary.residual:
                console.print(
                    f"  {_member_name(group, b.member_id)}: "
                    f"{format_money(b.balance, summary.currency)}"
                )

    except Exception as e:
        _fail(e, verbose)


@app.command()
def highlights(ledger: Path | None = LEDGER_ARGUMENT, verbose: bool = VERBOSE_OPTION):
    """Show spending highlights."""
    setup_logging(verbose)

    try:
        _, service, group = _load(ledger)
        currency = service.currency_for(group)
        stats = service.highlights(group)

        console.print(f"\n[bold]Highlights: {group.name}[/bold]")
        console.print(f"  Total spent: {format_money(stats.total_spent, currency)}")
        console.print(f"  Last 7 days: {format_money(stats.weekly_spending, currency)}")
        console.print(
            f"  Last month:  {format_money(stats.monthly_spending, currency)}"
        )
        if stats.top_spender:
            console.print(
                f"  Top spender: {_member_name(group, stats.top_spender.member_id)} "
                f"({format_money(stats.top_spender.amount, currency)})"
            )

        if stats.spending_over_time:
            table = Table(show_header=True, header_style="bold magenta")
            table.add_column("Day", style="dim")
            table.add_column("Spent", justify="right")
            for point in stats.spending_over_time:
                table.add_row(point.day, format_money(point.amount, currency))
            console.print(table)

    except Exception as e:
        _fail(e, verbose)


@app.command()
def export(
    kind: ExportKind = typer.Argument(..., help="What to export"),
    ledger: Path | None = LEDGER_ARGUMENT,
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Write CSV to a file instead of stdout"
    ),
    verbose: bool = VERBOSE_OPTION,
):
    """Export transactions or balances as CSV."""
    setup_logging(verbose)

    try:
        _, service, group = _load(ledger)
        if kind == ExportKind.transactions:
            csv_text = service.export_transactions(group)
        else:
            csv_text = service.export_balances(group)

        if output:
            output.write_text(csv_text + "\n", encoding="utf-8")
            console.print(f"[green]Wrote {kind.value} to {output}[/green]")
        else:
            typer.echo(csv_text)

    except Exception as e:
        _fail(e, verbose)


@app.command()
def context(ledger: Path | None = LEDGER_ARGUMENT, verbose: bool = VERBOSE_OPTION):
    """Print the group summary used as assistant context."""
    setup_logging(verbose)

    try:
        _, service, group = _load(ledger)
        typer.echo(service.render_context(group))

    except Exception as e:
        _fail(e, verbose)


@app.command()
def validate(ledger: Path | None = LEDGER_ARGUMENT, verbose: bool = VERBOSE_OPTION):
    """Check that every exact and percentage split adds up."""
    setup_logging(verbose)

    try:
        _, service, group = _load(ledger)
        issues = service.split_issues(group)

        if not issues:
            console.print("[bold green]✓ All splits are well-formed[/bold green]")
            return

        console.print(f"[yellow]Found {len(issues)} split issue(s):[/yellow]")
        for issue in issues:
            console.print(f"  • {escape(issue.message)}")
        sys.exit(1)

    except Exception as e:
        _fail(e, verbose)


if __name__ == "__main__":
    app()
