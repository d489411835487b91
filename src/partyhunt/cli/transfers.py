"""
Transfers command for partyhunt CLI.

Prints the in-game transfer commands, one per line, ready to paste.
"""

from __future__ import annotations

import click

from ..services.display import format_transfer_commands
from ..services.settlement import calculate_transfers
from .utils import load_report


@click.command()
@click.argument("report_file", type=click.Path(exists=True, dir_okay=False, allow_dash=True))
@click.option("--skip-zero", is_flag=True, help="Omit transfers with a zero amount")
def transfers(report_file, skip_zero):
    """Print 'transfer <amount> to <name>' for every payout."""
    session = load_report(report_file)
    commands = format_transfer_commands(calculate_transfers(session), skip_zero=skip_zero)
    if not commands:
        click.echo("No transfers to make.", err=True)
        return
    for command in commands:
        click.echo(command)
