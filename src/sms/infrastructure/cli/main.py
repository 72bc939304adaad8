import click

from sms.infrastructure.bootstrap import configure_logging
from sms.infrastructure.cli.sale_commands import (
    sale_cancel,
    sale_cancel_item,
    sale_create,
    sale_delete,
    sale_list,
    sale_show,
    sale_update,
)


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log at DEBUG level.")
def cli(verbose: bool) -> None:
    """SMS — Sales Management System"""
    configure_logging(verbose)


@cli.group()
def sale() -> None:
    """Manage sales."""


# Register subcommands
sale.add_command(sale_cancel)
sale.add_command(sale_cancel_item)
sale.add_command(sale_create)
sale.add_command(sale_delete)
sale.add_command(sale_list)
sale.add_command(sale_show)
sale.add_command(sale_update)
