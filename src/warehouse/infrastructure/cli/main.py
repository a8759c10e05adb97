import click

from warehouse.infrastructure.bootstrap import setup_logging
from warehouse.infrastructure.cli.sku_commands import sku_list, sku_restock
from warehouse.infrastructure.cli.worker_commands import worker_allocate, worker_restock


@click.group()
def cli() -> None:
    """Warehouse — SKU stock ledger"""
    setup_logging()


@cli.group()
def sku() -> None:
    """Restock and list SKUs."""


@cli.group()
def worker() -> None:
    """Run workers against queue message batches."""


# Register subcommands
sku.add_command(sku_list)
sku.add_command(sku_restock)
worker.add_command(worker_restock)
worker.add_command(worker_allocate)
