"""CLI commands for SKUs."""

from __future__ import annotations

import json

import click

from warehouse.application.list_skus import ListSkusHandler
from warehouse.application.raise_sku_restocked import RaiseSkuRestockedHandler
from warehouse.domain.exceptions import WarehouseError
from warehouse.infrastructure.bootstrap import event_store_repository, sku_query_repository


@click.command("restock")
@click.option("--sku", required=True, help="SKU identifier.")
@click.option("--units", required=True, type=int, help="Units received.")
@click.option("--lot-id", required=True, help="Identifier of the received lot.")
def sku_restock(sku: str, units: int, lot_id: str) -> None:
    """Record that a lot of units arrived for a SKU."""
    handler = RaiseSkuRestockedHandler(event_store_repo=event_store_repository())

    try:
        result = handler.handle(sku=sku, units=units, lot_id=lot_id)
    except WarehouseError as exc:
        raise click.ClickException(str(exc))

    if result.duplicate:
        click.echo(f"Lot '{result.lot_id}' for '{result.sku}' was already recorded")
    else:
        click.echo(f"Restock of {result.units} units for '{result.sku}' (lot '{result.lot_id}') recorded")


@click.command("list")
@click.option("--sku", default=None, help="Show a single SKU.")
@click.option(
    "--sort-direction",
    type=click.Choice(["asc", "desc"]),
    default=None,
    help="Creation order (default: asc).",
)
@click.option("--limit", type=int, default=None, help="Maximum rows (default: 50).")
@click.option("--json", "as_json", is_flag=True, help="Print the SKUs as a JSON array.")
def sku_list(sku: str | None, sort_direction: str | None, limit: int | None, as_json: bool) -> None:
    """List SKUs and their units in stock."""
    handler = ListSkusHandler(query_repo=sku_query_repository())

    try:
        skus = handler.handle(sku=sku, sort_direction=sort_direction, limit=limit)
    except WarehouseError as exc:
        raise click.ClickException(str(exc))

    if as_json:
        click.echo(json.dumps([line.to_dict() for line in skus], indent=2))
        return

    if not skus:
        click.echo("No SKUs found.")
        return

    click.echo(f"{'SKU':<20} {'Units':>8}  {'Created':<24}  {'Updated':<24}")
    click.echo("-" * 80)
    for line in skus:
        click.echo(f"{line.sku:<20} {line.units:>8}  {line.created_at:<24}  {line.updated_at:<24}")
