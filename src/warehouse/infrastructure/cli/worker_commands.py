"""CLI commands that feed queue batches to workers."""

from __future__ import annotations

import json
from pathlib import Path

import click

from warehouse.infrastructure.bootstrap import allocate_order_stock_worker, restock_sku_worker

_BATCH_FILE = click.Path(exists=True, dir_okay=False, path_type=Path)


@click.command("restock")
@click.argument("batch_file", type=_BATCH_FILE)
def worker_restock(batch_file: Path) -> None:
    """Apply a JSON batch of queued SkuRestocked messages."""
    _run_batch(restock_sku_worker(), batch_file)


@click.command("allocate")
@click.argument("batch_file", type=_BATCH_FILE)
def worker_allocate(batch_file: Path) -> None:
    """Allocate stock for a JSON batch of queued OrderCreated messages."""
    _run_batch(allocate_order_stock_worker(), batch_file)


def _run_batch(worker, batch_file: Path) -> None:
    try:
        queue_event = json.loads(batch_file.read_text(encoding="utf-8"))
    except ValueError as exc:
        raise click.ClickException(f"{batch_file} is not valid JSON: {exc}")
    if not isinstance(queue_event, dict):
        raise click.ClickException(f"{batch_file} must hold an object with a 'Records' list")

    response = worker.process_batch(queue_event)
    failures = [failure["itemIdentifier"] for failure in response["batchItemFailures"]]

    processed = len(queue_event.get("Records") or [])
    click.echo(f"Processed {processed} record(s)")
    if failures:
        raise click.ClickException(
            f"{len(failures)} record(s) should be retried: {', '.join(map(str, failures))}"
        )
