from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from laundry_queue.config import LaundryConfig
from laundry_queue.exceptions import LaundryQueueError
from laundry_queue.models.order import LaundryOrder
from laundry_queue.models.persistence import SaveOutcome
from laundry_queue.services.front_desk import FrontDeskService

app = typer.Typer(
    name="laundry-express",
    add_completion=False,
    no_args_is_help=True,
    help="Manage the Laundry Express order queue.",
)


@app.callback()
def main_options(
    ctx: typer.Context,
    data_file: Annotated[
        Path | None,
        typer.Option(
            "--data-file",
            help="Queue CSV file.",
            envvar="LAUNDRY_DATA_FILE",
            dir_okay=False,
        ),
    ] = None,
    fallback_dir: Annotated[
        Path | None,
        typer.Option(
            "--fallback-dir",
            help="Directory used when the queue file cannot be written.",
            envvar="LAUNDRY_FALLBACK_DIR",
            file_okay=False,
        ),
    ] = None,
    sales_dir: Annotated[
        Path | None,
        typer.Option(
            "--sales-dir",
            help="Directory for sales ledgers and summaries.",
            envvar="LAUNDRY_SALES_DIR",
            file_okay=False,
        ),
    ] = None,
    strict: Annotated[
        bool,
        typer.Option(
            "--strict-status/--legacy-status",
            help="Enforce the status transition table, or accept any label.",
            envvar="LAUNDRY_STRICT_TRANSITIONS",
        ),
    ] = True,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Log file activity.")
    ] = False,
) -> None:
    """Shared options for every command."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    overrides: dict[str, object] = {
        "data_file": data_file,
        "fallback_dir": fallback_dir,
        "sales_dir": sales_dir,
        "strict_transitions": strict,
    }
    try:
        ctx.obj = LaundryConfig(
            **{k: v for k, v in overrides.items() if v is not None}
        )
    except (ValidationError, LaundryQueueError) as e:
        typer.secho(f"❌ Invalid configuration: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from e


@contextmanager
def _front_desk(ctx: typer.Context) -> Iterator[FrontDeskService]:
    """Open the front desk and turn queue errors into a clean exit."""
    desk = FrontDeskService.open(ctx.obj)
    try:
        yield desk
    except LaundryQueueError as e:
        typer.secho(f"❌ {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from e


def _report_save(outcome: SaveOutcome) -> None:
    if not outcome.saved:
        typer.secho(
            f"❌ Could not save the queue: {outcome.error}", fg=typer.colors.RED, err=True
        )
    elif outcome.used_fallback:
        typer.secho(
            f"⚠️ Queue saved to alternative location: {outcome.path}",
            fg=typer.colors.YELLOW,
        )


def _order_line(order: LaundryOrder, fee: float) -> str:
    return (
        f"{order.order_id:<8} {order.customer.name:<15} {order.weight_kg:<10.1f} "
        f"{order.service:<10} {order.status:<20} ₱{fee:.2f}"
    )


@app.command("add")
def add_order(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Customer name.")],
    contact: Annotated[str, typer.Argument(help="Contact number.")],
    weight: Annotated[float, typer.Argument(help="Laundry weight in kg.")],
    service: Annotated[str, typer.Argument(help="wash, dry, fold, or combo.")],
) -> None:
    """Queue a new order."""
    with _front_desk(ctx) as desk:
        order, outcome = desk.add_order(name, contact, weight, service)
        _report_save(outcome)
        typer.secho(
            f"✅ Order {order.order_id} added for {order.customer.details()}",
            fg=typer.colors.GREEN,
        )


@app.command("queue")
def view_queue(ctx: typer.Context) -> None:
    """Show every open order with its fee."""
    with _front_desk(ctx) as desk:
        orders = desk.queue.list_orders()
        typer.echo(
            f"{'OrderID':<8} {'Customer':<15} {'Weight(kg)':<10} {'Service':<10} "
            f"{'Status':<20} Fee (₱)"
        )
        if not orders:
            typer.echo("No orders available.")
            return
        for order in orders:
            typer.echo(_order_line(order, order.calculate_fee(desk.fee_schedule)))


@app.command("update-status")
def update_status(
    ctx: typer.Context,
    order_id: Annotated[int, typer.Argument(min=1, help="Order to update.")],
    status: Annotated[
        str, typer.Argument(help="For Washing / Washing / Drying / Ready for Pickup.")
    ],
) -> None:
    """Move an order to a new status."""
    with _front_desk(ctx) as desk:
        order, outcome = desk.update_status(order_id, status)
        _report_save(outcome)
        typer.secho(
            f"✅ Order {order.order_id} is now {order.status}", fg=typer.colors.GREEN
        )


@app.command("finish")
def finish_order(
    ctx: typer.Context,
    order_id: Annotated[int, typer.Argument(min=1, help="Order to finish.")],
) -> None:
    """Bill an order, record the sale, and remove it from the queue."""
    with _front_desk(ctx) as desk:
        finished = desk.finish_order(order_id)
        if finished.save is None:
            typer.secho(
                f"❌ Sale could not be written to the ledger; order {order_id} stays open.",
                fg=typer.colors.RED,
                err=True,
            )
            raise typer.Exit(code=1)
        _report_save(finished.save)
        typer.secho(
            f"✅ Order {order_id} finished. Total fee: ₱{finished.fee:.2f}",
            fg=typer.colors.GREEN,
        )


@app.command("find")
def find_orders(
    ctx: typer.Context,
    identifier: Annotated[str, typer.Argument(help="Customer name or contact number.")],
) -> None:
    """Show a customer's laundry status."""
    with _front_desk(ctx) as desk:
        views = desk.customer_lookup(identifier)
        if not views:
            typer.secho(
                "⚠️ No laundry found under that name/contact.", fg=typer.colors.YELLOW
            )
            return
        for view in views:
            order = view.order
            typer.echo(
                f"Order #{order.order_id} | {order.service} | {order.weight_kg:g}kg "
                f"| Status: {order.status}"
            )
            if view.amount_due is not None:
                typer.echo(f"Total to Pay: ₱{view.amount_due:.2f}")


@app.command("report")
def generate_report(ctx: typer.Context) -> None:
    """Write a sales summary for the orders still in the queue."""
    with _front_desk(ctx) as desk:
        summary = desk.generate_report()
        if summary.path is None:
            typer.secho("❌ Sales summary could not be written.", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1)
        typer.secho(
            f"Sales summary saved: {summary.path} (total ₱{summary.total:.2f})",
            fg=typer.colors.GREEN,
        )


@app.command("ledger")
def show_ledger(
    ctx: typer.Context,
    day: Annotated[
        datetime | None,
        typer.Option("--day", formats=["%Y-%m-%d", "%Y%m%d"], help="Day to show."),
    ] = None,
) -> None:
    """List the orders finished on a day and their total."""
    with _front_desk(ctx) as desk:
        entries = desk.sales_ledger.read_entries(day.date() if day else None)
        for entry in entries:
            typer.echo(
                f"{entry.order_id:>6} | {entry.customer_name:<15} | {entry.service:<8} "
                f"| ₱{entry.fee:8.2f} | {entry.completed_at:%H:%M:%S}"
            )
        total = sum(entry.fee for entry in entries)
        typer.echo(f"{len(entries)} finished orders, total ₱{total:.2f}")


@app.command("clear")
def clear_orders(
    ctx: typer.Context,
    yes: Annotated[
        bool, typer.Option("--yes", "-y", help="Skip the confirmation prompt.")
    ] = False,
) -> None:
    """Remove every open order and delete the queue file."""
    if not yes:
        typer.confirm("Clear all orders for a new batch?", abort=True)
    with _front_desk(ctx) as desk:
        if desk.clear_all():
            typer.secho("🧾 All orders cleared for a new batch.", fg=typer.colors.GREEN)
        else:
            typer.secho(
                "⚠️ Orders cleared but the queue file could not be deleted.",
                fg=typer.colors.YELLOW,
            )


@app.command("rates")
def show_rates(ctx: typer.Context) -> None:
    """Show the price per kilogram of each service."""
    schedule = ctx.obj.fee_schedule()
    for category, rate in schedule.rates().items():
        typer.echo(f"{category.value.capitalize():<6} service: ₱{rate:g}/kg")


def main() -> None:
    """Entry point for executing the Typer application."""
    app()


if __name__ == "__main__":
    main()
