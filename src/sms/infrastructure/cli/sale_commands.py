"""CLI commands for the Sale aggregate."""

from __future__ import annotations

import json
import re
from datetime import datetime
from typing import IO
from uuid import UUID

import click

from sms.application.cancel_sale import CancelSaleHandler
from sms.application.cancel_sale_item import CancelSaleItemHandler
from sms.application.create_sale import CreateSaleHandler
from sms.application.delete_sale import DeleteSaleHandler
from sms.application.dto import (
    BranchSpec,
    CustomerSpec,
    ProductSpec,
    SaleDTO,
    SaleItemSpec,
    SaleRequest,
    SalesQuery,
)
from sms.application.list_sales import ListSalesHandler
from sms.application.show_sale import ShowSaleHandler
from sms.application.update_sale import UpdateSaleHandler
from sms.domain.exceptions import DomainException
from sms.infrastructure.bootstrap import event_dispatcher, sale_repository


# --- Request file parsing ----------------------------------------------------


def _load_json(stream: IO[str]) -> dict:
    try:
        data = json.load(stream)
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"Request file is not valid JSON: {exc}")
    if not isinstance(data, dict):
        raise click.BadParameter("Request file must contain a JSON object.")
    return data


def _section(data: dict, key: str) -> dict:
    value = data.get(key)
    if not isinstance(value, dict):
        raise click.BadParameter(f"Request file needs a '{key}' object.")
    return value


def _customer(data: dict) -> CustomerSpec:
    raw = _section(data, "customer")
    return CustomerSpec(
        external_id=raw.get("external_id", ""),
        name=raw.get("name", ""),
        email=raw.get("email", ""),
        phone=raw.get("phone", ""),
    )


def _branch(data: dict) -> BranchSpec:
    raw = _section(data, "branch")
    return BranchSpec(
        external_id=raw.get("external_id", ""),
        name=raw.get("name", ""),
        address=raw.get("address", ""),
        city=raw.get("city", ""),
        state=raw.get("state", ""),
    )


_WHOLE_NUMBER = re.compile(r"[+-]?[0-9]+")


def _quantity(value: object, product_name: str) -> int:
    # Whole numbers only: int() would truncate 3.9 and accept true.
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str) and _WHOLE_NUMBER.fullmatch(value.strip()):
        return int(value)
    raise click.BadParameter(
        f"Invalid quantity {value!r} for product '{product_name}'."
    )


def _items(data: dict) -> list[SaleItemSpec]:
    specs: list[SaleItemSpec] = []
    for raw in data.get("items", []):
        if not isinstance(raw, dict):
            raise click.BadParameter("Each entry in 'items' must be an object.")
        product = _section(raw, "product")
        quantity = _quantity(raw.get("quantity", 0), product.get("name", "?"))
        specs.append(
            SaleItemSpec(
                product=ProductSpec(
                    external_id=product.get("external_id", ""),
                    name=product.get("name", ""),
                    description=product.get("description", ""),
                    category=product.get("category", ""),
                    brand=product.get("brand", ""),
                ),
                quantity=quantity,
                unit_price=str(raw.get("unit_price", "")),
            )
        )
    return specs


def _parse_uuid(value: str, label: str) -> UUID:
    try:
        return UUID(value)
    except ValueError:
        raise click.BadParameter(f"Invalid {label} '{value}'.")


# --- Display -----------------------------------------------------------------


def _display_sale(dto: SaleDTO) -> None:
    """Shared formatting for displaying a sale."""
    click.echo(f"Sale {dto.sale_number}  (status={dto.status})")
    click.echo(f"ID:       {dto.id}")
    click.echo(f"Date:     {dto.sale_date}")
    click.echo(f"Customer: {dto.customer_name} <{dto.customer_email}>")
    click.echo(f"Branch:   {dto.branch_name} ({dto.branch_location})")
    if dto.updated_at:
        click.echo(f"Updated:  {dto.updated_at}")
    click.echo()
    click.echo(f"  {'Item':<36} {'Product':<20} {'Qty':>4} {'Price':>10} {'Disc':>5} {'Total':>10}")
    click.echo(f"  {'-'*90}")
    for item in dto.items:
        click.echo(
            f"  {item.id:<36} {item.product_name:<20} {item.quantity:>4} "
            f"{item.unit_price:>10} {item.discount_percentage:>5} {item.total_amount:>10}"
        )
    click.echo(f"  {'-'*90}")
    click.echo(f"  {'Sale Total':<62} {dto.total_amount:>28}")


# --- Commands ----------------------------------------------------------------


@click.command("create")
@click.option("--file", "request_file", required=True, type=click.File("r"),
              help="JSON request with sale_number, customer, branch and items.")
def sale_create(request_file: IO[str]) -> None:
    """Register a new sale."""
    data = _load_json(request_file)
    request = SaleRequest(
        sale_number=str(data.get("sale_number", "")),
        customer=_customer(data),
        branch=_branch(data),
        items=_items(data),
    )

    handler = CreateSaleHandler(
        sale_repo=sale_repository(),
        dispatcher=event_dispatcher(),
    )

    try:
        dto = handler.handle(request)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Sale {dto.sale_number} created.")
    _display_sale(dto)


@click.command("show")
@click.option("--id", "sale_id", default=None, help="Sale ID to display.")
@click.option("--number", "sale_number", default=None, help="Sale number to display.")
def sale_show(sale_id: str | None, sale_number: str | None) -> None:
    """Show details of an existing sale."""
    if bool(sale_id) == bool(sale_number):
        raise click.UsageError("Give exactly one of --id or --number.")

    handler = ShowSaleHandler(sale_repo=sale_repository())

    try:
        if sale_id:
            dto = handler.handle(_parse_uuid(sale_id, "sale ID"))
        else:
            dto = handler.handle_by_number(sale_number)  # type: ignore[arg-type]
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_sale(dto)


@click.command("list")
@click.option("--page", default=1, show_default=True, type=int)
@click.option("--size", default=10, show_default=True, type=int)
@click.option("--order-by", default=None, help="e.g. 'saleDate desc, totalAmount'.")
@click.option("--customer", "customer_id", default=None, help="Customer external ID.")
@click.option("--branch", "branch_id", default=None, help="Branch external ID.")
@click.option("--status", default=None, type=click.Choice(["Active", "Cancelled"], case_sensitive=False))
@click.option("--min-date", default=None, type=click.DateTime())
@click.option("--max-date", default=None, type=click.DateTime())
@click.option("--min-amount", default=None)
@click.option("--max-amount", default=None)
def sale_list(
    page: int,
    size: int,
    order_by: str | None,
    customer_id: str | None,
    branch_id: str | None,
    status: str | None,
    min_date: datetime | None,
    max_date: datetime | None,
    min_amount: str | None,
    max_amount: str | None,
) -> None:
    """List sales with filtering, ordering and pagination."""
    query = SalesQuery(
        page=page,
        size=size,
        order_by=order_by,
        customer_id=customer_id,
        branch_id=branch_id,
        status=status,
        min_date=min_date,
        max_date=max_date,
        min_amount=min_amount,
        max_amount=max_amount,
    )
    handler = ListSalesHandler(sale_repo=sale_repository())

    try:
        result = handler.handle(query)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"  {'Number':<12} {'Date':<20} {'Customer':<20} {'Branch':<16} {'Status':<10} {'Total':>10}")
    click.echo(f"  {'-'*93}")
    for row in result.sales:
        click.echo(
            f"  {row.sale_number:<12} {row.sale_date:<20} {row.customer_name:<20} "
            f"{row.branch_name:<16} {row.status:<10} {row.total_amount:>10}"
        )
    click.echo(
        f"Page {result.current_page} of {result.total_pages} "
        f"({result.total_count} sale(s))"
    )


@click.command("update")
@click.option("--id", "sale_id", required=True, help="Sale ID to update.")
@click.option("--file", "request_file", required=True, type=click.File("r"),
              help="JSON request with customer and branch.")
def sale_update(sale_id: str, request_file: IO[str]) -> None:
    """Replace the customer and branch of an active sale."""
    data = _load_json(request_file)
    handler = UpdateSaleHandler(
        sale_repo=sale_repository(),
        dispatcher=event_dispatcher(),
    )

    try:
        dto = handler.handle(_parse_uuid(sale_id, "sale ID"), _customer(data), _branch(data))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Sale {dto.sale_number} updated.")
    _display_sale(dto)


@click.command("cancel")
@click.option("--id", "sale_id", required=True, help="Sale ID to cancel.")
def sale_cancel(sale_id: str) -> None:
    """Cancel a sale.  Cancelled sales cannot be changed."""
    handler = CancelSaleHandler(
        sale_repo=sale_repository(),
        dispatcher=event_dispatcher(),
    )

    try:
        dto = handler.handle(_parse_uuid(sale_id, "sale ID"))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Sale {dto.sale_number} cancelled.")


@click.command("cancel-item")
@click.option("--id", "sale_id", required=True, help="Sale ID.")
@click.option("--item", "item_id", required=True, help="Item ID to remove.")
def sale_cancel_item(sale_id: str, item_id: str) -> None:
    """Remove one item from an active sale."""
    handler = CancelSaleItemHandler(
        sale_repo=sale_repository(),
        dispatcher=event_dispatcher(),
    )

    try:
        dto = handler.handle(
            _parse_uuid(sale_id, "sale ID"), _parse_uuid(item_id, "item ID")
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Sale {dto.sale_number} now totals {dto.total_amount}.")


@click.command("delete")
@click.option("--id", "sale_id", required=True, help="Sale ID to delete.")
def sale_delete(sale_id: str) -> None:
    """Permanently delete a sale."""
    handler = DeleteSaleHandler(sale_repo=sale_repository())

    try:
        sale_number = handler.handle(_parse_uuid(sale_id, "sale ID"))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Sale {sale_number} deleted.")
