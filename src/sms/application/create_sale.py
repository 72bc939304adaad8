"""Application service: Create Sale use case.

Orchestrates the flow between the repository and the domain model.
Sale number uniqueness is checked here because it needs the repository;
every other rule lives in the aggregate.
"""

from __future__ import annotations

import logging

from sms.application.dto import SaleDTO, SaleRequest
from sms.application.event_dispatcher import SaleEventDispatcher, default_dispatcher
from sms.application.mapping import to_branch, to_customer, to_sale_dto, to_sale_item
from sms.domain.exceptions import BusinessRuleViolation
from sms.domain.model.sale import Sale
from sms.domain.repository.sale_repository import SaleRepository

logger = logging.getLogger(__name__)


class CreateSaleHandler:

    def __init__(
        self,
        sale_repo: SaleRepository,
        dispatcher: SaleEventDispatcher | None = None,
    ) -> None:
        self._sale_repo = sale_repo
        self._dispatcher = dispatcher or default_dispatcher()

    def handle(self, request: SaleRequest) -> SaleDTO:
        """Register a new sale.

        Steps:
        1. Reject a sale number that is already taken.
        2. Build value objects and items (domain validation applies).
        3. Let the Sale aggregate assemble itself.
        4. Persist, dispatch events and return a DTO.
        """
        # Checked in the same form the aggregate stores it.
        sale_number = (request.sale_number or "").strip()
        if sale_number and self._sale_repo.sale_number_exists(sale_number):
            raise BusinessRuleViolation(f"Sale number '{sale_number}' already exists")

        customer = to_customer(request.customer)
        branch = to_branch(request.branch)
        items = [to_sale_item(spec) for spec in request.items]

        sale = Sale.create(sale_number, customer, branch, items)
        self._sale_repo.add(sale)
        logger.info(
            "Created sale %s (%s) with %d item(s), total %s",
            sale.sale_number,
            sale.id,
            len(sale.items),
            sale.total_amount,
        )

        self._dispatcher.dispatch(sale)
        return to_sale_dto(sale)
