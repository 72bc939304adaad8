"""Application service: Update Sale use case.

Replaces the customer and branch of an active sale.  Items are managed
through their own use cases.
"""

from __future__ import annotations

import logging
from uuid import UUID

from sms.application.dto import BranchSpec, CustomerSpec, SaleDTO
from sms.application.event_dispatcher import SaleEventDispatcher, default_dispatcher
from sms.application.mapping import to_branch, to_customer, to_sale_dto
from sms.application.show_sale import load_sale
from sms.domain.repository.sale_repository import SaleRepository

logger = logging.getLogger(__name__)


class UpdateSaleHandler:

    def __init__(
        self,
        sale_repo: SaleRepository,
        dispatcher: SaleEventDispatcher | None = None,
    ) -> None:
        self._sale_repo = sale_repo
        self._dispatcher = dispatcher or default_dispatcher()

    def handle(
        self, sale_id: UUID, customer: CustomerSpec, branch: BranchSpec
    ) -> SaleDTO:
        sale = load_sale(self._sale_repo, sale_id)

        # Build both value objects before touching the aggregate.
        new_customer = to_customer(customer)
        new_branch = to_branch(branch)

        sale.update(new_customer, new_branch)
        self._sale_repo.update(sale)
        logger.info("Updated sale %s (%s)", sale.sale_number, sale.id)

        self._dispatcher.dispatch(sale)
        return to_sale_dto(sale)
