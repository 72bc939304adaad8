"""Application service: Cancel Sale use case.

Cancellation is terminal.  The sale stays in storage with CANCELLED
status; use DeleteSale to remove it.
"""

from __future__ import annotations

import logging
from uuid import UUID

from sms.application.dto import SaleDTO
from sms.application.event_dispatcher import SaleEventDispatcher, default_dispatcher
from sms.application.mapping import to_sale_dto
from sms.application.show_sale import load_sale
from sms.domain.repository.sale_repository import SaleRepository

logger = logging.getLogger(__name__)


class CancelSaleHandler:

    def __init__(
        self,
        sale_repo: SaleRepository,
        dispatcher: SaleEventDispatcher | None = None,
    ) -> None:
        self._sale_repo = sale_repo
        self._dispatcher = dispatcher or default_dispatcher()

    def handle(self, sale_id: UUID) -> SaleDTO:
        sale = load_sale(self._sale_repo, sale_id)

        sale.cancel()
        self._sale_repo.update(sale)
        logger.info("Cancelled sale %s (%s)", sale.sale_number, sale.id)

        self._dispatcher.dispatch(sale)
        return to_sale_dto(sale)
