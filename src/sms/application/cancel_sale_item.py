"""Application service: Cancel Sale Item use case.

Removes one item from an active sale.  An item id the sale does not
contain leaves the sale untouched; nothing is written in that case.
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


class CancelSaleItemHandler:

    def __init__(
        self,
        sale_repo: SaleRepository,
        dispatcher: SaleEventDispatcher | None = None,
    ) -> None:
        self._sale_repo = sale_repo
        self._dispatcher = dispatcher or default_dispatcher()

    def handle(self, sale_id: UUID, item_id: UUID) -> SaleDTO:
        sale = load_sale(self._sale_repo, sale_id)

        raised = sale.remove_item(item_id)
        if raised:
            self._sale_repo.update(sale)
            logger.info(
                "Cancelled item %s on sale %s, new total %s",
                item_id,
                sale.sale_number,
                sale.total_amount,
            )
            self._dispatcher.dispatch(sale)
        else:
            logger.debug("Item %s not on sale %s; nothing to do", item_id, sale.id)

        return to_sale_dto(sale)
