"""Application service: Delete Sale use case (hard delete)."""

from __future__ import annotations

import logging
from uuid import UUID

from sms.application.show_sale import load_sale
from sms.domain.exceptions import EntityNotFoundError
from sms.domain.repository.sale_repository import SaleRepository

logger = logging.getLogger(__name__)


class DeleteSaleHandler:

    def __init__(self, sale_repo: SaleRepository) -> None:
        self._sale_repo = sale_repo

    def handle(self, sale_id: UUID) -> str:
        """Delete the sale and return its sale number."""
        sale = load_sale(self._sale_repo, sale_id)

        if not self._sale_repo.delete(sale_id):
            raise EntityNotFoundError(f"Sale with ID '{sale_id}' not found")

        logger.info("Deleted sale %s (%s)", sale.sale_number, sale_id)
        return sale.sale_number
