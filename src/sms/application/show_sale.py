"""Application service: Show Sale use case (query)."""

from __future__ import annotations

from uuid import UUID

from sms.application.dto import SaleDTO
from sms.application.mapping import to_sale_dto
from sms.domain.exceptions import EntityNotFoundError
from sms.domain.model.sale import Sale
from sms.domain.repository.sale_repository import SaleRepository


def load_sale(sale_repo: SaleRepository, sale_id: UUID) -> Sale:
    """Fetch a sale or raise EntityNotFoundError."""
    sale = sale_repo.get_by_id(sale_id)
    if sale is None:
        raise EntityNotFoundError(f"Sale with ID '{sale_id}' not found")
    return sale


class ShowSaleHandler:

    def __init__(self, sale_repo: SaleRepository) -> None:
        self._sale_repo = sale_repo

    def handle(self, sale_id: UUID) -> SaleDTO:
        return to_sale_dto(load_sale(self._sale_repo, sale_id))

    def handle_by_number(self, sale_number: str) -> SaleDTO:
        sale = self._sale_repo.get_by_sale_number(sale_number)
        if sale is None:
            raise EntityNotFoundError(f"Sale number '{sale_number}' not found")
        return to_sale_dto(sale)
