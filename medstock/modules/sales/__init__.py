"""
Sales module

- ledger.py: StockLedger, the atomic reserve-or-fail primitive
- service.py: SaleService, the sale unit of work and sale listings
- repository.py: append-only sale persistence and revenue aggregates
- schemas.py: pydantic request/record models
"""

from .ledger import StockLedger
from .service import SaleService
from .repository import SaleRepository
from .schemas import SaleCreateRequest, SaleRecord, SaleListItem

__all__ = [
    "StockLedger",
    "SaleService",
    "SaleRepository",
    "SaleCreateRequest",
    "SaleRecord",
    "SaleListItem",
]
