from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Tuple
from sqlalchemy.orm import Session
from sqlalchemy import func

from medstock.core.clock import as_utc
from medstock.core.money import to_money
from medstock.shared.database.models import Medicine, Sale

class SaleRepository:
    """
    Append-only access to sale records: sales are immutable, so there is no
    update or delete path. Never commits; the caller's transaction scope does.
    """

    def __init__(self, db: Session):
        self.db = db

    # ==================== WRITES ====================

    def insert(self, sale: Sale) -> Sale:
        self.db.add(sale)
        self.db.flush()
        return sale

    # ==================== LOOKUPS ====================

    def get_by_id(self, sale_id: int) -> Optional[Tuple[Sale, Optional[str]]]:
        return self.db.query(Sale, Medicine.name).outerjoin(
            Medicine, Sale.medicine_id == Medicine.id
        ).filter(Sale.id == sale_id).first()

    def list_all(self) -> List[Tuple[Sale, Optional[str]]]:
        """Every sale with the medicine's current name, newest first"""
        return self.db.query(Sale, Medicine.name).outerjoin(
            Medicine, Sale.medicine_id == Medicine.id
        ).order_by(Sale.sale_date.desc(), Sale.id.desc()).all()

    def list_recent(self, limit: int) -> List[Tuple[Sale, Optional[str]]]:
        return self.db.query(Sale, Medicine.name).outerjoin(
            Medicine, Sale.medicine_id == Medicine.id
        ).order_by(Sale.sale_date.desc(), Sale.id.desc()).limit(limit).all()

    # ==================== AGGREGATES ====================

    def count_all(self) -> int:
        return self.db.query(func.count(Sale.id)).scalar() or 0

    def sum_totals(self) -> Decimal:
        value = self.db.query(func.coalesce(func.sum(Sale.total_price), 0)).scalar()
        return to_money(value)

    def sum_totals_since(self, since: datetime, until: Optional[datetime] = None) -> Decimal:
        """Revenue of sales in [since, until)"""
        query = self.db.query(func.coalesce(func.sum(Sale.total_price), 0)).filter(
            Sale.sale_date >= as_utc(since)
        )
        if until is not None:
            query = query.filter(Sale.sale_date < as_utc(until))
        return to_money(query.scalar())

    def count_since(self, since: datetime, until: Optional[datetime] = None) -> int:
        """Number of sales in [since, until)"""
        query = self.db.query(func.count(Sale.id)).filter(Sale.sale_date >= as_utc(since))
        if until is not None:
            query = query.filter(Sale.sale_date < as_utc(until))
        return query.scalar() or 0
