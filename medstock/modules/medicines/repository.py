from decimal import Decimal
from typing import List, Optional, Dict, Any
from sqlalchemy.orm import Session
from sqlalchemy import func

from medstock.core.money import to_money
from medstock.shared.database.models import Medicine

class MedicineRepository:
    """
    Data access for medicine records. Bound to one Session; never commits,
    the caller's transaction scope does.
    """

    def __init__(self, db: Session):
        self.db = db

    # ==================== LOOKUPS ====================

    def get_by_id(self, medicine_id: int) -> Optional[Medicine]:
        return self.db.query(Medicine).filter(Medicine.id == medicine_id).first()

    def get_for_update(self, medicine_id: int) -> Optional[Medicine]:
        """
        Load a medicine and lock its row until the transaction ends
        (FOR UPDATE on PostgreSQL; SQLite already holds the write lock)
        """
        return self.db.query(Medicine).filter(
            Medicine.id == medicine_id
        ).with_for_update().first()

    def get_stock_level(self, medicine_id: int) -> Optional[int]:
        """Current quantity-on-hand, or None when the medicine does not exist"""
        return self.db.query(Medicine.quantity_in_stock).filter(
            Medicine.id == medicine_id
        ).scalar()

    def list_all(self) -> List[Medicine]:
        return self.db.query(Medicine).order_by(
            Medicine.created_at.desc(), Medicine.id.desc()
        ).all()

    def list_below_reorder(self, limit: int) -> List[Medicine]:
        """Medicines at or below reorder level, most depleted first, ties by id"""
        return self.db.query(Medicine).filter(
            Medicine.quantity_in_stock <= Medicine.reorder_level
        ).order_by(
            Medicine.quantity_in_stock.asc(), Medicine.id.asc()
        ).limit(limit).all()

    # ==================== AGGREGATES ====================

    def count_all(self) -> int:
        return self.db.query(func.count(Medicine.id)).scalar() or 0

    def count_below_reorder(self) -> int:
        return self.db.query(func.count(Medicine.id)).filter(
            Medicine.quantity_in_stock <= Medicine.reorder_level
        ).scalar() or 0

    def total_inventory_value(self) -> Decimal:
        value = self.db.query(
            func.coalesce(func.sum(Medicine.quantity_in_stock * Medicine.unit_price), 0)
        ).scalar()
        return to_money(value)

    # ==================== STOCK MOVEMENTS ====================

    def decrement_stock(self, medicine_id: int, quantity: int) -> bool:
        """
        Check-and-decrement in one statement. Matches no row (and changes
        nothing) when the medicine is missing or holds fewer than `quantity`.
        """
        rows_updated = self.db.query(Medicine).filter(
            Medicine.id == medicine_id,
            Medicine.quantity_in_stock >= quantity
        ).update(
            {Medicine.quantity_in_stock: Medicine.quantity_in_stock - quantity},
            synchronize_session="evaluate"
        )
        return rows_updated == 1

    def increment_stock(self, medicine_id: int, quantity: int) -> bool:
        rows_updated = self.db.query(Medicine).filter(
            Medicine.id == medicine_id
        ).update(
            {Medicine.quantity_in_stock: Medicine.quantity_in_stock + quantity},
            synchronize_session="evaluate"
        )
        return rows_updated == 1

    # ==================== RECORD MAINTENANCE ====================

    def create(self, medicine_data: Dict[str, Any]) -> Medicine:
        medicine = Medicine(**medicine_data)
        self.db.add(medicine)
        self.db.flush()
        self.db.refresh(medicine)
        return medicine

    def apply_update(self, medicine: Medicine, changes: Dict[str, Any]) -> Medicine:
        for field, value in changes.items():
            setattr(medicine, field, value)
        self.db.flush()
        self.db.refresh(medicine)
        return medicine
