import logging
from typing import Any, List

from medstock.core.context import AppContext
from medstock.core.exceptions import MedicineNotFoundError, ValidationError
from medstock.core.transaction import read_scope, transaction_scope
from medstock.core.validators import parse_model, require_positive_int

from .repository import MedicineRepository
from .schemas import MedicineCreate, MedicineRecord, MedicineUpdate

logger = logging.getLogger(__name__)

class MedicineService:
    """
    Maintenance of the medicine records the ledger sells from: creation,
    whitelisted updates and restocking. Stock only ever goes down through
    SaleService.
    """

    def __init__(self, context: AppContext):
        self.context = context

    # ==================== QUERIES ====================

    def get_medicine(self, medicine_id: int) -> MedicineRecord:
        with read_scope(self.context.session_factory, "get_medicine") as db:
            medicine = MedicineRepository(db).get_by_id(medicine_id)
            if medicine is None:
                raise MedicineNotFoundError(medicine_id)
            return MedicineRecord.model_validate(medicine)

    def list_medicines(self) -> List[MedicineRecord]:
        """All medicines, newest first"""
        with read_scope(self.context.session_factory, "list_medicines") as db:
            return [
                MedicineRecord.model_validate(m)
                for m in MedicineRepository(db).list_all()
            ]

    # ==================== MUTATIONS ====================

    def create_medicine(self, payload: Any) -> MedicineRecord:
        data = parse_model(MedicineCreate, payload)

        with transaction_scope(self.context.session_factory, "create_medicine") as db:
            medicine = MedicineRepository(db).create(data.model_dump())
            record = MedicineRecord.model_validate(medicine)

        logger.info(f"Medicine {record.id} '{record.name}' created with stock {record.quantity_in_stock}")
        return record

    def update_medicine(self, medicine_id: int, payload: Any) -> MedicineRecord:
        """
        Apply a MedicineUpdate. Unknown fields, quantity_in_stock and empty
        patches are rejected before the medicine is read.
        """
        update = parse_model(MedicineUpdate, payload)
        changes = update.changes()
        if not changes:
            raise ValidationError("No valid fields to update")

        with transaction_scope(
            self.context.session_factory,
            "update_medicine",
            lock_timeout_seconds=self.context.settings.lock_timeout_seconds
        ) as db:
            repository = MedicineRepository(db)
            medicine = repository.get_for_update(medicine_id)
            if medicine is None:
                raise MedicineNotFoundError(medicine_id)
            record = MedicineRecord.model_validate(repository.apply_update(medicine, changes))

        logger.info(f"Medicine {medicine_id} updated: {sorted(changes)}")
        return record

    def restock(self, medicine_id: int, quantity: int) -> MedicineRecord:
        """Add received units to the quantity-on-hand"""
        require_positive_int(quantity)

        with transaction_scope(
            self.context.session_factory,
            "restock",
            lock_timeout_seconds=self.context.settings.lock_timeout_seconds
        ) as db:
            repository = MedicineRepository(db)
            if not repository.increment_stock(medicine_id, quantity):
                raise MedicineNotFoundError(medicine_id)
            record = MedicineRecord.model_validate(repository.get_by_id(medicine_id))

        logger.info(f"Medicine {medicine_id} restocked by {quantity}, now {record.quantity_in_stock}")
        return record
