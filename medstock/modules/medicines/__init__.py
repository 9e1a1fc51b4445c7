"""
Medicines module

- repository.py: data access, including the fused stock decrement
- service.py: creation, whitelisted updates, restocking
- schemas.py: pydantic request/record models
"""

from .repository import MedicineRepository
from .service import MedicineService
from .schemas import MedicineCreate, MedicineUpdate, MedicineRecord

__all__ = [
    "MedicineRepository",
    "MedicineService",
    "MedicineCreate",
    "MedicineUpdate",
    "MedicineRecord",
]
