"""
Tests for the ledger exception hierarchy.
"""

import pytest

from medstock.core.exceptions import (
    InsufficientStockError,
    InventoryError,
    MedicineNotFoundError,
    PersistenceError,
    SaleNotFoundError,
    ValidationError,
)


@pytest.mark.parametrize(
    "error",
    [
        ValidationError("bad input"),
        MedicineNotFoundError(1),
        SaleNotFoundError(1),
        InsufficientStockError(1, requested=5, available=2),
        PersistenceError("process_sale"),
    ],
)
def test_all_errors_share_base(error):
    assert isinstance(error, InventoryError)
    assert str(error) == error.message


def test_insufficient_stock_is_distinct_from_not_found():
    error = InsufficientStockError("M1", requested=5, available=2)

    assert not isinstance(error, MedicineNotFoundError)
    assert error.details == {"medicine_id": "M1", "requested": 5, "available": 2}
    assert "Requested: 5, Available: 2" in error.message


def test_validation_error_is_value_error_with_errors():
    error = ValidationError("Invalid SaleCreateRequest", errors=[{"field": "quantity"}])

    assert isinstance(error, ValueError)
    assert error.errors == [{"field": "quantity"}]


def test_persistence_error_message_and_flag():
    error = PersistenceError("process_sale", "database is locked", transient=True)

    assert error.message == "Persistence failure during process_sale: database is locked"
    assert error.transient is True
    assert error.details["operation"] == "process_sale"
