"""
Tests for AggregationEngine and LowStockMonitor.
"""

from decimal import Decimal

import pytest

from medstock.core.exceptions import InsufficientStockError, ValidationError
from medstock.modules.dashboard import DashboardStats


class TestDashboardStats:
    def test_empty_store(self, medstock):
        stats = medstock.get_dashboard_stats()

        assert stats == DashboardStats(
            total_medicines=0,
            total_sales=0,
            total_revenue=Decimal("0.00"),
            today_sales=Decimal("0.00"),
            today_transactions=0,
            low_stock_count=0,
            total_inventory_value=Decimal("0.00"),
        )

    def test_totals_and_today_window(self, medstock, make_medicine, clock):
        aspirin = make_medicine(name="Aspirin", quantity_in_stock=30, reorder_level=5, unit_price=Decimal("1.50"))
        insulin = make_medicine(name="Insulin", quantity_in_stock=8, reorder_level=10, unit_price=Decimal("20.00"))

        # Yesterday
        clock.advance(days=-1)
        medstock.process_sale({"medicine_id": aspirin.id, "quantity": 10})  # 15.00
        clock.advance(days=1)

        # Today
        medstock.process_sale({"medicine_id": aspirin.id, "quantity": 2})  # 3.00
        medstock.process_sale({"medicine_id": insulin.id, "quantity": 1})  # 20.00

        stats = medstock.get_dashboard_stats()

        assert stats.total_medicines == 2
        assert stats.total_sales == 3
        assert stats.total_revenue == Decimal("38.00")
        assert stats.today_sales == Decimal("23.00")
        assert stats.today_transactions == 2
        assert stats.low_stock_count == 1
        # aspirin 18 x 1.50 + insulin 7 x 20.00
        assert stats.total_inventory_value == Decimal("167.00")

    def test_sale_just_before_midnight_is_not_today(self, medstock, make_medicine, clock):
        medicine = make_medicine(quantity_in_stock=10, unit_price=Decimal("5.00"))
        clock.current = clock.current.replace(hour=23, minute=59, second=59)
        medstock.process_sale({"medicine_id": medicine.id, "quantity": 1})

        clock.advance(seconds=2)
        stats = medstock.get_dashboard_stats()

        assert stats.total_revenue == Decimal("5.00")
        assert stats.today_sales == Decimal("0.00")
        assert stats.today_transactions == 0

    def test_repeated_reads_are_identical(self, medstock, make_medicine):
        medicine = make_medicine(quantity_in_stock=6, reorder_level=10)
        medstock.process_sale({"medicine_id": medicine.id, "quantity": 2})

        assert medstock.get_dashboard_stats() == medstock.get_dashboard_stats()

    def test_failed_sale_does_not_move_figures(self, medstock, make_medicine):
        medicine = make_medicine(quantity_in_stock=1)
        before = medstock.get_dashboard_stats()

        with pytest.raises(InsufficientStockError):
            medstock.process_sale({"medicine_id": medicine.id, "quantity": 2})

        assert medstock.get_dashboard_stats() == before


class TestRecentSales:
    def test_most_recent_first_and_limited(self, medstock, make_medicine, clock):
        medicine = make_medicine(quantity_in_stock=100)
        sale_ids = []
        for _ in range(4):
            sale_ids.append(medstock.process_sale({"medicine_id": medicine.id, "quantity": 1}).id)
            clock.advance(minutes=1)

        recent = medstock.aggregation.get_recent_sales(limit=3)

        assert [s.id for s in recent] == list(reversed(sale_ids))[:3]
        assert all(s.medicine_name == medicine.name for s in recent)

    def test_default_limit_from_settings(self, medstock, make_medicine, settings):
        medicine = make_medicine(quantity_in_stock=100)
        for _ in range(settings.recent_sales_limit + 2):
            medstock.process_sale({"medicine_id": medicine.id, "quantity": 1})

        assert len(medstock.aggregation.get_recent_sales()) == settings.recent_sales_limit


class TestLowStockMonitor:
    def test_filters_orders_and_breaks_ties_by_id(self, medstock, make_medicine):
        plenty = make_medicine(name="Plenty", quantity_in_stock=50, reorder_level=10)
        at_level = make_medicine(name="AtLevel", quantity_in_stock=10, reorder_level=10)
        empty_a = make_medicine(name="EmptyA", quantity_in_stock=0, reorder_level=5)
        low = make_medicine(name="Low", quantity_in_stock=3, reorder_level=20)
        empty_b = make_medicine(name="EmptyB", quantity_in_stock=0, reorder_level=1)

        result = medstock.get_low_stock(10)

        assert [m.id for m in result] == [empty_a.id, empty_b.id, low.id, at_level.id]
        assert plenty.id not in [m.id for m in result]
        assert all(m.is_low_stock for m in result)

    def test_truncates_to_limit(self, medstock, make_medicine):
        for qty in (4, 1, 3, 2):
            make_medicine(quantity_in_stock=qty, reorder_level=10)

        result = medstock.get_low_stock(2)

        assert [m.quantity_in_stock for m in result] == [1, 2]

    def test_deterministic_across_calls(self, medstock, make_medicine):
        for _ in range(5):
            make_medicine(quantity_in_stock=2, reorder_level=10)

        assert medstock.get_low_stock(3) == medstock.get_low_stock(3)

    def test_sale_can_push_medicine_into_low_stock(self, medstock, make_medicine):
        medicine = make_medicine(quantity_in_stock=12, reorder_level=10)
        assert medstock.get_low_stock() == []

        medstock.process_sale({"medicine_id": medicine.id, "quantity": 2})

        assert [m.id for m in medstock.get_low_stock()] == [medicine.id]
        assert medstock.get_dashboard_stats().low_stock_count == 1

    @pytest.mark.parametrize("limit", [0, -1, 1.5])
    def test_invalid_limit(self, medstock, limit):
        with pytest.raises(ValidationError):
            medstock.get_low_stock(limit)
