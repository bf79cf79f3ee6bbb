"""
Aggregation tests for dashboard, reports and staff performance.
"""

from stitchflow.models import Order, Expense, InventoryItem, User, Customer, ROLE_TAILOR
from stitchflow.services import reporting_service


def _order(oid, total, created_at="2024-03-10T09:00:00Z", status="Pending", customer_id="c1",
           tailor_id=None, tax=0, advance=0):
    return Order(
        id=oid,
        order_number=f"ORD-{oid}",
        customer_id=customer_id,
        customer_name="Ravi",
        total_amount=total,
        advance_paid=advance,
        status=status,
        delivery_date="2024-04-01",
        created_at=created_at,
        tax_amount=tax,
        assigned_tailor_id=tailor_id,
    )


def _expense(eid, amount, category="Rent", date="2024-03-01"):
    return Expense(id=eid, category=category, amount=amount, date=date)


# =============================================================================
# FINANCIAL TOTALS
# =============================================================================


class TestFinancialSummary:

    def test_totals_and_profit(self):
        orders = [_order("1", 1050, tax=50), _order("2", 525, tax=25)]
        expenses = [_expense("e1", 400), _expense("e2", 100)]

        summary = reporting_service.financial_summary(orders, expenses)
        assert summary == {
            "total_revenue": 1575,
            "total_expenses": 500,
            "profit": 1075,
            "tax_liability": 75,
        }

    def test_empty_inputs(self):
        summary = reporting_service.financial_summary([], [])
        assert summary["total_revenue"] == 0
        assert summary["profit"] == 0

    def test_expenses_by_category_in_first_seen_order(self):
        expenses = [
            _expense("1", 15000, category="Salary"),
            _expense("2", 8000, category="Rent"),
            _expense("3", 15000, category="Salary"),
        ]
        assert reporting_service.expenses_by_category(expenses) == [
            {"category": "Salary", "amount": 30000},
            {"category": "Rent", "amount": 8000},
        ]


class TestMonthlySeries:

    def test_twelve_buckets(self):
        series = reporting_service.monthly_series([], [])
        assert [row["month"] for row in series] == reporting_service.MONTH_LABELS
        assert all(row["income"] == 0 and row["expense"] == 0 for row in series)

    def test_same_month_of_different_years_share_a_bucket(self):
        orders = [
            _order("1", 300, created_at="2023-03-05T10:00:00Z"),
            _order("2", 200, created_at="2024-03-20"),
        ]
        expenses = [_expense("e1", 50, date="2024-12-31")]

        series = reporting_service.monthly_series(orders, expenses)
        assert series[2] == {"month": "Mar", "income": 500, "expense": 0}
        assert series[11] == {"month": "Dec", "income": 0, "expense": 50}

    def test_unparseable_dates_are_skipped(self):
        series = reporting_service.monthly_series([_order("1", 300, created_at="soon")], [])
        assert sum(row["income"] for row in series) == 0


# =============================================================================
# INVENTORY / DELIVERY
# =============================================================================


class TestLowStock:

    def _item(self, stock, threshold):
        return InventoryItem(id="1", name="Thread", category="Thread", stock=stock, unit="Rolls",
                             low_stock_threshold=threshold)

    def test_boundary_counts_as_low(self):
        assert reporting_service.is_low_stock(self._item(10, 10))
        assert reporting_service.is_low_stock(self._item(9, 10))
        assert not reporting_service.is_low_stock(self._item(11, 10))

    def test_low_stock_items(self):
        items = [self._item(10, 10), self._item(200, 50)]
        assert len(reporting_service.low_stock_items(items)) == 1


class TestDeliveryEfficiency:

    def test_no_orders_is_zero(self):
        assert reporting_service.delivery_efficiency([]) == 0

    def test_rounded_percentage(self):
        orders = [
            _order("1", 100, status="Delivered"),
            _order("2", 100, status="Ready"),
            _order("3", 100, status="Pending"),
        ]
        assert reporting_service.delivery_efficiency(orders) == 33

    def test_active_orders_exclude_delivered(self):
        orders = [_order("1", 100, status="Delivered"), _order("2", 100, status="Ready")]
        assert [o.id for o in reporting_service.active_orders(orders)] == ["2"]


# =============================================================================
# CUSTOMER HISTORY
# =============================================================================


class TestYearlySummary:

    def test_grouped_by_year_newest_first(self):
        orders = [
            _order("1", 500, created_at="2023-06-01"),
            _order("2", 300, created_at="2024-01-15"),
        ]
        assert reporting_service.yearly_order_summary(orders) == [
            {"year": 2024, "order_count": 1, "total_spend": 300},
            {"year": 2023, "order_count": 1, "total_spend": 500},
        ]

    def test_filtered_by_customer(self):
        orders = [
            _order("1", 500, created_at="2023-06-01", customer_id="c1"),
            _order("2", 300, created_at="2023-08-15", customer_id="c2"),
            _order("3", 200, created_at="2023-09-15", customer_id="c1"),
        ]
        assert reporting_service.yearly_order_summary(orders, customer_id="c1") == [
            {"year": 2023, "order_count": 2, "total_spend": 700},
        ]


# =============================================================================
# STAFF
# =============================================================================


class TestStaffPerformance:

    def test_completion_rate(self):
        orders = [
            _order("1", 100, tailor_id="2", status="Delivered"),
            _order("2", 100, tailor_id="2", status="Stitching"),
            _order("3", 100, tailor_id="2", status="Pending"),
            _order("4", 100, tailor_id="9", status="Delivered"),
        ]
        assert reporting_service.staff_performance(orders, "2") == {
            "staff_id": "2",
            "active": 2,
            "completed": 1,
            "completion_rate": 33,
        }

    def test_no_assignments_is_zero(self):
        result = reporting_service.staff_performance([], "2")
        assert result["completion_rate"] == 0
        assert result["active"] == 0

    def test_overview_includes_every_member(self):
        staff = [
            User(id="1", name="Admin Owner", role="OWNER", username="admin"),
            User(id="2", name="John Tailor", role=ROLE_TAILOR, username="john", salary=15000),
        ]
        rows = reporting_service.staff_overview([_order("1", 100, tailor_id="2")], staff)
        assert [row["name"] for row in rows] == ["Admin Owner", "John Tailor"]
        assert rows[1]["active"] == 1
        assert rows[1]["salary"] == 15000


# =============================================================================
# PAGE BUNDLES
# =============================================================================


class TestBundles:

    def test_dashboard_summary(self, state):
        state.customers = [Customer(id="c1", name="Ravi", phone="1", created_at="2024-01-01")]
        state.orders = [_order(str(i), 100, status="Delivered" if i == 0 else "Pending") for i in range(7)]
        state.expenses = [_expense("e1", 250)]

        summary = reporting_service.dashboard_summary(state)
        assert summary["total_revenue"] == 700
        assert summary["total_expenses"] == 250
        assert summary["active_orders"] == 6
        assert summary["total_customers"] == 1
        assert summary["low_stock_count"] == 0
        assert len(summary["recent_orders"]) == reporting_service.RECENT_ORDER_COUNT

    def test_full_report(self, state):
        state.orders = [_order("1", 1050, tax=50, status="Delivered")]
        state.expenses = [_expense("e1", 1000, category="Salary")]

        report = reporting_service.full_report(state)
        assert report["revenue"] == 1050
        assert report["tax_liability"] == 50
        assert report["profit"] == 50
        assert report["delivery_efficiency"] == 100
        assert report["currency"] == "₹"
        assert len(report["monthly"]) == 12
