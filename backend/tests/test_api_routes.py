"""
HTTP API tests for the owner's day-to-day flows.
"""

import pytest


def _order_body(customer_id, **extra):
    body = {
        "customer_id": customer_id,
        "items": [{"service_id": "1", "quantity": 1}],
        "advance_paid": 100,
        "delivery_date": "2026-11-01",
    }
    body.update(extra)
    return body


class TestCustomers:

    def test_create_and_search(self, owner_client):
        resp = owner_client.post("/api/customers", json={"name": "Asha Verma", "phone": "9876543210"})
        assert resp.status_code == 201

        listed = owner_client.get("/api/customers?q=asha").get_json()
        assert listed["count"] == 1

    def test_duplicate_phone_is_conflict(self, owner_client, measured_customer):
        resp = owner_client.post("/api/customers", json={"name": "Other", "phone": "9876543210"})
        assert resp.status_code == 409
        assert resp.get_json()["error"] == "Customer with this phone number already exists"
        assert owner_client.get("/api/customers").get_json()["count"] == 1

    def test_missing_fields(self, owner_client):
        resp = owner_client.post("/api/customers", json={"name": "No Phone"})
        assert resp.status_code == 400

    def test_history(self, owner_client, measured_customer):
        owner_client.post("/api/orders", json=_order_body(measured_customer["id"]))
        history = owner_client.get(f"/api/customers/{measured_customer['id']}/history").get_json()
        assert history["order_count"] == 1
        assert history["yearly"][0]["total_spend"] == 473

    def test_unknown_customer_history(self, owner_client):
        assert owner_client.get("/api/customers/nope/history").status_code == 404


class TestOrders:

    def test_missing_measurement_reports_category(self, owner_client):
        customer = owner_client.post(
            "/api/customers", json={"name": "Ravi", "phone": "9123456780"}
        ).get_json()

        resp = owner_client.post("/api/orders", json=_order_body(customer["id"]))
        assert resp.status_code == 400
        body = resp.get_json()
        assert body["missing_category"] == "Shirt"
        assert body["customer_id"] == customer["id"]

    def test_create_order(self, owner_client, measured_customer):
        resp = owner_client.post("/api/orders", json=_order_body(measured_customer["id"]))
        assert resp.status_code == 201
        order = resp.get_json()
        assert order["total_amount"] == 473
        assert order["tax_amount"] == 23
        assert order["balance"] == 373
        assert order["status"] == "Pending"

    def test_status_filter(self, owner_client, measured_customer):
        order = owner_client.post("/api/orders", json=_order_body(measured_customer["id"])).get_json()
        owner_client.patch(f"/api/orders/{order['id']}/status", json={"status": "Ready"})

        assert owner_client.get("/api/orders?status=Ready").get_json()["count"] == 1
        assert owner_client.get("/api/orders?status=Pending").get_json()["count"] == 0
        assert owner_client.get("/api/orders?status=Lost").status_code == 400

    def test_invalid_status(self, owner_client, measured_customer):
        order = owner_client.post("/api/orders", json=_order_body(measured_customer["id"])).get_json()
        resp = owner_client.patch(f"/api/orders/{order['id']}/status", json={"status": "Shipped"})
        assert resp.status_code == 400


class TestPayments:

    def test_settle(self, owner_client, measured_customer):
        order = owner_client.post("/api/orders", json=_order_body(measured_customer["id"])).get_json()

        summary = owner_client.get("/api/payments").get_json()
        assert summary["outstanding"] == 373

        resp = owner_client.post(f"/api/payments/{order['id']}/settle")
        assert resp.status_code == 200
        assert resp.get_json()["balance"] == 0

        again = owner_client.post(f"/api/payments/{order['id']}/settle")
        assert again.status_code == 200
        assert again.get_json()["advance_paid"] == 473
        assert owner_client.get("/api/payments").get_json()["outstanding"] == 0

    def test_settle_unknown_order(self, owner_client):
        assert owner_client.post("/api/payments/nope/settle").status_code == 404


class TestStaffPayroll:

    def test_pay_salary_twice(self, owner_client):
        assert owner_client.post("/api/staff/2/pay-salary").status_code == 200
        assert owner_client.post("/api/staff/2/pay-salary").status_code == 200

        expenses = owner_client.get("/api/expenses").get_json()
        assert expenses["count"] == 2
        assert expenses["total"] == 30000

        report = owner_client.get("/api/reports").get_json()
        assert report["expenses_by_category"] == [{"category": "Salary", "amount": 30000}]

    def test_add_staff_duplicate(self, owner_client):
        body = {"name": "Ravi", "username": "ravi", "role": "TAILOR"}
        assert owner_client.post("/api/staff", json=body).status_code == 201
        assert owner_client.post("/api/staff", json=body).status_code == 409

    def test_performance(self, owner_client):
        perf = owner_client.get("/api/staff/2/performance").get_json()
        assert perf["name"] == "John Tailor"
        assert perf["completion_rate"] == 0


class TestInventoryAndCatalog:

    def test_low_only_filter(self, owner_client):
        owner_client.put("/api/inventory/1", json={"stock": 10})
        items = owner_client.get("/api/inventory?low_only=true").get_json()["items"]
        assert [i["name"] for i in items] == ["White Cotton Thread"]
        assert items[0]["is_low_stock"] is True

    def test_service_crud(self, owner_client):
        created = owner_client.post("/api/services", json={"name": "Kurta", "base_price": 800}).get_json()
        assert created["category"] == "Shirt"
        assert owner_client.put(f"/api/services/{created['id']}", json={"base_price": 900}).get_json()["base_price"] == 900
        assert owner_client.delete(f"/api/services/{created['id']}").status_code == 200
        assert owner_client.delete(f"/api/services/{created['id']}").status_code == 404


class TestMeasurementsApi:

    def test_templates(self, owner_client):
        templates = owner_client.get("/api/measurements/templates").get_json()
        assert "Collar" in templates["Shirt"]

    def test_styling_tips_fallback(self, owner_client):
        resp = owner_client.post("/api/measurements/styling-tips", json={
            "type": "Shirt",
            "details": {"Chest": "40", "Collar": "15"},
            "remarks": "Cotton",
        })
        assert resp.status_code == 200
        body = resp.get_json()
        assert body["advice"].startswith("Suggestion:")
        assert body["remarks"].startswith("Cotton\n\nAI Tip: ")

    def test_styling_tips_need_measurements(self, owner_client):
        resp = owner_client.post("/api/measurements/styling-tips", json={"type": "Shirt", "details": {}})
        assert resp.status_code == 400


class TestSettingsAndReports:

    def test_update_settings(self, owner_client):
        resp = owner_client.put("/api/settings", json={"tax_rate": 18})
        assert resp.status_code == 200
        assert owner_client.get("/api/settings").get_json()["tax_rate"] == 18

    def test_export(self, owner_client):
        snapshot = owner_client.get("/api/settings/export").get_json()
        assert snapshot["stitchflow_user"]["username"] == "admin"
        assert len(snapshot["stitchflow_services"]) == 3

    def test_dashboard(self, owner_client, measured_customer):
        owner_client.post("/api/orders", json=_order_body(measured_customer["id"]))
        dashboard = owner_client.get("/api/reports/dashboard").get_json()
        assert dashboard["total_revenue"] == 473
        assert dashboard["active_orders"] == 1
        assert dashboard["total_customers"] == 1

    def test_insight_fallback(self, owner_client):
        resp = owner_client.post("/api/reports/insight")
        assert resp.status_code == 200
        assert "delivery efficiency" in resp.get_json()["insight"].lower()

    def test_job_card_text(self, owner_client, measured_customer):
        order = owner_client.post("/api/orders", json=_order_body(measured_customer["id"])).get_json()
        resp = owner_client.get(f"/api/documents/job-card/{order['id']}?format=text")
        assert resp.status_code == 200
        assert resp.mimetype == "text/plain"
        assert order["order_number"] in resp.get_data(as_text=True)


@pytest.mark.parametrize("path", ["/api/customers/nope", "/api/inventory/nope", "/api/expenses/nope"])
def test_delete_unknown_records(owner_client, path):
    assert owner_client.delete(path).status_code == 404
