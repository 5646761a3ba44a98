"""Integration tests for the dashboard API."""

import pytest

pytestmark = pytest.mark.integration


class TestDashboardAPI:
    def test_stats(self, auth_client, make_order):
        order = make_order()

        response = auth_client.get("/api/v1/dashboard/stats/")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["total_orders"] == 1
        assert data["pending_orders"] == 1
        assert data["today_revenue"] == "500.00"
        assert data["recent_orders"][0]["order_number"] == order.order_number
        assert len(data["daily_sales"]) == 7
        assert set(data["daily_sales"][0]) == {"date", "order_count", "advance_total"}

    def test_pending_orders(self, auth_client, make_order, order_service, actor):
        kept = make_order()
        order_service.cancel_order(str(make_order().id), actor)

        data = auth_client.get("/api/v1/dashboard/pending-orders/").json()["data"]

        assert [row["id"] for row in data] == [str(kept.id)]

    def test_requires_authentication(self, api_client):
        assert api_client.get("/api/v1/dashboard/stats/").status_code == 401
