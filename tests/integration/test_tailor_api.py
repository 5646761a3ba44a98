"""Integration tests for the tailor and production API."""

import pytest

from modules.staff.models import StaffRole, StaffUser
from modules.tailors.models import TailorPerformance

pytestmark = pytest.mark.integration


class TestTailorAPI:
    def test_onboard(self, auth_client, store):
        user = StaffUser.objects.create(username="meera", role=StaffRole.TAILOR, store=store)

        response = auth_client.post(
            "/api/v1/tailors/",
            {"user_id": str(user.id), "specializations": ["Blouse"], "hourly_rate": "350.00"},
            format="json",
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["tailor_code"].startswith("TLR")
        assert data["username"] == "meera"
        assert data["specializations"] == ["blouse"]

    def test_onboard_twice(self, auth_client, tailor):
        response = auth_client.post(
            "/api/v1/tailors/", {"user_id": str(tailor.user_id)}, format="json"
        )
        assert response.status_code == 409

    def test_onboard_without_user(self, auth_client):
        response = auth_client.post("/api/v1/tailors/", {}, format="json")
        assert response.status_code == 400
        assert response.json()["code"] == "validation_error"

    def test_mark_unavailable(self, auth_client, tailor):
        response = auth_client.patch(
            f"/api/v1/tailors/{tailor.id}/", {"is_available": False}, format="json"
        )
        assert response.status_code == 200
        assert response.json()["data"]["is_available"] is False

        available = auth_client.get("/api/v1/tailors/available/").json()["data"]
        assert available == []
        listed = auth_client.get("/api/v1/tailors/?available=false").json()["data"]
        assert [row["tailor_code"] for row in listed] == ["TLR0001"]

    def test_assignments_of_tailor(self, auth_client, tailor, make_order, assignment_service, actor):
        order = make_order()
        assignment_service.assign_order_to_tailor(str(order.id), str(tailor.id), actor)

        data = auth_client.get(f"/api/v1/tailors/{tailor.id}/assignments/?active=true").json()["data"]

        assert [row["order_number"] for row in data] == [order.order_number]

    def test_performance(self, auth_client, tailor):
        TailorPerformance.objects.create(tailor=tailor, month_year="2026-02-01", orders_completed=7)
        TailorPerformance.objects.create(tailor=tailor, month_year="2026-03-01", orders_completed=4)

        all_rows = auth_client.get(f"/api/v1/tailors/{tailor.id}/performance/").json()["data"]
        february = auth_client.get(
            f"/api/v1/tailors/{tailor.id}/performance/?month=2026-02"
        ).json()["data"]

        assert [row["month_year"] for row in all_rows] == ["2026-03-01", "2026-02-01"]
        assert [row["orders_completed"] for row in february] == [7]

    def test_performance_bad_month(self, auth_client, tailor):
        response = auth_client.get(f"/api/v1/tailors/{tailor.id}/performance/?month=02-2026")
        assert response.status_code == 400


class TestProductionAPI:
    def test_assign_busy_tailor(self, auth_client, tailor, make_order):
        tailor.current_order_count = tailor.max_concurrent_orders
        tailor.save()
        order = make_order()

        response = auth_client.post(
            "/api/v1/assignments/",
            {"order_id": str(order.id), "tailor_id": str(tailor.id)},
            format="json",
        )

        assert response.status_code == 422
        assert response.json()["code"] == "tailor_at_capacity"

    def test_assign_twice(self, auth_client, tailor, make_order):
        order = make_order()
        payload = {"order_id": str(order.id), "tailor_id": str(tailor.id)}
        auth_client.post("/api/v1/assignments/", payload, format="json")

        response = auth_client.post("/api/v1/assignments/", payload, format="json")

        assert response.status_code == 409
        assert response.json()["code"] == "order_already_assigned"

    def test_list_filtered(self, auth_client, tailor, make_order, assignment_service, actor):
        first = assignment_service.assign_order_to_tailor(str(make_order().id), str(tailor.id), actor)
        assignment_service.assign_order_to_tailor(str(make_order().id), str(tailor.id), actor)
        assignment_service.start_assignment(str(first.id), actor)

        body = auth_client.get("/api/v1/assignments/?status=in_progress").json()

        assert [row["id"] for row in body["data"]] == [str(first.id)]
        assert body["pagination"]["total"] == 1

    def test_quality_check_rating_out_of_range(self, auth_client, make_order):
        order = make_order()
        response = auth_client.post(
            "/api/v1/quality-checks/",
            {
                "order_id": str(order.id),
                "overall_quality": "good",
                "stitching_quality": 6,
                "finishing_quality": 3,
                "measurement_accuracy": 3,
                "design_adherence": 3,
            },
            format="json",
        )
        assert response.status_code == 400

    def test_quality_checks_need_order_param(self, auth_client):
        response = auth_client.get("/api/v1/quality-checks/")
        assert response.status_code == 400
        assert response.json()["code"] == "validation_error"
