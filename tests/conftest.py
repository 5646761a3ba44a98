"""Shared fixtures: one store, its staff, a tailor and a customer.

Every test runs against the test database (pytest-django).  Services are
built on the Django repositories, the way the views build them.
"""

from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from modules.core.context import ActorContext
from modules.customers.models import Customer
from modules.measurements.models import CustomerMeasurement
from modules.orders.constants import OrderPriority, OrderType
from modules.orders.dtos import CreateOrderDTO
from modules.orders.services import build_order_service
from modules.production.services import (
    build_assignment_service,
    build_quality_check_service,
)
from modules.staff.models import StaffRole, StaffUser
from modules.stores.models import Store
from modules.tailors.models import Tailor

User = get_user_model()


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


# ---------------------------------------------------------------------------
# Staff and stores
# ---------------------------------------------------------------------------


@pytest.fixture()
def store():
    return Store.objects.create(code="KCH", name="Kochi Flagship", address_city="Kochi")


@pytest.fixture()
def sales_user(store):
    return StaffUser.objects.create(
        username="priya", role=StaffRole.SALES_STAFF, store=store
    )


@pytest.fixture()
def inspector(store):
    return StaffUser.objects.create(
        username="inspector", role=StaffRole.QUALITY_INSPECTOR, store=store
    )


@pytest.fixture()
def actor(sales_user):
    return ActorContext(user_id=sales_user.id, display_name=sales_user.username)


@pytest.fixture()
def inspector_actor(inspector):
    return ActorContext(user_id=inspector.id, display_name=inspector.username)


@pytest.fixture()
def tailor(store):
    user = StaffUser.objects.create(username="ravi", role=StaffRole.TAILOR, store=store)
    return Tailor.objects.create(
        user=user,
        tailor_code="TLR0001",
        specializations=["shirt"],
        hourly_rate=Decimal("400.00"),
        max_concurrent_orders=2,
    )


@pytest.fixture()
def auth_client(sales_user):
    """APIClient authenticated as the Django account of ``sales_user``."""
    client = APIClient()
    user = User.objects.create_user(username=sales_user.username, password="testpass123")
    client.force_authenticate(user=user)
    return client


# ---------------------------------------------------------------------------
# Customers and orders
# ---------------------------------------------------------------------------


@pytest.fixture()
def customer():
    return Customer.objects.create(
        customer_code="CUST-2026-00042",
        name="Arjun Menon",
        phone="+919847012345",
        email="arjun@example.com",
        address_city="Kochi",
    )


@pytest.fixture()
def measurement(customer):
    return CustomerMeasurement.objects.create(
        customer=customer,
        top_fl=Decimal("29.50"),
        top_sh=Decimal("17.00"),
        bottom_wr=Decimal("34.00"),
    )


@pytest.fixture()
def order_service():
    return build_order_service()


@pytest.fixture()
def assignment_service():
    return build_assignment_service()


@pytest.fixture()
def quality_check_service():
    return build_quality_check_service()


@pytest.fixture()
def make_order(order_service, customer, store, actor):
    """Factory placing a paid-in-part new-stitching order."""

    def _make(**overrides):
        data = {
            "customer_id": customer.id,
            "store_id": store.id,
            "order_type": OrderType.NEW_STITCHING,
            "priority": OrderPriority.MEDIUM,
            "garment_type": "shirt",
            "total_amount": Decimal("1500.00"),
            "advance_paid": Decimal("500.00"),
        }
        data.update(overrides)
        return order_service.create_order(CreateOrderDTO(**data), actor)

    return _make
