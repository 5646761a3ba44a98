"""Unit tests for CustomerService."""

from __future__ import annotations

from decimal import Decimal
from unittest import mock
from uuid import uuid4

import pytest

from modules.core.exceptions import IdentifierSpaceExhausted
from modules.core.identifiers import CUSTOMER_ID_PATTERN
from modules.customers.dtos import (
    AddressDTO,
    CreateCustomerDTO,
    PreferencesDTO,
    UpdateCustomerDTO,
)
from modules.customers.exceptions import CustomerNotFound
from modules.customers.models import Customer
from modules.customers.repositories import CustomerDjangoRepository
from modules.customers.services import CustomerService

pytestmark = pytest.mark.unit


@pytest.fixture()
def service():
    return CustomerService(repository=CustomerDjangoRepository())


class TestCreateCustomer:
    def test_generates_code(self, service):
        customer = service.create_customer(
            CreateCustomerDTO(
                name="Divya Varma",
                phone="+91 97450 88990",
                address=AddressDTO(city="Kochi", state="Kerala", pin_code="682011"),
            )
        )
        assert CUSTOMER_ID_PATTERN.match(customer.customer_code)
        assert customer.phone == "+919745088990"
        assert customer.address_city == "Kochi"
        assert customer.address_country == "India"
        assert customer.order_history == []

    def test_exhausted_code_space_creates_nothing(self, service):
        dto = CreateCustomerDTO(name="Divya", phone="9745088990")
        with mock.patch.object(service._repo, "code_exists", return_value=True):
            with pytest.raises(IdentifierSpaceExhausted):
                service.create_customer(dto)
        assert not Customer.objects.exists()


class TestUpdateCustomer:
    def test_updates_contact_and_preferences(self, service, customer):
        updated = service.update_customer(
            str(customer.id),
            UpdateCustomerDTO(
                email="arjun.m@example.com",
                preferences=PreferencesDTO(email=False, sms=True, whatsapp=True),
            ),
        )
        assert updated.email == "arjun.m@example.com"
        assert updated.name == "Arjun Menon"
        assert updated.notify_email is False
        assert updated.notify_whatsapp is True

    def test_partial_address_keeps_other_lines(self, service, customer):
        customer.address_street = "1 MG Road"
        customer.address_state = "Kerala"
        customer.save()

        updated = service.update_customer(
            str(customer.id), UpdateCustomerDTO(address={"pin_code": "682002"})
        )
        updated.refresh_from_db()
        assert updated.address_street == "1 MG Road"
        assert updated.address_city == "Kochi"
        assert updated.address_state == "Kerala"
        assert updated.address_pin_code == "682002"
        assert updated.address_country == "India"

    def test_partial_preferences_keep_opt_outs(self, service, customer):
        customer.notify_email = False
        customer.notify_sms = False
        customer.save()

        updated = service.update_customer(
            str(customer.id), UpdateCustomerDTO(preferences={"whatsapp": True})
        )
        updated.refresh_from_db()
        assert updated.notify_whatsapp is True
        assert updated.notify_email is False
        assert updated.notify_sms is False

    def test_code_is_never_changed(self, service, customer):
        updated = service.update_customer(str(customer.id), UpdateCustomerDTO(name="Arjun M"))
        assert updated.customer_code == "CUST-2026-00042"

    def test_unknown_customer(self, service):
        with pytest.raises(CustomerNotFound):
            service.update_customer(str(uuid4()), UpdateCustomerDTO(name="X"))


class TestQueries:
    def test_get_by_code(self, service, customer):
        assert service.get_by_code("CUST-2026-00042").id == customer.id

    def test_get_by_unknown_code(self, service):
        with pytest.raises(CustomerNotFound):
            service.get_by_code("CUST-2026-99999")

    def test_get_with_malformed_id(self, service):
        with pytest.raises(CustomerNotFound):
            service.get_customer("nope")

    @pytest.mark.parametrize("query", ["ARJUN", "98470", "arjun@example"])
    def test_search_matches_name_phone_email(self, service, customer, query):
        assert [c.id for c in service.search_customers(query)] == [customer.id]

    def test_blank_search(self, service, customer):
        assert service.search_customers("") == []


class TestOrderSummary:
    def test_counts_orders_and_spend(self, service, customer, make_order, order_service, actor):
        make_order(total_amount=Decimal("1500.00"))
        latest = make_order(total_amount=Decimal("800.00"), advance_paid=Decimal("0.00"))
        withdrawn = make_order(total_amount=Decimal("999.00"), advance_paid=Decimal("0.00"))
        order_service.cancel_order(str(withdrawn.id), actor)

        summary = service.get_order_summary(str(customer.id))

        assert summary.order_count == 3
        assert summary.total_spent == Decimal("2300.00")
        assert summary.last_order_date >= latest.order_date

    def test_most_recent_buyers_first(self, service, customer, make_order):
        quiet = Customer.objects.create(
            customer_code="CUST-2026-00043", name="Beena", phone="+919847000001"
        )
        make_order()

        rows = service.list_order_summaries()

        assert [row.id for row in rows] == [customer.id, quiet.id]
        assert rows[1].order_count == 0
        assert rows[1].last_order_date is None
        assert rows[1].total_spent == Decimal("0.00")

    def test_unknown_customer(self, service):
        with pytest.raises(CustomerNotFound):
            service.get_order_summary(str(uuid4()))
        with pytest.raises(CustomerNotFound):
            service.get_order_summary("nope")
