"""Unit tests for order DTOs (validation happens before any store call)."""

from __future__ import annotations

from decimal import Decimal
from uuid import uuid4

import pytest
from pydantic import ValidationError

from modules.orders.dtos import CreateOrderDTO, PaymentDTO, StatusUpdateDTO
from modules.orders.exceptions import InvalidPayment

pytestmark = pytest.mark.unit


def _dto(**overrides) -> CreateOrderDTO:
    data = {
        "customer_id": uuid4(),
        "store_code": "kch",
        "order_type": "new_stitching",
        "garment_type": "shirt",
        "total_amount": Decimal("1500.00"),
        "advance_paid": Decimal("500.00"),
    }
    data.update(overrides)
    return CreateOrderDTO(**data)


class TestCreateOrderDTO:
    def test_defaults(self):
        dto = _dto()
        assert dto.priority == "medium"
        assert dto.fabric_unit == "meters"
        assert dto.style_images == []

    def test_store_code_is_normalised(self):
        assert _dto(store_code=" kch ").store_code == "KCH"

    def test_store_reference_required(self):
        with pytest.raises(ValidationError):
            _dto(store_code=None)

    def test_garment_type_required(self):
        with pytest.raises(ValidationError):
            _dto(garment_type="   ")

    def test_unknown_order_type(self):
        with pytest.raises(ValidationError):
            _dto(order_type="embroidery")

    def test_negative_amount(self):
        with pytest.raises(ValidationError):
            _dto(total_amount=Decimal("-1"))

    def test_frozen(self):
        dto = _dto()
        with pytest.raises(ValidationError):
            dto.garment_type = "kurta"


class TestResolvedBalance:
    def test_derived_when_omitted(self):
        assert _dto().resolved_balance(enforce=True) == Decimal("1000.00")

    def test_matching_balance_accepted(self):
        dto = _dto(balance_amount=Decimal("1000.00"))
        assert dto.resolved_balance(enforce=True) == Decimal("1000.00")

    def test_mismatch_rejected_when_enforced(self):
        dto = _dto(balance_amount=Decimal("900.00"))
        with pytest.raises(InvalidPayment):
            dto.resolved_balance(enforce=True)

    def test_mismatch_kept_when_not_enforced(self):
        dto = _dto(balance_amount=Decimal("900.00"))
        assert dto.resolved_balance(enforce=False) == Decimal("900.00")

    def test_advance_above_total_rejected(self):
        dto = _dto(advance_paid=Decimal("2000.00"))
        with pytest.raises(InvalidPayment):
            dto.resolved_balance(enforce=True)


def test_status_update_rejects_unknown_status():
    with pytest.raises(ValidationError):
        StatusUpdateDTO(status="lost")


def test_payment_must_be_positive():
    with pytest.raises(ValidationError):
        PaymentDTO(amount=Decimal("0"))
