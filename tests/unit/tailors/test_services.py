"""Unit tests for TailorService."""

from __future__ import annotations

from decimal import Decimal
from uuid import uuid4

import pytest

from modules.core.identifiers import TAILOR_CODE_PATTERN
from modules.staff.exceptions import StaffUserNotFound
from modules.staff.models import StaffRole, StaffUser
from modules.staff.repositories import StaffDjangoRepository
from modules.tailors.dtos import CreateTailorDTO, UpdateTailorDTO
from modules.tailors.exceptions import TailorAlreadyExists, TailorNotFound
from modules.tailors.models import Tailor
from modules.tailors.repositories import TailorDjangoRepository
from modules.tailors.services import TailorService

pytestmark = pytest.mark.unit


@pytest.fixture()
def service():
    return TailorService(TailorDjangoRepository(), StaffDjangoRepository())


@pytest.fixture()
def staff_tailor(store):
    return StaffUser.objects.create(username="meera", role=StaffRole.TAILOR, store=store)


class TestCreateTailor:
    def test_creates_profile_with_code(self, service, staff_tailor):
        tailor = service.create_tailor(
            CreateTailorDTO(
                user_id=staff_tailor.id,
                specializations=[" Kurta", "blouse", "kurta"],
                hourly_rate=Decimal("380.00"),
            )
        )
        assert TAILOR_CODE_PATTERN.match(tailor.tailor_code)
        assert tailor.specializations == ["kurta", "blouse"]
        assert tailor.current_order_count == 0
        assert tailor.quality_rating == Decimal("0.00")

    def test_one_profile_per_user(self, service, tailor):
        with pytest.raises(TailorAlreadyExists):
            service.create_tailor(CreateTailorDTO(user_id=tailor.user_id))

    def test_unknown_user(self, service):
        with pytest.raises(StaffUserNotFound):
            service.create_tailor(CreateTailorDTO(user_id=uuid4()))


class TestUpdateTailor:
    def test_partial_update(self, service, tailor):
        updated = service.update_tailor(
            str(tailor.id), UpdateTailorDTO(is_available=False, max_concurrent_orders=4)
        )
        assert updated.is_available is False
        assert updated.max_concurrent_orders == 4
        assert updated.hourly_rate == Decimal("400.00")

    def test_unknown(self, service):
        with pytest.raises(TailorNotFound):
            service.update_tailor(str(uuid4()), UpdateTailorDTO(is_available=False))


class TestAvailability:
    def test_least_loaded_first_and_unavailable_excluded(self, service, tailor, store):
        busy_user = StaffUser.objects.create(username="anil", role=StaffRole.TAILOR, store=store)
        idle_user = StaffUser.objects.create(username="joy", role=StaffRole.TAILOR, store=store)
        away_user = StaffUser.objects.create(username="sam", role=StaffRole.TAILOR, store=store)
        Tailor.objects.create(user=busy_user, tailor_code="TLR0002", current_order_count=3)
        Tailor.objects.create(user=idle_user, tailor_code="TLR0003", current_order_count=0)
        Tailor.objects.create(user=away_user, tailor_code="TLR0004", is_available=False)
        tailor.current_order_count = 1
        tailor.save()

        codes = [t.tailor_code for t in service.get_available_tailors()]

        assert codes == ["TLR0003", "TLR0001", "TLR0002"]
