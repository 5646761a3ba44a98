"""Unit tests for the identifier generator.

Covers:
- Customer, order and tailor formats.
- Uniqueness checks against the ``exists`` callable.
- Exhaustion after the configured number of draws.
"""

from __future__ import annotations

from datetime import date, datetime
from itertools import count

import pytest
from django.utils import timezone

from modules.core.exceptions import IdentifierSpaceExhausted
from modules.core.identifiers import (
    CUSTOMER_ID_PATTERN,
    ORDER_ID_PATTERN,
    TAILOR_CODE_PATTERN,
    format_customer_id,
    format_order_id,
    format_tailor_code,
    generate_customer_id,
    generate_order_id,
    generate_tailor_code,
    generate_unique,
)

pytestmark = pytest.mark.unit

NOW = timezone.make_aware(datetime(2026, 3, 14, 10, 30))


def never_exists(_candidate: str) -> bool:
    return False


class TestFormatting:
    def test_customer_id_is_zero_padded(self):
        assert format_customer_id(2026, 7) == "CUST-2026-00007"

    def test_order_id_embeds_store_and_date(self):
        assert format_order_id("KCH", date(2026, 3, 14), 5) == "ORD-KCH-20260314-005"

    def test_tailor_code(self):
        assert format_tailor_code(42) == "TLR0042"

    def test_patterns_accept_formatted_values(self):
        assert CUSTOMER_ID_PATTERN.match(format_customer_id(2026, 99999))
        assert ORDER_ID_PATTERN.match(format_order_id("TVM2", date(2026, 1, 1), 0))
        assert TAILOR_CODE_PATTERN.match(format_tailor_code(0))


class TestGeneration:
    def test_customer_id_uses_current_year(self):
        value = generate_customer_id(never_exists, now=NOW, randbelow=lambda _n: 123)
        assert value == "CUST-2026-00123"

    def test_order_id_uses_order_date(self):
        value = generate_order_id("KCH", never_exists, now=NOW, randbelow=lambda _n: 7)
        assert value == "ORD-KCH-20260314-007"

    def test_tailor_code_is_random_in_range(self):
        value = generate_tailor_code(never_exists)
        assert TAILOR_CODE_PATTERN.match(value)

    def test_collision_draws_again(self):
        taken = {"ORD-KCH-20260314-001"}
        draws = count(1)
        value = generate_order_id(
            "KCH", taken.__contains__, now=NOW, randbelow=lambda _n: next(draws)
        )
        assert value == "ORD-KCH-20260314-002"

    def test_exists_is_asked_for_the_exact_candidate(self):
        asked = []

        def exists(candidate):
            asked.append(candidate)
            return False

        value = generate_customer_id(exists, now=NOW, randbelow=lambda _n: 5)
        assert asked == [value]

    def test_exhaustion_raises(self):
        with pytest.raises(IdentifierSpaceExhausted):
            generate_unique(lambda: "TLR0001", lambda _c: True, kind="tailor_code", max_attempts=3)

    def test_default_attempts_come_from_settings(self, settings):
        settings.OMS_IDENTIFIER_MAX_ATTEMPTS = 4
        attempts = []

        def exists(candidate):
            attempts.append(candidate)
            return True

        with pytest.raises(IdentifierSpaceExhausted):
            generate_tailor_code(exists)
        assert len(attempts) == 4

    def test_exhausted_error_maps_to_503(self):
        assert IdentifierSpaceExhausted.http_status == 503
