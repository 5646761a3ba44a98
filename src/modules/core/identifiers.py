"""Human-readable identifiers for customers, orders and tailors.

Formats:
- Customer: ``CUST-YYYY-NNNNN`` (year of registration, 5-digit random part).
- Order: ``ORD-<STORECODE>-YYYYMMDD-NNN`` (store code, order date, 3-digit
  random part).
- Tailor: ``TLR####`` (4-digit random part).

Formatting is pure and deterministic.  Generation draws a random
candidate, asks the caller-supplied ``exists`` callable whether a row with
exactly that value is already stored, and repeats until a free value is
found or ``max_attempts`` draws have been spent.
"""

from __future__ import annotations

import re
import secrets
from datetime import date, datetime
from typing import Callable, Optional

import structlog
from django.conf import settings
from django.utils import timezone

from modules.core.exceptions import IdentifierSpaceExhausted

logger = structlog.get_logger(__name__)

CUSTOMER_ID_PATTERN = re.compile(r"^CUST-\d{4}-\d{5}$")
ORDER_ID_PATTERN = re.compile(r"^ORD-[A-Z0-9]+-\d{8}-\d{3}$")
TAILOR_CODE_PATTERN = re.compile(r"^TLR\d{4}$")

CUSTOMER_ID_SPACE = 100_000
ORDER_ID_SPACE = 1_000
TAILOR_CODE_SPACE = 10_000

ExistsCheck = Callable[[str], bool]
RandomBelow = Callable[[int], int]


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------


def format_customer_id(year: int, number: int) -> str:
    return f"CUST-{year:04d}-{number:05d}"


def format_order_id(store_code: str, on_date: date, number: int) -> str:
    return f"ORD-{store_code}-{on_date:%Y%m%d}-{number:03d}"


def format_tailor_code(number: int) -> str:
    return f"TLR{number:04d}"


# ---------------------------------------------------------------------------
# Generation (uniqueness verified against the store)
# ---------------------------------------------------------------------------


def generate_unique(
    make_candidate: Callable[[], str],
    exists: ExistsCheck,
    *,
    kind: str,
    max_attempts: Optional[int] = None,
) -> str:
    """Draw candidates until ``exists`` reports one as free.

    Raises:
        IdentifierSpaceExhausted: every draw within ``max_attempts``
            collided with an existing row.
    """
    attempts = max_attempts or settings.OMS_IDENTIFIER_MAX_ATTEMPTS
    for attempt in range(1, attempts + 1):
        candidate = make_candidate()
        if not exists(candidate):
            return candidate
        logger.warning(
            "identifier.collision",
            kind=kind,
            candidate=candidate,
            attempt=attempt,
        )
    raise IdentifierSpaceExhausted(
        f"Failed to generate a unique {kind} after {attempts} attempts."
    )


def generate_customer_id(
    exists: ExistsCheck,
    *,
    now: Optional[datetime] = None,
    randbelow: RandomBelow = secrets.randbelow,
    max_attempts: Optional[int] = None,
) -> str:
    year = timezone.localtime(now or timezone.now()).year
    return generate_unique(
        lambda: format_customer_id(year, randbelow(CUSTOMER_ID_SPACE)),
        exists,
        kind="customer_id",
        max_attempts=max_attempts,
    )


def generate_order_id(
    store_code: str,
    exists: ExistsCheck,
    *,
    now: Optional[datetime] = None,
    randbelow: RandomBelow = secrets.randbelow,
    max_attempts: Optional[int] = None,
) -> str:
    today = timezone.localtime(now or timezone.now()).date()
    return generate_unique(
        lambda: format_order_id(store_code, today, randbelow(ORDER_ID_SPACE)),
        exists,
        kind="order_id",
        max_attempts=max_attempts,
    )


def generate_tailor_code(
    exists: ExistsCheck,
    *,
    randbelow: RandomBelow = secrets.randbelow,
    max_attempts: Optional[int] = None,
) -> str:
    return generate_unique(
        lambda: format_tailor_code(randbelow(TAILOR_CODE_SPACE)),
        exists,
        kind="tailor_code",
        max_attempts=max_attempts,
    )
