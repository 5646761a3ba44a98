"""Customer service layer (Use Cases).

Orchestrates business logic for the Customer aggregate, delegating
persistence to the injected ``ICustomerRepository``.

Business rules enforced here:
- Name and phone are validated by the DTO before any query is issued.
- ``customer_code`` is drawn until no stored customer carries it.
- Only contact, address and preference fields can change afterwards.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional

import structlog
from django.db import transaction

from modules.core.identifiers import generate_customer_id
from modules.customers.exceptions import CustomerNotFound
from modules.customers.models import Customer

if TYPE_CHECKING:
    from modules.customers.dtos import CreateCustomerDTO, UpdateCustomerDTO
    from modules.customers.repositories.interfaces import ICustomerRepository

logger = structlog.get_logger(__name__)


class CustomerService:
    """Application service for Customer use-cases.

    Receives an ``ICustomerRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: ICustomerRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_customer(self, dto: CreateCustomerDTO) -> Customer:
        """Register a new customer under a freshly generated code.

        Raises:
            IdentifierSpaceExhausted: no free customer code was found.
        """
        customer_code = generate_customer_id(self._repo.code_exists)

        customer = Customer(
            customer_code=customer_code,
            name=dto.name,
            phone=dto.phone,
            email=dto.email or "",
            address_street=dto.address.street,
            address_city=dto.address.city,
            address_state=dto.address.state,
            address_pin_code=dto.address.pin_code,
            address_country=dto.address.country,
            notify_email=dto.preferences.email,
            notify_sms=dto.preferences.sms,
            notify_whatsapp=dto.preferences.whatsapp,
        )
        customer = self._repo.save(customer)
        logger.info(
            "customer.created",
            customer_id=str(customer.id),
            customer_code=customer.customer_code,
            phone=customer.phone,
        )
        return customer

    @transaction.atomic
    def update_customer(self, id: str, dto: UpdateCustomerDTO) -> Customer:
        """Update contact details, address or preferences.

        Raises:
            CustomerNotFound: if the customer does not exist.
        """
        customer = self._repo.get_by_id(id)
        if not customer:
            raise CustomerNotFound(f"Customer {id} not found.")

        for field in ("name", "phone"):
            value = getattr(dto, field)
            if value is not None:
                setattr(customer, field, value)
        if dto.email is not None:
            customer.email = dto.email

        # Nested blocks are partial too: omitted keys keep the stored value.
        if dto.address is not None:
            for field in dto.address.model_fields_set:
                setattr(customer, f"address_{field}", getattr(dto.address, field))

        if dto.preferences is not None:
            for field in dto.preferences.model_fields_set:
                setattr(customer, f"notify_{field}", getattr(dto.preferences, field))

        customer = self._repo.save(customer)
        logger.info("customer.updated", customer_id=str(id))
        return customer

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_customers(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> List[Customer]:
        """Return a list of customers, optionally filtered."""
        return self._repo.list(filters)

    def search_customers(self, query: str) -> List[Customer]:
        """Case-insensitive substring match on name, phone or email."""
        query = (query or "").strip()
        if not query:
            return []
        return self._repo.search(query)

    def get_customer(self, id: str) -> Customer:
        """Retrieve a single customer by ID.

        Raises:
            CustomerNotFound: if the customer does not exist.
        """
        customer = self._repo.get_by_id(id)
        if not customer:
            raise CustomerNotFound(f"Customer {id} not found.")
        return customer

    def get_by_code(self, customer_code: str) -> Customer:
        customer = self._repo.get_by_code(customer_code)
        if not customer:
            raise CustomerNotFound(f"Customer {customer_code} not found.")
        return customer

    def list_order_summaries(self) -> List[Customer]:
        """Every customer with its order count, last order date and spend."""
        return self._repo.with_order_summary()

    def get_order_summary(self, id: str) -> Customer:
        summaries = self._repo.with_order_summary(id)
        if not summaries:
            raise CustomerNotFound(f"Customer {id} not found.")
        return summaries[0]
