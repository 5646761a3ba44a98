"""Customer API views.

Exposes the ``CustomerService`` via HTTP using DRF ViewSets.  Domain
exceptions are rendered by ``ServiceAPIMixin.run`` into the failure
envelope; the view never swallows generic exceptions.
"""

from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.api import ServiceAPIMixin
from modules.customers.dtos import CreateCustomerDTO, UpdateCustomerDTO
from modules.customers.models import Customer
from modules.customers.repositories import CustomerDjangoRepository
from modules.customers.serializers import (
    CustomerInputSerializer,
    CustomerSerializer,
    CustomerSummarySerializer,
)
from modules.customers.services import CustomerService
from modules.measurements.dtos import MeasurementDTO
from modules.measurements.repositories import MeasurementDjangoRepository
from modules.measurements.serializers import (
    MeasurementInputSerializer,
    MeasurementSerializer,
)
from modules.measurements.services import MeasurementService
from modules.orders.serializers import OrderListSerializer
from modules.orders.services import build_order_service


class CustomerViewSet(ServiceAPIMixin, GenericViewSet):
    """ViewSet for customer registration, look-up and search.

    There is no destroy action: customers are never deleted.
    """

    queryset = Customer.objects.none()
    serializer_class = CustomerSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = CustomerService(repository=CustomerDjangoRepository())
        self._measurements = MeasurementService(
            measurement_repository=MeasurementDjangoRepository(),
            customer_repository=CustomerDjangoRepository(),
        )

    # ------------------------------------------------------------------
    # List / Retrieve / Search
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/customers/?city=Kochi"""
        filters = {}
        if request.query_params.get("city"):
            filters["address_city__iexact"] = request.query_params["city"]
        customers = self._service.list_customers(filters)
        page = self.paginate_queryset(customers)
        return self.get_paginated_response(CustomerSerializer(page, many=True).data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/customers/{pk}/"""
        return self.run(
            lambda: self._service.get_customer(str(pk)),
            serializer_class=CustomerSerializer,
        )

    @action(detail=False, methods=["get"])
    def search(self, request: Request) -> Response:
        """GET /api/v1/customers/search/?q=john"""
        return self.run(
            lambda: self._service.search_customers(request.query_params.get("q", "")),
            serializer_class=CustomerSerializer,
            many=True,
        )

    @action(detail=False, methods=["get"], url_path="summary")
    def summaries(self, request: Request) -> Response:
        """GET /api/v1/customers/summary/"""
        customers = self._service.list_order_summaries()
        page = self.paginate_queryset(customers)
        return self.get_paginated_response(CustomerSummarySerializer(page, many=True).data)

    @action(detail=True, methods=["get"])
    def summary(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/customers/{pk}/summary/"""
        return self.run(
            lambda: self._service.get_order_summary(str(pk)),
            serializer_class=CustomerSummarySerializer,
        )

    @action(detail=False, methods=["get"], url_path=r"code/(?P<code>CUST-\d{4}-\d{5})")
    def by_code(self, request: Request, code: str) -> Response:
        """GET /api/v1/customers/code/{customer_code}/"""
        return self.run(
            lambda: self._service.get_by_code(code),
            serializer_class=CustomerSerializer,
        )

    # ------------------------------------------------------------------
    # Create / Update
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/customers/"""
        serializer = CustomerInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        def operation() -> Customer:
            dto = CreateCustomerDTO(
                name=data.get("name", ""),
                phone=data.get("phone", ""),
                email=data.get("email") or None,
                **_nested(data),
            )
            return self._service.create_customer(dto)

        return self.run(
            operation,
            serializer_class=CustomerSerializer,
            status_code=status.HTTP_201_CREATED,
        )

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/customers/{pk}/"""
        serializer = CustomerInputSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        def operation() -> Customer:
            dto = UpdateCustomerDTO(
                name=data.get("name"),
                phone=data.get("phone"),
                email=data.get("email") or None,
                **_nested(data),
            )
            return self._service.update_customer(str(pk), dto)

        return self.run(operation, serializer_class=CustomerSerializer)

    # ------------------------------------------------------------------
    # Nested resources
    # ------------------------------------------------------------------

    @action(detail=True, methods=["get"])
    def orders(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/customers/{pk}/orders/"""
        return self.run(
            lambda: build_order_service().list_customer_orders(str(pk)),
            serializer_class=OrderListSerializer,
            many=True,
        )

    @action(detail=True, methods=["get", "post"])
    def measurements(self, request: Request, pk: str | None = None) -> Response:
        """GET (history) or POST (record new) /api/v1/customers/{pk}/measurements/"""
        if request.method == "GET":
            return self.run(
                lambda: self._measurements.list_history(str(pk)),
                serializer_class=MeasurementSerializer,
                many=True,
            )

        serializer = MeasurementInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        return self.run(
            lambda: self._measurements.record_measurements(
                str(pk), MeasurementDTO(**serializer.validated_data)
            ),
            serializer_class=MeasurementSerializer,
            status_code=status.HTTP_201_CREATED,
        )

    @action(detail=True, methods=["get"], url_path="measurements/current")
    def current_measurements(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/customers/{pk}/measurements/current/"""
        return self.run(
            lambda: self._measurements.get_current(str(pk)),
            serializer_class=MeasurementSerializer,
        )


def _nested(data: dict) -> dict:
    nested = {}
    if data.get("address") is not None:
        nested["address"] = dict(data["address"])
    if data.get("preferences") is not None:
        nested["preferences"] = dict(data["preferences"])
    return nested
