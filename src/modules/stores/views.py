"""Store API views."""

from __future__ import annotations

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.api import ServiceAPIMixin
from modules.stores.dtos import CreateStoreDTO
from modules.stores.models import Store
from modules.stores.repositories import StoreDjangoRepository
from modules.stores.serializers import CreateStoreSerializer, StoreSerializer
from modules.stores.services import StoreService


class StoreViewSet(ServiceAPIMixin, GenericViewSet):
    queryset = Store.objects.none()
    serializer_class = StoreSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = StoreService(StoreDjangoRepository())

    def create(self, request: Request) -> Response:
        """POST /api/v1/stores/"""
        serializer = CreateStoreSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        data["email"] = data.get("email") or None

        return self.run(
            lambda: self._service.create_store(CreateStoreDTO(**data)),
            serializer_class=StoreSerializer,
            status_code=status.HTTP_201_CREATED,
        )

    def list(self, request: Request) -> Response:
        """GET /api/v1/stores/?active=true"""
        active_only = request.query_params.get("active", "").lower() in {"1", "true"}
        stores = self._service.list_stores(active_only=active_only)
        page = self.paginate_queryset(stores)
        return self.get_paginated_response(StoreSerializer(page, many=True).data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/stores/{pk}/"""
        return self.run(
            lambda: self._service.get_store(str(pk)),
            serializer_class=StoreSerializer,
        )
