"""Staff API views."""

from __future__ import annotations

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.api import ServiceAPIMixin
from modules.staff.dtos import CreateStaffUserDTO, UpdateStaffUserDTO
from modules.staff.models import StaffUser
from modules.staff.repositories import StaffDjangoRepository
from modules.staff.serializers import (
    CreateStaffUserSerializer,
    StaffUserSerializer,
    UpdateStaffUserSerializer,
)
from modules.staff.services import StaffService


class StaffUserViewSet(ServiceAPIMixin, GenericViewSet):
    queryset = StaffUser.objects.none()
    serializer_class = StaffUserSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = StaffService(StaffDjangoRepository())

    def create(self, request: Request) -> Response:
        """POST /api/v1/staff/"""
        serializer = CreateStaffUserSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        return self.run(
            lambda: self._service.create_user(
                CreateStaffUserDTO(
                    username=data["username"],
                    email=data.get("email") or None,
                    phone=data.get("phone", ""),
                    role=data["role"],
                    store_id=data.get("store_id"),
                )
            ),
            serializer_class=StaffUserSerializer,
            status_code=status.HTTP_201_CREATED,
        )

    def list(self, request: Request) -> Response:
        """GET /api/v1/staff/?role=tailor"""
        filters = {}
        if request.query_params.get("role"):
            filters["role"] = request.query_params["role"]
        users = self._service.list_users(filters)
        page = self.paginate_queryset(users)
        return self.get_paginated_response(StaffUserSerializer(page, many=True).data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/staff/{pk}/"""
        return self.run(
            lambda: self._service.get_user(str(pk)),
            serializer_class=StaffUserSerializer,
        )

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/staff/{pk}/

        Body: any of ``email``, ``phone``, ``role``, ``store_id``, ``is_active``.
        """
        serializer = UpdateStaffUserSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        if data.get("email") == "":
            data["email"] = None
        return self.run(
            lambda: self._service.update_user(str(pk), UpdateStaffUserDTO(**data)),
            serializer_class=StaffUserSerializer,
        )
