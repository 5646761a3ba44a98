"""Staff URL configuration."""

from __future__ import annotations

from rest_framework.routers import DefaultRouter

from modules.staff.views import StaffUserViewSet

router = DefaultRouter(trailing_slash=True)
router.register("staff", StaffUserViewSet, basename="staff")

urlpatterns = router.urls
