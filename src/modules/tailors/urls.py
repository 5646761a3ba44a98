"""Tailor URL configuration."""

from __future__ import annotations

from rest_framework.routers import DefaultRouter

from modules.tailors.views import TailorViewSet

router = DefaultRouter(trailing_slash=True)
router.register("tailors", TailorViewSet, basename="tailor")

urlpatterns = router.urls
