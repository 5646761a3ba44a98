"""Measurement URL configuration."""

from __future__ import annotations

from rest_framework.routers import DefaultRouter

from modules.measurements.views import MeasurementViewSet

router = DefaultRouter(trailing_slash=True)
router.register("measurements", MeasurementViewSet, basename="measurement")

urlpatterns = router.urls
