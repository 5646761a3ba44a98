"""Production URL configuration."""

from __future__ import annotations

from rest_framework.routers import DefaultRouter

from modules.production.views import AssignmentViewSet, QualityCheckViewSet

router = DefaultRouter(trailing_slash=True)
router.register("assignments", AssignmentViewSet, basename="assignment")
router.register("quality-checks", QualityCheckViewSet, basename="quality-check")

urlpatterns = router.urls
