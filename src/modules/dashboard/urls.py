"""Dashboard URL configuration."""

from __future__ import annotations

from rest_framework.routers import DefaultRouter

from modules.dashboard.views import DashboardViewSet

router = DefaultRouter(trailing_slash=True)
router.register("dashboard", DashboardViewSet, basename="dashboard")

urlpatterns = router.urls
