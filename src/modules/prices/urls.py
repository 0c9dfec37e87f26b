"""Price URL configuration."""

from __future__ import annotations

from rest_framework.routers import DefaultRouter

from modules.prices.views import PriceViewSet

router = DefaultRouter(trailing_slash=False)
router.register("prices", PriceViewSet, basename="price")

urlpatterns = router.urls
