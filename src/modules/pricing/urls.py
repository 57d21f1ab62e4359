"""Special price URL configuration."""

from __future__ import annotations

from rest_framework.routers import DefaultRouter

from modules.pricing.views import SpecialPriceViewSet

router = DefaultRouter(trailing_slash=True)
router.register("special-prices", SpecialPriceViewSet, basename="special-price")

urlpatterns = router.urls
