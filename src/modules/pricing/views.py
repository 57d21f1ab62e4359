"""Special price API views.

Exposes ``SpecialPriceService`` and ``CatalogPricingProjector`` via HTTP.
Request bodies are handed to the service untouched: it validates them and
raises domain exceptions, which are translated into HTTP status codes here.
"""

from __future__ import annotations

from uuid import UUID

from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.exceptions import error_response
from modules.pricing.exceptions import (
    DuplicateSpecialPrice,
    PriceNotBelowOriginal,
    PricingError,
    PricingStorageError,
    ProductNotFound,
    SpecialPriceNotFound,
    SpecialPriceValidationError,
)
from modules.pricing.projections import CatalogPricingProjector
from modules.pricing.repositories import SpecialPriceDjangoRepository
from modules.pricing.serializers import SpecialPriceSerializer
from modules.pricing.services import SpecialPriceService
from modules.products.repositories.django_repository import ProductDjangoRepository

_NOT_FOUND = "Special price not found."
_USER_ID = r"user/(?P<user_id>[^/.]+)"


def _parse_uuid(value: str | None) -> UUID | None:
    try:
        return UUID(str(value))
    except ValueError:
        return None


def _pricing_error_response(exc: PricingError) -> Response:
    """Map a pricing domain exception to its HTTP response."""
    if isinstance(exc, SpecialPriceValidationError):
        return error_response(status.HTTP_400_BAD_REQUEST, exc.errors)
    if isinstance(exc, PriceNotBelowOriginal):
        return error_response(
            status.HTTP_400_BAD_REQUEST, str(exc), code="price_not_below_original"
        )
    if isinstance(exc, (SpecialPriceNotFound, ProductNotFound)):
        return error_response(status.HTTP_404_NOT_FOUND, str(exc))
    if isinstance(exc, DuplicateSpecialPrice):
        return error_response(
            status.HTTP_409_CONFLICT, str(exc), code="duplicate_special_price"
        )
    if isinstance(exc, PricingStorageError):
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "The pricing store is unavailable. Please try again later.",
        )
    raise exc


class SpecialPriceViewSet(GenericViewSet):
    """ViewSet for special price CRUD and per-user pricing views.

    Uses ``SpecialPriceService`` with Django repositories (DIP).
    """

    serializer_class = SpecialPriceSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        repository = SpecialPriceDjangoRepository()
        product_repository = ProductDjangoRepository()
        self._service = SpecialPriceService(
            repository=repository,
            product_repository=product_repository,
        )
        self._projector = CatalogPricingProjector(
            product_repository=product_repository,
            special_price_repository=repository,
        )

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/special-prices/?user_id=&product_id=&is_active="""
        filters = {
            key: value
            for key, value in request.query_params.items()
            if key not in ("page", "page_size")
        }
        try:
            special_prices = self._service.list_special_prices(filters or None)
        except PricingError as exc:
            return _pricing_error_response(exc)
        page = self.paginate_queryset(special_prices)
        if page is not None:
            return self.get_paginated_response(
                SpecialPriceSerializer(page, many=True).data
            )
        return Response(SpecialPriceSerializer(special_prices, many=True).data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/special-prices/{pk}/"""
        special_price_id = _parse_uuid(pk)
        if special_price_id is None:
            return error_response(status.HTTP_404_NOT_FOUND, _NOT_FOUND)
        try:
            special_price = self._service.get_special_price(special_price_id)
        except PricingError as exc:
            return _pricing_error_response(exc)
        return Response(SpecialPriceSerializer(special_price).data)

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/special-prices/"""
        try:
            special_price = self._service.create_special_price(request.data)
        except PricingError as exc:
            return _pricing_error_response(exc)
        out = SpecialPriceSerializer(special_price)
        return Response(out.data, status=status.HTTP_201_CREATED)

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT/PATCH /api/v1/special-prices/{pk}/"""
        special_price_id = _parse_uuid(pk)
        if special_price_id is None:
            return error_response(status.HTTP_404_NOT_FOUND, _NOT_FOUND)
        try:
            special_price = self._service.update_special_price(
                special_price_id, request.data
            )
        except PricingError as exc:
            return _pricing_error_response(exc)
        return Response(SpecialPriceSerializer(special_price).data)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/special-prices/{pk}/"""
        return self.update(request, pk)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/special-prices/{pk}/"""
        special_price_id = _parse_uuid(pk)
        if special_price_id is None:
            return error_response(status.HTTP_404_NOT_FOUND, _NOT_FOUND)
        try:
            self._service.delete_special_price(special_price_id)
        except PricingError as exc:
            return _pricing_error_response(exc)
        return Response(status=status.HTTP_204_NO_CONTENT)

    # ------------------------------------------------------------------
    # Per-user views
    # ------------------------------------------------------------------

    @action(detail=False, methods=["get"], url_path=_USER_ID)
    def for_user(self, request: Request, user_id: str | None = None) -> Response:
        """GET /api/v1/special-prices/user/{user_id}/ (active and inactive)"""
        uid = _parse_uuid(user_id)
        if uid is None:
            return error_response(status.HTTP_404_NOT_FOUND, "User not found.")
        try:
            special_prices = self._service.get_special_prices_for_user(uid)
        except PricingError as exc:
            return _pricing_error_response(exc)
        return Response(SpecialPriceSerializer(special_prices, many=True).data)

    @action(detail=False, methods=["get"], url_path=_USER_ID + "/pricing")
    def user_pricing(self, request: Request, user_id: str | None = None) -> Response:
        """GET /api/v1/special-prices/user/{user_id}/pricing/"""
        uid = _parse_uuid(user_id)
        if uid is None:
            return error_response(status.HTTP_404_NOT_FOUND, "User not found.")
        try:
            summary = self._service.get_user_pricing_summary(uid)
        except PricingError as exc:
            return _pricing_error_response(exc)
        return Response(summary.model_dump(mode="json"))

    @action(detail=False, methods=["get"], url_path=_USER_ID + "/products")
    def user_products(self, request: Request, user_id: str | None = None) -> Response:
        """GET /api/v1/special-prices/user/{user_id}/products/"""
        uid = _parse_uuid(user_id)
        if uid is None:
            return error_response(status.HTTP_404_NOT_FOUND, "User not found.")
        try:
            view = self._projector.get_catalog_with_pricing_for_user(uid)
        except PricingError as exc:
            return _pricing_error_response(exc)
        return Response([entry.model_dump(mode="json") for entry in view])

    @action(
        detail=False,
        methods=["get"],
        url_path=_USER_ID + r"/product/(?P<product_id>[^/.]+)",
    )
    def user_product(
        self,
        request: Request,
        user_id: str | None = None,
        product_id: str | None = None,
    ) -> Response:
        """GET /api/v1/special-prices/user/{user_id}/product/{product_id}/"""
        uid, pid = _parse_uuid(user_id), _parse_uuid(product_id)
        special_price = None
        if uid is not None and pid is not None:
            try:
                special_price = self._service.get_special_price_for_user_and_product(
                    uid, pid
                )
            except PricingError as exc:
                return _pricing_error_response(exc)
        if special_price is None:
            return error_response(
                status.HTTP_404_NOT_FOUND,
                "No special price for this user and product.",
            )
        return Response(SpecialPriceSerializer(special_price).data)
