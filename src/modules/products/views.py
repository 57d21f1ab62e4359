"""Product API views.

Exposes the ``ProductService`` via HTTP using DRF ViewSets.
Domain exceptions are caught and translated into appropriate
HTTP status codes; the view never swallows generic exceptions.
"""

from __future__ import annotations

from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.exceptions import error_response
from modules.core.validation import validation_messages
from modules.products.dtos import CreateProductDTO, UpdateProductDTO
from modules.products.exceptions import ProductAlreadyExists, ProductNotFound
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.serializers import ProductSerializer
from modules.products.services import ProductService

_NOT_FOUND = "Product not found."


class ProductViewSet(GenericViewSet):
    """ViewSet for catalog CRUD operations.

    Uses ``ProductService`` with ``ProductDjangoRepository`` (DIP).
    All ORM access goes through the service/repository layer; query
    parameters are handed to the repository's ``ProductFilter``.
    """

    serializer_class = ProductSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ProductService(repository=ProductDjangoRepository())

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/products/?category=&search=&min_price=&max_price="""
        filters = {
            key: value
            for key, value in request.query_params.items()
            if key not in ("page", "page_size")
        }
        return self._paginated(self._service.list_products(filters or None))

    @action(detail=False, methods=["get"], url_path="search")
    def search(self, request: Request) -> Response:
        """GET /api/v1/products/search/?q="""
        return self._paginated(
            self._service.search_products(request.query_params.get("q", ""))
        )

    @action(detail=False, methods=["get"], url_path=r"category/(?P<category>[^/]+)")
    def by_category(self, request: Request, category: str | None = None) -> Response:
        """GET /api/v1/products/category/{category}/"""
        return self._paginated(self._service.list_by_category(category))

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/products/{pk}/"""
        try:
            product = self._service.get_product(pk)
        except ProductNotFound:
            return error_response(status.HTTP_404_NOT_FOUND, _NOT_FOUND)
        return Response(ProductSerializer(product).data)

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/products/"""
        try:
            dto = CreateProductDTO.model_validate(request.data)
        except PydanticValidationError as exc:
            return error_response(
                status.HTTP_400_BAD_REQUEST, validation_messages(exc)
            )

        try:
            product = self._service.create_product(dto)
        except ProductAlreadyExists as exc:
            return error_response(status.HTTP_409_CONFLICT, str(exc))

        out = ProductSerializer(product)
        return Response(out.data, status=status.HTTP_201_CREATED)

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT/PATCH /api/v1/products/{pk}/"""
        try:
            dto = UpdateProductDTO.model_validate(request.data)
        except PydanticValidationError as exc:
            return error_response(
                status.HTTP_400_BAD_REQUEST, validation_messages(exc)
            )

        try:
            product = self._service.update_product(pk, dto)
        except ProductNotFound:
            return error_response(status.HTTP_404_NOT_FOUND, _NOT_FOUND)
        except ProductAlreadyExists as exc:
            return error_response(status.HTTP_409_CONFLICT, str(exc))

        return Response(ProductSerializer(product).data)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/products/{pk}/"""
        return self.update(request, pk)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/products/{pk}/"""
        try:
            self._service.delete_product(pk)
        except ProductNotFound:
            return error_response(status.HTTP_404_NOT_FOUND, _NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)

    def _paginated(self, products) -> Response:
        page = self.paginate_queryset(products)
        if page is not None:
            return self.get_paginated_response(ProductSerializer(page, many=True).data)
        return Response(ProductSerializer(products, many=True).data)
