"""User API views.

Domain exceptions are translated into HTTP status codes here;
nothing else is caught.
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
from modules.users.dtos import CreateUserDTO, UpdateUserDTO
from modules.users.exceptions import UserAlreadyExists, UserNotFound
from modules.users.repositories.django_repository import UserDjangoRepository
from modules.users.serializers import UserSerializer
from modules.users.services import UserService

_NOT_FOUND = "User not found."


class UserViewSet(GenericViewSet):
    """ViewSet for User CRUD operations (soft delete on DELETE)."""

    serializer_class = UserSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = UserService(repository=UserDjangoRepository())

    def list(self, request: Request) -> Response:
        """GET /api/v1/users/?role=&search="""
        filters = {
            key: value
            for key, value in request.query_params.items()
            if key not in ("page", "page_size")
        }
        return self._paginated(self._service.list_users(filters or None))

    @action(detail=False, methods=["get"], url_path="search")
    def search(self, request: Request) -> Response:
        """GET /api/v1/users/search/?q="""
        return self._paginated(
            self._service.search_users(request.query_params.get("q", ""))
        )

    @action(detail=False, methods=["get"], url_path=r"role/(?P<role>[^/.]+)")
    def by_role(self, request: Request, role: str | None = None) -> Response:
        """GET /api/v1/users/role/{role}/"""
        return self._paginated(self._service.list_by_role(role))

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/users/{pk}/"""
        try:
            user = self._service.get_user(pk)
        except UserNotFound:
            return error_response(status.HTTP_404_NOT_FOUND, _NOT_FOUND)
        return Response(UserSerializer(user).data)

    def create(self, request: Request) -> Response:
        """POST /api/v1/users/"""
        try:
            dto = CreateUserDTO.model_validate(request.data)
        except PydanticValidationError as exc:
            return error_response(
                status.HTTP_400_BAD_REQUEST, validation_messages(exc)
            )

        try:
            user = self._service.create_user(dto)
        except UserAlreadyExists as exc:
            return error_response(status.HTTP_409_CONFLICT, str(exc))

        return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT/PATCH /api/v1/users/{pk}/"""
        try:
            dto = UpdateUserDTO.model_validate(request.data)
        except PydanticValidationError as exc:
            return error_response(
                status.HTTP_400_BAD_REQUEST, validation_messages(exc)
            )

        try:
            user = self._service.update_user(pk, dto)
        except UserNotFound:
            return error_response(status.HTTP_404_NOT_FOUND, _NOT_FOUND)
        except UserAlreadyExists as exc:
            return error_response(status.HTTP_409_CONFLICT, str(exc))

        return Response(UserSerializer(user).data)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        return self.update(request, pk)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/users/{pk}/"""
        try:
            self._service.delete_user(pk)
        except UserNotFound:
            return error_response(status.HTTP_404_NOT_FOUND, _NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)

    def _paginated(self, users) -> Response:
        page = self.paginate_queryset(users)
        if page is not None:
            return self.get_paginated_response(UserSerializer(page, many=True).data)
        return Response(UserSerializer(users, many=True).data)
