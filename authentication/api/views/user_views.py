from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from authentication.api.serializers import UserCreateSerializer, UserSerializer, UserUpdateSerializer
from authentication.api.serializers.response_serializers import ErrorResponseSerializer
from authentication.domain.services import UserService
from authentication.permissions import IsAdminRole
from infrastructure.container import container
from marketplace.api.errors import error_response


class UserViewSet(viewsets.ViewSet):
    """
    User management - admin only.
    """

    permission_classes = [IsAuthenticated, IsAdminRole]
    lookup_value_regex = r"\d+"

    def get_service(self) -> UserService:
        return container.user_service()

    @extend_schema(
        operation_id="users_list",
        summary="List users (admin)",
        responses={200: UserSerializer(many=True)},
        tags=["Users"],
    )
    def list(self, request):
        result = self.get_service().list_users()
        if not result.ok:
            return error_response(result)
        return Response(UserSerializer(result.value, many=True).data)

    @extend_schema(
        operation_id="users_retrieve",
        summary="Get user (admin)",
        responses={
            200: UserSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer, description="User not found"),
        },
        tags=["Users"],
    )
    def retrieve(self, request, pk=None):
        result = self.get_service().get_user(pk)
        if not result.ok:
            return error_response(result)
        return Response(UserSerializer(result.value).data)

    @extend_schema(
        operation_id="users_create",
        summary="Create user (admin)",
        description="""
        **What it receives:**
        - `name`, `email`, `password` (min 6 chars)
        - `role` (customer or admin), `address`, `phone`, all optional

        **What it returns:**
        - The created user (201)
        """,
        request=UserCreateSerializer,
        responses={
            201: UserSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Validation error"),
            409: OpenApiResponse(response=ErrorResponseSerializer, description="Email already exists"),
        },
        tags=["Users"],
    )
    def create(self, request):
        serializer = UserCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        result = self.get_service().create_user(**serializer.validated_data)
        if not result.ok:
            return error_response(result)
        return Response(UserSerializer(result.value).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="users_update",
        summary="Update user (admin)",
        request=UserUpdateSerializer,
        responses={
            200: UserSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer, description="User not found"),
            409: OpenApiResponse(response=ErrorResponseSerializer, description="Email already exists"),
        },
        tags=["Users"],
    )
    def partial_update(self, request, pk=None):
        serializer = UserUpdateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        result = self.get_service().update_user(pk, **serializer.validated_data)
        if not result.ok:
            return error_response(result)
        return Response(UserSerializer(result.value).data)

    def update(self, request, pk=None):
        return self.partial_update(request, pk)

    @extend_schema(
        operation_id="users_delete",
        summary="Delete user (admin)",
        description="""
        **What it receives:**
        - User ID (path)

        **What it returns:**
        - 204 on success; the user's cart is removed with them
        - 409 when the user has orders
        """,
        responses={
            204: OpenApiResponse(description="User deleted"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="User not found"),
            409: OpenApiResponse(response=ErrorResponseSerializer, description="User has orders"),
        },
        tags=["Users"],
    )
    def destroy(self, request, pk=None):
        result = self.get_service().delete_user(pk)
        if not result.ok:
            return error_response(result)
        if not result.value:
            return Response({"detail": "User not found"}, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)
