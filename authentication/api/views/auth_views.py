import logging

from drf_spectacular.utils import OpenApiExample, OpenApiResponse, extend_schema
from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from authentication.api.serializers import CustomRefreshToken, UserRegistrationSerializer, UserSerializer
from authentication.api.serializers.response_serializers import (
    ErrorResponseSerializer,
    LoginRequestSerializer,
    LoginResponseSerializer,
    RegisterResponseSerializer,
)
from infrastructure.container import container
from marketplace.api.errors import error_response


logger = logging.getLogger(__name__)


def token_pair(user):
    refresh = CustomRefreshToken.for_user(user)
    return {"access": str(refresh.access_token), "refresh": str(refresh)}


class LoginAPIView(APIView):
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    @extend_schema(
        operation_id="auth_login",
        summary="Login with email and password",
        description="""
        Authenticate a user with email and password.

        **What it returns:**
        - JWT access and refresh tokens; the access token carries `role`, `is_admin` and `name` claims
        - The user's details
        """,
        request=LoginRequestSerializer,
        responses={
            200: OpenApiResponse(
                response=LoginResponseSerializer,
                description="Login successful",
                examples=[
                    OpenApiExample(
                        "Successful Login",
                        value={
                            "message": "Login successful",
                            "access": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                            "refresh": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                            "user": {"id": 1, "email": "user@example.com", "name": "Jane Doe", "role": "customer"},
                        },
                    )
                ],
            ),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Missing email or password"),
            401: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid credentials"),
        },
        tags=["Authentication"],
    )
    def post(self, request):
        serializer = LoginRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        user = container.user_service().login_user(
            serializer.validated_data["email"], serializer.validated_data["password"]
        )
        if user is None:
            return Response({"detail": "Invalid email or password"}, status=status.HTTP_401_UNAUTHORIZED)

        logger.info(f"User {user.id} logged in")
        return Response(
            {"message": "Login successful", **token_pair(user), "user": UserSerializer(user).data},
            status=status.HTTP_200_OK,
        )


class RegisterAPIView(APIView):
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    @extend_schema(
        operation_id="auth_register",
        summary="Register new customer account",
        description="""
        Create a customer account. The role cannot be chosen at sign-up.

        **What it returns:**
        - The new user's details (201)
        """,
        request=UserRegistrationSerializer,
        responses={
            201: OpenApiResponse(response=RegisterResponseSerializer, description="Registration successful"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Validation error"),
            409: OpenApiResponse(response=ErrorResponseSerializer, description="Email already exists"),
        },
        tags=["Authentication"],
    )
    def post(self, request):
        serializer = UserRegistrationSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        result = container.user_service().create_user(**serializer.validated_data)
        if not result.ok:
            return error_response(result)

        return Response(
            {"message": "Registration successful", "user": UserSerializer(result.value).data},
            status=status.HTTP_201_CREATED,
        )


class MeView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(
        operation_id="auth_me",
        summary="Current user",
        responses={200: UserSerializer},
        tags=["Authentication"],
    )
    def get(self, request):
        return Response(UserSerializer(request.user).data)
