from rest_framework import serializers

from authentication.domain.models import CustomUser


class UserSerializer(serializers.ModelSerializer):
    """Public representation of a user; never exposes the password hash."""

    class Meta:
        model = CustomUser
        fields = ("id", "name", "email", "role", "address", "phone", "created_at", "updated_at")
        read_only_fields = fields


class UserCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    email = serializers.EmailField()
    password = serializers.CharField(min_length=6, write_only=True, style={"input_type": "password"})
    role = serializers.ChoiceField(choices=CustomUser.ROLE_CHOICES, default=CustomUser.ROLE_CUSTOMER)
    address = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    phone = serializers.CharField(max_length=20, required=False, allow_blank=True, allow_null=True)


class UserRegistrationSerializer(UserCreateSerializer):
    """Self sign-up; the role is always customer."""

    role = None


class UserUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255, required=False)
    email = serializers.EmailField(required=False)
    password = serializers.CharField(min_length=6, write_only=True, required=False)
    role = serializers.ChoiceField(choices=CustomUser.ROLE_CHOICES, required=False)
    address = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    phone = serializers.CharField(max_length=20, required=False, allow_blank=True, allow_null=True)
