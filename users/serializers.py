from django.contrib.auth import password_validation
from rest_framework import serializers
from users.models import User


class UserSerializer(serializers.ModelSerializer):
    """Public profile representation of a user."""

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "nickname",
            "signup_type",
            "name",
            "website",
            "bio",
            "profile_photo_url",
            "public",
        ]
        read_only_fields = fields


class SignupSerializer(serializers.ModelSerializer):
    """Create an app (email/password) account."""
    password = serializers.CharField(write_only=True, style={"input_type": "password"})

    class Meta:
        model = User
        fields = ["id", "email", "nickname", "password", "name", "website", "bio", "public"]
        read_only_fields = ["id"]

    def validate_password(self, value):
        password_validation.validate_password(value)
        return value

    def create(self, validated_data):
        """Create the user with a hashed password and app signup type."""
        password = validated_data.pop("password")
        return User.objects.create_user(
            password=password,
            signup_type=User.SIGNUP_APP,
            **validated_data,
        )


class ProfileSerializer(serializers.ModelSerializer):
    """Editable profile fields, including account visibility."""

    class Meta:
        model = User
        fields = ["nickname", "name", "website", "bio", "public"]


class ProfilePhotoSerializer(serializers.Serializer):
    profile_photo_url = serializers.URLField(max_length=500)


class EdgeSerializer(serializers.Serializer):
    """Display row for one entry of a following/follower/waiting list."""
    user_id = serializers.IntegerField(read_only=True)
    nickname = serializers.CharField(read_only=True)
    profile_photo_url = serializers.CharField(read_only=True)
    created_at = serializers.DateTimeField(read_only=True)
