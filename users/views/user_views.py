"""Signup, profile and search endpoints."""

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from users.pagination import page_params, paginate
from users.serializers import (
    ProfilePhotoSerializer,
    ProfileSerializer,
    SignupSerializer,
    UserSerializer,
)
from users.services import UserService

user_service = UserService()


@api_view(["POST"])
@permission_classes([AllowAny])
def signup(request):
    """Create an email/password account; duplicated email or nickname is a 400."""
    serializer = SignupSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    user = serializer.save()
    return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)


@api_view(["GET"])
def me(request):
    return Response(UserSerializer(request.user).data)


@api_view(["GET"])
def search(request):
    """Paginated nickname prefix search."""
    prefix = request.query_params.get("nickname_prefix", "")
    if not prefix:
        raise ValidationError({"nickname_prefix": "This query parameter is required."})
    page_index, page_size, item_offset = page_params(request)
    page = paginate(
        user_service.search(prefix),
        offset=item_offset,
        limit=page_size,
        order_by=("nickname", "id"),
    )
    return Response({
        "items": UserSerializer(page.items, many=True).data,
        "total_count": page.total_count,
        "offset": page_index,
        "number": page_size,
    })


@api_view(["GET", "PATCH"])
def profile(request):
    """GET another profile by ?nickname=, PATCH the current user's profile."""
    if request.method == "PATCH":
        serializer = ProfileSerializer(request.user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        return Response(UserSerializer(user).data)

    nickname = request.query_params.get("nickname", "")
    if not nickname:
        raise ValidationError({"nickname": "This query parameter is required."})
    return Response(UserSerializer(user_service.fetch_by_nickname(nickname)).data)


@api_view(["GET"])
def profile_by_id(request, user_id):
    return Response(UserSerializer(user_service.fetch_by_id(user_id)).data)


@api_view(["POST"])
def set_profile_photo(request):
    serializer = ProfilePhotoSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    url = user_service.set_profile_photo(request.user, serializer.validated_data["profile_photo_url"])
    return Response({"profile_photo_url": url})


@api_view(["GET"])
def get_profile_photo(request, user_id):
    """Stored photo URL, or a gravatar fallback when the user has none."""
    return Response({"profile_photo_url": user_service.profile_photo(user_id)})
