"""Follow graph endpoints: transitions, membership checks, lists and counts."""

from rest_framework.decorators import api_view
from rest_framework.response import Response

from users.pagination import page_params
from users.serializers import EdgeSerializer
from users.services import FollowReadService, FollowService, PrivacyService, UserService

user_service = UserService()
read_service = FollowReadService()
privacy_service = PrivacyService()
follow_service_factory = FollowService


def _page_response(request, owner, kind):
    page_index, page_size, item_offset = page_params(request)
    page = read_service.page(owner, kind, offset=item_offset, limit=page_size)
    return Response({
        "items": EdgeSerializer(page.items, many=True).data,
        "total_count": page.total_count,
        "offset": page_index,
        "number": page_size,
    })


@api_view(["POST"])
def follow(request, user_id):
    """Follow a public user or request to follow a private one."""
    target = user_service.fetch_by_id(user_id)
    state = follow_service_factory(request.user).request_follow(target)
    return Response({"user_id": target.pk, "state": state})


@api_view(["DELETE"])
def unfollow(request, user_id):
    """Remove a confirmed follow."""
    target = user_service.fetch_by_id(user_id)
    state = follow_service_factory(request.user).unfollow(target)
    return Response({"user_id": target.pk, "state": state})


@api_view(["DELETE"])
def cancel_request(request, user_id):
    """Withdraw the current user's pending request to a private user."""
    target = user_service.fetch_by_id(user_id)
    state = follow_service_factory(request.user).cancel_request(target)
    return Response({"user_id": target.pk, "state": state})


@api_view(["POST"])
def approve(request, user_id):
    """Accept a pending follow request sent to the current user."""
    requester = user_service.fetch_by_id(user_id)
    state = follow_service_factory(request.user).approve(requester)
    return Response({"user_id": requester.pk, "state": state})


@api_view(["POST"])
def refuse(request, user_id):
    """Reject a pending follow request sent to the current user."""
    requester = user_service.fetch_by_id(user_id)
    state = follow_service_factory(request.user).refuse(requester)
    return Response({"user_id": requester.pk, "state": state})


@api_view(["GET"])
def is_following(request, user_id):
    target = user_service.fetch_by_id(user_id)
    service = follow_service_factory(request.user)
    return Response({
        "user_id": target.pk,
        "is_following": service.is_following(target),
        "state": service.state_with(target),
    })


@api_view(["GET"])
def following_list(request, user_id):
    """Paginated list of users `user_id` follows; private lists need a confirmed follow."""
    owner = user_service.fetch_by_id(user_id)
    privacy_service.ensure_can_view_relations(request.user, owner)
    return _page_response(request, owner, "following")


@api_view(["GET"])
def follower_list(request, user_id):
    """Paginated list of followers of `user_id`; private lists need a confirmed follow."""
    owner = user_service.fetch_by_id(user_id)
    privacy_service.ensure_can_view_relations(request.user, owner)
    return _page_response(request, owner, "follower")


@api_view(["GET"])
def waiting_list(request, user_id):
    """Paginated pending requests; only visible to the account owner."""
    owner = user_service.fetch_by_id(user_id)
    privacy_service.ensure_owner(request.user, owner)
    return _page_response(request, owner, "waiting")


@api_view(["GET"])
def counts(request, user_id):
    """Follower and following counts; the owner also sees the pending count."""
    owner = user_service.fetch_by_id(user_id)
    payload = {
        "user_id": owner.pk,
        "follower_count": read_service.follower_count(owner),
        "following_count": read_service.following_count(owner),
    }
    if request.user.pk == owner.pk:
        payload["pending_count"] = read_service.pending_count(owner)
    return Response(payload)
