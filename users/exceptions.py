"""Request-scoped errors raised by the follow graph and rendered by DRF."""

from rest_framework import status
from rest_framework.exceptions import APIException


class FollowGraphError(APIException):
    """Base class for recoverable follow-graph errors."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Follow graph request failed."
    default_code = "follow_graph_error"


class UserNotFoundError(FollowGraphError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "User does not exist."
    default_code = "user_not_found"


class AlreadyRelatedError(FollowGraphError):
    """Follow requested on a pending/confirmed pair, or towards oneself."""
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Already following or requested to follow this user."
    default_code = "already_related"


class NoPendingRequestError(FollowGraphError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "This user did not request to follow you."
    default_code = "no_pending_request"


class NotFollowingError(FollowGraphError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Not following this user."
    default_code = "not_following"


class AccessDeniedError(FollowGraphError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "You are not a follower of this user."
    default_code = "access_denied"


class InvalidPaginationError(FollowGraphError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "offset and number must be non-negative integers."
    default_code = "invalid_pagination"
