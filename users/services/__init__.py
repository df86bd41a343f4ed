from .follow import FollowService, STATE_NONE, STATE_PENDING, STATE_CONFIRMED
from .follow_read import FollowReadService
from .privacy import PrivacyService
from .users import UserService

__all__ = [
    "FollowService",
    "FollowReadService",
    "PrivacyService",
    "UserService",
    "STATE_NONE",
    "STATE_PENDING",
    "STATE_CONFIRMED",
]
