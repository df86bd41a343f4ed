from .user_views import (
    signup,
    me,
    search,
    profile,
    profile_by_id,
    set_profile_photo,
    get_profile_photo,
)
from .follow_views import (
    follow,
    unfollow,
    cancel_request,
    approve,
    refuse,
    is_following,
    following_list,
    follower_list,
    waiting_list,
    counts,
)
