"""Read-only helpers for follower/following/waiting-follower queries."""

from users.pagination import paginate
from users.repos.relation_repo import FollowerRepo, FollowingRepo, WaitingFollowerRepo


class FollowReadService:
    """Provide ordered querysets, pages and counts over a user's relation sets."""

    def __init__(self, following_repo=None, follower_repo=None, waiting_repo=None):
        self.repos = {
            "following": following_repo or FollowingRepo(),
            "follower": follower_repo or FollowerRepo(),
            "waiting": waiting_repo or WaitingFollowerRepo(),
        }

    def followers_qs(self, user):
        """Return follower edges of the given user, oldest first."""
        return self.repos["follower"].for_owner(user.pk)

    def following_qs(self, user):
        """Return edges to users the given user follows, oldest first."""
        return self.repos["following"].for_owner(user.pk)

    def waiting_qs(self, user):
        """Return pending follow requests addressed to the given user, oldest first."""
        return self.repos["waiting"].for_owner(user.pk)

    def page(self, user, kind, *, offset, limit):
        """Return one EdgePage of the user's `kind` set."""
        return paginate(self.repos[kind].for_owner(user.pk), offset=offset, limit=limit)

    def follower_count(self, user):
        return self.repos["follower"].count_for(user.pk)

    def following_count(self, user):
        return self.repos["following"].count_for(user.pk)

    def pending_count(self, user):
        return self.repos["waiting"].count_for(user.pk)
