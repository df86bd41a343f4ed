from users.exceptions import AccessDeniedError
from users.repos.relation_repo import FollowerRepo


class PrivacyService:
    """Decide who may see a user's follower and following lists."""

    def __init__(self, follower_repo=None):
        self.follower_repo = follower_repo or FollowerRepo()

    def is_public(self, user):
        return bool(getattr(user, "public", True))

    def is_follower(self, viewer, owner):
        """True when viewer holds a confirmed follow on owner (or is owner)."""
        if not viewer or not getattr(viewer, "is_authenticated", False):
            return False
        if viewer.pk == owner.pk:
            return True
        return self.follower_repo.has(owner_id=owner.pk, user_id=viewer.pk)

    def can_view_relations(self, viewer, owner):
        """Public accounts are open; private ones only to themselves and followers."""
        if self.is_public(owner):
            return True
        return self.is_follower(viewer, owner)

    def ensure_can_view_relations(self, viewer, owner):
        """Raise AccessDeniedError unless viewer may list owner's relations."""
        if not self.can_view_relations(viewer, owner):
            raise AccessDeniedError()

    def ensure_owner(self, viewer, owner):
        """Raise AccessDeniedError unless viewer is owner (waiting lists are private)."""
        if not viewer or viewer.pk != owner.pk:
            raise AccessDeniedError("Only the account owner can see pending requests.")
