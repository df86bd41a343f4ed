"""Edge tables backing each user's following, follower and waiting-follower sets."""

from __future__ import annotations
from django.conf import settings
from django.db import models
from django.db.models import Q, F


class RelationEdge(models.Model):
    """
    A directed edge stored in the set owned by `owner` and pointing at `user`.

    `nickname` and `profile_photo_url` are copied from `user` when the edge is
    created so lists can be rendered without joining back to the user table;
    `users.signals` re-copies them whenever the user changes either field.
    The auto-increment `id` doubles as the creation sequence used for paging.
    """
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="+",
    )
    nickname = models.CharField(max_length=30, blank=True)
    profile_photo_url = models.URLField(max_length=500, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Shared constraints: one edge per pair, never to oneself."""
        abstract = True
        ordering = ["id"]
        constraints = [
            models.UniqueConstraint(fields=["owner", "user"], name="uniq_%(class)s_owner_user"),
            models.CheckConstraint(condition=~Q(owner=F("user")), name="chk_%(class)s_not_self"),
        ]

    @classmethod
    def between(cls, owner, user):
        """Build an unsaved edge with display metadata snapshotted from user."""
        return cls(
            owner=owner,
            user=user,
            nickname=user.nickname,
            profile_photo_url=user.profile_photo_url,
        )

    def __str__(self) -> str:
        """Readable representation for admin/debugging."""
        return f"{type(self).__name__}(owner={self.owner_id}, user={self.user_id})"


class Following(RelationEdge):
    """`owner` follows `user` (confirmed)."""
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="following",      # user.following -> users this user follows
    )

    class Meta(RelationEdge.Meta):
        db_table = "following"


class Follower(RelationEdge):
    """`user` follows `owner` (confirmed)."""
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="follower",       # user.follower -> users following this user
    )

    class Meta(RelationEdge.Meta):
        db_table = "follower"


class WaitingFollower(RelationEdge):
    """`user` asked to follow the private account `owner` and awaits approval."""
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="waiting_follower",
    )

    class Meta(RelationEdge.Meta):
        db_table = "waiting_follower"
