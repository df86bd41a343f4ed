"""Repository helpers for the following, follower and waiting-follower edge sets."""

from typing import Type

from django.db.models import QuerySet

from users.db_accessor import DB_Accessor
from users.models.relations import RelationEdge, Following, Follower, WaitingFollower


class RelationRepo(DB_Accessor):
    """Repository wrapper for one kind of relation edge."""
    def __init__(self, model: Type[RelationEdge]) -> None:
        super().__init__(model)

    def has(self, *, owner_id: int, user_id: int) -> bool:
        """Return True if owner's set holds an edge to user."""
        return self.exists(owner_id=owner_id, user_id=user_id)

    def add(self, owner, user) -> RelationEdge:
        """Insert an edge from owner's set to user."""
        edge = self.model.between(owner, user)
        edge.save(force_insert=True)
        return edge

    def remove(self, *, owner_id: int, user_id: int) -> int:
        """Remove the edge from owner's set to user; return rows deleted."""
        return self.delete(owner_id=owner_id, user_id=user_id)

    def for_owner(self, owner_id: int) -> QuerySet:
        """Edges in owner's set, oldest first."""
        return self.list(filters={"owner_id": owner_id}, order_by=("id",))

    def count_for(self, owner_id: int) -> int:
        """Size of owner's set."""
        return self.count(owner_id=owner_id)

    def refresh_display(self, user) -> int:
        """Re-copy user's nickname and photo onto edges pointing at user."""
        return self.model.objects.filter(user_id=user.pk).update(
            nickname=user.nickname,
            profile_photo_url=user.profile_photo_url,
        )


class FollowingRepo(RelationRepo):
    def __init__(self) -> None:
        super().__init__(Following)


class FollowerRepo(RelationRepo):
    def __init__(self) -> None:
        super().__init__(Follower)


class WaitingFollowerRepo(RelationRepo):
    def __init__(self) -> None:
        super().__init__(WaitingFollower)
