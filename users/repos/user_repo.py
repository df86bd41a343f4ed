"""Repository helpers for user lookups."""

from typing import Dict, List

from django.db.models import QuerySet

from users.db_accessor import DB_Accessor
from users.exceptions import UserNotFoundError
from users.models.user import User


class UserRepo(DB_Accessor):
    """Repository for basic user queries."""
    def __init__(self) -> None:
        """Initialise with the User model."""
        super().__init__(User)

    def list_ids(self) -> List[int]:
        """Return all user IDs."""
        return list(self.model.objects.values_list("id", flat=True))

    def get_by_id(self, user_id: int) -> User:
        """Return a user by id or raise UserNotFoundError."""
        try:
            return self.get(id=user_id)
        except User.DoesNotExist as exc:
            raise UserNotFoundError() from exc

    def get_by_nickname(self, nickname: str) -> User:
        """Return a user by nickname or raise UserNotFoundError."""
        try:
            return self.get(nickname=nickname)
        except User.DoesNotExist as exc:
            raise UserNotFoundError() from exc

    def search_by_nickname_prefix(self, prefix: str) -> QuerySet:
        """Return users whose nickname starts with prefix, in a stable order."""
        return self.list(filters={"nickname__istartswith": prefix}, order_by=("nickname", "id"))

    def lock_pair(self, first_id: int, second_id: int) -> Dict[int, User]:
        """
        Lock both user rows for the rest of the current transaction.

        Rows are locked lowest id first so two transitions touching the same
        pair in opposite roles cannot deadlock. Must run inside atomic().
        """
        locked = list(
            self.model.objects.select_for_update()
            .filter(pk__in={first_id, second_id})
            .order_by("pk")
        )
        users = {user.pk: user for user in locked}
        if first_id not in users or second_id not in users:
            raise UserNotFoundError()
        return users
