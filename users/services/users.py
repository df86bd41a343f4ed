"""Service helpers for user lookups and profile updates."""

from users.repos.user_repo import UserRepo


class UserService:
    """Encapsulate common user lookups and profile writes."""

    def __init__(self, user_repo=None):
        self.user_repo = user_repo or UserRepo()

    def fetch_by_id(self, user_id):
        """Fetch a user by id or raise UserNotFoundError."""
        return self.user_repo.get_by_id(user_id)

    def fetch_by_nickname(self, nickname):
        """Fetch a user by nickname or raise UserNotFoundError."""
        return self.user_repo.get_by_nickname(nickname)

    def search(self, nickname_prefix):
        """Users whose nickname starts with the prefix (case-insensitive)."""
        return self.user_repo.search_by_nickname_prefix(nickname_prefix)

    def set_profile_photo(self, user, url):
        """Store a new profile photo URL and return it."""
        user.profile_photo_url = url
        user.save(update_fields=["profile_photo_url"])
        return user.profile_photo_url

    def profile_photo(self, user_id, size=120):
        """Return the stored photo URL for a user, falling back to gravatar."""
        return self.fetch_by_id(user_id).photo_or_gravatar(size=size)
