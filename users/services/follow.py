"""Follow state machine over the following, follower and waiting-follower sets.

For an ordered pair (requester R, target T) the relation is in one of three
states:

- ``none``: no edges.
- ``pending``: ``WaitingFollower(owner=T, user=R)`` only.
- ``confirmed``: ``Following(owner=R, user=T)`` and ``Follower(owner=T, user=R)``.

Every transition locks both user rows (lowest id first), re-reads the state
under the lock and writes both users' rows in one transaction, so a failure
leaves neither side changed.
"""

import logging

from django.db import IntegrityError, transaction

from users.exceptions import (
    AlreadyRelatedError,
    NoPendingRequestError,
    NotFollowingError,
    UserNotFoundError,
)
from users.repos.relation_repo import FollowerRepo, FollowingRepo, WaitingFollowerRepo
from users.repos.user_repo import UserRepo

logger = logging.getLogger(__name__)

STATE_NONE = "none"
STATE_PENDING = "pending"
STATE_CONFIRMED = "confirmed"


class FollowService:
    """Apply follow transitions on behalf of the acting user."""

    def __init__(self, actor, user_repo=None, following_repo=None, follower_repo=None, waiting_repo=None):
        self.actor = actor
        self.user_repo = user_repo or UserRepo()
        self.following_repo = following_repo or FollowingRepo()
        self.follower_repo = follower_repo or FollowerRepo()
        self.waiting_repo = waiting_repo or WaitingFollowerRepo()

    def _lock_with(self, other):
        if other is None:
            raise UserNotFoundError()
        users = self.user_repo.lock_pair(self.actor.pk, other.pk)
        return users[self.actor.pk], users[other.pk]

    def _state(self, requester_id, target_id):
        if self.following_repo.has(owner_id=requester_id, user_id=target_id) or self.follower_repo.has(
            owner_id=target_id, user_id=requester_id
        ):
            return STATE_CONFIRMED
        if self.waiting_repo.has(owner_id=target_id, user_id=requester_id):
            return STATE_PENDING
        return STATE_NONE

    def _confirm(self, requester, target):
        """Write the mutual pair; a racing duplicate surfaces as AlreadyRelatedError."""
        try:
            with transaction.atomic():
                self.follower_repo.add(target, requester)
                self.following_repo.add(requester, target)
        except IntegrityError as exc:
            raise AlreadyRelatedError() from exc

    def state_with(self, target):
        """Return the relation state from the actor towards target."""
        return self._state(self.actor.pk, target.pk)

    def is_following(self, target):
        """Return True if the actor has a confirmed follow on target."""
        return self.following_repo.has(owner_id=self.actor.pk, user_id=target.pk)

    def request_follow(self, target):
        """
        Follow target, or ask to follow it when the account is private.

        Returns the new state, ``confirmed`` or ``pending``. Raises
        AlreadyRelatedError for self-follows and for pairs that are already
        pending or confirmed.
        """
        if target is not None and target.pk == self.actor.pk:
            logger.debug("follow %s -> itself rejected", self.actor.pk)
            raise AlreadyRelatedError("You cannot follow yourself.")

        with transaction.atomic():
            requester, target = self._lock_with(target)
            state = self._state(requester.pk, target.pk)
            if state != STATE_NONE:
                logger.debug("follow %s -> %s rejected in state %s", requester.pk, target.pk, state)
                raise AlreadyRelatedError()

            if target.public:
                self._confirm(requester, target)
                new_state = STATE_CONFIRMED
            else:
                try:
                    with transaction.atomic():
                        self.waiting_repo.add(target, requester)
                except IntegrityError as exc:
                    raise AlreadyRelatedError() from exc
                new_state = STATE_PENDING

        logger.info("follow %s -> %s: %s", requester.pk, target.pk, new_state)
        return new_state

    def approve(self, requester):
        """Accept requester's pending request to follow the actor."""
        with transaction.atomic():
            target, requester = self._lock_with(requester)
            if not self.waiting_repo.remove(owner_id=target.pk, user_id=requester.pk):
                logger.debug("approve %s -> %s: no pending request", requester.pk, target.pk)
                raise NoPendingRequestError()
            self._confirm(requester, target)

        logger.info("follow %s -> %s: %s (approved)", requester.pk, target.pk, STATE_CONFIRMED)
        return STATE_CONFIRMED

    def refuse(self, requester):
        """Drop requester's pending request without creating any edge."""
        with transaction.atomic():
            target, requester = self._lock_with(requester)
            if not self.waiting_repo.remove(owner_id=target.pk, user_id=requester.pk):
                logger.debug("refuse %s -> %s: no pending request", requester.pk, target.pk)
                raise NoPendingRequestError()

        logger.info("follow %s -> %s: %s (refused)", requester.pk, target.pk, STATE_NONE)
        return STATE_NONE

    def cancel_request(self, target):
        """Withdraw the actor's own pending request to target."""
        with transaction.atomic():
            requester, target = self._lock_with(target)
            if not self.waiting_repo.remove(owner_id=target.pk, user_id=requester.pk):
                raise NoPendingRequestError("You have not requested to follow this user.")

        logger.info("follow %s -> %s: %s (cancelled)", requester.pk, target.pk, STATE_NONE)
        return STATE_NONE

    def unfollow(self, target):
        """
        Remove a confirmed follow.

        Both the actor's following edge and target's follower edge must be
        present; if either is missing nothing is deleted and
        NotFollowingError is raised.
        """
        with transaction.atomic():
            requester, target = self._lock_with(target)
            removed_following = self.following_repo.remove(owner_id=requester.pk, user_id=target.pk)
            removed_follower = self.follower_repo.remove(owner_id=target.pk, user_id=requester.pk)
            if not (removed_following and removed_follower):
                logger.debug("unfollow %s -> %s: no confirmed pair", requester.pk, target.pk)
                raise NotFollowingError()

        logger.info("follow %s -> %s: %s (unfollowed)", requester.pk, target.pk, STATE_NONE)
        return STATE_NONE
