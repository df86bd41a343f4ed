import uuid

from users.models import User, Following, Follower, WaitingFollower


def make_user(**kwargs):
    nickname = kwargs.pop("nickname", "johndoe")
    email = kwargs.pop(
        "email",
        f"{nickname}_{uuid.uuid4().hex[:6]}@example.org"
    )
    password = kwargs.pop("password", "Password123")

    return User.objects.create_user(
        email=email,
        password=password,
        nickname=nickname,
        name=kwargs.pop("name", "John Doe"),
        bio=kwargs.pop("bio", "Test bio"),
        **kwargs,
    )


def make_confirmed_pair(requester, target):
    """Write both edges of a confirmed follow directly, bypassing the service."""
    Following.between(requester, target).save()
    Follower.between(target, requester).save()


def make_pending(requester, target):
    WaitingFollower.between(target, requester).save()


def relation_snapshot():
    """Return every edge as (kind, owner_id, user_id) tuples."""
    rows = set()
    for kind, model in (("following", Following), ("follower", Follower), ("waiting", WaitingFollower)):
        rows.update((kind, o, u) for o, u in model.objects.values_list("owner_id", "user_id"))
    return rows


class GraphInvariantsMixin:
    """Assertions for the consistency rules of the three relation sets."""

    def assertGraphConsistent(self):
        following = set(Following.objects.values_list("owner_id", "user_id"))
        follower = {(u, o) for o, u in Follower.objects.values_list("owner_id", "user_id")}
        waiting = {(u, o) for o, u in WaitingFollower.objects.values_list("owner_id", "user_id")}

        # following A->B iff follower edge on B from A
        self.assertEqual(following, follower)
        for requester_id, target_id in following | waiting:
            self.assertNotEqual(requester_id, target_id)
        # a pair is never both pending and confirmed
        self.assertEqual(following & waiting, set())
