from unittest.mock import patch

from django.test import TestCase

from users.exceptions import (
    AlreadyRelatedError,
    NoPendingRequestError,
    NotFollowingError,
    UserNotFoundError,
)
from users.models import Following, Follower, WaitingFollower
from users.services import (
    FollowReadService,
    FollowService,
    STATE_CONFIRMED,
    STATE_NONE,
    STATE_PENDING,
)
from users.tests.helpers import (
    GraphInvariantsMixin,
    make_confirmed_pair,
    make_pending,
    make_user,
    relation_snapshot,
)


class FollowServiceTestCase(GraphInvariantsMixin, TestCase):

    def setUp(self):
        self.alice = make_user(nickname="alice")
        self.bob = make_user(nickname="bob", public=True)
        self.cara = make_user(nickname="cara", public=False)
        self.reads = FollowReadService()

    def test_follow_public_user_confirms_immediately(self):
        service = FollowService(self.alice)
        state = service.request_follow(self.bob)
        self.assertEqual(state, STATE_CONFIRMED)
        self.assertTrue(service.is_following(self.bob))
        self.assertTrue(Following.objects.filter(owner=self.alice, user=self.bob).exists())
        self.assertTrue(Follower.objects.filter(owner=self.bob, user=self.alice).exists())
        self.assertFalse(WaitingFollower.objects.exists())
        self.assertGraphConsistent()

    def test_follow_private_user_creates_pending_request(self):
        service = FollowService(self.alice)
        state = service.request_follow(self.cara)
        self.assertEqual(state, STATE_PENDING)
        self.assertFalse(service.is_following(self.cara))
        self.assertEqual(self.reads.pending_count(self.cara), 1)
        self.assertEqual(self.reads.follower_count(self.cara), 0)
        self.assertEqual(service.state_with(self.cara), STATE_PENDING)
        self.assertGraphConsistent()

    def test_approve_converts_pending_to_confirmed(self):
        FollowService(self.alice).request_follow(self.cara)
        state = FollowService(self.cara).approve(self.alice)
        self.assertEqual(state, STATE_CONFIRMED)
        self.assertEqual(self.reads.pending_count(self.cara), 0)
        self.assertTrue(FollowService(self.alice).is_following(self.cara))
        self.assertEqual(self.reads.follower_count(self.cara), 1)
        self.assertEqual(self.reads.following_count(self.alice), 1)
        self.assertGraphConsistent()

    def test_refuse_drops_request_without_edges(self):
        FollowService(self.alice).request_follow(self.cara)
        state = FollowService(self.cara).refuse(self.alice)
        self.assertEqual(state, STATE_NONE)
        self.assertEqual(relation_snapshot(), set())
        self.assertEqual(FollowService(self.alice).state_with(self.cara), STATE_NONE)

    def test_unfollow_removes_both_edges(self):
        FollowService(self.alice).request_follow(self.bob)
        state = FollowService(self.alice).unfollow(self.bob)
        self.assertEqual(state, STATE_NONE)
        self.assertFalse(Following.objects.filter(owner=self.alice).exists())
        self.assertFalse(Follower.objects.filter(owner=self.bob).exists())

    def test_second_request_while_confirmed_fails_and_keeps_state(self):
        service = FollowService(self.alice)
        service.request_follow(self.bob)
        before = relation_snapshot()
        with self.assertRaises(AlreadyRelatedError):
            service.request_follow(self.bob)
        self.assertEqual(relation_snapshot(), before)

    def test_second_request_while_pending_fails_and_keeps_state(self):
        service = FollowService(self.alice)
        service.request_follow(self.cara)
        before = relation_snapshot()
        with self.assertRaises(AlreadyRelatedError):
            service.request_follow(self.cara)
        self.assertEqual(relation_snapshot(), before)

    def test_self_follow_is_rejected(self):
        with self.assertRaises(AlreadyRelatedError):
            FollowService(self.alice).request_follow(self.alice)
        self.assertEqual(relation_snapshot(), set())

    def test_follow_missing_target_raises_not_found(self):
        with self.assertRaises(UserNotFoundError):
            FollowService(self.alice).request_follow(None)

    def test_follow_deleted_target_raises_not_found(self):
        ghost = make_user(nickname="ghost")
        ghost_id = ghost.pk
        ghost.delete()
        ghost.pk = ghost_id
        with self.assertRaises(UserNotFoundError):
            FollowService(self.alice).request_follow(ghost)

    def test_visibility_is_read_from_locked_row(self):
        stale = make_user(nickname="dave", public=True)
        type(stale).objects.filter(pk=stale.pk).update(public=False)
        state = FollowService(self.alice).request_follow(stale)
        self.assertEqual(state, STATE_PENDING)

    def test_follow_back_is_independent_pair(self):
        FollowService(self.alice).request_follow(self.bob)
        FollowService(self.bob).request_follow(self.alice)
        self.assertTrue(FollowService(self.bob).is_following(self.alice))
        self.assertEqual(self.reads.follower_count(self.alice), 1)
        self.assertEqual(self.reads.follower_count(self.bob), 1)
        self.assertGraphConsistent()

    def test_approve_without_request_raises(self):
        with self.assertRaises(NoPendingRequestError):
            FollowService(self.cara).approve(self.alice)

    def test_approve_twice_raises(self):
        FollowService(self.alice).request_follow(self.cara)
        FollowService(self.cara).approve(self.alice)
        with self.assertRaises(NoPendingRequestError):
            FollowService(self.cara).approve(self.alice)
        self.assertGraphConsistent()

    def test_refuse_twice_raises(self):
        FollowService(self.alice).request_follow(self.cara)
        FollowService(self.cara).refuse(self.alice)
        with self.assertRaises(NoPendingRequestError):
            FollowService(self.cara).refuse(self.alice)

    def test_requester_cannot_approve_own_request(self):
        FollowService(self.alice).request_follow(self.cara)
        with self.assertRaises(NoPendingRequestError):
            FollowService(self.alice).approve(self.cara)
        self.assertEqual(self.reads.pending_count(self.cara), 1)

    def test_cancel_request_removes_pending(self):
        FollowService(self.alice).request_follow(self.cara)
        state = FollowService(self.alice).cancel_request(self.cara)
        self.assertEqual(state, STATE_NONE)
        self.assertEqual(self.reads.pending_count(self.cara), 0)

    def test_cancel_request_without_pending_raises(self):
        with self.assertRaises(NoPendingRequestError):
            FollowService(self.alice).cancel_request(self.cara)

    def test_unfollow_without_follow_raises(self):
        with self.assertRaises(NotFollowingError):
            FollowService(self.alice).unfollow(self.bob)

    def test_unfollow_pending_request_raises(self):
        FollowService(self.alice).request_follow(self.cara)
        with self.assertRaises(NotFollowingError):
            FollowService(self.alice).unfollow(self.cara)
        self.assertEqual(self.reads.pending_count(self.cara), 1)

    def test_unfollow_with_half_pair_fails_and_deletes_nothing(self):
        Following.between(self.alice, self.bob).save()
        with self.assertRaises(NotFollowingError):
            FollowService(self.alice).unfollow(self.bob)
        self.assertTrue(Following.objects.filter(owner=self.alice, user=self.bob).exists())

    def test_unfollow_with_only_follower_edge_fails(self):
        Follower.between(self.bob, self.alice).save()
        with self.assertRaises(NotFollowingError):
            FollowService(self.alice).unfollow(self.bob)
        self.assertTrue(Follower.objects.filter(owner=self.bob, user=self.alice).exists())

    def test_half_pair_counts_as_already_related(self):
        Follower.between(self.bob, self.alice).save()
        with self.assertRaises(AlreadyRelatedError):
            FollowService(self.alice).request_follow(self.bob)

    def test_racing_insert_surfaces_as_already_related(self):
        make_confirmed_pair(self.alice, self.bob)
        before = relation_snapshot()
        service = FollowService(self.alice)
        # Simulate a concurrent request that committed after our state check.
        with patch.object(FollowService, "_state", return_value=STATE_NONE):
            with self.assertRaises(AlreadyRelatedError):
                service.request_follow(self.bob)
        self.assertEqual(relation_snapshot(), before)
        self.assertGraphConsistent()

    def test_racing_pending_insert_surfaces_as_already_related(self):
        make_pending(self.alice, self.cara)
        with patch.object(FollowService, "_state", return_value=STATE_NONE):
            with self.assertRaises(AlreadyRelatedError):
                FollowService(self.alice).request_follow(self.cara)
        self.assertEqual(WaitingFollower.objects.count(), 1)

    def test_failed_confirm_on_approve_restores_waiting_entry(self):
        make_pending(self.alice, self.cara)
        # A stale half pair makes the confirm step collide.
        Follower.between(self.cara, self.alice).save()
        with self.assertRaises(AlreadyRelatedError):
            FollowService(self.cara).approve(self.alice)
        self.assertTrue(WaitingFollower.objects.filter(owner=self.cara, user=self.alice).exists())
        self.assertFalse(Following.objects.filter(owner=self.alice).exists())

    def test_request_locks_both_users(self):
        service = FollowService(self.cara)
        with patch.object(service.user_repo, "lock_pair", wraps=service.user_repo.lock_pair) as lock:
            service.request_follow(self.alice)
        lock.assert_called_once_with(self.cara.pk, self.alice.pk)

    def test_edges_snapshot_counterpart_display_data(self):
        self.alice.profile_photo_url = "https://img.example.org/alice.png"
        self.alice.save()
        FollowService(self.alice).request_follow(self.bob)
        edge = Follower.objects.get(owner=self.bob, user=self.alice)
        self.assertEqual(edge.nickname, "alice")
        self.assertEqual(edge.profile_photo_url, "https://img.example.org/alice.png")
        self.assertEqual(Following.objects.get(owner=self.alice).nickname, "bob")

    def test_operation_sequence_keeps_graph_consistent(self):
        dave = make_user(nickname="dave", public=False)
        users = [self.alice, self.bob, self.cara, dave]
        for requester in users:
            for target in users:
                if requester is target:
                    continue
                FollowService(requester).request_follow(target)
        FollowService(self.cara).approve(self.alice)
        FollowService(self.cara).refuse(self.bob)
        FollowService(dave).approve(self.cara)
        FollowService(self.alice).unfollow(self.bob)
        FollowService(self.bob).cancel_request(dave)
        self.assertGraphConsistent()
        self.assertEqual(FollowService(self.alice).state_with(self.cara), STATE_CONFIRMED)
        self.assertEqual(FollowService(self.bob).state_with(self.cara), STATE_NONE)
        self.assertEqual(FollowService(self.alice).state_with(dave), STATE_PENDING)

    def test_transitions_are_logged(self):
        with self.assertLogs("users.services.follow", level="INFO") as logs:
            FollowService(self.alice).request_follow(self.bob)
        self.assertIn(f"follow {self.alice.pk} -> {self.bob.pk}: confirmed", logs.output[0])
