from django.db.models.signals import post_save
from django.dispatch import receiver

from users.models import User
from users.repos.relation_repo import FollowerRepo, FollowingRepo, WaitingFollowerRepo

SNAPSHOT_FIELDS = {"nickname", "profile_photo_url"}


@receiver(post_save, sender=User)
def refresh_relation_snapshots(sender, instance, created, update_fields=None, **kwargs):
    """Copy a user's new nickname/photo onto every edge pointing at them."""
    if created:
        return
    if update_fields is not None and not SNAPSHOT_FIELDS & set(update_fields):
        return
    for repo in (FollowingRepo(), FollowerRepo(), WaitingFollowerRepo()):
        repo.refresh_display(instance)
