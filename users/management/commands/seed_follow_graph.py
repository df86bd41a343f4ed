"""Management command to seed users and a consistent follow graph for local development."""

from random import Random

from faker import Faker
from django.core.management.base import BaseCommand
from django.db import transaction

from users.adapters import unique_nickname
from users.exceptions import AlreadyRelatedError
from users.models import User
from users.services import FollowService, STATE_PENDING


class Command(BaseCommand):
    """Create fake users and drive follow requests through FollowService."""

    help = "Seed fake users plus follow/follow-request edges that respect account privacy."
    DEFAULT_PASSWORD = "Password123"

    def add_arguments(self, parser):
        """Define CLI arguments for the command."""
        parser.add_argument("--users", type=int, default=50, help="How many users to create")
        parser.add_argument("--follows", type=int, default=8, help="Follow requests sent per user")
        parser.add_argument(
            "--private-ratio",
            type=float,
            default=0.3,
            help="Share of created users whose account is private",
        )
        parser.add_argument(
            "--approve-ratio",
            type=float,
            default=0.5,
            help="Share of pending requests that get approved",
        )
        parser.add_argument("--seed", type=int, default=None, help="Random seed for repeatable data")

    def __init__(self, *args, **kwargs):
        """Set up faker instance for generating seed content."""
        super().__init__(*args, **kwargs)
        self.faker = Faker('en_GB')

    def handle(self, *args, **options):
        """Create users, send requests, approve a share of the pending ones."""
        rng = Random(options["seed"])
        if options["seed"] is not None:
            self.faker.seed_instance(options["seed"])

        with transaction.atomic():
            users = [self._create_user(rng, options["private_ratio"]) for _ in range(max(0, options["users"]))]
        sent, pending = self._send_requests(rng, users, max(0, options["follows"]))
        approved = self._approve_some(rng, pending, options["approve_ratio"])

        self.stdout.write(
            self.style.SUCCESS(
                f"Created {len(users)} users, sent {sent} follow requests, "
                f"approved {approved} of {len(pending)} pending."
            )
        )

    def _create_user(self, rng, private_ratio):
        first, last = self.faker.first_name(), self.faker.last_name()
        nickname = unique_nickname(f"{first}.{last}", User)
        return User.objects.create_user(
            email=f"{nickname}@example.org",
            password=self.DEFAULT_PASSWORD,
            nickname=nickname,
            name=f"{first} {last}"[:50],
            bio=self.faker.sentence(nb_words=10),
            public=rng.random() >= private_ratio,
        )

    def _send_requests(self, rng, users, per_user):
        sent = 0
        pending = []
        for requester in users:
            others = [u for u in users if u.pk != requester.pk]
            for target in rng.sample(others, min(per_user, len(others))):
                try:
                    state = FollowService(requester).request_follow(target)
                except AlreadyRelatedError:
                    continue
                sent += 1
                if state == STATE_PENDING:
                    pending.append((requester, target))
        return sent, pending

    def _approve_some(self, rng, pending, approve_ratio):
        approved = 0
        for requester, target in pending:
            if rng.random() < approve_ratio:
                FollowService(target).approve(requester)
                approved += 1
        return approved
