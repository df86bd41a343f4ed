"""Custom user model with profile metadata and avatar helpers."""

from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.core.validators import RegexValidator, MaxLengthValidator
from django.db import models
from libgravatar import Gravatar


class UserManager(BaseUserManager):
    """Manager for email-identified users."""

    use_in_migrations = True

    def _create_user(self, email, password, **extra_fields):
        if not email:
            raise ValueError("The email must be set")
        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_user(self, email, password=None, **extra_fields):
        """Create a regular user."""
        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email, password=None, **extra_fields):
        """Create a staff superuser."""
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")
        return self._create_user(email, password, **extra_fields)


class User(AbstractUser):
    """Model for user auth, profile and account visibility."""

    SIGNUP_APP = "app"
    SIGNUP_FACEBOOK = "facebook"
    SIGNUP_GOOGLE = "google"

    SIGNUP_TYPES = [
        (SIGNUP_APP, "App"),
        (SIGNUP_FACEBOOK, "Facebook"),
        (SIGNUP_GOOGLE, "Google"),
    ]

    username = None
    email = models.EmailField(unique=True, blank=False)
    nickname = models.CharField(
        max_length=30,
        unique=True,
        validators=[RegexValidator(
            regex=r'^[\w.]{3,}$',
            message='Nickname must consist of at least three letters, digits, dots or underscores'
        )]
    )
    signup_type = models.CharField(max_length=20, choices=SIGNUP_TYPES, default=SIGNUP_APP)
    name = models.CharField(max_length=50, blank=True)
    website = models.URLField(max_length=200, blank=True)
    bio = models.TextField(
        max_length=500,
        blank=True,
        help_text="short user bio shown on profile",
        validators=[MaxLengthValidator(500)]
    )
    profile_photo_url = models.URLField(max_length=500, blank=True)
    public = models.BooleanField(default=True)

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["nickname"]

    objects = UserManager()

    class Meta:
        """Default ordering for users."""
        ordering = ['nickname']

    def __str__(self):
        return self.nickname or self.email

    def gravatar(self, size=120):
        """Return gravatar URL for the user's email."""
        gravatar_object = Gravatar(self.email)
        return gravatar_object.get_image(size=size, default='mp')

    def photo_or_gravatar(self, size=120):
        """Return the stored profile photo URL or a gravatar fallback."""
        return self.profile_photo_url or self.gravatar(size=size)
