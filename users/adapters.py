import re
from django.db import IntegrityError
from allauth.account.adapter import DefaultAccountAdapter
from allauth.socialaccount.adapter import DefaultSocialAccountAdapter
from django.contrib.auth import get_user_model


def unique_nickname(base, user_model, exclude_user_id=None):
    """
    Normalize a base string and make it unique for the given User model.
    """
    base = (base or "").strip().lstrip("@")
    base = re.sub(r"[^a-zA-Z0-9_.]", "", base).lower()[:26]
    if len(base) < 3:
        base = "user"

    nickname = base
    counter = 1
    qs = user_model.objects.filter(nickname=nickname)
    if exclude_user_id:
        qs = qs.exclude(pk=exclude_user_id)
    while qs.exists():
        nickname = f"{base}{counter}"
        counter += 1
        qs = user_model.objects.filter(nickname=nickname)
        if exclude_user_id:
            qs = qs.exclude(pk=exclude_user_id)

    return nickname


def _picture_url(extra_data):
    """Pull the avatar URL out of Google (`picture`) or Facebook (`picture.data.url`) profile data."""
    picture = (extra_data or {}).get("picture")
    if isinstance(picture, dict):
        picture = (picture.get("data") or {}).get("url")
    return picture or ""


class CustomAccountAdapter(DefaultAccountAdapter):
    """Give email/password signups a nickname derived from their email."""

    def save_user(self, request, user, form, commit=True):
        """Fill in a unique nickname before the first save."""
        user = super().save_user(request, user, form, commit=False)
        if not user.nickname:
            email = (getattr(user, "email", "") or "").strip()
            base = email.split("@", 1)[0] if "@" in email else ""
            user.nickname = unique_nickname(base, type(user), exclude_user_id=user.pk or None)
        if commit:
            user.save()
        return user


class CustomSocialAccountAdapter(DefaultSocialAccountAdapter):
    """
    Populate nickname, signup type and profile photo for OAuth signups.
    """

    def populate_user(self, request, sociallogin, data):
        """Populate user fields when authenticating via a third-party provider."""
        user = super().populate_user(request, sociallogin, data)

        UserModel = type(user)
        candidate = (
            getattr(user, "nickname", None)
            or data.get("username")
            or (data.get("email", "") or "").split("@")[0]
            or (data.get("first_name") or "")
            or (data.get("name") or "")
        )
        user.nickname = unique_nickname(candidate, UserModel, exclude_user_id=user.pk or None)

        provider = getattr(sociallogin.account, "provider", "")
        if provider in dict(UserModel.SIGNUP_TYPES):
            user.signup_type = provider
        if not user.profile_photo_url:
            user.profile_photo_url = _picture_url(getattr(sociallogin.account, "extra_data", None))
        if not user.name:
            user.name = (data.get("name") or "")[:50]
        return user

    def save_user(self, request, sociallogin, form=None):
        """
        Attach to an existing user with the same email if a uniqueness
        conflict happens during social signup.
        """
        try:
            return super().save_user(request, sociallogin, form=form)
        except IntegrityError:
            existing_user = self._find_existing_user(sociallogin)
            if not existing_user:
                raise
            sociallogin.connect(request, existing_user)
            return existing_user

    def _find_existing_user(self, sociallogin):
        email = (getattr(sociallogin.user, "email", "") or "").strip()
        if not email:
            return None
        User = get_user_model()
        return User.objects.filter(email__iexact=email).first()
