"""Custom authentication backends."""

from django.contrib.auth import get_user_model
from django.contrib.auth.backends import ModelBackend


class EmailBackend(ModelBackend):
    """Authentication backend that allows login with a case-insensitive email."""

    def authenticate(self, request, username=None, password=None, email=None, **kwargs):
        User = get_user_model()

        identifier = (email or username or "").strip().lower()
        if not identifier or not password:
            return None

        try:
            user = User.objects.get(email=identifier)
        except User.DoesNotExist:
            # Run the hasher anyway to keep timing uniform
            User().set_password(password)
            return None

        if user.check_password(password) and self.user_can_authenticate(user):
            return user
        return None
