from django.contrib.auth.models import AbstractUser
from django.db import models
from django.db.models import CharField
from django.db.models import EmailField
from django.utils import timezone
from django.utils.translation import gettext_lazy as _


class User(AbstractUser):
    """
    Default custom user model for uniconnect.

    ``university`` is the scope a student belongs to; realtime broadcasts
    for questions and presence are fanned out per university.
    """

    # First and last name do not cover name patterns around the globe
    name = CharField(_("Full Name"), blank=True, max_length=255)
    email = EmailField(_("email address"), unique=True)
    university = CharField(_("University"), max_length=255, db_index=True)
    last_seen = models.DateTimeField(_("Last seen"), default=timezone.now)
    # Audit timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    @property
    def display_name(self) -> str:
        return self.name or self.username

    @property
    def initials(self) -> str:
        """Upper-cased first letter of every word of the display name."""
        return "".join(part[0] for part in self.display_name.split()).upper()
