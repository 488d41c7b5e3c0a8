import pytest
from django.utils import timezone

from uniconnect.users.models import User


def test_user_display_name_prefers_full_name(user: User):
    assert user.display_name == "Ada Lovelace"


def test_user_display_name_falls_back_to_username(user: User):
    user.name = ""
    assert user.display_name == "ada"


@pytest.mark.parametrize(
    ("name", "initials"),
    [
        ("Ada Lovelace", "AL"),
        ("grace brewster murray hopper", "GBMH"),
        ("  Alan   Turing ", "AT"),
        ("Plato", "P"),
    ],
)
def test_user_initials(name, initials):
    assert User(username="u", name=name).initials == initials


def test_user_last_seen_defaults_to_now(user: User):
    assert user.last_seen <= timezone.now()
    assert user.university == "MIT"
