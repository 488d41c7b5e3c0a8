from datetime import timedelta

import pytest
from asgiref.sync import async_to_sync
from django.contrib.auth import get_user_model
from django.utils import timezone

from uniconnect.realtime.identity import Identity
from uniconnect.realtime.identity import UserIdentityStore

pytestmark = pytest.mark.django_db(transaction=True)


@pytest.fixture
def store():
    return UserIdentityStore()


def test_resolve_active_user(user, store):
    identity = async_to_sync(store.resolve)(user.pk)
    assert identity == Identity(
        user_id=user.pk,
        display_name="Ada Lovelace",
        initials="AL",
        scope_tag="MIT",
    )


def test_resolve_accepts_string_claim(user, store):
    assert async_to_sync(store.resolve)(str(user.pk)).user_id == user.pk


def test_resolve_inactive_user(user, store):
    user.is_active = False
    user.save()
    assert async_to_sync(store.resolve)(user.pk) is None


def test_resolve_unknown_user(store):
    assert async_to_sync(store.resolve)(12345) is None


def test_resolve_malformed_claim(store):
    assert async_to_sync(store.resolve)("not-a-number") is None


def test_touch_updates_last_seen(user, store):
    before = timezone.now() - timedelta(days=1)
    get_user_model().objects.filter(pk=user.pk).update(last_seen=before)
    async_to_sync(store.touch)(user.pk)
    user.refresh_from_db()
    assert user.last_seen > before


def test_touch_unknown_user_is_noop(store):
    async_to_sync(store.touch)(12345)
    assert not get_user_model().objects.exists()
