"""Identity store backed by the ``User`` model.

Read-only from the realtime layer except for the ``last_seen`` touch.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from channels.db import database_sync_to_async
from django.contrib.auth import get_user_model
from django.utils import timezone


@dataclass(frozen=True)
class Identity:
    user_id: int
    display_name: str
    initials: str
    scope_tag: str


@database_sync_to_async
def _load_identity(claim: Any) -> Identity | None:
    user_model = get_user_model()
    try:
        user = user_model.objects.filter(pk=claim, is_active=True).first()
    except (TypeError, ValueError):
        # Claim does not fit the primary key type.
        return None
    if user is None:
        return None
    return Identity(
        user_id=int(user.pk),
        display_name=user.display_name,
        initials=user.initials,
        scope_tag=user.university,
    )


@database_sync_to_async
def _touch_last_seen(user_id: Any) -> int:
    user_model = get_user_model()
    return user_model.objects.filter(pk=user_id).update(last_seen=timezone.now())


class UserIdentityStore:
    async def resolve(self, claim: Any) -> Identity | None:
        return await _load_identity(claim)

    async def touch(self, user_id: Any) -> None:
        await _touch_last_seen(user_id)
