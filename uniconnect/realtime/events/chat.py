from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from uniconnect.realtime.socketio import emit_event_to_user


def publish_chat_message(recipient_id: Any, message: Mapping[str, Any]) -> bool:
    """Notify the recipient of a stored chat message if they are online.

    Returns ``False`` when the recipient has no live connection; the message is
    still available through chat history.
    """

    return emit_event_to_user(recipient_id, "new_message", dict(message))
