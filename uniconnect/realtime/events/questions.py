from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from uniconnect.realtime.rooms import room_for_question
from uniconnect.realtime.socketio import emit_event_to_all
from uniconnect.realtime.socketio import emit_event_to_room
from uniconnect.realtime.socketio import emit_event_to_scope


def build_trending_payload(question: Mapping[str, Any], scope_tag: str) -> dict[str, Any]:
    return {
        "questionId": question.get("id"),
        "title": question.get("title"),
        "university": scope_tag,
    }


def publish_question_created(question: Mapping[str, Any], scope_tag: str) -> None:
    """Push a freshly stored question to its university and the trending feed."""

    emit_event_to_scope(scope_tag, "question_created", dict(question))
    emit_event_to_all("question_trending", build_trending_payload(question, scope_tag))


def publish_answer_created(question_id: Any, answer: Mapping[str, Any]) -> None:
    payload = {**answer, "questionId": question_id}
    emit_event_to_room(room_for_question(question_id), "new_answer", payload)
