from django.urls import resolve
from django.urls import reverse


def test_online_users():
    assert reverse("realtime:online") == "/api/v1/realtime/online/"
    assert resolve("/api/v1/realtime/online/").view_name == "realtime:online"


def test_jwt_create():
    assert reverse("jwt-create") == "/api/v1/auth/jwt/create/"
    assert resolve("/api/v1/auth/jwt/create/").view_name == "jwt-create"


def test_health():
    assert reverse("health") == "/health/"
