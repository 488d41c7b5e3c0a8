from http import HTTPStatus

import pytest
from django.urls import reverse

from uniconnect.users.models import User


def test_api_v1_docs_accessible_by_admin(admin_client):
    url = reverse("api-docs-v1")
    response = admin_client.get(url)
    assert response.status_code == HTTPStatus.OK


@pytest.mark.django_db
def test_api_v1_docs_require_authentication(client):
    # JWT is the first authentication class, so anonymous callers get a 401
    # challenge, the same as the realtime endpoints.
    url = reverse("api-docs-v1")
    response = client.get(url)
    assert response.status_code == HTTPStatus.UNAUTHORIZED
    assert response.headers["WWW-Authenticate"].startswith("Bearer")


def test_api_v1_docs_not_accessible_by_students(client, user: User):
    client.force_login(user)
    response = client.get(reverse("api-docs-v1"))
    assert response.status_code == HTTPStatus.FORBIDDEN


def test_api_v1_schema_generated_successfully(admin_client):
    url = reverse("api-schema-v1")
    response = admin_client.get(url)
    assert response.status_code == HTTPStatus.OK
