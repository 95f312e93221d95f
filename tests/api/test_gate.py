"""
Tests for the authentication and authorization dependencies.
"""
from datetime import timedelta

import pytest

from clinic_accounts.main import app
from clinic_accounts.accounts.models import AccountRole
from clinic_accounts.auth.dependencies import Principal, authorize
from clinic_accounts.auth.exceptions import RoleDeniedException
from clinic_accounts.core.security import TokenCodec, get_token_codec

ME_URL = "/api/v1/patients/me"
ADMINS_URL = "/api/v1/super-admin/admins"


def test_missing_token_is_unauthorized(client):
    response = client.get(ME_URL)
    assert response.status_code == 401
    assert response.json() == {"detail": "Unauthorized - Token required"}


def test_non_bearer_scheme_is_unauthorized(client, patient):
    response = client.get(ME_URL, headers={"Authorization": "Basic dXNlcjpwYXNz"})
    assert response.status_code == 401


def test_garbage_token_is_forbidden(client):
    response = client.get(ME_URL, headers={"Authorization": "Bearer not.a.token"})
    assert response.status_code == 403
    assert response.json() == {"detail": "Forbidden - Invalid or expired token"}


def test_expired_token_is_forbidden(client, codec, patient):
    token = codec.issue(patient.id, patient.role, expires_delta=timedelta(seconds=-1))
    response = client.get(ME_URL, headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 403


def test_token_for_malformed_subject_is_forbidden(client, codec):
    token = codec.issue("not-a-uuid", AccountRole.PATIENT)
    response = client.get(ME_URL, headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 403


def test_token_of_deleted_account_is_forbidden(client, directory, auth_headers, patient):
    headers = auth_headers(patient)
    assert client.get(ME_URL, headers=headers).status_code == 200

    directory.delete(patient)

    response = client.get(ME_URL, headers=headers)
    assert response.status_code == 403
    assert response.json() == {"detail": "Forbidden - Invalid user session"}


def test_wrong_role_is_forbidden(client, auth_headers, admin):
    response = client.get(ADMINS_URL, headers=auth_headers(admin))
    assert response.status_code == 403
    assert response.json() == {"detail": "Forbidden - Insufficient permissions"}


def test_role_is_read_from_store_not_token(client, codec, patient):
    token = codec.issue(patient.id, AccountRole.SUPER_ADMIN)
    response = client.get(ADMINS_URL, headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 403


def test_missing_secret_is_server_error(client, auth_headers, patient):
    headers = auth_headers(patient)
    app.dependency_overrides[get_token_codec] = lambda: TokenCodec(None)

    response = client.get(ME_URL, headers=headers)
    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server configuration error"}

    response = client.post("/api/v1/auth/login", json={"email": patient.email, "password": "secret123"})
    assert response.status_code == 500


def test_authorize_is_pure_membership_check():
    principal = Principal(id="x", role=AccountRole.DOCTOR)
    assert authorize(principal, [AccountRole.DOCTOR, AccountRole.ADMIN]) is principal
    with pytest.raises(RoleDeniedException):
        authorize(principal, [AccountRole.ADMIN])
