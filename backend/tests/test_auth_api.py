"""Tests for the authentication and account endpoints."""

import uuid
from datetime import timedelta

import jwt
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from household.middleware import get_token_service
from household.models import UserRole
from household.services.auth import (
    Identity,
    NoExpiryClaimError,
    TokenService,
    create_access_token,
    decode_token,
)


async def _login(async_client, email: str, password: str) -> str:
    response = await async_client.post("/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200
    return response.json()["token"]


# --- Registration ---


@pytest.mark.asyncio
async def test_register_returns_user_without_password(async_client):
    response = await async_client.post(
        "/auth/register",
        json={"email": "New.User@Example.com", "password": "password1", "name": "New User"},
    )

    assert response.status_code == 201
    data = response.json()
    assert data["email"] == "new.user@example.com"
    assert data["name"] == "New User"
    assert data["role"] == "user"
    assert "password" not in data
    assert "password_hash" not in data


@pytest.mark.asyncio
async def test_register_duplicate_email(async_client, user):
    """Registering an existing email returns 409 in the error envelope."""
    response = await async_client.post(
        "/auth/register",
        json={"email": user.email.upper(), "password": "password1", "name": "Dup"},
    )

    assert response.status_code == 409
    assert response.json() == {"success": False, "message": "User already exists"}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"email": "not-an-email", "password": "password1", "name": "X"},
        {"email": "short@example.com", "password": "123", "name": "X"},
        {"email": "noname@example.com", "password": "password1"},
    ],
)
async def test_register_validates_body(async_client, payload):
    response = await async_client.post("/auth/register", json=payload)

    assert response.status_code == 422
    assert response.json()["success"] is False


@pytest.mark.asyncio
async def test_first_admin_can_self_register(async_client):
    response = await async_client.post(
        "/auth/register",
        json={
            "email": "first-admin@example.com",
            "password": "password1",
            "name": "Admin",
            "role": "admin",
        },
    )

    assert response.status_code == 201
    assert response.json()["role"] == "admin"


@pytest.mark.asyncio
async def test_admin_self_registration_blocked_once_admin_exists(async_client, admin_user):
    response = await async_client.post(
        "/auth/register",
        json={
            "email": "second-admin@example.com",
            "password": "password1",
            "name": "Admin 2",
            "role": "admin",
        },
    )

    assert response.status_code == 403


# --- Login ---


@pytest.mark.asyncio
async def test_login_returns_token_and_user(async_client, user, user_password):
    response = await async_client.post(
        "/auth/login", json={"email": user.email, "password": user_password}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["user"]["email"] == user.email
    assert "password_hash" not in data["user"]
    assert decode_token(data["token"])["id"] == str(user.id)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "email,password",
    [
        ("user@example.com", "wrong-password"),
        ("nobody@example.com", None),
    ],
)
async def test_login_invalid_credentials(async_client, user, user_password, email, password):
    """Wrong password and unknown email are indistinguishable."""
    password = password or user_password
    response = await async_client.post("/auth/login", json={"email": email, "password": password})

    assert response.status_code == 401
    data = response.json()
    assert data == {"success": False, "message": "Invalid credentials"}
    assert "token" not in data


# --- Logout and token rejection ---


@pytest.mark.asyncio
async def test_logout_then_reuse_token_is_rejected(async_client, user, user_password):
    """After logout the same token is refused with 401, not 403."""
    token = await _login(async_client, user.email, user_password)
    headers = {"Authorization": f"Bearer {token}"}

    response = await async_client.post("/auth/logout", headers=headers)
    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Logged out successfully"}

    response = await async_client.get(
        "/auth/profile", params={"email": user.email}, headers=headers
    )
    assert response.status_code == 401
    assert response.json()["message"] == "Token has been invalidated"


@pytest.mark.asyncio
async def test_logout_leaves_other_sessions_valid(async_client, user, user_password):
    first = await _login(async_client, user.email, user_password)
    second = await _login(async_client, user.email, user_password)

    response = await async_client.post(
        "/auth/logout", headers={"Authorization": f"Bearer {first}"}
    )
    assert response.status_code == 200

    response = await async_client.get("/auth/all", headers={"Authorization": f"Bearer {second}"})
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_missing_token_is_401(async_client):
    response = await async_client.post("/auth/logout")

    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"
    assert response.json() == {"success": False, "message": "No token provided"}


@pytest.mark.asyncio
async def test_non_bearer_scheme_is_treated_as_missing(async_client, user):
    token = create_access_token(user.id, user.role, user.email)

    response = await async_client.get("/auth/all", headers={"Authorization": f"Token {token}"})

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_bad_signature_is_403(async_client, user):
    token = jwt.encode(
        {"id": str(user.id), "role": "user", "exp": 4102444800},
        "a-completely-different-secret-key-value",
        algorithm="HS256",
    )

    response = await async_client.get("/auth/all", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 403
    assert response.json() == {"success": False, "message": "Invalid token"}


@pytest.mark.asyncio
async def test_expired_token_is_403(async_client, user):
    token = create_access_token(user.id, user.role, user.email, expires_delta=timedelta(seconds=-1))

    response = await async_client.get("/auth/all", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 403
    assert response.json()["message"] == "Token has expired"


@pytest.mark.asyncio
async def test_signed_token_without_expiry_is_rejected(async_client):
    from household.core import settings

    token = jwt.encode(
        {"id": str(uuid.uuid4()), "role": "user"},
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )

    response = await async_client.get("/auth/all", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 403


class _TokensWithoutExpiry:
    """Token service whose tokens authenticate but carry no expiry."""

    async def verify(self, token):
        return Identity(subject_id=uuid.uuid4(), role=UserRole.USER)

    async def revoke(self, token):
        raise NoExpiryClaimError("Token has no expiration")


@pytest.mark.asyncio
async def test_logout_token_without_expiry_is_500(app, async_client):
    app.dependency_overrides[get_token_service] = _TokensWithoutExpiry

    response = await async_client.post(
        "/auth/logout", headers={"Authorization": "Bearer opaque-token"}
    )

    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "Error during logout"}


@pytest.mark.asyncio
async def test_logout_is_committed_before_response(app, database, monkeypatch):
    """Runs with the real per-request session, not the shared test session."""
    events = []
    commit = AsyncSession.commit

    async def recording_commit(self):
        events.append("commit")
        await commit(self)

    monkeypatch.setattr(AsyncSession, "commit", recording_commit)

    async def recording_app(scope, receive, send):
        async def recording_send(message):
            if message["type"] == "http.response.start":
                events.append("response")
            await send(message)

        await app(scope, receive, recording_send)

    token = create_access_token(uuid.uuid4(), UserRole.USER)
    transport = ASGITransport(app=recording_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.post("/auth/logout", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    assert "commit" in events
    assert events.index("commit") < events.index("response")
    async with database.session_maker() as session:
        assert await TokenService(session).is_revoked(token) is True


# --- Profile ---


@pytest.mark.asyncio
async def test_get_profile(async_client, user, auth_headers):
    response = await async_client.get(
        "/auth/profile", params={"email": user.email}, headers=auth_headers
    )

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["user"]["email"] == user.email


@pytest.mark.asyncio
async def test_get_profile_requires_email(async_client, auth_headers):
    response = await async_client.get("/auth/profile", headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["message"] == "Email parameter is required"


@pytest.mark.asyncio
async def test_get_profile_unknown_email(async_client, auth_headers):
    response = await async_client.get(
        "/auth/profile", params={"email": "ghost@example.com"}, headers=auth_headers
    )

    assert response.status_code == 404
    assert response.json()["message"] == "User not found with email: ghost@example.com"


@pytest.mark.asyncio
async def test_update_own_profile(async_client, user, auth_headers):
    response = await async_client.put(
        "/auth/profile",
        params={"email": user.email},
        json={"name": "Renamed"},
        headers=auth_headers,
    )

    assert response.status_code == 200
    assert response.json()["user"]["name"] == "Renamed"


@pytest.mark.asyncio
async def test_password_change_takes_effect(async_client, user, user_password, auth_headers):
    response = await async_client.put(
        "/auth/profile",
        params={"email": user.email},
        json={"password": "brand-new-password"},
        headers=auth_headers,
    )
    assert response.status_code == 200

    response = await async_client.post(
        "/auth/login", json={"email": user.email, "password": user_password}
    )
    assert response.status_code == 401
    await _login(async_client, user.email, "brand-new-password")


@pytest.mark.asyncio
async def test_cannot_update_someone_else(async_client, user_factory, auth_headers):
    other = await user_factory(email="other@example.com")

    response = await async_client.put(
        "/auth/profile",
        params={"email": other.email},
        json={"name": "Hacked"},
        headers=auth_headers,
    )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_user_cannot_promote_self(async_client, user, auth_headers):
    response = await async_client.put(
        "/auth/profile",
        params={"email": user.email},
        json={"role": "admin"},
        headers=auth_headers,
    )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_admin_can_change_role(async_client, user, admin_headers):
    response = await async_client.put(
        "/auth/profile",
        params={"email": user.email},
        json={"role": "admin"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    assert response.json()["user"]["role"] == UserRole.ADMIN.value


@pytest.mark.asyncio
async def test_delete_own_profile(async_client, user, auth_headers, admin_headers):
    response = await async_client.delete(
        "/auth/profile", params={"email": user.email}, headers=auth_headers
    )
    assert response.status_code == 200
    assert response.json()["success"] is True

    response = await async_client.get(
        "/auth/profile", params={"email": user.email}, headers=admin_headers
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_deleted_user_token_remains_valid_until_expiry(async_client, user, auth_headers):
    await async_client.delete("/auth/profile", params={"email": user.email}, headers=auth_headers)

    response = await async_client.get("/auth/all", headers=auth_headers)

    assert response.status_code == 200


@pytest.mark.asyncio
async def test_delete_profile_unknown_email(async_client, admin_headers):
    response = await async_client.delete(
        "/auth/profile", params={"email": "ghost@example.com"}, headers=admin_headers
    )

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_list_users(async_client, user, admin_user, auth_headers):
    response = await async_client.get("/auth/all", headers=auth_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert {u["email"] for u in data["users"]} == {user.email, admin_user.email}
    assert all("password_hash" not in u for u in data["users"])
