"""
Integration tests for the auth HTTP API.

Each test gets an empty database and drives the ASGI app through httpx.
"""
import asyncio

import pytest

from tests.helpers import (
    LOGIN_URL,
    LOGOUT_URL,
    PROFILE_URL,
    REGISTER_URL,
    auth_header,
    login_token,
    register,
)


class TestAuthFlow:

    @pytest.mark.asyncio
    async def test_register_new_user(self, client, register_payload):
        response = await client.post(REGISTER_URL, json=register_payload)

        assert response.status_code == 201
        data = response.json()
        assert data["token"]
        assert data["user"]["name"] == register_payload["name"]
        assert data["user"]["msisdn"] == "+8801712345678"
        assert data["user"]["is_active"] is True
        assert data["user"]["id"] > 0
        assert data["user"]["created_at"]
        assert "hashed_password" not in data["user"]
        assert "password" not in data["user"]

    @pytest.mark.asyncio
    async def test_register_duplicate_user(self, client, register_payload):
        first = await client.post(REGISTER_URL, json=register_payload)
        assert first.status_code == 201

        response = await client.post(REGISTER_URL, json=register_payload)
        assert response.status_code == 409
        body = response.json()
        assert body["error"] == "Registration Failed"
        assert "already exists" in body["message"]

    @pytest.mark.asyncio
    async def test_login_with_correct_credentials(self, client, register_payload, login_payload):
        await client.post(REGISTER_URL, json=register_payload)

        response = await client.post(LOGIN_URL, json=login_payload)
        assert response.status_code == 200
        data = response.json()
        assert data["token"]
        assert data["user"]["name"] == register_payload["name"]
        assert "01712345678" in data["user"]["msisdn"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("credentials", [
        {"msisdn": "01712345678", "password": "wrongpassword"},
        {"msisdn": "01799999999", "password": "password123"},
        {"msisdn": "0" * 25, "password": "password123"},
        {"msisdn": "01712345678", "password": "p" * 80},
    ])
    async def test_login_failures_look_the_same(self, client, register_payload, credentials):
        await client.post(REGISTER_URL, json=register_payload)

        response = await client.post(LOGIN_URL, json=credentials)
        assert response.status_code == 401
        assert response.json() == {"error": "Login Failed", "message": "invalid credentials"}

    @pytest.mark.asyncio
    async def test_login_checks_whole_multibyte_password(self, client):
        prefix = "\u09a8" * 24
        response = await register(client, password=prefix + "A")
        assert response.status_code == 201

        response = await client.post(
            LOGIN_URL, json={"msisdn": "01712345678", "password": prefix + "ZZZZ"}
        )
        assert response.status_code == 401
        assert response.json() == {"error": "Login Failed", "message": "invalid credentials"}

        await login_token(client, password=prefix + "A")

    @pytest.mark.asyncio
    async def test_login_with_malformed_msisdn(self, client):
        response = await client.post(LOGIN_URL, json={"msisdn": "123456789", "password": "password123"})
        assert response.status_code == 401
        assert response.json()["message"] == "invalid credentials"

    @pytest.mark.asyncio
    async def test_profile_with_valid_token(self, client, register_payload, login_payload):
        await client.post(REGISTER_URL, json=register_payload)
        token = await login_token(client, **login_payload)

        response = await client.get(PROFILE_URL, headers=auth_header(token))
        assert response.status_code == 200
        user = response.json()
        assert user["name"] == register_payload["name"]
        assert "01712345678" in user["msisdn"]
        assert user["is_active"] is True
        assert user["id"] > 0

    @pytest.mark.asyncio
    async def test_profile_without_token(self, client):
        response = await client.get(PROFILE_URL)
        assert response.status_code == 401
        body = response.json()
        assert body["error"] == "Unauthorized"
        assert "Authorization header is required" in body["message"]

    @pytest.mark.asyncio
    async def test_profile_with_invalid_token(self, client):
        response = await client.get(PROFILE_URL, headers=auth_header("invalid-token"))
        assert response.status_code == 401
        assert "Invalid or expired token" in response.json()["message"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("header", ["Token abc", "Bearer", "bearer abc", "Bearer a b"])
    async def test_profile_with_malformed_header(self, client, header):
        response = await client.get(PROFILE_URL, headers={"Authorization": header})
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid authorization header format"

    @pytest.mark.asyncio
    async def test_profile_token_for_deleted_user(self, client, register_payload, login_payload):
        await client.post(REGISTER_URL, json=register_payload)
        token = await login_token(client, **login_payload)

        from backend.app.db import init_models
        await init_models(drop=True)

        response = await client.get(PROFILE_URL, headers=auth_header(token))
        assert response.status_code == 401
        assert response.json()["message"] == "User not found or inactive"

    @pytest.mark.asyncio
    async def test_logout_with_valid_token(self, client, register_payload, login_payload):
        await client.post(REGISTER_URL, json=register_payload)
        token = await login_token(client, **login_payload)

        response = await client.post(LOGOUT_URL, headers=auth_header(token))
        assert response.status_code == 200
        assert "Logged out successfully" in response.json()["message"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("headers", [None, auth_header("invalid-token"), {"Authorization": "junk"}])
    async def test_logout_without_valid_token(self, client, headers):
        response = await client.post(LOGOUT_URL, headers=headers)
        assert response.status_code == 200
        assert "Logged out successfully" in response.json()["message"]

    @pytest.mark.asyncio
    async def test_token_still_works_after_logout(self, client, register_payload, login_payload):
        await client.post(REGISTER_URL, json=register_payload)
        token = await login_token(client, **login_payload)

        await client.post(LOGOUT_URL, headers=auth_header(token))
        response = await client.get(PROFILE_URL, headers=auth_header(token))
        assert response.status_code == 200


class TestRegistrationValidation:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload,expected", [
        ({"msisdn": "01712345678", "password": "password123"}, "Name"),
        ({"name": "Test User", "password": "password123"}, "MSISDN"),
        ({"name": "Test User", "msisdn": "01712345678"}, "Password"),
        ({"name": "", "msisdn": "01712345678", "password": "password123"}, "Name"),
        ({"name": "Test User", "msisdn": "", "password": "password123"}, "MSISDN"),
        ({"name": "Test User", "msisdn": "01712345678", "password": ""}, "Password"),
        ({"name": "Test User", "msisdn": "01712345678", "password": "123"}, "min"),
    ])
    async def test_shape_errors_are_bad_request(self, client, payload, expected):
        response = await client.post(REGISTER_URL, json=payload)

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Bad Request"
        assert expected in body["message"]

    @pytest.mark.asyncio
    async def test_invalid_msisdn_format_is_a_registration_failure(self, client):
        response = await register(client, msisdn="123456789")

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Registration Failed"
        assert "invalid MSISDN format" in body["message"]

    @pytest.mark.asyncio
    async def test_invalid_name_format_is_a_registration_failure(self, client):
        response = await register(client, name="R2D2")

        assert response.status_code == 400
        assert response.json() == {"error": "Registration Failed", "message": "invalid name format"}

    @pytest.mark.asyncio
    async def test_malformed_json_body(self, client):
        response = await client.post(
            REGISTER_URL, content=b"{not json", headers={"Content-Type": "application/json"}
        )
        assert response.status_code == 400
        assert response.json()["error"] == "Bad Request"

    @pytest.mark.asyncio
    async def test_missing_body(self, client):
        response = await client.post(REGISTER_URL)
        assert response.status_code == 400
        assert response.json()["error"] == "Bad Request"


class TestLoginValidation:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload,expected", [
        ({"password": "password123"}, "MSISDN"),
        ({"msisdn": "01712345678"}, "Password"),
        ({"msisdn": "", "password": "password123"}, "MSISDN"),
        ({"msisdn": "01712345678", "password": ""}, "Password"),
    ])
    async def test_shape_errors_are_bad_request(self, client, payload, expected):
        response = await client.post(LOGIN_URL, json=payload)

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Bad Request"
        assert expected in body["message"]


class TestConcurrency:

    @pytest.mark.asyncio
    async def test_concurrent_registrations_same_msisdn(self, client):
        names = ["User A", "User B", "User C", "User D", "User E"]

        responses = await asyncio.gather(*[
            register(client, name=name, msisdn="01712345678") for name in names
        ])
        codes = [r.status_code for r in responses]

        assert codes.count(201) == 1, codes
        assert all(code == 409 for code in codes if code != 201), codes


class TestTokenPersistence:

    @pytest.mark.asyncio
    async def test_token_is_reusable(self, client, register_payload, login_payload):
        response = await client.post(REGISTER_URL, json=register_payload)
        assert response.status_code == 201
        token = await login_token(client, **login_payload)

        for _ in range(3):
            response = await client.get(PROFILE_URL, headers=auth_header(token))
            assert response.status_code == 200
            await asyncio.sleep(0.1)

    @pytest.mark.asyncio
    async def test_registration_token_grants_profile_access(self, client, register_payload):
        token = (await client.post(REGISTER_URL, json=register_payload)).json()["token"]

        response = await client.get(PROFILE_URL, headers=auth_header(token))
        assert response.status_code == 200


class TestMSISDNFormats:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name,msisdn", [
        ("Alice", "01712345678"),
        ("Bob", "01812345679"),
        ("Charlie", "01912345680"),
        ("Diana", "01612345681"),
        ("Eve", "01512345682"),
        ("Frank", "+8801312345683"),
        ("Grace", "8801412345684"),
    ])
    async def test_operator_prefixes_register(self, client, name, msisdn):
        response = await register(client, name=name, msisdn=msisdn)
        assert response.status_code == 201
        assert response.json()["user"]["msisdn"].startswith("+8801")
