"""Shared helpers for driving the auth API in tests."""

REGISTER_URL = "/api/v1/auth/register"
LOGIN_URL = "/api/v1/auth/login"
PROFILE_URL = "/api/v1/auth/profile"
LOGOUT_URL = "/api/v1/auth/logout"


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


async def register(client, name="Test User", msisdn="01712345678", password="password123"):
    return await client.post(
        REGISTER_URL, json={"name": name, "msisdn": msisdn, "password": password}
    )


async def login_token(client, msisdn="01712345678", password="password123") -> str:
    response = await client.post(LOGIN_URL, json={"msisdn": msisdn, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["token"]
