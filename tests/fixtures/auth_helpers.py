"""Request helpers shared by the API tests"""

from grimoire.config import ApplicationConfig

ADMIN_HEADERS = {"X-Admin-API-Key": ApplicationConfig.ADMIN_API_KEY}
PASSWORD = "Str0ng!Pass"


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


async def register(client, email="alice@example.com", password=PASSWORD, display_name="Alice"):
    response = await client.post(
        "/auth/register",
        json={"email": email, "password": password, "display_name": display_name},
    )
    assert response.status_code == 201, response.text
    return response.json()["user"]


async def login(client, email="alice@example.com", password=PASSWORD, **extra):
    response = await client.post(
        "/auth/login", json={"email": email, "password": password, **extra}
    )
    assert response.status_code == 200, response.text
    return response.json()
