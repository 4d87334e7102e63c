"""Test helpers shared across modules."""
from datetime import datetime, timedelta

from httpx import AsyncClient

ADMIN_LOGIN = "Admin"
ADMIN_PASSWORD = "AdminPass2023"


class TickingClock:
    """Deterministic clock that advances one second per call."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        self.now += timedelta(seconds=1)
        return self.now


def registration(login: str = "Ivan01", **overrides) -> dict:
    body = {
        "login": login,
        "password": "Pass123",
        "name": "Ivan",
        "gender": 1,
        "birthday": "2003-03-02T21:53:09.067Z",
        "admin": False,
    }
    body.update(overrides)
    return body


async def login_headers(client: AsyncClient, login: str, password: str) -> dict:
    response = await client.post("/login", json={"login": login, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": response.headers["Authorization"]}
