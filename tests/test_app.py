"""
Application wiring tests.
Covers: health check, storage error responses, session tokens.
"""
from __future__ import annotations

from datetime import timedelta

import pytest
from httpx import AsyncClient
from jose import JWTError

from app.core.exceptions import ConstraintViolationError, StorageError
from app.core.security import SessionInfo, create_session_token, decode_session_token
from app.crud.task import TaskStore

pytestmark = pytest.mark.asyncio


class TestHealth:
    async def test_health(self, client: AsyncClient) -> None:
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"


class TestStorageErrors:
    async def test_storage_error_is_500_without_details(
        self,
        client: AsyncClient,
        session_headers: dict,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        async def broken(self, task_id):
            raise StorageError("find_by_id on tasks failed", cause=RuntimeError("disk gone"))

        monkeypatch.setattr(TaskStore, "get", broken)

        response = await client.get("/api/v1/tasks/any-id", headers=session_headers)
        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "STORAGE_ERROR"
        assert "disk gone" not in body["detail"]

    async def test_constraint_violation_is_409(
        self,
        client: AsyncClient,
        session_headers: dict,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        async def conflicting(self, obj_in):
            raise ConstraintViolationError("create on tasks violated a constraint")

        monkeypatch.setattr(TaskStore, "create_task", conflicting)

        response = await client.post(
            "/api/v1/tasks/", json={"title": "Clash"}, headers=session_headers
        )
        assert response.status_code == 409
        assert response.json()["error"] == "CONSTRAINT_VIOLATION"


class TestSessionTokens:
    def _session(self) -> SessionInfo:
        return SessionInfo(user_id="u1", email="a@example.com", name="A", email_verified=True)

    async def test_round_trip(self) -> None:
        token = create_session_token(self._session())
        assert decode_session_token(token) == self._session()

    async def test_expired_token_is_rejected(self) -> None:
        token = create_session_token(self._session(), expire_delta=timedelta(seconds=-5))
        with pytest.raises(JWTError):
            decode_session_token(token)

    async def test_expired_token_over_http(self, client: AsyncClient) -> None:
        token = create_session_token(self._session(), expire_delta=timedelta(seconds=-5))
        response = await client.get(
            "/api/v1/dashboard", headers={"Authorization": f"Bearer {token}"}
        )
        assert response.status_code == 401
        assert response.json()["error"] == "INVALID_SESSION"
