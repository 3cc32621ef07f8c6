"""Helpers HTTP STRICTEMENT côté tests.

Objectif : une application dont la dépendance `fournir_session` pointe sur
le moteur de test, interrogée en mémoire via httpx.ASGITransport.
"""

from __future__ import annotations

import httpx
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncSession

from app.main import creer_application


def app_avec_dependances_test(session_test: AsyncSession) -> FastAPI:
    app = creer_application()

    from app.api.dependances import fournir_session

    async def _fournir_session_override():
        assert session_test.bind is not None
        async with AsyncSession(bind=session_test.bind, expire_on_commit=False) as s:
            yield s

    app.dependency_overrides[fournir_session] = _fournir_session_override
    return app


def transport_test(session_test: AsyncSession) -> httpx.ASGITransport:
    return httpx.ASGITransport(app=app_avec_dependances_test(session_test))


def client_http(session_test: AsyncSession) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=transport_test(session_test), base_url="http://test")
