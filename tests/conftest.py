from __future__ import annotations

import os
from collections.abc import AsyncIterator
from pathlib import Path

import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from app.core.base_donnees import creer_fabrique_session, creer_moteur_async
from app.domaine.modeles import BaseModele  # importe aussi tous les modèles


def _url_test(tmp_path: Path) -> str:
    """SQLite fichier par test ; TEST_DATABASE_URL pour viser PostgreSQL."""

    return os.getenv("TEST_DATABASE_URL") or f"sqlite+aiosqlite:///{tmp_path / 'grubdash_test.db'}"


@pytest_asyncio.fixture
async def moteur_test(tmp_path: Path) -> AsyncIterator[AsyncEngine]:
    """Moteur de base de données pour les tests.

    Scope function : un moteur async ne doit jamais être partagé entre
    plusieurs event loops. Schéma recréé à chaque test.
    """

    moteur = creer_moteur_async(_url_test(tmp_path))

    async with moteur.begin() as connexion:
        await connexion.run_sync(BaseModele.metadata.drop_all)
        await connexion.run_sync(BaseModele.metadata.create_all)

    try:
        yield moteur
    finally:
        await moteur.dispose()


@pytest_asyncio.fixture
async def session_test(moteur_test: AsyncEngine) -> AsyncIterator[AsyncSession]:
    """Session SQLAlchemy async isolée par test."""

    fabrique = creer_fabrique_session(moteur_test)

    async with fabrique() as session:
        try:
            yield session
        finally:
            # Sécurité : rollback si le test a oublié de commit
            await session.rollback()
