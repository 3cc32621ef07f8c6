from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from app.core.configuration import parametres_application


# L’engine async ne doit pas être partagé entre plusieurs boucles asyncio
# (TestClient, scripts) : une fabrique de sessions par event loop.
_fabriques_par_boucle: dict[int, async_sessionmaker[AsyncSession]] = {}


def _cle_boucle() -> int:
    try:
        return id(asyncio.get_running_loop())
    except RuntimeError:
        return 0


def creer_moteur_async(url: str | None = None) -> AsyncEngine:
    url = url or parametres_application.url_base_donnees
    if url.startswith("sqlite"):
        return create_async_engine(url, connect_args={"check_same_thread": False})
    return create_async_engine(url, pool_pre_ping=True)


def creer_fabrique_session(moteur: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=moteur, class_=AsyncSession, expire_on_commit=False)


def _obtenir_fabrique_session() -> async_sessionmaker[AsyncSession]:
    cle = _cle_boucle()
    fabrique = _fabriques_par_boucle.get(cle)
    if fabrique is None:
        fabrique = creer_fabrique_session(creer_moteur_async())
        _fabriques_par_boucle[cle] = fabrique
    return fabrique


async def fournir_session_async() -> AsyncIterator[AsyncSession]:
    fabrique = _obtenir_fabrique_session()
    async with fabrique() as session:
        yield session


async def creer_schema(moteur: AsyncEngine) -> None:
    """Crée les tables manquantes (dev / SQLite). En prod : Alembic."""

    from app.domaine.modeles import BaseModele

    async with moteur.begin() as connexion:
        await connexion.run_sync(BaseModele.metadata.create_all)
