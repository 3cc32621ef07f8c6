from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Annotated

from fastapi import Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.base_donnees import fournir_session_async
from app.domaine.normalisation import ENTIER_MAX, ENTIER_MIN
from app.domaine.services.catalogue_plats import ServiceCataloguePlats
from app.domaine.services.cycle_commande import ServiceCycleCommande


# Id de chemin : hors intervalle des colonnes -> erreur de validation (404 sans corps)
IdentifiantChemin = Annotated[int, Path(ge=ENTIER_MIN, le=ENTIER_MAX)]


async def fournir_session() -> AsyncIterator[AsyncSession]:
    """Dépendance FastAPI : fournit une session SQLAlchemy asynchrone."""

    async for session in fournir_session_async():
        yield session


def fournir_service_plats(session: AsyncSession = Depends(fournir_session)) -> ServiceCataloguePlats:
    return ServiceCataloguePlats(session)


def fournir_service_commandes(session: AsyncSession = Depends(fournir_session)) -> ServiceCycleCommande:
    return ServiceCycleCommande(session)
