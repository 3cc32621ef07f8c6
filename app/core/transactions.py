from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from sqlalchemy.exc import DBAPIError, InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.configuration import parametres_application


logger = logging.getLogger(__name__)

T = TypeVar("T")


class ErreurCritiqueMetier(Exception):
    """Erreur métier : jamais rejouée, toujours remontée à l’appelant."""


def est_erreur_transitoire(erreur: BaseException) -> bool:
    """Vrai si la base est momentanément injoignable (rejouable)."""

    if isinstance(erreur, (OperationalError, InterfaceError)):
        return True
    return isinstance(erreur, DBAPIError) and bool(erreur.connection_invalidated)


async def executer_transaction(
    session: AsyncSession,
    *,
    action: Callable[[], Awaitable[T]],
    tentatives: int | None = None,
    delai_secondes: float | None = None,
) -> T:
    """Wrapper transactionnel : commit tout-ou-rien, rollback + reprise bornée.

    `action` doit être rejouable : elle recharge ce qu’elle modifie. Une erreur
    métier déclenche un rollback et remonte telle quelle ; une erreur transitoire
    est rejouée au plus `tentatives` fois.

    Utilisation typique dans un service:

        return await executer_transaction(self._session, action=lambda: self._creer(...))
    """

    nb_tentatives = max(1, tentatives or parametres_application.tentatives_base_donnees)
    delai = parametres_application.delai_tentative_secondes if delai_secondes is None else delai_secondes

    tentative = 1
    while True:
        try:
            resultat = await action()
            await session.commit()
            return resultat
        except ErreurCritiqueMetier:
            await session.rollback()
            raise
        except DBAPIError as e:
            await session.rollback()
            if not est_erreur_transitoire(e) or tentative >= nb_tentatives:
                raise
            logger.warning(
                "transaction_erreur_transitoire tentative=%s max=%s erreur=%s",
                tentative,
                nb_tentatives,
                type(e.orig).__name__ if e.orig is not None else type(e).__name__,
            )
            tentative += 1
            await asyncio.sleep(delai)
