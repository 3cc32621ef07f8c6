from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.transactions import ErreurCritiqueMetier, executer_transaction
from app.domaine.modeles.catalogue import Plat
from app.domaine.normalisation import PlatCanonique
from app.domaine.services.validation import valider_plat


logger = logging.getLogger(__name__)


class ErreurCataloguePlat(ErreurCritiqueMetier):
    """Erreur générique du catalogue."""


class PlatIntrouvable(ErreurCataloguePlat):
    """Aucun plat avec cet id."""


class DonneesInvalidesPlat(ErreurCataloguePlat):
    """Le plat candidat ne passe pas la validation (message unique)."""


class ServiceCataloguePlats:
    """CRUD du catalogue de plats.

    - La session est injectée : un service par requête.
    - La validation porte sur l’objet complet (candidat ou plat modifié)
      avant tout commit : un échec ne laisse aucune écriture partielle.
    - Suppression inconditionnelle : les commandes portent des copies.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def lister(self) -> list[Plat]:
        async def _action() -> list[Plat]:
            res = await self._session.execute(select(Plat).order_by(Plat.id.asc()))
            return list(res.scalars().all())

        return await executer_transaction(self._session, action=_action)

    async def obtenir(self, plat_id: int) -> Plat:
        return await executer_transaction(self._session, action=lambda: self._charger(plat_id))

    async def creer(self, donnees: PlatCanonique) -> Plat:
        async def _action() -> Plat:
            plat = Plat(
                nom=donnees.nom,
                description=donnees.description,
                image_url=donnees.image_url,
                prix=donnees.prix,
            )
            self._valider(plat)

            self._session.add(plat)
            await self._session.flush()  # obtenir plat.id
            return plat

        plat = await executer_transaction(self._session, action=_action)
        logger.info("plat_cree plat_id=%s nom=%s", plat.id, plat.nom)
        return plat

    async def mettre_a_jour(self, plat_id: int, donnees: PlatCanonique) -> Plat:
        async def _action() -> Plat:
            plat = await self._charger(plat_id)

            # Remplacement complet des champs
            plat.nom = donnees.nom
            plat.description = donnees.description
            plat.image_url = donnees.image_url
            plat.prix = donnees.prix

            self._valider(plat)
            await self._session.flush()
            return plat

        plat = await executer_transaction(self._session, action=_action)
        logger.info("plat_mis_a_jour plat_id=%s", plat.id)
        return plat

    async def supprimer(self, plat_id: int) -> None:
        async def _action() -> None:
            plat = await self._charger(plat_id)
            await self._session.delete(plat)
            await self._session.flush()

        await executer_transaction(self._session, action=_action)
        logger.info("plat_supprime plat_id=%s", plat_id)

    async def _charger(self, plat_id: int) -> Plat:
        res = await self._session.execute(
            select(Plat).where(Plat.id == plat_id).execution_options(populate_existing=True)
        )
        plat = res.scalar_one_or_none()
        if plat is None:
            raise PlatIntrouvable(f"Plat {plat_id} introuvable.")
        return plat

    @staticmethod
    def _valider(plat: Plat) -> None:
        ok, message = valider_plat(plat)
        if not ok:
            logger.info("plat_refuse motif=%s", message)
            raise DonneesInvalidesPlat(message or "Dish is invalid.")
