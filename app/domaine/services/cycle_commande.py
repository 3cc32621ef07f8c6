from __future__ import annotations

"""Cycle de vie d’une commande : création depuis le panier, mise à jour du
statut et du contenu, suppression.

Règles :
- Les lignes sont des copies des plats (nom, description, image, prix) :
  aucune référence au catalogue.
- Quantité ramenée à max(1, quantité) à la création comme à la mise à jour :
  une quantité nulle/négative n’est jamais refusée sur ces chemins.
- Statut : "pending" par défaut à la création (non contrôlé) ; recopié tel
  quel puis contrôlé à la mise à jour.
- Mise à jour = remplacement complet des lignes, dans la même transaction
  que les champs de la commande.
- Aucune transition de statut n’est imposée (n’importe quel statut valide
  vers n’importe quel autre), et la suppression n’est pas restreinte au
  statut "pending".
"""

import logging
from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.transactions import ErreurCritiqueMetier, executer_transaction
from app.domaine.enums.types import StatutCommande
from app.domaine.modeles.commande import Commande, LigneCommande
from app.domaine.normalisation import CommandeCanonique, LigneCommandeCanonique
from app.domaine.services.validation import valider_commande


logger = logging.getLogger(__name__)

NOM_LIGNE_PAR_DEFAUT = "Item"


class ErreurCommande(ErreurCritiqueMetier):
    """Erreur générique de commande."""


class CommandeIntrouvable(ErreurCommande):
    """Aucune commande avec cet id."""


class DonneesInvalidesCommande(ErreurCommande):
    """La commande ne passe pas la validation (message unique)."""


def _est_vide(valeur: str | None) -> bool:
    return valeur is None or not valeur.strip()


def lignes_pour_creation(lignes: Iterable[LigneCommandeCanonique]) -> list[LigneCommande]:
    """Nom vide -> "Item" ; description/image absentes -> "" ; quantité >= 1."""

    resultat: list[LigneCommande] = []
    for position, ligne in enumerate(lignes):
        resultat.append(
            LigneCommande(
                position=position,
                nom=NOM_LIGNE_PAR_DEFAUT if _est_vide(ligne.nom) else ligne.nom,
                description=ligne.description or "",
                image_url=ligne.image_url or "",
                prix=ligne.prix,
                quantite=max(1, ligne.quantite),
            )
        )
    return resultat


def lignes_pour_mise_a_jour(lignes: Iterable[LigneCommandeCanonique]) -> list[LigneCommande]:
    """Comme la création, sauf : description vide -> nom (déjà normalisé)."""

    resultat: list[LigneCommande] = []
    for position, ligne in enumerate(lignes):
        nom = NOM_LIGNE_PAR_DEFAUT if _est_vide(ligne.nom) else ligne.nom
        resultat.append(
            LigneCommande(
                position=position,
                nom=nom,
                description=nom if _est_vide(ligne.description) else ligne.description,
                image_url="" if _est_vide(ligne.image_url) else ligne.image_url,
                prix=ligne.prix,
                quantite=max(1, ligne.quantite),
            )
        )
    return resultat


class ServiceCycleCommande:
    """Service des commandes (création, lecture, mise à jour, suppression).

    La session est injectée ; chaque écriture est une transaction unique
    (commande + lignes possédées) via `executer_transaction`.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def lister(self) -> list[Commande]:
        async def _action() -> list[Commande]:
            res = await self._session.execute(select(Commande).order_by(Commande.id.asc()))
            return list(res.scalars().all())

        return await executer_transaction(self._session, action=_action)

    async def obtenir(self, commande_id: int) -> Commande:
        return await executer_transaction(self._session, action=lambda: self._charger(commande_id))

    async def creer(self, donnees: CommandeCanonique) -> Commande:
        async def _action() -> Commande:
            commande = Commande(
                livrer_a=donnees.livrer_a,
                numero_mobile=donnees.numero_mobile,
                statut=StatutCommande.EN_ATTENTE.value if _est_vide(donnees.statut) else donnees.statut,
                lignes=lignes_pour_creation(donnees.lignes),
            )
            self._valider(commande, mise_a_jour=False)

            self._session.add(commande)
            await self._session.flush()  # ids commande + lignes
            return commande

        commande = await executer_transaction(self._session, action=_action)
        logger.info("commande_creee commande_id=%s lignes=%s", commande.id, len(commande.lignes))
        return commande

    async def mettre_a_jour(self, commande_id: int, donnees: CommandeCanonique) -> Commande:
        async def _action() -> Commande:
            commande = await self._charger(commande_id)

            # Champs recopiés tels quels : pas de statut par défaut ici.
            commande.livrer_a = donnees.livrer_a
            commande.numero_mobile = donnees.numero_mobile
            commande.statut = donnees.statut

            commande.lignes.clear()
            commande.lignes.extend(lignes_pour_mise_a_jour(donnees.lignes))

            # Validation après normalisation des lignes
            self._valider(commande, mise_a_jour=True)

            await self._session.flush()
            return commande

        commande = await executer_transaction(self._session, action=_action)
        logger.info(
            "commande_mise_a_jour commande_id=%s statut=%s lignes=%s",
            commande.id,
            commande.statut,
            len(commande.lignes),
        )
        return commande

    async def supprimer(self, commande_id: int) -> None:
        async def _action() -> None:
            commande = await self._charger(commande_id)
            await self._session.delete(commande)  # cascade sur les lignes
            await self._session.flush()

        await executer_transaction(self._session, action=_action)
        logger.info("commande_supprimee commande_id=%s", commande_id)

    async def _charger(self, commande_id: int) -> Commande:
        res = await self._session.execute(
            select(Commande).where(Commande.id == commande_id).execution_options(populate_existing=True)
        )
        commande = res.scalar_one_or_none()
        if commande is None:
            raise CommandeIntrouvable(f"Commande {commande_id} introuvable.")
        return commande

    @staticmethod
    def _valider(commande: Commande, *, mise_a_jour: bool) -> None:
        ok, message = valider_commande(commande, mise_a_jour=mise_a_jour)
        if not ok:
            logger.info("commande_refusee mise_a_jour=%s motif=%s", mise_a_jour, message)
            raise DonneesInvalidesCommande(message or "Order is invalid.")
