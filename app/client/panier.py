from __future__ import annotations

"""Panier côté client.

- Jamais envoyé au serveur, sauf comme payload de création de commande.
- Chaque ligne garde une copie des champs d’affichage du plat au moment de
  l’ajout (pas de resynchronisation avec le catalogue).
- Persisté dans un emplacement clé-valeur local à chaque mutation
  (sans jamais échouer), relu une fois à l’ouverture (emplacement absent,
  illisible ou corrompu -> panier vide).
"""

import json
import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

from app.core.configuration import parametres_application
from app.domaine.normalisation import (
    CommandeCanonique,
    LigneCommandeCanonique,
    PlatCanonique,
    normaliser_ligne_commande,
)

if TYPE_CHECKING:
    from app.client.api import ClientApiGrubDash


logger = logging.getLogger(__name__)

CLE_PANIER = "grubdash.cart.v1"


class StockagePanier(Protocol):
    """Emplacement clé-valeur local (équivalent d’un localStorage)."""

    def lire(self, cle: str) -> str | None:
        ...

    def ecrire(self, cle: str, valeur: str) -> None:
        ...


class StockageMemoire:
    """Stockage de test : garde les valeurs en mémoire."""

    def __init__(self, valeurs: dict[str, str] | None = None) -> None:
        self.valeurs: dict[str, str] = dict(valeurs or {})

    def lire(self, cle: str) -> str | None:
        return self.valeurs.get(cle)

    def ecrire(self, cle: str, valeur: str) -> None:
        self.valeurs[cle] = valeur


class StockageFichierJson:
    """Un fichier JSON par clé dans un répertoire (profil utilisateur)."""

    def __init__(self, repertoire: str | Path | None = None) -> None:
        self._repertoire = Path(repertoire or parametres_application.repertoire_panier)

    def _chemin(self, cle: str) -> Path:
        return self._repertoire / f"{cle}.json"

    def lire(self, cle: str) -> str | None:
        chemin = self._chemin(cle)
        if not chemin.exists():
            return None
        return chemin.read_text(encoding="utf-8")

    def ecrire(self, cle: str, valeur: str) -> None:
        self._repertoire.mkdir(parents=True, exist_ok=True)
        # Écriture atomique : jamais de fichier à moitié écrit
        temporaire = self._chemin(cle).with_suffix(".tmp")
        temporaire.write_text(valeur, encoding="utf-8")
        temporaire.replace(self._chemin(cle))


@dataclass
class LignePanier:
    id: int
    nom: str
    description: str
    image_url: str
    prix: int
    quantite: int

    @property
    def sous_total(self) -> int:
        return self.prix * self.quantite

    def vers_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.nom,
            "description": self.description,
            "image_url": self.image_url,
            "price": self.prix,
            "quantity": self.quantite,
        }


class Panier:
    """Panier d’une session client (un seul écrivain)."""

    def __init__(self, stockage: StockagePanier, *, cle: str = CLE_PANIER) -> None:
        self._stockage = stockage
        self._cle = cle
        self._lignes: dict[int, LignePanier] = self._charger()

    # ===== Lecture =====

    @property
    def lignes(self) -> list[LignePanier]:
        return list(self._lignes.values())

    @property
    def total(self) -> int:
        return sum(l.sous_total for l in self._lignes.values())

    @property
    def nombre_articles(self) -> int:
        return sum(l.quantite for l in self._lignes.values())

    def est_vide(self) -> bool:
        return not self._lignes

    # ===== Mutations =====

    def ajouter(self, plat: PlatCanonique, quantite: int = 1) -> None:
        """Ajoute un plat ; s’il est déjà présent, cumule la quantité."""

        if plat.id is None:
            raise ValueError("Un plat sans id ne peut pas être ajouté au panier.")

        quantite = max(1, int(quantite))
        existante = self._lignes.get(plat.id)
        if existante is not None:
            existante.quantite += quantite
        else:
            self._lignes[plat.id] = LignePanier(
                id=plat.id,
                nom=plat.nom,
                description=plat.description,
                image_url=plat.image_url,
                prix=plat.prix,
                quantite=quantite,
            )
        self._sauvegarder()

    def modifier_quantite(self, plat_id: int, quantite: float) -> None:
        """Quantité arrondie à l’entier inférieur ; 0 ou moins retire la ligne."""

        ligne = self._lignes.get(plat_id)
        if ligne is None:
            return
        nouvelle = max(0, math.floor(quantite))
        if nouvelle == 0:
            del self._lignes[plat_id]
        else:
            ligne.quantite = nouvelle
        self._sauvegarder()

    def retirer(self, plat_id: int) -> None:
        if self._lignes.pop(plat_id, None) is not None:
            self._sauvegarder()

    def vider(self) -> None:
        self._lignes.clear()
        self._sauvegarder()

    # ===== Checkout =====

    def vers_commande(self, *, livrer_a: str, numero_mobile: str) -> CommandeCanonique:
        return CommandeCanonique(
            livrer_a=livrer_a,
            numero_mobile=numero_mobile,
            lignes=tuple(
                LigneCommandeCanonique(
                    nom=l.nom,
                    description=l.description,
                    image_url=l.image_url,
                    prix=l.prix,
                    quantite=l.quantite,
                )
                for l in self._lignes.values()
            ),
        )

    async def passer_commande(
        self,
        client: ClientApiGrubDash,
        *,
        livrer_a: str,
        numero_mobile: str,
    ) -> CommandeCanonique:
        """Crée la commande ; le panier n’est vidé qu’en cas de succès.

        En cas d’échec, `ErreurApi` remonte avec le message du serveur.
        """

        commande = await client.creer_commande(self.vers_commande(livrer_a=livrer_a, numero_mobile=numero_mobile))
        self.vider()
        logger.info("panier_commande_passee commande_id=%s", commande.id)
        return commande

    # ===== Persistance =====

    def _charger(self) -> dict[int, LignePanier]:
        try:
            brut = self._stockage.lire(self._cle)
            if not brut:
                return {}
            donnees = json.loads(brut)
        except (OSError, ValueError) as e:
            logger.warning("panier_chargement_impossible cle=%s erreur=%s", self._cle, type(e).__name__)
            return {}

        if not isinstance(donnees, list):
            logger.warning("panier_contenu_invalide cle=%s", self._cle)
            return {}

        lignes: dict[int, LignePanier] = {}
        for element in donnees:
            ligne = normaliser_ligne_commande(element)
            if ligne.id is None or ligne.quantite <= 0:
                continue
            lignes[ligne.id] = LignePanier(
                id=ligne.id,
                nom=ligne.nom,
                description=ligne.description,
                image_url=ligne.image_url,
                prix=ligne.prix,
                quantite=ligne.quantite,
            )
        return lignes

    def _sauvegarder(self) -> None:
        contenu = json.dumps([l.vers_dict() for l in self._lignes.values()])
        try:
            self._stockage.ecrire(self._cle, contenu)
        except OSError as e:
            logger.warning("panier_sauvegarde_impossible cle=%s erreur=%s", self._cle, type(e).__name__)
