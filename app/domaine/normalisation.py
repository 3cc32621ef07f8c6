from __future__ import annotations

"""Normalisation des plats et commandes venus de l’extérieur.

Deux conventions de nommage circulent pour les mêmes données :
- forme « client » : `id`, `name`, `description`, `image_url`, `price`,
  `deliverTo`, `mobileNumber`, `status`, `dishes`, `quantity` ;
- forme « persistance » (sérialisation brute des entités) : `Id`, `Name`,
  `Description`, `Image_Url`, `Price`, `DeliverTo`, `MobileNumber`, `Status`,
  `Dishes`, `Quantity`.

Règles :
- un seul type canonique par entité (dataclasses figées ci-dessous, mêmes
  noms d’attributs que les modèles SQLAlchemy) ;
- un adaptateur explicite par forme, plus un adaptateur tolérant qui accepte
  les deux dans le même dictionnaire : clé client d’abord, clé persistance
  ensuite, puis valeur par défaut ;
- valeurs par défaut : "" pour le texte, 0 pour les nombres, "pending" pour
  le statut, aucune ligne, 1 pour la quantité, None pour l’id.

Rien ici ne valide : la validation métier est faite après normalisation.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from app.domaine.enums.types import StatutCommande


STATUT_PAR_DEFAUT = StatutCommande.EN_ATTENTE.value

# Colonnes Integer (32 bits signés)
ENTIER_MIN = -(2**31)
ENTIER_MAX = 2**31 - 1


@dataclass(frozen=True)
class PlatCanonique:
    id: int | None = None
    nom: str = ""
    description: str = ""
    image_url: str = ""
    prix: int = 0

    def vers_dict(self) -> dict[str, Any]:
        """Forme client (JSON)."""

        return {
            "id": self.id,
            "name": self.nom,
            "description": self.description,
            "image_url": self.image_url,
            "price": self.prix,
        }


@dataclass(frozen=True)
class LigneCommandeCanonique:
    id: int | None = None
    nom: str = ""
    description: str = ""
    image_url: str = ""
    prix: int = 0
    quantite: int = 1

    def vers_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.nom,
            "description": self.description,
            "image_url": self.image_url,
            "price": self.prix,
            "quantity": self.quantite,
        }


@dataclass(frozen=True)
class CommandeCanonique:
    id: int | None = None
    livrer_a: str = ""
    numero_mobile: str = ""
    statut: str = STATUT_PAR_DEFAUT
    lignes: tuple[LigneCommandeCanonique, ...] = ()

    def vers_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "deliverTo": self.livrer_a,
            "mobileNumber": self.numero_mobile,
            "status": self.statut,
            "dishes": [ligne.vers_dict() for ligne in self.lignes],
        }


# Clés acceptées par forme : champ canonique -> clés (par priorité).
CLES_CLIENT: dict[str, tuple[str, ...]] = {
    "id": ("id",),
    "nom": ("name",),
    "description": ("description",),
    "image_url": ("image_url", "imageUrl"),
    "prix": ("price",),
    "quantite": ("quantity",),
    "livrer_a": ("deliverTo",),
    "numero_mobile": ("mobileNumber",),
    "statut": ("status",),
    "lignes": ("dishes", "lineItems"),
}
CLES_PERSISTANCE: dict[str, tuple[str, ...]] = {
    "id": ("Id",),
    "nom": ("Name",),
    "description": ("Description",),
    "image_url": ("Image_Url", "ImageUrl"),
    "prix": ("Price",),
    "quantite": ("Quantity",),
    "livrer_a": ("DeliverTo",),
    "numero_mobile": ("MobileNumber",),
    "statut": ("Status",),
    "lignes": ("Dishes", "LineItems"),
}
FORME_CLIENT = (CLES_CLIENT,)
FORME_PERSISTANCE = (CLES_PERSISTANCE,)
FORMES_TOLERANTES = (CLES_CLIENT, CLES_PERSISTANCE)


# ==============================
# Coercitions
# ==============================


def en_entier(valeur: Any, defaut: int) -> int:
    """Entier si la valeur en représente un sans ambiguïté, sinon `defaut`.

    bool est exclu (True n’est pas un prix). Les flottants entiers (3.0) et
    les chaînes numériques ("3") sont acceptés. Hors de l’intervalle 32 bits
    des colonnes, la valeur n’est pas représentable : `defaut`.
    """

    if valeur is None or isinstance(valeur, bool):
        return defaut
    if isinstance(valeur, int):
        entier = valeur
    elif isinstance(valeur, float):
        if not valeur.is_integer():
            return defaut
        entier = int(valeur)
    elif isinstance(valeur, str):
        try:
            entier = int(valeur.strip())
        except ValueError:
            return defaut
    else:
        return defaut
    return entier if ENTIER_MIN <= entier <= ENTIER_MAX else defaut


def en_texte(valeur: Any, defaut: str = "") -> str:
    if valeur is None:
        return defaut
    return valeur if isinstance(valeur, str) else str(valeur)


def _en_id(valeur: Any) -> int | None:
    identifiant = en_entier(valeur, defaut=0)
    return identifiant if identifiant > 0 else None


def _lire(donnees: Any, champ: str, formes: tuple[dict[str, tuple[str, ...]], ...]) -> Any:
    """Première clé présente (valeur non None), forme par forme."""

    if not isinstance(donnees, Mapping):
        return None
    for forme in formes:
        for cle in forme[champ]:
            valeur = donnees.get(cle)
            if valeur is not None:
                return valeur
    return None


def _est_liste(valeur: Any) -> bool:
    return isinstance(valeur, Sequence) and not isinstance(valeur, (str, bytes))


# ==============================
# Plats
# ==============================


def _plat(donnees: Any, formes: tuple[dict[str, tuple[str, ...]], ...]) -> PlatCanonique:
    return PlatCanonique(
        id=_en_id(_lire(donnees, "id", formes)),
        nom=en_texte(_lire(donnees, "nom", formes)),
        description=en_texte(_lire(donnees, "description", formes)),
        image_url=en_texte(_lire(donnees, "image_url", formes)),
        prix=en_entier(_lire(donnees, "prix", formes), defaut=0),
    )


def plat_depuis_forme_client(donnees: Mapping[str, Any]) -> PlatCanonique:
    return _plat(donnees, FORME_CLIENT)


def plat_depuis_forme_persistance(donnees: Mapping[str, Any]) -> PlatCanonique:
    return _plat(donnees, FORME_PERSISTANCE)


def normaliser_plat(donnees: Any) -> PlatCanonique:
    """Accepte indifféremment les deux formes (y compris mélangées)."""

    if isinstance(donnees, PlatCanonique):
        return donnees
    return _plat(donnees, FORMES_TOLERANTES)


# ==============================
# Commandes
# ==============================


def _ligne(donnees: Any, formes: tuple[dict[str, tuple[str, ...]], ...]) -> LigneCommandeCanonique:
    if isinstance(donnees, LigneCommandeCanonique):
        return donnees
    plat = _plat(donnees, formes)
    return LigneCommandeCanonique(
        id=plat.id,
        nom=plat.nom,
        description=plat.description,
        image_url=plat.image_url,
        prix=plat.prix,
        quantite=en_entier(_lire(donnees, "quantite", formes), defaut=1),
    )


def _commande(
    donnees: Any,
    formes: tuple[dict[str, tuple[str, ...]], ...],
    statut_par_defaut: str,
) -> CommandeCanonique:
    statut = _lire(donnees, "statut", formes)
    lignes = _lire(donnees, "lignes", formes)
    return CommandeCanonique(
        id=_en_id(_lire(donnees, "id", formes)),
        livrer_a=en_texte(_lire(donnees, "livrer_a", formes)),
        numero_mobile=en_texte(_lire(donnees, "numero_mobile", formes)),
        statut=statut_par_defaut if statut is None else en_texte(statut),
        lignes=tuple(_ligne(d, formes) for d in lignes) if _est_liste(lignes) else (),
    )


def normaliser_ligne_commande(donnees: Any) -> LigneCommandeCanonique:
    return _ligne(donnees, FORMES_TOLERANTES)


def commande_depuis_forme_client(donnees: Mapping[str, Any]) -> CommandeCanonique:
    return _commande(donnees, FORME_CLIENT, STATUT_PAR_DEFAUT)


def commande_depuis_forme_persistance(donnees: Mapping[str, Any]) -> CommandeCanonique:
    return _commande(donnees, FORME_PERSISTANCE, STATUT_PAR_DEFAUT)


def normaliser_commande(donnees: Any, *, statut_par_defaut: str = STATUT_PAR_DEFAUT) -> CommandeCanonique:
    """Accepte indifféremment les deux formes (y compris mélangées).

    `statut_par_defaut` : "pending" pour les lectures ; les corps de requête
    passent "" afin que le service décide (défaut à la création, erreur à la
    mise à jour).
    """

    if isinstance(donnees, CommandeCanonique):
        return donnees
    return _commande(donnees, FORMES_TOLERANTES, statut_par_defaut)
