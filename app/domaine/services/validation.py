from __future__ import annotations

"""Validation structurelle des plats et commandes.

Fonctions pures, partagées par les chemins création et mise à jour :
- ordre des contrôles fixe ;
- on s’arrête au premier échec (un seul message remonte) ;
- accepte objets canoniques et entités SQLAlchemy (mêmes attributs).

Les messages font partie du contrat HTTP : ne pas les reformuler.
"""

from typing import Any

from app.domaine.enums.types import StatutCommande


ResultatValidation = tuple[bool, str | None]

MESSAGE_STATUTS = "Order must have a status of " + ", ".join(StatutCommande.valeurs()) + "."


def _est_vide(valeur: Any) -> bool:
    return valeur is None or not str(valeur).strip()


def _est_entier_positif(valeur: Any) -> bool:
    return isinstance(valeur, int) and not isinstance(valeur, bool) and valeur > 0


def valider_plat(plat: Any) -> ResultatValidation:
    if _est_vide(plat.nom):
        return False, "Dish must include a name."
    if _est_vide(plat.description):
        return False, "Dish must include a description."
    if _est_vide(plat.image_url):
        return False, "Dish must include a image_url."
    if not _est_entier_positif(plat.prix):
        return False, "Dish must have a price that is an integer greater than 0."
    return True, None


def valider_commande(commande: Any, *, mise_a_jour: bool = False) -> ResultatValidation:
    """Le statut n’est contrôlé qu’en mise à jour (défaut "pending" à la création)."""

    if _est_vide(commande.livrer_a):
        return False, "Order must include a deliverTo."
    if _est_vide(commande.numero_mobile):
        return False, "Order must include a mobileNumber."

    lignes = list(commande.lignes or [])
    if not lignes:
        return False, "Order must include at least one dish."
    for index, ligne in enumerate(lignes):
        if not _est_entier_positif(ligne.quantite):
            return False, f"Dish {index} must have a quantity that is an integer greater than 0."

    if mise_a_jour:
        if _est_vide(commande.statut):
            return False, "Order must have a status."
        if not StatutCommande.est_valide(commande.statut):
            return False, MESSAGE_STATUTS
    return True, None
