"""Modèles SQLAlchemy.

On ne met aucune logique métier ici : uniquement la structure des tables.
"""

from app.domaine.modeles.base import BaseModele, ModeleHorodate
from app.domaine.modeles.catalogue import Plat
from app.domaine.modeles.commande import Commande, LigneCommande

__all__ = [
    "BaseModele",
    "ModeleHorodate",
    # Catalogue
    "Plat",
    # Commandes
    "Commande",
    "LigneCommande",
]
