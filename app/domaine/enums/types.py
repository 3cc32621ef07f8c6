from __future__ import annotations

import enum


class StatutCommande(str, enum.Enum):
    """Statut d’une commande.

    L’ordre reflète le déroulé habituel, mais aucune transition n’est imposée :
    une mise à jour peut passer de n’importe quel statut valide à un autre.
    """

    EN_ATTENTE = "pending"
    EN_PREPARATION = "preparing"
    EN_LIVRAISON = "out-for-delivery"
    LIVREE = "delivered"

    @classmethod
    def valeurs(cls) -> tuple[str, ...]:
        return tuple(s.value for s in cls)

    @classmethod
    def est_valide(cls, valeur: object) -> bool:
        return isinstance(valeur, str) and valeur in cls.valeurs()
