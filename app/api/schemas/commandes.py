from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator

from app.domaine.modeles.commande import Commande
from app.domaine.normalisation import CommandeCanonique, LigneCommandeCanonique, normaliser_commande


class LigneCommandeEntree(BaseModel):
    """Ligne déjà normalisée par `CommandeEntree`."""

    nom: str = ""
    description: str = ""
    image_url: str = ""
    prix: int = 0
    quantite: int = 1


class CommandeEntree(BaseModel):
    """Payload commande (création / mise à jour).

    `status` absent reste vide : le service applique "pending" à la création
    et refuse la mise à jour.
    """

    model_config = ConfigDict(extra="ignore")

    livrer_a: str = ""
    numero_mobile: str = ""
    statut: str = ""
    lignes: list[LigneCommandeEntree] = []

    @model_validator(mode="before")
    @classmethod
    def _normaliser(cls, donnees: Any) -> dict[str, Any]:
        commande = normaliser_commande(donnees, statut_par_defaut="")
        return {
            "livrer_a": commande.livrer_a,
            "numero_mobile": commande.numero_mobile,
            "statut": commande.statut,
            "lignes": [
                {
                    "nom": l.nom,
                    "description": l.description,
                    "image_url": l.image_url,
                    "prix": l.prix,
                    "quantite": l.quantite,
                }
                for l in commande.lignes
            ],
        }

    def vers_canonique(self) -> CommandeCanonique:
        return CommandeCanonique(
            livrer_a=self.livrer_a,
            numero_mobile=self.numero_mobile,
            statut=self.statut,
            lignes=tuple(
                LigneCommandeCanonique(
                    nom=l.nom,
                    description=l.description,
                    image_url=l.image_url,
                    prix=l.prix,
                    quantite=l.quantite,
                )
                for l in self.lignes
            ),
        )


class LigneCommandeSortie(BaseModel):
    id: int
    name: str
    price: int
    quantity: int


class CommandeSortie(BaseModel):
    id: int
    deliverTo: str
    mobileNumber: str
    status: str
    dishes: list[LigneCommandeSortie]

    @classmethod
    def depuis_modele(cls, commande: Commande) -> CommandeSortie:
        return cls(
            id=commande.id,
            deliverTo=commande.livrer_a,
            mobileNumber=commande.numero_mobile,
            status=commande.statut,
            dishes=[
                LigneCommandeSortie(id=l.id, name=l.nom, price=l.prix, quantity=l.quantite)
                for l in commande.lignes
            ],
        )


class ReponseCommande(BaseModel):
    data: CommandeSortie


class ReponseListeCommandes(BaseModel):
    data: list[CommandeSortie]
