from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator

from app.domaine.modeles.catalogue import Plat
from app.domaine.normalisation import PlatCanonique, normaliser_plat


class PlatEntree(BaseModel):
    """Payload plat (création / mise à jour).

    Accepte la forme client (`name`, `image_url`, ...) comme la forme
    persistance (`Name`, `Image_Url`, ...). Aucun champ n’est obligatoire ici :
    les règles métier (et leurs messages) sont appliquées par le service.
    """

    model_config = ConfigDict(extra="ignore")

    nom: str = ""
    description: str = ""
    image_url: str = ""
    prix: int = 0

    @model_validator(mode="before")
    @classmethod
    def _normaliser(cls, donnees: Any) -> dict[str, Any]:
        plat = normaliser_plat(donnees)
        return {
            "nom": plat.nom,
            "description": plat.description,
            "image_url": plat.image_url,
            "prix": plat.prix,
        }

    def vers_canonique(self) -> PlatCanonique:
        return PlatCanonique(
            nom=self.nom,
            description=self.description,
            image_url=self.image_url,
            prix=self.prix,
        )


class PlatSortie(BaseModel):
    id: int
    name: str
    description: str
    image_url: str
    price: int

    @classmethod
    def depuis_modele(cls, plat: Plat) -> PlatSortie:
        return cls(
            id=plat.id,
            name=plat.nom,
            description=plat.description,
            image_url=plat.image_url,
            price=plat.prix,
        )


class ReponsePlat(BaseModel):
    data: PlatSortie


class ReponseListePlats(BaseModel):
    data: list[PlatSortie]
