from __future__ import annotations

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.domaine.modeles.base import ModeleHorodate


class Plat(ModeleHorodate):
    """Plat du catalogue.

    Aucune relation : les lignes de commande sont des copies, pas des références.
    Supprimer ou modifier un plat n’affecte donc aucune commande existante.
    """

    __tablename__ = "plat"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    nom: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    image_url: Mapped[str] = mapped_column(String(1000), nullable=False)

    # Prix entier (unité monétaire minimale), > 0
    prix: Mapped[int] = mapped_column(Integer, nullable=False)
