from __future__ import annotations

from sqlalchemy import ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.domaine.enums.types import StatutCommande
from app.domaine.modeles.base import ModeleHorodate


class Commande(ModeleHorodate):
    """Commande passée depuis le panier.

    IMPORTANT :
    - La commande possède ses lignes (cascade delete-orphan) : elles sont
      remplacées en bloc à chaque mise à jour.
    - Aucune logique métier ici : voir `ServiceCycleCommande`.
    """

    __tablename__ = "commande"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    livrer_a: Mapped[str] = mapped_column(String(500), nullable=False)
    numero_mobile: Mapped[str] = mapped_column(String(50), nullable=False)

    # Stocké en texte : la validation du statut est faite par le service,
    # pour produire un message d’erreur métier et non une erreur SQL.
    statut: Mapped[str] = mapped_column(String(50), nullable=False, default=StatutCommande.EN_ATTENTE.value)

    lignes: Mapped[list[LigneCommande]] = relationship(
        "LigneCommande",
        back_populates="commande",
        cascade="all, delete-orphan",
        order_by="LigneCommande.position",
        lazy="selectin",
    )


class LigneCommande(ModeleHorodate):
    """Copie d’un plat (nom, description, image, prix) + quantité."""

    __tablename__ = "ligne_commande"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    commande_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("commande.id", ondelete="CASCADE"),
        nullable=False,
    )

    # Rang dans la liste soumise (ordre d’insertion)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    nom: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    image_url: Mapped[str] = mapped_column(String(1000), nullable=False, default="")
    prix: Mapped[int] = mapped_column(Integer, nullable=False)
    quantite: Mapped[int] = mapped_column(Integer, nullable=False)

    commande: Mapped[Commande] = relationship("Commande", back_populates="lignes")


Index("ix_ligne_commande_commande_position", LigneCommande.commande_id, LigneCommande.position)
