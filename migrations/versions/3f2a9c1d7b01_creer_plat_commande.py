"""creer_plat_commande

Revision ID: 3f2a9c1d7b01
Revises:
Create Date: 2026-10-19

"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision = "3f2a9c1d7b01"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "plat",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("nom", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("image_url", sa.String(length=1000), nullable=False),
        sa.Column("prix", sa.Integer(), nullable=False),
        sa.Column("cree_le", sa.DateTime(timezone=True), nullable=False),
        sa.Column("mis_a_jour_le", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "commande",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("livrer_a", sa.String(length=500), nullable=False),
        sa.Column("numero_mobile", sa.String(length=50), nullable=False),
        sa.Column("statut", sa.String(length=50), nullable=False),
        sa.Column("cree_le", sa.DateTime(timezone=True), nullable=False),
        sa.Column("mis_a_jour_le", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    # Lignes possédées par la commande : suppression en cascade
    op.create_table(
        "ligne_commande",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("commande_id", sa.Integer(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("nom", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("image_url", sa.String(length=1000), nullable=False),
        sa.Column("prix", sa.Integer(), nullable=False),
        sa.Column("quantite", sa.Integer(), nullable=False),
        sa.Column("cree_le", sa.DateTime(timezone=True), nullable=False),
        sa.Column("mis_a_jour_le", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["commande_id"], ["commande.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_ligne_commande_commande_position",
        "ligne_commande",
        ["commande_id", "position"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_ligne_commande_commande_position", table_name="ligne_commande")
    op.drop_table("ligne_commande")
    op.drop_table("commande")
    op.drop_table("plat")
