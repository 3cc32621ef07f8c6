from __future__ import annotations

from fastapi import APIRouter

from app.api.endpoints.commandes import routeur_commandes
from app.api.endpoints.plats import routeur_plats


# ==============================
# ROUTEUR PRINCIPAL
# ==============================
router = APIRouter()

# Catalogue (menu public + gestion des plats)
router.include_router(routeur_plats)

# Commandes (checkout + suivi du statut)
router.include_router(routeur_commandes)
