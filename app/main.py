from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.erreurs_http import enregistrer_gestionnaires_erreurs
from app.api.routeur import router
from app.api.sante import routeur_sante
from app.core.configuration import parametres_application
from app.core.logging_config import configurer_logging


def creer_application() -> FastAPI:
    configurer_logging()

    application = FastAPI(title="GrubDash")

    # Frontend (menu, panier, dashboard) servi depuis une autre origine
    application.add_middleware(
        CORSMiddleware,
        allow_origins=parametres_application.liste_origines_frontend(),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    enregistrer_gestionnaires_erreurs(application)

    # Routes
    application.include_router(router)

    # Santé
    application.include_router(routeur_sante)

    return application


app = creer_application()
