from __future__ import annotations

import logging

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


logger = logging.getLogger(__name__)

MESSAGE_CORPS_INVALIDE = "Request body is invalid."


async def _erreur_validation_requete(request: Request, exc: RequestValidationError) -> Response:
    """Corps illisible -> 400 {error} ; id de chemin non entier -> 404 sans corps.

    L’API ne parle que deux formes d’échec (400 avec message, 404 vide) :
    pas de 422.
    """

    if any(erreur.get("loc", ("",))[0] == "path" for erreur in exc.errors()):
        return Response(status_code=status.HTTP_404_NOT_FOUND)

    logger.info("requete_refusee chemin=%s erreurs=%s", request.url.path, len(exc.errors()))
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": MESSAGE_CORPS_INVALIDE})


def enregistrer_gestionnaires_erreurs(application: FastAPI) -> None:
    application.add_exception_handler(RequestValidationError, _erreur_validation_requete)
