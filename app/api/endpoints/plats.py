from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse

from app.api.dependances import IdentifiantChemin, fournir_service_plats
from app.api.schemas.erreurs import ReponseErreur
from app.api.schemas.plats import PlatEntree, PlatSortie, ReponseListePlats, ReponsePlat
from app.domaine.services.catalogue_plats import (
    DonneesInvalidesPlat,
    PlatIntrouvable,
    ServiceCataloguePlats,
)


routeur_plats = APIRouter(prefix="/dishes", tags=["plats"])

_REPONSES_ERREUR = {
    status.HTTP_400_BAD_REQUEST: {"model": ReponseErreur},
    status.HTTP_404_NOT_FOUND: {"description": "Plat introuvable (sans corps)."},
}


def _refus(e: DonneesInvalidesPlat) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": str(e)})


@routeur_plats.get("", response_model=ReponseListePlats)
async def lister_plats(
    service: ServiceCataloguePlats = Depends(fournir_service_plats),
) -> ReponseListePlats:
    plats = await service.lister()
    return ReponseListePlats(data=[PlatSortie.depuis_modele(p) for p in plats])


@routeur_plats.get("/{dish_id}", response_model=ReponsePlat, responses=_REPONSES_ERREUR)
async def obtenir_plat(
    dish_id: IdentifiantChemin,
    service: ServiceCataloguePlats = Depends(fournir_service_plats),
):
    try:
        plat = await service.obtenir(dish_id)
    except PlatIntrouvable:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    return ReponsePlat(data=PlatSortie.depuis_modele(plat))


@routeur_plats.post(
    "",
    response_model=ReponsePlat,
    status_code=status.HTTP_201_CREATED,
    responses=_REPONSES_ERREUR,
)
async def creer_plat(
    requete: PlatEntree,
    response: Response,
    service: ServiceCataloguePlats = Depends(fournir_service_plats),
):
    try:
        plat = await service.creer(requete.vers_canonique())
    except DonneesInvalidesPlat as e:
        return _refus(e)

    response.headers["Location"] = f"/dishes/{plat.id}"
    return ReponsePlat(data=PlatSortie.depuis_modele(plat))


@routeur_plats.put("/{dish_id}", response_model=ReponsePlat, responses=_REPONSES_ERREUR)
async def mettre_a_jour_plat(
    dish_id: IdentifiantChemin,
    requete: PlatEntree,
    service: ServiceCataloguePlats = Depends(fournir_service_plats),
):
    try:
        plat = await service.mettre_a_jour(dish_id, requete.vers_canonique())
    except PlatIntrouvable:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    except DonneesInvalidesPlat as e:
        return _refus(e)
    return ReponsePlat(data=PlatSortie.depuis_modele(plat))


@routeur_plats.delete("/{dish_id}", status_code=status.HTTP_204_NO_CONTENT, responses=_REPONSES_ERREUR)
async def supprimer_plat(
    dish_id: IdentifiantChemin,
    service: ServiceCataloguePlats = Depends(fournir_service_plats),
) -> Response:
    try:
        await service.supprimer(dish_id)
    except PlatIntrouvable:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
