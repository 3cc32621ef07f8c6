from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse

from app.api.dependances import IdentifiantChemin, fournir_service_commandes
from app.api.schemas.commandes import CommandeEntree, CommandeSortie, ReponseCommande, ReponseListeCommandes
from app.api.schemas.erreurs import ReponseErreur
from app.domaine.services.cycle_commande import (
    CommandeIntrouvable,
    DonneesInvalidesCommande,
    ServiceCycleCommande,
)


routeur_commandes = APIRouter(prefix="/orders", tags=["commandes"])

_REPONSES_ERREUR = {
    status.HTTP_400_BAD_REQUEST: {"model": ReponseErreur},
    status.HTTP_404_NOT_FOUND: {"description": "Commande introuvable (sans corps)."},
}


def _refus(e: DonneesInvalidesCommande) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": str(e)})


@routeur_commandes.get("", response_model=ReponseListeCommandes)
async def lister_commandes(
    service: ServiceCycleCommande = Depends(fournir_service_commandes),
) -> ReponseListeCommandes:
    """Toutes les commandes, chacune avec ses lignes (pas de filtre ni pagination)."""

    commandes = await service.lister()
    return ReponseListeCommandes(data=[CommandeSortie.depuis_modele(c) for c in commandes])


@routeur_commandes.get("/{order_id}", response_model=ReponseCommande, responses=_REPONSES_ERREUR)
async def obtenir_commande(
    order_id: IdentifiantChemin,
    service: ServiceCycleCommande = Depends(fournir_service_commandes),
):
    try:
        commande = await service.obtenir(order_id)
    except CommandeIntrouvable:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    return ReponseCommande(data=CommandeSortie.depuis_modele(commande))


@routeur_commandes.post(
    "",
    response_model=ReponseCommande,
    status_code=status.HTTP_201_CREATED,
    responses=_REPONSES_ERREUR,
)
async def creer_commande(
    requete: CommandeEntree,
    response: Response,
    service: ServiceCycleCommande = Depends(fournir_service_commandes),
):
    """Passe une commande (checkout du panier).

    - Lignes normalisées puis validées (statut non contrôlé, "pending" par défaut)
    - Traduit les exceptions métier en HTTP
    """

    try:
        commande = await service.creer(requete.vers_canonique())
    except DonneesInvalidesCommande as e:
        return _refus(e)

    response.headers["Location"] = f"/orders/{commande.id}"
    return ReponseCommande(data=CommandeSortie.depuis_modele(commande))


@routeur_commandes.put("/{order_id}", response_model=ReponseCommande, responses=_REPONSES_ERREUR)
async def mettre_a_jour_commande(
    order_id: IdentifiantChemin,
    requete: CommandeEntree,
    service: ServiceCycleCommande = Depends(fournir_service_commandes),
):
    """Remplace les champs et toutes les lignes ; le statut est contrôlé."""

    try:
        commande = await service.mettre_a_jour(order_id, requete.vers_canonique())
    except CommandeIntrouvable:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    except DonneesInvalidesCommande as e:
        return _refus(e)
    return ReponseCommande(data=CommandeSortie.depuis_modele(commande))


@routeur_commandes.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT, responses=_REPONSES_ERREUR)
async def supprimer_commande(
    order_id: IdentifiantChemin,
    service: ServiceCycleCommande = Depends(fournir_service_commandes),
) -> Response:
    try:
        await service.supprimer(order_id)
    except CommandeIntrouvable:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
