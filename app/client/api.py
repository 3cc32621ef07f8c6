from __future__ import annotations

import logging
from typing import Any

import httpx

from app.core.configuration import parametres_application
from app.domaine.normalisation import (
    CommandeCanonique,
    PlatCanonique,
    normaliser_commande,
    normaliser_plat,
)


logger = logging.getLogger(__name__)

MESSAGE_ECHEC_GENERIQUE = "Request failed."


class ErreurApi(Exception):
    """Échec d’un appel : message du serveur tel quel, sinon message générique."""

    def __init__(self, message: str, *, statut_http: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.statut_http = statut_http


def _deballer(reponse: httpx.Response) -> Any:
    """Gère `{data: ...}` comme un corps brut."""

    if not reponse.content:
        return None
    corps = reponse.json()
    if isinstance(corps, dict) and "data" in corps:
        return corps["data"]
    return corps


def _message_erreur(reponse: httpx.Response) -> str:
    try:
        corps = reponse.json()
    except ValueError:
        return MESSAGE_ECHEC_GENERIQUE
    if isinstance(corps, dict) and isinstance(corps.get("error"), str) and corps["error"].strip():
        return corps["error"]
    return MESSAGE_ECHEC_GENERIQUE


class ClientApiGrubDash:
    """Client HTTP du service (menu, panier, dashboard).

    Toutes les données reçues passent par la normalisation : le reste du code
    client ne voit que des objets canoniques, quelle que soit la casse des
    champs renvoyés par le serveur.
    """

    def __init__(
        self,
        url_base: str | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 10.0,
    ) -> None:
        base = (url_base or parametres_application.url_api).rstrip("/")
        self._http = httpx.AsyncClient(
            base_url=base,
            transport=transport,
            timeout=timeout,
            headers={"Content-Type": "application/json"},
        )

    async def __aenter__(self) -> ClientApiGrubDash:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.fermer()

    async def fermer(self) -> None:
        await self._http.aclose()

    async def _appeler(self, methode: str, chemin: str, *, corps: Any = None) -> Any:
        try:
            reponse = await self._http.request(methode, chemin, json=corps)
        except httpx.HTTPError as e:
            logger.warning("api_echec_transport methode=%s chemin=%s erreur=%s", methode, chemin, type(e).__name__)
            raise ErreurApi(MESSAGE_ECHEC_GENERIQUE) from e

        if reponse.is_error:
            message = _message_erreur(reponse)
            logger.info("api_refus methode=%s chemin=%s statut=%s", methode, chemin, reponse.status_code)
            raise ErreurApi(message, statut_http=reponse.status_code)

        try:
            return _deballer(reponse)
        except ValueError as e:
            logger.warning("api_reponse_illisible methode=%s chemin=%s statut=%s", methode, chemin, reponse.status_code)
            raise ErreurApi(MESSAGE_ECHEC_GENERIQUE, statut_http=reponse.status_code) from e

    # ===== Plats =====

    async def lister_plats(self) -> list[PlatCanonique]:
        donnees = await self._appeler("GET", "/dishes")
        return [normaliser_plat(d) for d in donnees or []]

    async def obtenir_plat(self, plat_id: int) -> PlatCanonique:
        return normaliser_plat(await self._appeler("GET", f"/dishes/{plat_id}"))

    async def creer_plat(self, plat: PlatCanonique) -> PlatCanonique:
        return normaliser_plat(await self._appeler("POST", "/dishes", corps=_corps_plat(plat)))

    async def mettre_a_jour_plat(self, plat_id: int, plat: PlatCanonique) -> PlatCanonique:
        return normaliser_plat(await self._appeler("PUT", f"/dishes/{plat_id}", corps=_corps_plat(plat)))

    async def supprimer_plat(self, plat_id: int) -> None:
        await self._appeler("DELETE", f"/dishes/{plat_id}")

    # ===== Commandes =====

    async def lister_commandes(self) -> list[CommandeCanonique]:
        donnees = await self._appeler("GET", "/orders")
        return [normaliser_commande(d) for d in donnees or []]

    async def obtenir_commande(self, commande_id: int) -> CommandeCanonique:
        return normaliser_commande(await self._appeler("GET", f"/orders/{commande_id}"))

    async def creer_commande(self, commande: CommandeCanonique | dict[str, Any]) -> CommandeCanonique:
        return normaliser_commande(await self._appeler("POST", "/orders", corps=_corps_commande(commande)))

    async def mettre_a_jour_commande(
        self,
        commande_id: int,
        commande: CommandeCanonique | dict[str, Any],
    ) -> CommandeCanonique:
        corps = _corps_commande(commande)
        return normaliser_commande(await self._appeler("PUT", f"/orders/{commande_id}", corps=corps))

    async def changer_statut(self, commande: CommandeCanonique, statut: str) -> CommandeCanonique:
        """Dashboard : renvoie la commande entière avec le nouveau statut.

        La mise à jour remplace toutes les lignes : on renvoie donc celles
        qu’on connaît.
        """

        assert commande.id is not None
        corps = commande.vers_dict()
        corps["status"] = statut
        return await self.mettre_a_jour_commande(commande.id, corps)

    async def supprimer_commande(self, commande_id: int) -> None:
        await self._appeler("DELETE", f"/orders/{commande_id}")


def _corps_plat(plat: PlatCanonique) -> dict[str, Any]:
    corps = plat.vers_dict()
    corps.pop("id", None)
    return corps


def _corps_commande(commande: CommandeCanonique | dict[str, Any]) -> dict[str, Any]:
    if isinstance(commande, CommandeCanonique):
        corps = commande.vers_dict()
        corps.pop("id", None)
        return corps
    return dict(commande)
