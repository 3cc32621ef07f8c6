from __future__ import annotations

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from tests._http_helpers import client_http


COMMANDE = {
    "deliverTo": "1 Main St",
    "mobileNumber": "555-0100",
    "dishes": [{"name": "Taco", "price": 3, "quantity": 2}],
}


@pytest.mark.asyncio
async def test_aller_retour_creation_lecture(session_test: AsyncSession) -> None:
    async with client_http(session_test) as client:
        r = await client.post("/orders", json=COMMANDE)
        assert r.status_code == 201, r.text
        creee = r.json()["data"]
        assert r.headers["location"] == f"/orders/{creee['id']}"

        r_get = await client.get(f"/orders/{creee['id']}")

    assert r_get.status_code == 200
    data = r_get.json()["data"]
    assert data["deliverTo"] == "1 Main St"
    assert data["mobileNumber"] == "555-0100"
    assert data["status"] == "pending"
    assert len(data["dishes"]) == 1
    ligne = data["dishes"][0]
    assert (ligne["name"], ligne["price"], ligne["quantity"]) == ("Taco", 3, 2)
    assert isinstance(ligne["id"], int)
    assert data == creee


@pytest.mark.asyncio
async def test_creation_quantite_negative_ramenee_a_1(session_test: AsyncSession) -> None:
    corps = {**COMMANDE, "dishes": [{"name": "Taco", "price": 3, "quantity": -5}]}
    async with client_http(session_test) as client:
        r = await client.post("/orders", json=corps)

    assert r.status_code == 201, r.text
    assert r.json()["data"]["dishes"][0]["quantity"] == 1


@pytest.mark.asyncio
async def test_creation_nom_vide_item(session_test: AsyncSession) -> None:
    corps = {**COMMANDE, "dishes": [{"name": "", "price": 3, "quantity": "abc"}]}
    async with client_http(session_test) as client:
        r = await client.post("/orders", json=corps)

    assert r.status_code == 201, r.text
    ligne = r.json()["data"]["dishes"][0]
    assert ligne["name"] == "Item"
    assert ligne["quantity"] == 1


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("corps", "message"),
    [
        ({**COMMANDE, "deliverTo": ""}, "Order must include a deliverTo."),
        ({**COMMANDE, "mobileNumber": " "}, "Order must include a mobileNumber."),
        ({**COMMANDE, "dishes": []}, "Order must include at least one dish."),
        ({"deliverTo": "1 Main St", "mobileNumber": "555-0100"}, "Order must include at least one dish."),
    ],
)
async def test_creation_400(session_test: AsyncSession, corps: dict, message: str) -> None:
    async with client_http(session_test) as client:
        r = await client.post("/orders", json=corps)

    assert r.status_code == 400
    assert r.json() == {"error": message}


@pytest.mark.asyncio
async def test_mise_a_jour_liste_plus_courte(session_test: AsyncSession) -> None:
    corps = {
        **COMMANDE,
        "dishes": [
            {"name": "Taco", "price": 3, "quantity": 1},
            {"name": "Burrito", "price": 8, "quantity": 1},
            {"name": "Nachos", "price": 5, "quantity": 1},
        ],
    }
    async with client_http(session_test) as client:
        commande_id = (await client.post("/orders", json=corps)).json()["data"]["id"]

        r = await client.put(
            f"/orders/{commande_id}",
            json={**COMMANDE, "status": "preparing", "dishes": [{"name": "Burrito", "price": 8, "quantity": 2}]},
        )
        assert r.status_code == 200, r.text

        relue = (await client.get(f"/orders/{commande_id}")).json()["data"]

    assert relue["status"] == "preparing"
    assert [(d["name"], d["quantity"]) for d in relue["dishes"]] == [("Burrito", 2)]


@pytest.mark.asyncio
async def test_mise_a_jour_sans_statut_400(session_test: AsyncSession) -> None:
    async with client_http(session_test) as client:
        commande_id = (await client.post("/orders", json=COMMANDE)).json()["data"]["id"]

        r_absent = await client.put(f"/orders/{commande_id}", json=COMMANDE)
        r_vide = await client.put(f"/orders/{commande_id}", json={**COMMANDE, "status": "  "})
        r_inconnu = await client.put(f"/orders/{commande_id}", json={**COMMANDE, "status": "lost"})

    assert r_absent.status_code == 400
    assert r_absent.json() == {"error": "Order must have a status."}
    assert r_vide.json() == {"error": "Order must have a status."}
    assert r_inconnu.status_code == 400
    assert r_inconnu.json() == {
        "error": "Order must have a status of pending, preparing, out-for-delivery, delivered."
    }


@pytest.mark.asyncio
async def test_transitions_libres_pending_delivered_pending(session_test: AsyncSession) -> None:
    async with client_http(session_test) as client:
        commande_id = (await client.post("/orders", json=COMMANDE)).json()["data"]["id"]

        r1 = await client.put(f"/orders/{commande_id}", json={**COMMANDE, "status": "delivered"})
        r2 = await client.put(f"/orders/{commande_id}", json={**COMMANDE, "status": "pending"})

    assert r1.status_code == 200
    assert r1.json()["data"]["status"] == "delivered"
    assert r2.status_code == 200
    assert r2.json()["data"]["status"] == "pending"


@pytest.mark.asyncio
async def test_suppression_plat_ne_touche_pas_la_commande(session_test: AsyncSession) -> None:
    async with client_http(session_test) as client:
        plat = (
            await client.post(
                "/dishes",
                json={"name": "Taco", "description": "Al pastor", "image_url": "taco.jpg", "price": 3},
            )
        ).json()["data"]
        commande = (
            await client.post(
                "/orders",
                json={**COMMANDE, "dishes": [{**plat, "quantity": 2}]},
            )
        ).json()["data"]

        assert (await client.delete(f"/dishes/{plat['id']}")).status_code == 204

        relue = (await client.get(f"/orders/{commande['id']}")).json()["data"]

    assert relue["dishes"] == commande["dishes"]


@pytest.mark.asyncio
async def test_lister_et_supprimer(session_test: AsyncSession) -> None:
    async with client_http(session_test) as client:
        id1 = (await client.post("/orders", json=COMMANDE)).json()["data"]["id"]
        id2 = (await client.post("/orders", json={**COMMANDE, "deliverTo": "2 Side St"})).json()["data"]["id"]

        r_liste = await client.get("/orders")
        assert r_liste.status_code == 200
        assert [c["id"] for c in r_liste.json()["data"]] == [id1, id2]
        assert all(len(c["dishes"]) == 1 for c in r_liste.json()["data"])

        r_del = await client.delete(f"/orders/{id1}")
        assert r_del.status_code == 204
        assert r_del.content == b""

        assert (await client.get(f"/orders/{id1}")).status_code == 404
        assert [c["id"] for c in (await client.get("/orders")).json()["data"]] == [id2]


@pytest.mark.asyncio
async def test_commande_absente_404(session_test: AsyncSession) -> None:
    async with client_http(session_test) as client:
        r_get = await client.get("/orders/404")
        r_put = await client.put("/orders/404", json={**COMMANDE, "status": "pending"})
        r_del = await client.delete("/orders/404")

    for r in (r_get, r_put, r_del):
        assert r.status_code == 404
        assert r.content == b""


@pytest.mark.asyncio
async def test_creation_entiers_hors_intervalle(session_test: AsyncSession) -> None:
    corps = {**COMMANDE, "dishes": [{"name": "Taco", "price": 2**64, "quantity": 2**64}]}
    async with client_http(session_test) as client:
        r = await client.post("/orders", json=corps)

    assert r.status_code == 201
    ligne = r.json()["data"]["dishes"][0]
    assert (ligne["price"], ligne["quantity"]) == (0, 1)


@pytest.mark.asyncio
async def test_commande_id_hors_intervalle_404(session_test: AsyncSession) -> None:
    async with client_http(session_test) as client:
        r_get = await client.get("/orders/99999999999999999999")
        r_put = await client.put("/orders/99999999999999999999", json={**COMMANDE, "status": "pending"})
        r_del = await client.delete("/orders/99999999999999999999")

    for r in (r_get, r_put, r_del):
        assert r.status_code == 404
        assert r.content == b""


@pytest.mark.asyncio
async def test_creation_statut_blanc_pending(session_test: AsyncSession) -> None:
    async with client_http(session_test) as client:
        r = await client.post("/orders", json={**COMMANDE, "status": "   "})

    assert r.status_code == 201
    assert r.json()["data"]["status"] == "pending"


@pytest.mark.asyncio
async def test_mise_a_jour_quantite_nulle_ou_negative_ramenee_a_1(session_test: AsyncSession) -> None:
    async with client_http(session_test) as client:
        commande_id = (await client.post("/orders", json=COMMANDE)).json()["data"]["id"]

        r = await client.put(
            f"/orders/{commande_id}",
            json={
                **COMMANDE,
                "status": "preparing",
                "dishes": [{"name": "Taco", "price": 3, "quantity": 0}, {"name": "Burrito", "price": 8, "quantity": -4}],
            },
        )
        relue = (await client.get(f"/orders/{commande_id}")).json()["data"]

    assert r.status_code == 200
    assert [(d["name"], d["quantity"]) for d in relue["dishes"]] == [("Taco", 1), ("Burrito", 1)]
