from __future__ import annotations

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from tests._http_helpers import client_http


TACO = {"name": "Taco", "description": "Al pastor", "image_url": "taco.jpg", "price": 3}


@pytest.mark.asyncio
async def test_creer_plat_201_location(session_test: AsyncSession) -> None:
    async with client_http(session_test) as client:
        r = await client.post("/dishes", json=TACO)

    assert r.status_code == 201, r.text
    data = r.json()["data"]
    assert data["name"] == "Taco"
    assert data["image_url"] == "taco.jpg"
    assert data["price"] == 3
    assert r.headers["location"] == f"/dishes/{data['id']}"


@pytest.mark.asyncio
async def test_creer_plat_forme_persistance_acceptee(session_test: AsyncSession) -> None:
    async with client_http(session_test) as client:
        r = await client.post(
            "/dishes",
            json={"Name": "Taco", "Description": "Al pastor", "Image_Url": "taco.jpg", "Price": 3},
        )

    assert r.status_code == 201, r.text
    assert r.json()["data"]["image_url"] == "taco.jpg"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("corps", "message"),
    [
        ({**TACO, "name": " "}, "Dish must include a name."),
        ({**TACO, "description": ""}, "Dish must include a description."),
        ({k: v for k, v in TACO.items() if k != "image_url"}, "Dish must include a image_url."),
        ({**TACO, "price": 0}, "Dish must have a price that is an integer greater than 0."),
        ({**TACO, "price": "beaucoup"}, "Dish must have a price that is an integer greater than 0."),
    ],
)
async def test_creer_plat_400(session_test: AsyncSession, corps: dict, message: str) -> None:
    async with client_http(session_test) as client:
        r = await client.post("/dishes", json=corps)

    assert r.status_code == 400, r.text
    assert r.json() == {"error": message}


@pytest.mark.asyncio
async def test_corps_json_illisible_400(session_test: AsyncSession) -> None:
    async with client_http(session_test) as client:
        r = await client.post("/dishes", content=b"{pas du json", headers={"Content-Type": "application/json"})

    assert r.status_code == 400
    assert "error" in r.json()


@pytest.mark.asyncio
async def test_lister_obtenir_modifier_supprimer(session_test: AsyncSession) -> None:
    async with client_http(session_test) as client:
        plat_id = (await client.post("/dishes", json=TACO)).json()["data"]["id"]

        r_liste = await client.get("/dishes")
        assert r_liste.status_code == 200
        assert [p["id"] for p in r_liste.json()["data"]] == [plat_id]

        r_get = await client.get(f"/dishes/{plat_id}")
        assert r_get.status_code == 200
        assert r_get.json()["data"]["description"] == "Al pastor"

        r_put = await client.put(f"/dishes/{plat_id}", json={**TACO, "price": 4})
        assert r_put.status_code == 200, r_put.text
        assert r_put.json()["data"]["price"] == 4

        r_put_ko = await client.put(f"/dishes/{plat_id}", json={**TACO, "name": ""})
        assert r_put_ko.status_code == 400
        assert r_put_ko.json() == {"error": "Dish must include a name."}
        assert (await client.get(f"/dishes/{plat_id}")).json()["data"]["name"] == "Taco"

        r_del = await client.delete(f"/dishes/{plat_id}")
        assert r_del.status_code == 204
        assert r_del.content == b""

        assert (await client.get(f"/dishes/{plat_id}")).status_code == 404


@pytest.mark.asyncio
async def test_plat_absent_404_sans_corps(session_test: AsyncSession) -> None:
    async with client_http(session_test) as client:
        r_get = await client.get("/dishes/999")
        r_put = await client.put("/dishes/999", json=TACO)
        r_del = await client.delete("/dishes/999")
        r_id_invalide = await client.get("/dishes/abc")

    for r in (r_get, r_put, r_del, r_id_invalide):
        assert r.status_code == 404
        assert r.content == b""


@pytest.mark.asyncio
async def test_health(session_test: AsyncSession) -> None:
    async with client_http(session_test) as client:
        r = await client.get("/health")

    assert r.status_code == 200
    assert r.json() == {"ok": True}


@pytest.mark.asyncio
async def test_prix_hors_intervalle_400(session_test: AsyncSession) -> None:
    async with client_http(session_test) as client:
        r = await client.post("/dishes", json={**TACO, "price": 2**64})

    assert r.status_code == 400
    assert r.json() == {"error": "Dish must have a price that is an integer greater than 0."}


@pytest.mark.asyncio
async def test_id_chemin_hors_intervalle_404(session_test: AsyncSession) -> None:
    async with client_http(session_test) as client:
        reponses = [
            await client.get("/dishes/99999999999999999999"),
            await client.put("/dishes/2147483648", json=TACO),
            await client.delete("/dishes/-99999999999999999999"),
        ]

    for r in reponses:
        assert r.status_code == 404
        assert r.content == b""
