"""API tests through the ASGI app with a temporary SQLite store."""

import pytest


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_intake_update_and_stats_flow(client):
    response = await client.post(
        "/paquetes",
        json={"cliente": "Ana", "codigo": "ABC123", "tipo": "aereo", "peso": 10, "tarifa": 2.5},
    )
    assert response.status_code == 201
    created = response.json()
    assert created["codigo_seguimiento"] == "ABC123"
    assert created["tipo_envio_id"] == 1

    response = await client.get("/historial", params={"codigo": "ABC123"})
    assert response.status_code == 200
    assert response.json()["estado1"] is None

    response = await client.put("/paquetes/ABC123", json={"estado": "recibido", "fecha": "2024-05-01"})
    assert response.status_code == 200
    assert response.json()[0]["codigo_seguimiento"] == "ABC123"

    response = await client.patch("/paquetes/ABC123", json={"estado": "En tránsito"})
    assert response.status_code == 200

    history = (await client.get("/historial", params={"codigo": "ABC123"})).json()
    assert history["estado1"] == "recibido"
    assert history["fecha1"] == "2024-05-01"
    assert history["estado2"] == "En tránsito"

    stats = (await client.get("/stats", params={"filter": "aereo"})).json()
    assert stats == {
        "counts": {"ready": 0, "received": 0, "inTransit": 1, "customs": 0},
        "revenue": 25.0,
        "totalWeight": 10.0,
        "total": 1,
    }

    stats = (await client.get("/stats", params={"filter": "maritimo"})).json()
    assert stats["revenue"] == 0.0


@pytest.mark.asyncio
async def test_push_status_endpoint(client):
    response = await client.post("/historial/XYZ9", json={"estado": "listo_recoger", "fecha": "2024-06-01"})
    assert response.status_code == 200
    body = response.json()
    assert body["codigo_seguimiento"] == "XYZ9"
    assert body["estado1"] == "listo_recoger"


@pytest.mark.asyncio
async def test_error_responses(client):
    response = await client.get("/historial")
    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"

    response = await client.get("/historial", params={"codigo": "NOPE"})
    assert response.status_code == 404

    response = await client.get("/paquetes/999")
    assert response.status_code == 404

    response = await client.put("/paquetes/NOPE", json={"peso": 1})
    assert response.status_code == 404
    assert "NOPE" in response.json()["error"]

    response = await client.put("/paquetes/NOPE", json={})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_duplicate_code_returns_conflict(client):
    assert (await client.post("/paquetes", json={"codigo": "DUP1"})).status_code == 201
    response = await client.post("/paquetes", json={"codigo": "DUP1"})
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_list_and_search(client):
    await client.post("/paquetes", json={"nombre_cliente": "Ana", "codigo_seguimiento": "A1", "telefono": "111"})
    await client.post("/paquetes", json={"nombre_cliente": "Luis", "codigo_seguimiento": "L1", "telefono": "222"})

    assert len((await client.get("/paquetes")).json()) == 2
    by_code = (await client.get("/paquetes", params={"codigo": "L1"})).json()
    assert [p["nombre_cliente"] for p in by_code] == ["Luis"]

    found = (await client.post("/paquetes/search", json={"telefono": "111"})).json()
    assert [p["codigo_seguimiento"] for p in found] == ["A1"]

    assert (await client.post("/paquetes/search", json={})).status_code == 400


@pytest.mark.asyncio
async def test_unknown_stats_filter_is_general(client):
    response = await client.get("/stats", params={"filter": "tren"})
    assert response.status_code == 200
    assert response.json()["total"] == 0


@pytest.mark.asyncio
async def test_reminders_crud(client):
    late = (await client.post("/recordatorios", json={"titulo": "Late", "fecha_limite": "2024-07-01"})).json()
    early = (await client.post("/recordatorios", json={"title": "Early", "date": "2024-06-01"})).json()

    listed = (await client.get("/recordatorios")).json()
    assert [r["titulo"] for r in listed] == ["Early", "Late"]

    assert (await client.get(f"/recordatorios/{early['id']}")).json()["titulo"] == "Early"

    response = await client.delete(f"/recordatorios/{late['id']}")
    assert response.json() == {"success": True}
    assert (await client.get(f"/recordatorios/{late['id']}")).status_code == 404
    assert (await client.delete(f"/recordatorios/{late['id']}")).status_code == 404
