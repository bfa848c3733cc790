"""
LabRecords Backend — Analisis API Integration Tests
====================================================

What:  End-to-end tests for /api/analisis through the FastAPI app.
How:   HTTPX AsyncClient over ASGI against a fresh SQLite store per test.

What we test:
    ✅ Create → get round trip returns the same record
    ✅ Duplicate numero_analisis rejected with 400, nothing stored
    ✅ Missing fields reported together in `details`
    ✅ List filters (estado, laboratorio)
    ✅ Partial update and updatedAt refresh
    ✅ Permanent delete
    ✅ Unknown / malformed ids → 404
    ✅ Store outage → 500 with the raw cause
"""

import uuid
from datetime import datetime

import pytest


def _parse(timestamp: str) -> datetime:
    return datetime.fromisoformat(timestamp.replace("Z", "+00:00"))


async def _create(client, payload):
    response = await client.post("/api/analisis", json=payload)
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestCreateAnalisis:
    """POST /api/analisis"""

    @pytest.mark.asyncio
    async def test_create_returns_envelope(self, test_client, analisis_payload):
        response = await test_client.post("/api/analisis", json=analisis_payload)

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Análisis creado exitosamente"

        data = body["data"]
        uuid.UUID(data["_id"])
        assert data["numero_analisis"] == "AN-2024-0001"
        assert data["estado"] == "pendiente"
        assert _parse(data["fecha_analisis"]) == _parse("2024-05-01T09:30:00Z")
        assert data["createdAt"] == data["updatedAt"]
        assert "version_id" not in data
        assert "id" not in data

    @pytest.mark.asyncio
    async def test_create_then_get_is_identical(self, test_client, analisis_payload):
        created = await _create(test_client, analisis_payload)

        response = await test_client.get(f"/api/analisis/{created['_id']}")

        assert response.status_code == 200
        assert response.json() == {"success": True, "data": created}

    @pytest.mark.asyncio
    async def test_defaults_applied(self, test_client):
        """fecha_analisis, observaciones and estado are optional on create."""
        data = await _create(
            test_client,
            {
                "numero_analisis": "AN-2",
                "tipo_analisis": "Glucosa",
                "laboratorio": "Norte",
                "tecnico_responsable": "Luis",
            },
        )

        assert data["observaciones"] == ""
        assert data["estado"] == "pendiente"
        assert _parse(data["fecha_analisis"]) <= _parse(data["createdAt"])

    @pytest.mark.asyncio
    async def test_duplicate_numero_rejected(self, test_client, analisis_payload):
        await _create(test_client, analisis_payload)

        response = await test_client.post(
            "/api/analisis", json={**analisis_payload, "tipo_analisis": "Orina"}
        )

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "El número de análisis ya existe"}

        listing = await test_client.get("/api/analisis")
        assert listing.json()["count"] == 1

    @pytest.mark.asyncio
    async def test_missing_fields_listed(self, test_client):
        response = await test_client.post("/api/analisis", json={"estado": "pendiente"})

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "Errores de validación"
        assert body["details"] == [
            "El número de análisis es obligatorio",
            "El tipo de análisis es obligatorio",
            "El laboratorio es obligatorio",
            "El técnico responsable es obligatorio",
        ]

    @pytest.mark.asyncio
    async def test_unknown_estado_rejected(self, test_client, analisis_payload):
        response = await test_client.post(
            "/api/analisis", json={**analisis_payload, "estado": "archivado"}
        )

        assert response.status_code == 400
        assert "'archivado' no es un estado válido" in response.json()["details"][0]

    @pytest.mark.asyncio
    async def test_long_values_stored_in_full(self, test_client, analisis_payload):
        long_values = {
            "numero_analisis": "AN-" + "9" * 300,
            "tipo_analisis": "Perfil " * 100,
            "laboratorio": "L" * 400,
            "tecnico_responsable": "R" * 400,
        }
        created = await _create(test_client, {**analisis_payload, **long_values})

        stored = (await test_client.get(f"/api/analisis/{created['_id']}")).json()["data"]
        for name, value in long_values.items():
            assert stored[name] == value

    @pytest.mark.asyncio
    async def test_numero_with_spaces_is_a_distinct_key(self, test_client, analisis_payload):
        await _create(test_client, {**analisis_payload, "numero_analisis": "AN-1"})

        data = await _create(test_client, {**analisis_payload, "numero_analisis": " AN-1"})

        assert data["numero_analisis"] == " AN-1"
        assert (await test_client.get("/api/analisis")).json()["count"] == 2

    @pytest.mark.asyncio
    async def test_out_of_range_fecha_rejected(self, test_client, analisis_payload):
        response = await test_client.post(
            "/api/analisis",
            json={**analisis_payload, "fecha_analisis": "0001-01-01T00:00:00+01:00"},
        )

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "error": "Errores de validación",
            "details": ["La fecha del análisis no es válida"],
        }

    @pytest.mark.asyncio
    async def test_system_fields_in_body_ignored(self, test_client, analisis_payload):
        forged_id = str(uuid.uuid4())
        data = await _create(
            test_client,
            {**analisis_payload, "_id": forged_id, "createdAt": "2000-01-01T00:00:00Z"},
        )

        assert data["_id"] != forged_id
        assert _parse(data["createdAt"]).year != 2000

    @pytest.mark.asyncio
    async def test_malformed_json_rejected(self, test_client):
        response = await test_client.post(
            "/api/analisis",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["success"] is False


class TestListAnalisis:
    """GET /api/analisis"""

    @pytest.mark.asyncio
    async def test_empty_list(self, test_client):
        response = await test_client.get("/api/analisis")

        assert response.status_code == 200
        assert response.json() == {"success": True, "count": 0, "data": []}

    @pytest.mark.asyncio
    async def test_filters(self, test_client, analisis_payload):
        await _create(test_client, {**analisis_payload, "numero_analisis": "A1"})
        await _create(
            test_client, {**analisis_payload, "numero_analisis": "A2", "estado": "completado"}
        )
        await _create(
            test_client,
            {
                **analisis_payload,
                "numero_analisis": "A3",
                "estado": "completado",
                "laboratorio": "Norte",
            },
        )

        everything = (await test_client.get("/api/analisis")).json()
        assert everything["count"] == 3
        assert [item["numero_analisis"] for item in everything["data"]] == ["A1", "A2", "A3"]

        done = (await test_client.get("/api/analisis", params={"estado": "completado"})).json()
        assert {item["numero_analisis"] for item in done["data"]} == {"A2", "A3"}

        both = (
            await test_client.get(
                "/api/analisis", params={"estado": "completado", "laboratorio": "Norte"}
            )
        ).json()
        assert both["count"] == 1
        assert both["data"][0]["numero_analisis"] == "A3"

    @pytest.mark.asyncio
    async def test_empty_filter_value_ignored(self, test_client, analisis_payload):
        await _create(test_client, analisis_payload)

        response = await test_client.get("/api/analisis", params={"estado": ""})
        assert response.json()["count"] == 1


class TestGetAnalisis:
    """GET /api/analisis/{id}"""

    @pytest.mark.asyncio
    async def test_unknown_id(self, test_client):
        response = await test_client.get(f"/api/analisis/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Análisis no encontrado"}

    @pytest.mark.asyncio
    async def test_malformed_id(self, test_client):
        response = await test_client.get("/api/analisis/abc123")

        assert response.status_code == 404
        assert response.json()["error"] == "Análisis no encontrado"


class TestUpdateAnalisis:
    """PUT /api/analisis/{id}"""

    @pytest.mark.asyncio
    async def test_partial_update(self, test_client, analisis_payload):
        created = await _create(test_client, analisis_payload)

        response = await test_client.put(
            f"/api/analisis/{created['_id']}", json={"estado": "en_proceso"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Análisis actualizado exitosamente"
        data = body["data"]
        assert data["estado"] == "en_proceso"
        assert data["numero_analisis"] == created["numero_analisis"]
        assert data["observaciones"] == created["observaciones"]
        assert data["createdAt"] == created["createdAt"]
        assert _parse(data["updatedAt"]) > _parse(created["updatedAt"])

    @pytest.mark.asyncio
    async def test_any_estado_transition_allowed(self, test_client, analisis_payload):
        created = await _create(test_client, {**analisis_payload, "estado": "cancelado"})

        response = await test_client.put(
            f"/api/analisis/{created['_id']}", json={"estado": "pendiente"}
        )
        assert response.json()["data"]["estado"] == "pendiente"

    @pytest.mark.asyncio
    async def test_invalid_estado_leaves_record_unchanged(self, test_client, analisis_payload):
        created = await _create(test_client, analisis_payload)

        response = await test_client.put(
            f"/api/analisis/{created['_id']}", json={"estado": "perdido"}
        )
        assert response.status_code == 400

        current = (await test_client.get(f"/api/analisis/{created['_id']}")).json()["data"]
        assert current == created

    @pytest.mark.asyncio
    async def test_update_to_existing_numero_conflicts(self, test_client, analisis_payload):
        await _create(test_client, analisis_payload)
        second = await _create(test_client, {**analisis_payload, "numero_analisis": "AN-2"})

        response = await test_client.put(
            f"/api/analisis/{second['_id']}", json={"numero_analisis": "AN-2024-0001"}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "El número de análisis ya existe"

    @pytest.mark.asyncio
    async def test_update_unknown_id(self, test_client):
        response = await test_client.put(f"/api/analisis/{uuid.uuid4()}", json={"estado": "completado"})

        assert response.status_code == 404


class TestDeleteAnalisis:
    """DELETE /api/analisis/{id}"""

    @pytest.mark.asyncio
    async def test_delete_is_permanent(self, test_client, analisis_payload):
        created = await _create(test_client, analisis_payload)

        response = await test_client.delete(f"/api/analisis/{created['_id']}")
        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Análisis eliminado exitosamente"}

        assert (await test_client.get(f"/api/analisis/{created['_id']}")).status_code == 404
        assert (await test_client.get("/api/analisis")).json()["count"] == 0

    @pytest.mark.asyncio
    async def test_numero_reusable_after_delete(self, test_client, analisis_payload):
        created = await _create(test_client, analisis_payload)
        await test_client.delete(f"/api/analisis/{created['_id']}")

        response = await test_client.post("/api/analisis", json=analisis_payload)
        assert response.status_code == 201

    @pytest.mark.asyncio
    async def test_delete_twice(self, test_client, analisis_payload):
        created = await _create(test_client, analisis_payload)
        await test_client.delete(f"/api/analisis/{created['_id']}")

        response = await test_client.delete(f"/api/analisis/{created['_id']}")
        assert response.status_code == 404


class TestStoreFailure:
    """Every store failure surfaces as 500 with the raw cause in `details`."""

    @pytest.mark.asyncio
    async def test_list_failure(self, failing_client):
        response = await failing_client.get("/api/analisis")

        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "error": "Error al obtener análisis",
            "details": "store unavailable",
        }

    @pytest.mark.asyncio
    async def test_create_failure(self, failing_client, analisis_payload):
        response = await failing_client.post("/api/analisis", json=analisis_payload)

        assert response.status_code == 500
        assert response.json()["error"] == "Error al crear el análisis"
        assert response.json()["details"] == "store unavailable"

    @pytest.mark.asyncio
    async def test_get_failure(self, failing_client):
        response = await failing_client.get(f"/api/analisis/{uuid.uuid4()}")

        assert response.status_code == 500
        assert response.json()["error"] == "Error al obtener el análisis"
