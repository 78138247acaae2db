"""
ContactBook Backend — HTTP API Tests
======================================

What:  End-to-end tests through the FastAPI app (HTTPX + ASGITransport).
How:   Real routing, real repository, per-test SQLite database.

What we test:
    ✅ Route surface: GET /, /contact CRUD, /health
    ✅ The Alice scenario: create → get → delete → get null
    ✅ Lenient missing-document behavior (null / success message)
    ✅ JSON and form bodies; rejection of non-object and unsupported bodies
    ✅ Error envelope and status codes; exactly one response per failure
"""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
from httpx import AsyncClient, ASGITransport

from app.exceptions import DatabaseError


class TestRootAndHealth:

    @pytest.mark.asyncio
    async def test_root_greeting(self, test_client):
        response = await test_client.get("/")

        assert response.status_code == 200
        assert response.json() == {"message": "GET request successful !"}

    @pytest.mark.asyncio
    async def test_health_connected(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
        assert body["uptime_seconds"] >= 0

    @pytest.mark.asyncio
    async def test_health_disconnected(self, test_app, test_client):
        test_app.state.contact_repository.ping = AsyncMock(side_effect=DatabaseError())

        response = await test_client.get("/health")

        assert response.status_code == 503
        assert response.json()["database"] == "disconnected"

    @pytest.mark.asyncio
    async def test_request_id_echoed(self, test_client):
        response = await test_client.get("/", headers={"X-Request-ID": "trace-42"})

        assert response.headers["X-Request-ID"] == "trace-42"

    @pytest.mark.asyncio
    async def test_request_id_generated(self, test_client):
        response = await test_client.get("/contact")

        assert len(response.headers["X-Request-ID"]) == 8


class TestContactLifecycle:

    @pytest.mark.asyncio
    async def test_alice_scenario(self, test_client):
        created = await test_client.post("/contact", json={"name": "Alice", "phone": "555-1000"})
        assert created.status_code == 200
        body = created.json()
        contact_id = body["_id"]
        assert body == {"_id": contact_id, "name": "Alice", "phone": "555-1000"}

        fetched = await test_client.get(f"/contact/{contact_id}")
        assert fetched.status_code == 200
        assert fetched.json() == body

        deleted = await test_client.delete(f"/contact/{contact_id}")
        assert deleted.status_code == 200
        assert deleted.json() == {"message": "Successfully deleted contact!"}

        gone = await test_client.get(f"/contact/{contact_id}")
        assert gone.status_code == 200
        assert gone.json() is None

    @pytest.mark.asyncio
    async def test_list_contains_every_created_contact(self, test_client):
        ids = set()
        for i in range(4):
            response = await test_client.post("/contact", json={"name": f"c{i}"})
            ids.add(response.json()["_id"])

        response = await test_client.get("/contact")

        assert response.status_code == 200
        listed = response.json()
        assert len(listed) >= 4
        assert ids <= {doc["_id"] for doc in listed}

    @pytest.mark.asyncio
    async def test_list_empty(self, test_client):
        response = await test_client.get("/contact")

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_put_merges_and_is_idempotent(self, test_client):
        created = (await test_client.post("/contact", json={"name": "Alice", "phone": "555-1000"})).json()
        url = f"/contact/{created['_id']}"
        changes = {"phone": "555-2000", "email": "alice@example.com"}

        first = await test_client.put(url, json=changes)
        second = await test_client.put(url, json=changes)
        fetched = await test_client.get(url)

        expected = {
            "_id": created["_id"],
            "name": "Alice",
            "phone": "555-2000",
            "email": "alice@example.com",
        }
        assert first.status_code == 200
        assert first.json() == expected
        assert second.json() == expected
        assert fetched.json() == expected

    @pytest.mark.asyncio
    async def test_put_cannot_change_identifier(self, test_client):
        created = (await test_client.post("/contact", json={"name": "Alice"})).json()

        response = await test_client.put(f"/contact/{created['_id']}", json={"_id": "other"})

        assert response.json()["_id"] == created["_id"]

    @pytest.mark.asyncio
    async def test_empty_body_creates_empty_contact(self, test_client):
        response = await test_client.post("/contact")

        assert response.status_code == 200
        assert list(response.json()) == ["_id"]


class TestMissingContacts:
    """Unknown IDs are not errors."""

    @pytest.mark.asyncio
    async def test_get_unknown_returns_null(self, test_client):
        response = await test_client.get(f"/contact/{uuid4()}")

        assert response.status_code == 200
        assert response.json() is None

    @pytest.mark.asyncio
    async def test_put_unknown_returns_null(self, test_client):
        response = await test_client.put(f"/contact/{uuid4()}", json={"name": "Ghost"})

        assert response.status_code == 200
        assert response.json() is None

    @pytest.mark.asyncio
    async def test_delete_unknown_reports_success(self, test_client):
        response = await test_client.delete(f"/contact/{uuid4()}")

        assert response.status_code == 200
        assert response.json() == {"message": "Successfully deleted contact!"}


class TestRequestBodies:

    @pytest.mark.asyncio
    async def test_form_encoded_body(self, test_client):
        response = await test_client.post(
            "/contact",
            content="name=Bob&phone=555-3000&tag=a&tag=b",
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "Bob"
        assert body["phone"] == "555-3000"
        assert body["tag"] == ["a", "b"]

    @pytest.mark.asyncio
    async def test_json_array_rejected(self, test_client):
        response = await test_client.post("/contact", json=[{"name": "Alice"}])

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "validation_error"
        assert body["details"]["field"] == "body"

    @pytest.mark.asyncio
    async def test_malformed_json_rejected(self, test_client):
        response = await test_client.post(
            "/contact",
            content=b'{"name": ',
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Request body is not valid JSON"

    @pytest.mark.asyncio
    async def test_unsupported_content_type_rejected(self, test_client):
        response = await test_client.post(
            "/contact",
            content=b"name=Alice",
            headers={"Content-Type": "text/plain"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("token", ["NaN", "Infinity", "-Infinity"])
    async def test_non_standard_json_constants_rejected(self, test_client, token):
        response = await test_client.post(
            "/contact",
            content=f'{{"name": "Alice", "score": {token}}}'.encode(),
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "validation_error"
        assert token in body["message"]
        assert (await test_client.get("/contact")).json() == []

    @pytest.mark.asyncio
    async def test_nothing_stored_after_rejected_body(self, test_client):
        await test_client.post("/contact", json="just a string")

        assert (await test_client.get("/contact")).json() == []


class TestErrorResponses:

    @pytest.mark.asyncio
    async def test_malformed_id_is_bad_request(self, test_client):
        response = await test_client.get("/contact/not-a-uuid")

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "validation_error"
        assert body["details"] == {"field": "contact_id"}
        assert body["request_id"] == response.headers["X-Request-ID"]

    @pytest.mark.asyncio
    async def test_store_failure_is_single_500(self, test_app, test_client):
        test_app.state.contact_repository.find_all = AsyncMock(
            side_effect=DatabaseError(context={"operation": "find_all"})
        )

        response = await test_client.get("/contact")

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "server_error"
        assert "operation" not in response.text  # context stays server-side

    @pytest.mark.asyncio
    async def test_delete_store_failure_has_no_success_message(self, test_app, test_client):
        test_app.state.contact_repository.remove_by_id = AsyncMock(side_effect=DatabaseError())

        response = await test_client.delete(f"/contact/{uuid4()}")

        assert response.status_code == 500
        assert "Successfully deleted" not in response.text

    @pytest.mark.asyncio
    async def test_unexpected_error_keeps_request_id(self, test_app):
        test_app.state.contact_repository.find_all = AsyncMock(side_effect=RuntimeError("boom"))
        transport = ASGITransport(app=test_app, raise_app_exceptions=False)

        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/contact", headers={"X-Request-ID": "trace-99"})

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "internal_server_error"
        assert body["request_id"] == "trace-99"
        assert response.headers["X-Request-ID"] == "trace-99"
        assert "boom" not in response.text
