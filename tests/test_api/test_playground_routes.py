"""Tests for the playground REST routes (codeplay.api.playground_routes).

Covers:
- Status mapping of action results (201/200/400/401/404)
- Create -> list -> star -> edit -> duplicate -> delete over HTTP
- Saving an edited tree through PUT /code
- Template catalog and /health
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

pytestmark = pytest.mark.unit


class TestCatalogAndHealth:
    def test_health(self, client: TestClient):
        assert client.get("/health").json() == {"status": "ok"}

    def test_templates(self, client: TestClient):
        ids = {entry["id"] for entry in client.get("/api/templates").json()}
        assert ids == {"REACTJS", "NEXTJS", "EXPRESS", "VUE", "HONO", "ANGULAR"}

    def test_templates_by_category(self, client: TestClient):
        entries = client.get("/api/templates", params={"category": "frontend"}).json()
        assert {entry["id"] for entry in entries} == {"REACTJS", "VUE"}


class TestCreateAndList:
    def test_anonymous_create_is_401(self, client: TestClient):
        response = client.post("/api/playgrounds", json={"title": "x", "template": "VUE"})
        assert response.status_code == 401
        assert response.json()["success"] is False

    def test_create(self, client: TestClient, bob_headers):
        response = client.post(
            "/api/playgrounds",
            json={"title": "Vue test", "description": "d", "template": "VUE"},
            headers=bob_headers,
        )
        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["playground"]["template"] == "VUE"
        assert body["playground"]["user_id"] == "user-bob"

    def test_blank_title_is_400(self, client: TestClient, bob_headers):
        response = client.post("/api/playgrounds", json={"title": " "}, headers=bob_headers)
        assert response.status_code == 400
        assert response.json()["error"] == "Title is required"

    def test_unknown_template_is_422(self, client: TestClient, bob_headers):
        response = client.post(
            "/api/playgrounds", json={"title": "x", "template": "SVELTE"}, headers=bob_headers
        )
        assert response.status_code == 422

    def test_list(self, client: TestClient, alice_headers):
        response = client.get("/api/playgrounds", headers=alice_headers)
        assert response.status_code == 200
        ids = {p["id"] for p in response.json()["playgrounds"]}
        assert ids == {"pg-react", "pg-angular"}

    def test_list_anonymous(self, client: TestClient):
        assert client.get("/api/playgrounds").status_code == 401

    def test_get_by_id(self, client: TestClient):
        response = client.get("/api/playgrounds/pg-react")
        assert response.status_code == 200
        assert response.json()["playground"]["title"] == "My React App"
        assert response.json()["template_file"] is None

    def test_get_missing(self, client: TestClient):
        assert client.get("/api/playgrounds/nope").status_code == 404


class TestMutations:
    def test_star_toggle(self, client: TestClient, alice_headers):
        first = client.post("/api/playgrounds/pg-react/star", headers=alice_headers).json()
        second = client.post("/api/playgrounds/pg-react/star", headers=alice_headers).json()
        assert first["is_marked"] is True
        assert second["is_marked"] is False

    def test_edit(self, client: TestClient, alice_headers):
        response = client.patch(
            "/api/playgrounds/pg-react", json={"title": "New name"}, headers=alice_headers
        )
        assert response.status_code == 200
        assert response.json()["playground"]["title"] == "New name"

    def test_edit_by_non_owner_is_404(self, client: TestClient, bob_headers):
        response = client.patch(
            "/api/playgrounds/pg-react", json={"title": "Mine now"}, headers=bob_headers
        )
        assert response.status_code == 404

    def test_duplicate(self, client: TestClient, alice_headers):
        response = client.post("/api/playgrounds/pg-react/duplicate", headers=alice_headers)
        assert response.status_code == 201
        assert response.json()["playground"]["title"] == "My React App (copy)"

    def test_delete(self, client: TestClient, alice_headers):
        assert client.delete("/api/playgrounds/pg-react", headers=alice_headers).status_code == 200
        assert client.get("/api/playgrounds/pg-react").status_code == 404

    def test_delete_by_non_owner(self, client: TestClient, bob_headers):
        assert client.delete("/api/playgrounds/pg-react", headers=bob_headers).status_code == 404

    def test_save_code(self, client: TestClient, alice_headers):
        tree = {
            "folderName": "react-ts",
            "items": [{"folderName": "src", "items": [{"filename": "App", "fileExtension": "js", "content": "edited"}]}],
        }
        response = client.put("/api/playgrounds/pg-react/code", json=tree, headers=alice_headers)
        assert response.status_code == 200
        assert response.json()["template_file"]["filename"] == "template"

        detail = client.get("/api/playgrounds/pg-react").json()
        assert '"edited"' in detail["template_file"]["content"]

    def test_save_code_rejects_bad_shape(self, client: TestClient, alice_headers):
        response = client.put(
            "/api/playgrounds/pg-react/code", json={"items": "nope"}, headers=alice_headers
        )
        assert response.status_code == 422
