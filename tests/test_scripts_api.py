"""
ClipVox API test suite: scripts and pacing.
"""
import pytest
from httpx import AsyncClient

from app.services.script_workflow import ScriptWorkflow


@pytest.fixture
async def project_id(auth_headers, create_project):
    return await create_project(auth_headers)


class TestCreateScript:
    """Script creation and generation."""

    @pytest.mark.asyncio
    async def test_create_script(self, client: AsyncClient, auth_headers, project_id, script_payload, generator):
        response = await client.post("/api/scripts", json=script_payload(project_id), headers=auth_headers)

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["project_id"] == project_id
        assert data["status"] == "ready"
        assert data["target_word_count"] == 750
        assert data["outline"] == ["Chapter 1: The Pull", "Chapter 2: The Turn"]
        assert data["actual_word_count"] > 0
        assert data["error"] == ""
        assert data["voice"] is None
        assert generator.calls[0].topic == "How ocean tides work"

    @pytest.mark.asyncio
    async def test_create_with_style(self, client: AsyncClient, auth_headers, project_id, script_payload, generator):
        payload = script_payload(project_id, tone="bedtime", style="slow and soothing", length_minutes=10)

        response = await client.post("/api/scripts", json=payload, headers=auth_headers)

        assert response.status_code == 201
        assert response.json()["data"]["target_word_count"] == 1150
        assert generator.calls[0].style == "slow and soothing"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "overrides",
        [
            {"tone": "spooky"},
            {"topic": "Tide"},
            {"length_minutes": 0},
            {"length_minutes": 301},
            {"chapters": 0},
            {"style": "x" * 121},
        ],
    )
    async def test_invalid_brief(
        self, client: AsyncClient, auth_headers, project_id, script_payload, generator, overrides
    ):
        response = await client.post(
            "/api/scripts", json=script_payload(project_id, **overrides), headers=auth_headers
        )

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"
        assert generator.calls == []

    @pytest.mark.asyncio
    async def test_unknown_project(self, client: AsyncClient, auth_headers, script_payload, generator):
        response = await client.post("/api/scripts", json=script_payload("missing"), headers=auth_headers)

        assert response.status_code == 404
        assert generator.calls == []

    @pytest.mark.asyncio
    async def test_second_script_for_project(self, client: AsyncClient, auth_headers, project_id, script_payload):
        await client.post("/api/scripts", json=script_payload(project_id), headers=auth_headers)

        response = await client.post("/api/scripts", json=script_payload(project_id), headers=auth_headers)

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "INVALID_STATE"

    @pytest.mark.asyncio
    async def test_concurrent_duplicate_is_a_conflict(
        self, client: AsyncClient, auth_headers, project_id, script_payload, monkeypatch
    ):
        first = await client.post("/api/scripts", json=script_payload(project_id), headers=auth_headers)

        # Both requests pass the existence check; the unique project_id decides
        async def no_script_yet(self, project_id):
            return False

        monkeypatch.setattr(ScriptWorkflow, "project_has_script", no_script_yet)

        response = await client.post("/api/scripts", json=script_payload(project_id), headers=auth_headers)

        assert response.status_code == 409
        error = response.json()["error"]
        assert error["code"] == "INVALID_STATE"
        assert error["message"] == "A script already exists for this project"

        listing = await client.get("/api/scripts", params={"project_id": project_id}, headers=auth_headers)
        assert [s["id"] for s in listing.json()["data"]] == [first.json()["data"]["id"]]

    @pytest.mark.asyncio
    async def test_generation_failure(self, client: AsyncClient, auth_headers, project_id, script_payload, generator):
        generator.error = RuntimeError("timeout")

        response = await client.post("/api/scripts", json=script_payload(project_id), headers=auth_headers)

        assert response.status_code == 502
        error = response.json()["error"]
        assert error["code"] == "GENERATION_FAILED"
        assert error["message"] == "timeout"

        script_id = error["details"]["script_id"]
        stored = (await client.get(f"/api/scripts/{script_id}", headers=auth_headers)).json()["data"]
        assert stored["status"] == "error"
        assert stored["error"] == "timeout"
        assert stored["content"] == ""
        assert stored["target_word_count"] == 750


class TestRateLimit:
    """Per-user generation limit."""

    @pytest.mark.asyncio
    async def test_sixth_request_is_rejected(
        self, client: AsyncClient, auth_headers, create_project, script_payload, generator
    ):
        for i in range(5):
            project_id = await create_project(auth_headers, f"Project {i}")
            response = await client.post("/api/scripts", json=script_payload(project_id), headers=auth_headers)
            assert response.status_code == 201

        project_id = await create_project(auth_headers, "Project 5")
        response = await client.post("/api/scripts", json=script_payload(project_id), headers=auth_headers)

        assert response.status_code == 429
        assert response.json()["error"]["code"] == "RATE_LIMITED"
        assert int(response.headers["Retry-After"]) >= 1
        assert len(generator.calls) == 5

        listing = await client.get("/api/scripts", params={"project_id": project_id}, headers=auth_headers)
        assert listing.json()["data"] == []

    @pytest.mark.asyncio
    async def test_limit_is_per_user(
        self, client: AsyncClient, register, create_project, script_payload, rate_limiter
    ):
        busy = await register("busy@example.com")
        me = (await client.get("/api/auth/me", headers=busy)).json()["data"]
        for _ in range(5):
            rate_limiter.check(f"scripts:{me['id']}", 5, 60)

        idle = await register("idle@example.com")
        project_id = await create_project(idle)
        response = await client.post("/api/scripts", json=script_payload(project_id), headers=idle)

        assert response.status_code == 201

    @pytest.mark.asyncio
    async def test_retries_share_the_limit(
        self, client: AsyncClient, auth_headers, project_id, script_payload, rate_limiter
    ):
        created = await client.post("/api/scripts", json=script_payload(project_id), headers=auth_headers)
        script_id = created.json()["data"]["id"]
        me = (await client.get("/api/auth/me", headers=auth_headers)).json()["data"]
        for _ in range(4):
            rate_limiter.check(f"scripts:{me['id']}", 5, 60)

        response = await client.post(f"/api/scripts/{script_id}/generate", headers=auth_headers)

        assert response.status_code == 429


class TestScriptCrud:
    """Reading, editing and deleting scripts."""

    @pytest.fixture
    async def script_id(self, client, auth_headers, project_id, script_payload):
        response = await client.post("/api/scripts", json=script_payload(project_id), headers=auth_headers)
        return response.json()["data"]["id"]

    @pytest.mark.asyncio
    async def test_list_requires_project_id(self, client: AsyncClient, auth_headers):
        response = await client.get("/api/scripts", headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "project_id is required"

    @pytest.mark.asyncio
    async def test_list_scripts(self, client: AsyncClient, auth_headers, project_id, script_id):
        response = await client.get("/api/scripts", params={"project_id": project_id}, headers=auth_headers)

        assert response.status_code == 200
        assert [s["id"] for s in response.json()["data"]] == [script_id]

    @pytest.mark.asyncio
    async def test_scripts_are_private(self, client: AsyncClient, register, script_id):
        other = await register("other@example.com")

        response = await client.get(f"/api/scripts/{script_id}", headers=other)

        assert response.status_code == 404
        assert response.json()["error"]["message"] == "Script not found"

    @pytest.mark.asyncio
    async def test_patch_content(self, client: AsyncClient, auth_headers, script_id):
        response = await client.patch(
            f"/api/scripts/{script_id}",
            json={"content": "# Cold Open\nThe sea is restless tonight."},
            headers=auth_headers,
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["actual_word_count"] == 7
        assert data["outline"] == ["Cold Open"]
        assert data["target_word_count"] == 750
        assert data["status"] == "ready"

    @pytest.mark.asyncio
    async def test_patch_length(self, client: AsyncClient, auth_headers, script_id):
        response = await client.patch(
            f"/api/scripts/{script_id}", json={"length_minutes": 2}, headers=auth_headers
        )

        assert response.status_code == 200
        assert response.json()["data"]["target_word_count"] == 300

    @pytest.mark.asyncio
    async def test_patch_without_changes(self, client: AsyncClient, auth_headers, script_id):
        response = await client.patch(f"/api/scripts/{script_id}", json={}, headers=auth_headers)

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_regenerate(self, client: AsyncClient, auth_headers, script_id, generator):
        generator.content = "# Chapter 1: Again\nFresh words here."

        response = await client.post(f"/api/scripts/{script_id}/generate", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["status"] == "ready"
        assert data["outline"] == ["Chapter 1: Again"]
        assert data["actual_word_count"] == 6
        assert len(generator.calls) == 2

    @pytest.mark.asyncio
    async def test_failed_regenerate_keeps_content(self, client: AsyncClient, auth_headers, script_id, generator):
        before = (await client.get(f"/api/scripts/{script_id}", headers=auth_headers)).json()["data"]
        generator.error = RuntimeError("upstream unavailable")

        response = await client.post(f"/api/scripts/{script_id}/generate", headers=auth_headers)

        assert response.status_code == 502
        assert response.json()["error"]["details"]["script_id"] == script_id
        after = (await client.get(f"/api/scripts/{script_id}", headers=auth_headers)).json()["data"]
        assert after["status"] == "error"
        assert after["error"] == "upstream unavailable"
        assert after["content"] == before["content"]

    @pytest.mark.asyncio
    async def test_re_estimate(self, client: AsyncClient, auth_headers, script_id):
        first = await client.get(f"/api/scripts/{script_id}/estimate", headers=auth_headers)
        second = await client.get(f"/api/scripts/{script_id}/estimate", headers=auth_headers)

        assert first.status_code == 200
        data = first.json()["data"]
        assert data["words_per_minute"] == 150
        assert data["target_word_count"] == 750
        assert data["delta"] == data["actual_word_count"] - 750
        assert second.json()["data"] == data

    @pytest.mark.asyncio
    async def test_delete_script(self, client: AsyncClient, auth_headers, script_id):
        response = await client.delete(f"/api/scripts/{script_id}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["data"] == {"deleted": True}
        assert (await client.get(f"/api/scripts/{script_id}", headers=auth_headers)).status_code == 404


class TestEstimatePreview:
    """Stateless estimate while editing."""

    @pytest.mark.asyncio
    async def test_preview(self, client: AsyncClient, auth_headers):
        response = await client.post(
            "/api/scripts/estimate",
            json={"tone": "dramatic", "style": "fast", "length_minutes": 3, "content": "one two three"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["words_per_minute"] == 150
        assert data["target_word_count"] == 450
        assert data["actual_word_count"] == 3
        assert data["delta"] == -447

    @pytest.mark.asyncio
    async def test_preview_requires_auth(self, client: AsyncClient):
        response = await client.post(
            "/api/scripts/estimate", json={"tone": "dramatic", "length_minutes": 3}
        )

        assert response.status_code == 401
