"""
Notes API - Bootstrap Procedure Tests
=====================================

What we test:
    ✅ Feature routes only answer under /api/v1
    ✅ Documentation served at /api and /api-json, outside the prefix
    ✅ Generated document only contains NoteModule routes
    ✅ Listener uses settings.port (default 3000, PORT=8080)
    ✅ Two "bootstrap" log lines after the listener is open
    ✅ Occupied port fails before anything is logged
    ✅ Invalid root modules abort creation
"""

import logging
import socket
from unittest.mock import AsyncMock, patch

import httpx
import pytest
from fastapi import APIRouter
from httpx import ASGITransport, AsyncClient

from notes_api.application import Application
from notes_api.bootstrap import STARTED_MESSAGE, bootstrap, prepare_application
from notes_api.config import Settings
from notes_api.exceptions import (
    ApplicationCreationError,
    DocumentationError,
    ListenError,
)
from notes_api.modules import AppModule, FeatureModule, HealthModule, NoteModule


def _bootstrap_records(caplog):
    return [r for r in caplog.records if r.name == "bootstrap"]


class TestRoutePrefix:

    @pytest.mark.asyncio
    async def test_notes_served_under_prefix(self, test_client):
        response = await test_client.get("/api/v1/notes")
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_notes_not_served_without_prefix(self, test_client):
        response = await test_client.get("/notes")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_health_served_under_prefix(self, test_client):
        assert (await test_client.get("/api/v1/health")).status_code == 200
        assert (await test_client.get("/health")).status_code == 404

    @pytest.mark.asyncio
    async def test_framework_docs_are_disabled(self, test_client):
        assert (await test_client.get("/docs")).status_code == 404
        assert (await test_client.get("/openapi.json")).status_code == 404


class TestDocumentation:

    @pytest.mark.asyncio
    async def test_swagger_ui_at_api(self, test_client):
        response = await test_client.get("/api")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert "/api-json" in response.text

    @pytest.mark.asyncio
    async def test_document_metadata(self, test_client):
        document = (await test_client.get("/api-json")).json()
        assert document["info"]["title"] == "Notes todo app"
        assert document["info"]["description"] == "A documentation for notes"
        assert document["info"]["version"] == "1.0"
        assert document["tags"] == [{"name": "Notes"}]

    @pytest.mark.asyncio
    async def test_document_only_contains_note_routes(self, test_client):
        paths = (await test_client.get("/api-json")).json()["paths"]
        assert set(paths) == {"/api/v1/notes", "/api/v1/notes/{note_id}"}
        assert set(paths["/api/v1/notes"]) == {"get", "post"}
        assert set(paths["/api/v1/notes/{note_id}"]) == {"get", "patch", "delete"}

    @pytest.mark.asyncio
    async def test_other_modules_stay_undocumented(self, test_settings):
        extra = APIRouter(tags=["Extra"])

        @extra.get("/extra")
        async def extra_route():
            return {"ok": True}

        root = AppModule([NoteModule, HealthModule, FeatureModule("ExtraModule", extra)])
        app = await prepare_application(test_settings, root)

        transport = ASGITransport(app=app.http)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            assert (await client.get("/api/v1/extra")).json() == {"ok": True}
            paths = (await client.get("/api-json")).json()["paths"]

        assert "/api/v1/extra" not in paths
        assert all(path.startswith("/api/v1/notes") for path in paths)

    @pytest.mark.asyncio
    async def test_note_module_must_be_imported(self, test_settings):
        with pytest.raises(DocumentationError):
            await prepare_application(test_settings, AppModule([HealthModule]))


class TestApplicationCreation:

    @pytest.mark.asyncio
    async def test_duplicate_module_names_abort(self, test_settings):
        root = AppModule([NoteModule, FeatureModule("NoteModule", APIRouter())])
        with pytest.raises(ApplicationCreationError):
            await bootstrap(test_settings, root)

    @pytest.mark.asyncio
    async def test_empty_root_module_aborts(self, test_settings):
        with pytest.raises(ApplicationCreationError):
            await bootstrap(test_settings, AppModule([]))


class TestStartupSequence:
    """bootstrap() with the network step mocked out."""

    @pytest.mark.asyncio
    async def test_default_port_and_log_lines(self, monkeypatch, caplog):
        monkeypatch.delenv("PORT", raising=False)
        monkeypatch.delenv("HOST", raising=False)
        caplog.set_level(logging.INFO, logger="bootstrap")
        settings = Settings(_env_file=None)

        with patch.object(Application, "listen", new=AsyncMock()) as listen, \
             patch.object(
                 Application, "get_url",
                 new=AsyncMock(return_value="http://127.0.0.1:3000"),
             ):
            await bootstrap(settings)

        listen.assert_awaited_once_with(3000, "::")
        messages = [r.getMessage() for r in _bootstrap_records(caplog)]
        assert len(messages) == 2
        assert messages[0].endswith(":3000")
        assert messages[1] == STARTED_MESSAGE

    @pytest.mark.asyncio
    async def test_port_from_environment(self, monkeypatch):
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.delenv("HOST", raising=False)
        settings = Settings(_env_file=None)

        with patch.object(Application, "listen", new=AsyncMock()) as listen, \
             patch.object(
                 Application, "get_url",
                 new=AsyncMock(return_value="http://127.0.0.1:8080"),
             ):
            await bootstrap(settings)

        listen.assert_awaited_once_with(8080, "::")

    @pytest.mark.asyncio
    async def test_docs_published_before_listening(self, test_settings):
        seen = {}

        async def fake_listen(self, port, host=None):
            seen["paths"] = {getattr(route, "path", None) for route in self.http.routes}

        with patch.object(Application, "listen", new=fake_listen), \
             patch.object(Application, "get_url", new=AsyncMock(return_value="http://x:1")):
            await bootstrap(test_settings)

        assert {"/api", "/api-json"} <= seen["paths"]


class TestListener:
    """bootstrap() against real sockets on the loopback interface."""

    @pytest.mark.asyncio
    async def test_serves_on_resolved_port(self, test_settings, caplog):
        caplog.set_level(logging.INFO, logger="bootstrap")
        app = await bootstrap(test_settings)
        try:
            url = await app.get_url()
            assert url.startswith("http://127.0.0.1:")
            assert not url.endswith(":0")

            async with httpx.AsyncClient(base_url=url) as client:
                assert (await client.get("/api")).status_code == 200
                assert (await client.get("/api/v1/health")).status_code == 200
        finally:
            await app.close()

        messages = [r.getMessage() for r in _bootstrap_records(caplog)]
        assert messages == [f"Listening on {url}", STARTED_MESSAGE]

    @pytest.mark.asyncio
    async def test_listens_on_exact_port(self):
        scratch = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        scratch.bind(("127.0.0.1", 0))
        free_port = scratch.getsockname()[1]
        scratch.close()

        settings = Settings(_env_file=None, port=free_port, host="127.0.0.1")
        app = await bootstrap(settings)
        try:
            assert await app.get_url() == f"http://127.0.0.1:{free_port}"
        finally:
            await app.close()

    @pytest.mark.asyncio
    async def test_occupied_port_fails_before_logging(self, caplog):
        caplog.set_level(logging.INFO, logger="bootstrap")
        blocker = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        blocker.bind(("127.0.0.1", 0))
        blocker.listen(1)
        try:
            port = blocker.getsockname()[1]
            settings = Settings(_env_file=None, port=port, host="127.0.0.1")

            with pytest.raises(ListenError) as exc_info:
                await bootstrap(settings)
        finally:
            blocker.close()

        assert exc_info.value.port == port
        assert _bootstrap_records(caplog) == []
