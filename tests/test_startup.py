# =============================================================================
# tests/test_startup.py - Startup Sequence Tests
# =============================================================================
# start() must connect to MongoDB before binding the HTTP listener and must
# not bind at all when the database is unreachable.
#
# The unreachable-database test talks to 127.0.0.1:1, where nothing listens,
# so it needs no running MongoDB.
# =============================================================================

import asyncio
import logging
import socket
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from app.main import create_app, main, start
from lib.mongo_client import Database, DatabaseConnectionError


def _free_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


class TestDatabaseConnect:
    """Tests for Database.connect failures."""

    def test_missing_uri(self):
        with pytest.raises(DatabaseConnectionError) as exc_info:
            asyncio.run(Database().connect(""))

        assert exc_info.value.code == "DATABASE_CONNECTION_FAILED"

    def test_unreachable_server(self):
        database = Database(timeout_ms=200)

        with pytest.raises(DatabaseConnectionError):
            asyncio.run(database.connect("mongodb://127.0.0.1:1/jobs-api"))

        assert not database.is_connected

    def test_collection_before_connect(self):
        with pytest.raises(DatabaseConnectionError):
            Database().collection("jobs")


class TestStart:
    """Tests for start()."""

    def test_unreachable_database_never_binds(self, context, caplog):
        port = _free_port()
        context.settings = context.settings.model_copy(update={
            "PORT": port,
            "API_HOST": "127.0.0.1",
            "MONGO_URI": "mongodb://127.0.0.1:1/jobs-api",
        })
        context.database = Database(timeout_ms=200)
        app = create_app(context)

        with caplog.at_level(logging.ERROR, logger="app.main"):
            started = asyncio.run(start(app))

        assert started is False
        assert "Server not started" in caplog.text
        with pytest.raises(OSError):
            socket.create_connection(("127.0.0.1", port), timeout=0.5)

    def test_server_not_created_when_connect_fails(self, context):
        context.database = MagicMock()
        context.database.connect = AsyncMock(side_effect=DatabaseConnectionError("down"))
        app = create_app(context)

        with patch("app.main.uvicorn.Server") as server_cls:
            started = asyncio.run(start(app))

        assert started is False
        server_cls.assert_not_called()

    def test_serves_after_connect(self, context, caplog):
        calls = []
        context.database = MagicMock()

        async def connect(uri):
            calls.append("connect")

        async def serve():
            calls.append("serve")

        context.database.connect = connect
        app = create_app(context)

        with patch("app.main.uvicorn.Server") as server_cls:
            server = server_cls.return_value
            server.started = True
            server.serve = serve
            with caplog.at_level(logging.INFO, logger="app.main"):
                started = asyncio.run(start(app))

        assert started is True
        assert calls == ["connect", "serve"]
        config = server_cls.call_args.args[0]
        assert config.port == context.settings.PORT
        assert f"Server is listening on port {context.settings.PORT}" in caplog.text

    def test_main_exit_code(self):
        with patch("app.main.start", AsyncMock(return_value=False)):
            assert main() == 1
        with patch("app.main.start", AsyncMock(return_value=True)):
            assert main() == 0
