import pytest
import requests

from mazeanchor.src.config import ServerSettings
from mazeanchor.src.conversion import MazeDecodeError, encode_maze
from mazeanchor.src.generators.maze import generate_maze
from mazeanchor.src.pipeline import (
    BackendError,
    BackendTimeoutError,
    MazeBackendClient,
    MazePipeline,
    MazeSource,
    PipelineError,
    PipelineSettings,
)
from mazeanchor.src.server import create_app


class _Response:
    def __init__(self, status_code=200, body=None, json_error=False):
        self.status_code = status_code
        self._body = body
        self._json_error = json_error

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")

    def json(self):
        if self._json_error:
            raise ValueError("Expecting value")
        return self._body


class _StubClient:
    """Records calls and replays a canned maze or error."""

    def __init__(self, maze=None, error=None):
        self.maze = maze
        self.error = error
        self.calls = []

    def fetch_maze(self, size, **kwargs):
        self.calls.append((size, kwargs))
        if self.error is not None:
            raise self.error
        return self.maze


# ---------------------------------------------------------------------------
# Backend client
# ---------------------------------------------------------------------------

def test_client_sends_query(monkeypatch):
    seen = {}

    def fake_get(url, params=None, timeout=None):
        seen.update(url=url, params=params, timeout=timeout)
        return _Response(body=encode_maze(generate_maze(7, 7, seed="q")))

    monkeypatch.setattr(requests, "get", fake_get)
    maze = MazeBackendClient("http://maze.test/", timeout=1.5).fetch_maze(7, seed="q")
    assert seen["url"] == "http://maze.test/api/maze"
    assert seen["params"] == {"size": 7, "difficulty": "medium", "seed": "q"}
    assert seen["timeout"] == 1.5
    assert maze.seed == "q"


def test_client_timeout(monkeypatch):
    def fake_get(url, params=None, timeout=None):
        raise requests.Timeout("read timed out")

    monkeypatch.setattr(requests, "get", fake_get)
    with pytest.raises(BackendTimeoutError):
        MazeBackendClient("http://maze.test").fetch_payload(15)


def test_client_connection_error(monkeypatch):
    def fake_get(url, params=None, timeout=None):
        raise requests.ConnectionError("refused")

    monkeypatch.setattr(requests, "get", fake_get)
    with pytest.raises(BackendError) as exc:
        MazeBackendClient("http://maze.test").fetch_payload(15)
    assert not isinstance(exc.value, BackendTimeoutError)


def test_client_http_error(monkeypatch):
    monkeypatch.setattr(
        requests, "get",
        lambda url, params=None, timeout=None: _Response(500, {"error": "maze_generation_failed"}),
    )
    with pytest.raises(BackendError):
        MazeBackendClient("http://maze.test").fetch_payload(15)


def test_client_non_json_body(monkeypatch):
    monkeypatch.setattr(requests, "get", lambda url, params=None, timeout=None: _Response(json_error=True))
    with pytest.raises(BackendError):
        MazeBackendClient("http://maze.test").fetch_payload(15)


def test_client_invalid_payload(monkeypatch):
    monkeypatch.setattr(
        requests, "get",
        lambda url, params=None, timeout=None: _Response(body={"gridSize": 5, "cells": []}),
    )
    with pytest.raises(MazeDecodeError):
        MazeBackendClient("http://maze.test").fetch_maze(5)


def test_client_against_flask_app(monkeypatch):
    app = create_app(ServerSettings()).test_client()

    def fake_get(url, params=None, timeout=None):
        reply = app.get("/api/maze", query_string=params)
        return _Response(reply.status_code, reply.get_json())

    monkeypatch.setattr(requests, "get", fake_get)
    maze = MazeBackendClient("http://maze.test").fetch_maze(9, seed="live")
    local = generate_maze(9, 9, seed="live")
    assert maze.grid.wall_flags() == local.grid.wall_flags()


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------

def test_local_pipeline():
    result = MazePipeline(PipelineSettings(cols=6, rows=6, seed="local")).run()
    assert result.source is MazeSource.LOCAL
    assert result.fallback_reason is None
    assert result.maze.seed == "local"
    assert result.geometry.segment_count > 0
    assert result.duration_ms >= 0


def test_remote_maze_used_when_available():
    remote = generate_maze(8, 8, seed="remote")
    client = _StubClient(maze=remote)
    result = MazePipeline(PipelineSettings(cols=8, rows=8, seed="remote"), client=client).run()
    assert result.source is MazeSource.REMOTE
    assert result.maze is remote
    size, kwargs = client.calls[0]
    assert size == 8
    assert kwargs["seed"] == "remote"
    assert kwargs["verify_path"] is True


@pytest.mark.parametrize("error", [
    BackendTimeoutError("Maze request timed out after 3.0s"),
    BackendError("Maze request failed: refused"),
])
def test_transport_failure_falls_back(error):
    result = MazePipeline(PipelineSettings(cols=6, rows=6, seed="fb"), client=_StubClient(error=error)).run()
    assert result.source is MazeSource.LOCAL
    assert result.fallback_reason == str(error)
    assert result.maze.grid.open_interior_edge_count() == 35


def test_invalid_payload_falls_back(monkeypatch):
    monkeypatch.setattr(
        requests, "get",
        lambda url, params=None, timeout=None: _Response(body={"gridSize": 5, "cells": [{}] * 24}),
    )
    settings = PipelineSettings(cols=5, rows=5, seed="bad", backend_url="http://maze.test")
    result = MazePipeline(settings).run()
    assert result.source is MazeSource.LOCAL
    assert "expected 25, got 24" in result.fallback_reason


def test_rectangular_grid_skips_backend():
    client = _StubClient(maze=generate_maze(5, 5, seed="sq"))
    result = MazePipeline(PipelineSettings(cols=6, rows=4, seed="rect"), client=client).run()
    assert result.source is MazeSource.LOCAL
    assert client.calls == []
    assert (result.maze.cols, result.maze.rows) == (6, 4)


def test_backend_url_builds_client():
    pipeline = MazePipeline(PipelineSettings(backend_url="http://maze.test", backend_timeout=0.5))
    assert isinstance(pipeline.client, MazeBackendClient)
    assert pipeline.client.timeout == 0.5
    assert MazePipeline().client is None


def test_local_failure_raises_pipeline_error():
    with pytest.raises(PipelineError):
        MazePipeline(PipelineSettings(cols=0, rows=5)).run()
