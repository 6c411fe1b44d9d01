"""Tests for the relay HTTP app using Flask's test client."""

import shutil
import subprocess

import pytest
import requests

from wanderword import cli_agents, relay
from wanderword.cli_agents import PROCESS_GRACE_S
from wanderword.settings import Settings


@pytest.fixture
def client(tmp_path, monkeypatch):
    monkeypatch.setattr(relay, "find_cli_caller", lambda configured=None: None)
    app = relay.create_app(Settings(tmp_path / "settings.json"))
    app.testing = True
    return app.test_client()


class FakeRun:
    """Replaces subprocess.run with a canned outcome."""

    def __init__(self, returncode=0, stdout="", stderr="", error=None):
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        self.error = error
        self.calls = []

    def __call__(self, args, **kwargs):
        self.calls.append((args, kwargs))
        if self.error is not None:
            raise self.error
        return subprocess.CompletedProcess(args, self.returncode, self.stdout, self.stderr)


def _install_run(monkeypatch, fake):
    monkeypatch.setattr(cli_agents.subprocess, "run", fake)
    return fake


class TestBackendCall:

    def test_success_returns_stdout(self, client, monkeypatch):
        fake = _install_run(monkeypatch, FakeRun(stdout='{"word": "tea"}'))

        response = client.post(
            "/backend-call", json={"model": "gemini", "prompt": "trace tea", "timeout": 45}
        )
        assert response.status_code == 200
        assert response.get_json() == {"output": '{"word": "tea"}'}

        args, kwargs = fake.calls[0]
        assert "trace tea" in args
        assert kwargs["timeout"] == 45 + PROCESS_GRACE_S
        assert kwargs.get("shell", False) is False

    def test_nonzero_exit_with_stdout_still_succeeds(self, client, monkeypatch):
        _install_run(monkeypatch, FakeRun(returncode=1, stdout="partial answer"))
        response = client.post("/backend-call", json={"model": "qwen", "prompt": "p"})
        assert response.status_code == 200
        assert response.get_json()["output"] == "partial answer"

    def test_stderr_used_when_stdout_empty(self, client, monkeypatch):
        _install_run(monkeypatch, FakeRun(returncode=0, stdout="", stderr="from stderr"))
        response = client.post("/backend-call", json={"model": "claude", "prompt": "p"})
        assert response.status_code == 200
        assert response.get_json()["output"] == "from stderr"

    def test_failed_process(self, client, monkeypatch):
        _install_run(monkeypatch, FakeRun(returncode=2, stderr="auth required"))
        response = client.post("/backend-call", json={"model": "codex", "prompt": "p"})
        assert response.status_code == 500
        assert response.get_json() == {
            "error": "Process exited with code 2",
            "output": "auth required",
        }

    def test_process_timeout(self, client, monkeypatch):
        error = subprocess.TimeoutExpired(cmd="gemini", timeout=40)
        _install_run(monkeypatch, FakeRun(error=error))
        response = client.post(
            "/backend-call", json={"model": "gemini", "prompt": "p", "timeout": 10}
        )
        assert response.status_code == 504
        assert "timed out" in response.get_json()["error"]

    def test_executable_missing(self, client, monkeypatch):
        _install_run(monkeypatch, FakeRun(error=FileNotFoundError("gemini")))
        response = client.post("/backend-call", json={"model": "gemini", "prompt": "p"})
        assert response.status_code == 500
        assert "not found" in response.get_json()["error"]

    @pytest.mark.parametrize(
        "body",
        [
            {"model": "bard", "prompt": "p"},
            {"model": "gemini"},
            {"model": "gemini", "prompt": ""},
            {"model": "gemini", "prompt": "p", "timeout": -5},
            {"model": "gemini", "prompt": "p", "timeout": "soon"},
        ],
    )
    def test_bad_requests(self, client, monkeypatch, body):
        fake = _install_run(monkeypatch, FakeRun(stdout="never"))
        response = client.post("/backend-call", json=body)
        assert response.status_code == 400
        assert response.get_json()["error"]
        assert fake.calls == []

    def test_body_not_json(self, client):
        response = client.post("/backend-call", data="hello", content_type="text/plain")
        assert response.status_code == 400


class TestAvailability:

    def test_reports_each_agent(self, client, monkeypatch):
        monkeypatch.setattr(
            shutil, "which", lambda name: "/usr/bin/claude" if name == "claude" else None
        )
        response = client.get("/backend-availability")
        assert response.status_code == 200
        agents = {a["name"]: a["installed"] for a in response.get_json()["agents"]}
        assert agents == {"gemini": False, "claude": True, "codex": False, "qwen": False}

    def test_lookup_failure_means_not_installed(self, client, monkeypatch):
        def broken_which(name):
            raise OSError("PATH unreadable")

        monkeypatch.setattr(shutil, "which", broken_which)
        response = client.get("/backend-availability")
        assert response.status_code == 200
        assert all(not a["installed"] for a in response.get_json()["agents"])


class TestLocalModelList:

    def test_passes_tags_through(self, client, monkeypatch, make_response):
        seen = []
        tags = {"models": [{"name": "llama3:latest"}, {"name": "mistral:7b"}]}

        def fake_get(url, timeout=None, **kwargs):
            seen.append(url)
            return make_response(200, tags)

        monkeypatch.setattr(requests, "get", fake_get)
        response = client.get("/local-model-list?baseUrl=http://gpu-box:11434/")
        assert response.status_code == 200
        assert response.get_json() == tags
        assert seen == ["http://gpu-box:11434/api/tags"]

    def test_default_base_url(self, client, monkeypatch, make_response):
        seen = []

        def fake_get(url, timeout=None, **kwargs):
            seen.append(url)
            return make_response(200, {"models": []})

        monkeypatch.setattr(requests, "get", fake_get)
        client.get("/local-model-list")
        assert seen == ["http://localhost:11434/api/tags"]

    def test_ollama_down(self, client, monkeypatch):
        def refused(url, timeout=None, **kwargs):
            raise requests.exceptions.ConnectionError("refused")

        monkeypatch.setattr(requests, "get", refused)
        response = client.get("/local-model-list")
        assert response.status_code == 503
        body = response.get_json()
        assert body["error"] == "Ollama not available"
        assert body["models"] == []


class TestMisc:

    def test_health(self, client):
        assert client.get("/health").get_json() == {"status": "ok"}

    def test_cors_header(self, client):
        response = client.get("/health", headers={"Origin": "http://localhost:5173"})
        assert response.headers.get("Access-Control-Allow-Origin")

    def test_unknown_route_is_json(self, client):
        response = client.get("/nope")
        assert response.status_code == 404
        assert response.get_json() == {"error": "Not found"}
