import json

import pytest
import requests

from wanderword import settings as settings_module

KEY_ENV_VARS = (
    "GOOGLE_API_KEY",
    "GEMINI_API_KEY",
    "OPENAI_API_KEY",
    "ANTHROPIC_API_KEY",
    "WANDERWORD_RELAY_URL",
    "CLI_AGENTS_PATH",
    "OUTPUT_JSON",
)


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Point settings/logs at a temp dir and hide real API keys."""
    home = tmp_path / "home"
    monkeypatch.setenv("WANDERWORD_HOME", str(home))
    for var in KEY_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr(settings_module, "_settings", None)
    return home


def _build_response(status_code=200, payload=None, reason="OK"):
    response = requests.Response()
    response.status_code = status_code
    response.reason = reason
    response.encoding = "utf-8"
    response._content = json.dumps(payload if payload is not None else {}).encode("utf-8")
    return response


@pytest.fixture
def make_response():
    """Factory for real requests.Response objects built without the network."""
    return _build_response
