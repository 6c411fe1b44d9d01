"""Lightweight backend detection.

Used by the relay's availability route and by ``wanderword --list-backends``.
"""

import logging
import shutil

import requests

from wanderword.providers import DEFAULT_OLLAMA_URL, cli_agent_names

logger = logging.getLogger(__name__)


def is_installed(name: str) -> bool:
    """Whether ``name`` resolves on PATH. Never raises."""
    try:
        return shutil.which(name) is not None
    except Exception as e:
        logger.debug(f"PATH lookup for {name} failed: {e}")
        return False


def detect_cli_agents() -> list[dict]:
    """Presence of each agent CLI as [{name, installed}]."""
    return [{"name": name, "installed": is_installed(name)} for name in cli_agent_names()]


def detect_backends_quick(ollama_url: str = DEFAULT_OLLAMA_URL) -> dict[str, bool]:
    """Check which local backends are available right now.

    Returns a dict of backend_name -> is_available.
    HTTP checks use a 2-second timeout so this never blocks for long.
    """
    results = {agent["name"]: agent["installed"] for agent in detect_cli_agents()}

    # Ollama: binary on PATH or HTTP server responding
    ollama_ok = is_installed("ollama")
    if not ollama_ok:
        try:
            requests.get(f"{ollama_url.rstrip('/')}/", timeout=2)
            ollama_ok = True
        except requests.exceptions.RequestException:
            pass
    results["ollama"] = ollama_ok

    return results
