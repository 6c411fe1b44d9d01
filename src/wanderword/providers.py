"""Static catalog of the AI backends WanderWord can ask for a word journey.

Backends fall into four kinds:
    cli   - local agent CLIs reached through the relay (gemini, claude, codex, qwen)
    api   - hosted APIs called directly with a user key
    local - a local Ollama inference server
    mock  - canned data, used when nothing else is selected
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class BackendId(str, Enum):
    GEMINI = "gemini"
    CLAUDE = "claude"
    CODEX = "codex"
    QWEN = "qwen"
    GEMINI_API = "gemini-api"
    OPENAI_API = "openai-api"
    ANTHROPIC_API = "anthropic-api"
    OLLAMA = "ollama"
    MOCK = "mock"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class BackendDescriptor:
    """Immutable metadata for one backend."""

    id: BackendId
    label: str
    kind: str
    needs_key: bool = False
    needs_config: bool = False
    default_model: Optional[str] = None
    key_env: tuple[str, ...] = ()


DEFAULT_OLLAMA_URL = "http://localhost:11434"

_CATALOG: tuple[BackendDescriptor, ...] = (
    BackendDescriptor(BackendId.GEMINI, "Gemini CLI", "cli"),
    BackendDescriptor(BackendId.CLAUDE, "Claude CLI", "cli"),
    BackendDescriptor(BackendId.CODEX, "Codex CLI", "cli"),
    BackendDescriptor(BackendId.QWEN, "Qwen CLI", "cli"),
    BackendDescriptor(
        BackendId.GEMINI_API,
        "Gemini API",
        "api",
        needs_key=True,
        default_model="gemini-2.0-flash",
        key_env=("GOOGLE_API_KEY", "GEMINI_API_KEY"),
    ),
    BackendDescriptor(
        BackendId.OPENAI_API,
        "OpenAI API",
        "api",
        needs_key=True,
        default_model="gpt-4o-mini",
        key_env=("OPENAI_API_KEY",),
    ),
    BackendDescriptor(
        BackendId.ANTHROPIC_API,
        "Anthropic API",
        "api",
        needs_key=True,
        default_model="claude-sonnet-4-20250514",
        key_env=("ANTHROPIC_API_KEY",),
    ),
    BackendDescriptor(
        BackendId.OLLAMA,
        "Ollama (local)",
        "local",
        needs_config=True,
        default_model="llama3",
    ),
    BackendDescriptor(BackendId.MOCK, "Mock data", "mock"),
)

BACKENDS: dict[BackendId, BackendDescriptor] = {d.id: d for d in _CATALOG}


def get_descriptor(backend: Union[BackendId, str]) -> BackendDescriptor:
    """Look up a backend by enum member or identifier string.

    Raises:
        ValueError: If the identifier is not in the catalog
    """
    try:
        backend_id = BackendId(str(backend).lower())
    except ValueError:
        valid = ", ".join(b.value for b in BackendId)
        raise ValueError(f"Unknown backend: {backend}. Use one of: {valid}") from None
    return BACKENDS[backend_id]


def list_backends(kind: Optional[str] = None) -> list[BackendDescriptor]:
    """Return descriptors in catalog order, optionally filtered by kind."""
    return [d for d in _CATALOG if kind is None or d.kind == kind]


def cli_agent_names() -> list[str]:
    return [d.id.value for d in list_backends("cli")]
