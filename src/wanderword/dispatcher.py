"""Route a word-journey request to exactly one backend adapter.

There is no retry and no fallback between backends: the selected adapter's
result or error is what the caller gets.
"""

import logging
import os
import time
from dataclasses import dataclass
from typing import Any, Optional, Union

from wanderword.backends import (
    AnthropicBackend,
    CliAgentBackend,
    GeminiApiBackend,
    JourneyBackend,
    MockBackend,
    OllamaBackend,
    OpenAIBackend,
)
from wanderword.errors import MalformedResponseError, MissingCredentialError
from wanderword.journey import validate_journey
from wanderword.prompts import DEFAULT_LANGUAGE
from wanderword.providers import BackendId, get_descriptor
from wanderword.settings import Settings

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 60


@dataclass(frozen=True)
class JourneyRequest:
    """A normalized lookup request.

    ``base_url`` overrides the endpoint of the selected backend: the Ollama
    server, the relay for CLI agents, or an OpenAI-compatible API.
    """

    word: str
    backend: BackendId = BackendId.MOCK
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    model: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT
    language: str = DEFAULT_LANGUAGE
    mock_delay: float = 1.5


def check_credentials(request: JourneyRequest) -> None:
    """Raise MissingCredentialError if the backend needs a key that is absent."""
    descriptor = get_descriptor(request.backend)
    if descriptor.needs_key and not (request.api_key or "").strip():
        raise MissingCredentialError(f"API key required for {descriptor.label}")


def create_backend(request: JourneyRequest) -> JourneyBackend:
    """Factory that builds the adapter for ``request.backend``.

    Raises:
        ValueError: If the backend is not recognized
    """
    backend_id = get_descriptor(request.backend).id

    if backend_id == BackendId.GEMINI_API:
        return GeminiApiBackend(request.api_key, model=request.model, timeout=request.timeout)
    elif backend_id == BackendId.OPENAI_API:
        return OpenAIBackend(
            request.api_key,
            model=request.model,
            timeout=request.timeout,
            base_url=request.base_url,
        )
    elif backend_id == BackendId.ANTHROPIC_API:
        return AnthropicBackend(request.api_key, model=request.model, timeout=request.timeout)
    elif backend_id == BackendId.OLLAMA:
        return OllamaBackend(model=request.model, base_url=request.base_url, timeout=request.timeout)
    elif backend_id in (BackendId.GEMINI, BackendId.CLAUDE, BackendId.CODEX, BackendId.QWEN):
        relay_url = request.base_url or os.environ.get(
            "WANDERWORD_RELAY_URL", "http://localhost:3001"
        )
        return CliAgentBackend(backend_id.value, relay_url=relay_url, timeout=request.timeout)
    return MockBackend(delay=request.mock_delay)


def fetch_word_journey(
    request: JourneyRequest,
    strict: bool = False,
    backend: Optional[JourneyBackend] = None,
) -> dict[str, Any]:
    """Trace ``request.word`` with the selected backend.

    Args:
        request: The lookup request
        strict: If True, reject results that do not match the journey shape
        backend: Adapter to use instead of the one built by create_backend

    Returns:
        The parsed journey JSON

    Raises:
        MissingCredentialError: Key required but absent (no call is made)
        UpstreamError: Backend returned a failure status
        MalformedResponseError: No JSON in the reply, or shape rejected in strict mode
        BackendTimeoutError: Wall-clock timeout exceeded
    """
    check_credentials(request)
    if backend is None:
        backend = create_backend(request)

    logger.info(f"Tracing '{request.word}' via {request.backend} (timeout={request.timeout}s)")
    start = time.perf_counter()
    data = backend.fetch(request.word, request.language)
    elapsed = time.perf_counter() - start
    logger.info(f"Got journey for '{request.word}' from {request.backend} in {elapsed:.1f}s")

    if strict:
        problems = validate_journey(data)
        if problems:
            raise MalformedResponseError("Unexpected journey shape: " + "; ".join(problems))
    return data


def resolve_request(
    word: str,
    settings: Settings,
    backend: Optional[Union[BackendId, str]] = None,
    api_key: Optional[str] = None,
    base_url: Optional[str] = None,
    model: Optional[str] = None,
    timeout: Optional[float] = None,
    language: Optional[str] = None,
) -> JourneyRequest:
    """Build a request from settings, with explicit arguments taking precedence."""
    backend_id = get_descriptor(backend or settings.get("backend")).id

    if base_url is None:
        if backend_id == BackendId.OLLAMA:
            base_url = settings.get("ollama_url")
        elif get_descriptor(backend_id).kind == "cli":
            base_url = settings.resolve("relay_url")
    if model is None and backend_id == BackendId.OLLAMA:
        model = settings.get("ollama_model")

    return JourneyRequest(
        word=word.strip(),
        backend=backend_id,
        api_key=api_key or settings.api_key_for(backend_id),
        base_url=base_url,
        model=model,
        timeout=float(timeout) if timeout is not None else settings.get_float("timeout"),
        language=language or settings.get("language"),
        mock_delay=settings.get_float("mock_delay"),
    )
