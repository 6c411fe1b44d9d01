"""Backend adapters that turn a word into a word-journey dict.

Each adapter wraps one provider: it builds the provider request around the
shared prompt, makes exactly one call, maps failures onto the error taxonomy
in ``wanderword.errors`` and pulls the JSON object out of the reply text.
"""

import copy
import logging
import time
from typing import Any, Optional, Protocol

import requests

from wanderword.errors import BackendTimeoutError, MalformedResponseError, UpstreamError
from wanderword.extract import extract_json
from wanderword.mock_data import MOCK_JOURNEYS
from wanderword.prompts import DEFAULT_LANGUAGE, SYSTEM_INSTRUCTION, build_prompt
from wanderword.providers import DEFAULT_OLLAMA_URL, BackendId, get_descriptor

logger = logging.getLogger(__name__)


def _json_body(response: requests.Response, source: str) -> dict[str, Any]:
    """Decode a JSON object body, raising MalformedResponseError otherwise."""
    try:
        body = response.json()
    except ValueError:
        raise MalformedResponseError(f"{source} returned a non-JSON body")
    if not isinstance(body, dict):
        raise MalformedResponseError(f"{source} returned {type(body).__name__}, expected an object")
    return body


class JourneyBackend(Protocol):
    """Protocol for backends that can trace a word."""

    def fetch(self, word: str, language: str = DEFAULT_LANGUAGE) -> dict[str, Any]:
        """Return the parsed journey JSON for ``word``."""
        ...


class GeminiApiBackend:
    """Backend using Google's Gemini API (google.genai SDK)."""

    def __init__(
        self,
        api_key: str,
        model: Optional[str] = None,
        timeout: float = 60,
        client: Any = None,
    ):
        self.api_key = api_key
        self.model = model or get_descriptor(BackendId.GEMINI_API).default_model
        self.timeout = timeout
        self._client = client

    def _get_client(self):
        """Lazy initialization of Gemini client."""
        if self._client is None:
            try:
                from google import genai
                from google.genai import types
            except ImportError:
                raise ImportError("google-genai package required: pip install google-genai")
            self._client = genai.Client(
                api_key=self.api_key,
                http_options=types.HttpOptions(timeout=int(self.timeout * 1000)),
            )
        return self._client

    def fetch(self, word: str, language: str = DEFAULT_LANGUAGE) -> dict[str, Any]:
        import httpx
        from google.genai import errors, types

        client = self._get_client()
        request_start = time.perf_counter()
        try:
            response = client.models.generate_content(
                model=self.model,
                contents=build_prompt(word, language),
                config=types.GenerateContentConfig(
                    system_instruction=SYSTEM_INSTRUCTION,
                    response_mime_type="application/json",
                ),
            )
        except httpx.TimeoutException:
            raise BackendTimeoutError(f"Gemini API request timed out after {self.timeout:.0f}s")
        except errors.APIError as e:
            raise UpstreamError(e.message or "Gemini API error", status=e.code)
        except httpx.HTTPError as e:
            raise UpstreamError(f"Cannot reach Gemini API: {e}")
        request_time = (time.perf_counter() - request_start) * 1000

        logger.info(f"[GEMINI-API] API: {request_time:.0f}ms, model: {self.model}")
        try:
            text = response.text
        except (AttributeError, ValueError):
            text = ""
        return extract_json(text, "Gemini API")


class OpenAIBackend:
    """Backend using the OpenAI chat completions API."""

    def __init__(
        self,
        api_key: str,
        model: Optional[str] = None,
        timeout: float = 60,
        base_url: Optional[str] = None,
        client: Any = None,
    ):
        self.api_key = api_key
        self.model = model or get_descriptor(BackendId.OPENAI_API).default_model
        self.timeout = timeout
        self.base_url = base_url
        self._client = client

    def _get_client(self):
        """Lazy init of OpenAI client. Retries are off: one call per lookup."""
        if self._client is None:
            try:
                from openai import OpenAI
            except ImportError:
                raise ImportError("openai package required: pip install openai")
            self._client = OpenAI(
                api_key=self.api_key,
                base_url=self.base_url or None,
                timeout=self.timeout,
                max_retries=0,
            )
        return self._client

    def fetch(self, word: str, language: str = DEFAULT_LANGUAGE) -> dict[str, Any]:
        import openai

        client = self._get_client()
        request_start = time.perf_counter()
        try:
            response = client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_INSTRUCTION},
                    {"role": "user", "content": build_prompt(word, language)},
                ],
                response_format={"type": "json_object"},
            )
        except openai.APITimeoutError:
            raise BackendTimeoutError(f"OpenAI API request timed out after {self.timeout:.0f}s")
        except openai.APIStatusError as e:
            raise UpstreamError(e.message or "OpenAI API error", status=e.status_code)
        except openai.APIConnectionError as e:
            raise UpstreamError(f"Cannot reach OpenAI API: {e}")
        request_time = (time.perf_counter() - request_start) * 1000

        usage = getattr(response, "usage", None)
        tokens_info = ""
        if usage:
            tokens_info = f", in={usage.prompt_tokens}, out={usage.completion_tokens}"
        logger.info(f"[OPENAI] API: {request_time:.0f}ms, model: {self.model}{tokens_info}")

        if not response.choices:
            raise MalformedResponseError("OpenAI API returned no choices")
        return extract_json(response.choices[0].message.content, "OpenAI API")


class AnthropicBackend:
    """Backend using Anthropic's Messages API."""

    def __init__(
        self,
        api_key: str,
        model: Optional[str] = None,
        timeout: float = 60,
        client: Any = None,
    ):
        self.api_key = api_key
        self.model = model or get_descriptor(BackendId.ANTHROPIC_API).default_model
        self.timeout = timeout
        self._client = client

    def _get_client(self):
        """Lazy initialization of Anthropic client."""
        if self._client is None:
            try:
                import anthropic
            except ImportError:
                raise ImportError("anthropic package required: pip install anthropic")
            self._client = anthropic.Anthropic(
                api_key=self.api_key,
                timeout=self.timeout,
                max_retries=0,
            )
        return self._client

    def fetch(self, word: str, language: str = DEFAULT_LANGUAGE) -> dict[str, Any]:
        import anthropic

        client = self._get_client()
        request_start = time.perf_counter()
        try:
            response = client.messages.create(
                model=self.model,
                max_tokens=4096,
                system=SYSTEM_INSTRUCTION,
                messages=[{"role": "user", "content": build_prompt(word, language)}],
            )
        except anthropic.APITimeoutError:
            raise BackendTimeoutError(f"Anthropic API request timed out after {self.timeout:.0f}s")
        except anthropic.APIStatusError as e:
            raise UpstreamError(e.message or "Anthropic API error", status=e.status_code)
        except anthropic.APIConnectionError as e:
            raise UpstreamError(f"Cannot reach Anthropic API: {e}")
        request_time = (time.perf_counter() - request_start) * 1000

        logger.info(f"[ANTHROPIC] API: {request_time:.0f}ms, model: {self.model}")
        text = "".join(
            block.text for block in response.content if getattr(block, "type", None) == "text"
        )
        return extract_json(text, "Anthropic API")


class OllamaBackend:
    """Backend using a local Ollama server."""

    def __init__(
        self,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: float = 60,
    ):
        """Initialize Ollama backend.

        Args:
            model: The Ollama model to use (default: llama3)
            base_url: Ollama server URL (default: localhost:11434)
            timeout: Request timeout in seconds
        """
        self.model = model or get_descriptor(BackendId.OLLAMA).default_model
        self.base_url = (base_url or DEFAULT_OLLAMA_URL).rstrip("/")
        self.timeout = timeout

    def fetch(self, word: str, language: str = DEFAULT_LANGUAGE) -> dict[str, Any]:
        try:
            response = requests.post(
                f"{self.base_url}/api/generate",
                json={
                    "model": self.model,
                    "prompt": build_prompt(word, language),
                    "system": SYSTEM_INSTRUCTION,
                    "stream": False,
                    "format": "json",
                },
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout:
            raise BackendTimeoutError("Ollama request timed out")
        except requests.exceptions.ConnectionError:
            raise UpstreamError(
                f"Cannot connect to Ollama at {self.base_url}. Is it running? Start with: ollama serve"
            )

        if response.status_code == 404:
            raise UpstreamError(
                f"Model '{self.model}' not found. Run: ollama pull {self.model}", status=404
            )
        if not response.ok:
            raise UpstreamError(
                f"Ollama error: {response.status_code} {response.reason}",
                status=response.status_code,
            )

        logger.info(f"[OLLAMA] model: {self.model}, {response.elapsed.total_seconds():.1f}s")
        text = _json_body(response, "Ollama").get("response")
        return extract_json(text, "Ollama")


class CliAgentBackend:
    """Backend that runs a local agent CLI through the relay server.

    Browser and CLI callers cannot spawn the agent tools themselves, so the
    request goes to the relay's /backend-call route, which does.
    """

    # Extra seconds on top of the agent timeout; the relay itself allows +30s
    REQUEST_GRACE_S = 40

    def __init__(self, agent: str, relay_url: str = "http://localhost:3001", timeout: float = 60):
        self.agent = agent
        self.relay_url = relay_url.rstrip("/")
        self.timeout = timeout

    def fetch(self, word: str, language: str = DEFAULT_LANGUAGE) -> dict[str, Any]:
        try:
            response = requests.post(
                f"{self.relay_url}/backend-call",
                json={
                    "model": self.agent,
                    "prompt": build_prompt(word, language),
                    "timeout": self.timeout,
                },
                timeout=self.timeout + self.REQUEST_GRACE_S,
            )
        except requests.exceptions.Timeout:
            raise BackendTimeoutError(f"{self.agent} CLI request timed out")
        except requests.exceptions.ConnectionError:
            raise UpstreamError(
                f"Cannot reach the relay at {self.relay_url}. Start it with: wanderword-relay"
            )

        if not response.ok:
            try:
                body = response.json()
            except ValueError:
                body = None
            detail = (body.get("error") if isinstance(body, dict) else None) or response.reason
            if response.status_code == 504:
                raise BackendTimeoutError(f"{self.agent} CLI timed out: {detail}")
            raise UpstreamError(f"CLI agent error: {detail}", status=response.status_code)

        output = _json_body(response, "Relay").get("output")
        if not isinstance(output, str):
            raise MalformedResponseError(f"Relay returned no output for {self.agent} CLI")
        logger.info(f"[CLI] agent: {self.agent}, {len(output)} chars")
        return extract_json(output, f"{self.agent} CLI")


class MockBackend:
    """Canned journeys for a few words, for demos and offline use."""

    def __init__(self, delay: float = 1.5):
        self.delay = delay

    def fetch(self, word: str, language: str = DEFAULT_LANGUAGE) -> dict[str, Any]:
        if self.delay > 0:
            time.sleep(self.delay)

        data = MOCK_JOURNEYS.get(word.strip().lower())
        if data is None:
            available = ", ".join(MOCK_JOURNEYS)
            raise UpstreamError(
                f'Mock data not available for "{word}". Use a real AI provider or try: {available}'
            )
        return copy.deepcopy(data)
