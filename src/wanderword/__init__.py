"""WanderWord: trace a word's etymological journey across the map."""

from wanderword.backends import (
    AnthropicBackend,
    CliAgentBackend,
    GeminiApiBackend,
    JourneyBackend,
    MockBackend,
    OllamaBackend,
    OpenAIBackend,
)
from wanderword.dispatcher import JourneyRequest, create_backend, fetch_word_journey, resolve_request
from wanderword.errors import (
    BackendTimeoutError,
    JourneyError,
    MalformedResponseError,
    MissingCredentialError,
    UpstreamError,
)
from wanderword.extract import extract_json
from wanderword.journey import JourneyStep, Location, Origin, WordJourney, validate_journey
from wanderword.prompts import build_prompt
from wanderword.providers import BackendDescriptor, BackendId, get_descriptor, list_backends
from wanderword.settings import Settings, get_settings
from wanderword.state import AppState, update

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "BackendId",
    "BackendDescriptor",
    "get_descriptor",
    "list_backends",
    "JourneyRequest",
    "fetch_word_journey",
    "create_backend",
    "resolve_request",
    "JourneyBackend",
    "GeminiApiBackend",
    "OpenAIBackend",
    "AnthropicBackend",
    "OllamaBackend",
    "CliAgentBackend",
    "MockBackend",
    "JourneyError",
    "MissingCredentialError",
    "UpstreamError",
    "MalformedResponseError",
    "BackendTimeoutError",
    "extract_json",
    "build_prompt",
    "WordJourney",
    "JourneyStep",
    "Origin",
    "Location",
    "validate_journey",
    "Settings",
    "get_settings",
    "AppState",
    "update",
]
