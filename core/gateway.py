"""
Gemini Gateway — One grounded generation call per invoke().

Responsibilities:
  - Build a Gemini client with the next key from rotation
  - Request generation with the Google Search tool enabled
  - Convert the SDK response into ProviderResponse (explicit optional fields)

Failures are raised as GatewayError subclasses; turning them into
user-facing text is the normalizer's job.
"""
import time
from dataclasses import dataclass
from typing import Callable, Optional

from google import genai
from google.genai import types

from core.config import settings
from core.key_manager import KeyManager


# ──────────────────────────────────────────────
# Errors
# ──────────────────────────────────────────────
class GatewayError(Exception):
    """Base class for gateway failures."""


class MissingCredential(GatewayError):
    """No Gemini API key is configured."""

    def __init__(self, service_name: str = "Gemini"):
        super().__init__(f"No API key configured for {service_name} — set GEMINI_API_KEYS in .env")


class RequestFailed(GatewayError):
    """Transport error, provider error status, or unreadable response."""

    def __init__(self, cause: Exception):
        super().__init__(f"{type(cause).__name__}: {cause}")
        self.cause = cause


# ──────────────────────────────────────────────
# Provider Response (every field may be absent)
# ──────────────────────────────────────────────
@dataclass(frozen=True)
class WebReference:
    title: Optional[str] = None
    uri: Optional[str] = None


@dataclass(frozen=True)
class GroundingChunk:
    web: Optional[WebReference] = None


@dataclass(frozen=True)
class GroundingMetadata:
    grounding_chunks: Optional[list[GroundingChunk]] = None


@dataclass(frozen=True)
class Candidate:
    grounding_metadata: Optional[GroundingMetadata] = None


@dataclass(frozen=True)
class ProviderResponse:
    """The subset of a Gemini response the pipeline reads."""
    text: Optional[str] = None
    candidates: Optional[list[Candidate]] = None

    @classmethod
    def from_genai(cls, response: types.GenerateContentResponse) -> "ProviderResponse":
        """Copy the fields we need out of the SDK response object."""
        candidates = None
        if response.candidates is not None:
            candidates = [_candidate_from_genai(c) for c in response.candidates]
        return cls(text=response.text, candidates=candidates)


def _candidate_from_genai(candidate) -> Candidate:
    metadata = candidate.grounding_metadata
    if metadata is None:
        return Candidate()

    chunks = None
    if metadata.grounding_chunks is not None:
        chunks = []
        for chunk in metadata.grounding_chunks:
            web = None
            if chunk.web is not None:
                web = WebReference(title=chunk.web.title, uri=chunk.web.uri)
            chunks.append(GroundingChunk(web=web))
    return Candidate(grounding_metadata=GroundingMetadata(grounding_chunks=chunks))


# ──────────────────────────────────────────────
# Gateway
# ──────────────────────────────────────────────
class GeminiGateway:
    """
    Sends a prompt to Gemini with Google Search grounding.

    Usage:
        gateway = GeminiGateway(gemini_key_manager)
        response = gateway.invoke(prompt)   # ProviderResponse or GatewayError

    A fresh client is built for every call; nothing but the key rotation
    cursor survives between calls.
    """

    def __init__(
        self,
        key_manager: KeyManager,
        model: str = None,
        temperature: float = None,
        client_factory: Callable[..., genai.Client] = genai.Client,
    ):
        self.key_manager = key_manager
        self.model = model or settings.GEMINI_MODEL
        self.temperature = settings.GEMINI_TEMPERATURE if temperature is None else temperature
        self.client_factory = client_factory

    def _get_client(self) -> genai.Client:
        """Create a Gemini client with the next API key from rotation."""
        api_key = self.key_manager.get_key()
        if not api_key:
            raise MissingCredential(self.key_manager.service_name)
        return self.client_factory(api_key=api_key)

    def _generation_config(self) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            tools=[types.Tool(google_search=types.GoogleSearch())],
            temperature=self.temperature,
        )

    def invoke(self, prompt: str) -> ProviderResponse:
        """
        Run one grounded generation call.

        Args:
            prompt: Complete prompt from core.query_builder

        Returns:
            ProviderResponse with text and grounding chunks (any may be None)

        Raises:
            MissingCredential: no key configured (no network call made)
            RequestFailed: any transport / provider / parsing failure
        """
        client = self._get_client()

        t0 = time.time()
        try:
            response = client.models.generate_content(
                model=self.model,
                contents=prompt,
                config=self._generation_config(),
            )
            result = ProviderResponse.from_genai(response)
        except Exception as e:
            raise RequestFailed(e) from e

        print(f"   🌐 Gemini grounded call ({self.model}) finished in {time.time() - t0:.2f}s")
        return result
