"""
Response Normalizer — Turns gateway output into a displayable AiResult.

This is the terminal stage of the pipeline and never raises:
  - GatewayError           → intent-specific apology text, no sources
  - empty / missing text   → intent-specific "no results" text
  - grounding chunks       → GroundingSource list (web chunks only)

Sources are passed through as-is: no URI validation, no de-duplication.
"""
from dataclasses import dataclass, field

from core.gateway import GatewayError, ProviderResponse


# ──────────────────────────────────────────────
# Result Data Structures
# ──────────────────────────────────────────────
@dataclass(frozen=True)
class GroundingSource:
    """A web page Gemini cited while answering."""
    title: str
    uri: str


@dataclass
class AiResult:
    """What a panel displays: markdown text plus cited sources."""
    text: str
    sources: list[GroundingSource] = field(default_factory=list)


@dataclass(frozen=True)
class Intent:
    """Fixed user-facing strings for one query intent."""
    name: str
    empty_text: str            # Gemini answered with no text
    failure_text: str          # The call itself failed
    source_placeholder: str    # Title for a web chunk without one


EXPLAIN = Intent(
    name="explain",
    empty_text="No info available.",
    failure_text="Error processing request.",
    source_placeholder="Web Source",
)
PAPERS = Intent(
    name="papers",
    empty_text="No specific high-quality papers found matching these criteria.",
    failure_text="Unable to fetch papers. Please check your API key.",
    source_placeholder="Source",
)
VARIABLES = Intent(
    name="variables",
    empty_text="No variables found.",
    failure_text="Unable to search variables right now.",
    source_placeholder="DST Documentation",
)


# ──────────────────────────────────────────────
# Normalization
# ──────────────────────────────────────────────
def extract_sources(response: ProviderResponse, intent: Intent) -> list[GroundingSource]:
    """Collect web references from the first candidate's grounding chunks."""
    if not response.candidates:
        return []

    metadata = response.candidates[0].grounding_metadata
    if metadata is None or metadata.grounding_chunks is None:
        return []

    sources = []
    for chunk in metadata.grounding_chunks:
        if chunk.web is None:
            continue
        title = chunk.web.title if chunk.web.title else intent.source_placeholder
        uri = chunk.web.uri if chunk.web.uri else "#"
        sources.append(GroundingSource(title=title, uri=uri))
    return sources


def normalize(outcome: ProviderResponse | GatewayError, intent: Intent) -> AiResult:
    """
    Convert a gateway outcome into an AiResult.

    Args:
        outcome: ProviderResponse on success, or the GatewayError raised
        intent: Which query intent produced it (selects fallback strings)

    Returns:
        AiResult with non-empty text and a (possibly empty) source list
    """
    if isinstance(outcome, GatewayError):
        print(f"   ⚠️  Gemini API error during '{intent.name}' ({outcome})")
        return AiResult(text=intent.failure_text, sources=[])

    text = outcome.text if outcome.text else intent.empty_text
    return AiResult(text=text, sources=extract_sources(outcome, intent))
