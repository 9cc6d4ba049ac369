"""
Research Assistant — Query Builder → Gateway → Normalizer, per intent.

Design Principles:
  - The gateway is injected (tests pass a fake; the server passes GeminiGateway)
  - Each call is independent: build prompt, one round trip, normalize
  - Never raises for gateway failures; the result is always displayable
"""
from typing import Protocol

from core.gateway import GatewayError, ProviderResponse
from core.normalizer import AiResult, Intent, EXPLAIN, PAPERS, VARIABLES, normalize
from core.query_builder import (
    build_explain_prompt,
    build_paper_search_prompt,
    build_variable_search_prompt,
)


class Gateway(Protocol):
    def invoke(self, prompt: str) -> ProviderResponse: ...


class ResearchAssistant:
    """
    Runs the three research intents against one gateway.

    Usage:
        assistant = ResearchAssistant(GeminiGateway(gemini_key_manager))
        result = assistant.explain_registry("IND", "Does IND include self-employment?")
    """

    def __init__(self, gateway: Gateway):
        self.gateway = gateway

    def _run(self, prompt: str, intent: Intent) -> AiResult:
        try:
            outcome = self.gateway.invoke(prompt)
        except GatewayError as e:
            outcome = e
        return normalize(outcome, intent)

    def explain_registry(self, registry_code: str, question: str) -> AiResult:
        return self._run(build_explain_prompt(registry_code, question), EXPLAIN)

    def find_papers(self, registry_name: str, topic: str | None = None) -> AiResult:
        """`registry_name` must already have the generic default applied."""
        return self._run(build_paper_search_prompt(registry_name, topic), PAPERS)

    def search_variables(self, query: str) -> AiResult:
        return self._run(build_variable_search_prompt(query), VARIABLES)
