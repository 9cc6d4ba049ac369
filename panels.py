"""
Research Panels — Registry assistant, literature finder, variable explorer.

Each panel:
  1. Validates its own input (empty question → PanelInputError)
  2. Runs one ResearchAssistant call as an asyncio task (blocking Gemini
     call offloaded with asyncio.to_thread)
  3. Stores the AiResult in its single result slot
  4. Renders a view dict (markdown text + source chips) for the web UI

Concurrent submits on one panel are not coalesced or cancelled: whichever
finishes last owns the result slot.
"""
import asyncio
from urllib.parse import urlparse

import config
from core.assistant import ResearchAssistant
from core.normalizer import AiResult, GroundingSource
from core.query_builder import PAPER_DOMAINS


class PanelInputError(ValueError):
    """Raised when a panel is submitted with input it cannot search for."""


class Panel:
    """Base panel: result slot, loading state, task runner."""

    title = ""

    def __init__(self, assistant: ResearchAssistant):
        self.assistant = assistant
        self.result: AiResult | None = None
        self._in_flight = 0

    @property
    def loading(self) -> bool:
        return self._in_flight > 0

    async def _run(self, fn, *args) -> AiResult:
        self._in_flight += 1
        try:
            result = await asyncio.to_thread(fn, *args)
            self.result = result
            return result
        finally:
            self._in_flight -= 1

    def _chip(self, source: GroundingSource) -> dict:
        return {"title": source.title, "uri": source.uri}

    def view(self) -> dict:
        view = {"title": self.title, "loading": self.loading, "result": None}
        if self.result is not None:
            view["result"] = {
                "text": self.result.text,
                "sources": [self._chip(s) for s in self.result.sources],
            }
        return view


# ──────────────────────────────────────────────
# Registry Assistant
# ──────────────────────────────────────────────
class RegistryAssistantPanel(Panel):
    """Free-form questions about one registry (shown on the detail page)."""

    title = "AI Research Assistant"

    def __init__(self, assistant: ResearchAssistant, registry_code: str, registry_name: str):
        super().__init__(assistant)
        self.registry_code = registry_code
        self.registry_name = registry_name

    @property
    def placeholder(self) -> str:
        return f'e.g., "Does {self.registry_code} include data on self-employment?"'

    async def ask(self, question: str) -> AiResult:
        if not question.strip():
            raise PanelInputError("Please enter a question.")
        return await self._run(self.assistant.explain_registry, self.registry_code, question)

    def _chip(self, source: GroundingSource) -> dict:
        title = source.title
        if len(title) > config.CHIP_TITLE_MAX:
            title = title[:config.CHIP_TITLE_MAX] + "..."
        return {"title": title, "uri": source.uri}

    def view(self) -> dict:
        view = super().view()
        view.update({
            "registry_code": self.registry_code,
            "registry_name": self.registry_name,
            "placeholder": self.placeholder,
        })
        return view


# ──────────────────────────────────────────────
# Literature Finder
# ──────────────────────────────────────────────
class LiteratureFinderPanel(Panel):
    """
    Paper search, either bound to one registry (detail page) or global
    (literature page, with an optional free-text dataset field).
    """

    def __init__(self, assistant: ResearchAssistant, registry_name: str | None = None):
        super().__init__(assistant)
        self.registry_name = registry_name

    @property
    def is_global(self) -> bool:
        return not self.registry_name

    @property
    def title(self) -> str:
        return "Academic Literature Search" if self.is_global else "Literature Review"

    def effective_registry(self, custom_registry: str = "") -> str:
        """Bound registry, else the typed dataset, else the generic label."""
        return self.registry_name or custom_registry or config.DEFAULT_REGISTRY_LABEL

    async def search(self, topic: str = "", custom_registry: str = "") -> AiResult:
        registry = self.effective_registry(custom_registry)
        return await self._run(self.assistant.find_papers, registry, topic or None)

    def _chip(self, source: GroundingSource) -> dict:
        try:
            host = urlparse(source.uri).hostname
        except ValueError:
            host = None
        return {
            "title": source.title,
            "uri": source.uri,
            "favicon": config.FAVICON_URL.format(host=host) if host else None,
        }

    def view(self) -> dict:
        view = super().view()
        view.update({
            "is_global": self.is_global,
            "registry_name": self.registry_name,
            "domains": list(PAPER_DOMAINS),
        })
        return view


# ──────────────────────────────────────────────
# Variable Explorer
# ──────────────────────────────────────────────
class VariableExplorerPanel(Panel):
    """Deep search of DST variable documentation by code or concept."""

    title = "Variable Browser"

    async def search(self, query: str) -> AiResult:
        if not query.strip():
            raise PanelInputError("Please enter a variable code or concept.")
        return await self._run(self.assistant.search_variables, query)

    def view(self) -> dict:
        view = super().view()
        view["quick_searches"] = list(config.VARIABLE_QUICK_SEARCHES)
        return view
