"""
Test Suite — Research panels and the registry catalog.

Usage:
  pytest test_panels.py
"""
import asyncio
import json
import threading

import pytest

import catalog
from catalog import Category, filter_registries, get_registry, load_registries
from core.assistant import ResearchAssistant
from core.gateway import (
    Candidate,
    GroundingChunk,
    GroundingMetadata,
    ProviderResponse,
    RequestFailed,
    WebReference,
)
from panels import (
    LiteratureFinderPanel,
    PanelInputError,
    RegistryAssistantPanel,
    VariableExplorerPanel,
)


class FakeGateway:
    def __init__(self, response=None, error=None):
        self.response = response or ProviderResponse(text="answer")
        self.error = error
        self.prompts = []

    def invoke(self, prompt):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.response


class GatedGateway:
    """Each prompt blocks until its event is set, so tests control completion order."""

    def __init__(self):
        self.gates = {}

    def gate(self, marker):
        self.gates[marker] = threading.Event()
        return self.gates[marker]

    def invoke(self, prompt):
        for marker, event in self.gates.items():
            if marker in prompt:
                event.wait(timeout=5)
                return ProviderResponse(text=f"answer for {marker}")
        return ProviderResponse(text="ungated")


def sources_response(*pairs):
    chunks = [GroundingChunk(web=WebReference(title=t, uri=u)) for t, u in pairs]
    return ProviderResponse(
        text="found",
        candidates=[Candidate(grounding_metadata=GroundingMetadata(grounding_chunks=chunks))],
    )


# ══════════════════════════════════════════════
# Catalog
# ══════════════════════════════════════════════
def test_catalog_loads_bundled_registries():
    registries = load_registries()
    assert len(registries) == 9
    assert load_registries() is registries
    codes = [r.code for r in registries]
    assert codes[:3] == ["BEF", "IDAN", "SOC_MODULE"]


def test_catalog_record_shape():
    bef = get_registry("1")
    assert bef.category is Category.POPULATION
    assert bef.key_variables[0].name == "CPR_NR"
    assert bef.key_variables[0].type is None
    assert bef.papers[0].year == "2005"
    assert bef.to_dict()["category"] == "Population"
    with pytest.raises(Exception):
        bef.code = "XXX"


def test_catalog_lookup_missing():
    assert get_registry("does-not-exist") is None


def test_filter_registries():
    assert [r.code for r in filter_registries("income")] == ["SOC_MODULE", "IND"]
    assert [r.code for r in filter_registries("LPR")] == ["LPR"]
    assert [r.code for r in filter_registries("labor market")] == ["IDAN", "DREAM"]
    assert len(filter_registries("")) == 9
    assert filter_registries("nothing matches this") == []


def test_load_registries_from_path(tmp_path):
    path = tmp_path / "registries.json"
    path.write_text(json.dumps([{
        "id": "x", "code": "X", "name": "Test", "category": "Business",
        "description": "d", "documentation_url": "https://example.org",
        "key_variables": [{"name": "V", "description": "v", "period": "2000-2020"}],
    }]))
    (record,) = load_registries(str(path))
    assert record.category is Category.BUSINESS
    assert record.key_variables[0].period == "2000-2020"
    assert record.papers == ()
    assert catalog.load_registries() is not None   # cached default unaffected


# ══════════════════════════════════════════════
# Registry Assistant
# ══════════════════════════════════════════════
def test_assistant_panel_rejects_empty_question():
    gateway = FakeGateway()
    panel = RegistryAssistantPanel(ResearchAssistant(gateway), "IND", "Income Statistics")
    with pytest.raises(PanelInputError):
        asyncio.run(panel.ask("   "))
    assert gateway.prompts == []
    assert panel.result is None


def test_assistant_panel_stores_and_renders_result():
    gateway = FakeGateway(response=sources_response(
        ("A very long source title that exceeds thirty characters", "https://dst.dk/a"),
        ("Short", "https://dst.dk/b"),
    ))
    panel = RegistryAssistantPanel(ResearchAssistant(gateway), "IND", "Income Statistics")

    asyncio.run(panel.ask("Does IND include self-employment?"))

    view = panel.view()
    assert view["loading"] is False
    assert view["registry_code"] == "IND"
    assert "self-employment" in view["placeholder"]
    assert view["result"]["text"] == "found"
    assert view["result"]["sources"] == [
        {"title": "A very long source title that ...", "uri": "https://dst.dk/a"},
        {"title": "Short", "uri": "https://dst.dk/b"},
    ]


def test_assistant_panel_failure_is_displayable():
    gateway = FakeGateway(error=RequestFailed(TimeoutError("slow")))
    panel = RegistryAssistantPanel(ResearchAssistant(gateway), "IND", "Income Statistics")
    result = asyncio.run(panel.ask("q"))
    assert result.text == "Error processing request."
    assert panel.view()["result"] == {"text": "Error processing request.", "sources": []}


# ══════════════════════════════════════════════
# Literature Finder
# ══════════════════════════════════════════════
def test_literature_panel_default_registry():
    gateway = FakeGateway()
    panel = LiteratureFinderPanel(ResearchAssistant(gateway))
    asyncio.run(panel.search(topic="labor supply"))

    prompt = gateway.prompts[0]
    assert "Administrative Data" in prompt
    assert "labor supply" in prompt
    assert panel.is_global
    assert panel.title == "Academic Literature Search"


def test_literature_panel_registry_precedence():
    panel = LiteratureFinderPanel(ResearchAssistant(FakeGateway()), "Student Register")
    assert panel.effective_registry("Ignored") == "Student Register"
    assert panel.title == "Literature Review"

    global_panel = LiteratureFinderPanel(ResearchAssistant(FakeGateway()))
    assert global_panel.effective_registry("Population Register") == "Population Register"
    assert global_panel.effective_registry("") == "Administrative Data"


def test_literature_panel_chips_have_favicons():
    gateway = FakeGateway(response=sources_response(
        ("NBER", "https://www.nber.org/papers/w1"),
        ("Broken", "#"),
    ))
    panel = LiteratureFinderPanel(ResearchAssistant(gateway), "IND")
    asyncio.run(panel.search("tax"))

    sources = panel.view()["result"]["sources"]
    assert sources[0]["favicon"] == "https://www.google.com/s2/favicons?domain=www.nber.org"
    assert sources[1]["favicon"] is None
    assert "aeaweb.org" in panel.view()["domains"]


def test_literature_panel_keeps_malformed_uri():
    gateway = FakeGateway(response=sources_response(("Bad", "http://[broken")))
    panel = LiteratureFinderPanel(ResearchAssistant(gateway), "IND")
    asyncio.run(panel.search("tax"))

    assert panel.view()["result"]["sources"] == [
        {"title": "Bad", "uri": "http://[broken", "favicon": None},
    ]


# ══════════════════════════════════════════════
# Variable Explorer
# ══════════════════════════════════════════════
def test_variable_panel():
    gateway = FakeGateway(response=ProviderResponse(text=None))
    panel = VariableExplorerPanel(ResearchAssistant(gateway))

    with pytest.raises(PanelInputError):
        asyncio.run(panel.search(""))

    asyncio.run(panel.search("AEL_KOMKOD"))
    view = panel.view()
    assert view["result"]["text"] == "No variables found."
    assert view["quick_searches"] == ["AEL_KOMKOD", "SOC_STATUS"]


# ══════════════════════════════════════════════
# Concurrency: last writer wins
# ══════════════════════════════════════════════
def test_last_finished_query_owns_result_slot():
    gateway = GatedGateway()
    first = gateway.gate("FIRST")
    second = gateway.gate("SECOND")
    panel = VariableExplorerPanel(ResearchAssistant(gateway))

    async def scenario():
        task1 = asyncio.create_task(panel.search("FIRST"))
        task2 = asyncio.create_task(panel.search("SECOND"))
        await asyncio.sleep(0.05)
        assert panel.loading

        second.set()
        await task2
        assert panel.result.text == "answer for SECOND"
        assert panel.loading           # first query still in flight

        first.set()
        await task1

    asyncio.run(scenario())
    assert panel.result.text == "answer for FIRST"
    assert not panel.loading


def test_panels_do_not_share_state():
    assistant = ResearchAssistant(FakeGateway())
    a = VariableExplorerPanel(assistant)
    b = VariableExplorerPanel(assistant)
    asyncio.run(a.search("KOEN"))
    assert a.result is not None
    assert b.result is None
