"""
Web Server — FastAPI backend for the DanData Hub web UI.

Serves the page shell and provides the catalog and panel endpoints.
Panel queries answer over SSE (Server-Sent Events) so the UI can show a
loading state while Gemini searches; the answer itself arrives in one piece.

Endpoints:
  - GET  /api/registries[?search=]   catalog cards
  - GET  /api/registries/{id}        full registry record
  - GET  /api/resources              official links + quick searches
  - POST /api/explain                { registry_id, question }
  - POST /api/papers                 { registry_name?, topic? }
  - POST /api/variables              { query }

Usage:
  python3 web_server.py
  → Open http://localhost:8000
"""
import json
import time
import uvicorn
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.staticfiles import StaticFiles
from fastapi.responses import FileResponse
from sse_starlette.sse import EventSourceResponse

import config
import catalog
from core.assistant import ResearchAssistant
from core.gateway import GeminiGateway
from core.key_manager import gemini_key_manager
from core.config import settings
from panels import (
    LiteratureFinderPanel,
    Panel,
    PanelInputError,
    RegistryAssistantPanel,
    VariableExplorerPanel,
)

# ──────────────────────────────────────────────
# Initialize
# ──────────────────────────────────────────────
app = FastAPI(title="DanData Hub", version="1.0")

# Built once at startup; a missing key surfaces on the first query, not here
assistant = None


@app.on_event("startup")
async def startup():
    global assistant
    catalog.load_registries()
    assistant = ResearchAssistant(GeminiGateway(gemini_key_manager))
    print(f"🚀 DanData Hub ready! (model: {settings.GEMINI_MODEL})")


def get_assistant() -> ResearchAssistant:
    if assistant is None:
        raise HTTPException(status_code=503, detail="Assistant not initialized")
    return assistant


# ──────────────────────────────────────────────
# Catalog Endpoints
# ──────────────────────────────────────────────
@app.get("/api/registries")
async def list_registries(search: str = ""):
    return {"registries": [r.summary() for r in catalog.filter_registries(search)]}


@app.get("/api/registries/{registry_id}")
async def registry_detail(registry_id: str):
    registry = catalog.get_registry(registry_id)
    if registry is None:
        raise HTTPException(status_code=404, detail="Registry not found")
    return registry.to_dict()


@app.get("/api/resources")
async def resources():
    return {
        "links": config.OFFICIAL_LINKS,
        "variable_quick_searches": config.VARIABLE_QUICK_SEARCHES,
    }


# ──────────────────────────────────────────────
# Panel Endpoints — SSE
# ──────────────────────────────────────────────
@app.post("/api/explain")
async def explain_endpoint(request: Request, assistant: ResearchAssistant = Depends(get_assistant)):
    """Registry assistant. Accepts JSON { registry_id, question }."""
    body = await request.json()
    question = (body.get("question") or "").strip()
    registry = catalog.get_registry(body.get("registry_id") or "")

    if registry is None:
        raise HTTPException(status_code=404, detail="Registry not found")
    if not question:
        return {"error": "Please enter a question."}

    panel = RegistryAssistantPanel(assistant, registry.code, registry.name)
    return EventSourceResponse(_panel_event_generator(panel, panel.ask, question))


@app.post("/api/papers")
async def papers_endpoint(request: Request, assistant: ResearchAssistant = Depends(get_assistant)):
    """Literature finder. Accepts JSON { registry_name, custom_registry, topic }."""
    body = await request.json()
    topic = (body.get("topic") or "").strip()
    custom_registry = (body.get("custom_registry") or "").strip()

    panel = LiteratureFinderPanel(assistant, body.get("registry_name") or None)
    return EventSourceResponse(_panel_event_generator(panel, panel.search, topic, custom_registry))


@app.post("/api/variables")
async def variables_endpoint(request: Request, assistant: ResearchAssistant = Depends(get_assistant)):
    """Variable explorer. Accepts JSON { query }."""
    body = await request.json()
    query = (body.get("query") or "").strip()

    if not query:
        return {"error": "Please enter a variable code or concept."}

    panel = VariableExplorerPanel(assistant)
    return EventSourceResponse(_panel_event_generator(panel, panel.search, query))


async def _panel_event_generator(panel: Panel, action, *args):
    """
    Run one panel action and stream its progress.

    SSE events: status (loading), result (panel view) or error, done
    """
    t0 = time.time()
    yield {"event": "status", "data": json.dumps({"stage": "search", "message": "🔍 Searching with Gemini..."})}

    try:
        await action(*args)
    except PanelInputError as e:
        yield {"event": "error", "data": json.dumps({"error": str(e)})}
    else:
        yield {"event": "result", "data": json.dumps(panel.view(), ensure_ascii=False)}

    yield {"event": "done", "data": json.dumps({"total_time": round(time.time() - t0, 2)})}


# ──────────────────────────────────────────────
# Serve Frontend
# ──────────────────────────────────────────────
@app.get("/")
async def serve_index():
    return FileResponse(f"{config.WEB_DIR}/index.html")

app.mount("/static", StaticFiles(directory=config.WEB_DIR), name="static")


# ──────────────────────────────────────────────
# Run
# ──────────────────────────────────────────────
if __name__ == "__main__":
    uvicorn.run("web_server:app", host=config.HOST, port=config.PORT, reload=False)
