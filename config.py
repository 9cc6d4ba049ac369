"""
Central configuration for DanData Hub.
Edit this file to change paths, server settings, or panel display options.
Secrets and model settings live in core/config.py (loaded from .env).
"""
import os

# ──────────────────────────────────────────────
# Paths
# ──────────────────────────────────────────────
BASE_DIR = os.path.dirname(os.path.abspath(__file__))
DATA_DIR = os.path.join(BASE_DIR, "data")
WEB_DIR = os.path.join(BASE_DIR, "web")
REGISTRIES_FILE = os.path.join(DATA_DIR, "registries.json")

# ──────────────────────────────────────────────
# Web Server
# ──────────────────────────────────────────────
HOST = os.getenv("DANDATA_HOST", "0.0.0.0")
PORT = int(os.getenv("DANDATA_PORT", "8000"))

# ──────────────────────────────────────────────
# Panels
# ──────────────────────────────────────────────
# Literature search falls back to this when no dataset is named
from core.query_builder import DEFAULT_REGISTRY_LABEL
CHIP_TITLE_MAX = 30          # Registry assistant truncates source titles to this
FAVICON_URL = "https://www.google.com/s2/favicons?domain={host}"
VARIABLE_QUICK_SEARCHES = ["AEL_KOMKOD", "SOC_STATUS"]

# ──────────────────────────────────────────────
# Official resources (dashboard + resources page)
# ──────────────────────────────────────────────
OFFICIAL_LINKS = [
    {
        "title": "DST Registry Overview",
        "url": "https://www.dst.dk/extranet/forskningvariabellister/Oversigt%20over%20registre.html",
        "note": "Complete list of variables.",
    },
    {
        "title": "Research Services",
        "url": "https://www.dst.dk/en/TilSalg/Forskningsservice",
        "note": "How to apply for access.",
    },
    {
        "title": "Example Economics Paper",
        "url": "https://www.aeaweb.org/articles?id=10.1257/app.20170604",
        "note": "\"Childhood exposure to crime\" (AEA).",
    },
]
