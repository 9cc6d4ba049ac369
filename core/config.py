"""
Core Settings — loads secrets from .env file.
Provides parsed API keys and Gemini model settings.
Separate from config.py (app constants, catalog paths) for Separation of Concerns.
"""
import os
from dotenv import load_dotenv

# Load .env from project root
load_dotenv(os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), ".env"))


class Settings:
    """Centralized settings loaded from environment variables."""

    # ──────────────────────────────────────────────
    # API Keys (parsed from comma-separated .env values)
    # ──────────────────────────────────────────────
    GEMINI_API_KEYS: list[str] = [
        k.strip() for k in os.getenv("GEMINI_API_KEYS", os.getenv("API_KEY", "")).split(",")
        if k.strip()
    ]

    # ──────────────────────────────────────────────
    # Gemini (grounded search generation)
    # ──────────────────────────────────────────────
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
    GEMINI_TEMPERATURE: float = float(os.getenv("GEMINI_TEMPERATURE", "0.3"))


# Singleton instance — import this everywhere
settings = Settings()
