"""Configuration loaded from environment variables."""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env: try package dir then project root
_base = Path(__file__).resolve().parent
for _env_path in (_base / ".env", _base.parent / ".env"):
    if load_dotenv(_env_path):
        break
load_dotenv()  # also allow process env


def _env_int(name: str, default: int) -> int:
    """Read an integer from the environment, falling back on bad values."""
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    """Read a float from the environment, falling back on bad values."""
    try:
        return float(os.getenv(name, str(default)))
    except ValueError:
        return default


# API keys – never hardcode
OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")
MODEL_NAME: str = os.getenv("MODEL_NAME", "gpt-4o")
LLM_TEMPERATURE: float = _env_float("LLM_TEMPERATURE", 0.2)

# Extracted résumé text sent to the model is truncated to this many characters
MAX_INPUT_CHARS: int = _env_int("MAX_INPUT_CHARS", 20000)

# Post-processing
MAX_BULLETS_PER_ROLE: int = _env_int("MAX_BULLETS_PER_ROLE", 7)
SQ_FT_PER_SQ_M: float = 10.764
METRIC_PROXIMITY_CHARS: int = 30

# Static USD rates for amounts written in other currencies
EUR_TO_USD: float = _env_float("EUR_TO_USD", 1.1)
GBP_TO_USD: float = _env_float("GBP_TO_USD", 1.3)

# Sessions (in-memory, per process)
SESSION_TTL_HOURS: int = _env_int("SESSION_TTL_HOURS", 24)

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# Uploads accepted by the text extractor
SUPPORTED_EXTENSIONS: tuple = (".pdf", ".docx")
