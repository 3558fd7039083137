import os
from typing import List, Optional

from dotenv import load_dotenv

# Load .env from project root
load_dotenv()

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("LOG_FORMAT", "text")  # text | json

# "first" or "random": how one outgoing edge is picked among several
EDGE_SELECTION = os.getenv("EVENTFLOW_EDGE_SELECTION", "first").strip().lower()
if EDGE_SELECTION not in ("first", "random"):
    EDGE_SELECTION = "first"


def _optional_int(value: Optional[str]) -> Optional[int]:
    if value is None or not value.strip():
        return None
    try:
        return int(value)
    except ValueError:
        return None


RANDOM_SEED = _optional_int(os.getenv("EVENTFLOW_RANDOM_SEED"))


def _split_origins(value: str) -> List[str]:
    return [origin.strip() for origin in value.split(",") if origin.strip()]


CORS_ORIGINS = _split_origins(
    os.getenv("EVENTFLOW_CORS_ORIGINS", "http://localhost:5173")
)
