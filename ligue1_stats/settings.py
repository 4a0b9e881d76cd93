import os
from dotenv import load_dotenv

# Load .env from repo root (dotenv auto-walks up from CWD)
load_dotenv()

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def _get_bool(name: str, default: bool = False) -> bool:
    val = os.getenv(name)
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "on"}


def _get_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


# --- Season files ---
DATA_ROOT = os.getenv("LIGUE1_DATA_ROOT") or os.path.join(BASE_DIR, "data")
SEASON_LOAD_WORKERS = max(1, _get_int("SEASON_LOAD_WORKERS", 4))
SEASON_CACHE_ENABLED = _get_bool("SEASON_CACHE_ENABLED", True)

# --- Simulation ---
DEFAULT_STAKE = os.getenv("DEFAULT_STAKE", "10")

# --- Dev server ---
DEV_SERVER_HOST = os.getenv("DEV_SERVER_HOST", "0.0.0.0")
DEV_SERVER_PORT = _get_int("DEV_SERVER_PORT", 5000)
