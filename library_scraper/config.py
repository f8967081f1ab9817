from __future__ import annotations
import os
from typing import Optional

DEFAULT_BASE = "https://ollama.com"
DEFAULT_TIMEOUT_S = 30.0
LIBRARY_PATH = "/library"

def get_base_url(cli_base_url: Optional[str] = None) -> str:
    base = cli_base_url or os.environ.get("OLLAMA_LIBRARY_BASE_URL", "") or DEFAULT_BASE
    return base.rstrip("/")

def get_timeout(cli_timeout_s: Optional[float] = None) -> float:
    if cli_timeout_s is not None:
        return float(cli_timeout_s)
    raw = os.environ.get("OLLAMA_LIBRARY_TIMEOUT", "")
    if not raw:
        return DEFAULT_TIMEOUT_S
    try:
        return float(raw)
    except ValueError:
        raise RuntimeError(f"OLLAMA_LIBRARY_TIMEOUT must be a number of seconds, got {raw!r}")
