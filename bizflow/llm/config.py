from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


def _env_flag(name: str, default: bool = True) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() not in ("0", "false", "no", "off")


@dataclass(frozen=True)
class LLMConfig:
    api_key: str = os.getenv("GROQ_API_KEY", "")
    model: str = os.getenv("BIZFLOW_LLM_MODEL", "llama-3.3-70b-versatile")
    timeout: float = 10.0
    max_tokens: int = 512
    temperature: float = 0.7
    enabled: bool = _env_flag("BIZFLOW_LLM_ENABLED")


DEFAULT_LLM_CONFIG = LLMConfig()
