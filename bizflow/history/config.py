from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class StoreConfig:
    """
    MongoDB settings for templates and query history.

    An empty ``mongo_uri`` keeps everything in process memory.
    """

    mongo_uri: str = os.getenv("MONGO_URI", "")
    database: str = os.getenv("MONGO_DATABASE", "bizflow")
    templates_collection: str = "content_templates"
    history_collection: str = "query_history"
    timeout_ms: int = 2000

    @property
    def use_mongo(self) -> bool:
        return bool(self.mongo_uri)


DEFAULT_STORE_CONFIG = StoreConfig()
