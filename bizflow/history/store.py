from __future__ import annotations

import logging
import threading
import time
from collections import deque
from itertools import islice
from typing import Any

from pymongo import DESCENDING, MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError

from ..recommendations.models import BusinessProfile, ConsultationResult, ContentTemplate
from .config import DEFAULT_STORE_CONFIG, StoreConfig

logger = logging.getLogger(__name__)

# In-memory mode keeps only the newest records.
HISTORY_LIMIT = 1000

_templates: dict[str, dict[str, Any]] = {}
_history: deque[dict[str, Any]] = deque(maxlen=HISTORY_LIMIT)
_clients: dict[str, MongoClient] = {}
_clients_lock = threading.Lock()


def _database(config: StoreConfig) -> Database:
    with _clients_lock:
        client = _clients.get(config.mongo_uri)
        if client is None:
            client = MongoClient(config.mongo_uri, serverSelectionTimeoutMS=config.timeout_ms)
            _clients[config.mongo_uri] = client
    return client[config.database]


def _template_from_doc(doc: dict[str, Any] | None) -> ContentTemplate | None:
    if not doc:
        return None
    hook = str(doc.get("hook") or "").strip()
    # A row without a hook is an unfinished draft, not a template.
    if not hook:
        return None
    return ContentTemplate(
        hook=hook,
        caption=str(doc.get("caption") or "").strip(),
        cta=str(doc.get("cta") or "").strip(),
        hashtags=list(doc.get("hashtags") or []),
    )


def _clean_hashtags(tags: list[str]) -> list[str]:
    seen: set[str] = set()
    cleaned: list[str] = []
    for tag in tags:
        name = tag.strip().lstrip("#").strip()
        if name and name not in seen:
            seen.add(name)
            cleaned.append(name)
    return cleaned


def fetch_template(platform: str, config: StoreConfig = DEFAULT_STORE_CONFIG) -> ContentTemplate | None:
    """Return the stored template for *platform*, or ``None`` if missing or unreadable."""
    if not config.use_mongo:
        return _template_from_doc(_templates.get(platform))

    try:
        doc = _database(config)[config.templates_collection].find_one({"platform": platform})
    except PyMongoError:
        logger.warning("Failed to fetch template for %s", platform, exc_info=True)
        return None
    return _template_from_doc(doc)


def save_template(
    platform: str,
    template: ContentTemplate,
    config: StoreConfig = DEFAULT_STORE_CONFIG,
) -> bool:
    doc = {
        "platform": platform,
        "hook": template.hook,
        "caption": template.caption,
        "cta": template.cta,
        "hashtags": _clean_hashtags(template.hashtags),
        "notes": "AI generated",
        "created_at": time.time(),
    }
    if not config.use_mongo:
        _templates[platform] = doc
        return True

    try:
        _database(config)[config.templates_collection].replace_one(
            {"platform": platform}, doc, upsert=True,
        )
    except PyMongoError:
        logger.warning("Failed to save template for %s", platform, exc_info=True)
        return False
    return True


def record_query(
    business: BusinessProfile,
    result: ConsultationResult,
    config: StoreConfig = DEFAULT_STORE_CONFIG,
) -> bool:
    """Persist one consultation. Failures are logged and reported as ``False``."""
    record = {
        "business": business.model_dump(mode="json"),
        "top_platform": result.recommendations[0].platform if result.recommendations else None,
        "result": result.model_dump(mode="json"),
        "timestamp": time.time(),
    }
    if not config.use_mongo:
        _history.append(record)
        return True

    try:
        # insert_one adds an _id to the dict it is given
        _database(config)[config.history_collection].insert_one(dict(record))
    except PyMongoError:
        logger.warning("Failed to save query history", exc_info=True)
        return False
    return True


def get_history(limit: int = 50, config: StoreConfig = DEFAULT_STORE_CONFIG) -> list[dict[str, Any]]:
    """Most recent records first."""
    if not config.use_mongo:
        return list(islice(reversed(_history), limit))

    try:
        cursor = (
            _database(config)[config.history_collection]
            .find({}, {"_id": 0})
            .sort("timestamp", DESCENDING)
            .limit(limit)
        )
        return list(cursor)
    except PyMongoError:
        logger.warning("Failed to read query history", exc_info=True)
        return []


def clear_history() -> None:
    _history.clear()


def clear_templates() -> None:
    _templates.clear()
