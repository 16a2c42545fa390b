from __future__ import annotations

import logging
import os

from fastapi import FastAPI, Query, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .history.aggregator import compute_history_stats
from .history.store import get_history
from .recommendations.catalog import all_metadata
from .recommendations.consultation import generate_consultation
from .recommendations.filters import apply_all_filters, explain_filtering
from .recommendations.models import (
    BusinessProfile,
    ConsultationResult,
    FilterExplanation,
    RankedResult,
)
from .recommendations.ranking import recommend

logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO").upper())
logger = logging.getLogger(__name__)

app = FastAPI(title="BizFlow Marketing Consultant API", version="1.0.0")


# ── Error mapping ────────────────────────────────────────────────────────


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s", request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/platforms")
def platforms() -> list[dict]:
    return [meta.as_dict() for meta in all_metadata()]


# ── Recommendation endpoints ─────────────────────────────────────────────


@app.post("/api/recommend", response_model=RankedResult)
def recommend_platforms(body: BusinessProfile) -> RankedResult:
    return recommend(body)


@app.post("/api/explain", response_model=FilterExplanation)
def explain(body: BusinessProfile) -> FilterExplanation:
    candidates = [getattr(p, "value", str(p)) for p in apply_all_filters(body)]
    return FilterExplanation(candidates=candidates, explanations=explain_filtering(body))


@app.post("/api/consult", response_model=ConsultationResult)
def consult(body: BusinessProfile) -> ConsultationResult:
    return generate_consultation(body)


# ── History endpoints ────────────────────────────────────────────────────


@app.get("/history")
def history(limit: int = Query(default=20, ge=1, le=200)) -> list[dict]:
    return get_history(limit)


@app.get("/history/stats")
def history_stats() -> dict:
    return compute_history_stats(get_history(limit=10_000))
