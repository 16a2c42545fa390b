from __future__ import annotations

import logging
import time

from ..history.config import DEFAULT_STORE_CONFIG, StoreConfig
from ..history.store import fetch_template, record_query, save_template
from ..llm.config import DEFAULT_LLM_CONFIG, LLMConfig
from ..reasoning.advisor import (
    assess_risks,
    explain_recommendations,
    generate_content_template,
    generate_strategy,
    infer_persona,
)
from .config import DEFAULT_ENGINE_CONFIG, EngineConfig
from .models import BusinessProfile, ConsultationResult
from .ranking import recommend

logger = logging.getLogger(__name__)


def generate_consultation(
    business: BusinessProfile,
    llm_config: LLMConfig = DEFAULT_LLM_CONFIG,
    store_config: StoreConfig = DEFAULT_STORE_CONFIG,
    engine_config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> ConsultationResult:
    start_time = time.time()

    ranked = recommend(business, engine_config)

    if not ranked.recommendations:
        result = ConsultationResult(
            recommendations=[],
            strategic_advice=ranked.advisory or "",
            risks=[],
        )
        record_query(business, result, store_config)
        return result

    platforms = [r.platform for r in ranked.recommendations]
    top_platform = platforms[0]

    # --- Free-text generation ---
    persona = infer_persona(business, llm_config)
    explanations = explain_recommendations(business, platforms, llm_config)

    seed = fetch_template(top_platform, store_config)
    template, generated = generate_content_template(business, top_platform, seed, llm_config)
    if generated and seed is None:
        save_template(top_platform, template, store_config)

    risks = assess_risks(top_platform, llm_config)
    strategy = generate_strategy(business, top_platform, llm_config)

    # --- Assemble response ---
    recommendations = [
        r.model_copy(update={
            "reasoning": explanations.get(r.platform, ""),
            "content_template": template if r.rank == 1 else None,
        })
        for r in ranked.recommendations
    ]

    result = ConsultationResult(
        recommendations=recommendations,
        strategic_advice=strategy,
        risks=risks,
        persona=persona,
    )

    if not record_query(business, result, store_config):
        logger.warning("Consultation for %s was not saved to history", top_platform)

    elapsed_ms = round((time.time() - start_time) * 1000, 1)
    logger.info(
        "Consultation ranked %s in %.1f ms (template %s)",
        platforms, elapsed_ms, "generated" if generated else "reused",
    )
    return result
