from __future__ import annotations

import json
import logging
import re
from typing import Sequence

from ..llm.config import DEFAULT_LLM_CONFIG, LLMConfig
from ..llm.groq_client import generate_text
from ..recommendations.models import BusinessProfile, ContentTemplate

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# LLM Prompts
# ---------------------------------------------------------------------------

REASONING_PROMPT = """\
Explain in business terms, in two or three sentences, why {platform} is a good \
marketing platform for a {business_type} business whose primary goal is {goal}.
Business description: {description}
Location: {location}
Monthly budget: ${budget:.2f}"""

CONTENT_TEMPLATE_PROMPT = """\
Write a ready-to-post {platform} content template for this business.
Business type: {business_type}
Business description: {description}
Primary goal: {goal}
{seed}
Format the output as a JSON object with exactly these keys:
{{"hook": "...", "caption": "...", "cta": "...", "hashtags": ["#tag1", "#tag2"]}}"""

SEED_BLOCK = """\
Use this existing template as a starting point for tone and structure:
Hook: {hook}
Caption: {caption}
CTA: {cta}"""

RISK_PROMPT = """\
List the three most important potential risks a micro-business faces when \
relying on {platform} for marketing. Put each risk on its own line with no \
introduction or closing remarks."""

STRATEGY_PROMPT = """\
Give one concrete strategic next step, in under 60 words, for a {business_type} \
business that wants {goal} and has chosen {platform} as its main channel.
Business description: {description}"""

PERSONA_PROMPT = """\
Describe the most likely customer persona for this business in one or two \
sentences.
Business type: {business_type}
Business description: {description}
Location: {location}"""

# ---------------------------------------------------------------------------
# Fallback copy
# ---------------------------------------------------------------------------

FALLBACK_REASONING = "We recommend {platform} because it fits a {business_type} business focused on {goal}."
FALLBACK_STRATEGY = (
    "Start by posting consistently on {platform} for four weeks, then keep the "
    "formats that earned the most engagement."
)
FALLBACK_RISKS = [
    "Organic reach can drop suddenly when the platform changes its algorithm.",
    "Inconsistent posting makes it hard to build an audience.",
]
FALLBACK_PERSONA = "Local and online customers looking for a {business_type} business like yours."
FALLBACK_TEMPLATE = ContentTemplate(
    hook="Generated automatically",
    caption="Fallback content template",
    cta="CTA coming soon",
    hashtags=["#smallbusiness"],
)

_LIST_PREFIX_RE = re.compile(r"^\s*(?:[-*•]+|\d+[.)])\s*")


def _profile_fields(business: BusinessProfile) -> dict[str, object]:
    return {
        "business_type": getattr(business.type, "value", business.type),
        "goal": getattr(business.goal, "value", business.goal),
        "description": business.description or "not provided",
        "location": business.location or "online",
        "budget": business.budget,
    }


def explain_recommendations(
    business: BusinessProfile,
    platforms: Sequence[str],
    config: LLMConfig = DEFAULT_LLM_CONFIG,
) -> dict[str, str]:
    """Return a reasoning paragraph per platform; failures get fallback copy."""
    fields = _profile_fields(business)
    explanations: dict[str, str] = {}
    for platform in platforms:
        reply = generate_text(REASONING_PROMPT.format(platform=platform, **fields), config)
        if reply is None:
            reply = FALLBACK_REASONING.format(platform=platform, **fields)
        explanations[platform] = reply
    return explanations


def _parse_template(raw: str) -> ContentTemplate | None:
    try:
        parsed = json.loads(raw)
        if not isinstance(parsed, dict):
            return None

        hook = str(parsed.get("hook") or "").strip()
        if not hook:
            return None
        hashtags = parsed.get("hashtags") or []
        if isinstance(hashtags, str):
            hashtags = hashtags.split()
        elif not isinstance(hashtags, list):
            hashtags = []
        return ContentTemplate(
            hook=hook,
            caption=str(parsed.get("caption") or "").strip(),
            cta=str(parsed.get("cta") or "").strip(),
            hashtags=[str(tag).strip() for tag in hashtags if str(tag).strip()],
        )
    except Exception:
        logger.warning("Could not parse content template reply, using fallback", exc_info=True)
        return None


def generate_content_template(
    business: BusinessProfile,
    platform: str,
    seed: ContentTemplate | None = None,
    config: LLMConfig = DEFAULT_LLM_CONFIG,
) -> tuple[ContentTemplate, bool]:
    """
    Produce a content template for the top platform.

    Returns ``(template, generated)`` where ``generated`` is False when the
    seed or the fixed fallback template was used instead of LLM output.
    """
    seed_block = SEED_BLOCK.format(**seed.model_dump()) if seed else ""
    prompt = CONTENT_TEMPLATE_PROMPT.format(
        platform=platform, seed=seed_block, **_profile_fields(business),
    )
    reply = generate_text(prompt, config, json_mode=True)
    template = _parse_template(reply) if reply else None
    if template is not None:
        return template, True
    return (seed or FALLBACK_TEMPLATE), False


def parse_risks(raw: str) -> list[str]:
    risks = []
    for line in raw.splitlines():
        cleaned = _LIST_PREFIX_RE.sub("", line).strip()
        if cleaned:
            risks.append(cleaned)
    return risks


def assess_risks(platform: str, config: LLMConfig = DEFAULT_LLM_CONFIG) -> list[str]:
    reply = generate_text(RISK_PROMPT.format(platform=platform), config)
    risks = parse_risks(reply) if reply else []
    return risks or list(FALLBACK_RISKS)


def generate_strategy(
    business: BusinessProfile,
    top_platform: str,
    config: LLMConfig = DEFAULT_LLM_CONFIG,
) -> str:
    reply = generate_text(
        STRATEGY_PROMPT.format(platform=top_platform, **_profile_fields(business)), config,
    )
    return reply or FALLBACK_STRATEGY.format(platform=top_platform)


def infer_persona(business: BusinessProfile, config: LLMConfig = DEFAULT_LLM_CONFIG) -> str:
    fields = _profile_fields(business)
    reply = generate_text(PERSONA_PROMPT.format(**fields), config)
    return reply or FALLBACK_PERSONA.format(**fields)
