from __future__ import annotations

import logging

from groq import Groq

from .config import DEFAULT_LLM_CONFIG, LLMConfig

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a marketing consultant for micro-businesses with small budgets "
    "and no dedicated marketing staff. Be concrete, brief and practical."
)


def generate_text(
    prompt: str,
    config: LLMConfig = DEFAULT_LLM_CONFIG,
    *,
    system_prompt: str = SYSTEM_PROMPT,
    json_mode: bool = False,
) -> str | None:
    """
    Send a single prompt to Groq and return the reply text.

    Returns ``None`` when the LLM is disabled or unconfigured, on any API
    failure, or when the reply is empty.
    """
    if not config.enabled or not config.api_key:
        return None

    kwargs = {}
    if json_mode:
        kwargs["response_format"] = {"type": "json_object"}

    try:
        client = Groq(api_key=config.api_key, timeout=config.timeout)
        response = client.chat.completions.create(
            model=config.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": prompt},
            ],
            max_tokens=config.max_tokens,
            temperature=config.temperature,
            **kwargs,
        )
        content = (response.choices[0].message.content or "").strip()
    except Exception:
        logger.warning("Groq LLM call failed, using fallback copy", exc_info=True)
        return None

    if not content:
        logger.warning("Groq LLM returned an empty reply")
        return None
    return content
