from __future__ import annotations

from collections import Counter
from typing import Any


def compute_history_stats(records: list[dict[str, Any]]) -> dict[str, Any]:
    total = len(records)

    type_counter: Counter[str] = Counter()
    goal_counter: Counter[str] = Counter()
    platform_counter: Counter[str] = Counter()
    budgets: list[float] = []
    empty_results = 0

    for r in records:
        business = r.get("business") or {}
        type_counter[business.get("type", "unknown")] += 1
        goal_counter[business.get("goal", "unknown")] += 1
        if "budget" in business:
            budgets.append(float(business["budget"]))

        top = r.get("top_platform")
        if top:
            platform_counter[top] += 1
        else:
            empty_results += 1

    return {
        "total_queries": total,
        "by_business_type": dict(type_counter),
        "by_goal": dict(goal_counter),
        "top_platforms": [{"name": n, "count": c} for n, c in platform_counter.most_common(10)],
        "avg_budget": round(sum(budgets) / len(budgets), 2) if budgets else 0.0,
        "empty_results": empty_results,
        "empty_result_rate": round(empty_results / total * 100, 1) if total else 0.0,
    }
