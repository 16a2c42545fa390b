"""
Platform recommendation engine.

Responsibilities:
- Hold the static catalog of marketing platforms and their metadata.
- Validate budget, effort, visual and goal constraints per platform.
- Filter the catalog down to candidates relevant to a business profile.
- Score and rank candidates using deterministic heuristics.
"""
