"""
Free-text reasoning and content generation for ranked platforms.

Every generator degrades to fixed fallback copy so a failing LLM never
discards a computed ranking.
"""
