"""
LLM integration layer.

Responsibilities:
- Manage Groq API configuration and credentials.
- Send prompts to the Groq chat completion API.
- Return ``None`` instead of raising when the LLM is unavailable, so
  callers can fall back to fixed copy.
"""
