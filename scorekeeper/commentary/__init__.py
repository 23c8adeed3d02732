"""
Match analysis components.

- llm_client: Gemini-backed LLM client abstraction.
- prompting: prompt construction from a match snapshot.
- analysis: MatchAnalyst, which turns a snapshot into commentary, a win
            probability and tactical advice, with a fixed fallback.
"""

from .analysis import AnalysisResponse, FALLBACK_ANALYSIS, MatchAnalyst  # noqa: F401
