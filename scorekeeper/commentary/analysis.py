from __future__ import annotations

import json
from concurrent.futures import Future, ThreadPoolExecutor, TimeoutError as FutureTimeoutError
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

from google.genai import types

from scorekeeper.commentary.prompting import build_analysis_prompt
from scorekeeper.config import ANALYSIS_TIMEOUT_SECONDS
from scorekeeper.errors import AnalysisUnavailable
from scorekeeper.state.cricket_state import MatchState

DEFAULT_SYSTEM_PROMPT = (
    "You are a professional cricket analyst covering a live limited-overs match. "
    "You answer with concise, broadcast-quality insight and always return the "
    "requested JSON fields."
)

ANALYSIS_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "commentary": types.Schema(type=types.Type.STRING),
        "winProbability": types.Schema(type=types.Type.NUMBER),
        "tacticalAdvice": types.Schema(type=types.Type.STRING),
    },
    required=["commentary", "winProbability", "tacticalAdvice"],
)


@dataclass(frozen=True)
class AnalysisResponse:
    commentary: str
    win_probability: float  # batting side, 0-100
    tactical_advice: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


FALLBACK_ANALYSIS = AnalysisResponse(
    commentary="Signal lost. Analysis is unavailable right now; scoring continues.",
    win_probability=50.0,
    tactical_advice="Maintain wicket preservation while rotating strike.",
)


def parse_analysis(raw: str) -> AnalysisResponse:
    """
    Parse the LLM's JSON answer.

    Raises AnalysisUnavailable if the payload is empty or missing fields.
    """
    raw = (raw or "").strip()
    if not raw:
        raise AnalysisUnavailable("Empty response from analysis model")

    # Strip to the JSON object if the model wrapped it in extra text.
    start = raw.find("{")
    end = raw.rfind("}")
    json_str = raw[start : end + 1] if start != -1 and end > start else raw

    try:
        data = json.loads(json_str)
        prob = float(data["winProbability"])
        commentary = str(data["commentary"]).strip()
        advice = str(data["tacticalAdvice"]).strip()
    except (ValueError, KeyError, TypeError) as e:
        raise AnalysisUnavailable(f"Unusable analysis payload: {e!r}") from e

    return AnalysisResponse(
        commentary=commentary,
        win_probability=min(100.0, max(0.0, prob)),
        tactical_advice=advice,
    )


class MatchAnalyst:
    """
    Requests commentary, a win probability and tactical advice for a match
    snapshot.

    Never raises to the caller: any failure yields FALLBACK_ANALYSIS.
    Snapshots are immutable, so handing one to a background worker cannot
    affect scoring.
    """

    def __init__(self, llm_client, max_tokens: int = 400, temperature: float = 0.7) -> None:
        self.llm_client = llm_client
        self.max_tokens = max_tokens
        self.temperature = temperature
        self._executor: Optional[ThreadPoolExecutor] = None

    def analyze(self, state: MatchState) -> AnalysisResponse:
        messages = build_analysis_prompt(state)
        try:
            raw = self.llm_client.generate(
                messages,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
                response_schema=ANALYSIS_SCHEMA,
            )
            return parse_analysis(raw)
        except Exception as e:
            print(f"[WARN] Analysis unavailable, using fallback: {e}")
            return FALLBACK_ANALYSIS

    def analyze_in_background(self, state: MatchState) -> "Future[AnalysisResponse]":
        """Submit `state` for analysis without blocking the scorer."""
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="analysis")
        return self._executor.submit(self.analyze, state)

    def shutdown(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=False)
            self._executor = None


def result_or_fallback(
    future: "Future[AnalysisResponse]",
    timeout: float = ANALYSIS_TIMEOUT_SECONDS,
) -> AnalysisResponse:
    """Wait up to `timeout` seconds for a background analysis."""
    try:
        return future.result(timeout=timeout)
    except FutureTimeoutError:
        print(f"[WARN] Analysis timed out after {timeout}s, using fallback.")
        return FALLBACK_ANALYSIS
