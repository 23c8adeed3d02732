from __future__ import annotations

from typing import List, Dict, Optional

from google import genai
from google.genai import types

from scorekeeper.config import GEMINI_MODEL_NAME

# Default text model; override via GEMINI_MODEL_NAME.
DEFAULT_MODEL_NAME = GEMINI_MODEL_NAME


class LLMClient:
    """
    Thin wrapper around the Gemini client.

    Usage:
        llm = LLMClient(system_prompt="You are a cricket analyst")
        text = llm.generate(
            [{"role": "user", "content": "Say hello"}]
        )
    """

    def __init__(
        self,
        system_prompt: str,
        model_name: str = DEFAULT_MODEL_NAME,
        api_key: Optional[str] = None,
        debug: bool = False,
    ) -> None:
        self.system_prompt = system_prompt.strip()
        self.model_name = model_name
        self.debug = debug

        # Prefer explicit key; otherwise let the SDK read GEMINI_API_KEY/GOOGLE_API_KEY.
        if api_key is not None:
            self.client = genai.Client(api_key=api_key)
        else:
            self.client = genai.Client()

    def _flatten_messages(self, messages: List[Dict[str, str]]) -> str:
        """
        Convert chat-style messages into a single text prompt by prefixing
        each with ROLE: and joining with newlines.
        """
        lines: List[str] = []
        for m in messages:
            role = m.get("role", "user")
            content = m.get("content", "")
            lines.append(f"{role.upper()}: {content}")
        return "\n".join(lines)

    @staticmethod
    def _extract_text(response) -> str:
        # Primary path: use the convenience .text property.
        text = (getattr(response, "text", None) or "").strip()
        if text:
            return text

        # Fallback: rebuild from candidates if .text is empty.
        text_parts: List[str] = []
        candidates = getattr(response, "candidates", None) or []
        for cand in candidates:
            content = getattr(cand, "content", None)
            if not content:
                continue
            parts = getattr(content, "parts", None) or []
            for part in parts:
                part_text = getattr(part, "text", None)
                if part_text:
                    text_parts.append(part_text)
        return " ".join(text_parts).strip()

    def generate(
        self,
        messages: List[Dict[str, str]],
        max_tokens: int = 400,
        temperature: float = 0.7,
        response_schema: Optional[types.Schema] = None,
    ) -> str:
        """
        Call Gemini and return the response text.

        messages: list of {"role": "system"|"user"|"assistant", "content": "..."}.
        response_schema: if given, Gemini is asked for JSON matching it.
        """
        convo_text = self._flatten_messages(messages)

        if self.debug:
            print("\n[LLMClient] === Prompt sent to Gemini ===")
            print(convo_text)
            print("[LLMClient] === End of prompt ===\n")

        config_kwargs = dict(
            system_instruction=self.system_prompt,
            max_output_tokens=max_tokens,
            temperature=temperature,
        )
        if response_schema is not None:
            config_kwargs["response_mime_type"] = "application/json"
            config_kwargs["response_schema"] = response_schema

        response = self.client.models.generate_content(
            model=self.model_name,
            contents=convo_text,
            config=types.GenerateContentConfig(**config_kwargs),
        )

        text = self._extract_text(response)

        if self.debug:
            print("[LLMClient] Raw response object:", repr(response))
            print("[LLMClient] Extracted text:", repr(text))
            print()

        return text
