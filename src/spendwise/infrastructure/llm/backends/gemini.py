import os
from typing import Any, Dict, Optional

from google import genai
from google.genai import types

from spendwise.infrastructure.llm.backends.base import LLMBackend
from spendwise.infrastructure.llm.types import LLMMetadata


class GeminiBackend(LLMBackend):
    """
    Backend for Google Gemini (google-genai SDK).

    Characteristics:
    - hosted API, needs GOOGLE_API_KEY (or GEMINI_API_KEY)
    - native system instruction support, passed per request
    - optional request timeout, in seconds, from the profile params
    """

    def __init__(self, profile: Dict[str, Any]):
        self.profile = profile

        # --- metadata fields ---
        self.profile_name: str = profile.get("profile_name", "unknown")

        self.model_name: str = profile.get("name")
        if not self.model_name:
            raise ValueError("Gemini backend requires 'name' in model profile")

        api_key = os.getenv("GOOGLE_API_KEY") or os.getenv("GEMINI_API_KEY")
        if not api_key:
            raise ValueError("API key is required for Gemini backend (GOOGLE_API_KEY)")

        params = profile.get("params", {})
        self.timeout: Optional[float] = params.get("timeout")

        # --- client ---
        http_options = None
        if self.timeout:
            # HttpOptions.timeout is milliseconds
            http_options = types.HttpOptions(timeout=int(self.timeout * 1000))

        self.client = genai.Client(api_key=api_key, http_options=http_options)

        # --- default generation params ---
        self.default_generation_params: Dict[str, Any] = {
            "temperature": params.get("temperature", 0.1),
            "top_p": params.get("top_p", 0.9),
            "max_output_tokens": params.get("max_output_tokens", 2048),
        }

    def generate(
        self,
        prompt: str,
        system_instruction: Optional[str] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> str:
        params = params or {}

        generation_params = {
            key: params.get(key, default)
            for key, default in self.default_generation_params.items()
        }

        response = self.client.models.generate_content(
            model=self.model_name,
            contents=prompt,
            config=types.GenerateContentConfig(
                system_instruction=system_instruction,
                **generation_params,
            ),
        )

        # None when the candidate was blocked or empty
        return response.text

    @property
    def meta(self) -> LLMMetadata:
        return {
            "backend": "gemini",
            "model": self.model_name,
            "profile": self.profile_name,
        }
