from typing import Any, Dict, Optional

import ollama

from spendwise.infrastructure.llm.backends.base import LLMBackend
from spendwise.infrastructure.llm.types import LLMMetadata


class OllamaBackend(LLMBackend):
    """
    Backend for Ollama.

    Characteristics:
    - chat-based
    - supports system prompts
    - external daemon (stateless from our side)
    """

    def __init__(self, profile: Dict[str, Any]):
        self.profile = profile

        # --- metadata fields ---
        self.profile_name: str = profile.get("profile_name", "unknown")

        self.model_name: str = profile.get("name")
        if not self.model_name:
            raise ValueError("Ollama backend requires 'name' in model profile")

        params = profile.get("params", {})

        # --- client ---
        self.client = ollama.Client(
            host=profile.get("host"),
            timeout=params.get("timeout"),
        )

        # --- default generation params ---
        self.default_generation_params: Dict[str, Any] = {
            "temperature": params.get("temperature", 0.1),
            "top_p": params.get("top_p", 0.9),
            "repeat_penalty": params.get("repeat_penalty", 1.1),
            "num_predict": params.get("num_predict", 2048),
        }

    def generate(
        self,
        prompt: str,
        system_instruction: Optional[str] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> str:
        """
        Run synchronous chat-based inference.
        """
        params = params or {}

        options = {
            key: params.get(key, default)
            for key, default in self.default_generation_params.items()
        }

        messages = []
        if system_instruction:
            messages.append({"role": "system", "content": system_instruction})
        messages.append({"role": "user", "content": prompt})

        response = self.client.chat(
            model=self.model_name,
            messages=messages,
            options=options,
            stream=False,
        )

        return response["message"]["content"]

    @property
    def meta(self) -> LLMMetadata:
        return {
            "backend": "ollama",
            "model": self.model_name,
            "profile": self.profile_name,
        }
