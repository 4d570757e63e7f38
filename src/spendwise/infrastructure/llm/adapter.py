import logging
from typing import Any, Dict, Optional

from spendwise.infrastructure.llm.backends.base import LLMBackend
from spendwise.infrastructure.llm.config import (
    get_active_model_profile,
    load_models_config,
    models_config_path as default_models_config_path,
)
from spendwise.infrastructure.llm.types import LLMMetadata

logger = logging.getLogger(__name__)


class LLMAdapter:
    """
    Infrastructure-level LLM adapter.

    Responsibilities:
    - load model config
    - select backend
    - lazy backend initialization
    - expose unified metadata
    """

    def __init__(
        self,
        models_config_path: Optional[str] = None,
        profile: Optional[Dict[str, Any]] = None,
        backend: Optional[LLMBackend] = None,
    ):
        if profile is None:
            self.models_config = load_models_config(models_config_path or default_models_config_path())
            profile = get_active_model_profile(self.models_config)

        self.profile = profile
        self._backend: Optional[LLMBackend] = backend  # lazy-loaded

        logger.debug(
            "LLMAdapter created for profile '%s' (lazy init, no model loaded)",
            self.profile.get("profile_name"),
        )

    def _init_backend(self):
        if self._backend is not None:
            return

        backend_type = self.profile.get("backend")

        # backend libraries are imported on first use only
        if backend_type == "gemini":
            from spendwise.infrastructure.llm.backends.gemini import GeminiBackend
            self._backend = GeminiBackend(self.profile)
        elif backend_type == "ollama":
            from spendwise.infrastructure.llm.backends.ollama import OllamaBackend
            self._backend = OllamaBackend(self.profile)
        elif backend_type == "llama_cpp":
            from spendwise.infrastructure.llm.backends.llama_cpp import LlamaCppBackend
            self._backend = LlamaCppBackend(self.profile)
        else:
            raise ValueError(f"Unsupported backend: {backend_type}")

        meta = self._backend.meta
        logger.info(
            "LLM backend '%s' initialized (model=%s, profile=%s)",
            meta["backend"],
            meta["model"],
            meta["profile"],
        )

    def generate(
        self,
        prompt: str,
        system_instruction: Optional[str] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> str:
        """
        Run inference via selected backend.

        Call-time ``params`` override the profile params.
        """
        self._init_backend()

        merged: Dict[str, Any] = {**self.profile.get("params", {}), **(params or {})}
        return self._backend.generate(prompt, system_instruction, merged)

    @property
    def meta(self) -> LLMMetadata:
        """
        Unified backend metadata.
        """
        self._init_backend()
        return self._backend.meta
