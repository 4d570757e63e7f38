from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from spendwise.infrastructure.llm.types import LLMMetadata


class LLMBackend(ABC):
    """
    Base contract for any LLM backend implementation.
    """

    @abstractmethod
    def generate(
        self,
        prompt: str,
        system_instruction: Optional[str] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> str:
        """
        Run synchronous, single-turn inference.
        """
        raise NotImplementedError

    @property
    @abstractmethod
    def meta(self) -> LLMMetadata:
        """
        Backend, model and profile of this instance.
        """
        raise NotImplementedError
