import logging

from spendwise.core.analysis.request_builder import PromptBundle
from spendwise.core.errors import GenerationError

logger = logging.getLogger(__name__)

DEFAULT_TEMPERATURE = 0.1


class AnalysisInvoker:
    """
    Calls the external generator exactly once per request.

    No retry. Every failure, including an empty reply, surfaces as
    GenerationError with a fixed message; the cause is only logged.
    """

    def __init__(self, llm, temperature: float = DEFAULT_TEMPERATURE):
        self.llm = llm
        self.temperature = temperature

    def invoke(self, prompt: PromptBundle) -> str:
        try:
            output = self.llm.generate(
                prompt.user_prompt,
                system_instruction=prompt.system_instruction,
                params={"temperature": self.temperature},
            )
        except Exception as exc:
            logger.exception("Generator call failed")
            raise GenerationError() from exc

        if output is None or not output.strip():
            logger.error("Generator returned an empty response")
            raise GenerationError()

        return output
