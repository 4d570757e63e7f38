from dataclasses import dataclass

from spendwise.core.analysis import grammar
from spendwise.prompts.registry import PromptRegistry


@dataclass(frozen=True)
class PromptBundle:
    system_instruction: str
    user_prompt: str


class RequestBuilder:
    """
    Composes the generator input for one analysis.

    The non-empty input precondition is checked by the caller.
    """

    PROMPT_PATH = grammar.PROMPT_PATH

    def __init__(self, prompt_registry: PromptRegistry | None = None):
        self.prompt_registry = prompt_registry or PromptRegistry()

    @property
    def system_instruction(self) -> str:
        return self.prompt_registry.system_instruction(self.PROMPT_PATH)

    def build(self, raw_text: str, target_language: str = grammar.NO_TRANSLATION_LANGUAGE) -> PromptBundle:
        if grammar.wants_translation(target_language):
            user_prompt = self.prompt_registry.render(
                self.PROMPT_PATH,
                "dual",
                language=target_language,
                header=grammar.translation_header(target_language),
                text=raw_text,
            )
        else:
            user_prompt = self.prompt_registry.render(
                self.PROMPT_PATH,
                "single",
                text=raw_text,
            )

        return PromptBundle(
            system_instruction=self.system_instruction,
            user_prompt=user_prompt,
        )
