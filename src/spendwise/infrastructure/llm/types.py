from typing import Literal, TypedDict


class LLMMetadata(TypedDict):
    """
    Which model produced an analysis: logged when a backend starts and
    reported next to each analysis by the CLI.
    """

    backend: Literal["gemini", "ollama", "llama_cpp"]
    model: str
    profile: str                # profile key from models.yaml


def model_label(meta: LLMMetadata) -> str:
    return f"{meta['model']} (profile: {meta['profile']})"
