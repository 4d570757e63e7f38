import logging

import pytest

from spendwise.core.errors import ModelConfigError
from spendwise.infrastructure.llm.adapter import LLMAdapter
from spendwise.infrastructure.llm.backends.base import LLMBackend
from spendwise.infrastructure.llm.backends.llama_cpp import LlamaCppBackend
from spendwise.infrastructure.llm.config import (
    get_active_model_profile,
    load_models_config,
)
from spendwise.infrastructure.llm.types import model_label

MODELS_YAML = """
default_model: hosted
profiles:
  hosted:
    backend: gemini
    name: gemini-1.5-flash
    params:
      temperature: 0.1
      top_p: 0.8
  local:
    backend: ollama
    name: qwen2.5
"""


class RecordingBackend(LLMBackend):
    def __init__(self):
        self.calls = []

    def generate(self, prompt, system_instruction=None, params=None):
        self.calls.append((prompt, system_instruction, params))
        return "ok"

    @property
    def meta(self):
        return {
            "backend": "gemini",
            "model": "fake",
            "profile": "test",
        }


@pytest.fixture
def models_yaml(tmp_path, monkeypatch):
    monkeypatch.delenv("ACTIVE_MODEL_PROFILE", raising=False)
    path = tmp_path / "models.yaml"
    path.write_text(MODELS_YAML, encoding="utf-8")
    return path


def test_default_profile(models_yaml):
    profile = get_active_model_profile(load_models_config(models_yaml))

    assert profile["profile_name"] == "hosted"
    assert profile["backend"] == "gemini"


def test_profile_from_env(models_yaml, monkeypatch):
    monkeypatch.setenv("ACTIVE_MODEL_PROFILE", "local")

    profile = get_active_model_profile(load_models_config(models_yaml))

    assert profile["profile_name"] == "local"


def test_unknown_profile(models_yaml, monkeypatch):
    monkeypatch.setenv("ACTIVE_MODEL_PROFILE", "missing")

    with pytest.raises(ModelConfigError, match="available: hosted, local"):
        get_active_model_profile(load_models_config(models_yaml))


def test_missing_config_file(tmp_path):
    with pytest.raises(ModelConfigError):
        load_models_config(tmp_path / "nope.yaml")


@pytest.mark.parametrize(
    "profile",
    [
        {"name": "x"},
        {"backend": "openai", "name": "x"},
        {"backend": "ollama"},
        {"backend": "llama_cpp", "name": "x"},
    ],
)
def test_invalid_profiles(profile):
    with pytest.raises(ModelConfigError):
        get_active_model_profile({"default_model": "p", "profiles": {"p": profile}})


def test_adapter_merges_profile_and_call_params():
    backend = RecordingBackend()
    adapter = LLMAdapter(
        profile={"backend": "gemini", "name": "x", "params": {"temperature": 0.5, "top_p": 0.8}},
        backend=backend,
    )

    assert adapter.generate("hello", system_instruction="sys", params={"temperature": 0.1}) == "ok"
    assert backend.calls == [("hello", "sys", {"temperature": 0.1, "top_p": 0.8})]
    assert adapter.meta["model"] == "fake"


def test_adapter_rejects_unknown_backend():
    adapter = LLMAdapter(profile={"backend": "mystery"})

    with pytest.raises(ValueError, match="Unsupported backend"):
        adapter.generate("hello")


def test_adapter_is_lazy(models_yaml):
    adapter = LLMAdapter(str(models_yaml))

    assert adapter._backend is None
    assert adapter.profile["profile_name"] == "hosted"


def test_llama_cpp_prepends_system_instruction():
    assert LlamaCppBackend.compose_prompt("user", "system\n") == "system\n\nuser"
    assert LlamaCppBackend.compose_prompt("user", None) == "user"


def test_backend_start_logs_model_metadata(monkeypatch, caplog):
    from spendwise.infrastructure.llm.backends import ollama as ollama_module

    monkeypatch.setattr(ollama_module.ollama, "Client", lambda host=None, timeout=None: object())
    adapter = LLMAdapter(profile={"backend": "ollama", "name": "qwen2.5", "profile_name": "local"})

    with caplog.at_level(logging.INFO, logger="spendwise.infrastructure.llm.adapter"):
        meta = adapter.meta

    assert meta["model"] == "qwen2.5"
    assert "model=qwen2.5, profile=local" in caplog.text


def test_model_label():
    meta = {"backend": "gemini", "model": "gemini-2.0-flash", "profile": "hosted"}

    assert model_label(meta) == "gemini-2.0-flash (profile: hosted)"
