import os
from pathlib import Path
from typing import Any, Dict

import yaml
from dotenv import load_dotenv

from spendwise.core.errors import ModelConfigError

load_dotenv()

DEFAULT_MODELS_CONFIG = "models.yaml"

_REQUIRED_FIELDS = {
    "gemini": "name",
    "ollama": "name",
    "llama_cpp": "path",
}


def models_config_path() -> str:
    return os.getenv("MODELS_CONFIG", DEFAULT_MODELS_CONFIG)


def load_models_config(path: str | Path) -> Dict[str, Any]:
    path = Path(path)
    if not path.exists():
        raise ModelConfigError(f"Models config not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        config = yaml.safe_load(f) or {}

    if not config.get("profiles"):
        raise ModelConfigError(f"No model profiles defined in {path}")

    return config


def get_active_model_profile(models_config: Dict[str, Any]) -> Dict[str, Any]:
    active_profile = os.getenv("ACTIVE_MODEL_PROFILE")

    if not active_profile:
        active_profile = models_config.get("default_model")

    profiles = models_config.get("profiles", {})

    if active_profile not in profiles:
        available = ", ".join(profiles)
        raise ModelConfigError(
            f"Model profile '{active_profile}' not found in models.yaml (available: {available})"
        )

    profile = dict(profiles[active_profile])
    profile["profile_name"] = active_profile
    validate_profile(profile)
    return profile


def validate_profile(profile: Dict[str, Any]) -> None:
    name = profile.get("profile_name", "unknown")
    backend = profile.get("backend")

    if not backend:
        raise ModelConfigError(f"Profile '{name}': missing 'backend'")

    required = _REQUIRED_FIELDS.get(backend)
    if required is None:
        raise ModelConfigError(f"Profile '{name}': unsupported backend '{backend}'")

    if not profile.get(required):
        raise ModelConfigError(
            f"Profile '{name}': backend='{backend}' requires '{required}'"
        )
