import re
from pathlib import Path
from typing import Any, Dict

import yaml

from spendwise.core.errors import PromptNotFound


_PLACEHOLDER = re.compile(r"\{\{\s*(\w+)\s*\}\}")


class PromptRegistry:
    """
    Loads and renders versioned prompts.

    Prompt files are YAML documents stored next to this module, e.g.
    ``analysis/v1.yaml``. Templates use ``{{ name }}`` placeholders.
    """

    def __init__(self, base_dir: str | Path | None = None):
        self.base_dir = Path(base_dir) if base_dir else Path(__file__).parent
        self._cache: Dict[str, Dict[str, Any]] = {}

    def load(self, relative_path: str) -> Dict[str, Any]:
        """
        Example: analysis/v1.yaml
        """
        if relative_path in self._cache:
            return self._cache[relative_path]

        path = self.base_dir / relative_path

        if not path.exists():
            raise PromptNotFound(f"Prompt not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            prompt = yaml.safe_load(f) or {}

        self._cache[relative_path] = prompt
        return prompt

    def system_instruction(self, relative_path: str) -> str:
        instruction = self.load(relative_path).get("system_instruction")
        if not instruction:
            raise ValueError(f"System instruction missing in {relative_path}")
        return instruction

    def render(self, relative_path: str, template_name: str, **variables: str) -> str:
        templates = self.load(relative_path).get("templates", {})

        template = templates.get(template_name)
        if not template:
            raise ValueError(f"Prompt template '{template_name}' missing in {relative_path}")

        # single pass, so substituted values are never re-scanned for placeholders
        def _substitute(match: re.Match) -> str:
            key = match.group(1)
            if key not in variables:
                return match.group(0)
            return variables[key]

        return _PLACEHOLDER.sub(_substitute, template)
