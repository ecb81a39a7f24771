"""Environment variable settings provider.

Values are read from os.environ on every load(), so edits to the
environment (or a reloaded .env file) take effect on the next request.
"""

import os
from typing import Any

from .base import SettingsProvider

# Setting name -> environment variable suffix
_ENV_KEYS = {
    "api_key": "API_KEY",
    "model_label": "MODEL",
    "temperature": "TEMPERATURE",
    "max_tokens": "MAX_TOKENS",
    "system_prompt": "SYSTEM_PROMPT",
    "use_markdown_renderer": "MARKDOWN",
    "render_math_in_markdown": "RENDER_MATH",
    "color_scheme": "THEME",
    "request_timeout": "TIMEOUT",
}


class EnvSettingsProvider(SettingsProvider):
    """Settings read from ``DEEKSEEP_*`` environment variables.

    Environment variables:
        DEEKSEEP_API_KEY: API key override
        DEEKSEEP_MODEL: UI model label (default: DeekSeep-V3)
        DEEKSEEP_TEMPERATURE: Sampling temperature
        DEEKSEEP_MAX_TOKENS: Maximum reply tokens
        DEEKSEEP_SYSTEM_PROMPT: Replace the packaged system prompt
        DEEKSEEP_MARKDOWN: Render replies as Markdown (true/false)
        DEEKSEEP_RENDER_MATH: Split math out of Markdown replies (true/false)
        DEEKSEEP_THEME: light or dark
        DEEKSEEP_TIMEOUT: Request deadline in seconds
    """

    def __init__(self, prefix: str = "DEEKSEEP_"):
        super().__init__()
        self._prefix = prefix

    def _read(self) -> dict[str, Any]:
        values: dict[str, Any] = {}
        for key, suffix in _ENV_KEYS.items():
            raw = os.getenv(f"{self._prefix}{suffix}")
            if raw is None or raw == "":
                continue
            values[key] = raw
        return values

    @property
    def backend_type(self) -> str:
        return "env"
