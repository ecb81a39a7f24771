"""In-memory settings provider.

Simple dict-based storage for tests and embedding.
Data is lost when the application exits.
"""

from typing import Any

from .base import SettingsProvider


class InMemorySettingsProvider(SettingsProvider):
    """Settings held in a plain dict."""

    def __init__(self, **values: Any):
        super().__init__()
        self._values: dict[str, Any] = dict(values)

    def _read(self) -> dict[str, Any]:
        return dict(self._values)

    def set(self, key: str, value: Any) -> None:
        """Store a value directly, bypassing overrides."""
        self._values[key] = value

    @property
    def backend_type(self) -> str:
        return "memory"
