"""Abstract base class for settings providers.

This module defines the interface the core uses to read settings.
The abstraction hides:
- Where values are stored (environment, memory, files)
- How raw values are parsed
- How in-process changes are layered over stored values
"""

from abc import ABC, abstractmethod
from typing import Any

from .models import AppSettings


class SettingsProvider(ABC):
    """Source of fresh settings snapshots.

    load() re-reads the underlying store on every call, so a request
    always sees the latest values. Changes made through update() are
    layered on top of the stored values for the lifetime of the provider.
    """

    def __init__(self) -> None:
        self._overrides: dict[str, Any] = {}

    @abstractmethod
    def _read(self) -> dict[str, Any]:
        """Read raw values from the underlying store."""

    def load(self) -> AppSettings:
        """Read and validate the current settings.

        Raises:
            pydantic.ValidationError: If a stored value has the wrong type
        """
        values = self._read()
        values.update(self._overrides)
        return AppSettings.model_validate(values)

    def update(self, **changes: Any) -> None:
        """Override settings values in process.

        Raises:
            KeyError: If a key is not a known setting
        """
        unknown = set(changes) - set(AppSettings.model_fields)
        if unknown:
            raise KeyError(f"Unknown settings: {', '.join(sorted(unknown))}")
        self._overrides.update(changes)

    def reset(self, *keys: str) -> None:
        """Drop overrides for the given keys, or all overrides if none given."""
        if not keys:
            self._overrides.clear()
            return
        for key in keys:
            self._overrides.pop(key, None)

    @property
    @abstractmethod
    def backend_type(self) -> str:
        """Get the backend type identifier."""
