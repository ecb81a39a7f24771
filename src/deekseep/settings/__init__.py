"""Settings module for deekseep.

Provides fresh, typed settings snapshots to the request pipeline.
"""

from .base import SettingsProvider
from .env import EnvSettingsProvider
from .factory import create_settings_provider
from .in_memory import InMemorySettingsProvider
from .models import AppSettings, ColorScheme

__all__ = [
    "AppSettings",
    "ColorScheme",
    "EnvSettingsProvider",
    "InMemorySettingsProvider",
    "SettingsProvider",
    "create_settings_provider",
]
