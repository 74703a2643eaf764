"""Configuration package for the PrepMaster+ services."""
from .routes import PLACEHOLDER_KEYS, ProviderRoute
from .settings import Settings, settings

__all__ = [
    "PLACEHOLDER_KEYS",
    "ProviderRoute",
    "Settings",
    "settings",
]
