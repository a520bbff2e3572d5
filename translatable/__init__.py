"""Locale-specific attributes for SQLAlchemy models."""

from __future__ import annotations

from .core.config import Settings, settings
from .core.errors import (
    ConfigurationError,
    DetachedEntity,
    InvalidArgument,
    LocalesNotDefined,
    TranslatableError,
    TranslationModelNotFound,
    UnknownAttribute,
)
from .core.i18n import I18N
from .core.locales import LocaleRegistry, locales
from .core.logging_config import setup_logging
from .core.matcher import TranslationMatcher
from .core.record import TranslationRecord
from .core.store import TranslationStore
from .core.translatable import Translatable

__all__ = [
    "ConfigurationError",
    "DetachedEntity",
    "I18N",
    "InvalidArgument",
    "LocaleRegistry",
    "LocalesNotDefined",
    "Settings",
    "Translatable",
    "TranslatableError",
    "TranslationMatcher",
    "TranslationModelNotFound",
    "TranslationRecord",
    "TranslationStore",
    "UnknownAttribute",
    "locales",
    "settings",
    "setup_logging",
]
