from __future__ import annotations

import logging
from typing import Collection, List, Optional

from .locales import LocaleRegistry

log = logging.getLogger(__name__)


class TranslationMatcher:
    """Pick the locale to read from, given the locales that have data.

    Order: the exact locale, the base of a country based locale, the
    configured fallback locale, then (without a fallback locale) the first
    configured locale that has data.
    """

    def __init__(
        self,
        registry: LocaleRegistry,
        fallback_locale: Optional[str] = None,
        use_fallback: bool = True,
    ) -> None:
        self.registry = registry
        self.fallback_locale = fallback_locale or None
        self.use_fallback = use_fallback

    def _base_of(self, locale: Optional[str]) -> Optional[str]:
        if locale and self.registry.is_country_based_locale(locale):
            return self.registry.language_from(locale)
        return None

    def candidates(self, requested: Optional[str]) -> List[str]:
        out: List[str] = []

        def push(locale: Optional[str]) -> None:
            if locale and locale not in out:
                out.append(locale)

        push(requested)
        if not self.use_fallback:
            return out
        push(self._base_of(requested))
        if self.fallback_locale:
            push(self.fallback_locale)
            push(self._base_of(self.fallback_locale))
        else:
            for locale in self.registry.all():
                push(locale)
        return out

    def resolve(self, requested: Optional[str], available: Collection[str]) -> Optional[str]:
        if not available:
            return None
        for locale in self.candidates(requested):
            if locale in available:
                if locale != requested:
                    log.debug("Resolved locale %r to %r", requested, locale)
                return locale
        return None
