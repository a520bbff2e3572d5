"""Locale hierarchy loaded from configuration.

Locales are either simple (``en``) or country based (``en-US``). The
configuration lists simple tokens, optionally mapping a base to its regions::

    ["el", {"en": ["GB", "US"]}, "fr"]
    {"en": ["GB", "US"], "fr": None}
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Callable, Dict, Iterator, List, Optional, Tuple

from .config import settings
from .errors import ConfigurationError, InvalidArgument, LocalesNotDefined
from .i18n import I18N

log = logging.getLogger(__name__)


class LocaleRegistry:
    def __init__(
        self,
        current_locale_provider: Optional[Callable[[], str]] = None,
        separator: Optional[str] = None,
    ) -> None:
        self._provider = current_locale_provider or I18N.get_locale
        self._separator = separator
        self._regions: Dict[str, Tuple[str, ...]] = {}
        self._locales: Dict[str, str] = {}
        self._loaded = False

    @property
    def separator(self) -> str:
        return self._separator or settings.locale_separator or "-"

    @property
    def loaded(self) -> bool:
        return self._loaded

    def load(self, spec=None) -> None:
        """Rebuild the registry, replacing whatever was loaded before."""
        if spec is None:
            spec = settings.locales
        entries = _entries(spec)
        if not entries:
            raise LocalesNotDefined()

        sep = self.separator
        regions: Dict[str, Tuple[str, ...]] = {}
        ordered: Dict[str, str] = {}
        for base, countries in entries:
            base = _token(base)
            if base in ordered:
                raise ConfigurationError(f"Locale {base!r} is defined more than once")
            ordered[base] = base
            seen: List[str] = []
            for country in countries:
                country = _token(country, base)
                ident = base + sep + country
                if ident in ordered:
                    raise ConfigurationError(f"Locale {ident!r} is defined more than once")
                ordered[ident] = ident
                seen.append(country)
            regions[base] = tuple(seen)

        self._regions = regions
        self._locales = ordered
        self._loaded = True
        log.info("Loaded %d locales (%d bases)", len(ordered), len(regions))

    def _ensure_loaded(self) -> None:
        if not self._loaded:
            self.load()

    def all(self) -> Tuple[str, ...]:
        """Every locale in registration order, each base followed by its regions."""
        self._ensure_loaded()
        return tuple(self._locales)

    def to_list(self) -> List[str]:
        return list(self.all())

    def bases(self) -> Tuple[str, ...]:
        self._ensure_loaded()
        return tuple(self._regions)

    def regions(self, base: str) -> Tuple[str, ...]:
        self._ensure_loaded()
        return self._regions.get(base, ())

    def has(self, locale: Optional[str]) -> bool:
        return self.canonicalize(locale) is not None

    def get(self, locale: Optional[str]) -> Optional[str]:
        return self.canonicalize(locale)

    def canonicalize(self, locale: Optional[str]) -> Optional[str]:
        if not isinstance(locale, str):
            return None
        self._ensure_loaded()
        locale = locale.strip()
        found = self._locales.get(locale)
        if found is None:
            # "EN-gb" finds "en-GB"
            folded = locale.casefold()
            found = next((ident for ident in self._locales if ident.casefold() == folded), None)
        return found

    def add(self, locale: str) -> None:
        """Register a locale; a composite goes right after its base, which is added if missing."""
        self._ensure_loaded()
        locale = _token(locale)
        if locale in self._locales:
            return
        base, sep, region = locale.partition(self.separator)
        base = _token(base)
        added = (_token(region, base),) if sep else ()
        self._regions[base] = self._regions.get(base, ()) + added
        self._rebuild()

    def forget(self, locale: str) -> None:
        """Drop a locale; forgetting a base drops its composites too."""
        self._ensure_loaded()
        locale = locale.strip()
        if locale in self._regions:
            del self._regions[locale]
        else:
            base, sep, region = locale.partition(self.separator)
            if sep and base in self._regions:
                self._regions[base] = tuple(r for r in self._regions[base] if r != region)
        self._rebuild()

    def _rebuild(self) -> None:
        sep = self.separator
        ordered: Dict[str, str] = {}
        for base, regions in self._regions.items():
            ordered[base] = base
            for region in regions:
                ordered[base + sep + region] = base + sep + region
        self._locales = ordered

    def compose(self, base: str, region: str) -> str:
        self._ensure_loaded()
        if base not in self._regions:
            raise InvalidArgument(f"Unknown base locale {base!r}")
        return base + self.separator + region

    def language_from(self, locale: str) -> str:
        return locale.split(self.separator, 1)[0]

    def is_country_based_locale(self, locale: Optional[str]) -> bool:
        if not locale or self.separator not in locale:
            return False
        self._ensure_loaded()
        return bool(self._regions.get(self.language_from(locale)))

    def default_locale(self) -> str:
        """The locale currently in effect; read fresh on every call."""
        value = (settings.locale or self._provider() or "").strip()
        # unregistered locales pass through unchanged
        return self.canonicalize(value) or value

    def __contains__(self, locale: object) -> bool:
        return isinstance(locale, str) and self.has(locale)

    def __iter__(self) -> Iterator[str]:
        return iter(self.all())

    def __len__(self) -> int:
        return len(self.all())


def _token(value, base: Optional[str] = None) -> str:
    where = f" under {base!r}" if base else ""
    if not isinstance(value, str) or not value.strip():
        raise ConfigurationError(f"Empty or invalid locale token{where}: {value!r}")
    return value.strip()


def _entries(spec) -> List[Tuple[str, Tuple[str, ...]]]:
    if spec is None:
        return []
    if isinstance(spec, str):
        return [(spec, ())]
    if isinstance(spec, Mapping):
        return [(base, _countries(base, countries)) for base, countries in spec.items()]
    entries: List[Tuple[str, Tuple[str, ...]]] = []
    for item in spec:
        if isinstance(item, Mapping):
            entries.extend((base, _countries(base, countries)) for base, countries in item.items())
        else:
            entries.append((item, ()))
    return entries


def _countries(base, countries) -> Tuple[str, ...]:
    if countries is None:
        return ()
    if isinstance(countries, str):
        return (countries,)
    if isinstance(countries, Mapping):
        raise ConfigurationError(f"Regions of {base!r} must be a list")
    return tuple(countries)


locales = LocaleRegistry()
