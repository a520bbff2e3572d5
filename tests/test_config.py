from __future__ import annotations

import pytest
from pydantic import ValidationError

from translatable.core.config import Settings


def test_defaults():
    s = Settings(_env_file=None)

    assert s.locale_separator == "-"
    assert s.locale is None
    assert s.fallback_locale == "en"
    assert s.use_fallback is False
    assert s.use_property_fallback is True
    assert s.to_array_always_loads_translations is True
    assert s.locale_key == "locale"
    assert s.translation_suffix == "Translation"


def test_locales_from_a_comma_separated_string():
    assert Settings(_env_file=None, locales="en, fr,,de").locales == ["en", "fr", "de"]


def test_locales_from_json():
    s = Settings(_env_file=None, locales='["el", {"en": ["GB", "US"]}]')

    assert s.locales == ["el", {"en": ["GB", "US"]}]


def test_empty_locales_become_none():
    s = Settings(_env_file=None, locale=" ", fallback_locale="")

    assert s.locale is None
    assert s.fallback_locale is None


def test_reads_prefixed_environment(monkeypatch):
    monkeypatch.setenv("TRANSLATABLE_USE_FALLBACK", "true")
    monkeypatch.setenv("TRANSLATABLE_FALLBACK_LOCALE", "fr")
    monkeypatch.setenv("TRANSLATABLE_LOCALE_KEY", "language_id")

    s = Settings(_env_file=None)

    assert s.use_fallback is True
    assert s.fallback_locale == "fr"
    assert s.locale_key == "language_id"


def test_assignment_is_validated():
    s = Settings(_env_file=None)

    with pytest.raises(ValidationError):
        s.use_fallback = "not a flag"


def test_reads_locales_from_environment(monkeypatch):
    monkeypatch.setenv("TRANSLATABLE_LOCALES", "el,en")
    assert Settings(_env_file=None).locales == ["el", "en"]

    monkeypatch.setenv("TRANSLATABLE_LOCALES", '{"en": ["GB"], "fr": null}')
    assert Settings(_env_file=None).locales == {"en": ["GB"], "fr": None}
