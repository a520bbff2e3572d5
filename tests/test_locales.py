from __future__ import annotations

import pytest

from translatable.core.config import settings
from translatable.core.errors import ConfigurationError, InvalidArgument, LocalesNotDefined
from translatable.core.i18n import I18N
from translatable.core.locales import LocaleRegistry, locales


def test_loads_the_configured_locales():
    assert locales.all() == ("el", "en", "en-GB", "en-US", "fr", "de", "de-DE", "de-CH", "id")
    assert locales.bases() == ("el", "en", "fr", "de", "id")
    assert locales.regions("en") == ("GB", "US")
    assert locales.regions("el") == ()


def test_loads_a_mapping_of_bases():
    registry = LocaleRegistry()
    registry.load({"en": ["GB", "US"], "fr": None, "de": "AT"})

    assert registry.to_list() == ["en", "en-GB", "en-US", "fr", "de", "de-AT"]


def test_loads_a_flat_list():
    registry = LocaleRegistry()
    registry.load(["fr", "el"])

    assert list(registry) == ["fr", "el"]
    assert len(registry) == 2


@pytest.mark.parametrize("spec", [[], {}, None])
def test_missing_locales_raise(spec, monkeypatch):
    monkeypatch.setattr(settings, "locales", [])
    with pytest.raises(LocalesNotDefined):
        LocaleRegistry().load(spec)


@pytest.mark.parametrize(
    "spec",
    [
        ["en", "en"],
        ["en", {"en": ["GB"]}],
        [{"en": ["GB", "GB"]}],
        ["en", " "],
        [{"en": ["", "US"]}],
    ],
)
def test_malformed_locales_raise(spec):
    with pytest.raises(ConfigurationError):
        LocaleRegistry().load(spec)


def test_reloading_replaces_previous_entries():
    registry = LocaleRegistry()
    registry.load(["en", "fr"])
    registry.load(["de"])
    registry.load(["de"])

    assert registry.all() == ("de",)
    assert not registry.has("en")


def test_loads_lazily_from_settings(configure):
    configure(locales="pt,es")
    registry = LocaleRegistry()

    assert not registry.loaded
    assert registry.all() == ("pt", "es")
    assert registry.loaded


def test_has_and_canonicalize():
    assert locales.has("en-GB")
    assert "el" in locales
    assert " fr " in locales
    assert locales.get(" fr ") == "fr"
    assert locales.canonicalize("en-AU") is None
    assert locales.canonicalize(None) is None
    assert 42 not in locales


def test_compose_and_split():
    assert locales.compose("en", "GB") == "en-GB"
    assert locales.language_from(locales.compose("de", "CH")) == "de"
    assert locales.language_from("fr") == "fr"


def test_compose_rejects_unknown_base():
    with pytest.raises(InvalidArgument):
        locales.compose("xx", "YY")


def test_country_based_locales():
    assert locales.is_country_based_locale("en-GB")
    assert locales.is_country_based_locale("en-AU")
    assert not locales.is_country_based_locale("en")
    assert not locales.is_country_based_locale("el-GR")
    assert not locales.is_country_based_locale("")
    assert not locales.is_country_based_locale(None)


def test_custom_separator(configure):
    configure(locales=[{"en": ["GB"]}, "fr"], locale_separator="_")

    assert locales.all() == ("en", "en_GB", "fr")
    assert locales.compose("en", "GB") == "en_GB"
    assert locales.is_country_based_locale("en_GB")
    assert not locales.is_country_based_locale("en-GB")


def test_separator_can_be_set_per_registry():
    registry = LocaleRegistry(separator="_")
    registry.load([{"pt": ["BR"]}])

    assert registry.all() == ("pt", "pt_BR")


def test_add_and_forget():
    registry = LocaleRegistry()
    registry.load([{"en": ["GB", "US"]}, "fr"])

    registry.add("it")
    registry.add("it")
    assert registry.all() == ("en", "en-GB", "en-US", "fr", "it")

    registry.forget("en")
    assert registry.all() == ("fr", "it")
    assert registry.regions("en") == ()


def test_default_locale_follows_the_application():
    assert locales.default_locale() == "en"
    I18N.set_locale("el")
    assert locales.default_locale() == "el"


def test_config_locale_wins_over_the_application(configure):
    configure(locale="fr")
    I18N.set_locale("el")

    assert locales.default_locale() == "fr"


def test_locale_provider_can_be_injected():
    current = ["de"]
    registry = LocaleRegistry(lambda: current[0])

    assert registry.default_locale() == "de"
    current[0] = "fr"
    assert registry.default_locale() == "fr"


def test_empty_application_locale_is_rejected():
    with pytest.raises(ValueError):
        I18N.set_locale("  ")
    assert I18N.get_locale() == "en"


def test_added_composites_follow_their_base():
    registry = LocaleRegistry()
    registry.load([{"en": ["GB", "US"]}, "fr"])

    registry.add("en-AU")
    registry.add("fr-CA")
    registry.add("pt-BR")

    assert registry.all() == ("en", "en-GB", "en-US", "en-AU", "fr", "fr-CA", "pt", "pt-BR")
    assert registry.regions("en") == ("GB", "US", "AU")
    assert registry.is_country_based_locale("fr-CA")
    assert registry.compose("pt", "PT") == "pt-PT"


def test_forgotten_composites_leave_their_base():
    registry = LocaleRegistry()
    registry.load([{"en": ["GB", "US"]}, "fr"])

    registry.forget("en-US")

    assert registry.all() == ("en", "en-GB", "fr")
    assert registry.regions("en") == ("GB",)
    assert not registry.has("en-US")

    registry.forget("en-GB")
    assert registry.regions("en") == ()
    assert not registry.is_country_based_locale("en-GB")


@pytest.mark.parametrize("token", ["-US", "en-", " "])
def test_adding_malformed_locales_raises(token):
    with pytest.raises(ConfigurationError):
        LocaleRegistry().add(token)


def test_canonicalize_ignores_case():
    assert locales.canonicalize("EN-gb") == "en-GB"
    assert locales.canonicalize(" De ") == "de"


def test_default_locale_is_canonicalized(configure):
    I18N.set_locale("en-gb")
    assert locales.default_locale() == "en-GB"

    I18N.set_locale("pt-BR")
    assert locales.default_locale() == "pt-BR"

    configure(locale=" DE-ch ")
    assert locales.default_locale() == "de-CH"
