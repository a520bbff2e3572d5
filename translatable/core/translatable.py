"""Translatable models.

A model mixes in :class:`Translatable`, lists its ``translated_attributes``
and pairs with a mapped :class:`~translatable.core.record.TranslationRecord`
holding one row per locale::

    class Country(Translatable, Base):
        __tablename__ = "countries"
        translated_attributes = ("name",)
        id: Mapped[int] = mapped_column(primary_key=True)
        code: Mapped[str] = mapped_column(String(8))

    class CountryTranslation(TranslationRecord, Base):
        __tablename__ = "country_translations"
        ...

``country.name`` then reads the translation for the current locale and
``country["name:fr"]`` the French one.
"""

from __future__ import annotations

import importlib
import logging
import sys
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Union

from sqlalchemy import inspect
from sqlalchemy.orm import object_session

from .config import settings
from .errors import DetachedEntity, TranslationModelNotFound, UnknownAttribute
from .locales import locales
from .matcher import TranslationMatcher
from .record import TranslationRecord
from .store import TranslationStore
from .utils import as_locale_list, is_empty_value, snake_case, split_attribute_key

log = logging.getLogger(__name__)


@dataclass
class _TranslationState:
    records: List[TranslationRecord] = field(default_factory=list)
    loaded: bool = False
    # Single record for the current locale, loaded without the collection
    single: Optional[TranslationRecord] = None
    single_loaded: bool = False
    default_locale: Optional[str] = None
    store: Optional[TranslationStore] = None


class _TranslatedAttribute:
    def __init__(self, name: str) -> None:
        self.name = name

    def __get__(self, obj, owner=None):
        if obj is None:
            return self
        return obj.translated_attribute(self.name)

    def __set__(self, obj, value) -> None:
        obj.set_translated_attribute(self.name, value)


class Translatable:
    translated_attributes = ()
    # Class or dotted path; defaults to "<module>.<Class><suffix>"
    translation_model = None
    translation_foreign_key = None
    locale_key = None
    # None defers to settings.use_fallback; may be set per instance
    use_translation_fallback = None
    # (attribute, value) -> bool; defaults to is_empty_value
    empty_predicate = None
    hidden = ()
    locales_registry = locales

    _autoload_translations = None

    def __init_subclass__(cls, **kwargs: Any) -> None:
        for name in cls.__dict__.get("translated_attributes", ()):
            if name not in cls.__dict__:
                setattr(cls, name, _TranslatedAttribute(name))
        super().__init_subclass__(**kwargs)

    # -- state -----------------------------------------------------------

    def _tstate(self) -> _TranslationState:
        # Instances loaded by the ORM skip __init__
        st = self.__dict__.get("_translation_state")
        if st is None:
            st = _TranslationState()
            self.__dict__["_translation_state"] = st
        return st

    def bind_translation_store(self, store: Optional[TranslationStore]) -> None:
        self._tstate().store = store

    def translation_store(self) -> Optional[TranslationStore]:
        st = self._tstate()
        if st.store is not None:
            return st.store
        session = object_session(self)
        if session is None:
            return None
        from ..infra.repos import TranslationsRepo

        return TranslationsRepo(session)

    def _required_store(self) -> Optional[TranslationStore]:
        """The store, or None for an entity never saved; a saved one without a store raises."""
        store = self.translation_store()
        # has_identity covers persistent and detached rows, not a transient built with a key
        if store is None and inspect(self).has_identity:
            raise DetachedEntity(type(self).__name__, self.get_entity_key())
        return store

    # -- naming ----------------------------------------------------------

    def get_translation_model_name_default(self) -> str:
        namespace = settings.translation_model_namespace or type(self).__module__
        return f"{namespace}.{type(self).__name__}{settings.translation_suffix}"

    def get_translation_model_name(self) -> str:
        model = self.translation_model
        if model is None:
            return self.get_translation_model_name_default()
        if isinstance(model, str):
            return model
        return f"{model.__module__}.{model.__qualname__}"

    def get_translation_model(self) -> type:
        model = self.translation_model
        if isinstance(model, type):
            return model
        return _resolve_class(self.get_translation_model_name(), type(self).__module__)

    def get_key_name(self) -> str:
        return inspect(type(self)).primary_key[0].key

    def get_entity_key(self) -> Any:
        return getattr(self, self.get_key_name(), None)

    def get_relation_key(self) -> str:
        if self.translation_foreign_key:
            return self.translation_foreign_key
        return f"{snake_case(type(self).__name__)}_{self.get_key_name()}"

    def get_locale_key(self) -> str:
        return self.locale_key or settings.locale_key

    # -- locale & policy -------------------------------------------------

    def set_default_locale(self, locale: Optional[str]) -> None:
        self._tstate().default_locale = locale or None

    def get_default_locale(self) -> Optional[str]:
        return self._tstate().default_locale

    def locale(self) -> str:
        return self.get_default_locale() or self.locales_registry.default_locale()

    def use_fallback(self) -> bool:
        if isinstance(self.use_translation_fallback, bool):
            return self.use_translation_fallback
        return bool(settings.use_fallback)

    def use_property_fallback(self) -> bool:
        return self.use_fallback() and bool(settings.use_property_fallback)

    def is_translated_attribute(self, name: str) -> bool:
        return name in self.translated_attributes

    def is_empty_translated_value(self, name: str, value: Any) -> bool:
        predicate = type(self).empty_predicate or is_empty_value
        return predicate(name, value)

    def _locale_of(self, record: TranslationRecord) -> Optional[str]:
        return getattr(record, self.get_locale_key(), None)

    def _requested(self, locale: Optional[str]) -> str:
        if isinstance(locale, str) and locale.strip():
            return locale.strip()
        return self.locale()

    # -- collection ------------------------------------------------------

    @property
    def translations_loaded(self) -> bool:
        return self._tstate().loaded

    @property
    def translations(self) -> List[TranslationRecord]:
        st = self._tstate()
        if not st.loaded:
            self.load_translations()
        return list(st.records)

    def load_translations(self) -> List[TranslationRecord]:
        """Fetch the whole collection, replacing what was loaded."""
        st = self._tstate()
        store = self._required_store()
        key = self.get_entity_key()
        fetched: Iterable[TranslationRecord] = ()
        if store is not None and key is not None:
            fetched = store.fetch_all(self)
            log.debug("Fetched translations of %s#%s", type(self).__name__, key)

        records: List[TranslationRecord] = []
        seen = set()
        for record in fetched:
            loc = self._locale_of(record)
            if loc in seen:
                log.warning("Ignoring duplicate %s translation of %s#%s", loc, type(self).__name__, key)
                continue
            seen.add(loc)
            record.attach_owner(self)
            records.append(record)
        st.records = records
        st.loaded = True
        return list(records)

    def unset_translations(self) -> None:
        st = self._tstate()
        st.records = []
        st.loaded = False

    def _translations_by_locale(self) -> Dict[str, TranslationRecord]:
        st = self._tstate()
        if not st.loaded:
            self.load_translations()
        return {self._locale_of(r): r for r in st.records}

    @property
    def translation_loaded(self) -> bool:
        return self._tstate().single_loaded

    @property
    def translation(self) -> Optional[TranslationRecord]:
        st = self._tstate()
        if not st.single_loaded:
            self.load_translation()
        return st.single

    def load_translation(self) -> Optional[TranslationRecord]:
        """Load only the current locale's translation, or the fallback one."""
        st = self._tstate()
        store = self._required_store()
        record = None
        if store is not None and self.get_entity_key() is not None:
            locale = self.locale()
            record = store.fetch_one(self, locale)
            fallback = settings.fallback_locale
            if record is None and self.use_fallback() and fallback and fallback != locale:
                record = store.fetch_one(self, fallback)
        if record is not None:
            record.attach_owner(self)
        st.single = record
        st.single_loaded = True
        return record

    def _cached_translation(self, locale: str) -> Optional[TranslationRecord]:
        st = self._tstate()
        if st.loaded or not st.single_loaded or st.single is None:
            return None
        if self._locale_of(st.single) == locale:
            return st.single
        return None

    # -- lookup ----------------------------------------------------------

    def get_translation(
        self, locale: Optional[str] = None, with_fallback: Optional[bool] = None
    ) -> Optional[TranslationRecord]:
        locale = self._requested(locale)
        if with_fallback is None:
            with_fallback = self.use_fallback()

        cached = self._cached_translation(locale)
        if cached is not None:
            return cached

        by_locale = self._translations_by_locale()
        matcher = TranslationMatcher(self.locales_registry, settings.fallback_locale, with_fallback)
        found = matcher.resolve(locale, by_locale.keys())
        return by_locale.get(found) if found is not None else None

    def translate(self, locale: Optional[str] = None, with_fallback: bool = False) -> Optional[TranslationRecord]:
        return self.get_translation(locale, with_fallback)

    def get_translation_or_default(self, locale: Optional[str] = None) -> Optional[TranslationRecord]:
        return self.get_translation(locale, True)

    def get_translation_or_new(self, locale: Optional[str] = None) -> TranslationRecord:
        locale = self._requested(locale)
        translation = self.get_translation(locale, False)
        if translation is None:
            translation = self.get_new_translation(locale)
        return translation

    def get_new_translation(self, locale: str) -> TranslationRecord:
        locale = self._requested(locale)
        existing = self._translations_by_locale().get(locale)
        if existing is not None:
            return existing

        record = self.get_translation_model()()
        setattr(record, self.get_locale_key(), locale)
        key = self.get_entity_key()
        if key is not None:
            setattr(record, self.get_relation_key(), key)
        record.attach_owner(self)
        self._tstate().records.append(record)
        log.debug("New %s translation for %s#%s", locale, type(self).__name__, key)
        return record

    def has_translation(self, locale: Optional[str] = None) -> bool:
        return self.get_translation(locale, False) is not None

    # -- attributes ------------------------------------------------------

    def translated_attribute(self, name: str, locale: Optional[str] = None) -> Any:
        if not self.is_translated_attribute(name):
            raise UnknownAttribute(name, type(self).__name__)

        translation = self.get_translation(locale)
        value = getattr(translation, name, None) if translation is not None else None
        if translation is not None and not self.is_empty_translated_value(name, value):
            return value

        fallback = settings.fallback_locale
        if fallback and self.use_property_fallback():
            other = self.get_translation(fallback, False)
            if other is not None:
                other_value = getattr(other, name, None)
                if not self.is_empty_translated_value(name, other_value):
                    return other_value
        return value

    def set_translated_attribute(self, name: str, value: Any, locale: Optional[str] = None) -> None:
        if not self.is_translated_attribute(name):
            raise UnknownAttribute(name, type(self).__name__)
        setattr(self.get_translation_or_new(locale), name, value)

    def get(self, key: str) -> Any:
        attribute, locale = split_attribute_key(key)
        if self.is_translated_attribute(attribute):
            return self.translated_attribute(attribute, locale)
        if locale is None and hasattr(self, key):
            return getattr(self, key)
        raise KeyError(key)

    def set(self, key: str, value: Any) -> None:
        attribute, locale = split_attribute_key(key)
        if self.is_translated_attribute(attribute):
            self.set_translated_attribute(attribute, value, locale)
        elif locale is None:
            setattr(self, key, value)
        else:
            raise KeyError(key)

    def __getitem__(self, key: str) -> Any:
        return self.get(key)

    def __setitem__(self, key: str, value: Any) -> None:
        self.set(key, value)

    # -- mutation --------------------------------------------------------

    def delete_translations(self, locales: Optional[Union[str, Iterable[str]]] = None) -> None:
        """Delete all translations, or only those of the given locale(s).

        An empty sequence deletes nothing.
        """
        targets: Optional[List[str]] = None
        if locales is not None:
            targets = as_locale_list(locales)
            if not targets:
                return

        st = self._tstate()
        store = self._required_store()

        def matches(record: TranslationRecord) -> bool:
            return targets is None or self._locale_of(record) in targets

        if st.loaded:
            keep = []
            for record in st.records:
                if not matches(record):
                    keep.append(record)
                elif store is not None:
                    store.delete(record)
            st.records = keep
        elif store is not None and self.get_entity_key() is not None:
            store.delete_where(self, targets)

        if st.single is not None and matches(st.single):
            st.single = None
        log.debug("Deleted %s translations of %s", targets or "all", type(self).__name__)

    def save_translations(self, store: Optional[TranslationStore] = None) -> int:
        """Persist new and modified translations; returns how many."""
        store = store or self.translation_store()
        if store is None:
            return 0
        st = self._tstate()
        records = list(st.records) if st.loaded else []
        if st.single is not None and not any(r is st.single for r in records):
            records.append(st.single)

        key = self.get_entity_key()
        relation_key = self.get_relation_key()
        saved = 0
        for record in records:
            if key is not None and getattr(record, relation_key, None) != key:
                setattr(record, relation_key, key)
            if record.is_dirty():
                store.persist(record)
                saved += 1
        return saved

    # -- serialization ---------------------------------------------------

    def translations_as_mapping(self) -> Dict[str, Dict[str, Any]]:
        out: Dict[str, Dict[str, Any]] = {}
        for record in sorted(self.translations, key=lambda r: self._locale_of(r) or ""):
            out[self._locale_of(record)] = {attr: getattr(record, attr, None) for attr in self.translated_attributes}
        return out

    @classmethod
    def enable_autoload_translations(cls) -> None:
        cls._autoload_translations = True

    @classmethod
    def disable_autoload_translations(cls) -> None:
        cls._autoload_translations = False

    @classmethod
    def default_autoload_translations(cls) -> None:
        cls._autoload_translations = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            attr.key: getattr(self, attr.key)
            for attr in inspect(type(self)).column_attrs
            if attr.key not in self.hidden
        }
        autoload = type(self)._autoload_translations
        if autoload is False:
            return data
        if autoload is None and not self.translations_loaded and not settings.to_array_always_loads_translations:
            return data
        for name in self.translated_attributes:
            if name not in self.hidden:
                data[name] = self.translated_attribute(name)
        return data


def _resolve_class(path: str, default_module: str) -> type:
    module_name, _, name = path.rpartition(".")
    module_name = module_name or default_module
    module = sys.modules.get(module_name)
    try:
        if module is None:
            module = importlib.import_module(module_name)
        found = getattr(module, name)
    except (ImportError, AttributeError) as exc:
        raise TranslationModelNotFound(path) from exc
    if not isinstance(found, type):
        raise TranslationModelNotFound(path)
    return found
