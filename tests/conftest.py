"""Shared fixtures: an in-memory database, settings and a query log."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import pytest
from sqlalchemy import event

from translatable.core.config import settings
from translatable.core.i18n import I18N
from translatable.core.locales import locales
from translatable.infra import db
from translatable.infra.migrate import migrate
from translatable.infra.repos import TranslationsRepo

from tests.models import MODELS, Country


@pytest.fixture(autouse=True)
def fresh_locales():
    """Start every test with the default application locale and registry."""
    I18N.reset()
    locales.load()
    for model in MODELS:
        model.default_autoload_translations()
    yield
    I18N.reset()


@pytest.fixture
def configure(monkeypatch):
    """Change settings for one test; reloads the registry when locales change.

    Usage:
        configure(use_fallback=True, fallback_locale="de")
    """

    def _configure(**options: Any) -> None:
        for name, value in options.items():
            monkeypatch.setattr(settings, name, value)
        if "locales" in options or "locale_separator" in options:
            locales.load()

    return _configure


@pytest.fixture
def engine():
    db.dispose_engine()
    db.init_engine("sqlite://")
    db.init_sessionmaker()
    migrate()
    yield db.engine
    db.dispose_engine()


@pytest.fixture
def session(engine):
    with db.SessionLocal() as s:  # type: ignore[misc]
        yield s


class QueryLog:
    def __init__(self) -> None:
        self.statements: List[str] = []

    def __call__(self, conn, cursor, statement, parameters, context, executemany) -> None:
        self.statements.append(statement)

    def __len__(self) -> int:
        return len(self.statements)

    def flush(self) -> None:
        self.statements.clear()

    def selects_from(self, table: str) -> int:
        return sum(
            1
            for s in self.statements
            if s.lstrip().upper().startswith("SELECT") and f"FROM {table}" in s
        )


@pytest.fixture
def query_log(engine):
    log = QueryLog()
    event.listen(engine, "before_cursor_execute", log)
    yield log
    event.remove(engine, "before_cursor_execute", log)


@pytest.fixture
def create(session):
    """Create and commit a model with per-locale values.

    Usage:
        create(Vegetable, {"el": {"name": "Αρακάς"}}, quantity=2)
    """

    def _create(model, translations: Optional[Dict[str, Dict[str, Any]]] = None, **columns: Any):
        entity = model(**columns)
        for locale, values in (translations or {}).items():
            for attribute, value in values.items():
                entity.set_translated_attribute(attribute, value, locale)
        TranslationsRepo(session).save(entity)
        session.commit()
        return entity

    return _create


@pytest.fixture
def reload(session):
    """Fetch a fresh instance, as a new request would."""

    def _reload(entity):
        model = type(entity)
        key = entity.get_entity_key()
        session.expunge_all()
        return session.get(model, key)

    return _reload


@pytest.fixture
def save(session):
    def _save(entity) -> int:
        saved = TranslationsRepo(session).save(entity)
        session.commit()
        return saved

    return _save


@pytest.fixture
def greece(create):
    return create(
        Country,
        {
            "el": {"name": "Ελλάδα"},
            "fr": {"name": "Grèce"},
            "en": {"name": "Greece"},
            "de": {"name": "Griechenland"},
        },
        code="gr",
    )
