from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence

from sqlalchemy import delete, inspect, select
from sqlalchemy.orm import Session

from ..core.translatable import Translatable

log = logging.getLogger(__name__)


class TranslationsRepo:
    """Translation rows of translatable models, through a session.

    Nothing is committed here; the caller owns the transaction.
    """

    def __init__(self, session: Session) -> None:
        self.s = session

    def _columns(self, entity: Translatable):
        model = entity.get_translation_model()
        return (
            model,
            getattr(model, entity.get_relation_key()),
            getattr(model, entity.get_locale_key()),
        )

    def fetch_all(self, entity: Translatable) -> List[Any]:
        key = entity.get_entity_key()
        if key is None:
            return []
        model, fk, locale_col = self._columns(entity)
        q = select(model).where(fk == key).order_by(locale_col)
        return list(self.s.execute(q).scalars().all())

    def fetch_one(self, entity: Translatable, locale: str) -> Optional[Any]:
        key = entity.get_entity_key()
        if key is None:
            return None
        model, fk, locale_col = self._columns(entity)
        q = select(model).where(fk == key, locale_col == locale).limit(1)
        return self.s.execute(q).scalars().first()

    def persist(self, record: Any) -> None:
        self.s.add(record)

    def delete(self, record: Any) -> None:
        state = inspect(record)
        if state.pending:
            self.s.expunge(record)
        elif state.persistent:
            self.s.delete(record)

    def delete_where(self, entity: Translatable, locales: Optional[Sequence[str]]) -> int:
        key = entity.get_entity_key()
        if key is None:
            return 0
        model, fk, locale_col = self._columns(entity)
        q = delete(model).where(fk == key)
        if locales is not None:
            if not locales:
                return 0
            q = q.where(locale_col.in_(list(locales)))
        result = self.s.execute(q)
        log.debug("Deleted %s %s rows for %s", result.rowcount, model.__name__, key)
        return int(result.rowcount or 0)

    def save(self, entity: Translatable) -> int:
        """Add the entity, flush it for a key, then persist its translations."""
        self.s.add(entity)
        if entity.get_entity_key() is None:
            self.s.flush()
        saved = entity.save_translations(self)
        self.s.flush()
        return saved
