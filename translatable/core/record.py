from __future__ import annotations

import weakref
from typing import TYPE_CHECKING, Any, Dict, Optional, Tuple

from sqlalchemy import inspect

from .config import settings
from .errors import UnknownAttribute

if TYPE_CHECKING:
    from .translatable import Translatable


class TranslationRecord:
    """Mixin for the per-locale row of a translatable model.

    The mapped class declares the foreign key to its owner, the locale
    column and one column per translated attribute.
    """

    # Overrides settings.locale_key for this model
    locale_key = None

    @classmethod
    def get_locale_key(cls) -> str:
        return cls.locale_key or settings.locale_key

    @property
    def locale(self) -> Optional[str]:
        owner = self.owner
        key = owner.get_locale_key() if owner is not None else self.get_locale_key()
        return getattr(self, key, None)

    @property
    def owner(self) -> Optional["Translatable"]:
        ref = self.__dict__.get("_owner_ref")
        return ref() if ref is not None else None

    def attach_owner(self, owner: "Translatable") -> None:
        self.__dict__["_owner_ref"] = weakref.ref(owner)

    def translated_attribute_names(self) -> Tuple[str, ...]:
        owner = self.owner
        if owner is not None:
            return tuple(owner.translated_attributes)
        reserved = {self.get_locale_key()}
        reserved.update(col.key for col in inspect(type(self)).primary_key)
        reserved.update(
            col.key for table in inspect(type(self)).tables for col in table.columns if col.foreign_keys
        )
        return tuple(attr.key for attr in inspect(type(self)).column_attrs if attr.key not in reserved)

    def _check(self, name: str) -> None:
        if name not in self.translated_attribute_names():
            raise UnknownAttribute(name, type(self).__name__)

    def get(self, name: str) -> Any:
        self._check(name)
        return getattr(self, name, None)

    def set(self, name: str, value: Any) -> None:
        self._check(name)
        setattr(self, name, value)

    def is_dirty(self) -> bool:
        state = inspect(self)
        return state.transient or state.pending or state.modified

    def to_dict(self) -> Dict[str, Any]:
        return {name: getattr(self, name, None) for name in self.translated_attribute_names()}

    def __repr__(self) -> str:
        return f"<{type(self).__name__}(locale={self.locale!r})>"
