from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Optional, Protocol, Sequence, runtime_checkable

if TYPE_CHECKING:
    from .translatable import Translatable


@runtime_checkable
class TranslationStore(Protocol):
    """Persistence used by translatable models. Errors propagate unchanged."""

    def fetch_all(self, entity: "Translatable") -> List[Any]: ...

    def fetch_one(self, entity: "Translatable", locale: str) -> Optional[Any]: ...

    def persist(self, record: Any) -> None: ...

    def delete(self, record: Any) -> None: ...

    def delete_where(self, entity: "Translatable", locales: Optional[Sequence[str]]) -> int: ...
