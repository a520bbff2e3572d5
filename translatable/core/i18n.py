from __future__ import annotations

import logging
from typing import Optional

from .config import settings


log = logging.getLogger(__name__)


class I18N:
    """Process-wide application locale.

    The host application switches it at any time; readers must not cache it.
    """

    _locale: Optional[str] = None

    @classmethod
    def get_locale(cls) -> str:
        return cls._locale or settings.app_locale

    @classmethod
    def set_locale(cls, code: str) -> None:
        code = (code or "").strip()
        if not code:
            raise ValueError("Locale code must not be empty")
        if code != cls._locale:
            log.debug("Application locale set to %s", code)
        cls._locale = code

    @classmethod
    def reset(cls) -> None:
        cls._locale = None
