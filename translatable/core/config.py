from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Dict, List, Optional, Union

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

# Load .env file explicitly
ENV_FILE_NAME = ".env"
env_path = Path(__file__).parent.parent.parent / ENV_FILE_NAME
load_dotenv(env_path, override=False)

# A flat list of tokens where an entry may be a {base: [regions]} mapping,
# or a mapping of base -> regions.
LocalesSpec = Union[List[Union[str, Dict[str, List[str]]]], Dict[str, Optional[List[str]]]]


class Settings(BaseSettings):
    locales: Annotated[LocalesSpec, NoDecode] = ["el", {"en": ["GB", "US"]}, "fr", {"de": ["DE", "CH"]}, "id"]
    locale_separator: str = "-"
    # Overrides the application locale when set
    locale: Optional[str] = None
    app_locale: str = "en"
    fallback_locale: Optional[str] = "en"
    use_fallback: bool = False
    use_property_fallback: bool = True
    to_array_always_loads_translations: bool = True
    locale_key: str = "locale"
    translation_model_namespace: Optional[str] = None
    translation_suffix: str = "Translation"
    database_url: str = "sqlite:///./data/translatable.db"

    @field_validator("locales", mode="before")
    @classmethod
    def parse_locales(cls, v):  # type: ignore
        # "en,fr,de" or a JSON document
        if isinstance(v, str):
            s = v.strip()
            if s.startswith("[") or s.startswith("{"):
                return json.loads(s)
            return [x.strip() for x in s.split(",") if x.strip()]
        return v

    @field_validator("locale", "fallback_locale", mode="before")
    @classmethod
    def empty_as_none(cls, v):  # type: ignore
        if isinstance(v, str) and not v.strip():
            return None
        return v

    model_config = SettingsConfigDict(
        env_prefix="TRANSLATABLE_",
        env_file=ENV_FILE_NAME,
        env_file_encoding="utf-8",
        extra="ignore",
        validate_assignment=True,
    )


settings = Settings()
