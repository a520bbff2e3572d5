from __future__ import annotations


class TranslatableError(Exception):
    """Base class for every error raised by the package."""


class ConfigurationError(TranslatableError):
    """Malformed configuration; raised when it is loaded."""


class LocalesNotDefined(ConfigurationError):
    def __init__(self) -> None:
        super().__init__("Please make sure you have run the configuration and that the locales are defined")


class TranslationModelNotFound(ConfigurationError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Translation model {name!r} could not be resolved")
        self.name = name


class InvalidArgument(TranslatableError, ValueError):
    pass


class UnknownAttribute(TranslatableError, KeyError):
    def __init__(self, name: str, model: str) -> None:
        super().__init__(name)
        self.name = name
        self.model = model

    def __str__(self) -> str:
        return f"{self.name!r} is not a translated attribute of {self.model}"


class DetachedEntity(TranslatableError):
    """A saved entity needs its translations but has no session or bound store."""

    def __init__(self, model: str, key) -> None:
        super().__init__(
            f"{model}#{key} is detached; add it to a session or bind a translation store first"
        )
        self.model = model
        self.key = key
