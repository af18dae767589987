"""Localized text fields shared by catalog documents."""

from collections.abc import Mapping
from dataclasses import dataclass

DEFAULT_LANGUAGE = "en"
SUPPORTED_LANGUAGES = ("en", "si", "ta")


@dataclass(frozen=True)
class LocalizedText:
    """Parallel English, Sinhala and Tamil values of a single text field."""

    en: str = ""
    si: str = ""
    ta: str = ""

    def resolve(self, language: str | None) -> str:
        """Return the text for a language, falling back to English when empty."""
        if language in {"si", "ta"}:
            value = getattr(self, language)
            if value:
                return value
        return self.en

    def as_dict(self) -> dict[str, str]:
        """Return the document representation."""
        return {"en": self.en, "si": self.si, "ta": self.ta}

    @classmethod
    def from_value(cls, value: object) -> "LocalizedText":
        """Build from a stored mapping or a bare English string."""
        if isinstance(value, LocalizedText):
            return value
        if isinstance(value, Mapping):
            return cls(
                en=str(value.get("en") or ""),
                si=str(value.get("si") or ""),
                ta=str(value.get("ta") or ""),
            )
        if isinstance(value, str):
            return cls(en=value)
        return cls()


def is_translated_language(language: str | None) -> bool:
    """Return true for supported languages other than the default."""
    return language in SUPPORTED_LANGUAGES and language != DEFAULT_LANGUAGE
