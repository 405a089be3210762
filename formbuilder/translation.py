from typing import Any, Optional, Protocol

from .dynamic import Dynamic

__all__ = [
    'Translator',
    'ArrayTranslator'
]


class Translator(Protocol):
    def has(self, key: str) -> bool:
        ...

    def get(self, key: str) -> Any:
        ...


class ArrayTranslator(Translator):
    """
    Translator backed by nested message mappings, one per locale:

        ArrayTranslator({
            'en': {'fields': {'first_name': 'Given name'}},
        })

    Keys are dot separated paths into the active locale, then into the
    fallback locale. Missing keys translate to themselves.
    """

    def __init__(self,
        messages: Optional[dict[str, dict[str, Any]]] = None,
        locale: str = 'en',
        fallback: Optional[str] = None
    ):
        if messages is None: messages = {}

        self.messages: dict[str, Dynamic] = {loc: Dynamic(lines) for loc, lines in messages.items()}
        self.locale: str = locale
        self.fallback: str | None = fallback

    def set_locale(self, locale: str) -> None:
        self.locale = locale

    def add_lines(self, lines: dict[str, Any], locale: Optional[str] = None) -> None:
        locale = locale or self.locale
        self.messages.setdefault(locale, Dynamic()).update(lines)

    def _locales(self) -> list[str]:
        locales = [self.locale]
        if self.fallback is not None and self.fallback != self.locale:
            locales.append(self.fallback)
        return locales

    def _lookup(self, key: str) -> Any:
        for locale in self._locales():
            lines = self.messages.get(locale)
            if lines is None:
                continue

            value = lines.get_dotted(key)
            if value is not None:
                return value

        return None

    def has(self, key: str) -> bool:
        return self._lookup(key) is not None

    def get(self, key: str) -> Any:
        value = self._lookup(key)
        return key if value is None else value
